"""SaveStreak - Metas de ahorro con rachas diarias o semanales."""

__version__ = "0.1.0"
