"""
Enums centralizados del dominio de metas de ahorro.

Se guardan como String en la base de datos; al ser ``str`` Enum
comparan igual contra su valor crudo.
"""

from enum import Enum


class Cadence(str, Enum):
    """Frecuencia con la que se mide una racha."""

    DAILY = "daily"
    WEEKLY = "weekly"

    def __str__(self) -> str:
        """Retorna el valor del enum como string."""
        return self.value

    @property
    def unit(self) -> str:
        """Unidad singular para mensajes ("day" / "week")."""
        return "day" if self is Cadence.DAILY else "week"


class MilestoneType(str, Enum):
    """Tipos de hito registrados para una meta."""

    STREAK = "streak"  # Racha de 7, 30, 100 períodos
    HALFWAY = "halfway"  # 50% del objetivo
    COMPLETED = "completed"  # Meta alcanzada

    def __str__(self) -> str:
        """Retorna el valor del enum como string."""
        return self.value
