"""Configuración de la aplicación."""

from save_streak.config.settings import Settings, get_settings, settings


__all__ = ["Settings", "get_settings", "settings"]
