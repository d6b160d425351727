"""
Configuración centralizada del proyecto usando Pydantic Settings.

Este módulo maneja las variables de entorno de la aplicación (logging,
base de datos y parámetros del motor de rachas) con validación automática.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from save_streak.core.constants import (
    DEFAULT_STREAK_MILESTONES,
    RECENT_HISTORY_DAYS,
    STREAK_LOOKBACK_DAYS,
    WEEK_START_DAY,
)


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    # === Base de datos ===
    database_url: str = Field(
        default="sqlite:///save_streak.db",
        description="URL de conexión de SQLAlchemy",
    )

    # === Configuración de la aplicación ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Nivel de logging",
    )
    environment: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Entorno de ejecución",
    )

    # === Configuración de logging ===
    log_rotation: str = Field(
        default="10 MB",
        description="Tamaño máximo de los archivos de log antes de rotar",
    )
    log_retention: str = Field(
        default="1 month",
        description="Tiempo de retención de logs antiguos",
    )
    logs_directory: Path = Field(
        default=Path("logs"),
        description="Directorio donde se guardan los logs",
    )

    # === Motor de rachas ===
    timezone: str | None = Field(
        default=None,
        description="Zona horaria IANA para agrupar períodos (None = zona local del sistema)",
    )
    week_start_day: int = Field(
        default=WEEK_START_DAY,
        description="Día de inicio de semana según date.weekday() (0=lunes, 6=domingo)",
        ge=0,
        le=6,
    )
    streak_lookback_days: int = Field(
        default=STREAK_LOOKBACK_DAYS,
        description="Máximo de días hacia atrás que se revisan al calcular una racha",
        ge=7,
        le=3650,
    )
    streak_milestones: list[int] = Field(
        default_factory=lambda: list(DEFAULT_STREAK_MILESTONES),
        description="Longitudes de racha que se celebran como hito",
    )
    recent_history_days: int = Field(
        default=RECENT_HISTORY_DAYS,
        description="Días de historial reciente de contribuciones",
        ge=1,
        le=365,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str | None) -> str | None:
        """Valida que la zona horaria exista en la base IANA."""
        if value is None or value.strip() == "":
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Zona horaria desconocida: {value}") from e
        return value

    @field_validator("streak_milestones")
    @classmethod
    def validate_milestones(cls, value: list[int]) -> list[int]:
        """Ordena los hitos y descarta valores no positivos."""
        if any(m <= 0 for m in value):
            raise ValueError("Los hitos de racha deben ser positivos")
        return sorted(set(value))

    def get_zoneinfo(self) -> ZoneInfo | None:
        """Retorna la zona horaria configurada, o None para usar la local."""
        return ZoneInfo(self.timezone) if self.timezone else None

    def is_development(self) -> bool:
        """
        Verifica si el entorno es de desarrollo.

        Returns:
            bool: True si es desarrollo
        """
        return self.environment == "development"

    def is_production(self) -> bool:
        """
        Verifica si el entorno es de producción.

        Returns:
            bool: True si es producción
        """
        return self.environment == "production"

    def is_testing(self) -> bool:
        """Verifica si el entorno es de testing."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """
    Obtiene una instancia singleton de Settings.

    Esta función está decorada con lru_cache para asegurar que solo
    se cree una instancia de Settings durante la vida de la aplicación.

    Returns:
        Settings: Instancia singleton de configuración
    """
    return Settings()


# Instancia global de configuración
settings = get_settings()
