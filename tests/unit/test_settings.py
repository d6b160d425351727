"""
Tests unitarios para el módulo de configuración.

Estos tests verifican que la configuración se carga correctamente
y que las validaciones funcionan como se espera.
"""

from zoneinfo import ZoneInfo

from pydantic import ValidationError
import pytest

from save_streak.config.settings import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Valores por defecto del motor de rachas."""
    monkeypatch.delenv("TIMEZONE", raising=False)

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.week_start_day == 6
    assert settings.streak_lookback_days == 365
    assert settings.streak_milestones == [7, 30, 100]
    assert settings.recent_history_days == 30
    assert settings.timezone is None
    assert settings.get_zoneinfo() is None


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEZONE", "America/Costa_Rica")
    monkeypatch.setenv("WEEK_START_DAY", "0")
    monkeypatch.setenv("STREAK_MILESTONES", "[30, 7, 7]")

    settings = Settings()  # type: ignore[call-arg]

    assert settings.get_zoneinfo() == ZoneInfo("America/Costa_Rica")
    assert settings.week_start_day == 0
    assert settings.streak_milestones == [7, 30]


def test_settings_invalid_timezone() -> None:
    """Debe rechazar zonas horarias desconocidas."""
    with pytest.raises(ValidationError):
        Settings(timezone="Mars/Olympus_Mons")  # type: ignore[call-arg]


def test_settings_blank_timezone_means_local() -> None:
    assert Settings(timezone="").timezone is None  # type: ignore[call-arg]


@pytest.mark.parametrize("day", [-1, 7])
def test_settings_invalid_week_start(day: int) -> None:
    with pytest.raises(ValidationError):
        Settings(week_start_day=day)  # type: ignore[call-arg]


def test_settings_invalid_milestones() -> None:
    with pytest.raises(ValidationError):
        Settings(streak_milestones=[0, 7])  # type: ignore[call-arg]


def test_settings_environment_checks(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test que verifica los métodos de verificación de entorno."""
    monkeypatch.setenv("ENVIRONMENT", "development")

    settings = Settings()  # type: ignore[call-arg]

    assert settings.is_development() is True
    assert settings.is_production() is False
    assert settings.is_testing() is False
