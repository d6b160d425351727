"""
Configuración centralizada de logging usando Loguru.

Consola legible en desarrollo y JSON en producción. Fuera de testing
se escriben además tres archivos rotados: general, errores y actividad
de metas (solo los registros enlazados con ``goal_id``).
"""

import json
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger


if TYPE_CHECKING:
    from loguru import Logger

from save_streak.config.settings import settings


SERVICE_NAME = "save-streak"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def _has_goal(record: dict[str, Any]) -> bool:
    return "goal_id" in record["extra"]


def json_serializer(record: dict[str, Any]) -> str:
    """
    Serializa un record de log a JSON.

    Los campos enlazados con ``logger.bind`` (goal_id, name) van al
    primer nivel del documento.
    """
    payload = {
        "ts": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        "level": record["level"].name,
        "service": SERVICE_NAME,
        "msg": record["message"],
        "function": record["function"],
        **record["extra"],
    }

    exception = record["exception"]
    if exception:
        payload["error"] = {
            "type": exception.type.__name__ if exception.type else None,
            "message": str(exception.value) if exception.value else None,
        }

    return json.dumps(payload, default=str, ensure_ascii=False)


def json_sink(message: Any) -> None:
    """Sink que escribe JSON a stdout."""
    print(json_serializer(message.record), flush=True)  # noqa: T201


def _add_file_sink(path: Path, level: str, **kwargs: Any) -> None:
    logger.add(
        path,
        format=FILE_FORMAT,
        level=level,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        compression="zip",
        encoding="utf-8",
        **kwargs,
    )


def setup_logging() -> None:
    """Configura los sinks de loguru según el entorno."""
    logger.remove()
    logger.configure(extra={"name": SERVICE_NAME})

    if settings.is_development():
        logger.add(
            sys.stdout,
            format=CONSOLE_FORMAT,
            level=settings.log_level,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(json_sink, level=settings.log_level, backtrace=False, diagnose=False)

    if settings.is_testing():
        return

    logs_dir = Path(settings.logs_directory)
    logs_dir.mkdir(parents=True, exist_ok=True)

    _add_file_sink(logs_dir / "save_streak_{time:YYYY-MM-DD}.log", settings.log_level)
    _add_file_sink(logs_dir / "errors_{time:YYYY-MM-DD}.log", "ERROR", backtrace=True)
    _add_file_sink(logs_dir / "goal_activity_{time:YYYY-MM-DD}.log", "INFO", filter=_has_goal)

    logger.debug(f"Logging listo ({settings.environment}, nivel {settings.log_level})")


def get_logger(name: str) -> "Logger":
    """
    Obtiene un logger con el nombre del módulo enlazado.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.bind(goal_id=goal.id).info("💰 Contribución agregada")
    """
    return logger.bind(name=name)


# Configurar logging al importar el módulo
setup_logging()

__all__ = ["logger", "get_logger", "setup_logging"]
