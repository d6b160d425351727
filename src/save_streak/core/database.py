"""
Configuración de SQLAlchemy y manejo de sesiones de base de datos.

La capa de persistencia es un colaborador externo del motor de rachas:
guarda metas y contribuciones, y recibe de vuelta el estado derivado.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from save_streak.config.settings import settings
from save_streak.core.logging import get_logger


logger = get_logger(__name__)

# Base para modelos SQLAlchemy
Base = declarative_base()


def _create_engine(database_url: str | None = None) -> Engine:
    """
    Crea el engine de SQLAlchemy.

    Args:
        database_url: URL de conexión opcional (para testing)

    Returns:
        Engine de SQLAlchemy configurado
    """
    url = database_url or settings.database_url

    if url.startswith("sqlite"):
        logger.info("🗄️ Usando SQLite")
        return create_engine(url, echo=False)

    logger.info("🐘 Conectando a la base de datos...")
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


engine = _create_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager para obtener una sesión de base de datos.

    Yields:
        Session: Sesión de SQLAlchemy

    Example:
        >>> from save_streak.core.database import get_session
        >>> from save_streak.services.goal_service import GoalService
        >>> with get_session() as session:
        ...     service = GoalService(session)
        ...     service.log_contribution(goal_id, 500)
    """
    session = SessionLocal()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Engine | None = None) -> None:
    """
    Inicializa la base de datos creando todas las tablas.

    Args:
        bind: Engine alternativo (por defecto el engine global)
    """
    logger.info("Inicializando base de datos...")

    # Importar los modelos para que SQLAlchemy los registre
    import save_streak.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.success("Base de datos inicializada correctamente")


def drop_db(bind: Engine | None = None) -> None:
    """
    Elimina todas las tablas de la base de datos.

    PRECAUCIÓN: Esta función borra TODOS los datos.
    Solo debe usarse en desarrollo o testing.
    """
    if settings.is_production():
        logger.error("No se puede ejecutar drop_db en producción")
        raise RuntimeError("No se puede eliminar la base de datos en producción")

    logger.warning("Eliminando todas las tablas de la base de datos...")
    Base.metadata.drop_all(bind=bind or engine)
    logger.success("Base de datos eliminada")


__all__ = ["Base", "engine", "SessionLocal", "get_session", "init_db", "drop_db"]
