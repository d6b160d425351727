"""
Configuración de fixtures para pytest.

Estrategia de Testing:
- El motor de rachas se prueba con snapshots inmutables, sin base de datos
- GoalService y los modelos usan SQLite en memoria, una base limpia por test
- "Ahora" siempre es fijo: miércoles 10 de enero de 2024, 15:00 UTC
"""

from collections.abc import Generator
from datetime import UTC, datetime
import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


# Setup de variables de entorno ANTES de cualquier import de la app
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("LOG_LEVEL", "WARNING")


# Miércoles; la semana (inicio domingo) empezó el 7 de enero
FIXED_NOW = datetime(2024, 1, 10, 15, 0, tzinfo=UTC)


@pytest.fixture
def fixed_now() -> datetime:
    """Momento de referencia fijo para todos los cálculos."""
    return FIXED_NOW


@pytest.fixture
def utc_policy():
    """Política de calendario con semana iniciando en domingo y zona UTC."""
    from save_streak.services.streak_engine import StreakPolicy

    return StreakPolicy(tz=UTC)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Sesión sobre una base SQLite en memoria recién creada.

    Cada test obtiene tablas vacías; todo se descarta al terminar.
    """
    from save_streak.core.database import Base, init_db

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)

    SessionTest = sessionmaker(bind=engine, autoflush=False)
    db_session = SessionTest()

    yield db_session

    db_session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def goal_service(session, fixed_now, utc_policy):
    """GoalService con reloj fijo."""
    from save_streak.services.goal_service import GoalService

    return GoalService(session, clock=lambda: fixed_now, policy=utc_policy)
