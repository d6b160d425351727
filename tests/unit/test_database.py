"""Tests para la inicialización y limpieza del esquema."""

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from save_streak.core import database


@pytest.fixture
def memory_engine():
    engine = create_engine("sqlite://", poolclass=StaticPool)
    yield engine
    engine.dispose()


class TestSchema:
    """Tests para init_db y drop_db."""

    def test_init_db_creates_tables(self, memory_engine) -> None:
        database.init_db(bind=memory_engine)

        tables = set(inspect(memory_engine).get_table_names())
        assert {"savings_goals", "contributions", "goal_milestones"} <= tables

    def test_drop_db_removes_tables(self, memory_engine) -> None:
        database.init_db(bind=memory_engine)

        database.drop_db(bind=memory_engine)

        assert inspect(memory_engine).get_table_names() == []

    def test_drop_db_blocked_in_production(self, memory_engine, monkeypatch) -> None:
        """Debería negarse a borrar tablas en producción."""
        monkeypatch.setattr(database.settings, "environment", "production")

        with pytest.raises(RuntimeError):
            database.drop_db(bind=memory_engine)
