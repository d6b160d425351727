"""Mixins para modelos SQLAlchemy."""

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """
    DateTime que siempre se guarda y se lee en UTC con zona horaria.

    SQLite no conserva el offset: los valores naive que devuelve se
    interpretan como UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class TimestampMixin:
    """
    Mixin para agregar timestamps created_at y updated_at.
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        index=True,
        comment="Fecha de creación del registro",
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        comment="Fecha de última actualización",
    )


class SoftDeleteMixin:
    """
    Mixin para soft delete (archivar).

    Las metas con contribuciones se archivan en lugar de borrarse.
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        index=True,
        comment="Fecha de archivado (soft delete)",
    )

    @property
    def is_deleted(self) -> bool:
        """Verifica si el registro está archivado."""
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Marca el registro como archivado."""
        self.deleted_at = datetime.now(UTC)

    def restore(self) -> None:
        """Restaura un registro archivado."""
        self.deleted_at = None
