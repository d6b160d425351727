"""Modelo de Contribución a una meta."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from save_streak.core.database import Base
from save_streak.models.base import UTCDateTime


if TYPE_CHECKING:
    from save_streak.models.savings_goal import SavingsGoal


class Contribution(Base):
    """
    Un ahorro registrado para una meta.

    Inmutable una vez creado; solo se puede eliminar. La meta es dueña
    de sus contribuciones (se borran junto con ella).
    """

    __tablename__ = "contributions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="UUID único de la contribución",
    )

    goal_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("savings_goals.id", ondelete="CASCADE"),
        index=True,
        comment="ID de la meta",
    )

    amount_cents: Mapped[int] = mapped_column(
        BigInteger,
        comment="Monto ahorrado en centavos (> 0)",
    )

    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        index=True,
        comment="Momento del ahorro (UTC, puede ser retroactivo)",
    )

    note: Mapped[str | None] = mapped_column(
        Text,
        comment="Nota opcional del usuario",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        comment="Fecha en que se registró",
    )

    goal: Mapped["SavingsGoal"] = relationship("SavingsGoal", back_populates="contributions")

    @property
    def amount(self) -> float:
        """Monto en unidades mayores (solo display)."""
        return self.amount_cents / 100

    def __repr__(self) -> str:
        return f"<Contribution(id={self.id}, amount_cents={self.amount_cents}, timestamp={self.timestamp})>"
