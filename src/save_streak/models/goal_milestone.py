"""Modelo de Hitos de Metas."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from save_streak.core.database import Base
from save_streak.models.base import UTCDateTime
from save_streak.models.enums import MilestoneType


if TYPE_CHECKING:
    from save_streak.models.savings_goal import SavingsGoal


class GoalMilestone(Base):
    """
    Modelo de Hitos de Metas.

    Registra los logros celebrados para una meta, para que la capa de
    notificaciones y el historial puedan mostrarlos.

    Ejemplos:
    - "🎉 One Week Streak!"
    - "🎯 Halfway There!"
    - "🎊 Goal Completed!"
    """

    __tablename__ = "goal_milestones"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="UUID único del hito",
    )

    goal_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("savings_goals.id", ondelete="CASCADE"),
        index=True,
        comment="ID de la meta asociada",
    )

    milestone_type: Mapped[MilestoneType] = mapped_column(
        String(20),
        comment="Tipo de hito: streak, halfway, completed",
    )

    title: Mapped[str] = mapped_column(
        String(200),
        comment="Título del hito",
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        comment="Mensaje del hito",
    )

    streak_at_milestone: Mapped[int] = mapped_column(
        Integer,
        comment="Racha al momento del hito",
    )

    saved_cents_at_milestone: Mapped[int] = mapped_column(
        BigInteger,
        comment="Monto ahorrado al momento del hito",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        comment="Fecha del hito",
    )

    goal: Mapped["SavingsGoal"] = relationship("SavingsGoal", back_populates="milestones")

    def __repr__(self) -> str:
        """Representación en string."""
        return f"<GoalMilestone(id={self.id}, type={self.milestone_type}, title={self.title})>"
