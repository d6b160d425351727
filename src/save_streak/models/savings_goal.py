"""Modelo de Meta de Ahorro."""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import BigInteger, Boolean, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from save_streak.core.constants import BEHIND_SCHEDULE_TOLERANCE
from save_streak.core.database import Base
from save_streak.models.base import SoftDeleteMixin, TimestampMixin, UTCDateTime
from save_streak.models.enums import Cadence


if TYPE_CHECKING:
    from save_streak.models.contribution import Contribution
    from save_streak.models.goal_milestone import GoalMilestone


class SavingsGoal(TimestampMixin, SoftDeleteMixin, Base):
    """
    Modelo de Meta de Ahorro.

    Guarda el objetivo, la cadencia y el estado de racha cacheado.
    current_streak / longest_streak / last_contribution_at son derivados:
    solo se escriben con el resultado del motor de rachas.
    """

    __tablename__ = "savings_goals"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="UUID único de la meta",
    )

    name: Mapped[str] = mapped_column(
        String(200),
        comment="Nombre de la meta (ej: 'Fondo de emergencia', 'Vacaciones')",
    )

    icon: Mapped[str | None] = mapped_column(
        String(10),
        comment="Emoji/icono de la meta",
    )

    # Montos en centavos
    target_amount_cents: Mapped[int] = mapped_column(
        BigInteger,
        comment="Monto objetivo en centavos",
    )

    period_target_cents: Mapped[int] = mapped_column(
        BigInteger,
        comment="Monto a ahorrar por período (día o semana) en centavos",
    )

    cadence: Mapped[Cadence] = mapped_column(
        String(10),
        default=Cadence.DAILY.value,
        comment="Cadencia de la racha: daily o weekly",
    )

    deadline: Mapped[date] = mapped_column(
        Date,
        comment="Fecha límite para alcanzar la meta",
    )

    # Estado de racha (cacheado)
    current_streak: Mapped[int] = mapped_column(
        Integer,
        default=0,
        comment="Períodos consecutivos cumplidos",
    )

    longest_streak: Mapped[int] = mapped_column(
        Integer,
        default=0,
        comment="Racha más larga alcanzada",
    )

    last_contribution_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        comment="Fecha de la última contribución registrada",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        index=True,
        comment="Meta activa (False = archivada)",
    )

    # Relaciones
    contributions: Mapped[list["Contribution"]] = relationship(
        "Contribution",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="Contribution.timestamp.desc()",
    )
    milestones: Mapped[list["GoalMilestone"]] = relationship(
        "GoalMilestone",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="GoalMilestone.created_at.desc()",
    )

    @property
    def total_saved_cents(self) -> int:
        """Suma de todas las contribuciones."""
        return sum(c.amount_cents for c in self.contributions)

    @property
    def amount_remaining_cents(self) -> int:
        """Monto faltante para alcanzar la meta."""
        return max(self.target_amount_cents - self.total_saved_cents, 0)

    @property
    def progress(self) -> float:
        """Progreso hacia la meta (0.0 - 1.0)."""
        if self.target_amount_cents <= 0:
            return 0.0
        return min(self.total_saved_cents / self.target_amount_cents, 1.0)

    @property
    def is_completed(self) -> bool:
        return self.total_saved_cents >= self.target_amount_cents

    @property
    def days_remaining(self) -> int:
        """Días hasta el deadline (negativo si ya pasó)."""
        return self.days_remaining_at(date.today())

    @property
    def is_overdue(self) -> bool:
        """True si pasó el deadline sin completar."""
        return self.is_overdue_at(date.today())

    @property
    def is_behind_schedule(self) -> bool:
        return self.is_behind_schedule_at(date.today())

    def days_remaining_at(self, today: date) -> int:
        return (self.deadline - today).days

    def is_overdue_at(self, today: date) -> bool:
        return not self.is_completed and today > self.deadline

    def is_behind_schedule_at(self, today: date) -> bool:
        """
        True si el progreso va atrasado respecto al cronograma lineal.

        Compara el porcentaje ahorrado contra el porcentaje de tiempo
        transcurrido entre la creación y el deadline.
        """
        if self.is_completed:
            return False
        if self.deadline <= today:
            return True

        created = (self.created_at or datetime.now(UTC)).date()
        total_days = (self.deadline - created).days
        if total_days <= 0:
            return False

        days_passed = (today - created).days
        expected_progress = (days_passed / total_days) * 100
        return self.progress * 100 < expected_progress - BEHIND_SCHEDULE_TOLERANCE

    @property
    def display_name(self) -> str:
        """Nombre con icono para display."""
        return f"{self.icon} {self.name}" if self.icon else self.name

    def archive(self) -> None:
        """Archiva la meta sin borrar sus contribuciones."""
        self.is_active = False
        self.soft_delete()

    def unarchive(self) -> None:
        """Reactiva una meta archivada."""
        self.is_active = True
        self.restore()

    def __repr__(self) -> str:
        return (
            f"<SavingsGoal(id={self.id}, name={self.name}, cadence={self.cadence}, "
            f"streak={self.current_streak})>"
        )
