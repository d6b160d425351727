"""Servicio de gestión de metas de ahorro y registro de contribuciones."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from save_streak.config.settings import settings
from save_streak.core.constants import MAX_CONTRIBUTION_CENTS
from save_streak.core.logging import get_logger
from save_streak.models.contribution import Contribution
from save_streak.models.enums import Cadence
from save_streak.models.goal_milestone import GoalMilestone
from save_streak.models.savings_goal import SavingsGoal
from save_streak.services import streak_engine
from save_streak.services.motivation import (
    Achievement,
    detect_achievements,
    format_amount,
    motivational_message,
    streak_message,
)
from save_streak.services.streak_engine import StreakPolicy, StreakUpdate


logger = get_logger(__name__)

# Campos cuya edición obliga a recalcular la racha
STREAK_FIELDS = frozenset({"cadence", "period_target_cents"})

EDITABLE_FIELDS = frozenset(
    {"name", "icon", "target_amount_cents", "period_target_cents", "cadence", "deadline"}
)


@dataclass
class ContributionResult:
    """Resultado de registrar una contribución."""

    goal: SavingsGoal
    contribution: Contribution
    streak: StreakUpdate
    achievements: list[Achievement] = field(default_factory=list)


@dataclass
class GoalStatus:
    """Resumen derivado de una meta para display y notificaciones."""

    goal_id: str
    current_streak: int
    longest_streak: int
    has_saved_this_period: bool
    is_streak_at_risk: bool
    remaining_contributions: int
    days_since_last_contribution: int | None
    total_saved_cents: int
    progress: float
    days_remaining: int
    is_overdue: bool
    is_behind_schedule: bool
    streak_message: str
    motivational_message: str

    def to_dict(self) -> dict:
        """Convierte a diccionario para serialización."""
        return {
            "goal_id": self.goal_id,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "has_saved_this_period": self.has_saved_this_period,
            "is_streak_at_risk": self.is_streak_at_risk,
            "remaining_contributions": self.remaining_contributions,
            "days_since_last_contribution": self.days_since_last_contribution,
            "total_saved_cents": self.total_saved_cents,
            "progress": round(self.progress, 4),
            "days_remaining": self.days_remaining,
            "is_overdue": self.is_overdue,
            "is_behind_schedule": self.is_behind_schedule,
            "streak_message": self.streak_message,
            "motivational_message": self.motivational_message,
        }


def _to_utc(moment: datetime) -> datetime:
    return moment.astimezone(UTC) if moment.tzinfo else moment.replace(tzinfo=UTC)


class GoalService:
    """
    Servicio de Metas de Ahorro.

    Es el "llamador" del motor de rachas: valida la entrada, persiste
    metas y contribuciones, invoca el motor con el historial completo y
    escribe de vuelta el estado derivado.

    Features:
    - CRUD de metas (archivado con soft delete)
    - Registro y borrado de contribuciones con recálculo de racha
    - Detección y registro de hitos (rachas, 50%, meta completada)
    - Resumen de estado para UI/notificaciones
    """

    def __init__(
        self,
        session: Session,
        clock: Callable[[], datetime] | None = None,
        policy: StreakPolicy | None = None,
    ) -> None:
        """
        Inicializa el servicio.

        Args:
            session: Sesión de SQLAlchemy
            clock: Fuente de "ahora" (por defecto datetime.now(UTC))
            policy: Convenciones de calendario del motor
        """
        self.session = session
        self.clock = clock or (lambda: datetime.now(UTC))
        self.policy = policy or StreakPolicy.from_settings()

    # ========================================================================
    # CRUD DE METAS
    # ========================================================================

    def create_goal(
        self,
        name: str,
        target_amount_cents: int,
        period_target_cents: int,
        deadline: date,
        cadence: Cadence = Cadence.DAILY,
        icon: str | None = None,
    ) -> SavingsGoal:
        """
        Crea una nueva meta de ahorro.

        Args:
            name: Nombre de la meta (ej: "Emergency Fund")
            target_amount_cents: Monto objetivo en centavos
            period_target_cents: Monto a ahorrar por día/semana en centavos
            deadline: Fecha límite
            cadence: Cadencia diaria o semanal
            icon: Emoji opcional

        Returns:
            Meta creada
        """
        if not name or not name.strip():
            raise ValueError("El nombre de la meta no puede estar vacío")
        if target_amount_cents < 0:
            raise ValueError("El monto objetivo no puede ser negativo")

        goal = SavingsGoal(
            name=name.strip(),
            icon=icon,
            target_amount_cents=target_amount_cents,
            period_target_cents=period_target_cents,
            cadence=Cadence(cadence).value,
            deadline=deadline,
            current_streak=0,
            longest_streak=0,
            is_active=True,
        )
        self.session.add(goal)
        self.session.commit()
        self.session.refresh(goal)

        logger.info(
            f"✅ Meta creada: {goal.name} - {format_amount(target_amount_cents)} "
            f"({format_amount(period_target_cents)} {cadence})"
        )
        return goal

    def get_goal(self, goal_id: str) -> SavingsGoal | None:
        """Obtiene una meta por ID."""
        return self.session.get(SavingsGoal, goal_id)

    def get_active_goals(self) -> list[SavingsGoal]:
        """Obtiene las metas activas, la más antigua primero."""
        stmt = (
            select(SavingsGoal)
            .where(
                SavingsGoal.is_active == True,  # noqa: E712
                SavingsGoal.deleted_at.is_(None),
            )
            .order_by(SavingsGoal.created_at)
        )
        return list(self.session.execute(stmt).scalars().all())

    def update_goal(self, goal_id: str, **updates: Any) -> SavingsGoal:
        """
        Actualiza una meta.

        Cambiar la cadencia o el objetivo por período mueve los límites de
        los períodos de forma retroactiva, así que la racha se recalcula.

        Args:
            goal_id: ID de la meta
            **updates: Campos a actualizar

        Returns:
            Meta actualizada
        """
        goal = self._require_goal(goal_id)

        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos no editables: {', '.join(sorted(unknown))}")

        if "cadence" in updates:
            updates["cadence"] = Cadence(updates["cadence"]).value

        for key, value in updates.items():
            setattr(goal, key, value)

        if STREAK_FIELDS & updates.keys():
            update = streak_engine.recompute_streak(
                goal, goal.contributions, now=self.clock(), policy=self.policy
            )
            update.apply_to(goal)
            logger.info(f"🔁 Racha recalculada por edición de {goal.name}: {update.current_streak}")

        self.session.commit()
        self.session.refresh(goal)
        logger.info(f"Meta actualizada: {goal.name}")
        return goal

    def archive_goal(self, goal_id: str) -> SavingsGoal:
        """Archiva una meta (soft delete); conserva sus contribuciones."""
        goal = self._require_goal(goal_id)
        goal.archive()
        self.session.commit()
        logger.info(f"Meta archivada: {goal.name}")
        return goal

    def unarchive_goal(self, goal_id: str) -> SavingsGoal:
        """Reactiva una meta archivada y recalcula su racha."""
        goal = self._require_goal(goal_id)
        goal.unarchive()
        streak_engine.recompute_streak(
            goal, goal.contributions, now=self.clock(), policy=self.policy
        ).apply_to(goal)
        self.session.commit()
        logger.info(f"Meta reactivada: {goal.name} (racha {goal.current_streak})")
        return goal

    def delete_goal(self, goal_id: str) -> None:
        """Elimina permanentemente una meta junto con sus contribuciones e hitos."""
        goal = self._require_goal(goal_id)
        name = goal.name
        self.session.delete(goal)
        self.session.commit()
        logger.info(f"Meta eliminada permanentemente: {name}")

    # ========================================================================
    # CONTRIBUCIONES
    # ========================================================================

    def log_contribution(
        self,
        goal_id: str,
        amount_cents: int,
        timestamp: datetime | None = None,
        note: str | None = None,
    ) -> ContributionResult:
        """
        Registra una contribución y recalcula la racha.

        Args:
            goal_id: ID de la meta
            amount_cents: Monto en centavos (> 0)
            timestamp: Momento del ahorro (por defecto ahora; puede ser retroactivo)
            note: Nota opcional

        Returns:
            ContributionResult con la meta actualizada y los logros alcanzados
        """
        if isinstance(amount_cents, bool) or not isinstance(amount_cents, int):
            raise ValueError("El monto debe ser un entero en centavos")
        if amount_cents <= 0:
            raise ValueError("El monto de la contribución debe ser mayor a cero")
        if amount_cents > MAX_CONTRIBUTION_CENTS:
            raise ValueError(f"El monto excede el máximo permitido ({format_amount(MAX_CONTRIBUTION_CENTS)})")

        goal = self._require_goal(goal_id)
        if not goal.is_active:
            raise ValueError(f"La meta {goal.name} está archivada")

        previous_streak = goal.current_streak
        previous_saved = goal.total_saved_cents

        contribution = Contribution(
            amount_cents=amount_cents,
            timestamp=_to_utc(timestamp or self.clock()),
            note=note,
        )

        try:
            goal.contributions.append(contribution)
            self.session.flush()

            update = streak_engine.recompute_after_contribution(
                goal, contribution, goal.contributions, now=self.clock(), policy=self.policy
            )
            update.apply_to(goal)

            achievements = detect_achievements(goal, previous_streak, previous_saved)
            for achievement in achievements:
                self._record_milestone(goal, achievement)

            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.bind(goal_id=goal_id).exception("Error registrando contribución")
            raise

        self.session.refresh(goal)
        goal_log = logger.bind(goal_id=goal.id)
        goal_log.info(
            f"💰 Contribución agregada a {goal.name}: {format_amount(amount_cents)} "
            f"(racha {update.current_streak}, máxima {update.longest_streak})"
        )
        for achievement in achievements:
            goal_log.success(f"{achievement.title} - {goal.name}")

        return ContributionResult(
            goal=goal,
            contribution=contribution,
            streak=update,
            achievements=achievements,
        )

    def delete_contribution(self, contribution_id: str) -> SavingsGoal:
        """
        Elimina una contribución y recalcula la racha de su meta.

        Returns:
            Meta actualizada
        """
        contribution = self.session.get(Contribution, contribution_id)
        if not contribution:
            raise ValueError(f"Contribución {contribution_id} no encontrada")

        goal = contribution.goal
        goal.contributions.remove(contribution)
        self.session.flush()

        update = streak_engine.recompute_streak(
            goal, goal.contributions, now=self.clock(), policy=self.policy
        )
        update.apply_to(goal)

        self.session.commit()
        self.session.refresh(goal)
        logger.bind(goal_id=goal.id).info(
            f"🗑️ Contribución eliminada de {goal.name} (racha {update.current_streak})"
        )
        return goal

    def get_recent_history(self, goal_id: str, days: int | None = None) -> list[Contribution]:
        """
        Contribuciones recientes de una meta, la más reciente primero.

        Args:
            goal_id: ID de la meta
            days: Ventana en días (por defecto settings.recent_history_days)
        """
        goal = self._require_goal(goal_id)
        since = self.clock() - timedelta(days=days or settings.recent_history_days)
        recent = [c for c in goal.contributions if _to_utc(c.timestamp) >= _to_utc(since)]
        return sorted(recent, key=lambda c: _to_utc(c.timestamp), reverse=True)

    # ========================================================================
    # ESTADO
    # ========================================================================

    def get_goal_status(self, goal_id: str) -> GoalStatus:
        """
        Resumen de racha, riesgo y trabajo restante de una meta.

        La racha se recalcula con el reloj actual: los períodos que vencieron
        sin ahorro desde la última escritura ya cuentan. No se persiste.
        """
        goal = self._require_goal(goal_id)
        now = self.clock()
        today = self.policy.localize(now).date()
        contributions = goal.contributions

        update = streak_engine.recompute_streak(goal, contributions, now, self.policy)
        current = replace(
            streak_engine.GoalSnapshot.from_model(goal),
            current_streak=update.current_streak,
            longest_streak=update.longest_streak,
        )

        has_saved = streak_engine.has_met_current_period(current, contributions, now, self.policy)
        at_risk = streak_engine.is_streak_at_risk(current, contributions, now, self.policy)

        return GoalStatus(
            goal_id=goal.id,
            current_streak=current.current_streak,
            longest_streak=current.longest_streak,
            has_saved_this_period=has_saved,
            is_streak_at_risk=at_risk,
            remaining_contributions=streak_engine.remaining_contributions_estimate(goal),
            days_since_last_contribution=streak_engine.days_since_last_contribution(
                goal, now, self.policy
            ),
            total_saved_cents=goal.total_saved_cents,
            progress=goal.progress,
            days_remaining=goal.days_remaining_at(today),
            is_overdue=goal.is_overdue_at(today),
            is_behind_schedule=goal.is_behind_schedule_at(today),
            streak_message=streak_message(current),
            motivational_message=motivational_message(current, at_risk, today),
        )

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _require_goal(self, goal_id: str) -> SavingsGoal:
        goal = self.session.get(SavingsGoal, goal_id)
        if not goal:
            raise ValueError(f"Meta {goal_id} no encontrada")
        return goal

    def _record_milestone(self, goal: SavingsGoal, achievement: Achievement) -> None:
        milestone = GoalMilestone(
            milestone_type=achievement.type.value,
            title=achievement.title,
            description=achievement.message,
            streak_at_milestone=goal.current_streak,
            saved_cents_at_milestone=goal.total_saved_cents,
        )
        goal.milestones.append(milestone)
