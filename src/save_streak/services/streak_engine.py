"""
Motor de rachas de ahorro.

Funciones puras que, a partir de una meta y su historial de contribuciones,
derivan la racha actual, la racha más larga, si la racha está en riesgo y
cuántas contribuciones faltan para completar la meta.

No hace I/O ni muta sus entradas: el llamador decide cuándo persistir
el resultado (ver GoalService).

Reglas de agrupación:
- Cadencia diaria: la fecha local del timestamp.
- Cadencia semanal: el inicio de semana (domingo por defecto) en o antes
  de la fecha local.
- Timestamps sin zona horaria se interpretan como UTC (así se persisten).
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Any, Protocol

from save_streak.config.settings import Settings, settings
from save_streak.core.constants import STREAK_LOOKBACK_DAYS, WEEK_START_DAY
from save_streak.core.logging import get_logger
from save_streak.models.enums import Cadence


logger = get_logger(__name__)


class GoalLike(Protocol):
    """Atributos de una meta que consume el motor."""

    cadence: Cadence | str
    period_target_cents: int
    target_amount_cents: int
    current_streak: int
    longest_streak: int
    last_contribution_at: datetime | None

    @property
    def total_saved_cents(self) -> int: ...


class ContributionLike(Protocol):
    """Atributos de una contribución que consume el motor."""

    amount_cents: int
    timestamp: datetime


@dataclass(frozen=True)
class StreakPolicy:
    """
    Convenciones de calendario del motor.

    Attributes:
        week_start_day: Día de inicio de semana (date.weekday(), 6 = domingo)
        lookback_days: Máximo de días hacia atrás al contar una racha
        tz: Zona horaria para agrupar períodos (None = zona local del sistema)
    """

    week_start_day: int = WEEK_START_DAY
    lookback_days: int = STREAK_LOOKBACK_DAYS
    tz: tzinfo | None = None

    @classmethod
    def from_settings(cls, cfg: Settings | None = None) -> "StreakPolicy":
        """Construye la política a partir de la configuración."""
        cfg = cfg or settings
        return cls(
            week_start_day=cfg.week_start_day,
            lookback_days=cfg.streak_lookback_days,
            tz=cfg.get_zoneinfo(),
        )

    def localize(self, moment: datetime) -> datetime:
        """Convierte un timestamp a la zona horaria de la política."""
        return _as_utc(moment).astimezone(self.tz)


@dataclass(frozen=True)
class ContributionSnapshot:
    """Copia inmutable de una contribución."""

    amount_cents: int
    timestamp: datetime

    @classmethod
    def from_model(cls, contribution: Any) -> "ContributionSnapshot":
        return cls(amount_cents=contribution.amount_cents, timestamp=contribution.timestamp)


@dataclass(frozen=True)
class GoalSnapshot:
    """Copia inmutable de los campos de una meta que usa el motor."""

    cadence: Cadence
    period_target_cents: int
    target_amount_cents: int
    total_saved_cents: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_contribution_at: datetime | None = None
    deadline: date | None = None

    @classmethod
    def from_model(cls, goal: Any) -> "GoalSnapshot":
        return cls(
            cadence=Cadence(goal.cadence),
            period_target_cents=goal.period_target_cents,
            target_amount_cents=goal.target_amount_cents,
            total_saved_cents=goal.total_saved_cents,
            current_streak=goal.current_streak or 0,
            longest_streak=goal.longest_streak or 0,
            last_contribution_at=goal.last_contribution_at,
            deadline=goal.deadline,
        )


@dataclass(frozen=True)
class StreakUpdate:
    """Estado de racha recalculado, listo para escribirse en la meta."""

    current_streak: int
    longest_streak: int
    last_contribution_at: datetime | None

    def apply_to(self, goal: Any) -> None:
        """Escribe el resultado en una meta (responsabilidad del llamador)."""
        goal.current_streak = self.current_streak
        goal.longest_streak = self.longest_streak
        goal.last_contribution_at = self.last_contribution_at


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


def _resolve(now: datetime | None, policy: StreakPolicy | None) -> tuple[datetime, StreakPolicy]:
    return now or datetime.now(UTC), policy or StreakPolicy.from_settings()


# ============================================================================
# PERÍODOS
# ============================================================================


def period_key(moment: datetime, cadence: Cadence | str, policy: StreakPolicy | None = None) -> date:
    """
    Clave canónica del período que contiene un timestamp.

    Args:
        moment: Timestamp (naive = UTC)
        cadence: Cadencia de la meta
        policy: Convenciones de calendario

    Returns:
        Fecha local (diaria) o fecha del inicio de semana (semanal)
    """
    policy = policy or StreakPolicy.from_settings()
    return _period_start(policy.localize(moment).date(), cadence, policy)


def _period_start(day: date, cadence: Cadence | str, policy: StreakPolicy) -> date:
    if Cadence(cadence) is Cadence.DAILY:
        return day
    return day - timedelta(days=(day.weekday() - policy.week_start_day) % 7)


def previous_period(key: date, cadence: Cadence | str) -> date:
    """Clave del período inmediatamente anterior."""
    step = 1 if Cadence(cadence) is Cadence.DAILY else 7
    return key - timedelta(days=step)


def period_totals(
    contributions: Iterable[ContributionLike],
    cadence: Cadence | str,
    policy: StreakPolicy | None = None,
) -> dict[date, int]:
    """Suma de montos por período."""
    policy = policy or StreakPolicy.from_settings()
    totals: dict[date, int] = defaultdict(int)
    for contribution in contributions:
        totals[period_key(contribution.timestamp, cadence, policy)] += contribution.amount_cents
    return dict(totals)


# ============================================================================
# RACHAS
# ============================================================================


def compute_current_streak(
    goal: GoalLike,
    contributions: Iterable[ContributionLike],
    now: datetime | None = None,
    policy: StreakPolicy | None = None,
) -> int:
    """
    Cuenta los períodos consecutivos cumplidos terminando en el período actual.

    El período actual está en curso: si todavía no alcanza el objetivo no
    se cuenta, pero tampoco rompe la racha y se sigue con el anterior.
    Un período pasado sin cumplir corta la racha. Nunca se revisa más
    allá de ``policy.lookback_days`` antes de hoy.

    Args:
        goal: Meta (cadencia y objetivo por período)
        contributions: Historial completo de contribuciones de la meta
        now: Momento de referencia (por defecto ahora, UTC)
        policy: Convenciones de calendario

    Returns:
        Número de períodos consecutivos cumplidos
    """
    contributions = list(contributions)
    if not contributions:
        return 0

    now, policy = _resolve(now, policy)
    cadence = Cadence(goal.cadence)
    totals = period_totals(contributions, cadence, policy)

    current = period_key(now, cadence, policy)
    # Período que contiene el día más antiguo de la ventana
    oldest = _period_start(
        policy.localize(now).date() - timedelta(days=policy.lookback_days), cadence, policy
    )

    streak = 0
    cursor = current
    while cursor >= oldest:
        if totals.get(cursor, 0) >= goal.period_target_cents:
            streak += 1
        elif cursor != current:
            break
        cursor = previous_period(cursor, cadence)

    return streak


def has_met_current_period(
    goal: GoalLike,
    contributions: Iterable[ContributionLike],
    now: datetime | None = None,
    policy: StreakPolicy | None = None,
) -> bool:
    """
    True si hay alguna contribución en el período actual.

    Es un chequeo de existencia, independiente del monto: cualquier ahorro
    de hoy (o de esta semana) quita la alerta de "racha en riesgo" aunque
    todavía no alcance el objetivo del período.
    """
    now, policy = _resolve(now, policy)
    current = period_key(now, goal.cadence, policy)
    return any(period_key(c.timestamp, goal.cadence, policy) == current for c in contributions)


def is_streak_at_risk(
    goal: GoalLike,
    contributions: Iterable[ContributionLike],
    now: datetime | None = None,
    policy: StreakPolicy | None = None,
) -> bool:
    """True si hay una racha activa y aún no se ahorró en el período actual."""
    if (goal.current_streak or 0) <= 0:
        return False
    return not has_met_current_period(goal, contributions, now, policy)


def recompute_after_contribution(
    goal: GoalLike,
    new_contribution: ContributionLike,
    all_contributions: Iterable[ContributionLike],
    now: datetime | None = None,
    policy: StreakPolicy | None = None,
) -> StreakUpdate:
    """
    Recalcula el estado de racha después de registrar una contribución.

    Args:
        goal: Meta con el estado cacheado previo
        new_contribution: Contribución recién registrada
        all_contributions: Historial completo ya actualizado (incluye la nueva)
        now: Momento de referencia
        policy: Convenciones de calendario

    Returns:
        StreakUpdate con la racha actual, la más larga y la última fecha
    """
    current = compute_current_streak(goal, all_contributions, now, policy)
    longest = max(goal.longest_streak or 0, current)

    logger.debug(f"Racha recalculada: actual={current}, máxima={longest}")
    return StreakUpdate(
        current_streak=current,
        longest_streak=longest,
        last_contribution_at=new_contribution.timestamp,
    )


def recompute_streak(
    goal: GoalLike,
    contributions: Iterable[ContributionLike],
    now: datetime | None = None,
    policy: StreakPolicy | None = None,
) -> StreakUpdate:
    """
    Recalcula el estado de racha sin una contribución nueva.

    Se usa al borrar una contribución o al editar cadencia/objetivo por
    período. La última fecha pasa a ser la contribución más reciente que
    queda (o None si no queda ninguna).
    """
    contributions = list(contributions)
    current = compute_current_streak(goal, contributions, now, policy)
    latest = max(contributions, key=lambda c: _as_utc(c.timestamp), default=None)

    return StreakUpdate(
        current_streak=current,
        longest_streak=max(goal.longest_streak or 0, current),
        last_contribution_at=latest.timestamp if latest else None,
    )


# ============================================================================
# CONSULTAS
# ============================================================================


def remaining_contributions_estimate(goal: GoalLike) -> int:
    """
    Contribuciones de tamaño ``period_target`` que faltan para la meta.

    Returns:
        ceil(max(0, objetivo - ahorrado) / objetivo_por_período); 0 si ya se
        alcanzó. Con objetivo por período <= 0 cualquier contribución cierra
        la brecha, así que retorna 1.
    """
    remaining = max(0, goal.target_amount_cents - goal.total_saved_cents)
    if remaining == 0:
        return 0
    if goal.period_target_cents <= 0:
        return 1
    return -(-remaining // goal.period_target_cents)


def days_since_last_contribution(
    goal: GoalLike,
    now: datetime | None = None,
    policy: StreakPolicy | None = None,
) -> int | None:
    """
    Tiempo desde el último ahorro en la unidad de la cadencia.

    Returns:
        None si nunca se ahorró; días calendario (diaria) o semanas
        completas (semanal) en caso contrario.
    """
    if goal.last_contribution_at is None:
        return None

    now, policy = _resolve(now, policy)
    days = (policy.localize(now).date() - policy.localize(goal.last_contribution_at).date()).days
    if Cadence(goal.cadence) is Cadence.DAILY:
        return days
    return days // 7


__all__ = [
    "ContributionLike",
    "ContributionSnapshot",
    "GoalLike",
    "GoalSnapshot",
    "StreakPolicy",
    "StreakUpdate",
    "compute_current_streak",
    "days_since_last_contribution",
    "has_met_current_period",
    "is_streak_at_risk",
    "period_key",
    "period_totals",
    "previous_period",
    "recompute_after_contribution",
    "recompute_streak",
    "remaining_contributions_estimate",
]
