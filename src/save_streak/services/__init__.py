"""Servicios de la aplicación."""

from save_streak.services.streak_engine import (
    ContributionSnapshot,
    GoalSnapshot,
    StreakPolicy,
    StreakUpdate,
    compute_current_streak,
    days_since_last_contribution,
    has_met_current_period,
    is_streak_at_risk,
    recompute_after_contribution,
    recompute_streak,
    remaining_contributions_estimate,
)
from save_streak.services.motivation import (
    Achievement,
    detect_achievements,
    format_amount,
    motivational_message,
    streak_message,
)
from save_streak.services.goal_service import ContributionResult, GoalService, GoalStatus


__all__ = [
    # Motor de rachas
    "ContributionSnapshot",
    "GoalSnapshot",
    "StreakPolicy",
    "StreakUpdate",
    "compute_current_streak",
    "days_since_last_contribution",
    "has_met_current_period",
    "is_streak_at_risk",
    "recompute_after_contribution",
    "recompute_streak",
    "remaining_contributions_estimate",
    # Motivación
    "Achievement",
    "detect_achievements",
    "format_amount",
    "motivational_message",
    "streak_message",
    # Metas
    "ContributionResult",
    "GoalService",
    "GoalStatus",
]
