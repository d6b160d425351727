"""Modelos de base de datos - SaveStreak."""

from save_streak.models.base import SoftDeleteMixin, TimestampMixin, UTCDateTime
from save_streak.models.contribution import Contribution
from save_streak.models.enums import Cadence, MilestoneType
from save_streak.models.goal_milestone import GoalMilestone
from save_streak.models.savings_goal import SavingsGoal


__all__ = [
    "Cadence",
    "Contribution",
    "GoalMilestone",
    "MilestoneType",
    "SavingsGoal",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UTCDateTime",
]
