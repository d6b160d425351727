"""Módulo core con funcionalidades fundamentales del proyecto."""

from save_streak.core.constants import (
    DEFAULT_STREAK_MILESTONES,
    MAX_CONTRIBUTION_CENTS,
    STREAK_LOOKBACK_DAYS,
    WEEK_START_DAY,
)


__all__ = [
    "DEFAULT_STREAK_MILESTONES",
    "MAX_CONTRIBUTION_CENTS",
    "STREAK_LOOKBACK_DAYS",
    "WEEK_START_DAY",
]
