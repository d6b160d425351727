"""Tests para mensajes de motivación y detección de logros."""

from datetime import date, timedelta

import pytest

from save_streak.core.constants import MAX_CONTRIBUTION_CENTS
from save_streak.models.enums import Cadence, MilestoneType
from save_streak.services.motivation import (
    Achievement,
    detect_achievements,
    format_amount,
    motivational_message,
    streak_message,
)
from save_streak.services.streak_engine import GoalSnapshot


TODAY = date(2024, 1, 10)


def make_goal(**kwargs) -> GoalSnapshot:
    kwargs.setdefault("cadence", Cadence.DAILY)
    kwargs.setdefault("period_target_cents", 500)
    kwargs.setdefault("target_amount_cents", 100_000)
    kwargs.setdefault("deadline", TODAY + timedelta(days=60))
    return GoalSnapshot(**kwargs)


class TestFormatAmount:
    """Tests para format_amount."""

    @pytest.mark.parametrize(
        ("cents", "expected"),
        [
            (123456, "$1,234.56"),
            (5, "$0.05"),
            (0, "$0.00"),
            (-250, "-$2.50"),
            (100_000_000, "$1,000,000.00"),
        ],
    )
    def test_format(self, cents: int, expected: str) -> None:
        assert format_amount(cents) == expected

    def test_maximum_contribution(self) -> None:
        """El tope por contribución es un billón de centavos."""
        assert format_amount(MAX_CONTRIBUTION_CENTS) == "$10,000,000,000.00"


class TestStreakMessage:
    """Tests para streak_message."""

    def test_no_streak(self) -> None:
        assert streak_message(make_goal(current_streak=0)) == "Start your streak today!"

    def test_daily_streak(self) -> None:
        assert streak_message(make_goal(current_streak=1)) == "🔥 1 day streak!"

    def test_weekly_streak(self) -> None:
        goal = make_goal(cadence=Cadence.WEEKLY, current_streak=5)
        assert streak_message(goal) == "🔥 5 week streak!"


class TestMotivationalMessage:
    """Tests para motivational_message (orden de prioridad)."""

    def test_at_risk_first(self) -> None:
        goal = make_goal(current_streak=3, total_saved_cents=95_000)
        assert motivational_message(goal, at_risk=True, today=TODAY) == "⚠️ Don't break your 3-day streak!"

    def test_at_risk_without_streak_is_ignored(self) -> None:
        goal = make_goal(current_streak=0)
        assert motivational_message(goal, at_risk=True, today=TODAY) == "Every save counts. You got this! 💪"

    def test_almost_there(self) -> None:
        goal = make_goal(total_saved_cents=90_000)
        assert motivational_message(goal, at_risk=False, today=TODAY) == "Almost there! You're so close!"

    def test_on_fire(self) -> None:
        goal = make_goal(current_streak=7)
        assert motivational_message(goal, at_risk=False, today=TODAY) == "You're on fire! Keep it going!"

    def test_final_push(self) -> None:
        goal = make_goal(deadline=TODAY + timedelta(days=3))
        assert motivational_message(goal, at_risk=False, today=TODAY) == "Final push! 3 days left!"

    def test_default(self) -> None:
        assert motivational_message(make_goal(), at_risk=False, today=TODAY) == (
            "Every save counts. You got this! 💪"
        )


class TestDetectAchievements:
    """Tests para detect_achievements."""

    def test_crossing_streak_milestone(self) -> None:
        goal = make_goal(current_streak=7)

        achievements = detect_achievements(goal, previous_streak=6, previous_saved_cents=0, milestones=[7, 30])

        assert len(achievements) == 1
        assert achievements[0].type == MilestoneType.STREAK
        assert achievements[0].streak == 7
        assert achievements[0].title == "🎉 7-Day Streak!"

    def test_milestone_fires_only_once(self) -> None:
        goal = make_goal(current_streak=8)
        assert detect_achievements(goal, previous_streak=7, previous_saved_cents=0, milestones=[7]) == []

    def test_backdated_jump_crosses_several(self) -> None:
        goal = make_goal(current_streak=31)

        achievements = detect_achievements(goal, 5, 0, milestones=[100, 7, 30])

        assert [a.streak for a in achievements] == [7, 30]

    def test_weekly_title(self) -> None:
        goal = make_goal(cadence=Cadence.WEEKLY, current_streak=7)
        achievements = detect_achievements(goal, 6, 0, milestones=[7])

        assert achievements[0].title == "🎉 7-Week Streak!"

    def test_halfway(self) -> None:
        goal = make_goal(target_amount_cents=1000, total_saved_cents=500)

        achievements = detect_achievements(goal, 0, previous_saved_cents=400, milestones=[])

        assert [a.type for a in achievements] == [MilestoneType.HALFWAY]

    def test_completed(self) -> None:
        goal = make_goal(target_amount_cents=1000, total_saved_cents=1000)

        achievements = detect_achievements(goal, 0, previous_saved_cents=900, milestones=[])

        assert [a.type for a in achievements] == [MilestoneType.COMPLETED]

    def test_completion_in_one_jump_skips_halfway(self) -> None:
        goal = make_goal(target_amount_cents=1000, total_saved_cents=1200)

        achievements = detect_achievements(goal, 0, previous_saved_cents=400, milestones=[])

        assert [a.type for a in achievements] == [MilestoneType.COMPLETED]

    def test_zero_target_has_no_amount_achievements(self) -> None:
        goal = make_goal(target_amount_cents=0, total_saved_cents=100)
        assert detect_achievements(goal, 0, 0, milestones=[]) == []

    def test_uses_settings_milestones_by_default(self) -> None:
        goal = make_goal(current_streak=100)

        achievements = detect_achievements(goal, 0, 0)

        assert [a.streak for a in achievements] == [7, 30, 100]

    def test_to_dict(self) -> None:
        achievement = Achievement(
            type=MilestoneType.STREAK, title="🎉 7-Day Streak!", message="msg", streak=7
        )
        assert achievement.to_dict() == {
            "type": "streak",
            "title": "🎉 7-Day Streak!",
            "message": "msg",
            "streak": 7,
        }
