"""Tests for model enums."""

from save_streak.models.enums import Cadence, MilestoneType


class TestCadence:
    """Tests for Cadence enum."""

    def test_values(self) -> None:
        assert Cadence.DAILY.value == "daily"
        assert Cadence.WEEKLY.value == "weekly"

    def test_compares_with_raw_string(self) -> None:
        assert Cadence.WEEKLY == "weekly"
        assert Cadence("daily") is Cadence.DAILY

    def test_unit(self) -> None:
        assert Cadence.DAILY.unit == "day"
        assert Cadence.WEEKLY.unit == "week"

    def test_str(self) -> None:
        assert str(Cadence.WEEKLY) == "weekly"


class TestMilestoneType:
    """Tests for MilestoneType enum."""

    def test_values(self) -> None:
        assert MilestoneType.STREAK.value == "streak"
        assert MilestoneType.HALFWAY.value == "halfway"
        assert MilestoneType.COMPLETED.value == "completed"
