# tests/test_duration.py
"""
Unit tests for activity duration and the lunch-window deduction.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.models import Activity, DayConfig
from app.core.workday import compute_from_interval, derive_span, effective_hours


class TestComputeFromInterval:
    """Duration from start/end, lunch overlap subtracted when enabled."""

    def test_lunch_fully_inside(self):
        assert compute_from_interval("09:00", "13:00", True) == 3.0

    def test_no_lunch_overlap(self):
        assert compute_from_interval("09:00", "11:00", True) == 2.0

    def test_partial_lunch_overlap(self):
        assert compute_from_interval("11:00", "12:30", True) == 1.0

    def test_lunch_deduction_disabled(self):
        assert compute_from_interval("09:00", "13:00", False) == 4.0

    def test_crosses_midnight(self):
        assert compute_from_interval("23:00", "01:00", True) == 2.0

    def test_equal_times_are_a_full_day(self):
        assert compute_from_interval("06:00", "06:00", False) == 24.0

    def test_inside_lunch_only_is_zero(self):
        assert compute_from_interval("12:00", "13:00", True) == 0.0

    def test_night_span_normalization(self):
        """An early-morning interval after a night entry sits on the next day, away from noon."""
        span = derive_span("22:00", "06:00")
        assert compute_from_interval("06:00", "14:00", True, span) == 8.0
        assert compute_from_interval("06:00", "14:00", True) == 7.0
        assert compute_from_interval("01:00", "03:00", True, span) == 2.0


class TestEffectiveHours:
    """Stored durations for normal activities, live recalculation for timed ones."""

    def test_normal_activity_returns_stored_duration(self):
        activity = Activity(description="Inventario", job_id=1, duration_hours=3.5)
        config = DayConfig(entry_time="07:00", exit_time="16:00")
        assert effective_hours(activity, config) == 3.5

    def test_timed_activity_recomputed_from_config(self):
        activity = Activity(
            description="Cambio de molde",
            job_id=1,
            duration_hours=2.0,
            is_overtime=True,
            start="2025-03-04T16:00:00.000Z",
            end="2025-03-04T18:00:00.000Z",
        )
        config = DayConfig(entry_time="07:00", exit_time="16:00")
        assert effective_hours(activity, config) == 2.0

    def test_continuous_shift_changes_displayed_hours(self):
        """Toggling continuous shift affects timed activities overlapping lunch."""
        activity = Activity(
            description="Guardia",
            job_id=1,
            is_overtime=True,
            start="2025-03-08T10:00:00.000Z",
            end="2025-03-08T14:00:00.000Z",
        )
        with_lunch = DayConfig(entry_time="14:00", exit_time="22:00")
        continuous = DayConfig(entry_time="14:00", exit_time="22:00", continuous_shift=True)
        assert effective_hours(activity, with_lunch) == 3.0
        assert effective_hours(activity, continuous) == 4.0

    def test_idempotent(self):
        activity = Activity(
            description="Cierre",
            job_id=1,
            is_overtime=True,
            start="2025-03-04T17:00:00.000Z",
            end="2025-03-04T19:30:00.000Z",
        )
        config = DayConfig(entry_time="07:00", exit_time="17:00")
        first = effective_hours(activity, config)
        assert effective_hours(activity, config) == first == 2.5
