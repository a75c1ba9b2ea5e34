# tests/test_progress.py
"""
Unit tests for normal-hours progress and overtime eligibility.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.models import Activity, DayConfig
from app.core.workday import (
    is_overtime_eligible,
    normal_hours_worked,
    overtime_hours_worked,
    progress_percent,
    remaining_hours,
    remaining_message,
    summarize_progress,
)

CONFIG = DayConfig(entry_time="07:00", exit_time="16:00")


def normal(hours):
    return Activity(description="Regular", job_id=10, duration_hours=hours)


def overtime(start, end):
    return Activity(
        description="Extra",
        job_id=10,
        duration_hours=99.0,
        is_overtime=True,
        start=f"2025-03-04T{start}:00.000Z",
        end=f"2025-03-04T{end}:00.000Z",
    )


class TestProgressPercent:
    def test_partial(self):
        assert progress_percent(6, 8) == 75.0

    def test_zero_quota_is_complete(self):
        assert progress_percent(0, 0) == 100.0

    def test_can_exceed_hundred(self):
        assert progress_percent(9, 8) == 112.5


class TestOvertimeEligibility:
    def test_requires_full_progress(self):
        assert not is_overtime_eligible(8, 99.9)
        assert is_overtime_eligible(8, 100)

    def test_zero_quota_always_eligible(self):
        assert is_overtime_eligible(0, 0)


class TestHoursWorked:
    """Overtime never counts toward the normal-hours quota."""

    def test_normal_hours_ignore_overtime(self):
        assert normal_hours_worked([normal(3), normal(2.5), overtime("16:00", "18:00")]) == 5.5

    def test_overtime_uses_recalculated_hours(self):
        assert overtime_hours_worked([normal(8), overtime("16:00", "18:00")], CONFIG) == 2.0

    def test_remaining(self):
        assert remaining_hours(6, 8) == 2.0
        assert remaining_hours(9, 8) == 0.0

    def test_remaining_message(self):
        assert remaining_message(6, 8) == "Faltan 2.00 horas para completar la jornada"
        assert remaining_message(8, 8) == "Jornada completada"


class TestSummary:
    def test_summary(self):
        summary = summarize_progress([normal(8), overtime("16:00", "17:30")], CONFIG, 8.0)
        assert summary.quota_hours == 8.0
        assert summary.normal_hours_worked == 8.0
        assert summary.overtime_hours == 1.5
        assert summary.progress_percent == 100.0
        assert summary.overtime_eligible is True
        assert summary.remaining_hours == 0.0
        assert summary.remaining_message == "Jornada completada"

    def test_empty_day(self):
        summary = summarize_progress([], CONFIG, 8.0)
        assert summary.progress_percent == 0.0
        assert summary.overtime_eligible is False
        assert summary.remaining_hours == 8.0
