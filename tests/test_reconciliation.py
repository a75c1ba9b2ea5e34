# tests/test_reconciliation.py
"""
Unit tests for day-config changes against already logged activities.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.errors import ActivitiesOutOfRange, ErrorCode
from app.core.models import Activity, DayConfig, DayRecord
from app.core.workday import (
    derive_span,
    ensure_within_span,
    find_out_of_range,
    has_config_changes,
    is_activity_outside_span,
    validate_day_config,
)


def timed(start, end, job_code="MANT-01", date_key="2025-03-04"):
    return Activity(
        description="Actividad con horario",
        job_id=10,
        job_code=job_code,
        is_overtime=True,
        start=f"{date_key}T{start}:00.000Z",
        end=f"{date_key}T{end}:00.000Z",
    )


class TestOutOfRange:
    """Which timed activities a new span would strand."""

    def test_activity_before_new_entry_flagged(self):
        span = derive_span("08:00", "16:00")
        activities = [timed("07:00", "07:30")]
        flagged = find_out_of_range(span, activities)
        assert len(flagged) == 1
        assert flagged[0].index == 0
        assert flagged[0].describe() == "Act 1 (MANT-01) 07:00-07:30"

    def test_activity_inside_span_not_flagged(self):
        assert find_out_of_range(derive_span("07:00", "17:00"), [timed("07:00", "07:30")]) == []

    def test_normal_activities_never_flagged(self):
        activity = Activity(description="Sin horario", job_id=10, duration_hours=4)
        assert not is_activity_outside_span(activity, derive_span("08:00", "09:00"))

    def test_night_span_early_morning_inside(self):
        span = derive_span("22:00", "06:00")
        assert not is_activity_outside_span(timed("01:00", "03:00"), span)
        assert is_activity_outside_span(timed("05:00", "07:00"), span)

    def test_job_id_used_without_code(self):
        activity = timed("06:00", "06:30", job_code=None)
        flagged = find_out_of_range(derive_span("07:00", "16:00"), [activity])
        assert flagged[0].job == "10"


class TestEnsureWithinSpan:
    def test_blocks_change_with_samples(self):
        activities = [
            timed("06:00", "06:30"),
            timed("06:30", "07:00"),
            timed("07:00", "07:30"),
            timed("16:30", "17:00"),
        ]
        with pytest.raises(ActivitiesOutOfRange) as exc_info:
            ensure_within_span(derive_span("08:00", "16:00"), activities)

        error = exc_info.value
        assert error.code == ErrorCode.ACTIVITIES_OUT_OF_RANGE
        assert error.count == 4
        assert len(error.samples) == 3
        assert error.samples[0] == "Act 1 (MANT-01) 06:00-06:30"
        assert "(08:00 - 16:00)" in error.message

    def test_night_span_bounds_formatted_as_clock_times(self):
        with pytest.raises(ActivitiesOutOfRange) as exc_info:
            ensure_within_span(derive_span("22:00", "06:00"), [timed("20:00", "21:00")])
        assert exc_info.value.exit_time == "06:00"

    def test_passes_when_all_inside(self):
        ensure_within_span(derive_span("07:00", "17:00"), [timed("08:00", "09:00")])


class TestValidateDayConfig:
    def test_required_times(self):
        errors = validate_day_config(DayConfig())
        assert errors["entry_time"].code == ErrorCode.REQUIRED_FIELD_MISSING
        assert errors["exit_time"].message == "La hora de salida es obligatoria"

    def test_malformed_time(self):
        errors = validate_day_config(DayConfig(entry_time="7am", exit_time="16:00"))
        assert errors["entry_time"].code == ErrorCode.INVALID_FORMAT
        assert "exit_time" not in errors

    def test_valid(self):
        assert validate_day_config(DayConfig(entry_time="07:00", exit_time="16:00")) == {}


class TestConfigChanges:
    @pytest.fixture
    def record(self):
        return DayRecord(
            user_id=1,
            date_key="2025-03-04",
            entry_time="2025-03-04T07:00:00.000Z",
            exit_time="2025-03-04T16:00:00.000Z",
        )

    def test_same_config_unchanged(self, record):
        assert not has_config_changes(record.config(), record)

    def test_new_exit_detected(self, record):
        assert has_config_changes(DayConfig(entry_time="07:00", exit_time="17:00"), record)

    def test_no_record_has_nothing_to_compare(self):
        assert not has_config_changes(DayConfig(entry_time="07:00", exit_time="16:00"), None)
