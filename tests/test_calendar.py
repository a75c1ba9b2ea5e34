# tests/test_calendar.py
"""
Tests for date keys in the business time zone, Honduran holidays and the
schedule lookup that turns them into a user's expected workday.
"""

import datetime
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.holidays import (
    easter_sunday,
    holiday_name,
    holidays_for_year,
    jueves_santo,
    semana_morazanica,
)
from app.core.schedule_lookup import ScheduleLookup
from app.core.storage import StorageError, load_schedule_types
from app.core.time_utils import (
    build_iso,
    build_iso_interval,
    date_key_in_tz,
    extract_hhmm,
    parse_date_key,
    weekday_of,
)
from app.database.database import User

SCHEDULE_TYPES_FILE = project_root / "data" / "schedule_types.json"


class TestDateKeys:
    """Date keys are computed in America/Tegucigalpa (UTC-6)."""

    def test_evening_utc_is_previous_local_day(self):
        moment = datetime.datetime(2025, 3, 5, 3, 0, tzinfo=datetime.timezone.utc)
        assert date_key_in_tz(moment) == "2025-03-04"

    def test_naive_moment_treated_as_utc(self):
        assert date_key_in_tz(datetime.datetime(2025, 3, 5, 5, 59)) == "2025-03-04"
        assert date_key_in_tz(datetime.datetime(2025, 3, 5, 6, 0)) == "2025-03-05"

    def test_today_has_date_key_shape(self):
        assert parse_date_key(date_key_in_tz())

    def test_parse_rejects_invalid(self):
        with pytest.raises(ValueError):
            parse_date_key("2025-02-30")
        with pytest.raises(ValueError):
            parse_date_key("04/03/2025")

    def test_weekday(self):
        assert weekday_of("2025-03-04") == 1


class TestIsoInstants:
    def test_extract_hhmm(self):
        assert extract_hhmm("2025-03-04T07:30:00.000Z") == "07:30"
        assert extract_hhmm("07:30") == "07:30"
        assert extract_hhmm(None) == ""

    def test_build_iso_keeps_wall_clock(self):
        assert build_iso("2025-03-04", "07:30") == "2025-03-04T07:30:00.000Z"

    def test_interval_crossing_midnight_ends_next_day(self):
        start, end = build_iso_interval("2025-03-04", "22:00", "06:00")
        assert start == "2025-03-04T22:00:00.000Z"
        assert end == "2025-03-05T06:00:00.000Z"

    def test_month_end_rollover(self):
        _, end = build_iso_interval("2025-02-28", "23:00", "01:00")
        assert end == "2025-03-01T01:00:00.000Z"

    def test_invalid_time_raises(self):
        with pytest.raises(ValueError):
            build_iso("2025-03-04", "7h")


class TestHolidays:
    def test_easter(self):
        assert easter_sunday(2025) == datetime.date(2025, 4, 20)
        assert easter_sunday(2024) == datetime.date(2024, 3, 31)

    def test_holy_week(self):
        assert jueves_santo(2025) == datetime.date(2025, 4, 17)
        holidays = holidays_for_year(2025)
        assert holidays[datetime.date(2025, 4, 18)] == "Viernes Santo"

    def test_morazan_week(self):
        assert semana_morazanica(2025) == [
            datetime.date(2025, 10, 8),
            datetime.date(2025, 10, 9),
            datetime.date(2025, 10, 10),
        ]

    def test_fixed_and_regular_days(self):
        assert holiday_name(datetime.date(2025, 9, 15)) == "Día de la Independencia"
        assert holiday_name(datetime.date(2025, 3, 4)) is None


class TestScheduleLookup:
    """Expected schedule per user and day, before anything is saved."""

    @pytest.fixture
    def lookup(self, test_db):
        return ScheduleLookup(test_db, load_schedule_types(SCHEDULE_TYPES_FILE))

    def test_weekday_schedule(self, lookup, test_user):
        schedule = lookup.get_work_schedule(test_user.id, "2025-03-04")
        assert schedule.schedule_type == "H1"
        assert (schedule.entry_time, schedule.exit_time) == ("07:00", "16:00")
        assert schedule.quota_hours == 8.0
        assert schedule.is_free_day is False

    def test_rest_day_is_free(self, lookup, test_user):
        schedule = lookup.get_work_schedule(test_user.id, "2025-03-08")
        assert schedule.is_free_day is True
        assert schedule.quota_hours == 0.0

    def test_holiday_is_free(self, lookup, test_user):
        schedule = lookup.get_work_schedule(test_user.id, "2025-05-01")
        assert schedule.is_free_day is True
        assert schedule.holiday_name == "Día del Trabajo"
        assert schedule.quota_hours == 0.0

    def test_weekday_hours_override(self, lookup, h2_user):
        schedule = lookup.get_work_schedule(h2_user.id, "2025-03-08")
        assert (schedule.entry_time, schedule.exit_time) == ("07:00", "12:00")
        assert schedule.quota_hours == 4.0
        assert schedule.shift_selectable is True

    def test_night_schedule_prefills_night_label(self, lookup, test_db):
        test_db.add(User(id=7, username="nocturno", name="Turno Noche", schedule_type="H3"))
        test_db.commit()
        schedule = lookup.get_work_schedule(7, "2025-03-04")
        assert schedule.shift_label == "N"
        assert schedule.continuous_shift is False
        assert schedule.quota_hours == 8.0

    def test_user_without_schedule_type_gets_default(self, lookup, test_db):
        test_db.add(User(id=5, username="sin_horario", name="Sin Horario"))
        test_db.commit()
        assert lookup.get_work_schedule(5, "2025-03-04").schedule_type == "H1"

    def test_unknown_schedule_type(self, lookup, test_db):
        test_db.add(User(id=6, username="raro", name="Horario Raro", schedule_type="H9"))
        test_db.commit()
        with pytest.raises(StorageError):
            lookup.get_work_schedule(6, "2025-03-04")

    def test_invalid_catalogue_file(self, tmp_path):
        path = tmp_path / "schedule_types.json"
        path.write_text('[{"code": "H1"}]', encoding="utf-8")
        with pytest.raises(StorageError):
            load_schedule_types(path)


class TestScheduleCatalogueCache:
    def test_cache_reloads_after_clear(self, tmp_path, monkeypatch):
        import app.core.storage as storage

        path = tmp_path / "schedule_types.json"
        path.write_text('[{"code": "H1", "entry_time": "08:00", "exit_time": "17:00"}]', encoding="utf-8")
        monkeypatch.setattr(storage, "SCHEDULE_TYPES_PATH", path)

        storage.clear_storage_cache()
        try:
            schedule_types = storage.get_schedule_types()
            assert list(schedule_types) == ["H1"]
            assert schedule_types["H1"].entry_time == "08:00"
            assert storage.get_schedule_types() is schedule_types
        finally:
            storage.clear_storage_cache()
