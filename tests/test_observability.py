# tests/test_observability.py
"""
Tests for structured logging and Sentry event scrubbing.
"""

import json
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.logging_config import ColoredFormatter, JSONFormatter
from app.core.request_logging import DATE_KEY_IN_PATH
from app.core.sentry_config import before_send_hook


def make_record(message="Day record replaced", **attrs):
    record = logging.LogRecord("app.core.records", logging.INFO, __file__, 10, message, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_extra_fields_merged(self):
        record = make_record(extra_fields={"user_id": 1, "date_key": "2025-03-04"})
        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Day record replaced"
        assert data["level"] == "INFO"
        assert data["user_id"] == 1
        assert data["date_key"] == "2025-03-04"

    def test_non_ascii_kept(self):
        data = JSONFormatter().format(make_record("Cita médica"))
        assert "Cita médica" in data


class TestColoredFormatter:
    def test_levelname_restored(self):
        record = make_record()
        ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert record.levelname == "INFO"


class TestRequestLogging:
    def test_date_key_taken_from_timesheet_paths(self):
        assert DATE_KEY_IN_PATH.match("/api/timesheet/2025-03-04/activities").group(1) == "2025-03-04"
        assert DATE_KEY_IN_PATH.match("/api/timesheet/2025-03-04").group(1) == "2025-03-04"
        assert DATE_KEY_IN_PATH.match("/api/timesheet/today") is None


class TestSentryScrubbing:
    def test_headers_and_free_text_filtered(self):
        event = {
            "request": {
                "headers": {"X-User-Id": "7", "Cookie": "session=abc", "Accept": "application/json"},
                "data": {"comment": "Cita médica", "description": "Reparación", "job_id": 10},
            }
        }
        result = before_send_hook(event, {})

        headers = result["request"]["headers"]
        assert headers["X-User-Id"] == "[Filtered]"
        assert headers["Cookie"] == "[Filtered]"
        assert headers["Accept"] == "application/json"
        assert result["request"]["data"]["comment"] == "[Filtered]"
        assert result["request"]["data"]["description"] == "[Filtered]"
        assert result["request"]["data"]["job_id"] == 10

    def test_event_without_request_untouched(self):
        event = {"message": "boom"}
        assert before_send_hook(event, {}) == {"message": "boom"}
