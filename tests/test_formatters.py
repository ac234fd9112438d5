"""Tests for output formatters."""

from __future__ import annotations

import csv
import json
from io import StringIO

import pytest

from schedulo.output.builder import build
from schedulo.output.formatters import (
    CSVFormatter,
    ConsoleFormatter,
    JSONFormatter,
    format_csv,
    format_day_view,
    format_faculty_view,
    format_json,
    format_room_view,
    save_csv,
    save_json,
)
from schedulo.output.schema import ScheduleOutput
from schedulo.scheduler import schedule

from conftest import make_request


@pytest.fixture
def output() -> ScheduleOutput:
    request = make_request(
        ["CS101", "CS102"],
        {"CS101": ["F1"], "CS102": ["F2"]},
        rooms=["R1", "R2"],
        days=2,
        periods_per_day=2,
    )
    return build(schedule(request))


class TestJSONFormatter:
    """Tests for JSON formatting."""

    def test_format_is_valid_json(self, output):
        data = json.loads(format_json(output))
        assert data["status"] == "complete"
        assert len(data["timetable"]["entries"]) == 2

    def test_indent(self, output):
        assert "\n" not in JSONFormatter(indent=None).format(output)

    def test_entries_only(self, output):
        entries = json.loads(JSONFormatter().format_entries_only(output))
        assert [e["courseId"] for e in entries] == ["CS101", "CS102"]


class TestCSVFormatter:
    """Tests for CSV formatting."""

    def test_header_and_rows(self, output):
        rows = list(csv.reader(StringIO(format_csv(output))))
        assert rows[0] == CSVFormatter.DEFAULT_COLUMNS
        assert len(rows) == 3
        assert rows[1][:3] == ["Day 1", "9:00-10:30", "CS101"]

    def test_custom_columns(self, output):
        rows = list(csv.reader(StringIO(format_csv(output, columns=["course_id", "room_id"]))))
        assert rows == [["course_id", "room_id"], ["CS101", "R1"], ["CS102", "R1"]]

    def test_without_header(self, output):
        text = CSVFormatter(include_header=False).format(output)
        assert not text.startswith("day,")


class TestConsoleFormatter:
    """Tests for console rendering."""

    def test_grid_lists_days_and_periods(self, output):
        text = ConsoleFormatter(width=120).format(output)
        assert "Day 1" in text
        assert "Day 2" in text
        assert "9:00-10:30" in text
        assert "11:00-12:30" in text
        assert "CS101" in text
        assert "COMPLETE" in text

    def test_failures_listed(self):
        request = make_request(["A", "B"], {"A": ["F1"], "B": ["F1"]}, days=1, periods_per_day=1)
        with pytest.warns(UserWarning):
            result = schedule(request)
        text = ConsoleFormatter(width=120).format(build(result))
        assert "Failed courses (1)" in text
        assert "B" in text


class TestEntityViews:
    """Tests for single faculty, room and day views."""

    def test_faculty_view(self, output):
        text = format_faculty_view(output, "F2")
        assert "CS102" in text
        assert "CS101" not in text

    def test_unknown_faculty(self, output):
        assert format_faculty_view(output, "F9") == "No schedule found for faculty: F9"

    def test_room_view(self, output):
        assert "CS101" in format_room_view(output, "R1")

    def test_day_view(self, output):
        text = format_day_view(output, 1)
        assert "Day 2" in text
        assert "CS102" in text

    def test_empty_day(self, output):
        assert format_day_view(output, 7) == "No sessions on Day 8"


class TestFileOutput:
    """Tests for saving output."""

    def test_save_json(self, output, tmp_path):
        path = tmp_path / "timetable.json"
        save_json(output, path)
        restored = ScheduleOutput.model_validate(json.loads(path.read_text()))
        assert restored.timetable == output.timetable

    def test_save_csv(self, output, tmp_path):
        path = tmp_path / "timetable.csv"
        save_csv(output, path)
        assert path.read_text().startswith("day,time,course_id")
