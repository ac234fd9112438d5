"""Tests for request loading."""

import json

import pytest

from schedulo.data.loader import load_request, parse_request
from schedulo.errors import InvalidInputError


class TestParseRequest:
    """Tests for parsing decoded JSON."""

    def test_camel_case_keys(self, request_data):
        request = parse_request(request_data)
        assert request.periods_per_day == 4
        assert request.eligibility[0].faculty_id == "F1"
        assert request.rooms[0].capacity == 30

    def test_snake_case_keys(self, request_data):
        request_data["periods_per_day"] = request_data.pop("periodsPerDay")
        request = parse_request(request_data)
        assert request.periods_per_day == 4

    def test_faculty_assignments_alias(self, request_data):
        request_data["facultyAssignments"] = request_data.pop("eligibility")
        request = parse_request(request_data)
        assert len(request.eligibility) == 1

    def test_periods_alias(self, request_data):
        request_data["periods"] = request_data.pop("periodsPerDay")
        assert parse_request(request_data).periods_per_day == 4

    def test_defaults_fill_missing_dimensions(self, request_data):
        del request_data["days"]
        del request_data["periodsPerDay"]
        request = parse_request(request_data, default_days=6, default_periods_per_day=3)
        assert (request.days, request.periods_per_day) == (6, 3)

    def test_defaults_do_not_override_given_dimensions(self, request_data):
        request = parse_request(request_data, default_days=6, default_periods_per_day=3)
        assert (request.days, request.periods_per_day) == (5, 4)

    def test_missing_dimensions_without_defaults(self, request_data):
        del request_data["days"]
        with pytest.raises(InvalidInputError, match="days: Field required"):
            parse_request(request_data)

    def test_field_errors_itemized(self, request_data):
        request_data["courses"][0]["credits"] = -2
        del request_data["faculty"][0]["name"]
        with pytest.raises(InvalidInputError) as exc_info:
            parse_request(request_data)
        errors = exc_info.value.errors
        assert any(e.startswith("courses.0.credits") for e in errors)
        assert any(e.startswith("faculty.0.name") for e in errors)

    def test_non_object_rejected(self):
        with pytest.raises(InvalidInputError, match="JSON object"):
            parse_request([1, 2, 3])

    def test_structural_errors_pass_through(self, request_data):
        request_data["eligibility"].append({"facultyId": "F9", "courseId": "CS101"})
        with pytest.raises(InvalidInputError, match="unknown faculty_id 'F9'"):
            parse_request(request_data)


class TestLoadRequest:
    """Tests for loading request files."""

    def test_load_file(self, request_data, tmp_path):
        path = tmp_path / "request.json"
        path.write_text(json.dumps(request_data))
        request = load_request(path)
        assert request.program == "B.Tech"
        assert request.get_course("CS101").name == "Intro"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_request(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(InvalidInputError, match="invalid JSON"):
            load_request(path)
