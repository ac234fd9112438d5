"""Shared fixtures and request builders."""

from __future__ import annotations

from typing import Any

import pytest

from schedulo.data.models import ScheduleRequest


def make_request(
    courses: list[str] | list[dict[str, Any]],
    eligibility: dict[str, list[str]],
    rooms: list[str] | list[dict[str, Any]] = ("R1",),
    days: int = 5,
    periods_per_day: int = 4,
    pinned: list[dict[str, Any]] | None = None,
    extra_faculty: list[str] = (),
) -> ScheduleRequest:
    """
    Build a B.Tech/CSE request from short-hand ids.

    ``eligibility`` maps course id to its eligible faculty ids; every faculty
    id mentioned there (or in ``extra_faculty``) gets a Faculty entry.
    """
    course_data = []
    for course in courses:
        if isinstance(course, str):
            course = {"id": course}
        course_data.append({
            "name": f"Course {course['id']}",
            "credits": 3,
            "program": "B.Tech",
            "department": "CSE",
            **course,
        })

    faculty_ids = sorted({f for ids in eligibility.values() for f in ids} | set(extra_faculty))
    room_data = [{"id": r} if isinstance(r, str) else r for r in rooms]

    return ScheduleRequest(
        program="B.Tech",
        department="CSE",
        days=days,
        periods_per_day=periods_per_day,
        courses=course_data,
        faculty=[{"id": f, "name": f"Dr. {f}"} for f in faculty_ids],
        eligibility=[
            {"faculty_id": f, "course_id": c}
            for c, ids in eligibility.items()
            for f in ids
        ],
        rooms=room_data,
        pinned=pinned or [],
    )


@pytest.fixture
def request_data() -> dict:
    """The single-course request in camelCase, as the web client sends it."""
    return {
        "program": "B.Tech",
        "department": "CSE",
        "days": 5,
        "periodsPerDay": 4,
        "courses": [
            {"id": "CS101", "name": "Intro", "credits": 3, "program": "B.Tech", "department": "CSE"},
        ],
        "faculty": [{"id": "F1", "name": "Dr. Rao", "department": "CSE"}],
        "eligibility": [{"facultyId": "F1", "courseId": "CS101"}],
        "rooms": [{"id": "R1", "capacity": 30, "type": "classroom"}],
    }


@pytest.fixture
def single_course_request() -> ScheduleRequest:
    return make_request(["CS101"], {"CS101": ["F1"]}, rooms=["R1"])


@pytest.fixture
def carry_over_request() -> ScheduleRequest:
    """
    X's only faculty (F1) is booked through day 0, the least-loaded day once
    pins are in, so X is deferred there and carried over to day 1.
    """
    return make_request(
        ["P1", "P2", "P3", "P4", "P5", "X"],
        {"P1": ["F1"], "P2": ["F1"], "X": ["F1"], "P3": ["F2"], "P5": ["F2"], "P4": ["F3"]},
        rooms=["R1", "R2"],
        days=2,
        periods_per_day=2,
        pinned=[
            {"course_id": "P1", "day": 0, "period": 0, "faculty_id": "F1", "room_id": "R1"},
            {"course_id": "P2", "day": 0, "period": 1, "faculty_id": "F1", "room_id": "R1"},
            {"course_id": "P3", "day": 1, "period": 0, "faculty_id": "F2", "room_id": "R1"},
            {"course_id": "P4", "day": 1, "period": 0, "faculty_id": "F3", "room_id": "R2"},
            {"course_id": "P5", "day": 1, "period": 1, "faculty_id": "F2", "room_id": "R1"},
        ],
    )
