"""
Pydantic models for the Schedulo scheduling engine.

Index conventions:
- Days are 0-based internally; day 0 is displayed as "Day 1"
- Periods are 0-based; period 0 is the 9:00-10:30 slot

Entities are frozen value objects. A ScheduleRequest bundles one run's
inputs and validates cross-entity references, raising InvalidInputError
(not pydantic's ValidationError) for the structural problems a caller
must fix before scheduling can start.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import InvalidInputError


# =============================================================================
# Core Entity Models
# =============================================================================

class Course(BaseModel):
    """A course of the program/department being scheduled."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, description="Unique identifier")
    name: str = Field(min_length=1, description="Course name")
    credits: int = Field(default=0, ge=0, description="Credit count")
    program: Optional[str] = Field(default=None, description="Program, e.g. 'B.Tech'")
    department: Optional[str] = Field(default=None, description="Department within the program")
    sessions: int = Field(default=1, ge=1, le=14, description="Sessions per week, each on its own day")
    expected_enrollment: Optional[int] = Field(default=None, ge=1, description="Class size hint")

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Faculty(BaseModel):
    """A faculty member."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, description="Unique identifier")
    name: str = Field(min_length=1, description="Full name")
    department: Optional[str] = Field(default=None, description="Home department")
    email: Optional[str] = Field(default=None, description="Email address")

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Room(BaseModel):
    """A room that can host one class per period."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, description="Unique identifier")
    name: Optional[str] = Field(default=None, description="Display name")
    capacity: Optional[int] = Field(default=None, ge=1, description="Seats, if known")
    type: str = Field(default="classroom", min_length=1, description="Room type tag")
    features: tuple[str, ...] = Field(default=(), description="Features, e.g. 'projector'")

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def __str__(self) -> str:
        return f"{self.display_name} ({self.type})"


class Eligibility(BaseModel):
    """A faculty member qualified to teach a course."""
    # Assignment rows exported from storage carry their own row id
    model_config = ConfigDict(extra="ignore", frozen=True)

    faculty_id: str = Field(min_length=1)
    course_id: str = Field(min_length=1)


class PinnedSession(BaseModel):
    """A session fixed by the caller before scheduling starts."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    course_id: str = Field(min_length=1)
    day: int = Field(ge=0, description="0-based day index")
    period: int = Field(ge=0, description="0-based period index")
    faculty_id: str = Field(min_length=1)
    room_id: str = Field(min_length=1)


# =============================================================================
# Request Model
# =============================================================================

class ScheduleRequest(BaseModel):
    """
    Everything one scheduling run needs.

    Courses from other programs or departments may be present (the
    persistence layer tends to hand over the whole catalogue); only the
    courses matching ``program``/``department`` are scheduled, and
    eligibility rows for the others are ignored.
    """
    model_config = ConfigDict(extra="forbid")

    program: str = Field(description="Program being scheduled")
    department: str = Field(description="Department being scheduled")
    days: int = Field(description="Number of days in the grid")
    periods_per_day: int = Field(description="Number of periods per day")

    courses: list[Course] = Field(default_factory=list)
    faculty: list[Faculty] = Field(default_factory=list)
    eligibility: list[Eligibility] = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    pinned: list[PinnedSession] = Field(default_factory=list)

    # Lookup caches (populated after validation)
    _course_map: dict[str, Course] = {}
    _faculty_map: dict[str, Faculty] = {}
    _room_map: dict[str, Room] = {}

    def model_post_init(self, __context: Any) -> None:
        """Build lookup maps after model initialization."""
        self._course_map = {c.id: c for c in self.courses}
        self._faculty_map = {f.id: f for f in self.faculty}
        self._room_map = {r.id: r for r in self.rooms}

    @model_validator(mode="after")
    def validate_run_parameters(self) -> "ScheduleRequest":
        """Grid dimensions and the program/department being scheduled."""
        errors: list[str] = []

        if self.days < 1:
            errors.append(f"days must be at least 1 (got {self.days})")
        if self.periods_per_day < 1:
            errors.append(f"periods_per_day must be at least 1 (got {self.periods_per_day})")
        if not self.program.strip():
            errors.append("program is required")
        if not self.department.strip():
            errors.append("department is required")

        if errors:
            raise InvalidInputError(errors)
        return self

    @model_validator(mode="after")
    def validate_no_duplicate_ids(self) -> "ScheduleRequest":
        """Ensure no duplicate IDs within each entity type."""
        errors: list[str] = []

        def check_duplicates(items: list, entity_name: str) -> None:
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    errors.append(f"Duplicate {entity_name} ID: '{item.id}'")
                seen.add(item.id)

        check_duplicates(self.courses, "course")
        check_duplicates(self.faculty, "faculty")
        check_duplicates(self.rooms, "room")

        if errors:
            raise InvalidInputError(errors)
        return self

    @model_validator(mode="after")
    def validate_references(self) -> "ScheduleRequest":
        """Every course is tagged, every eligibility row and pin resolves."""
        errors: list[str] = []

        for course in self.courses:
            if not (course.program or "").strip():
                errors.append(f"Course {course.id}: missing program")
            if not (course.department or "").strip():
                errors.append(f"Course {course.id}: missing department")

        course_ids = {c.id for c in self.courses}
        faculty_ids = {f.id for f in self.faculty}
        room_ids = {r.id for r in self.rooms}

        for row in self.eligibility:
            if row.course_id not in course_ids:
                errors.append(f"Eligibility: unknown course_id '{row.course_id}'")
            if row.faculty_id not in faculty_ids:
                errors.append(f"Eligibility: unknown faculty_id '{row.faculty_id}'")

        eligible_pairs = {(row.faculty_id, row.course_id) for row in self.eligibility}
        for pin in self.pinned:
            label = f"Pinned session {pin.course_id}@{pin.day}/{pin.period}"
            course = next((c for c in self.courses if c.id == pin.course_id), None)
            if course is None:
                errors.append(f"{label}: unknown course_id '{pin.course_id}'")
            elif not self._in_scope(course):
                errors.append(f"{label}: course is not part of {self.program}/{self.department}")
            if pin.faculty_id not in faculty_ids:
                errors.append(f"{label}: unknown faculty_id '{pin.faculty_id}'")
            elif (pin.faculty_id, pin.course_id) not in eligible_pairs:
                errors.append(f"{label}: faculty '{pin.faculty_id}' is not eligible for the course")
            if pin.room_id not in room_ids:
                errors.append(f"{label}: unknown room_id '{pin.room_id}'")
            if pin.day >= self.days:
                errors.append(f"{label}: day {pin.day} is outside the {self.days}-day grid")
            if pin.period >= self.periods_per_day:
                errors.append(
                    f"{label}: period {pin.period} is outside the "
                    f"{self.periods_per_day}-period day"
                )

        if errors:
            raise InvalidInputError(errors)
        return self

    def _in_scope(self, course: Course) -> bool:
        return course.program == self.program and course.department == self.department

    # -------------------------------------------------------------------------
    # Lookup Methods
    # -------------------------------------------------------------------------

    def get_course(self, course_id: str) -> Optional[Course]:
        """Get course by ID."""
        return self._course_map.get(course_id)

    def get_faculty(self, faculty_id: str) -> Optional[Faculty]:
        """Get faculty member by ID."""
        return self._faculty_map.get(faculty_id)

    def get_room(self, room_id: str) -> Optional[Room]:
        """Get room by ID."""
        return self._room_map.get(room_id)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    @property
    def scheduled_courses(self) -> list[Course]:
        """Courses belonging to the requested program and department."""
        return [c for c in self.courses if self._in_scope(c)]

    @property
    def relevant_eligibility(self) -> list[Eligibility]:
        """Eligibility rows for the scheduled courses only."""
        scheduled_ids = {c.id for c in self.scheduled_courses}
        return [row for row in self.eligibility if row.course_id in scheduled_ids]

    def eligible_faculty(self, course_id: str) -> list[Faculty]:
        """Faculty eligible for a course, ordered by ID."""
        faculty_ids = {
            row.faculty_id for row in self.eligibility if row.course_id == course_id
        }
        return sorted(
            (self._faculty_map[fid] for fid in faculty_ids),
            key=lambda f: f.id,
        )

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    @property
    def total_sessions(self) -> int:
        """Sessions requested across the scheduled courses."""
        return sum(c.sessions for c in self.scheduled_courses)

    @property
    def total_cells(self) -> int:
        """Room-period cells in the grid."""
        return self.days * self.periods_per_day * len(self.rooms)

    def summary(self) -> dict[str, Any]:
        """Get a summary of the request."""
        return {
            "program": self.program,
            "department": self.department,
            "days": self.days,
            "periods_per_day": self.periods_per_day,
            "courses": len(self.scheduled_courses),
            "ignored_courses": len(self.courses) - len(self.scheduled_courses),
            "faculty": len(self.faculty),
            "rooms": len(self.rooms),
            "eligibility": len(self.relevant_eligibility),
            "pinned": len(self.pinned),
            "total_sessions": self.total_sessions,
            "total_cells": self.total_cells,
        }
