"""
Output schema for generated timetables.

This module defines the JSON-serializable result of a scheduling run: the
flat timetable the persistence layer stores, the summary callers must check
for failed courses, and pre-computed views by faculty, room and day.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class OutputStatus(str, Enum):
    """Overall outcome of a run."""
    COMPLETE = "complete"   # every course placed
    PARTIAL = "partial"     # some courses failed
    FAILED = "failed"       # nothing could be placed
    EMPTY = "empty"         # no courses to schedule


# =============================================================================
# Timetable
# =============================================================================

class TimetableEntry(BaseModel):
    """One scheduled session."""
    day: str                                    # 'Day 1'
    day_index: int = Field(alias="dayIndex")
    period: int
    time: str                                   # '9:00-10:30'
    course_id: str = Field(alias="courseId")
    course_name: str = Field(alias="courseName")
    faculty_id: str = Field(alias="facultyId")
    faculty: str
    room_id: str = Field(alias="roomId")
    room: str
    credits: int
    program: str
    department: str
    pinned: bool = False

    model_config = {"populate_by_name": True}


class Timetable(BaseModel):
    """The timetable of one program/department."""
    program: str
    department: str
    days: int
    periods_per_day: int = Field(alias="periodsPerDay")
    entries: list[TimetableEntry]

    model_config = {"populate_by_name": True}


# =============================================================================
# Summary
# =============================================================================

class CourseFailure(BaseModel):
    """A course with sessions left unplaced."""
    course_id: str = Field(alias="courseId")
    course_name: str = Field(alias="courseName")
    reason: str
    sessions_placed: int = Field(alias="sessionsPlaced")
    sessions_required: int = Field(alias="sessionsRequired")

    model_config = {"populate_by_name": True}


class Summary(BaseModel):
    """
    Counts of what was and was not placed.

    A non-empty ``failed_course_ids`` needs human follow-up.
    """
    placed_count: int = Field(alias="placedCount")
    failed_count: int = Field(alias="failedCount")
    failed_course_ids: list[str] = Field(default_factory=list, alias="failedCourseIds")
    total_courses: int = Field(default=0, alias="totalCourses")
    sessions_placed: int = Field(default=0, alias="sessionsPlaced")
    sessions_failed: int = Field(default=0, alias="sessionsFailed")
    carried_over: int = Field(default=0, alias="carriedOver")
    conflicts_avoided: int = Field(default=0, alias="conflictsAvoided")
    failures: list[CourseFailure] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# =============================================================================
# Views
# =============================================================================

class DaySchedule(BaseModel):
    """Schedule for a single day."""
    day_index: int = Field(alias="dayIndex")
    day: str
    entries: list[TimetableEntry]

    model_config = {"populate_by_name": True}


class EntitySchedule(BaseModel):
    """Schedule for a faculty member or room."""
    id: str
    name: str
    entries: list[TimetableEntry]
    by_day: dict[int, list[TimetableEntry]] = Field(
        default_factory=dict,
        alias="byDay"
    )

    model_config = {"populate_by_name": True}


class TimetableViews(BaseModel):
    """Pre-computed views of the timetable for convenience."""
    by_faculty: dict[str, EntitySchedule] = Field(
        default_factory=dict,
        alias="byFaculty"
    )
    by_room: dict[str, EntitySchedule] = Field(
        default_factory=dict,
        alias="byRoom"
    )
    by_day: dict[int, DaySchedule] = Field(
        default_factory=dict,
        alias="byDay"
    )

    model_config = {"populate_by_name": True}


# =============================================================================
# Metrics
# =============================================================================

class LoadMetrics(BaseModel):
    """How evenly the placed sessions use days, faculty and rooms."""
    day_load: dict[int, int] = Field(default_factory=dict, alias="dayLoad")
    faculty_load: dict[str, int] = Field(default_factory=dict, alias="facultyLoad")
    room_utilization: dict[str, float] = Field(default_factory=dict, alias="roomUtilization")
    cell_utilization: float = Field(default=0.0, alias="cellUtilization")
    day_balance_std_dev: float = Field(default=0.0, alias="dayBalanceStdDev")

    model_config = {"populate_by_name": True}


# =============================================================================
# Complete Output
# =============================================================================

class ScheduleOutput(BaseModel):
    """Complete output of a scheduling run."""
    status: OutputStatus
    solve_time_ms: int = Field(alias="solveTimeMs")
    generated_at: Optional[str] = Field(default=None, alias="generatedAt")
    timetable: Timetable
    summary: Summary
    views: TimetableViews = Field(default_factory=TimetableViews)
    metrics: LoadMetrics = Field(default_factory=LoadMetrics)

    model_config = {"populate_by_name": True}

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(by_alias=True, mode="json")
