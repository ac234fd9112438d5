"""
Result builder for converting a scheduling run to output format.

This module flattens the Grid of a ScheduleResult into the external
Timetable, builds the Summary (with the failed courses a caller must act
on) and the pre-computed views by faculty, room and day.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable

from ..scheduler import SessionState
from .metrics import compute_load_metrics
from .schema import (
    CourseFailure,
    DaySchedule,
    EntitySchedule,
    OutputStatus,
    ScheduleOutput,
    Summary,
    Timetable,
    TimetableEntry,
    TimetableViews,
)
from .timeslots import day_label, period_label

if TYPE_CHECKING:
    from schedulo.data.models import ScheduleRequest
    from schedulo.grid import Grid, Slot
    from schedulo.scheduler import ScheduleResult


# =============================================================================
# Helper Functions
# =============================================================================

def slot_to_entry(slot: Slot, program: str, department: str) -> TimetableEntry:
    """Convert one grid Slot to a timetable entry."""
    return TimetableEntry(
        day=day_label(slot.day),
        day_index=slot.day,
        period=slot.period,
        time=period_label(slot.period),
        course_id=slot.course.id,
        course_name=slot.course.name,
        faculty_id=slot.faculty.id,
        faculty=slot.faculty.name,
        room_id=slot.room.id,
        room=slot.room.display_name,
        credits=slot.course.credits,
        program=program,
        department=department,
        pinned=slot.pinned,
    )


def build_timetable(grid: Grid, program: str, department: str) -> Timetable:
    """Flatten a grid into a timetable ordered by (day, period, room ID)."""
    return Timetable(
        program=program,
        department=department,
        days=grid.days,
        periods_per_day=grid.periods_per_day,
        entries=[slot_to_entry(slot, program, department) for slot in grid.slots],
    )


def group_entries(entries: Iterable[TimetableEntry], key: str) -> dict:
    """Group entries by an attribute, keeping their order."""
    result: dict = {}
    for entry in entries:
        result.setdefault(getattr(entry, key), []).append(entry)
    return result


# =============================================================================
# Result Builder
# =============================================================================

class ResultBuilder:
    """
    Builds ScheduleOutput from a finished (or abandoned) scheduling run.

    Usage:
        result = Scheduler(request).run()
        output = ResultBuilder().build(result)
    """

    def __init__(self, include_timestamp: bool = True):
        self.include_timestamp = include_timestamp

    def build(self, result: ScheduleResult) -> ScheduleOutput:
        """
        Build the complete output of a run.

        Args:
            result: ScheduleResult returned by the scheduler

        Returns:
            ScheduleOutput with timetable, summary, views and metrics
        """
        request = result.request
        timetable = build_timetable(result.grid, request.program, request.department)
        summary = self._build_summary(result)

        return ScheduleOutput(
            status=self._get_status(summary),
            solve_time_ms=result.elapsed_ms,
            generated_at=(
                datetime.now(timezone.utc).isoformat(timespec="seconds")
                if self.include_timestamp else None
            ),
            timetable=timetable,
            summary=summary,
            views=self._create_views(timetable.entries, request),
            metrics=compute_load_metrics(result.grid, request),
        )

    def _get_status(self, summary: Summary) -> OutputStatus:
        if summary.total_courses == 0:
            return OutputStatus.EMPTY
        if summary.failed_count == 0:
            return OutputStatus.COMPLETE
        if summary.placed_count == 0 and summary.sessions_placed == 0:
            return OutputStatus.FAILED
        return OutputStatus.PARTIAL

    def _build_summary(self, result: ScheduleResult) -> Summary:
        request = result.request
        failures = []
        for course_id, reason in result.failures.items():
            course = request.get_course(course_id)
            units = [u for u in result.units if u.course.id == course_id]
            failures.append(CourseFailure(
                course_id=course_id,
                course_name=course.name,
                reason=reason,
                sessions_placed=sum(1 for u in units if u.state == SessionState.PLACED),
                sessions_required=course.sessions,
            ))

        sessions_placed = sum(1 for u in result.units if u.state == SessionState.PLACED)
        sessions_failed = sum(1 for u in result.units if u.state == SessionState.FAILED)

        return Summary(
            placed_count=len(result.placed_course_ids),
            failed_count=len(result.failed_course_ids),
            failed_course_ids=result.failed_course_ids,
            total_courses=len(request.scheduled_courses),
            sessions_placed=sessions_placed,
            sessions_failed=sessions_failed,
            carried_over=result.carried_over,
            conflicts_avoided=result.conflicts_avoided,
            failures=failures,
            notes=self._build_notes(result, failures),
        )

    def _build_notes(self, result: ScheduleResult, failures: list[CourseFailure]) -> list[str]:
        """Plain-language lines describing what the run decided."""
        request = result.request
        notes = []

        ignored = len(request.courses) - len(request.scheduled_courses)
        if ignored:
            notes.append(
                f"{ignored} course(s) outside {request.program}/{request.department} were ignored"
            )
        pinned = sum(1 for slot in result.grid if slot.pinned)
        if pinned:
            notes.append(f"{pinned} pinned session(s) kept as given")
        if result.carried_over:
            notes.append(
                f"{result.carried_over} session(s) moved off their preferred day to avoid a clash"
            )
        if result.options.single_session_per_period:
            notes.append("At most one class per period (single student group)")
        else:
            shared = sum(
                1 for day in range(result.grid.days) for period in range(result.grid.periods_per_day)
                if result.grid.cell_count(day, period) > 1
            )
            if shared:
                notes.append(
                    f"{shared} period(s) hold parallel classes; one student group cannot attend "
                    "all of them unless single-session-per-period is set"
                )
        for failure in failures:
            notes.append(f"{failure.course_id} needs manual scheduling: {failure.reason}")
        return notes

    def _create_views(
        self,
        entries: list[TimetableEntry],
        request: ScheduleRequest,
    ) -> TimetableViews:
        """Create pre-computed views from entries."""
        by_faculty = {}
        for faculty_id, faculty_entries in sorted(group_entries(entries, "faculty_id").items()):
            by_faculty[faculty_id] = EntitySchedule(
                id=faculty_id,
                name=request.get_faculty(faculty_id).name,
                entries=faculty_entries,
                by_day=group_entries(faculty_entries, "day_index"),
            )

        by_room = {}
        for room_id, room_entries in sorted(group_entries(entries, "room_id").items()):
            by_room[room_id] = EntitySchedule(
                id=room_id,
                name=request.get_room(room_id).display_name,
                entries=room_entries,
                by_day=group_entries(room_entries, "day_index"),
            )

        by_day = {}
        for day, day_entries in sorted(group_entries(entries, "day_index").items()):
            by_day[day] = DaySchedule(day_index=day, day=day_label(day), entries=day_entries)

        return TimetableViews(by_faculty=by_faculty, by_room=by_room, by_day=by_day)


# =============================================================================
# Convenience Functions
# =============================================================================

def build(result: ScheduleResult, include_timestamp: bool = True) -> ScheduleOutput:
    """Build output for a scheduling run."""
    return ResultBuilder(include_timestamp=include_timestamp).build(result)


def build_to_json(result: ScheduleResult, indent: int = 2) -> str:
    """Build output and serialize to JSON."""
    return build(result).to_json(indent=indent)
