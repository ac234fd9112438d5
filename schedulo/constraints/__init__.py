"""
Constraint checking for the greedy scheduler.

The checker decides whether placing a course at (day, period) with a given
faculty member and room keeps every hard constraint satisfied, given the
grid built so far. It is pure: the grid is only read.

Usage:
    checker = ConstraintChecker(request.relevant_eligibility)
    if checker.can_place(grid, day, period, course, faculty, room):
        grid.add(Slot(day, period, course, faculty, room))
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable

from .core import (
    within_grid,
    faculty_is_free,
    room_is_free,
    course_not_on_day,
    faculty_is_eligible,
    period_is_empty,
)
from .rooms import (
    RoomSuitability,
    room_fits,
    evaluate_room,
    rooms_for_course,
)

if TYPE_CHECKING:
    from schedulo.data.models import Course, Eligibility, Faculty, Room
    from schedulo.grid import Grid


class Constraint(str, Enum):
    """Hard constraints, named for diagnostics."""
    OUT_OF_RANGE = "out_of_range"
    FACULTY_CLASH = "faculty_clash"
    ROOM_CLASH = "room_clash"
    COURSE_SAME_DAY = "course_same_day"
    NOT_ELIGIBLE = "not_eligible"
    ROOM_CAPACITY = "room_capacity"
    PERIOD_OCCUPIED = "period_occupied"


class ConstraintChecker:
    """
    Evaluates hard constraints for candidate placements.

    Args:
        eligibility: Faculty-to-course assignments for the run
        single_session_per_period: Also forbid two classes in the same
            (day, period), for a student group that attends every course
    """

    def __init__(
        self,
        eligibility: Iterable[Eligibility],
        single_session_per_period: bool = False,
    ):
        self.eligible_pairs: frozenset[tuple[str, str]] = frozenset(
            (row.faculty_id, row.course_id) for row in eligibility
        )
        self.single_session_per_period = single_session_per_period

    def can_place(
        self,
        grid: Grid,
        day: int,
        period: int,
        course: Course,
        faculty: Faculty,
        room: Room,
    ) -> bool:
        """Whether the placement keeps every hard constraint satisfied."""
        if not within_grid(grid, day, period):
            return False
        return (
            faculty_is_eligible(self.eligible_pairs, course, faculty)
            and room_fits(course, room)
            and course_not_on_day(grid, day, course)
            and faculty_is_free(grid, day, period, faculty)
            and room_is_free(grid, day, period, room)
            and (not self.single_session_per_period or period_is_empty(grid, day, period))
        )

    def violations(
        self,
        grid: Grid,
        day: int,
        period: int,
        course: Course,
        faculty: Faculty,
        room: Room,
    ) -> list[Constraint]:
        """Every constraint the placement would break (empty when it fits)."""
        if not within_grid(grid, day, period):
            return [Constraint.OUT_OF_RANGE]

        broken = []
        if not faculty_is_eligible(self.eligible_pairs, course, faculty):
            broken.append(Constraint.NOT_ELIGIBLE)
        if not room_fits(course, room):
            broken.append(Constraint.ROOM_CAPACITY)
        if not course_not_on_day(grid, day, course):
            broken.append(Constraint.COURSE_SAME_DAY)
        if not faculty_is_free(grid, day, period, faculty):
            broken.append(Constraint.FACULTY_CLASH)
        if not room_is_free(grid, day, period, room):
            broken.append(Constraint.ROOM_CLASH)
        if self.single_session_per_period and not period_is_empty(grid, day, period):
            broken.append(Constraint.PERIOD_OCCUPIED)
        return broken


__all__ = [
    "Constraint",
    "ConstraintChecker",
    # Predicates
    "within_grid",
    "faculty_is_free",
    "room_is_free",
    "course_not_on_day",
    "faculty_is_eligible",
    "period_is_empty",
    # Rooms
    "RoomSuitability",
    "room_fits",
    "evaluate_room",
    "rooms_for_course",
]
