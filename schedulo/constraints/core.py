"""Hard constraints every timetable must satisfy.

Each predicate answers one invariant for a candidate placement against the
grid's indices. None of them mutate the grid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schedulo.data.models import Course, Faculty, Room
    from schedulo.grid import Grid


def within_grid(grid: Grid, day: int, period: int) -> bool:
    """The placement references an existing day and period."""
    return grid.in_range(day, period)


def faculty_is_free(grid: Grid, day: int, period: int, faculty: Faculty) -> bool:
    """
    A faculty member teaches at most one class per day-period.
    """
    return not grid.is_faculty_busy(day, period, faculty.id)


def room_is_free(grid: Grid, day: int, period: int, room: Room) -> bool:
    """
    A room hosts at most one class per day-period.
    """
    return not grid.is_room_busy(day, period, room.id)


def course_not_on_day(grid: Grid, day: int, course: Course) -> bool:
    """
    A course appears at most once per day.
    """
    return not grid.has_course_on_day(day, course.id)


def faculty_is_eligible(
    eligible_pairs: frozenset[tuple[str, str]],
    course: Course,
    faculty: Faculty,
) -> bool:
    """The faculty member is explicitly assigned to the course."""
    return (faculty.id, course.id) in eligible_pairs


def period_is_empty(grid: Grid, day: int, period: int) -> bool:
    """
    Nothing else runs at (day, period).

    Only enforced when the student group of a program/department may not
    attend two classes at once.
    """
    return grid.cell_count(day, period) == 0
