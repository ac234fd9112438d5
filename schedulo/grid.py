"""
The day x period grid being filled by one scheduling run.

Alongside the cells the grid keeps lookup indices so that every hard
constraint can be answered without rescanning placed slots:

- busy faculty per (day, period)
- busy rooms per (day, period)
- courses per day
- session counts per day and per faculty member (used by the ranker)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator

from .data.models import Course, Faculty, Room


@dataclass(frozen=True)
class Slot:
    """One scheduled session of one course."""
    day: int
    period: int
    course: Course
    faculty: Faculty
    room: Room
    pinned: bool = False

    @property
    def sort_key(self) -> tuple[int, int, str]:
        return (self.day, self.period, self.room.id)


class Grid:
    """
    A ``days x periods_per_day`` table of cells.

    Each cell holds the slots running in that period, at most one per room.
    Only the Scheduler calls ``add``; everything else reads.
    """

    def __init__(self, days: int, periods_per_day: int):
        if days < 1 or periods_per_day < 1:
            raise ValueError(f"Grid needs at least one day and one period, got {days}x{periods_per_day}")

        self.days = days
        self.periods_per_day = periods_per_day

        self._cells: list[list[list[Slot]]] = [
            [[] for _ in range(periods_per_day)] for _ in range(days)
        ]
        self._slots: list[Slot] = []

        # Indices
        self._busy_faculty: set[tuple[int, int, str]] = set()
        self._busy_rooms: set[tuple[int, int, str]] = set()
        self._course_days: set[tuple[int, str]] = set()
        self._day_load: list[int] = [0] * days
        self._faculty_load: Counter[str] = Counter()
        self._course_load: Counter[str] = Counter()

    # -------------------------------------------------------------------------
    # Index Queries
    # -------------------------------------------------------------------------

    def in_range(self, day: int, period: int) -> bool:
        return 0 <= day < self.days and 0 <= period < self.periods_per_day

    def is_faculty_busy(self, day: int, period: int, faculty_id: str) -> bool:
        return (day, period, faculty_id) in self._busy_faculty

    def is_room_busy(self, day: int, period: int, room_id: str) -> bool:
        return (day, period, room_id) in self._busy_rooms

    def has_course_on_day(self, day: int, course_id: str) -> bool:
        return (day, course_id) in self._course_days

    def cell(self, day: int, period: int) -> tuple[Slot, ...]:
        """Slots running at (day, period)."""
        return tuple(self._cells[day][period])

    def cell_count(self, day: int, period: int) -> int:
        return len(self._cells[day][period])

    def day_load(self, day: int) -> int:
        """Sessions scheduled on a day."""
        return self._day_load[day]

    def faculty_load(self, faculty_id: str) -> int:
        """Sessions assigned to a faculty member so far."""
        return self._faculty_load[faculty_id]

    def course_load(self, course_id: str) -> int:
        """Sessions of a course placed so far."""
        return self._course_load[course_id]

    def course_days(self, course_id: str) -> list[int]:
        """Days already holding a session of the course."""
        return [d for d in range(self.days) if (d, course_id) in self._course_days]

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, slot: Slot) -> None:
        """
        Commit a slot and update every index.

        Raises:
            ValueError: If the slot is out of range or collides on faculty,
                room or course-day. Callers check ``ConstraintChecker.can_place``
                first; this only guards the indices themselves.
        """
        day, period = slot.day, slot.period
        if not self.in_range(day, period):
            raise ValueError(f"Slot ({day}, {period}) is outside the {self.days}x{self.periods_per_day} grid")
        if self.is_faculty_busy(day, period, slot.faculty.id):
            raise ValueError(f"Faculty {slot.faculty.id} already teaches at ({day}, {period})")
        if self.is_room_busy(day, period, slot.room.id):
            raise ValueError(f"Room {slot.room.id} is already used at ({day}, {period})")
        if self.has_course_on_day(day, slot.course.id):
            raise ValueError(f"Course {slot.course.id} already runs on day {day}")

        self._cells[day][period].append(slot)
        self._slots.append(slot)

        self._busy_faculty.add((day, period, slot.faculty.id))
        self._busy_rooms.add((day, period, slot.room.id))
        self._course_days.add((day, slot.course.id))
        self._day_load[day] += 1
        self._faculty_load[slot.faculty.id] += 1
        self._course_load[slot.course.id] += 1

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def slots(self) -> list[Slot]:
        """All slots ordered by day, period, then room ID."""
        return sorted(self._slots, key=lambda s: s.sort_key)

    @property
    def capacity(self) -> int:
        """Number of (day, period) cells."""
        return self.days * self.periods_per_day

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def __repr__(self) -> str:
        return f"Grid(days={self.days}, periods_per_day={self.periods_per_day}, slots={len(self)})"
