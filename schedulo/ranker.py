"""
Candidate ranking for course placement.

For a course that needs a session, the ranker enumerates every
(faculty, room, day, period) combination of its eligible faculty, all rooms
and the grid cells, keeps the ones the ConstraintChecker accepts and orders
them by a fixed tie-break chain:

    1. day with the fewest sessions scheduled so far
    2. faculty member with the fewest sessions so far
    3. lowest room ID
    4. lowest day index
    5. lowest period index
    6. lowest faculty ID

The chain is total, so identical inputs always give an identical order.
Nothing is cached between calls: every ranking reflects the grid as it is
when the ranking starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from .constraints import ConstraintChecker
    from .data.models import Course, Faculty, Room
    from .grid import Grid


@dataclass(frozen=True)
class Candidate:
    """A feasible placement for one session."""
    faculty: Faculty
    room: Room
    day: int
    period: int


@dataclass
class Ranking:
    """Feasible candidates in rank order, plus how many were rejected."""
    candidates: list[Candidate]
    rejected: int

    @property
    def best(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None

    def __bool__(self) -> bool:
        return bool(self.candidates)


def candidate_sort_key(grid: Grid, candidate: Candidate) -> tuple[int, int, str, int, int, str]:
    """Position of a candidate in the tie-break chain."""
    return (
        grid.day_load(candidate.day),
        grid.faculty_load(candidate.faculty.id),
        candidate.room.id,
        candidate.day,
        candidate.period,
        candidate.faculty.id,
    )


class CandidateRanker:
    """
    Ranks placements for courses against a grid snapshot.

    Args:
        checker: Hard-constraint checker for the run
        eligible_faculty: Course ID to eligible faculty members
        rooms: All rooms available to the run
    """

    def __init__(
        self,
        checker: ConstraintChecker,
        eligible_faculty: Mapping[str, Sequence[Faculty]],
        rooms: Iterable[Room],
    ):
        self.checker = checker
        self.eligible_faculty = {
            course_id: sorted(faculty, key=lambda f: f.id)
            for course_id, faculty in eligible_faculty.items()
        }
        self.rooms = sorted(rooms, key=lambda r: r.id)

    def faculty_for(self, course: Course) -> list[Faculty]:
        """Eligible faculty for a course, ordered by ID."""
        return self.eligible_faculty.get(course.id, [])

    def evaluate(
        self,
        grid: Grid,
        course: Course,
        days: Optional[Iterable[int]] = None,
    ) -> Ranking:
        """
        Rank every feasible placement for a course.

        Args:
            grid: Current grid (read only)
            course: Course needing a session
            days: Restrict to these day indices (default: every day)

        Returns:
            Ranking with sorted candidates and the rejected count
        """
        day_range = range(grid.days) if days is None else sorted(set(days))
        feasible: list[Candidate] = []
        rejected = 0

        for faculty in self.faculty_for(course):
            for room in self.rooms:
                for day in day_range:
                    for period in range(grid.periods_per_day):
                        if self.checker.can_place(grid, day, period, course, faculty, room):
                            feasible.append(Candidate(faculty, room, day, period))
                        else:
                            rejected += 1

        feasible.sort(key=lambda c: candidate_sort_key(grid, c))
        return Ranking(candidates=feasible, rejected=rejected)

    def rank(
        self,
        grid: Grid,
        course: Course,
        days: Optional[Iterable[int]] = None,
    ) -> Iterator[Candidate]:
        """
        Lazily yield feasible placements in rank order.

        Nothing is computed until the first candidate is requested. Calling
        again starts a fresh ranking.
        """
        yield from self.evaluate(grid, course, days).candidates


def rank_candidates(
    grid: Grid,
    course: Course,
    checker: ConstraintChecker,
    faculty: Sequence[Faculty],
    rooms: Iterable[Room],
    days: Optional[Iterable[int]] = None,
) -> Iterator[Candidate]:
    """Convenience wrapper ranking one course without building a ranker first."""
    ranker = CandidateRanker(checker, {course.id: faculty}, rooms)
    return ranker.rank(grid, course, days)
