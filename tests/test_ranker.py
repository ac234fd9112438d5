"""Tests for candidate ranking."""

from __future__ import annotations

import pytest

from schedulo.constraints import ConstraintChecker
from schedulo.data.models import Course, Eligibility, Faculty, Room
from schedulo.grid import Grid, Slot
from schedulo.ranker import Candidate, CandidateRanker, rank_candidates


@pytest.fixture
def course() -> Course:
    return Course(id="CS101", name="Intro", program="B.Tech", department="CSE")


@pytest.fixture
def faculty() -> list[Faculty]:
    return [Faculty(id="F2", name="Dr. Iyer"), Faculty(id="F1", name="Dr. Rao")]


@pytest.fixture
def rooms() -> list[Room]:
    return [Room(id="R2"), Room(id="R1")]


@pytest.fixture
def ranker(faculty, rooms) -> CandidateRanker:
    checker = ConstraintChecker([
        Eligibility(faculty_id="F1", course_id="CS101"),
        Eligibility(faculty_id="F2", course_id="CS101"),
    ])
    return CandidateRanker(checker, {"CS101": faculty}, rooms)


def as_tuples(candidates) -> list[tuple[str, str, int, int]]:
    return [(c.faculty.id, c.room.id, c.day, c.period) for c in candidates]


class TestOrdering:
    """Tests for the tie-break chain."""

    def test_empty_grid_order(self, ranker, course):
        grid = Grid(2, 2)
        ranked = as_tuples(ranker.rank(grid, course))
        assert len(ranked) == 2 * 2 * 2 * 2
        # Lowest room, then day, then period, then faculty
        assert ranked[:4] == [
            ("F1", "R1", 0, 0),
            ("F2", "R1", 0, 0),
            ("F1", "R1", 0, 1),
            ("F2", "R1", 0, 1),
        ]

    def test_prefers_least_loaded_day(self, ranker, course, rooms):
        grid = Grid(2, 1)
        other = Course(id="CS999", name="Other")
        grid.add(Slot(0, 0, other, Faculty(id="F9", name="X"), Room(id="R9")))
        best = next(ranker.rank(grid, course))
        assert best.day == 1

    def test_prefers_least_loaded_faculty(self, ranker, course):
        grid = Grid(2, 2)
        other = Course(id="CS999", name="Other")
        grid.add(Slot(0, 0, other, Faculty(id="F1", name="Dr. Rao"), Room(id="R9")))
        grid.add(Slot(1, 0, Course(id="CS998", name="Other"), Faculty(id="F8", name="Y"), Room(id="R8")))
        best = next(ranker.rank(grid, course))
        assert best.faculty.id == "F2"

    def test_identical_inputs_identical_order(self, ranker, course):
        first = as_tuples(ranker.rank(Grid(3, 3), course))
        second = as_tuples(ranker.rank(Grid(3, 3), course))
        assert first == second


class TestFiltering:
    """Tests for candidate filtering."""

    def test_only_feasible_candidates(self, ranker, course):
        grid = Grid(1, 2)
        grid.add(Slot(0, 0, Course(id="CS999", name="Other"), Faculty(id="F1", name="Dr. Rao"), Room(id="R1")))
        ranked = as_tuples(ranker.rank(grid, course))
        assert ("F1", "R1", 0, 0) not in ranked
        assert ("F1", "R2", 0, 0) not in ranked
        assert ("F2", "R1", 0, 0) not in ranked
        assert ("F2", "R2", 0, 0) in ranked

    def test_days_restriction(self, ranker, course):
        ranked = ranker.rank(Grid(3, 1), course, days=[2])
        assert {c.day for c in ranked} == {2}

    def test_evaluate_counts_rejections(self, ranker, course):
        grid = Grid(1, 1)
        grid.add(Slot(0, 0, Course(id="CS999", name="Other"), Faculty(id="F1", name="Dr. Rao"), Room(id="R1")))
        ranking = ranker.evaluate(grid, course)
        assert len(ranking.candidates) == 1
        assert ranking.rejected == 3
        assert ranking.best == Candidate(Faculty(id="F2", name="Dr. Iyer"), Room(id="R2"), 0, 0)

    def test_no_eligible_faculty(self, rooms, course):
        ranker = CandidateRanker(ConstraintChecker([]), {}, rooms)
        ranking = ranker.evaluate(Grid(1, 1), course)
        assert not ranking
        assert ranking.best is None

    def test_rank_is_restartable(self, ranker, course):
        grid = Grid(1, 1)
        assert as_tuples(ranker.rank(grid, course)) == as_tuples(ranker.rank(grid, course))

    def test_rank_candidates_wrapper(self, faculty, rooms, course):
        checker = ConstraintChecker([Eligibility(faculty_id="F1", course_id="CS101")])
        ranked = as_tuples(rank_candidates(Grid(1, 1), course, checker, faculty, rooms))
        assert ranked == [("F1", "R1", 0, 0), ("F1", "R2", 0, 0)]
