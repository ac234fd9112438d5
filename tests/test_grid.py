"""Tests for the grid and its indices."""

from __future__ import annotations

import pytest

from schedulo.data.models import Course, Faculty, Room
from schedulo.grid import Grid, Slot


@pytest.fixture
def cs101() -> Course:
    return Course(id="CS101", name="Intro", program="B.Tech", department="CSE")


@pytest.fixture
def cs102() -> Course:
    return Course(id="CS102", name="Data Structures", program="B.Tech", department="CSE")


@pytest.fixture
def f1() -> Faculty:
    return Faculty(id="F1", name="Dr. Rao")


@pytest.fixture
def f2() -> Faculty:
    return Faculty(id="F2", name="Dr. Iyer")


@pytest.fixture
def r1() -> Room:
    return Room(id="R1")


@pytest.fixture
def r2() -> Room:
    return Room(id="R2")


class TestGridShape:
    """Tests for grid dimensions."""

    def test_dimensions(self):
        grid = Grid(3, 2)
        assert grid.days == 3
        assert grid.periods_per_day == 2
        assert grid.capacity == 6
        assert len(grid) == 0

    @pytest.mark.parametrize("days,periods", [(0, 1), (1, 0)])
    def test_empty_grid_rejected(self, days, periods):
        with pytest.raises(ValueError):
            Grid(days, periods)

    def test_in_range(self):
        grid = Grid(2, 3)
        assert grid.in_range(1, 2)
        assert not grid.in_range(2, 0)
        assert not grid.in_range(0, 3)
        assert not grid.in_range(-1, 0)


class TestGridAdd:
    """Tests for committing slots."""

    def test_add_updates_indices(self, cs101, f1, r1):
        grid = Grid(2, 2)
        grid.add(Slot(1, 0, cs101, f1, r1))

        assert grid.is_faculty_busy(1, 0, "F1")
        assert grid.is_room_busy(1, 0, "R1")
        assert grid.has_course_on_day(1, "CS101")
        assert not grid.is_faculty_busy(1, 1, "F1")
        assert grid.day_load(1) == 1
        assert grid.day_load(0) == 0
        assert grid.faculty_load("F1") == 1
        assert grid.course_load("CS101") == 1
        assert grid.course_days("CS101") == [1]
        assert grid.cell_count(1, 0) == 1

    def test_cell_holds_one_slot_per_room(self, cs101, cs102, f1, f2, r1, r2):
        grid = Grid(1, 1)
        grid.add(Slot(0, 0, cs101, f1, r1))
        grid.add(Slot(0, 0, cs102, f2, r2))
        assert grid.cell_count(0, 0) == 2
        assert [s.room.id for s in grid.cell(0, 0)] == ["R1", "R2"]

    def test_out_of_range_rejected(self, cs101, f1, r1):
        with pytest.raises(ValueError, match="outside"):
            Grid(1, 1).add(Slot(1, 0, cs101, f1, r1))

    def test_faculty_collision_rejected(self, cs101, cs102, f1, r1, r2):
        grid = Grid(1, 1)
        grid.add(Slot(0, 0, cs101, f1, r1))
        with pytest.raises(ValueError, match="Faculty F1"):
            grid.add(Slot(0, 0, cs102, f1, r2))

    def test_room_collision_rejected(self, cs101, cs102, f1, f2, r1):
        grid = Grid(1, 1)
        grid.add(Slot(0, 0, cs101, f1, r1))
        with pytest.raises(ValueError, match="Room R1"):
            grid.add(Slot(0, 0, cs102, f2, r1))

    def test_course_same_day_rejected(self, cs101, f1, f2, r1, r2):
        grid = Grid(1, 2)
        grid.add(Slot(0, 0, cs101, f1, r1))
        with pytest.raises(ValueError, match="already runs on day 0"):
            grid.add(Slot(0, 1, cs101, f2, r2))


class TestGridViews:
    """Tests for slot ordering."""

    def test_slots_sorted_by_day_period_room(self, cs101, cs102, f1, f2, r1, r2):
        grid = Grid(2, 2)
        grid.add(Slot(1, 0, cs101, f1, r1))
        grid.add(Slot(0, 1, cs102, f2, r2))
        grid.add(Slot(0, 1, cs101, f1, r1))

        assert [(s.day, s.period, s.room.id) for s in grid.slots] == [
            (0, 1, "R1"),
            (0, 1, "R2"),
            (1, 0, "R1"),
        ]
        assert list(grid) == grid.slots
