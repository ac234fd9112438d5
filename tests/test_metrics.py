"""Tests for load metrics."""

import pytest

from schedulo.output.metrics import compute_load_metrics, room_utilization, std_dev
from schedulo.scheduler import schedule

from conftest import make_request


class TestStdDev:
    """Tests for the standard deviation helper."""

    def test_fewer_than_two_values(self):
        assert std_dev([]) == 0.0
        assert std_dev([4]) == 0.0

    def test_even_values(self):
        assert std_dev([2, 2, 2]) == 0.0

    def test_population_std_dev(self):
        assert std_dev([1, 3]) == pytest.approx(1.0)


class TestLoadMetrics:
    """Tests for compute_load_metrics."""

    @pytest.fixture
    def result(self):
        request = make_request(
            ["A", "B"],
            {"A": ["F1"], "B": ["F1"]},
            rooms=["R1", "R2"],
            days=2,
            periods_per_day=2,
            extra_faculty=["F2"],
        )
        return schedule(request)

    def test_day_load(self, result):
        metrics = compute_load_metrics(result.grid, result.request)
        assert metrics.day_load == {0: 1, 1: 1}
        assert metrics.day_balance_std_dev == 0.0

    def test_faculty_load_includes_idle_faculty(self, result):
        metrics = compute_load_metrics(result.grid, result.request)
        assert metrics.faculty_load == {"F1": 2, "F2": 0}

    def test_utilization(self, result):
        metrics = compute_load_metrics(result.grid, result.request)
        assert metrics.room_utilization == {"R1": 50.0, "R2": 0.0}
        assert metrics.cell_utilization == 25.0
        assert room_utilization(result.grid, "R2") == 0.0

    def test_no_rooms(self):
        request = make_request([], {}, rooms=[])
        result = schedule(request)
        metrics = compute_load_metrics(result.grid, request)
        assert metrics.cell_utilization == 0.0
        assert metrics.room_utilization == {}
