"""Tests for day and time-slot labels."""

import pytest

from schedulo.output.timeslots import (
    day_label,
    minutes_to_clock,
    period_bounds,
    period_label,
    period_labels,
)


class TestPeriodLabel:
    """Tests for period labels."""

    @pytest.mark.parametrize("period,label", [
        (0, "9:00-10:30"),
        (1, "11:00-12:30"),
        (2, "13:30-15:00"),
        (3, "15:30-17:00"),
        (4, "17:30-19:00"),
        (5, "19:30-21:00"),
    ])
    def test_fixed_table(self, period, label):
        assert period_label(period) == label

    def test_cadence_continues_past_table(self):
        assert period_label(6) == "21:30-23:00"

    def test_wraps_past_midnight(self):
        assert period_label(7) == "23:30-1:00"
        assert period_label(8) == "1:30-3:00"

    def test_bounds_keep_absolute_minutes(self):
        assert period_bounds(7) == (1410, 1500)

    def test_negative_period_rejected(self):
        with pytest.raises(ValueError):
            period_label(-1)

    def test_period_labels(self):
        assert period_labels(2) == ["9:00-10:30", "11:00-12:30"]


class TestClock:
    """Tests for clock formatting."""

    def test_minutes_to_clock(self):
        assert minutes_to_clock(540) == "9:00"
        assert minutes_to_clock(810) == "13:30"
        assert minutes_to_clock(0) == "0:00"
        assert minutes_to_clock(1500) == "1:00"


class TestDayLabel:
    """Tests for day labels."""

    def test_one_based(self):
        assert day_label(0) == "Day 1"
        assert day_label(4) == "Day 5"
