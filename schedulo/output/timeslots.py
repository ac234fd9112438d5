"""
Day and time-slot labels for grid indices.

Periods follow the institution's fixed 1.5-hour slot table. Beyond the
table the cadence continues from the last entry: a 30-minute gap, then a
90-minute slot. Labels are wall-clock times, so a period running past
midnight wraps (23:30-1:00).
"""

from __future__ import annotations

MINUTES_PER_DAY = 1440
SLOT_MINUTES = 90
GAP_MINUTES = 30

# (start, end) in minutes from midnight
TIME_SLOT_TABLE: tuple[tuple[int, int], ...] = (
    (540, 630),    # 9:00-10:30
    (660, 750),    # 11:00-12:30
    (810, 900),    # 13:30-15:00
    (930, 1020),   # 15:30-17:00
    (1050, 1140),  # 17:30-19:00
    (1170, 1260),  # 19:30-21:00
)


def period_bounds(period: int) -> tuple[int, int]:
    """
    Start and end of a period in minutes from midnight (may exceed 1440).

    Raises:
        ValueError: If period is negative
    """
    if period < 0:
        raise ValueError(f"period must be non-negative, got {period}")
    if period < len(TIME_SLOT_TABLE):
        return TIME_SLOT_TABLE[period]

    last_start, _ = TIME_SLOT_TABLE[-1]
    extra = period - (len(TIME_SLOT_TABLE) - 1)
    start = last_start + extra * (SLOT_MINUTES + GAP_MINUTES)
    return start, start + SLOT_MINUTES


def minutes_to_clock(minutes: int) -> str:
    """Format minutes from midnight as H:MM, e.g. 540 -> '9:00'."""
    h, m = divmod(minutes % MINUTES_PER_DAY, 60)
    return f"{h}:{m:02d}"


def period_label(period: int) -> str:
    """Time-slot label for a period, e.g. 0 -> '9:00-10:30'."""
    start, end = period_bounds(period)
    return f"{minutes_to_clock(start)}-{minutes_to_clock(end)}"


def day_label(day: int) -> str:
    """Display label for a 0-based day index, e.g. 0 -> 'Day 1'."""
    return f"Day {day + 1}"


def period_labels(periods_per_day: int) -> list[str]:
    """Labels for every period of a day."""
    return [period_label(p) for p in range(periods_per_day)]
