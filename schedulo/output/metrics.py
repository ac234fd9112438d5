"""
Load metrics for evaluating how a timetable uses its grid.

These are reporting figures only; the scheduler balances day and faculty
load through its tie-break chain but never optimizes these numbers.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .schema import LoadMetrics

if TYPE_CHECKING:
    from schedulo.data.models import ScheduleRequest
    from schedulo.grid import Grid


def std_dev(values: list[int]) -> float:
    """Population standard deviation (0.0 for fewer than two values)."""
    if len(values) < 2:
        return 0.0
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


def room_utilization(grid: Grid, room_id: str) -> float:
    """Percentage of a room's (day, period) cells in use."""
    cells = grid.capacity
    used = sum(1 for slot in grid if slot.room.id == room_id)
    return round(used / cells * 100, 2)


def compute_load_metrics(grid: Grid, request: ScheduleRequest) -> LoadMetrics:
    """
    Compute load figures for a filled grid.

    Args:
        grid: Grid after the run
        request: The run's request (for the full faculty and room lists)

    Returns:
        LoadMetrics with per-day, per-faculty and per-room figures
    """
    day_load = {day: grid.day_load(day) for day in range(grid.days)}
    faculty_load = {f.id: grid.faculty_load(f.id) for f in sorted(request.faculty, key=lambda f: f.id)}
    rooms = {r.id: room_utilization(grid, r.id) for r in sorted(request.rooms, key=lambda r: r.id)}

    capacity = grid.capacity * len(request.rooms)
    cell_utilization = round(len(grid) / capacity * 100, 2) if capacity else 0.0

    return LoadMetrics(
        day_load=day_load,
        faculty_load=faculty_load,
        room_utilization=rooms,
        cell_utilization=cell_utilization,
        day_balance_std_dev=round(std_dev(list(day_load.values())), 3),
    )
