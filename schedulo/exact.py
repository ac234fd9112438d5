"""
Exact upper bound on what any scheduler could place, via CP-SAT.

The greedy scheduler never backtracks, so a partial result does not prove
that the request is unsatisfiable. This module models the same hard
constraints as a CP-SAT maximization and reports the best achievable
number of fully placed courses and sessions. It is an audit tool only;
the scheduler never calls it.

Variables:
    x[c, d, p, f, r] = 1 if course c runs on day d, period p, with faculty f
    in room r. Only eligible faculty and rooms that fit the course get a
    variable.

Objective:
    maximize  W * (courses with every session placed) + (sessions placed)
    with W = total sessions + 1, so one more full course always beats any
    number of extra sessions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ortools.sat.python import cp_model

from .constraints import room_fits
from .data.models import ScheduleRequest
from .errors import InvalidInputError
from .scheduler import ScheduleResult, SchedulerOptions

logger = logging.getLogger(__name__)


class BoundStatus(str, Enum):
    """CP-SAT result status."""
    OPTIMAL = "OPTIMAL"
    FEASIBLE = "FEASIBLE"
    INFEASIBLE = "INFEASIBLE"
    MODEL_INVALID = "MODEL_INVALID"
    UNKNOWN = "UNKNOWN"


@dataclass
class ExactBound:
    """Best placement CP-SAT found for a request."""
    status: BoundStatus
    max_courses: Optional[int]
    max_sessions: Optional[int]
    total_courses: int
    total_sessions: int
    objective_bound: float
    wall_time: float
    num_variables: int

    @property
    def is_proven(self) -> bool:
        """True when the figures are the proven optimum, not just a lower bound."""
        return self.status == BoundStatus.OPTIMAL

    def course_gap(self, result: ScheduleResult) -> Optional[int]:
        """How many more full courses the best placement achieves than a greedy run."""
        if self.max_courses is None:
            return None
        return self.max_courses - len(result.placed_course_ids)


def max_placeable(
    request: ScheduleRequest,
    options: Optional[SchedulerOptions] = None,
    time_limit_seconds: float = 30.0,
    num_workers: int = 8,
) -> ExactBound:
    """
    Solve for the maximum number of placeable courses and sessions.

    Args:
        request: Validated request
        options: Same options the scheduler would run with
        time_limit_seconds: Wall-clock limit for CP-SAT
        num_workers: CP-SAT search workers

    Returns:
        ExactBound; figures are a lower bound unless the status is OPTIMAL
    """
    options = options or SchedulerOptions()
    model = cp_model.CpModel()
    courses = request.scheduled_courses
    total_sessions = request.total_sessions

    x: dict[tuple[str, int, int, str, str], cp_model.IntVar] = {}
    for course in courses:
        rooms = [r for r in request.rooms if room_fits(course, r)]
        for faculty in request.eligible_faculty(course.id):
            for room in rooms:
                for day in range(request.days):
                    for period in range(request.periods_per_day):
                        key = (course.id, day, period, faculty.id, room.id)
                        x[key] = model.NewBoolVar(f"x_{course.id}_{day}_{period}_{faculty.id}_{room.id}")

    by_faculty_cell: dict[tuple[int, int, str], list] = {}
    by_room_cell: dict[tuple[int, int, str], list] = {}
    by_course_day: dict[tuple[str, int], list] = {}
    by_course: dict[str, list] = {}
    by_cell: dict[tuple[int, int], list] = {}
    for (course_id, day, period, faculty_id, room_id), var in x.items():
        by_faculty_cell.setdefault((day, period, faculty_id), []).append(var)
        by_room_cell.setdefault((day, period, room_id), []).append(var)
        by_course_day.setdefault((course_id, day), []).append(var)
        by_course.setdefault(course_id, []).append(var)
        by_cell.setdefault((day, period), []).append(var)

    for group in (by_faculty_cell, by_room_cell, by_course_day):
        for variables in group.values():
            if len(variables) > 1:
                model.AddAtMostOne(variables)

    if options.single_session_per_period:
        for variables in by_cell.values():
            if len(variables) > 1:
                model.AddAtMostOne(variables)

    full: list[cp_model.IntVar] = []
    for course in courses:
        variables = by_course.get(course.id, [])
        if not variables:
            continue
        model.Add(sum(variables) <= course.sessions)
        is_full = model.NewBoolVar(f"full_{course.id}")
        model.Add(sum(variables) >= course.sessions).OnlyEnforceIf(is_full)
        full.append(is_full)

    for pin in request.pinned:
        key = (pin.course_id, pin.day, pin.period, pin.faculty_id, pin.room_id)
        if key not in x:
            raise InvalidInputError(
                f"Pinned session {pin.course_id}@{pin.day}/{pin.period}: room {pin.room_id} does not fit the course"
            )
        model.Add(x[key] == 1)

    if not x:
        return ExactBound(
            status=BoundStatus.OPTIMAL,
            max_courses=0,
            max_sessions=0,
            total_courses=len(courses),
            total_sessions=total_sessions,
            objective_bound=0.0,
            wall_time=0.0,
            num_variables=0,
        )

    weight = total_sessions + 1
    model.Maximize(weight * sum(full) + sum(x.values()))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = time_limit_seconds
    solver.parameters.num_workers = num_workers
    solver.parameters.log_search_progress = False

    status_code = solver.Solve(model)
    status_map = {
        cp_model.OPTIMAL: BoundStatus.OPTIMAL,
        cp_model.FEASIBLE: BoundStatus.FEASIBLE,
        cp_model.INFEASIBLE: BoundStatus.INFEASIBLE,
        cp_model.MODEL_INVALID: BoundStatus.MODEL_INVALID,
        cp_model.UNKNOWN: BoundStatus.UNKNOWN,
    }
    status = status_map.get(status_code, BoundStatus.UNKNOWN)

    max_courses = max_sessions = None
    if status in (BoundStatus.OPTIMAL, BoundStatus.FEASIBLE):
        max_sessions = sum(solver.Value(v) for v in x.values())
        max_courses = sum(
            1 for course in courses
            if sum(solver.Value(v) for v in by_course.get(course.id, [])) == course.sessions
        )

    logger.info(
        "CP-SAT %s in %.2fs: %s course(s), %s session(s) of %d",
        status.value, solver.WallTime(), max_courses, max_sessions, total_sessions,
    )

    return ExactBound(
        status=status,
        max_courses=max_courses,
        max_sessions=max_sessions,
        total_courses=len(courses),
        total_sessions=total_sessions,
        objective_bound=solver.BestObjectiveBound(),
        wall_time=solver.WallTime(),
        num_variables=len(x),
    )
