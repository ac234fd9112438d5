"""
Greedy timetable scheduler with carry-over.

Every course session becomes a unit of work. Units move through a small
state machine:

    UNPLACED --first pass--> PLACED
             \\-> DEFERRED --carry-over--> PLACED
                                       \\-> FAILED

1. Pinned sessions are committed first; a pin that breaks a hard
   constraint is an InvalidInputError.
2. The queue is ordered scarcest-first: courses with fewer eligible faculty
   go earlier, then by course ID and session index.
3. First pass: a unit targets the least-loaded days that do not already
   hold its course and takes the best ranked candidate across them, so a
   load tie is settled by the full candidate order (room before day). No
   candidate there defers the unit.
4. Carry-over: each deferred unit is retried once on every day it has not
   tried, starting after its target day and wrapping around. A unit that finds
   nothing fails, and its course is reported with an
   UnplaceableCourseWarning.

Committed slots are never undone. Each commit keeps every invariant, so a
run abandoned between units leaves a well-formed partial grid.

Usage:
    scheduler = Scheduler(request)
    result = scheduler.run()

    # or step by step, stopping whenever the caller likes
    for decision in Scheduler(request).steps():
        ...
"""

from __future__ import annotations

import logging
import time
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from .constraints import ConstraintChecker, rooms_for_course
from .data.models import Course, ScheduleRequest
from .errors import InvalidInputError, UnplaceableCourseWarning
from .grid import Grid, Slot
from .ranker import Candidate, CandidateRanker

logger = logging.getLogger(__name__)


# =============================================================================
# States and Records
# =============================================================================

class SessionState(str, Enum):
    """Placement state of a session (and, aggregated, of a course)."""
    UNPLACED = "unplaced"
    PLACED = "placed"
    DEFERRED = "deferred"
    FAILED = "failed"


class Phase(str, Enum):
    """Where in the run a decision was taken."""
    PINNED = "pinned"
    FIRST_PASS = "first_pass"
    CARRY_OVER = "carry_over"


@dataclass
class SessionUnit:
    """One session of a course waiting for (or holding) a slot."""
    course: Course
    index: int
    state: SessionState = SessionState.UNPLACED
    target_day: Optional[int] = None
    tried_days: tuple[int, ...] = ()
    slot: Optional[Slot] = None
    carried_over: bool = False
    reason: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.course.id}#{self.index + 1}"


@dataclass(frozen=True)
class PlacementDecision:
    """What happened to one unit at one step of the run."""
    course_id: str
    session: int
    state: SessionState
    phase: Phase
    slot: Optional[Slot] = None
    reason: Optional[str] = None


@dataclass
class SchedulerOptions:
    """Knobs for a scheduling run."""
    single_session_per_period: bool = False


@dataclass
class ScheduleResult:
    """Outcome of a scheduling run, handed to the result builder."""
    request: ScheduleRequest
    grid: Grid
    units: list[SessionUnit]
    conflicts_avoided: int = 0
    elapsed_ms: int = 0
    options: SchedulerOptions = field(default_factory=SchedulerOptions)

    def course_state(self, course_id: str) -> SessionState:
        """PLACED only when every session of the course is placed."""
        states = [u.state for u in self.units if u.course.id == course_id]
        if not states or all(s == SessionState.PLACED for s in states):
            return SessionState.PLACED
        if any(s == SessionState.FAILED for s in states):
            return SessionState.FAILED
        if any(s == SessionState.DEFERRED for s in states):
            return SessionState.DEFERRED
        return SessionState.UNPLACED

    @property
    def course_states(self) -> dict[str, SessionState]:
        return {c.id: self.course_state(c.id) for c in self.request.scheduled_courses}

    @property
    def placed_course_ids(self) -> list[str]:
        return sorted(cid for cid, s in self.course_states.items() if s == SessionState.PLACED)

    @property
    def failed_course_ids(self) -> list[str]:
        return sorted(cid for cid, s in self.course_states.items() if s == SessionState.FAILED)

    @property
    def failures(self) -> dict[str, str]:
        """Failed course ID to the reason its first failed session gave."""
        reasons: dict[str, str] = {}
        for unit in self.units:
            if unit.state == SessionState.FAILED and unit.course.id not in reasons:
                reasons[unit.course.id] = unit.reason or "could not be placed"
        return dict(sorted(reasons.items()))

    @property
    def carried_over(self) -> int:
        """Sessions placed by the carry-over pass."""
        return sum(1 for u in self.units if u.carried_over and u.state == SessionState.PLACED)

    @property
    def is_complete(self) -> bool:
        return not self.failed_course_ids


# =============================================================================
# Scheduler
# =============================================================================

class Scheduler:
    """
    Fills one grid for one (program, department) request.

    Args:
        request: Validated request
        options: Run options (defaults if None)

    Raises:
        InvalidInputError: If a pinned session breaks a hard constraint
    """

    def __init__(self, request: ScheduleRequest, options: Optional[SchedulerOptions] = None):
        self.request = request
        self.options = options or SchedulerOptions()

        self.grid = Grid(request.days, request.periods_per_day)
        self.checker = ConstraintChecker(
            request.relevant_eligibility,
            single_session_per_period=self.options.single_session_per_period,
        )
        self.ranker = CandidateRanker(
            self.checker,
            {c.id: request.eligible_faculty(c.id) for c in request.scheduled_courses},
            request.rooms,
        )

        self.units: list[SessionUnit] = []
        self.conflicts_avoided = 0
        self._pinned_decisions = self._commit_pins()
        self._consumed = False

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def _commit_pins(self) -> list[PlacementDecision]:
        """Place pinned sessions, or fail before any scheduling happens."""
        decisions = []
        errors = []
        pinned_per_course: dict[str, int] = {}

        for pin in sorted(self.request.pinned, key=lambda p: (p.day, p.period, p.room_id)):
            course = self.request.get_course(pin.course_id)
            faculty = self.request.get_faculty(pin.faculty_id)
            room = self.request.get_room(pin.room_id)

            broken = self.checker.violations(self.grid, pin.day, pin.period, course, faculty, room)
            if broken:
                names = ", ".join(c.value for c in broken)
                errors.append(
                    f"Pinned session {pin.course_id}@{pin.day}/{pin.period} breaks: {names}"
                )
                continue

            index = pinned_per_course.get(course.id, 0)
            if index >= course.sessions:
                errors.append(
                    f"Course {course.id} has {course.sessions} session(s) but more are pinned"
                )
                continue
            pinned_per_course[course.id] = index + 1

            slot = Slot(pin.day, pin.period, course, faculty, room, pinned=True)
            self.grid.add(slot)
            unit = SessionUnit(course=course, index=index, state=SessionState.PLACED, slot=slot)
            self.units.append(unit)
            decisions.append(PlacementDecision(
                course_id=course.id,
                session=index,
                state=SessionState.PLACED,
                phase=Phase.PINNED,
                slot=slot,
            ))

        if errors:
            raise InvalidInputError(errors)

        for course in self.request.scheduled_courses:
            for index in range(pinned_per_course.get(course.id, 0), course.sessions):
                self.units.append(SessionUnit(course=course, index=index))

        return decisions

    def _queue(self) -> list[SessionUnit]:
        """Unplaced units, scarcest courses first."""
        pending = [u for u in self.units if u.state == SessionState.UNPLACED]
        return sorted(
            pending,
            key=lambda u: (len(self.ranker.faculty_for(u.course)), u.course.id, u.index),
        )

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def steps(self) -> Iterator[PlacementDecision]:
        """
        Run the scheduler one unit at a time.

        Yields a decision per pinned session, per first-pass attempt and per
        carry-over outcome. Stopping early leaves ``self.grid`` valid.

        Each failed course issues an UnplaceableCourseWarning after the
        carry-over pass. The warning is filtered as "always", so a second run
        in the same process reports the same course again.
        """
        if self._consumed:
            raise RuntimeError("A Scheduler can only be run once; create a new one")
        self._consumed = True

        queue = self._queue()
        logger.info(
            "Scheduling %d session(s) of %d course(s) for %s/%s on a %dx%d grid",
            len(queue),
            len(self.request.scheduled_courses),
            self.request.program,
            self.request.department,
            self.grid.days,
            self.grid.periods_per_day,
        )

        yield from self._pinned_decisions

        deferred: list[SessionUnit] = []
        for unit in queue:
            decision = self._first_pass(unit)
            if unit.state == SessionState.DEFERRED:
                deferred.append(unit)
            yield decision

        for unit in deferred:
            yield self._carry_over(unit)

        for course_id, reason in self.result().failures.items():
            logger.warning("Course %s could not be placed: %s", course_id, reason)
            warnings.warn(UnplaceableCourseWarning(course_id, reason), stacklevel=2)

    def run(self) -> ScheduleResult:
        """Run to completion and return the result."""
        started = time.perf_counter()
        for _ in self.steps():
            pass
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        result = self.result(elapsed_ms)
        logger.info(
            "Placed %d/%d course(s), %d carried over, %d failed in %dms",
            len(result.placed_course_ids),
            len(self.request.scheduled_courses),
            result.carried_over,
            len(result.failed_course_ids),
            elapsed_ms,
        )
        return result

    def result(self, elapsed_ms: int = 0) -> ScheduleResult:
        """Snapshot of the run so far; valid mid-run as well."""
        return ScheduleResult(
            request=self.request,
            grid=self.grid,
            units=list(self.units),
            conflicts_avoided=self.conflicts_avoided,
            elapsed_ms=elapsed_ms,
            options=self.options,
        )

    # -------------------------------------------------------------------------
    # Passes
    # -------------------------------------------------------------------------

    def _first_pass(self, unit: SessionUnit) -> PlacementDecision:
        course = unit.course

        if not self.ranker.faculty_for(course):
            return self._fail(unit, Phase.FIRST_PASS, "no eligible faculty")

        target_days = self._target_days(course)
        if not target_days:
            return self._fail(unit, Phase.FIRST_PASS, "more sessions than days in the grid")
        unit.tried_days = tuple(target_days)

        candidate = self._best_candidate(course, target_days)
        if candidate is not None:
            unit.target_day = candidate.day
            return self._commit(unit, candidate, Phase.FIRST_PASS)

        unit.target_day = target_days[0]
        unit.state = SessionState.DEFERRED
        tried = ", ".join(str(d) for d in target_days)
        logger.debug("Deferred %s: no free slot on day %s", unit.label, tried)
        return PlacementDecision(
            course_id=course.id,
            session=unit.index,
            state=SessionState.DEFERRED,
            phase=Phase.FIRST_PASS,
            reason=f"no free slot on day {tried}",
        )

    def _carry_over(self, unit: SessionUnit) -> PlacementDecision:
        for day in self._carry_over_days(unit.target_day, unit.tried_days):
            candidate = self._best_candidate(unit.course, [day])
            if candidate is not None:
                unit.carried_over = True
                logger.debug("Carried %s over from day %d to day %d", unit.label, unit.target_day, day)
                return self._commit(unit, candidate, Phase.CARRY_OVER)

        return self._fail(unit, Phase.CARRY_OVER, self._failure_reason(unit.course))

    def _target_days(self, course: Course) -> list[int]:
        """Days not already holding the course that share the lowest load."""
        open_days = [d for d in range(self.grid.days) if not self.grid.has_course_on_day(d, course.id)]
        if not open_days:
            return []
        lowest = min(self.grid.day_load(d) for d in open_days)
        return [d for d in open_days if self.grid.day_load(d) == lowest]

    def _carry_over_days(self, target_day: int, tried: tuple[int, ...] = ()) -> list[int]:
        """Untried days, starting after the target and wrapping around."""
        days = self.grid.days
        order = [(target_day + offset) % days for offset in range(1, days)]
        return [d for d in order if d not in tried]

    def _best_candidate(self, course: Course, days: list[int]) -> Optional[Candidate]:
        ranking = self.ranker.evaluate(self.grid, course, days)
        self.conflicts_avoided += ranking.rejected
        return ranking.best

    def _commit(self, unit: SessionUnit, candidate: Candidate, phase: Phase) -> PlacementDecision:
        slot = Slot(candidate.day, candidate.period, unit.course, candidate.faculty, candidate.room)
        self.grid.add(slot)
        unit.state = SessionState.PLACED
        unit.slot = slot
        logger.debug(
            "Placed %s on day %d period %d with %s in %s",
            unit.label, slot.day, slot.period, slot.faculty.id, slot.room.id,
        )
        return PlacementDecision(
            course_id=unit.course.id,
            session=unit.index,
            state=SessionState.PLACED,
            phase=phase,
            slot=slot,
        )

    def _fail(self, unit: SessionUnit, phase: Phase, reason: str) -> PlacementDecision:
        unit.state = SessionState.FAILED
        unit.reason = reason
        logger.debug("Failed %s: %s", unit.label, reason)
        return PlacementDecision(
            course_id=unit.course.id,
            session=unit.index,
            state=SessionState.FAILED,
            phase=phase,
            reason=reason,
        )

    def _failure_reason(self, course: Course) -> str:
        """Best explanation for a session that found no slot on any day."""
        if not self.request.rooms:
            return "no rooms available"
        if not rooms_for_course(course, self.request.rooms):
            return f"no room seats {course.expected_enrollment} students"
        return "no conflict-free faculty, room and period on any day"


def schedule(request: ScheduleRequest, options: Optional[SchedulerOptions] = None) -> ScheduleResult:
    """Schedule a request in one call."""
    return Scheduler(request, options).run()
