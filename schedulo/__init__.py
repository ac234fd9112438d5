"""Schedulo - deterministic greedy timetable scheduling."""

from .errors import ScheduloError, InvalidInputError, UnplaceableCourseWarning
from .data.models import (
    Course,
    Faculty,
    Room,
    Eligibility,
    PinnedSession,
    ScheduleRequest,
)
from .data.loader import load_request, parse_request
from .grid import Grid, Slot
from .constraints import ConstraintChecker
from .ranker import Candidate, CandidateRanker, rank_candidates
from .scheduler import (
    Scheduler,
    SchedulerOptions,
    ScheduleResult,
    SessionState,
    schedule,
)
from .output.builder import build
from .output.schema import ScheduleOutput

__all__ = [
    # Errors
    "ScheduloError",
    "InvalidInputError",
    "UnplaceableCourseWarning",
    # Models
    "Course",
    "Faculty",
    "Room",
    "Eligibility",
    "PinnedSession",
    "ScheduleRequest",
    "load_request",
    "parse_request",
    # Engine
    "Grid",
    "Slot",
    "ConstraintChecker",
    "Candidate",
    "CandidateRanker",
    "rank_candidates",
    "Scheduler",
    "SchedulerOptions",
    "ScheduleResult",
    "SessionState",
    "schedule",
    # Output
    "build",
    "ScheduleOutput",
]
