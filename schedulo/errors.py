"""Exception and warning types raised by the scheduling engine."""

from __future__ import annotations

import warnings


class ScheduloError(Exception):
    """Base class for all Schedulo errors."""
    pass


class InvalidInputError(ScheduloError):
    """
    Raised when request data is malformed or inconsistent.

    Fatal to the run: raised before any placement is attempted, so no
    partial timetable exists when this propagates.
    """

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: list[str] = list(errors)
        super().__init__(
            "Invalid input:\n" + "\n".join(f"  - {e}" for e in self.errors)
        )


class UnplaceableCourseWarning(UserWarning):
    """Issued when a course still has unplaced sessions after carry-over."""

    def __init__(self, course_id: str, reason: str):
        self.course_id = course_id
        self.reason = reason
        super().__init__(f"Course {course_id} could not be placed: {reason}")


# Every run reports each failed course, even when an earlier run in the same
# process already warned about it. A filter set by the caller still wins.
warnings.filterwarnings("always", category=UnplaceableCourseWarning, append=True)
