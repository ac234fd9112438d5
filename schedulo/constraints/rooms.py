"""
Room suitability for courses.

Capacity policy: the check is advisory when data is missing. A room
qualifies for a course unless BOTH the course's expected enrollment and the
room's capacity are known and the capacity is smaller. A room with no
capacity on record therefore always qualifies, as does any room for a
course with no size hint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from schedulo.data.models import Course, Room


@dataclass
class RoomSuitability:
    """Suitability analysis for a room-course pair."""
    room_id: str
    is_valid: bool
    capacity_known: bool
    reasons: list[str] = field(default_factory=list)


def room_fits(course: Course, room: Room) -> bool:
    """Whether the room's capacity is sufficient for the course."""
    if course.expected_enrollment is None or room.capacity is None:
        return True
    return room.capacity >= course.expected_enrollment


def evaluate_room(course: Course, room: Room) -> RoomSuitability:
    """
    Evaluate a room for a course, with the reasons it was rejected or the
    capacity check was skipped.
    """
    capacity_known = course.expected_enrollment is not None and room.capacity is not None
    result = RoomSuitability(room_id=room.id, is_valid=True, capacity_known=capacity_known)

    if room.capacity is None:
        result.reasons.append(f"Room {room.id} has no capacity on record; accepted")
    elif course.expected_enrollment is None:
        result.reasons.append(f"Course {course.id} has no enrollment hint; accepted")
    elif room.capacity < course.expected_enrollment:
        result.is_valid = False
        result.reasons.append(
            f"Room capacity {room.capacity} < expected enrollment {course.expected_enrollment}"
        )

    return result


def rooms_for_course(course: Course, rooms: Iterable[Room]) -> list[Room]:
    """Rooms that satisfy the capacity policy, ordered by ID."""
    return sorted((r for r in rooms if room_fits(course, r)), key=lambda r: r.id)
