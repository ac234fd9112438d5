"""
Sample data generator for trying out and testing the scheduler.

Generates a reproducible request for one program/department: courses,
faculty, eligibility and rooms, plus a few distractor courses from other
departments that the scheduler is expected to ignore.

Usage:
    from schedulo.data.generator import generate_sample_request, generate_small_request

    # Custom size
    request = generate_sample_request(GeneratorConfig(num_courses=30, seed=7))

    # Quick test data
    request = generate_small_request(seed=1)
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .models import Course, Eligibility, Faculty, Room, ScheduleRequest


# =============================================================================
# Name Data
# =============================================================================

FIRST_NAMES = [
    "Anita", "Arjun", "Deepa", "Farhan", "Gita", "Harish", "Isha", "Karthik",
    "Lakshmi", "Manoj", "Meera", "Nikhil", "Priya", "Rahul", "Sanjay", "Sneha",
    "Suresh", "Tara", "Vikram", "Yamini",
]

LAST_NAMES = [
    "Rao", "Iyer", "Menon", "Nair", "Reddy", "Sharma", "Gupta", "Das",
    "Pillai", "Kulkarni", "Joshi", "Bose", "Varma", "Khan", "Patel",
]

COURSE_TITLES = [
    "Programming Fundamentals", "Data Structures", "Discrete Mathematics",
    "Digital Logic", "Computer Organization", "Algorithms", "Operating Systems",
    "Database Systems", "Computer Networks", "Theory of Computation",
    "Compiler Design", "Software Engineering", "Machine Learning",
    "Computer Graphics", "Distributed Systems", "Information Security",
    "Cloud Computing", "Human-Computer Interaction", "Linear Algebra",
    "Probability and Statistics",
]

OTHER_DEPARTMENTS = ["ECE", "MECH", "CIVIL", "EEE"]

ROOM_FEATURES = ["projector", "smart_board", "computers", "audio"]


# =============================================================================
# Generator Configuration
# =============================================================================

@dataclass
class GeneratorConfig:
    """Configuration for request generation.

    The defaults produce a request the greedy scheduler places completely:
    total sessions stay well under ``days * periods_per_day * num_rooms``.
    """
    program: str = "B.Tech"
    department: str = "CSE"

    # Entity counts
    num_courses: int = 12
    num_distractor_courses: int = 4
    num_faculty: int = 8
    num_rooms: int = 4

    # Course settings
    min_sessions: int = 1
    max_sessions: int = 3
    min_credits: int = 2
    max_credits: int = 4
    min_enrollment: int = 30
    max_enrollment: int = 60

    # Eligibility
    min_eligible_faculty: int = 1
    max_eligible_faculty: int = 3

    # Room settings
    min_room_capacity: int = 40
    max_room_capacity: int = 80

    # Grid
    days: int = 5
    periods_per_day: int = 6

    # Randomization
    seed: Optional[int] = None


# =============================================================================
# Generator Functions
# =============================================================================

def generate_sample_request(config: GeneratorConfig | None = None) -> ScheduleRequest:
    """
    Generate a sample scheduling request.

    Args:
        config: Generator configuration (uses defaults if None)

    Returns:
        Validated ScheduleRequest
    """
    if config is None:
        config = GeneratorConfig()

    rng = random.Random(config.seed)

    faculty = _generate_faculty(config, rng)
    courses = _generate_courses(config, rng)
    distractors = _generate_distractor_courses(config, rng)
    eligibility = _generate_eligibility(config, rng, courses + distractors, faculty)
    rooms = _generate_rooms(config, rng)

    return ScheduleRequest(
        program=config.program,
        department=config.department,
        days=config.days,
        periods_per_day=config.periods_per_day,
        courses=courses + distractors,
        faculty=faculty,
        eligibility=eligibility,
        rooms=rooms,
    )


def generate_small_request(seed: int | None = None) -> ScheduleRequest:
    """
    Generate a small request for quick testing.

    - 6 courses (plus 2 from other departments)
    - 4 faculty, 2 rooms
    - 5 days x 4 periods
    """
    config = GeneratorConfig(
        num_courses=6,
        num_distractor_courses=2,
        num_faculty=4,
        num_rooms=2,
        max_sessions=2,
        periods_per_day=4,
        seed=seed,
    )
    return generate_sample_request(config)


# =============================================================================
# Private Generator Helpers
# =============================================================================

def _generate_faculty(config: GeneratorConfig, rng: random.Random) -> list[Faculty]:
    faculty = []
    for i in range(config.num_faculty):
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        faculty.append(Faculty(
            id=f"F{i + 1:03d}",
            name=f"Dr. {first} {last}",
            department=config.department,
            email=f"{first.lower()}.{last.lower()}{i + 1}@college.edu",
        ))
    return faculty


def _generate_courses(config: GeneratorConfig, rng: random.Random) -> list[Course]:
    courses = []
    for i in range(config.num_courses):
        title = COURSE_TITLES[i % len(COURSE_TITLES)]
        if i >= len(COURSE_TITLES):
            title = f"{title} {i // len(COURSE_TITLES) + 1}"
        courses.append(Course(
            id=f"{config.department}{101 + i}",
            name=title,
            credits=rng.randint(config.min_credits, config.max_credits),
            program=config.program,
            department=config.department,
            sessions=min(
                rng.randint(config.min_sessions, config.max_sessions),
                config.days,
            ),
            expected_enrollment=rng.randint(config.min_enrollment, config.max_enrollment),
        ))
    return courses


def _generate_distractor_courses(config: GeneratorConfig, rng: random.Random) -> list[Course]:
    courses = []
    for i in range(config.num_distractor_courses):
        department = OTHER_DEPARTMENTS[i % len(OTHER_DEPARTMENTS)]
        courses.append(Course(
            id=f"{department}{201 + i}",
            name=f"{department} Elective {i + 1}",
            credits=rng.randint(config.min_credits, config.max_credits),
            program=config.program,
            department=department,
        ))
    return courses


def _generate_eligibility(
    config: GeneratorConfig,
    rng: random.Random,
    courses: list[Course],
    faculty: list[Faculty],
) -> list[Eligibility]:
    """Each course gets between min and max eligible faculty members."""
    if not faculty:
        return []

    rows = []
    for course in courses:
        count = rng.randint(config.min_eligible_faculty, config.max_eligible_faculty)
        count = min(count, len(faculty))
        for member in sorted(rng.sample(faculty, count), key=lambda f: f.id):
            rows.append(Eligibility(faculty_id=member.id, course_id=course.id))
    return rows


def _generate_rooms(config: GeneratorConfig, rng: random.Random) -> list[Room]:
    rooms = []
    for i in range(config.num_rooms):
        is_lab = i > 0 and i % 4 == 0
        rooms.append(Room(
            id=f"R{i + 1:03d}",
            name=f"{'Lab' if is_lab else 'Room'} {100 + i + 1}",
            capacity=rng.randint(config.min_room_capacity, config.max_room_capacity),
            type="lab" if is_lab else "classroom",
            features=tuple(sorted(rng.sample(ROOM_FEATURES, rng.randint(0, 2)))),
        ))
    return rooms


# =============================================================================
# Utility Functions
# =============================================================================

def request_to_dict(request: ScheduleRequest) -> dict[str, Any]:
    """Convert a request to the camelCase JSON shape the loader reads."""
    return {
        "program": request.program,
        "department": request.department,
        "days": request.days,
        "periodsPerDay": request.periods_per_day,
        "courses": [
            {
                "id": c.id,
                "name": c.name,
                "credits": c.credits,
                "program": c.program,
                "department": c.department,
                "sessions": c.sessions,
                "expectedEnrollment": c.expected_enrollment,
            }
            for c in request.courses
        ],
        "faculty": [
            {
                "id": f.id,
                "name": f.name,
                "department": f.department,
                "email": f.email,
            }
            for f in request.faculty
        ],
        "eligibility": [
            {"facultyId": e.faculty_id, "courseId": e.course_id}
            for e in request.eligibility
        ],
        "rooms": [
            {
                "id": r.id,
                "name": r.name,
                "capacity": r.capacity,
                "type": r.type,
                "features": list(r.features),
            }
            for r in request.rooms
        ],
        "pinned": [
            {
                "courseId": p.course_id,
                "day": p.day,
                "period": p.period,
                "facultyId": p.faculty_id,
                "roomId": p.room_id,
            }
            for p in request.pinned
        ],
    }


def save_request(request: ScheduleRequest, filepath: str | Path) -> None:
    """
    Save a request to a JSON file.

    Args:
        request: Request to save
        filepath: Path to save JSON file (parent directories are created)
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(request_to_dict(request), f, indent=2)


def get_generation_stats(request: ScheduleRequest) -> dict[str, Any]:
    """
    Rough feasibility figures for a request.

    ``is_feasible`` only checks counting bounds (sessions vs. room cells,
    sessions per course vs. days); a request can pass and still leave
    courses unplaced.
    """
    total_sessions = request.total_sessions
    total_cells = request.total_cells
    utilization = total_sessions / total_cells * 100 if total_cells else 0
    max_sessions = max((c.sessions for c in request.scheduled_courses), default=0)

    return {
        "courses": len(request.scheduled_courses),
        "ignored_courses": len(request.courses) - len(request.scheduled_courses),
        "faculty": len(request.faculty),
        "rooms": len(request.rooms),
        "total_sessions": total_sessions,
        "total_cells": total_cells,
        "utilization_percent": round(utilization, 1),
        "is_feasible": utilization <= 100 and max_sessions <= request.days,
    }
