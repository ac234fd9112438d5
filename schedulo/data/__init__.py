"""Request models, loading and sample data."""

from .models import (
    Course,
    Faculty,
    Room,
    Eligibility,
    PinnedSession,
    ScheduleRequest,
)
from .loader import load_request, parse_request
from .generator import (
    GeneratorConfig,
    generate_sample_request,
    generate_small_request,
    request_to_dict,
    save_request,
    get_generation_stats,
)

__all__ = [
    # Models
    "Course",
    "Faculty",
    "Room",
    "Eligibility",
    "PinnedSession",
    "ScheduleRequest",
    # Loader
    "load_request",
    "parse_request",
    # Generator
    "GeneratorConfig",
    "generate_sample_request",
    "generate_small_request",
    "request_to_dict",
    "save_request",
    "get_generation_stats",
]
