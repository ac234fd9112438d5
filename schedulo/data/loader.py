"""Load and validate scheduling requests from JSON files."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..errors import InvalidInputError
from .models import ScheduleRequest

logger = logging.getLogger(__name__)

# Alternate key names accepted from older exports
KEY_ALIASES = {
    "faculty_assignments": "eligibility",
    "periods": "periods_per_day",
}


def load_request(
    path: Union[str, Path],
    default_days: Optional[int] = None,
    default_periods_per_day: Optional[int] = None,
) -> ScheduleRequest:
    """
    Load a scheduling request from a JSON file.

    Args:
        path: Path to the JSON file
        default_days: Used when the file has no ``days`` key
        default_periods_per_day: Used when the file has no ``periodsPerDay`` key

    Returns:
        Validated ScheduleRequest

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidInputError: If the file isn't valid JSON or fails validation
    """
    path = Path(path)

    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"{path}: invalid JSON ({e})") from e

    logger.debug("Loaded request file %s", path)
    return parse_request(
        data,
        default_days=default_days,
        default_periods_per_day=default_periods_per_day,
    )


def parse_request(
    data: Any,
    default_days: Optional[int] = None,
    default_periods_per_day: Optional[int] = None,
) -> ScheduleRequest:
    """
    Build a ScheduleRequest from decoded JSON.

    Keys may be camelCase (as the web client sends them) or snake_case.
    Pydantic validation errors are reported as InvalidInputError with one
    message per offending field.
    """
    if not isinstance(data, dict):
        raise InvalidInputError("Request must be a JSON object")

    converted = _convert_keys_to_snake_case(data)
    for old_key, new_key in KEY_ALIASES.items():
        if old_key in converted and new_key not in converted:
            converted[new_key] = converted.pop(old_key)

    if default_days is not None:
        converted.setdefault("days", default_days)
    if default_periods_per_day is not None:
        converted.setdefault("periods_per_day", default_periods_per_day)

    try:
        return ScheduleRequest.model_validate(converted)
    except ValidationError as e:
        raise InvalidInputError(_format_validation_errors(e)) from e


def _format_validation_errors(error: ValidationError) -> list[str]:
    """One readable line per pydantic error, e.g. 'courses.0.name: Field required'."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return messages


def _convert_keys_to_snake_case(obj: Any) -> Any:
    """Recursively convert dictionary keys from camelCase to snake_case."""

    def to_snake_case(name: str) -> str:
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
        return name.lower()

    if isinstance(obj, dict):
        return {to_snake_case(k): _convert_keys_to_snake_case(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_keys_to_snake_case(item) for item in obj]
    else:
        return obj
