"""
Utility functions for the Roadmapper application.
"""

import json
import secrets
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from roadmapper.exceptions import ValidationError
from roadmapper.models.roadmap import Roadmap


def percentage(part: float, whole: float, precision: Optional[int] = None) -> float:
    """
    Return part/whole as a percentage, or 0.0 when whole is zero.

    Args:
        part: Numerator.
        whole: Denominator.
        precision: Decimal places to round to. No rounding when None.

    Examples:
        >>> percentage(1, 4)
        25.0
        >>> percentage(3, 0)
        0.0
    """
    if not whole:
        return 0.0
    value = part / whole * 100
    return round(value, precision) if precision is not None else value


def format_date(date: datetime) -> str:
    """
    Format a datetime object to the standard ISO 8601 format.

    Args:
        date: The datetime object to format.

    Returns:
        A string in YYYY-MM-DD format.
    """
    return date.strftime("%Y-%m-%d")


def generate_session_id() -> str:
    """Generate an analytics session id: millisecond timestamp plus random suffix."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def load_roadmap_file(path: Path) -> Roadmap:
    """
    Load a roadmap document from a JSON file.

    Accepts either a bare roadmap ({"summary": ..., "phases": [...]}) or a
    saved record wrapping one under "roadmap_data" / "roadmapData".

    Raises:
        ValidationError: If the file is not valid JSON or not a roadmap.
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not read roadmap file {path}: {e}")

    if isinstance(data, dict):
        for key in ("roadmap_data", "roadmapData"):
            if key in data:
                data = data[key]
                break

    try:
        return Roadmap.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid roadmap in {path}: {e}")
