"""
Timeline estimation for roadmap phases.

Best-effort conversion of free-text durations ("2 months", "3 weeks") into
month counts, and a sequential month-by-month layout for Gantt-style views.
Advisory only: unparseable durations fall back to a default.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

from roadmapper.constants import (
    MONTHS_PATTERN,
    WEEKS_PATTERN,
    WEEKS_PER_MONTH,
    get_default_duration_months,
    get_timeline_horizon_months,
)
from roadmapper.models.roadmap import Roadmap

_MONTHS_RE = re.compile(MONTHS_PATTERN, re.IGNORECASE)
_WEEKS_RE = re.compile(WEEKS_PATTERN, re.IGNORECASE)


@dataclass
class TimelineEntry:
    """Position of one phase on the estimated timeline."""
    name: str
    priority: str
    start_month: int
    duration_months: int
    display_months: int
    parsed: bool = True
    dependencies: List[str] = field(default_factory=list)

    @property
    def end_month(self) -> int:
        return self.start_month + self.duration_months


def parse_duration_months(duration: Optional[str]) -> Optional[int]:
    """Parse a duration into months, or None if it matches no known pattern.

    A month count wins over a week count. Weeks are rounded up to whole
    months at four weeks per month.
    """
    if not duration:
        return None
    match = _MONTHS_RE.search(duration)
    if match:
        return int(match.group(1))
    match = _WEEKS_RE.search(duration)
    if match:
        return math.ceil(int(match.group(1)) / WEEKS_PER_MONTH)
    return None


def estimate_duration_months(duration: Optional[str], default: Optional[int] = None) -> int:
    """Estimate a duration in whole months.

    Args:
        duration: Free-text duration such as "2 months" or "6 weeks".
        default: Months to use when the text can't be parsed. Defaults to config value.

    Returns:
        Estimated number of months.
    """
    months = parse_duration_months(duration)
    if months is not None:
        return months
    return default if default is not None else get_default_duration_months()


def build_timeline(
    roadmap: Roadmap,
    horizon_months: Optional[int] = None,
    default_months: Optional[int] = None,
) -> List[TimelineEntry]:
    """Lay phases out back to back, each starting where the previous ended.

    Args:
        roadmap: Roadmap to lay out.
        horizon_months: Visible window; display_months is clipped to it.
        default_months: Duration for phases whose text can't be parsed.

    Returns:
        One TimelineEntry per phase, in roadmap order.
    """
    horizon = horizon_months if horizon_months is not None else get_timeline_horizon_months()
    default = default_months if default_months is not None else get_default_duration_months()

    entries = []
    start = 0
    for phase in roadmap.phases:
        parsed = parse_duration_months(phase.duration)
        months = parsed if parsed is not None else default
        entries.append(
            TimelineEntry(
                name=phase.name,
                priority=phase.priority,
                start_month=start,
                duration_months=months,
                display_months=max(0, min(months, horizon - start)),
                parsed=parsed is not None,
                dependencies=list(phase.dependencies),
            )
        )
        start += months
    return entries


def total_months(roadmap: Roadmap, default_months: Optional[int] = None) -> int:
    """Estimated length of the whole roadmap in months."""
    return sum(
        estimate_duration_months(phase.duration, default_months)
        for phase in roadmap.phases
    )
