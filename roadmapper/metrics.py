"""
Comparison metrics.

Summary percentages and counts derived from a ComparisonResult and the two
roadmaps it was computed from.
"""

from typing import Optional

from roadmapper.constants import get_percentage_round_precision
from roadmapper.models.comparison import ComparisonMetrics, ComparisonResult
from roadmapper.models.roadmap import Roadmap
from roadmapper.utils import percentage


def calculate_metrics(
    before: Roadmap,
    after: Roadmap,
    result: ComparisonResult,
    round_precision: Optional[int] = None,
) -> ComparisonMetrics:
    """Calculate summary metrics for a comparison.

    Percentages with a zero denominator are reported as 0.0. The overall
    change percentage is relative to the mean phase count and capped at 100.

    Args:
        before: The older roadmap.
        after: The newer roadmap.
        result: Output of compare(before, after).
        round_precision: Decimal places for percentages. Defaults to config value.

    Returns:
        ComparisonMetrics for the comparison.
    """
    precision = (
        round_precision if round_precision is not None else get_percentage_round_precision()
    )

    total_phases_before = len(before.phases)
    total_phases_after = len(after.phases)
    total_tasks_before = before.total_tasks()
    total_tasks_after = after.total_tasks()

    added_tasks = sum(p.task_count for p in result.added_phases)
    removed_tasks = sum(p.task_count for p in result.removed_phases)
    for change in result.modified_phases:
        added_tasks += len(change.task_changes.added)
        removed_tasks += len(change.task_changes.removed)

    total_changes = (
        len(result.added_phases)
        + len(result.removed_phases)
        + len(result.modified_phases)
    )
    mean_phases = (total_phases_before + total_phases_after) / 2

    return ComparisonMetrics(
        total_phases_before=total_phases_before,
        total_phases_after=total_phases_after,
        total_tasks_before=total_tasks_before,
        total_tasks_after=total_tasks_after,
        added_phases_percent=percentage(
            len(result.added_phases), total_phases_after, precision
        ),
        removed_phases_percent=percentage(
            len(result.removed_phases), total_phases_before, precision
        ),
        modified_phases_percent=percentage(
            len(result.modified_phases), total_phases_before, precision
        ),
        added_tasks=added_tasks,
        removed_tasks=removed_tasks,
        priority_changes=sum(
            1 for c in result.modified_phases if c.priority_changed is not None
        ),
        duration_changes=sum(
            1 for c in result.modified_phases if c.duration_changed is not None
        ),
        overall_change_percent=min(
            percentage(total_changes, mean_phases, precision), 100.0
        ),
        phase_delta_percent=percentage(
            total_phases_after - total_phases_before, total_phases_before, precision
        ),
        task_delta_percent=percentage(
            total_tasks_after - total_tasks_before, total_tasks_before, precision
        ),
    )
