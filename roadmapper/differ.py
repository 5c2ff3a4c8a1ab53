"""
Roadmap differ.

Computes a structural diff between two versions of a roadmap: phases added,
removed or modified (matched by name), and whether the summary changed.
Pure functions with no I/O; inputs are never mutated.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from roadmapper.models.comparison import (
    ComparisonResult,
    ComparisonStatistics,
    CountPair,
    FieldChange,
    ListChange,
    PhaseChange,
    PhaseChangeMetadata,
)
from roadmapper.models.roadmap import Phase, Roadmap, priority_level
from roadmapper.utils import percentage


class ChangeType(str, Enum):
    """Kinds of change a modified phase can carry."""

    PRIORITY = "priority"
    DURATION = "duration"
    TASKS = "tasks"
    DESCRIPTION = "description"
    DEPENDENCIES = "dependencies"


def _unique(values: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(values))


def diff_list(before: Iterable[str], after: Iterable[str]) -> ListChange:
    """Set difference of two string lists, keeping source order.

    Args:
        before: Values in the old version.
        after: Values in the new version.

    Returns:
        ListChange with added (in after order), removed and unchanged
        (in before order).
    """
    before_values = _unique(before)
    after_values = _unique(after)
    before_set = set(before_values)
    after_set = set(after_values)

    return ListChange(
        added=[v for v in after_values if v not in before_set],
        removed=[v for v in before_values if v not in after_set],
        unchanged=[v for v in before_values if v in after_set],
    )


def _field_change(before: str, after: str) -> Optional[FieldChange]:
    if before == after:
        return None
    return FieldChange(from_=before, to=after)


def diff_phase(before: Phase, after: Phase) -> Optional[PhaseChange]:
    """Compare two versions of the same phase field by field.

    Args:
        before: Phase from the old roadmap.
        after: Phase with the same name from the new roadmap.

    Returns:
        PhaseChange if any field differs, None if the phase is unchanged.
    """
    task_changes = diff_list(before.tasks, after.tasks)
    dependency_changes = diff_list(before.dependencies, after.dependencies)

    priority_changed = _field_change(before.priority, after.priority)
    duration_changed = _field_change(before.duration, after.duration)
    description_changed = before.description != after.description

    if not (
        task_changes.has_changes
        or dependency_changes.has_changes
        or priority_changed
        or duration_changed
        or description_changed
    ):
        return None

    before_level = priority_level(before.priority)
    after_level = priority_level(after.priority)
    metadata = PhaseChangeMetadata(
        task_count=CountPair(before=before.task_count, after=after.task_count),
        task_change_percentage=percentage(
            len(task_changes.added) + len(task_changes.removed), before.task_count
        ),
        priority_level=CountPair(before=before_level, after=after_level),
        priority_change=after_level - before_level if priority_changed else 0,
    )

    return PhaseChange(
        name=before.name,
        task_changes=task_changes,
        priority_changed=priority_changed,
        duration_changed=duration_changed,
        description_changed=description_changed,
        dependencies_changed=dependency_changes if dependency_changes.has_changes else None,
        metadata=metadata,
    )


def _ordered_unique_phases(roadmap: Roadmap, phase_map: Dict[str, Phase]) -> List[Phase]:
    # Order of first appearance, contents of the mapped (last) occurrence
    return [phase_map[name] for name in _unique(roadmap.phase_names())]


def compare(before: Roadmap, after: Roadmap) -> ComparisonResult:
    """Compute the structural diff between two roadmaps.

    Phases are matched by name. If a roadmap was built without validation
    and repeats a phase name, the last occurrence wins.

    Args:
        before: The older roadmap.
        after: The newer roadmap.

    Returns:
        ComparisonResult with added, removed and modified phases, the
        summary flag, and overall statistics.
    """
    before_map = before.phase_map()
    after_map = after.phase_map()

    added_phases = [
        phase
        for phase in _ordered_unique_phases(after, after_map)
        if phase.name not in before_map
    ]
    removed_phases = [
        phase
        for phase in _ordered_unique_phases(before, before_map)
        if phase.name not in after_map
    ]

    modified_phases = []
    for phase in _ordered_unique_phases(before, before_map):
        if phase.name not in after_map:
            continue
        change = diff_phase(phase, after_map[phase.name])
        if change is not None:
            modified_phases.append(change)

    total_tasks_before = before.total_tasks()
    total_tasks_after = after.total_tasks()
    added_tasks_count = sum(p.task_count for p in added_phases) + sum(
        len(c.task_changes.added) for c in modified_phases
    )
    removed_tasks_count = sum(p.task_count for p in removed_phases) + sum(
        len(c.task_changes.removed) for c in modified_phases
    )

    statistics = ComparisonStatistics(
        phase_count=CountPair(before=len(before.phases), after=len(after.phases)),
        task_count=CountPair(before=total_tasks_before, after=total_tasks_after),
        added_tasks_count=added_tasks_count,
        removed_tasks_count=removed_tasks_count,
        change_percentage=percentage(
            added_tasks_count + removed_tasks_count, total_tasks_before
        ),
    )

    return ComparisonResult(
        added_phases=[phase.model_copy(deep=True) for phase in added_phases],
        removed_phases=[phase.model_copy(deep=True) for phase in removed_phases],
        modified_phases=modified_phases,
        summary_changed=before.summary != after.summary,
        statistics=statistics,
    )


def has_change(change: PhaseChange, change_type: ChangeType) -> bool:
    """Check whether a modified phase carries the given kind of change."""
    if change_type == ChangeType.PRIORITY:
        return change.priority_changed is not None
    if change_type == ChangeType.DURATION:
        return change.duration_changed is not None
    if change_type == ChangeType.TASKS:
        return change.tasks_changed
    if change_type == ChangeType.DESCRIPTION:
        return change.description_changed
    if change_type == ChangeType.DEPENDENCIES:
        return change.dependencies_changed is not None
    return False


def filter_changes(
    changes: List[PhaseChange], change_type: Optional[ChangeType | str] = None
) -> List[PhaseChange]:
    """Keep only modified phases with the given kind of change.

    Args:
        changes: Modified phases from a ComparisonResult.
        change_type: Kind of change to keep. None keeps everything.

    Returns:
        Filtered list in the original order.
    """
    if not change_type:
        return list(changes)
    change_type = ChangeType(change_type)
    return [change for change in changes if has_change(change, change_type)]
