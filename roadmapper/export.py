"""
Comparison report export.

Renders a comparison of two saved roadmaps as JSON or Markdown. Inputs are
read only.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from roadmapper.constants import EXPORT_EXTENSIONS, EXPORT_FILENAME_PREFIX
from roadmapper.exceptions import ValidationError
from roadmapper.models.comparison import ComparisonMetrics, ComparisonResult
from roadmapper.models.records import RoadmapRecord
from roadmapper.utils import format_date


def _record_summary(record: RoadmapRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "created_at": record.created_at.isoformat(),
        "roadmap_data": record.roadmap_data.model_dump(mode="json"),
    }


def build_export_payload(
    before: RoadmapRecord,
    after: RoadmapRecord,
    result: ComparisonResult,
    metrics: ComparisonMetrics,
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Collect a comparison and both source roadmaps into one JSON-ready dict."""
    return {
        "comparison": result.model_dump(mode="json", by_alias=True),
        "metrics": metrics.model_dump(mode="json"),
        "before": _record_summary(before),
        "after": _record_summary(after),
        "exported_at": (exported_at or datetime.now()).isoformat(),
    }


def render_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2)


def render_markdown(
    before: RoadmapRecord,
    after: RoadmapRecord,
    result: ComparisonResult,
    metrics: ComparisonMetrics,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render a human-readable comparison report."""
    generated_at = generated_at or datetime.now()
    lines: List[str] = [
        "# Roadmap Comparison Report",
        "",
        f"Generated on {generated_at.strftime('%Y-%m-%d %H:%M')}",
        "",
        "## Comparison Summary",
        "",
    ]

    for label, record, phases, tasks in (
        ("Before", before, metrics.total_phases_before, metrics.total_tasks_before),
        ("After", after, metrics.total_phases_after, metrics.total_tasks_after),
    ):
        lines += [
            f"### {label}: {record.name}",
            "",
            f"- Created: {format_date(record.created_at)}",
            f"- Phases: {phases}",
            f"- Tasks: {tasks}",
            "",
        ]

    lines += [
        "### Changes Overview",
        "",
        f"- Added Phases: {len(result.added_phases)}",
        f"- Removed Phases: {len(result.removed_phases)}",
        f"- Modified Phases: {len(result.modified_phases)}",
        f"- Added Tasks: {metrics.added_tasks}",
        f"- Removed Tasks: {metrics.removed_tasks}",
        f"- Priority Changes: {metrics.priority_changes}",
        f"- Duration Changes: {metrics.duration_changes}",
        f"- Summary Changed: {'yes' if result.summary_changed else 'no'}",
        f"- Overall Change: {metrics.overall_change_percent}%",
        "",
        "## Detailed Changes",
        "",
    ]

    if result.added_phases:
        lines += ["### Added Phases", ""]
        for phase in result.added_phases:
            lines.append(f"- **{phase.name}** ({phase.priority}, {phase.duration})")
            if phase.description:
                lines.append(f"  {phase.description}")
            lines.append(f"  Tasks: {phase.task_count}")
        lines.append("")

    if result.removed_phases:
        lines += ["### Removed Phases", ""]
        for phase in result.removed_phases:
            lines.append(f"- **{phase.name}** ({phase.priority}, {phase.duration})")
            lines.append(f"  Tasks: {phase.task_count}")
        lines.append("")

    if result.modified_phases:
        lines += ["### Modified Phases", ""]
        for change in result.modified_phases:
            lines.append(f"#### {change.name}")
            lines.append("")
            if change.priority_changed:
                lines.append(
                    f"- Priority: {change.priority_changed.from_} → {change.priority_changed.to}"
                )
            if change.duration_changed:
                lines.append(
                    f"- Duration: {change.duration_changed.from_} → {change.duration_changed.to}"
                )
            if change.description_changed:
                lines.append("- Description changed")
            for task in change.task_changes.added:
                lines.append(f"- Added task: {task}")
            for task in change.task_changes.removed:
                lines.append(f"- Removed task: {task}")
            if change.dependencies_changed:
                for dep in change.dependencies_changed.added:
                    lines.append(f"- Added dependency: {dep}")
                for dep in change.dependencies_changed.removed:
                    lines.append(f"- Removed dependency: {dep}")
            lines.append("")

    if not result.has_changes:
        lines += ["No changes.", ""]

    return "\n".join(lines)


def default_export_filename(fmt: str, when: Optional[datetime] = None) -> str:
    """File name for an exported report, e.g. roadmap-comparison-2024-12-31.md."""
    if fmt not in EXPORT_EXTENSIONS:
        raise ValidationError(
            f"Unsupported export format '{fmt}'. Use one of: {', '.join(EXPORT_EXTENSIONS)}"
        )
    date = format_date(when or datetime.now())
    return f"{EXPORT_FILENAME_PREFIX}-{date}.{EXPORT_EXTENSIONS[fmt]}"
