"""
Compare commands for Roadmapper.

Diff two roadmaps (files or saved versions), show metrics, export reports.
"""

from pathlib import Path

import click

from roadmapper.commands import echo_json, get_core, handle_errors
from roadmapper.constants import EXPORT_FORMATS
from roadmapper.differ import ChangeType, compare, filter_changes
from roadmapper.export import default_export_filename
from roadmapper.managers.storage_manager import StorageManager
from roadmapper.metrics import calculate_metrics
from roadmapper.models.comparison import ComparisonMetrics, ComparisonResult
from roadmapper.utils import load_roadmap_file

FILTER_CHOICES = click.Choice([c.value for c in ChangeType])


def display_comparison(result: ComparisonResult, change_type=None) -> None:
    """Print a comparison result as text."""
    click.echo("Roadmap Comparison")
    click.echo("=========================")
    click.echo(f"Summary changed: {'yes' if result.summary_changed else 'no'}")
    click.echo()

    click.echo(f"Added Phases ({len(result.added_phases)}):")
    for phase in result.added_phases:
        click.echo(
            f"+ {phase.name} ({phase.priority}, {phase.duration or 'no duration'}) "
            f"- {phase.task_count} tasks"
        )
    click.echo()

    click.echo(f"Removed Phases ({len(result.removed_phases)}):")
    for phase in result.removed_phases:
        click.echo(
            f"- {phase.name} ({phase.priority}, {phase.duration or 'no duration'}) "
            f"- {phase.task_count} tasks"
        )
    click.echo()

    changes = filter_changes(result.modified_phases, change_type)
    click.echo(f"Modified Phases ({len(changes)}):")
    for change in changes:
        click.echo(f"~ {change.name}")
        if change.priority_changed:
            click.echo(
                f"  priority: {change.priority_changed.from_} → {change.priority_changed.to}"
            )
        if change.duration_changed:
            click.echo(
                f"  duration: {change.duration_changed.from_} → {change.duration_changed.to}"
            )
        if change.description_changed:
            click.echo("  description changed")
        for task in change.task_changes.added:
            click.echo(f"  + task: {task}")
        for task in change.task_changes.removed:
            click.echo(f"  - task: {task}")
        if change.dependencies_changed:
            for dep in change.dependencies_changed.added:
                click.echo(f"  + dependency: {dep}")
            for dep in change.dependencies_changed.removed:
                click.echo(f"  - dependency: {dep}")


def display_metrics(metrics: ComparisonMetrics) -> None:
    """Print comparison metrics as text."""
    click.echo("Comparison Metrics")
    click.echo("=========================")
    click.echo(f"Overall change: {metrics.overall_change_percent}%")
    click.echo(f"Added phases: {metrics.added_phases_percent}%")
    click.echo(f"Removed phases: {metrics.removed_phases_percent}%")
    click.echo(f"Modified phases: {metrics.modified_phases_percent}%")
    click.echo(f"Added tasks: {metrics.added_tasks}")
    click.echo(f"Removed tasks: {metrics.removed_tasks}")
    click.echo(f"Priority changes: {metrics.priority_changes}")
    click.echo(f"Duration changes: {metrics.duration_changes}")
    click.echo(
        f"Phases: {metrics.total_phases_before} → {metrics.total_phases_after} "
        f"({metrics.phase_delta_percent:+}%)"
    )
    click.echo(
        f"Tasks: {metrics.total_tasks_before} → {metrics.total_tasks_after} "
        f"({metrics.task_delta_percent:+}%)"
    )


def comparison_data(result: ComparisonResult, change_type=None) -> dict:
    data = result.model_dump(mode="json", by_alias=True)
    if change_type:
        data["modified_phases"] = [
            c.model_dump(mode="json", by_alias=True)
            for c in filter_changes(result.modified_phases, change_type)
        ]
    return data


@click.command(name="compare")
@click.argument("before", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("after", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--filter",
    "change_type",
    type=FILTER_CHOICES,
    default=None,
    help="Show only modified phases with this kind of change.",
)
@click.option(
    "-j", "--json", "json_output", is_flag=True, help="Output the comparison as JSON."
)
def compare_files(before, after, change_type, json_output):
    """Compares two roadmap JSON files."""
    with handle_errors():
        before_roadmap = load_roadmap_file(before)
        after_roadmap = load_roadmap_file(after)

    result = compare(before_roadmap, after_roadmap)
    if json_output:
        echo_json(comparison_data(result, change_type))
        return
    display_comparison(result, change_type)


@click.command(name="metrics")
@click.argument("before", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("after", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-j", "--json", "json_output", is_flag=True, help="Output metrics as JSON."
)
@click.pass_obj
def metrics(data_dir, before, after, json_output):
    """Shows change metrics between two roadmap JSON files."""
    with handle_errors():
        before_roadmap = load_roadmap_file(before)
        after_roadmap = load_roadmap_file(after)
        settings = StorageManager(data_dir).load_config()

    result = compare(before_roadmap, after_roadmap)
    comparison_metrics = calculate_metrics(
        before_roadmap,
        after_roadmap,
        result,
        round_precision=settings.percentage_round_precision,
    )
    if json_output:
        echo_json(comparison_metrics.model_dump(mode="json"))
        return
    display_metrics(comparison_metrics)


@click.command(name="compare-saved")
@click.argument("before_id")
@click.argument("after_id")
@click.option(
    "--filter",
    "change_type",
    type=FILTER_CHOICES,
    default=None,
    help="Show only modified phases with this kind of change.",
)
@click.option(
    "-j", "--json", "json_output", is_flag=True, help="Output comparison and metrics as JSON."
)
@click.pass_obj
def compare_saved(data_dir, before_id, after_id, change_type, json_output):
    """Compares two saved roadmaps by id."""
    with handle_errors():
        core = get_core(data_dir)
        comparison = core.compare_saved(before_id, after_id)

    if json_output:
        echo_json(
            {
                "before": {"id": comparison.before.id, "name": comparison.before.name},
                "after": {"id": comparison.after.id, "name": comparison.after.name},
                "comparison": comparison_data(comparison.result, change_type),
                "metrics": comparison.metrics.model_dump(mode="json"),
            }
        )
        return

    click.echo(f"Before: {comparison.before.name} ({comparison.before.id})")
    click.echo(f"After:  {comparison.after.name} ({comparison.after.id})")
    click.echo()
    display_comparison(comparison.result, change_type)
    click.echo()
    display_metrics(comparison.metrics)


@click.command(name="export")
@click.argument("before_id")
@click.argument("after_id")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(EXPORT_FORMATS),
    default="json",
    show_default=True,
    help="Report format.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file. Defaults to roadmap-comparison-<date>.<ext>; use - for stdout.",
)
@click.pass_obj
def export(data_dir, before_id, after_id, fmt, output):
    """Exports a comparison of two saved roadmaps."""
    with handle_errors():
        core = get_core(data_dir)
        content = core.export_comparison(before_id, after_id, fmt)

    if output is not None and str(output) == "-":
        click.echo(content)
        return

    target = output or Path(default_export_filename(fmt))
    try:
        target.write_text(content)
    except OSError as e:
        raise click.ClickException(f"Could not write export to {target}: {e}")
    click.echo(f"Comparison exported to {target}")
