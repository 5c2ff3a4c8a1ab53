"""
Timeline command for Roadmapper.

Shows an estimated month-by-month layout of a roadmap's phases.
"""

from dataclasses import asdict
from pathlib import Path

import click

from roadmapper.commands import echo_json, get_core, handle_errors
from roadmapper.managers.storage_manager import StorageManager
from roadmapper.timeline import build_timeline
from roadmapper.utils import load_roadmap_file


@click.command(name="timeline")
@click.argument("source")
@click.option(
    "--saved",
    is_flag=True,
    help="Treat SOURCE as the id of a saved roadmap instead of a file path.",
)
@click.option(
    "--horizon",
    type=click.IntRange(min=1),
    default=None,
    help="Number of months shown in the chart.",
)
@click.option("-j", "--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_obj
def timeline(data_dir, source, saved, horizon, json_output):
    """Shows an estimated timeline for a roadmap.

    Durations like "2 months" or "6 weeks" are converted to months; anything
    else counts as the default duration.
    """
    with handle_errors():
        if saved:
            core = get_core(data_dir)
            if horizon is not None:
                core.config.timeline_horizon_months = horizon
            entries = core.analyze_roadmap(source)
            horizon = core.config.timeline_horizon_months
        else:
            path = Path(source)
            if not path.is_file():
                raise click.BadParameter(f"File not found: {source}", param_hint="SOURCE")
            settings = StorageManager(data_dir).load_config()
            horizon = horizon or settings.timeline_horizon_months
            entries = build_timeline(
                load_roadmap_file(path),
                horizon_months=horizon,
                default_months=settings.default_duration_months,
            )

    if json_output:
        echo_json([asdict(entry) for entry in entries])
        return

    if not entries:
        click.echo("Roadmap has no phases.")
        return

    width = max(len(entry.name) for entry in entries)
    for entry in entries:
        bar = " " * min(entry.start_month, horizon) + "█" * entry.display_months
        marker = "" if entry.parsed else " (estimated)"
        click.echo(
            f"{entry.name.ljust(width)}  |{bar.ljust(horizon)}|  "
            f"month {entry.start_month + 1}, {entry.duration_months} mo{marker}"
        )
