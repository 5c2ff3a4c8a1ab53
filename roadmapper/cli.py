"""
CLI for Roadmapper using .roadmapper/ folder-based storage.

Uses RoadmapperCore and managers exclusively.
"""
from pathlib import Path

import click

from roadmapper.commands.analytics import analytics
from roadmapper.commands.compare import compare_files, compare_saved, export, metrics
from roadmapper.commands.config import config
from roadmapper.commands.history import history
from roadmapper.commands.timeline import timeline


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="ROADMAPPER_DATA_DIR",
    default=None,
    help="Data directory (defaults to .roadmapper/ in the current directory).",
)
@click.version_option(package_name="roadmapper")
@click.pass_context
def cli(ctx, data_dir):
    """A command-line interface for comparing versions of a development roadmap."""
    ctx.obj = data_dir


cli.add_command(compare_files)
cli.add_command(compare_saved)
cli.add_command(metrics)
cli.add_command(export)
cli.add_command(timeline)
cli.add_command(history)
cli.add_command(analytics)
cli.add_command(config)


if __name__ == '__main__':
    cli()
