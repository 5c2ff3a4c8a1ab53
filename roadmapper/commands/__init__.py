"""
CLI commands for Roadmapper.

Helpers shared by the command modules.
"""

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import click

from roadmapper.core import RoadmapperCore
from roadmapper.exceptions import RoadmapperError


def get_core(data_dir: Optional[Path] = None) -> RoadmapperCore:
    """Create a RoadmapperCore for the data directory selected on the command line."""
    return RoadmapperCore(data_dir)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn Roadmapper errors into click errors with a non-zero exit code."""
    try:
        yield
    except RoadmapperError as e:
        raise click.ClickException(str(e))


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))
