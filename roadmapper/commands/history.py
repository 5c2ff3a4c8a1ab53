"""
History command group for Roadmapper.

Save, list, show, archive and delete roadmap versions.
"""

from pathlib import Path

import click

from roadmapper.commands import echo_json, get_core, handle_errors
from roadmapper.utils import format_date, load_roadmap_file


@click.group()
def history():
    """Manage saved roadmap versions.

    Saved roadmaps are stored in .roadmapper/history.json.
    """
    pass


@history.command(name="save")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "-n", required=True, help="Name of the saved version.")
@click.option("--description", "-d", default="", help="Description of the version.")
@click.pass_obj
def save(data_dir, file, name, description):
    """Saves a roadmap JSON file as a new version."""
    with handle_errors():
        roadmap = load_roadmap_file(file)
        record = get_core(data_dir).save_roadmap(name, roadmap, description)
    click.echo(f"Saved roadmap '{record.name}' ({record.id})")


@history.command(name="list")
@click.option(
    "--all", "include_archived", is_flag=True, help="Include archived roadmaps."
)
@click.option("-j", "--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_obj
def list_roadmaps(data_dir, include_archived, json_output):
    """Lists saved roadmaps, newest first."""
    with handle_errors():
        records = get_core(data_dir).list_roadmaps(include_archived)

    if json_output:
        echo_json(
            [
                {
                    "id": r.id,
                    "name": r.name,
                    "description": r.description,
                    "status": r.status,
                    "created_at": r.created_at.isoformat(),
                    "created_by": r.created_by,
                    "phases": len(r.roadmap_data.phases),
                }
                for r in records
            ]
        )
        return

    if not records:
        click.echo("No saved roadmaps.")
        return

    for record in records:
        archived = " [archived]" if record.status == "archived" else ""
        click.echo(
            f"{record.id}  {format_date(record.created_at)}  {record.name}"
            f" ({len(record.roadmap_data.phases)} phases){archived}"
        )


@history.command(name="show")
@click.argument("roadmap_id")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_obj
def show(data_dir, roadmap_id, json_output):
    """Shows a saved roadmap."""
    with handle_errors():
        record = get_core(data_dir).view_roadmap(roadmap_id)

    if json_output:
        echo_json(record.model_dump(mode="json"))
        return

    roadmap = record.roadmap_data
    click.echo(f"{record.name} ({record.status})")
    if record.description:
        click.echo(record.description)
    click.echo(f"Created {format_date(record.created_at)} by {record.created_by}")
    click.echo()
    click.echo(f"Summary: {roadmap.summary}")
    click.echo()
    for index, phase in enumerate(roadmap.phases, start=1):
        click.echo(f"{index}. {phase.name} [{phase.priority}] {phase.duration}")
        if phase.dependencies:
            click.echo(f"   depends on: {', '.join(phase.dependencies)}")
        for task in phase.tasks:
            click.echo(f"   - {task}")


@history.command(name="archive")
@click.argument("roadmap_id")
@click.pass_obj
def archive(data_dir, roadmap_id):
    """Archives a saved roadmap."""
    with handle_errors():
        record = get_core(data_dir).archive_roadmap(roadmap_id)
    click.echo(f"Archived roadmap '{record.name}'")


@history.command(name="delete")
@click.argument("roadmap_id")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_obj
def delete(data_dir, roadmap_id, yes):
    """Deletes a saved roadmap."""
    if not yes:
        click.confirm(f"Delete roadmap {roadmap_id}?", abort=True)
    with handle_errors():
        record = get_core(data_dir).delete_roadmap(roadmap_id)
    click.echo(f"Deleted roadmap '{record.name}'")
