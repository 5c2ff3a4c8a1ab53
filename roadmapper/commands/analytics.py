"""
Analytics command group for Roadmapper.

Usage statistics for saved roadmaps.
"""

import click

from roadmapper.commands import echo_json, get_core, handle_errors
from roadmapper.managers.analytics import daily_data_to_csv


@click.group()
def analytics():
    """Show how saved roadmaps are being used.

    Interactions are stored in .roadmapper/analytics.json.
    """
    pass


@analytics.command(name="stats")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_obj
def stats(data_dir, json_output):
    """Shows usage totals for every saved roadmap."""
    with handle_errors():
        core = get_core(data_dir)
        usage = core.analytics.get_usage_stats(core.list_roadmaps(include_archived=True))

    if json_output:
        echo_json([s.model_dump(mode="json") for s in usage])
        return

    if not usage:
        click.echo("No saved roadmaps.")
        return

    for s in usage:
        click.echo(
            f"{s.roadmap_name}: {s.total_interactions} interactions, "
            f"{s.unique_users} users (views {s.view_count}, edits {s.edit_count}, "
            f"exports {s.export_count})"
        )


@analytics.command(name="show")
@click.argument("roadmap_id")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_obj
def show(data_dir, roadmap_id, json_output):
    """Shows detailed analytics for a saved roadmap."""
    with handle_errors():
        core = get_core(data_dir)
        record = core.history.get_roadmap(roadmap_id)
        details = core.analytics.get_detailed_analytics(record.id)

    if json_output:
        echo_json(details.model_dump(mode="json"))
        return

    click.echo(f"Analytics for {record.name}")
    click.echo("=========================")
    click.echo(f"Total events: {details.total_events}")
    click.echo(f"Unique users: {details.unique_users}")
    click.echo(f"Unique sessions: {details.unique_sessions}")
    for action, count in details.action_counts.items():
        click.echo(f"- {action}: {count}")
    trend = details.engagement_trend
    click.echo(
        f"Last 7 days: {trend.current} (previous {trend.previous}, {trend.change:+.1f}%)"
    )


@analytics.command(name="trending")
@click.option(
    "--limit", type=click.IntRange(min=1), default=None, help="Number of roadmaps to show."
)
@click.pass_obj
def trending(data_dir, limit):
    """Shows the roadmaps with the most recent activity."""
    with handle_errors():
        core = get_core(data_dir)
        usage = core.analytics.get_trending(
            core.list_roadmaps(include_archived=True),
            limit=limit or core.config.trending_limit,
        )

    if not usage:
        click.echo("No roadmap activity yet.")
        return

    for s in usage:
        click.echo(
            f"{s.roadmap_name}: last used {s.last_interaction_at:%Y-%m-%d %H:%M}, "
            f"{s.total_interactions} interactions"
        )


@analytics.command(name="export")
@click.argument("roadmap_id")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "csv"]),
    default="json",
    show_default=True,
)
@click.pass_obj
def export(data_dir, roadmap_id, fmt):
    """Exports analytics for a saved roadmap to stdout."""
    with handle_errors():
        core = get_core(data_dir)
        record = core.history.get_roadmap(roadmap_id)
        details = core.analytics.get_detailed_analytics(record.id)

    if fmt == "csv":
        click.echo(daily_data_to_csv(details.daily_data))
        return

    echo_json(
        {
            "roadmap": {
                "id": record.id,
                "name": record.name,
                "created_at": record.created_at.isoformat(),
            },
            "analytics": details.model_dump(mode="json"),
        }
    )
