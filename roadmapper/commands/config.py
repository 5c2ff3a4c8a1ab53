"""
Config command group for Roadmapper.

Commands for viewing and editing project configuration.
"""
import click
from pydantic import ValidationError

from roadmapper.commands import echo_json, handle_errors
from roadmapper.managers.storage_manager import StorageManager
from roadmapper.models.files import ConfigFile


def _check_key(key: str) -> None:
    if key not in ConfigFile.model_fields or key == "schema_version":
        raise click.BadParameter(
            f"Unknown config key '{key}'.", param_hint="KEY"
        )


@click.group()
def config():
    """View and edit project configuration.

    Configuration is stored in .roadmapper/config.json.
    """
    pass


@config.command(name="show")
@click.pass_obj
def show_config(data_dir):
    """Show current configuration."""
    with handle_errors():
        current = StorageManager(data_dir).load_config()
    echo_json(current.model_dump(mode="json"))


@config.command(name="get")
@click.argument("key")
@click.pass_obj
def get_config(data_dir, key):
    """Get a configuration value."""
    _check_key(key)
    with handle_errors():
        current = StorageManager(data_dir).load_config()
    click.echo(getattr(current, key))


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def set_config(data_dir, key, value):
    """Set a configuration value."""
    _check_key(key)
    with handle_errors():
        storage = StorageManager(data_dir)
        current = storage.load_config()
        try:
            setattr(current, key, value)
        except ValidationError as e:
            raise click.BadParameter(
                f"Invalid value for {key}: {e.errors()[0]['msg']}", param_hint="VALUE"
            )
        storage.save_config(current)
    click.echo(f"Set {key} = {getattr(current, key)}")
