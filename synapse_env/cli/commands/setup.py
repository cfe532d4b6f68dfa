"""Setup and restart-all commands for synapse-env."""

import click
from rich.console import Console

from synapse_env.cli.helpers import format_written, get_controller, handle_service_errors
from synapse_env.models.command import LifecycleCommand


@click.command()
@click.option('--force', '-f', is_flag=True, help='Overwrite existing config files without asking')
def setup(force):
    """Create, edit, (re)start the environment."""
    console = Console()
    with handle_service_errors():
        controller = get_controller()
        written = controller.dispatch(LifecycleCommand.SETUP, force=force)

    console.print(format_written(written))
    console.print("[green]Environment is up[/green]")
    click.echo("Run 'synapse-env links' to see where everything lives.")


@click.command('restart-all')
def restart_all():
    """Recreate all containers and remove orphans.

    Missing config files are generated; existing ones are kept.
    """
    console = Console()
    with handle_service_errors():
        controller = get_controller()
        written = controller.dispatch(LifecycleCommand.RESTART_ALL)

    if written:
        console.print(format_written(written))
    console.print("[green]Restarted all containers[/green]")
