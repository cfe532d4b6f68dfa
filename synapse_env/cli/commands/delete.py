"""Delete command for synapse-env."""

import click
from rich.console import Console

from synapse_env.cli.helpers import get_controller, handle_service_errors
from synapse_env.core.constants import DELETE_CONFIRMATION
from synapse_env.models.command import LifecycleCommand


@click.command()
def delete():
    """Delete the environment, Synapse/Postgres data, and config files."""
    console = Console()
    with handle_service_errors():
        controller = get_controller()
        paths = controller.paths

        targets = [path.name + "/" for path in paths.generated_dirs]
        targets += [path.name for path in paths.generated_files]
        click.echo(
            "This deletes the environment, its volumes, and the files: "
            + ", ".join(targets)
        )
        verification = click.prompt(
            f"Enter {DELETE_CONFIRMATION} to confirm", default="", show_default=False
        )

        if not controller.dispatch(LifecycleCommand.DELETE, verification):
            click.echo("Aborted, nothing was deleted")
            return

    console.print("[red]Environment deleted[/red]")
