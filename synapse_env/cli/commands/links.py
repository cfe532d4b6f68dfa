"""Links command for synapse-env."""

import click

from synapse_env.cli.helpers import format_links, get_controller, handle_service_errors
from synapse_env.models.command import LifecycleCommand


@click.command()
def links():
    """Print links."""
    with handle_service_errors():
        controller = get_controller(check_programs=False)
        rows = controller.dispatch(LifecycleCommand.LINKS)

    click.echo("Links:\n")
    click.echo(format_links(rows))
