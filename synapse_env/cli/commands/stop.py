"""Stop and pull commands for synapse-env."""

import click

from synapse_env.cli.helpers import get_controller, handle_service_errors
from synapse_env.models.command import LifecycleCommand


@click.command()
def stop():
    """Stop the environment without deleting it."""
    with handle_service_errors():
        get_controller().dispatch(LifecycleCommand.STOP)
    click.echo("Environment stopped")


@click.command()
def pull():
    """Pull all container images."""
    with handle_service_errors():
        get_controller().dispatch(LifecycleCommand.PULL)
    click.echo("Images pulled")
