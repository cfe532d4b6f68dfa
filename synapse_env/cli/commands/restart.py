"""Restart command for synapse-env."""

import click

from synapse_env.cli.helpers import get_controller, handle_service_errors
from synapse_env.models.command import RESTARTABLE_SERVICES, UNPROXIED_SERVICES, LifecycleCommand


@click.command()
@click.argument('service', type=click.Choice(RESTARTABLE_SERVICES))
def restart(service):
    """Restart one container (and nginx in front of it)."""
    with handle_service_errors():
        controller = get_controller()
        controller.dispatch(LifecycleCommand.RESTART, service)

    click.echo(f"Restarted {service}")
    if service not in UNPROXIED_SERVICES:
        click.echo("Restarted nginx")
