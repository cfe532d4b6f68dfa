"""Admin account commands for synapse-env."""

import click

from synapse_env.cli.helpers import get_controller, handle_service_errors
from synapse_env.core.constants import ADMIN_PASSWORD, ADMIN_USERNAME
from synapse_env.models.command import LifecycleCommand


@click.command()
def admin():
    """Create Synapse admin account (username: admin. password: admin)."""
    with handle_service_errors():
        get_controller().dispatch(LifecycleCommand.ADMIN)
    click.echo(f"Created admin account {ADMIN_USERNAME}/{ADMIN_PASSWORD}")


@click.command()
def comp():
    """Create MAS compatibility admin token for user admin."""
    with handle_service_errors():
        issued = get_controller().dispatch(LifecycleCommand.COMPAT_TOKEN)
    if not issued:
        click.echo("MAS is disabled, no compatibility token needed")
