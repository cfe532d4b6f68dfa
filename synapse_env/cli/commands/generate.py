"""Config regeneration command for synapse-env."""

import click
from rich.console import Console

from synapse_env.cli.helpers import get_controller, handle_service_errors
from synapse_env.models.command import GenerateTarget, LifecycleCommand


@click.command()
@click.argument('target', type=click.Choice([target.value for target in GenerateTarget]))
@click.option('--force', '-f', is_flag=True, help='Overwrite existing files without asking')
def gen(target, force):
    """Regenerate one config file set.

    TARGET is one of compose, element, hookshot, mas, nginx or synapse.
    Running containers are not restarted.
    """
    console = Console()
    with handle_service_errors():
        controller = get_controller()
        written = controller.dispatch(LifecycleCommand.GENERATE, target, force=force)

    if written:
        console.print(f"[green]Regenerated {target} config[/green]")
    else:
        click.echo(f"Kept existing {target} config")
