"""Main CLI entry point for synapse-env."""

import logging
from pathlib import Path

import click

from synapse_env.cli.helpers import ProjectContext
from synapse_env.core.constants import CONFIG_ENVVAR, WORKDIR_ENVVAR
from synapse_env.models.command import COMMAND_ALIASES, LifecycleCommand

from .commands.admin import admin, comp
from .commands.delete import delete
from .commands.generate import gen
from .commands.links import links
from .commands.restart import restart
from .commands.setup import restart_all, setup
from .commands.stop import pull, stop


class LifecycleGroup(click.Group):
    """Command group that prints help for unknown commands and resolves aliases."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None or cmd_name not in COMMAND_ALIASES:
            return command
        return self._alias_command(ctx, cmd_name)

    def resolve_command(self, ctx, args):
        if args and self.get_command(ctx, args[0]) is None:
            return "help", self.commands["help"], []
        return super().resolve_command(ctx, args)

    def _alias_command(self, ctx, alias):
        lifecycle_command, argument = COMMAND_ALIASES[alias]
        target = super().get_command(ctx, lifecycle_command.value)

        if lifecycle_command == LifecycleCommand.GENERATE:
            @click.command(alias, help=f"Alias for 'gen {argument}'.")
            @click.option('--force', '-f', is_flag=True, help='Overwrite existing files without asking')
            def alias_command(force):
                click.get_current_context().invoke(target, target=argument, force=force)
        elif lifecycle_command == LifecycleCommand.RESTART:
            @click.command(alias, help=f"Alias for 'restart {argument}'.")
            def alias_command():
                click.get_current_context().invoke(target, service=argument)
        else:
            @click.command(alias, help=f"Alias for '{lifecycle_command.value}'.")
            def alias_command():
                click.get_current_context().invoke(target)

        return alias_command


@click.group(cls=LifecycleGroup, invoke_without_command=True, no_args_is_help=False)
@click.option('--workdir', '-w', type=click.Path(file_okay=False, path_type=Path),
              envvar=WORKDIR_ENVVAR, default=None,
              help='Directory holding config.env and the generated files')
@click.option('--config', '-c', 'config_file', type=click.Path(dir_okay=False, path_type=Path),
              envvar=CONFIG_ENVVAR, default=None,
              help='Config file to read instead of <workdir>/config.env')
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.pass_context
def cli(ctx, workdir, config_file, verbose):
    """synapse-env - Spin up a local Synapse and friends for testing"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ProjectContext(
        workdir=(workdir or Path.cwd()).resolve(),
        config_file=config_file,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@click.command(name='help')
@click.pass_context
def help_command(ctx):
    """Show this help."""
    click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


# Register commands
cli.add_command(setup)
cli.add_command(restart_all)
cli.add_command(restart)
cli.add_command(stop)
cli.add_command(delete)
cli.add_command(pull)
cli.add_command(links)
cli.add_command(admin)
cli.add_command(comp)
cli.add_command(gen)
cli.add_command(help_command)


if __name__ == '__main__':
    cli()
