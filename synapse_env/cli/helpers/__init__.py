"""CLI Helper Functions for synapse-env.

This module provides reusable helper functions for CLI commands to reduce
code duplication and standardize behavior across all commands.

The helpers provide:
- Working directory and config file resolution
- Construction of the lifecycle controller
- Consistent error reporting for service errors
- Table formatting for output
"""

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

import click
from tabulate import tabulate

from synapse_env.core.lifecycle import LifecycleController
from synapse_env.models.environment import EnvironmentConfig
from synapse_env.models.paths import ProjectPaths
from synapse_env.services.exceptions import ServiceError
from synapse_env.services.runtime_service import RuntimeService
from synapse_env.utils.config_loader import ConfigLoader


@dataclass
class ProjectContext:
    """Options given to the top-level command."""

    workdir: Path
    config_file: Optional[Path] = None

    @property
    def paths(self) -> ProjectPaths:
        return ProjectPaths(self.workdir)

    def load_env(self) -> EnvironmentConfig:
        return ConfigLoader(self.workdir, self.config_file).load()


def get_project_context() -> ProjectContext:
    """Get the project context set up by the top-level command.

    Falls back to the current directory when a command is invoked on its own.
    """
    ctx = click.get_current_context(silent=True)
    project = ctx.find_object(ProjectContext) if ctx else None
    return project or ProjectContext(workdir=Path.cwd())


def get_controller(check_programs: bool = True) -> LifecycleController:
    """Load the config and build a lifecycle controller.

    Args:
        check_programs: Fail early if the container runtime is missing

    Raises:
        ServiceError: On config or prerequisite errors
    """
    project = get_project_context()
    env = project.load_env()
    paths = project.paths
    runtime = RuntimeService(
        env.container_runtime,
        project_dir=paths.workdir,
        project_name=paths.project_name,
        compose_file=paths.compose_file,
    )
    if check_programs:
        runtime.check_required_programs()
    return LifecycleController(env, paths, runtime)


@contextmanager
def handle_service_errors() -> Iterator[None]:
    """Report service errors on stderr and exit with their status."""
    try:
        yield
    except ServiceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)


def format_links(rows: Sequence[Tuple[str, str]]) -> str:
    """Format label/URL pairs as an aligned two-column list."""
    return tabulate([(f"- {label}:", url) for label, url in rows], tablefmt="plain")


def format_written(written: List[str]) -> str:
    if not written:
        return "No config files were written"
    return f"Generated: {', '.join(written)}"
