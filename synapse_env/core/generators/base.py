"""Shared protocol for config file generators."""

import logging
from pathlib import Path
from typing import Callable, List, Optional

import click

from ...models.environment import EnvironmentConfig
from ...models.paths import ProjectPaths
from ...services.exceptions import GenerationError
from ...services.runtime_service import RuntimeService
from ...utils.permissions_manager import PermissionsManager

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def prompt_confirm(message: str) -> bool:
    """Ask a yes/no question, defaulting to no."""
    return click.confirm(message, default=False)


def never_confirm(message: str) -> bool:
    """Decline every overwrite, used to only create missing files."""
    logger.debug(f"Keeping existing files: {message}")
    return False


class ConfigGenerator:
    """Base class for generators owning one or more files.

    Subclasses set ``name``, implement ``targets`` and ``render``, and may
    override ``enabled``.
    """

    name = ""

    def __init__(
        self,
        env: EnvironmentConfig,
        paths: ProjectPaths,
        runtime: RuntimeService,
        confirm: Optional[Confirm] = None,
        force: bool = False,
    ):
        self.env = env
        self.paths = paths
        self.runtime = runtime
        self.confirm = confirm or prompt_confirm
        self.force = force
        self.permissions = PermissionsManager(runtime)

    def targets(self) -> List[Path]:
        """Files whose presence triggers the overwrite prompt."""
        raise NotImplementedError

    def enabled(self) -> bool:
        return True

    def render(self) -> None:
        """Write the target files. Prior outputs are already removed."""
        raise NotImplementedError

    def remove_previous(self) -> None:
        for target in self.targets():
            if target.exists():
                target.unlink()

    def should_write(self) -> bool:
        existing = [target for target in self.targets() if target.exists()]
        if not existing or self.force:
            return True
        names = " and ".join(str(target) for target in existing)
        return self.confirm(f"Overwrite {names}?")

    def generate(self) -> bool:
        """Run the generator. Returns True if files were written.

        Raises:
            IncompatibleFeaturesError: Before anything is written
            GenerationError: If a target file cannot be written
        """
        self.env.validate_features()

        if not self.enabled():
            logger.debug(f"Skipping {self.name}: service disabled")
            return False

        if not self.should_write():
            logger.info(f"Skipping {self.name}: existing files kept")
            return False

        try:
            self.remove_previous()
            self.render()
        except OSError as e:
            raise GenerationError(f"Could not write {self.name} config: {e}") from e
        logger.info(f"Generated {self.name} config")
        return True
