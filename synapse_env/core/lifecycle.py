"""Lifecycle controller mapping commands to runtime actions."""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..models.command import RESTARTABLE_SERVICES, UNPROXIED_SERVICES, LifecycleCommand
from ..models.environment import EnvironmentConfig
from ..models.paths import ProjectPaths
from ..services.exceptions import FilePermissionError, ServiceError
from ..services.runtime_service import RuntimeService
from ..utils.permissions_manager import PermissionsManager
from .constants import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    ADMIN_USERNAME,
    DELETE_CONFIRMATION,
    NAMED_VOLUMES,
)
from .generators import GENERATORS, ConfigGenerator, never_confirm
from .generators.base import Confirm

logger = logging.getLogger(__name__)


class LifecycleController:
    """Runs lifecycle commands against one working directory.

    Holds no container state; every action is a runtime CLI call.
    """

    def __init__(
        self,
        env: EnvironmentConfig,
        paths: ProjectPaths,
        runtime: RuntimeService,
        confirm: Optional[Confirm] = None,
    ):
        self.env = env
        self.paths = paths
        self.runtime = runtime
        self.confirm = confirm
        self.permissions = PermissionsManager(runtime)

    def generator(
        self, target: str, confirm: Optional[Confirm] = None, force: bool = False
    ) -> ConfigGenerator:
        generator_class = GENERATORS[target]
        return generator_class(
            self.env, self.paths, self.runtime, confirm=confirm or self.confirm, force=force
        )

    def generate(self, target: str, force: bool = False) -> bool:
        """Regenerate one file set. Returns True if it was written."""
        return self.generator(target, force=force).generate()

    def generate_all(self, confirm: Optional[Confirm] = None, force: bool = False) -> List[str]:
        """Run every generator in setup order. Returns the names written."""
        self.env.validate_features()
        written = []
        for target in GENERATORS:
            if self.generator(target, confirm=confirm, force=force).generate():
                written.append(target)
        return written

    def bring_up(self) -> None:
        self.runtime.up()
        self.runtime.restart(self.paths.container_name("nginx"))

    def setup(self, force: bool = False) -> List[str]:
        """Create, edit and (re)start the environment."""
        written = self.generate_all(force=force)
        self.runtime.pull()
        self.bring_up()
        return written

    def restart_all(self) -> List[str]:
        """Recreate all containers, creating only missing config files."""
        written = self.generate_all(confirm=never_confirm)
        self.bring_up()
        return written

    def restart(self, service: str) -> None:
        """Restart one container and the proxy in front of it."""
        if service not in RESTARTABLE_SERVICES:
            raise ServiceError(f"Unknown service '{service}'")
        container = self.paths.container_name(service)
        self.runtime.restart(container)
        if service == "mas":
            self.runtime.exec(container, ["mas-cli", "config", "check"])
            self.runtime.exec(container, ["mas-cli", "config", "sync", "--prune"])
        if service not in UNPROXIED_SERVICES:
            self.runtime.restart(self.paths.container_name("nginx"))

    def stop(self) -> None:
        self.runtime.stop()

    def pull(self) -> None:
        self.runtime.pull()

    def delete(self, confirmation: str) -> bool:
        """Tear everything down if the confirmation phrase matches.

        Returns False, with nothing touched, on any other input.
        """
        if confirmation != DELETE_CONFIRMATION:
            logger.info("Delete not confirmed, nothing removed")
            return False

        if self.paths.compose_file.exists():
            self.runtime.down()
        for volume in NAMED_VOLUMES:
            self.runtime.remove_volume(self.paths.volume_name(volume))
        for path in self.paths.generated_files:
            if path.exists():
                try:
                    path.unlink()
                except OSError as e:
                    raise FilePermissionError(f"Could not remove {path}: {e}") from e
                logger.info(f"Removed file: {path}")
        for path in self.paths.generated_dirs:
            self.permissions.remove_tree(path)
        return True

    def links(self) -> List[Tuple[str, str]]:
        """Externally reachable URL of every enabled service."""
        env = self.env
        rows = [
            ("Synapse server name", env.server_name),
            ("Synapse endpoint", env.synapse_url),
        ]
        if env.enable_adminer:
            rows.append(("Adminer", env.url(env.adminer_host)))
        if env.enable_element_web:
            rows.append(("Element Web", env.url(env.element_host)))
        if env.enable_mas:
            rows.append(("MAS", env.url(env.mas_host)))
            rows.append(("MAS Swagger UI", f"{env.url(env.mas_host)}/api/doc/"))
        if env.enable_mailhog:
            rows.append(("Mailhog", env.url(env.mailhog_host)))
        if env.enable_hookshot:
            rows.append(("Hookshot webhooks", f"{env.url(env.hookshot_host)}/webhook/"))
        if env.enable_synapse_admin:
            rows.append((
                "Synapse Admin",
                f"{env.url(env.synapse_admin_host)}?username={ADMIN_USERNAME}"
                f"&password={ADMIN_PASSWORD}&server={env.synapse_url}",
            ))
        return rows

    def create_admin(self) -> None:
        """Create the admin account through MAS or Synapse."""
        if self.env.enable_mas:
            self.runtime.exec(self.paths.container_name("mas"), [
                "mas-cli", "manage", "register-user",
                "--admin",
                "--email", ADMIN_EMAIL,
                "--ignore-password-complexity",
                "--password", ADMIN_PASSWORD,
                "--yes",
                ADMIN_USERNAME,
            ])
        else:
            self.runtime.exec(self.paths.container_name("synapse"), [
                "register_new_matrix_user",
                "--admin",
                "--config", "/data/homeserver.yaml",
                "--password", ADMIN_PASSWORD,
                "--user", ADMIN_USERNAME,
            ])

    def issue_compat_token(self) -> bool:
        """Issue a MAS compatibility token for the admin user."""
        if not self.env.enable_mas:
            logger.info("MAS is disabled, no compatibility token issued")
            return False
        self.runtime.exec(self.paths.container_name("mas"), [
            "mas-cli", "manage", "issue-compatibility-token",
            "--yes-i-want-to-grant-synapse-admin-privileges",
            ADMIN_USERNAME,
        ])
        return True

    def dispatch(self, command: LifecycleCommand, argument: Optional[str] = None, force: bool = False):
        """Run a lifecycle command by its enum value.

        ``argument`` is the service for restart, the target for generate and
        the typed confirmation for delete.
        """
        actions: Dict[LifecycleCommand, Callable] = {
            LifecycleCommand.SETUP: lambda: self.setup(force=force),
            LifecycleCommand.RESTART_ALL: self.restart_all,
            LifecycleCommand.RESTART: lambda: self.restart(argument),
            LifecycleCommand.STOP: self.stop,
            LifecycleCommand.DELETE: lambda: self.delete(argument or ""),
            LifecycleCommand.PULL: self.pull,
            LifecycleCommand.LINKS: self.links,
            LifecycleCommand.ADMIN: self.create_admin,
            LifecycleCommand.COMPAT_TOKEN: self.issue_compat_token,
            LifecycleCommand.GENERATE: lambda: self.generate(argument, force=force),
        }
        if command not in actions:
            raise ServiceError(f"Command '{command.value}' has no lifecycle action")
        logger.debug(f"Dispatching {command.value} {argument or ''}".rstrip())
        return actions[command]()
