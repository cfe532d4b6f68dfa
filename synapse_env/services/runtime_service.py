"""Container runtime service wrapping the podman/docker CLIs."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.constants import PODMAN_COMPOSE, SUPPORTED_RUNTIMES
from .exceptions import MissingProgramsError, RuntimeCommandError, RuntimeServiceError

logger = logging.getLogger(__name__)


class RuntimeService:
    """Service for container runtime operations through its CLI."""

    def __init__(
        self,
        runtime: str = "podman",
        project_dir: Optional[Path] = None,
        project_name: Optional[str] = None,
        compose_file: Optional[Path] = None,
    ):
        """Initialize runtime service.

        Args:
            runtime: Runtime executable, ``podman`` or ``docker``
            project_dir: Directory compose commands run in (defaults to cwd)
            project_name: Compose project name
            compose_file: Path to the compose manifest
        """
        if runtime not in SUPPORTED_RUNTIMES:
            raise RuntimeServiceError(
                f"Unsupported container runtime '{runtime}'. "
                f"Choose one of: {', '.join(SUPPORTED_RUNTIMES)}"
            )
        self.runtime = runtime
        self.project_dir = project_dir or Path.cwd()
        self.project_name = project_name
        self.compose_file = compose_file
        self._compose_command: Optional[List[str]] = None

    @property
    def is_podman(self) -> bool:
        return self.runtime == "podman"

    def required_programs(self) -> List[str]:
        return [self.runtime]

    def check_required_programs(self) -> None:
        """Raise with every missing program listed at once."""
        missing = [p for p in self.required_programs() if shutil.which(p) is None]
        if missing:
            raise MissingProgramsError(missing)

    def _run(
        self,
        args: Sequence[str],
        check: bool = True,
        capture_output: bool = False,
        cwd: Optional[Path] = None,
    ) -> subprocess.CompletedProcess:
        """Run a runtime command with proper error handling.

        Args:
            args: Full command line
            check: Raise on non-zero exit status
            capture_output: Capture stdout and stderr
            cwd: Working directory

        Returns:
            Completed process result

        Raises:
            RuntimeCommandError: If the command fails
        """
        cmd = list(args)
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                cwd=cwd or self.project_dir,
                check=check,
                capture_output=capture_output,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.strip() if e.stderr else str(e)
            raise RuntimeCommandError(
                f"Command failed ({e.returncode}): {' '.join(cmd)}: {error_msg}",
                returncode=e.returncode,
                command=cmd,
            ) from e
        except OSError as e:
            raise RuntimeCommandError(
                f"Could not run {cmd[0]}: {e}", returncode=127, command=cmd
            ) from e

    def compose_command(self) -> List[str]:
        """Compose CLI prefix, preferring podman-compose when installed."""
        if self._compose_command is None:
            if self.is_podman and shutil.which(PODMAN_COMPOSE):
                self._compose_command = [PODMAN_COMPOSE]
            else:
                self._compose_command = [self.runtime, "compose"]
        return self._compose_command

    @property
    def uses_podman_compose(self) -> bool:
        return self.compose_command() == [PODMAN_COMPOSE]

    def compose(self, *args: str) -> subprocess.CompletedProcess:
        """Run a compose subcommand against the project manifest."""
        cmd = list(self.compose_command())
        if self.project_name:
            cmd.extend(["--project-name", self.project_name])
        if self.compose_file:
            cmd.extend(["--file", str(self.compose_file)])
        cmd.extend(args)
        return self._run(cmd)

    def up(self) -> None:
        """Bring up all services, recreating containers and pruning orphans."""
        if self.uses_podman_compose:
            # podman-compose has no --remove-orphans
            self.compose("up", "--detach", "--force-recreate")
        else:
            self.compose("up", "--detach", "--force-recreate", "--remove-orphans")

    def stop(self) -> None:
        self.compose("stop")

    def down(self) -> None:
        self.compose("down")

    def pull(self) -> None:
        self.compose("pull")

    def restart(self, container: str) -> None:
        self._run([self.runtime, "restart", container])
        logger.info(f"Restarted container: {container}")

    def exec(self, container: str, command: Sequence[str]) -> None:
        """Execute a command in a running container."""
        self._run([self.runtime, "exec", container, *command])

    def run(
        self,
        image: str,
        command: Sequence[str] = (),
        entrypoint: Optional[str] = None,
        volumes: Sequence[str] = (),
        capture_output: bool = False,
        user: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        """Run a throwaway container and wait for it to exit.

        Args:
            image: Image to run
            command: Arguments passed to the entrypoint
            entrypoint: Entrypoint override
            volumes: Volume specs in runtime syntax
            capture_output: Capture stdout and stderr
            user: ``uid:gid`` the container process runs as
        """
        cmd = [self.runtime, "run", "--rm", "--quiet"]
        if user:
            cmd.extend(["--user", user])
        if entrypoint:
            cmd.extend(["--entrypoint", entrypoint])
        for volume in volumes:
            cmd.extend(["--volume", volume])
        cmd.append(image)
        cmd.extend(command)
        return self._run(cmd, capture_output=capture_output)

    def remove_volume(self, name: str) -> bool:
        """Remove a named volume. Returns True if removed."""
        result = self._run([self.runtime, "volume", "rm", name], check=False, capture_output=True)
        if result.returncode != 0:
            logger.warning(f"Could not remove volume {name}: {(result.stderr or '').strip()}")
            return False
        logger.info(f"Removed volume: {name}")
        return True

    def unshare(self, command: Sequence[str]) -> None:
        """Run a host command inside podman's user namespace."""
        if not self.is_podman:
            raise RuntimeServiceError("User namespace helper is only available with podman")
        self._run(["podman", "unshare", *command])
