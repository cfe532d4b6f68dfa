"""Ownership and mode management for bind-mounted data directories."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from ..core.constants import SERVICE_UID
from ..services.exceptions import FilePermissionError
from ..services.runtime_service import RuntimeService

logger = logging.getLogger(__name__)


class PermissionsManager:
    """Makes host directories usable by a container's fixed service UID."""

    def __init__(self, runtime: RuntimeService):
        """Initialize permissions manager."""
        self.runtime = runtime

    def container_user(self) -> Optional[str]:
        """User for throwaway containers writing into bind mounts.

        Rootless podman maps container root to the invoking user already.
        Docker containers run as root on the host, so they get the invoking
        user's ``uid:gid`` to keep generated files editable.
        """
        if self.runtime.is_podman:
            return None
        return f"{os.getuid()}:{os.getgid()}"

    def fix(self, path: Path, owner_id: int = SERVICE_UID) -> None:
        """Recursively set dirs to 775, files to 664 and chown to owner_id.

        With podman the commands run through ``podman unshare`` so the owner
        maps to the service UID inside rootless containers. Docker has no
        such helper, so only the modes are normalised on the host.

        Raises:
            RuntimeCommandError: If a podman step fails
            FilePermissionError: If a mode cannot be changed on the host
        """
        if self.runtime.is_podman:
            target = str(path)
            self.runtime.unshare(["find", target, "-type", "d", "-exec", "chmod", "775", "{}", "+"])
            self.runtime.unshare(["find", target, "-type", "f", "-exec", "chmod", "664", "{}", "+"])
            self.runtime.unshare(["chown", str(owner_id), "-R", target])
        else:
            try:
                self._normalise_modes(path)
            except OSError as e:
                raise FilePermissionError(f"Could not change permissions of {path}: {e}") from e
        logger.info(f"Fixed permissions of {path} for UID {owner_id}")

    def _normalise_modes(self, path: Path) -> None:
        if path.is_file():
            os.chmod(path, 0o664)
            return
        os.chmod(path, 0o775)
        for root, dirs, files in os.walk(path):
            for name in dirs:
                os.chmod(os.path.join(root, name), 0o775)
            for name in files:
                os.chmod(os.path.join(root, name), 0o664)

    def remove_tree(self, path: Path) -> None:
        """Delete a directory that may be owned by a namespaced UID."""
        if not path.exists():
            return
        if self.runtime.is_podman:
            self.runtime.unshare(["rm", "-rf", str(path)])
        else:
            try:
                shutil.rmtree(path)
            except OSError as e:
                raise FilePermissionError(f"Could not remove {path}: {e}") from e
        logger.info(f"Removed directory: {path}")

    def remove_file(self, path: Path) -> None:
        """Delete a file that may be owned by a namespaced UID."""
        if not path.exists():
            return
        if self.runtime.is_podman:
            self.runtime.unshare(["rm", "-f", str(path)])
        else:
            try:
                path.unlink()
            except OSError as e:
                raise FilePermissionError(f"Could not remove {path}: {e}") from e
