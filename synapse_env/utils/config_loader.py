"""Configuration loading utilities."""

import io
import logging
import re
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values
from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..models.environment import EnvironmentConfig
from ..services.exceptions import ConfigFileError

logger = logging.getLogger(__name__)

# key=( with the closing parenthesis on a later line
ARRAY_START = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*\(")


def join_array_lines(text: str, source: Path) -> str:
    """Fold multi-line bash arrays onto a single assignment line.

    Comment lines inside an array are dropped.

    Raises:
        ConfigFileError: If an array is never closed
    """
    lines = []
    pending = None
    pending_key = None
    for line in text.splitlines():
        if pending is not None:
            item = line.strip()
            if not item or item.startswith("#"):
                continue
            pending.append(item)
            if item.endswith(")"):
                lines.append(" ".join(pending))
                pending = None
            continue

        match = ARRAY_START.match(line)
        if match and ")" not in line[match.end():]:
            pending = [line.rstrip()]
            pending_key = match.group(1)
            continue
        lines.append(line)

    if pending is not None:
        raise ConfigFileError(f"Unterminated array for {pending_key} in {source}")
    return "\n".join(lines) + "\n"


class ConfigLoader:
    """Loads the environment configuration for a working directory."""

    def __init__(self, workdir: Path, config_file: Optional[Path] = None):
        """Initialize config loader.

        Args:
            workdir: Working directory holding ``config.env``
            config_file: Explicit config file; must exist when given
        """
        self.workdir = workdir
        self.explicit = config_file is not None
        self.config_file = config_file or workdir / CONFIG_FILE_NAME

    def read_values(self) -> Dict[str, str]:
        """Read raw key/value pairs, dropping empty values.

        ``${name}`` references are expanded from earlier keys in the file,
        then from the process environment.
        """
        if not self.config_file.exists():
            if self.explicit:
                raise ConfigFileError(f"Config file not found: {self.config_file}")
            logger.debug(f"No config file at {self.config_file}, using defaults")
            return {}

        text = join_array_lines(self.config_file.read_text(), self.config_file)
        values = dotenv_values(stream=io.StringIO(text), interpolate=True)
        return {key: value for key, value in values.items() if value not in (None, "")}

    def load(self) -> EnvironmentConfig:
        """Load the environment configuration, filling defaults."""
        values = self.read_values()
        try:
            config = EnvironmentConfig.model_validate(values)
        except ValidationError as e:
            raise ConfigFileError(f"Invalid configuration in {self.config_file}:\n{e}") from e
        logger.debug(f"Loaded configuration from {self.config_file}")
        return config
