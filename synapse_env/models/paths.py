"""File locations for a working directory."""

from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..core import constants
from .environment import project_name_for


@dataclass(frozen=True)
class ProjectPaths:
    """Every path the tool reads or writes, relative to one working directory."""

    workdir: Path

    @property
    def project_name(self) -> str:
        return project_name_for(self.workdir)

    @property
    def compose_file(self) -> Path:
        return self.workdir / constants.COMPOSE_FILE_NAME

    @property
    def nginx_config_file(self) -> Path:
        return self.workdir / constants.NGINX_CONFIG_FILE_NAME

    @property
    def element_config_file(self) -> Path:
        return self.workdir / constants.ELEMENT_CONFIG_FILE_NAME

    @property
    def mas_config_file(self) -> Path:
        return self.workdir / constants.MAS_CONFIG_FILE_NAME

    @property
    def synapse_data(self) -> Path:
        return self.workdir / constants.SYNAPSE_DATA_DIR_NAME

    @property
    def synapse_config_file(self) -> Path:
        return self.synapse_data / constants.SYNAPSE_CONFIG_FILE_NAME

    @property
    def synapse_log_config_file(self) -> Path:
        return self.synapse_data / constants.SYNAPSE_LOG_CONFIG_FILE_NAME

    def synapse_generated_log_config_file(self, server_name: str) -> Path:
        """Log config as named by Synapse's --generate-config."""
        return self.synapse_data / f"{server_name}.log.config"

    @property
    def hookshot_data(self) -> Path:
        return self.workdir / constants.HOOKSHOT_DATA_DIR_NAME

    @property
    def hookshot_config_file(self) -> Path:
        return self.hookshot_data / constants.HOOKSHOT_CONFIG_FILE_NAME

    @property
    def hookshot_registration_file(self) -> Path:
        return self.hookshot_data / constants.HOOKSHOT_REGISTRATION_FILE_NAME

    @property
    def hookshot_passkey_file(self) -> Path:
        return self.hookshot_data / constants.HOOKSHOT_PASSKEY_FILE_NAME

    def container_name(self, service: str) -> str:
        return f"{self.project_name}-{service}"

    def volume_name(self, volume: str) -> str:
        return f"{self.project_name}_{volume}"

    @property
    def generated_files(self) -> List[Path]:
        """Top-level generated files removed by delete."""
        return [
            self.compose_file,
            self.element_config_file,
            self.mas_config_file,
            self.nginx_config_file,
        ]

    @property
    def generated_dirs(self) -> List[Path]:
        """Generated directories removed by delete."""
        return [self.hookshot_data, self.synapse_data]
