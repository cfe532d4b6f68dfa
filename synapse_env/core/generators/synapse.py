"""Synapse homeserver and log config generation."""

import logging
from pathlib import Path
from typing import List

from ...models.environment import EnvironmentConfig
from ...services.exceptions import GenerationError
from ..constants import MANAGED_BY, POSTGRES_PASSWORD, SERVICE_UID, SYNAPSE_PEPPER
from ..patches import Patch, patch_yaml_file
from .base import ConfigGenerator
from .mas import mas_homeserver_patches

logger = logging.getLogger(__name__)


def log_config_patches() -> List[Patch]:
    return [Patch.set(".handlers.file.filename", "/data/homeserver.log")]


def homeserver_patches(env: EnvironmentConfig) -> List[Patch]:
    """Turn Synapse's generated default into one wired to this topology."""
    patches = [
        Patch.delete(".listeners[0].bind_addresses"),
        Patch.set(".database.args.cp_max", 10),
        Patch.set(".database.args.cp_min", 5),
        Patch.set(".database.args.database", "synapse"),
        Patch.set(".database.args.host", "postgres"),
        Patch.set(".database.args.password", POSTGRES_PASSWORD),
        Patch.set(".database.args.user", "synapse"),
        Patch.set(".database.name", "psycopg2"),
        Patch.set(".enable_registration", True),
        Patch.set(".enable_registration_without_verification", True),
        Patch.set(".listeners[0].bind_addresses[0]", "0.0.0.0"),
        Patch.set(".listeners[0].port", 8448),
        Patch.set(".log_config", "/data/log.config.yaml"),
        Patch.set(".password_config.pepper", SYNAPSE_PEPPER),
        Patch.set(".presence.enabled", env.synapse_enable_presence),
        Patch.set(".suppress_key_server_warning", True),
        Patch.set(".trusted_key_servers[0].accept_keys_insecurely", True),
        Patch.set(".user_directory.enabled", True),
        Patch.set(".user_directory.prefer_local_users", True),
        Patch.set(".user_directory.search_all_users", True),
    ]
    if env.enable_hookshot:
        patches.append(Patch.set(".app_service_config_files[0]", "/appservices/hookshot.yaml"))
        if env.hookshot_encryption:
            patches.extend([
                Patch.set(".experimental_features.msc2409_to_device_messages_enabled", True),
                Patch.set(".experimental_features.msc3202_device_masquerading", True),
                Patch.set(".experimental_features.msc3202_transaction_extensions", True),
            ])
    if env.enable_mas:
        patches.extend(mas_homeserver_patches())
    return patches


def additional_volume_sources(env: EnvironmentConfig) -> List[Path]:
    """Host side of each extra Synapse bind mount."""
    return [Path(volume.split(":", 1)[0]) for volume in env.synapse_additional_volumes]


class SynapseGenerator(ConfigGenerator):
    """Writes homeserver.yaml and log.config.yaml from Synapse's generator."""

    name = "synapse"

    def targets(self) -> List[Path]:
        return [self.paths.synapse_config_file, self.paths.synapse_log_config_file]

    def remove_previous(self) -> None:
        for target in self.targets():
            self.permissions.remove_file(target)

    def ensure_data_dir(self) -> None:
        data = self.paths.synapse_data
        if not data.is_dir():
            data.mkdir(parents=True)
            self.permissions.fix(data, SERVICE_UID)

    def emit_default(self) -> None:
        """Run the Synapse image's --generate-config into the data dir."""
        self.runtime.run(
            self.env.synapse_image,
            [
                "-m", "synapse.app.homeserver",
                "--config-path", "/data/homeserver.yaml",
                "--data-directory", "/data",
                "--generate-config",
                "--report-stats", "no",
                "--server-name", self.env.server_name,
            ],
            entrypoint="python3",
            volumes=[f"{self.paths.synapse_data}:/data:Z"],
            user=self.permissions.container_user(),
        )

    def render(self) -> None:
        self.ensure_data_dir()
        self.emit_default()

        generated_log_config = self.paths.synapse_generated_log_config_file(self.env.server_name)
        if not self.paths.synapse_config_file.exists() or not generated_log_config.exists():
            raise GenerationError(
                f"Synapse did not generate its config in {self.paths.synapse_data}"
            )
        generated_log_config.replace(self.paths.synapse_log_config_file)

        patch_yaml_file(self.paths.synapse_log_config_file, log_config_patches(), header=MANAGED_BY)
        patch_yaml_file(self.paths.synapse_config_file, homeserver_patches(self.env), header=MANAGED_BY)

        self.permissions.fix(self.paths.synapse_data, SERVICE_UID)
        for source in additional_volume_sources(self.env):
            if source.exists():
                self.permissions.fix(source, SERVICE_UID)
            else:
                logger.warning(f"Additional Synapse volume not found: {source}")
