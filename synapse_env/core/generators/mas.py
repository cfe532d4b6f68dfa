"""Matrix-Authentication-Service config generation."""

import logging
from pathlib import Path
from typing import List

import yaml

from ...models.compose import dump_yaml
from ...models.environment import EnvironmentConfig
from ...services.exceptions import GenerationError
from ..constants import (
    ADMIN_USERNAME,
    MANAGED_BY,
    MAS_CLIENT_SECRET,
    MAS_SHARED_SECRET,
    MAS_SWAGGER_CLIENT_ID,
    MAS_SYNAPSE_CLIENT_ID,
    POSTGRES_PASSWORD,
)
from ..patches import Patch, apply_patches, patch_yaml_file
from .base import ConfigGenerator

logger = logging.getLogger(__name__)


def mas_patches(env: EnvironmentConfig) -> List[Patch]:
    """Turn MAS's generated default into one wired to this topology."""
    issuer = env.url(env.mas_host)
    patches = [
        Patch.delete(".http.trusted_proxies"),
        Patch.delete(".http.listeners[0].binds[0]"),
        Patch.delete(".database"),
        Patch.set(".account.password_registration_enabled", True),
        Patch.set(".clients[0].client_auth_method", "client_secret_basic"),
        Patch.set(".clients[0].client_id", MAS_SYNAPSE_CLIENT_ID),
        Patch.set(".clients[0].client_secret", MAS_CLIENT_SECRET),
        Patch.set(".clients[1].client_auth_method", "client_secret_post"),
        Patch.set(".clients[1].client_id", MAS_SWAGGER_CLIENT_ID),
        Patch.set(".clients[1].client_secret", MAS_CLIENT_SECRET),
        Patch.set(
            ".clients[1].redirect_uris[0]",
            "https://element-hq.github.io/matrix-authentication-service/api/oauth2-redirect.html",
        ),
        Patch.set(".clients[1].redirect_uris[0]", f"{issuer}/api/doc/oauth2-callback"),
        Patch.set(".database.database", "mas"),
        Patch.set(".database.host", "mas-postgres"),
        Patch.set(".database.password", POSTGRES_PASSWORD),
        Patch.set(".database.port", 5432),
        Patch.set(".database.username", "mas"),
        Patch.set(".experimental.access_token_ttl", 86400),
        Patch.set(".experimental.compat_token_ttl", 86400),
        Patch.set(".experimental.inactive_session_expiration.expire_compat_sessions", False),
        Patch.set(".experimental.inactive_session_expiration.ttl", 86400),
        Patch.set(".http.issuer", issuer),
        Patch.set(".http.listeners[0].binds[0].host", "0.0.0.0"),
        Patch.set(".http.listeners[0].binds[0].port", 8080),
        Patch.append(".http.listeners[0].resources", {"name": "adminapi"}),
        Patch.set(".http.public_base", issuer),
        Patch.set(".http.trusted_proxies[0]", "0.0.0.0/0"),
        Patch.set(".matrix.endpoint", "http://synapse:8448/"),
        Patch.set(".matrix.kind", "synapse"),
        Patch.set(".matrix.homeserver", env.server_name),
        Patch.set(".matrix.secret", MAS_SHARED_SECRET),
        Patch.set(".passwords.minimum_complexity", 0),
        Patch.set(".policy.client_registration.allow_host_mismatch", True),
        Patch.set(".policy.client_registration.allow_insecure_uris", True),
        Patch.set(".policy.client_registration.allow_missing_client_uri", True),
        Patch.set(".policy.data.admin_clients[0]", MAS_SYNAPSE_CLIENT_ID),
        Patch.set(".policy.data.admin_clients[1]", MAS_SWAGGER_CLIENT_ID),
        Patch.set(".policy.data.admin_users[0]", ADMIN_USERNAME),
    ]
    if env.enable_mailhog:
        sender = f"mas@{env.server_name}"
        patches.extend([
            Patch.set(".email.from", sender),
            Patch.set(".email.hostname", "mailhog"),
            Patch.set(".email.mode", "plain"),
            Patch.set(".email.port", 1025),
            Patch.set(".email.reply_to", sender),
            Patch.set(".email.transport", "smtp"),
        ])
    return patches


def mas_homeserver_patches() -> List[Patch]:
    """Hand Synapse's account handling over to MAS."""
    return [
        Patch.set(".enable_registration", False),
        Patch.set(".matrix_authentication_service.enabled", True),
        Patch.set(".matrix_authentication_service.endpoint", "http://mas:8080/"),
        Patch.set(".matrix_authentication_service.secret", MAS_SHARED_SECRET),
    ]


def strip_log_lines(output: str) -> str:
    """Drop log lines MAS prints alongside the generated config."""
    return "\n".join(line for line in output.splitlines() if "INFO" not in line)


class MasGenerator(ConfigGenerator):
    """Writes masConfig.yaml from MAS's own ``config generate``."""

    name = "mas"

    def targets(self) -> List[Path]:
        return [self.paths.mas_config_file]

    def enabled(self) -> bool:
        return self.env.enable_mas

    def emit_default(self) -> dict:
        """Run the MAS image to get a default config with fresh keys."""
        result = self.runtime.run(
            self.env.mas_image, ["config", "generate"], capture_output=True
        )
        try:
            document = yaml.safe_load(strip_log_lines(result.stdout))
        except yaml.YAMLError as e:
            raise GenerationError(f"MAS emitted an unreadable config: {e}") from e
        if not isinstance(document, dict):
            raise GenerationError("MAS emitted an empty config")
        return document

    def render(self) -> None:
        document = apply_patches(self.emit_default(), mas_patches(self.env))
        self.paths.mas_config_file.write_text(dump_yaml(document, header=MANAGED_BY))

        homeserver = self.paths.synapse_config_file
        if homeserver.exists():
            patch_yaml_file(homeserver, mas_homeserver_patches(), header=MANAGED_BY)
        else:
            logger.info(f"{homeserver} not found, MAS settings will be applied when it is generated")
