"""Hookshot bridge config, appservice registration and passkey."""

from pathlib import Path
from typing import Any, Dict, List

from ...models.compose import dump_yaml
from ...models.environment import EnvironmentConfig
from ..constants import (
    HOOKSHOT_AS_TOKEN,
    HOOKSHOT_HS_TOKEN,
    HOOKSHOT_PASSKEY,
    HOOKSHOT_USER_PREFIX,
    MANAGED_BY,
    SERVICE_UID,
)
from ..patches import Patch, apply_patches
from .base import ConfigGenerator


def hookshot_config(env: EnvironmentConfig) -> Dict[str, Any]:
    """Bridge config wired to the local homeserver and redis."""
    config = {
        "bot": {"displayname": "Hookshot"},
        "bridge": {
            "bindAddress": "0.0.0.0",
            "domain": env.server_name,
            "mediaUrl": env.synapse_url,
            "port": 9993,
            "url": "http://synapse:8448",
        },
        "cache": {"redisUri": "redis://redis:6379"},
        "feeds": {
            "enabled": True,
            "pollIntervalSeconds": 600,
            "pollTimeoutSeconds": 30,
        },
        "generic": {
            "allowJsTransformationFunctions": True,
            "enableHttpGet": False,
            "enabled": True,
            "outbound": True,
            "urlPrefix": f"{env.url(env.hookshot_host)}/webhook/",
            "userIdPrefix": HOOKSHOT_USER_PREFIX,
            "waitForComplete": False,
        },
        "listeners": [
            {"bindAddress": "0.0.0.0", "port": 9993, "resources": ["webhooks", "widgets"]},
            {"bindAddress": "0.0.0.0", "port": 9101, "resources": ["metrics"]},
        ],
        "logging": {
            "colorize": True,
            "json": False,
            # debug, info, warn or error
            "level": "info",
            "timestampFormat": "HH:mm:ss:SSS",
        },
        "metrics": {"enabled": True},
        "passFile": "/data/passkey.pem",
        "permissions": [
            {"actor": "*", "services": [{"level": "admin", "service": "*"}]},
        ],
        "widgets": {
            "addToAdminRooms": False,
            "branding": {"widgetTitle": "Hookshot Configuration"},
            "disallowedIpRanges": [],
            "openIdOverrides": {env.server_name: "http://synapse:8448"},
            "publicUrl": f"{env.url(env.hookshot_host)}/widgetapi/v1/static/",
            "roomSetupWidget": {"addOnInvite": False},
        },
    }
    patches = []
    if env.hookshot_encryption:
        patches.append(Patch.set(".encryption.storagePath", "/encryption"))
    return apply_patches(config, patches)


def hookshot_registration(env: EnvironmentConfig) -> Dict[str, Any]:
    """Appservice registration scoping the bridge's virtual users."""
    return {
        "as_token": HOOKSHOT_AS_TOKEN,
        "de.sorunome.msc2409.push_ephemeral": True,
        "hs_token": HOOKSHOT_HS_TOKEN,
        "id": "hookshot",
        "namespaces": {
            "rooms": [],
            "users": [
                {"exclusive": True, "regex": f"@{HOOKSHOT_USER_PREFIX}.*:{env.server_name}"},
            ],
        },
        "org.matrix.msc3202": True,
        "push_ephemeral": True,
        "rate_limited": False,
        "sender_localpart": "hookshot",
        "url": "http://hookshot:9993",
    }


class HookshotGenerator(ConfigGenerator):
    """Recreates the hookshot/ data directory."""

    name = "hookshot"

    def targets(self) -> List[Path]:
        return [self.paths.hookshot_config_file, self.paths.hookshot_registration_file]

    def enabled(self) -> bool:
        return self.env.enable_hookshot

    def remove_previous(self) -> None:
        self.permissions.remove_tree(self.paths.hookshot_data)

    def render(self) -> None:
        self.paths.hookshot_data.mkdir(parents=True, exist_ok=True)
        self.paths.hookshot_config_file.write_text(
            dump_yaml(hookshot_config(self.env), header=MANAGED_BY)
        )
        self.paths.hookshot_registration_file.write_text(
            dump_yaml(hookshot_registration(self.env), header=MANAGED_BY)
        )
        self.paths.hookshot_passkey_file.write_text(HOOKSHOT_PASSKEY)
        self.permissions.fix(self.paths.hookshot_data, SERVICE_UID)
