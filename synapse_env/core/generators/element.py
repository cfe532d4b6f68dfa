"""Element Web config generation."""

import json
from pathlib import Path
from typing import Any, Dict, List

from ...models.environment import EnvironmentConfig
from ...models.paths import ProjectPaths
from ..constants import MANAGED_BY
from .base import ConfigGenerator


def element_config(env: EnvironmentConfig, paths: ProjectPaths) -> Dict[str, Any]:
    """Element Web config.json pointed at the local homeserver."""
    return {
        f"{paths.project_name}_notice": MANAGED_BY,
        "bug_report_endpoint_url": "https://element.io/bugreports/submit",
        "dangerously_allow_unsafe_and_insecure_passwords": True,
        "default_country_code": "US",
        "default_federate": True,
        "default_server_config": {
            "m.homeserver": {
                "base_url": env.synapse_url,
                "server_name": env.server_name,
            },
            "m.identity_server": {
                "base_url": "https://vector.im",
            },
        },
        "default_theme": "dark",
        "disable_3pid_login": False,
        "disable_custom_urls": False,
        "disable_guests": False,
        "disable_login_language_selector": False,
        "element_call": {
            "brand": "Element Call",
            "url": "https://call.element.io",
        },
        "enable_presence_by_hs_url": {
            env.synapse_url: env.synapse_enable_presence,
            f"http://{env.server_name}": env.synapse_enable_presence,
        },
        "features": {
            "feature_jump_to_date": True,
            "feature_release_announcement": False,
            "feature_state_counters": True,
        },
        "integrations_rest_url": "https://scalar.vector.im/api",
        "integrations_ui_url": "https://scalar.vector.im/",
        "integrations_widgets_urls": [
            "https://scalar.vector.im/_matrix/integrations/v1",
            "https://scalar.vector.im/api",
            "https://scalar-staging.vector.im/_matrix/integrations/v1",
            "https://scalar-staging.vector.im/api",
            "https://scalar-staging.riot.im/scalar/api",
        ],
        "jitsi": {
            "preferred_domain": "meet.element.io",
        },
        "map_style_url": "https://api.maptiler.com/maps/streets/style.json?key=fU3vlMsMn4Jb6dnEIFsx",
        "room_directory": {
            "servers": [env.server_name],
        },
        "setting_defaults": {
            "alwaysShowTimestamps": True,
            "automaticErrorReporting": False,
            "ctrlFForSearch": True,
            "developerMode": True,
            "dontSendTypingNotifications": True,
            "FTUE.userOnboardingButton": False,
            "MessageComposerInput.ctrlEnterToSend": True,
            "sendReadReceipts": False,
            "sendTypingNotifications": False,
            "showChatEffects": False,
            "UIFeature.advancedSettings": True,
            "UIFeature.Feedback": False,
            "UIFeature.shareSocial": False,
        },
        "show_labs_settings": True,
    }


class ElementGenerator(ConfigGenerator):
    """Writes the Element Web config.json."""

    name = "element"

    def targets(self) -> List[Path]:
        return [self.paths.element_config_file]

    def enabled(self) -> bool:
        return self.env.enable_element_web

    def render(self) -> None:
        content = json.dumps(element_config(self.env, self.paths), indent=4)
        self.paths.element_config_file.write_text(content + "\n")
