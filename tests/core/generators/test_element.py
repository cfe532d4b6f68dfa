"""Tests for Element Web config generation."""

import json

from synapse_env.core.constants import MANAGED_BY
from synapse_env.core.generators.element import ElementGenerator, element_config
from synapse_env.models.environment import EnvironmentConfig


class TestElementConfig:
    """Test cases for element_config."""

    def test_points_at_local_homeserver(self, project_paths):
        """Test the default server config."""
        env = EnvironmentConfig(server_name="example.test", synapse_host="127.0.0.11")

        config = element_config(env, project_paths)

        assert config["default_server_config"]["m.homeserver"] == {
            "base_url": "http://127.0.0.11:8080",
            "server_name": "example.test",
        }
        assert config["room_directory"]["servers"] == ["example.test"]
        assert config["synapse-test_notice"] == MANAGED_BY

    def test_presence_setting(self, project_paths):
        """Test presence follows the Synapse setting."""
        env = EnvironmentConfig(synapse_enable_presence=False)
        config = element_config(env, project_paths)
        assert set(config["enable_presence_by_hs_url"].values()) == {False}


class TestElementGenerator:
    """Test cases for ElementGenerator."""

    def test_writes_json(self, project_paths, mock_runtime):
        """Test config.json is written as indented JSON."""
        assert ElementGenerator(EnvironmentConfig(), project_paths, mock_runtime).generate() is True

        content = project_paths.element_config_file.read_text()
        assert content.startswith("{\n    ")
        assert json.loads(content)["default_theme"] == "dark"

    def test_disabled(self, project_paths, mock_runtime):
        """Test nothing is written when Element Web is off."""
        env = EnvironmentConfig(enable_element_web=False)

        assert ElementGenerator(env, project_paths, mock_runtime).generate() is False
        assert not project_paths.element_config_file.exists()
