"""Tests for hookshot config generation."""

import yaml

from synapse_env.core.constants import HOOKSHOT_PASSKEY, MANAGED_BY
from synapse_env.core.generators.hookshot import (
    HookshotGenerator,
    hookshot_config,
    hookshot_registration,
)
from synapse_env.models.environment import EnvironmentConfig


class TestHookshotConfig:
    """Test cases for hookshot config documents."""

    def test_public_urls(self):
        """Test webhook and widget URLs use the hookshot host."""
        env = EnvironmentConfig(enable_hookshot=True, hookshot_host="127.0.0.26")
        config = hookshot_config(env)

        assert config["generic"]["urlPrefix"] == "http://127.0.0.26:8080/webhook/"
        assert config["widgets"]["publicUrl"] == "http://127.0.0.26:8080/widgetapi/v1/static/"
        assert config["bridge"]["domain"] == env.server_name

    def test_encryption(self):
        """Test encryption storage is only configured when enabled."""
        plain = hookshot_config(EnvironmentConfig(enable_hookshot=True))
        encrypted = hookshot_config(
            EnvironmentConfig(enable_hookshot=True, hookshot_encryption=True, enable_mas=False)
        )

        assert "encryption" not in plain
        assert encrypted["encryption"] == {"storagePath": "/encryption"}

    def test_registration_namespace(self):
        """Test the appservice owns the webhook users on this server."""
        registration = hookshot_registration(EnvironmentConfig(server_name="example.test"))

        assert registration["namespaces"]["users"] == [
            {"exclusive": True, "regex": "@_webhooks_.*:example.test"}
        ]
        assert registration["url"] == "http://hookshot:9993"


class TestHookshotGenerator:
    """Test cases for HookshotGenerator."""

    def test_writes_files(self, project_paths, mock_runtime):
        """Test config, registration and passkey are written."""
        env = EnvironmentConfig(enable_hookshot=True)

        assert HookshotGenerator(env, project_paths, mock_runtime).generate() is True

        config = project_paths.hookshot_config_file.read_text()
        assert config.startswith(f"# {MANAGED_BY}\n")
        assert yaml.safe_load(config)["passFile"] == "/data/passkey.pem"
        assert yaml.safe_load(project_paths.hookshot_registration_file.read_text())["id"] == "hookshot"
        assert project_paths.hookshot_passkey_file.read_text() == HOOKSHOT_PASSKEY
        mock_runtime.unshare.assert_any_call(["chown", "991", "-R", str(project_paths.hookshot_data)])

    def test_disabled(self, project_paths, mock_runtime):
        """Test nothing happens when hookshot is off."""
        assert HookshotGenerator(EnvironmentConfig(), project_paths, mock_runtime).generate() is False
        assert not project_paths.hookshot_data.exists()
        mock_runtime.unshare.assert_not_called()

    def test_replaces_previous_directory(self, project_paths, mock_docker_runtime):
        """Test the old directory is removed before writing."""
        project_paths.hookshot_data.mkdir()
        stale = project_paths.hookshot_data / "stale.txt"
        stale.write_text("old")
        project_paths.hookshot_config_file.write_text("old: true\n")

        generator = HookshotGenerator(
            EnvironmentConfig(enable_hookshot=True), project_paths, mock_docker_runtime, force=True
        )

        assert generator.generate() is True
        assert not stale.exists()
        assert "old" not in yaml.safe_load(project_paths.hookshot_config_file.read_text())
