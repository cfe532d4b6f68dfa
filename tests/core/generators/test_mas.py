"""Tests for MAS config generation."""

from unittest.mock import Mock

import pytest
import yaml

from synapse_env.core.constants import MANAGED_BY, MAS_SHARED_SECRET, MAS_SYNAPSE_CLIENT_ID
from synapse_env.core.generators.mas import MasGenerator, mas_patches, strip_log_lines
from synapse_env.core.patches import apply_patches
from synapse_env.models.environment import EnvironmentConfig
from synapse_env.services.exceptions import GenerationError

MAS_OUTPUT = """\
2025-01-01T00:00:00.000000Z  INFO mas_cli::commands::config: Generating keys...
http:
  listeners:
    - name: web
      resources:
        - name: discovery
        - name: human
      binds:
        - address: '[::]:8080'
  trusted_proxies:
    - 192.168.0.0/16
  public_base: http://[::]:8080/
database:
  uri: postgresql://
clients: []
secrets:
  encryption: 0000
matrix:
  homeserver: localhost:8008
  secret: generated
  endpoint: http://localhost:8008/
"""


def _mas_config(env):
    return apply_patches(yaml.safe_load(strip_log_lines(MAS_OUTPUT)), mas_patches(env))


class TestMasPatches:
    """Test cases for mas_patches."""

    def test_listener(self):
        """Test MAS listens on all interfaces with the admin API."""
        listener = _mas_config(EnvironmentConfig())["http"]["listeners"][0]

        assert listener["binds"] == [{"host": "0.0.0.0", "port": 8080}]
        assert listener["resources"][-1] == {"name": "adminapi"}

    def test_public_urls(self):
        """Test issuer and public base use the MAS host."""
        http = _mas_config(EnvironmentConfig(mas_host="127.0.0.16"))["http"]

        assert http["issuer"] == "http://127.0.0.16:8080"
        assert http["public_base"] == "http://127.0.0.16:8080"
        assert http["trusted_proxies"] == ["0.0.0.0/0"]

    def test_database_replaced(self):
        """Test the generated database URI is dropped."""
        database = _mas_config(EnvironmentConfig())["database"]

        assert "uri" not in database
        assert database["host"] == "mas-postgres"
        assert database["port"] == 5432

    def test_clients(self):
        """Test the Synapse and Swagger clients."""
        config = _mas_config(EnvironmentConfig())
        synapse_client, swagger_client = config["clients"]

        assert synapse_client["client_id"] == MAS_SYNAPSE_CLIENT_ID
        assert synapse_client["client_auth_method"] == "client_secret_basic"
        assert swagger_client["redirect_uris"] == [
            "http://127.0.0.15:8080/api/doc/oauth2-callback"
        ]

    def test_matrix(self):
        """Test MAS is wired to Synapse."""
        matrix = _mas_config(EnvironmentConfig(server_name="example.test"))["matrix"]

        assert matrix == {
            "homeserver": "example.test",
            "secret": MAS_SHARED_SECRET,
            "endpoint": "http://synapse:8448/",
            "kind": "synapse",
        }

    def test_email_with_mailhog(self):
        """Test mail goes to mailhog when enabled."""
        email = _mas_config(EnvironmentConfig(enable_mailhog=True))["email"]

        assert email["hostname"] == "mailhog"
        assert email["port"] == 1025
        assert email["from"] == "mas@127.0.0.1"

    def test_email_without_mailhog(self):
        """Test mail settings are left alone without mailhog."""
        assert "email" not in _mas_config(EnvironmentConfig(enable_mailhog=False))


class TestStripLogLines:
    """Test cases for strip_log_lines."""

    def test_drops_info_lines(self):
        """Test log lines are removed and config lines kept."""
        assert strip_log_lines("x  INFO starting\na: 1\nb: 2") == "a: 1\nb: 2"


class TestMasGenerator:
    """Test cases for MasGenerator."""

    def test_generate(self, project_paths, mock_runtime):
        """Test the config is generated and homeserver.yaml is updated."""
        project_paths.synapse_data.mkdir()
        project_paths.synapse_config_file.write_text("enable_registration: true\n")
        mock_runtime.run.return_value = Mock(returncode=0, stdout=MAS_OUTPUT)

        assert MasGenerator(EnvironmentConfig(), project_paths, mock_runtime).generate() is True

        mock_runtime.run.assert_called_once_with(
            EnvironmentConfig().mas_image, ["config", "generate"], capture_output=True
        )
        content = project_paths.mas_config_file.read_text()
        assert content.startswith(f"# {MANAGED_BY}\n")
        assert yaml.safe_load(content)["http"]["issuer"] == "http://127.0.0.15:8080"

        homeserver = yaml.safe_load(project_paths.synapse_config_file.read_text())
        assert homeserver["enable_registration"] is False
        assert homeserver["matrix_authentication_service"]["enabled"] is True

    def test_generate_without_homeserver(self, project_paths, mock_runtime):
        """Test MAS config is written before Synapse config exists."""
        mock_runtime.run.return_value = Mock(returncode=0, stdout=MAS_OUTPUT)

        assert MasGenerator(EnvironmentConfig(), project_paths, mock_runtime).generate() is True
        assert project_paths.mas_config_file.exists()
        assert not project_paths.synapse_config_file.exists()

    def test_empty_output(self, project_paths, mock_runtime):
        """Test MAS printing no config."""
        mock_runtime.run.return_value = Mock(returncode=0, stdout="x INFO nothing\n")

        with pytest.raises(GenerationError, match="empty config"):
            MasGenerator(EnvironmentConfig(), project_paths, mock_runtime).generate()

        assert not project_paths.mas_config_file.exists()

    def test_disabled(self, project_paths, mock_runtime):
        """Test nothing runs when MAS is off."""
        env = EnvironmentConfig(enable_mas=False)

        assert MasGenerator(env, project_paths, mock_runtime).generate() is False
        mock_runtime.run.assert_not_called()
