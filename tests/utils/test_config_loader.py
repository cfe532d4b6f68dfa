"""Tests for the config loader."""

import pytest

from synapse_env.services.exceptions import ConfigFileError
from synapse_env.utils.config_loader import ConfigLoader


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    def test_missing_default_file_uses_defaults(self, temp_project_dir):
        """Test an absent config.env yields built-in defaults."""
        env = ConfigLoader(temp_project_dir).load()

        assert env.enable_element_web is True
        assert env.enable_adminer is False

    def test_missing_explicit_file(self, temp_project_dir):
        """Test an explicit config path must exist."""
        loader = ConfigLoader(temp_project_dir, temp_project_dir / "other.env")
        with pytest.raises(ConfigFileError, match="Config file not found"):
            loader.load()

    def test_reads_values(self, temp_project_dir):
        """Test shell-assignment lines, quotes and comments."""
        (temp_project_dir / "config.env").write_text(
            "# Local settings\n"
            "containerRuntime=docker\n"
            'serverName="example.test"\n'
            "enableAdminer=true\n"
            "ingressPort=8081\n"
        )

        env = ConfigLoader(temp_project_dir).load()

        assert env.container_runtime == "docker"
        assert env.server_name == "example.test"
        assert env.enable_adminer is True
        assert env.ingress_port == 8081
        assert env.listen_port == 8081

    def test_empty_values_use_defaults(self, temp_project_dir):
        """Test keys assigned an empty value fall back to defaults."""
        (temp_project_dir / "config.env").write_text("masHost=\nelementHost=127.0.0.21\n")

        values = ConfigLoader(temp_project_dir).read_values()
        env = ConfigLoader(temp_project_dir).load()

        assert values == {"elementHost": "127.0.0.21"}
        assert env.mas_host == "127.0.0.15"
        assert env.element_host == "127.0.0.21"

    def test_unknown_keys_ignored(self, temp_project_dir):
        """Test keys the tool does not know are skipped."""
        (temp_project_dir / "config.env").write_text("someOtherTool=1\n")
        env = ConfigLoader(temp_project_dir).load()
        assert not hasattr(env, "someOtherTool")

    def test_references_earlier_keys(self, temp_project_dir):
        """Test ${name} references resolve like a sourced shell file."""
        (temp_project_dir / "config.env").write_text(
            "ingressPort=9000\n"
            'listenPort="${ingressPort}"\n'
        )

        env = ConfigLoader(temp_project_dir).load()

        assert env.ingress_port == 9000
        assert env.listen_port == 9000

    def test_references_process_environment(self, temp_project_dir, monkeypatch):
        """Test references fall back to the process environment."""
        monkeypatch.setenv("SYNAPSE_TEST_SERVER_NAME", "example.test")
        (temp_project_dir / "config.env").write_text("serverName=${SYNAPSE_TEST_SERVER_NAME}\n")

        assert ConfigLoader(temp_project_dir).load().server_name == "example.test"

    def test_additional_volumes(self, temp_project_dir):
        """Test a bash array of extra Synapse volumes."""
        (temp_project_dir / "config.env").write_text(
            'synapseAdditionalVolumes=("/srv/a:/a" "/srv/b:/b")\n'
        )
        env = ConfigLoader(temp_project_dir).load()
        assert env.synapse_additional_volumes == ["/srv/a:/a", "/srv/b:/b"]

    def test_multiline_additional_volumes(self, temp_project_dir):
        """Test a bash array spread over several lines."""
        (temp_project_dir / "config.env").write_text(
            "synapseAdditionalVolumes=(\n"
            '  "/srv/modules:/modules"\n'
            "  # templates for the web client\n"
            '  "/srv/templates:/templates"\n'
            ")\n"
            "enableAdminer=true\n"
        )

        env = ConfigLoader(temp_project_dir).load()

        assert env.synapse_additional_volumes == ["/srv/modules:/modules", "/srv/templates:/templates"]
        assert env.enable_adminer is True

    def test_unterminated_array(self, temp_project_dir):
        """Test an array missing its closing parenthesis is rejected."""
        (temp_project_dir / "config.env").write_text(
            "synapseAdditionalVolumes=(\n"
            '  "/srv/modules:/modules"\n'
        )
        with pytest.raises(ConfigFileError, match="Unterminated array for synapseAdditionalVolumes"):
            ConfigLoader(temp_project_dir).load()

    def test_invalid_value(self, temp_project_dir):
        """Test malformed values are reported with the file name."""
        (temp_project_dir / "config.env").write_text("ingressPort=eighty\n")
        with pytest.raises(ConfigFileError, match="Invalid configuration"):
            ConfigLoader(temp_project_dir).load()

    def test_explicit_file(self, temp_project_dir):
        """Test reading an explicit config path."""
        config_file = temp_project_dir / "alt.env"
        config_file.write_text("enableMas=false\n")

        env = ConfigLoader(temp_project_dir, config_file).load()

        assert env.enable_mas is False
        assert env.enable_mailhog is False
