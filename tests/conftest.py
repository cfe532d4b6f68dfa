import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock
import tempfile
from pathlib import Path

from synapse_env.models.environment import EnvironmentConfig
from synapse_env.models.paths import ProjectPaths
from synapse_env.services.runtime_service import RuntimeService


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def temp_project_dir():
    """Creates a temporary working directory named like a project."""
    with tempfile.TemporaryDirectory() as tmpdir:
        project_path = Path(tmpdir) / "synapse-test"
        project_path.mkdir()
        yield project_path


@pytest.fixture
def project_paths(temp_project_dir):
    """Provides the file layout of the temporary working directory."""
    return ProjectPaths(temp_project_dir)


@pytest.fixture
def env_config():
    """Provides an environment configuration with every default."""
    return EnvironmentConfig()


@pytest.fixture
def mock_runtime():
    """Provides a mocked podman runtime service."""
    runtime = MagicMock(spec=RuntimeService)
    runtime.runtime = "podman"
    runtime.is_podman = True
    return runtime


@pytest.fixture
def mock_docker_runtime():
    """Provides a mocked docker runtime service."""
    runtime = MagicMock(spec=RuntimeService)
    runtime.runtime = "docker"
    runtime.is_podman = False
    return runtime


@pytest.fixture
def isolated_cli_runner(cli_runner):
    """Provides a CLI runner with isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner
