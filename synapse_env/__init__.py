"""synapse-env - Spin up a local Synapse and friends in Podman or Docker."""

__version__ = "0.1.0"

# Export main CLI for convenience
from .cli.main import cli

__all__ = ['cli']
