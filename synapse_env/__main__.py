"""Allow running synapse-env with ``python -m synapse_env``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
