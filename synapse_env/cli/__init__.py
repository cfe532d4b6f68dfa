"""Command line interface for synapse-env."""
