"""Core functionality for synapse-env.

Submodules are imported directly (``synapse_env.core.lifecycle``,
``synapse_env.core.generators``) to keep model imports free of cycles.
"""
