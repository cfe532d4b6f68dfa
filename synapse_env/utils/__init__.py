"""Utilities for synapse-env."""

from .config_loader import ConfigLoader
from .permissions_manager import PermissionsManager

__all__ = [
    'ConfigLoader',
    'PermissionsManager'
]
