"""Models for synapse-env."""

from .command import GenerateTarget, LifecycleCommand
from .compose import ComposeManifest, ComposeService
from .environment import EnvironmentConfig, ServiceDescriptor
from .paths import ProjectPaths

__all__ = [
    'ComposeManifest',
    'ComposeService',
    'EnvironmentConfig',
    'GenerateTarget',
    'LifecycleCommand',
    'ProjectPaths',
    'ServiceDescriptor'
]
