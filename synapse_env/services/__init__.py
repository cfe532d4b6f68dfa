"""Service layer for abstracting container runtime operations."""

from .runtime_service import RuntimeService
from .exceptions import (
    ServiceError,
    RuntimeServiceError,
    RuntimeCommandError,
    MissingProgramsError,
    ConfigError,
    ConfigFileError,
    IncompatibleFeaturesError,
    GenerationError,
    FilePermissionError,
)

__all__ = [
    "RuntimeService",
    "ServiceError",
    "RuntimeServiceError",
    "RuntimeCommandError",
    "MissingProgramsError",
    "ConfigError",
    "ConfigFileError",
    "IncompatibleFeaturesError",
    "GenerationError",
    "FilePermissionError",
]
