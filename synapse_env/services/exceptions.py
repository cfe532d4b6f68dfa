"""Custom exceptions for service layer."""

from typing import Iterable, Optional, Sequence


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    exit_code = 1


class RuntimeServiceError(ServiceError):
    """Exception raised for container runtime operations."""

    pass


class RuntimeCommandError(RuntimeServiceError):
    """Exception raised when a runtime CLI invocation exits non-zero.

    The runtime's exit status is kept so the CLI can exit with it unchanged.
    """

    def __init__(self, message: str, returncode: int = 1, command: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.returncode = returncode
        self.exit_code = returncode or 1
        self.command = list(command) if command else []


class MissingProgramsError(RuntimeServiceError):
    """Exception raised when required programs are not installed."""

    def __init__(self, programs: Iterable[str]):
        self.programs = list(programs)
        listing = "".join(f"\n- {program}" for program in self.programs)
        super().__init__(
            f"Required programs are missing on this system. Please install:{listing}"
        )


class ConfigError(ServiceError):
    """Exception raised for invalid environment configuration."""

    pass


class ConfigFileError(ConfigError):
    """Exception raised when the config file is missing or malformed."""

    pass


class IncompatibleFeaturesError(ConfigError):
    """Exception raised when mutually exclusive features are enabled."""

    pass


class GenerationError(ServiceError):
    """Exception raised when a config file cannot be generated."""

    pass


class FilePermissionError(ServiceError):
    """Exception raised when host file modes or ownership cannot be changed."""

    pass
