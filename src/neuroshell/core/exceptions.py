"""
Exception classes for the shell runtime.
"""


class NeuroShellError(Exception):
    """Base exception for shell-related errors."""


class VariableValidationError(NeuroShellError):
    """Variable name is invalid or outside the writable namespace."""


class ServiceError(NeuroShellError):
    """Service wiring failed (duplicate or unknown service)."""


class ServiceNotInitializedError(ServiceError):
    """A service operation was invoked before initialize()."""

    def __init__(self, service: str):
        super().__init__(f"{service} service not initialized")
        self.service = service


class CommandError(NeuroShellError):
    """Base exception for directive execution failures."""


class CommandNotFoundError(CommandError):
    """No directive registered under the requested name."""


class CommandUsageError(CommandError):
    """Directive was called with missing or malformed arguments."""


class StackOverflowError(CommandError):
    """Block expansion was refused by the stack depth guard."""


class AssertionFailedError(CommandError):
    """An assertion directive compared unequal values."""


class ScriptLoadError(NeuroShellError):
    """Script file could not be read."""
