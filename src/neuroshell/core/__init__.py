"""
Core module for the neuroshell package.

Provides the data models, exceptions and name helpers shared by the runtime.
"""

from neuroshell.core.datamodels import (
    Command,
    ErrorBoundary,
    Namespace,
    ParseMode,
    RunResult,
    SilentBoundary,
    VariableInfo,
)
from neuroshell.core.exceptions import (
    AssertionFailedError,
    CommandError,
    CommandNotFoundError,
    CommandUsageError,
    NeuroShellError,
    ScriptLoadError,
    ServiceError,
    ServiceNotInitializedError,
    StackOverflowError,
    VariableValidationError,
)
from neuroshell.core.helpers import is_truthy, namespace_of

__all__ = [
    # Models
    "Command",
    "ErrorBoundary",
    "Namespace",
    "ParseMode",
    "RunResult",
    "SilentBoundary",
    "VariableInfo",
    # Exceptions
    "NeuroShellError",
    "VariableValidationError",
    "ServiceError",
    "ServiceNotInitializedError",
    "CommandError",
    "CommandNotFoundError",
    "CommandUsageError",
    "StackOverflowError",
    "AssertionFailedError",
    "ScriptLoadError",
    # Helpers
    "is_truthy",
    "namespace_of",
]
