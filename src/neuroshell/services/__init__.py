"""
Service layer over the session Context.

Each service wraps one runtime component and refuses to operate until it
has been initialized.
"""

from neuroshell.services.base import Service, requires_initialized
from neuroshell.services.errors import ErrorManagementService
from neuroshell.services.interpolation import InterpolationService
from neuroshell.services.queue import QueueService
from neuroshell.services.registry import ServiceRegistry, create_default_registry
from neuroshell.services.script import ScriptService, read_script_lines
from neuroshell.services.stack import StackService
from neuroshell.services.variables import VariableService

__all__ = [
    "Service",
    "requires_initialized",
    "ServiceRegistry",
    "create_default_registry",
    "VariableService",
    "InterpolationService",
    "StackService",
    "QueueService",
    "ErrorManagementService",
    "ScriptService",
    "read_script_lines",
]
