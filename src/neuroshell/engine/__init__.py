"""
Script execution runtime.

Leaf components (variables, interpolation, queue, stack, boundaries, error
state) are plain classes owned by a Context. The Shell dispatch loop sits on
top of the service layer and is imported lazily.
"""

from neuroshell.engine.boundaries import BoundaryManager, parse_marker, wrap_silent, wrap_try
from neuroshell.engine.context import Context
from neuroshell.engine.error_state import ErrorState
from neuroshell.engine.interpolation import Interpolator
from neuroshell.engine.parser import Parser
from neuroshell.engine.queue import ExecutionQueue
from neuroshell.engine.stack import DepthGuard, ExecutionStack
from neuroshell.engine.variables import VariableStore


# Lazy import for Shell (depends on the service layer)
def __getattr__(name):
    if name == "Shell":
        from neuroshell.engine.shell import Shell
        return Shell
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "BoundaryManager",
    "Context",
    "DepthGuard",
    "ErrorState",
    "ExecutionQueue",
    "ExecutionStack",
    "Interpolator",
    "Parser",
    "Shell",
    "VariableStore",
    "parse_marker",
    "wrap_silent",
    "wrap_try",
]
