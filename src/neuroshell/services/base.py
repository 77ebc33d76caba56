"""
Base class and initialization guard for services.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from neuroshell.core.exceptions import ServiceNotInitializedError
from neuroshell.engine.context import Context

logger = logging.getLogger(__name__)


def requires_initialized(fn: Callable) -> Callable:
    """
    Decorator that makes a service method fail fast before initialize().

    Usage:
        @requires_initialized
        def get(self, name): ...
    """
    @functools.wraps(fn)
    def wrapper(self: "Service", *args, **kwargs):
        if not self.initialized:
            raise ServiceNotInitializedError(self.name)
        return fn(self, *args, **kwargs)

    return wrapper


class Service:
    """A named facade over one part of the session Context."""

    name: str = "base"

    def __init__(self, context: Context):
        self.context = context
        self.initialized = False

    def initialize(self) -> None:
        self.initialized = True
        logger.debug(f"Initialized {self.name} service")

    def __repr__(self) -> str:
        state = "ready" if self.initialized else "uninitialized"
        return f"<{type(self).__name__} {self.name} ({state})>"
