"""
Service registry: one-time wiring of the services a shell uses.
"""

from __future__ import annotations

import logging
import threading

from neuroshell.core.exceptions import ServiceError
from neuroshell.engine.context import Context
from neuroshell.services.base import Service

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Name-to-service map guarded by a lock."""

    def __init__(self):
        self._services: dict[str, Service] = {}
        self._lock = threading.Lock()

    def register(self, service: Service) -> Service:
        """Register a service under its name.

        Raises:
            ServiceError: If a service with the same name is registered.
        """
        with self._lock:
            if service.name in self._services:
                raise ServiceError(f"service already registered: {service.name}")
            self._services[service.name] = service
        return service

    def get(self, name: str) -> Service:
        """Look up a service.

        Raises:
            ServiceError: If nothing is registered under `name`.
        """
        with self._lock:
            service = self._services.get(name)
        if service is None:
            raise ServiceError(f"service not found: {name}")
        return service

    def initialize_all(self) -> None:
        with self._lock:
            services = list(self._services.values())
        for service in services:
            if not service.initialized:
                service.initialize()

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._services)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._services

    def __len__(self) -> int:
        with self._lock:
            return len(self._services)


def create_default_registry(context: Context, initialize: bool = True) -> ServiceRegistry:
    """Build a registry with every core service wired to `context`."""
    from neuroshell.services.errors import ErrorManagementService
    from neuroshell.services.interpolation import InterpolationService
    from neuroshell.services.queue import QueueService
    from neuroshell.services.script import ScriptService
    from neuroshell.services.stack import StackService
    from neuroshell.services.variables import VariableService

    registry = ServiceRegistry()
    for cls in (
        VariableService,
        InterpolationService,
        StackService,
        QueueService,
        ErrorManagementService,
        ScriptService,
    ):
        registry.register(cls(context))
    if initialize:
        registry.initialize_all()
    return registry
