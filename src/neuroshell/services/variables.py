"""Variable service."""

from __future__ import annotations

from neuroshell.core.datamodels import VariableInfo
from neuroshell.services.base import Service, requires_initialized


class VariableService(Service):
    name = "variable"

    @requires_initialized
    def get(self, name: str) -> str:
        return self.context.variables.get(name)

    @requires_initialized
    def set(self, name: str, value: str) -> None:
        self.context.variables.set(name, value)

    @requires_initialized
    def set_system_variable(self, name: str, value: str) -> None:
        self.context.variables.set_system_variable(name, value)

    @requires_initialized
    def get_all(self) -> dict[str, str]:
        return self.context.variables.get_all()

    @requires_initialized
    def describe(self, name: str) -> VariableInfo:
        return self.context.variables.describe(name)
