"""
Error management service.

Tracks whether the last command passed or failed. The dispatch loop resets
the state before each command and sets it after; `last` keeps the previous
outcome so `\\get[_status]`-style inspection works after a reset.
"""

from __future__ import annotations

from neuroshell.services.base import Service, requires_initialized


class ErrorManagementService(Service):
    name = "error_management"

    @requires_initialized
    def set_error_state(self, status: str, message: str) -> None:
        self.context.error_state.set(status, message)

    @requires_initialized
    def set_error_state_from_exception(self, exc: BaseException) -> None:
        self.context.error_state.set("1", str(exc) or type(exc).__name__)

    @requires_initialized
    def reset_error_state(self) -> None:
        self.context.error_state.reset()

    @requires_initialized
    def get_current_error_state(self) -> tuple[str, str]:
        return self.context.error_state.get_current()

    @requires_initialized
    def get_last_error_state(self) -> tuple[str, str]:
        return self.context.error_state.get_last()

    @requires_initialized
    def is_error_state(self) -> bool:
        return self.context.error_state.is_error_state()
