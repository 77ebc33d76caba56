"""
Error state tracking: the most recent command outcome and the one before it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ErrorRecord:
    status: str = "0"
    error: str = ""

    @property
    def failed(self) -> bool:
        return self.status != "0"


class ErrorState:
    """Current and previous (status, error) pairs.

    `reset()` moves the current record into `last` and starts a clean one,
    so the outcome of the previous command stays inspectable while the next
    one runs.
    """

    def __init__(self):
        self.current = ErrorRecord()
        self.last = ErrorRecord()

    def set(self, status: str, error: str) -> None:
        self.current = ErrorRecord(str(status), error)

    def reset(self) -> None:
        self.last = self.current
        self.current = ErrorRecord()

    def get_current(self) -> tuple[str, str]:
        return self.current.status, self.current.error

    def get_last(self) -> tuple[str, str]:
        return self.last.status, self.last.error

    def is_error_state(self) -> bool:
        return self.current.failed

    def clear(self) -> None:
        self.current = ErrorRecord()
        self.last = ErrorRecord()
