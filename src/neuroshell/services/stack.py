"""
Execution stack service.

Besides the stack itself this covers the try and silent boundary stacks,
since block expansion always touches both.
"""

from __future__ import annotations

from typing import Sequence

from neuroshell.core.datamodels import ErrorBoundary, SilentBoundary
from neuroshell.services.base import Service, requires_initialized


class StackService(Service):
    name = "stack"

    # Stack

    @requires_initialized
    def push(self, line: str) -> bool:
        return self.context.stack.push(line)

    @requires_initialized
    def push_all(self, lines: Sequence[str]) -> bool:
        return self.context.stack.push_all(lines)

    @requires_initialized
    def pop(self) -> tuple[str, bool]:
        return self.context.stack.pop()

    @requires_initialized
    def peek_top(self) -> tuple[str, bool]:
        return self.context.stack.peek_top()

    @requires_initialized
    def peek_all(self) -> list[str]:
        return self.context.stack.peek_all()

    @requires_initialized
    def clear(self) -> None:
        self.context.stack.clear()

    @requires_initialized
    def size(self) -> int:
        return self.context.stack.size()

    @requires_initialized
    def is_empty(self) -> bool:
        return self.context.stack.is_empty()

    @requires_initialized
    def max_depth(self) -> int:
        return self.context.stack.guard.limit()

    # Try boundaries

    @requires_initialized
    def next_try_id(self) -> str:
        return self.context.boundaries.next_try_id()

    @requires_initialized
    def push_error_boundary(self, try_id: str) -> None:
        self.context.boundaries.push_error_boundary(try_id)

    @requires_initialized
    def pop_error_boundary(self) -> ErrorBoundary | None:
        return self.context.boundaries.pop_error_boundary()

    @requires_initialized
    def is_in_try_block(self) -> bool:
        return self.context.boundaries.is_in_try_block()

    @requires_initialized
    def current_try_id(self) -> str:
        return self.context.boundaries.current_try_id()

    @requires_initialized
    def current_try_depth(self) -> int:
        return self.context.boundaries.current_try_depth()

    @requires_initialized
    def set_try_error_captured(self) -> None:
        self.context.boundaries.set_try_error_captured()

    @requires_initialized
    def is_try_error_captured(self) -> bool:
        return self.context.boundaries.is_try_error_captured()

    # Silent boundaries

    @requires_initialized
    def next_silent_id(self) -> str:
        return self.context.boundaries.next_silent_id()

    @requires_initialized
    def push_silent_boundary(self, silent_id: str) -> None:
        self.context.boundaries.push_silent_boundary(silent_id)

    @requires_initialized
    def pop_silent_boundary(self) -> SilentBoundary | None:
        return self.context.boundaries.pop_silent_boundary()

    @requires_initialized
    def is_in_silent_block(self) -> bool:
        return self.context.boundaries.is_in_silent_block()

    @requires_initialized
    def current_silent_id(self) -> str:
        return self.context.boundaries.current_silent_id()

    @requires_initialized
    def current_silent_depth(self) -> int:
        return self.context.boundaries.current_silent_depth()
