"""
Execution stack: LIFO backlog of raw lines produced by block expansion.

Every push is checked against a depth guard whose ceiling is read from the
`_max_stack_depth` variable at push time. A push that would exceed it is
dropped and logged rather than raised, and the push methods report the
rejection through their return value.
"""

from __future__ import annotations

import logging
from typing import Sequence

from neuroshell.engine.variables import VariableStore

logger = logging.getLogger(__name__)

MAX_STACK_DEPTH_VARIABLE = "_max_stack_depth"
DEFAULT_MAX_STACK_DEPTH = 1000


class DepthGuard:
    """Overflow policy for the execution stack."""

    def __init__(self, variables: VariableStore | None = None, default: int = DEFAULT_MAX_STACK_DEPTH):
        self.variables = variables
        self.default = default

    def limit(self) -> int:
        """Current ceiling; invalid or non-positive settings use the default."""
        if self.variables is None:
            return self.default
        raw = self.variables.get(MAX_STACK_DEPTH_VARIABLE).strip()
        try:
            value = int(raw)
        except ValueError:
            return self.default
        return value if value > 0 else self.default

    def allows(self, current: int, incoming: int) -> bool:
        return current + incoming <= self.limit()


class ExecutionStack:
    """Last-in, first-out list of raw lines."""

    def __init__(self, guard: DepthGuard | None = None):
        self._items: list[str] = []
        self.guard = guard or DepthGuard()

    def push(self, line: str) -> bool:
        """Push one line.

        Returns:
            False if the depth guard rejected the push.
        """
        if not self.guard.allows(len(self._items), 1):
            logger.warning(
                f"Stack depth limit ({self.guard.limit()}) reached, dropping command: {line}"
            )
            return False
        self._items.append(line)
        return True

    def push_all(self, lines: Sequence[str]) -> bool:
        """Push a block body so later pops yield it in its original order.

        The batch is accepted or rejected as a whole.

        Returns:
            False if the depth guard rejected the batch.
        """
        lines = list(lines)
        if not lines:
            return True
        if not self.guard.allows(len(self._items), len(lines)):
            logger.warning(
                f"Stack depth limit ({self.guard.limit()}) reached, dropping {len(lines)} commands"
            )
            return False
        self._items.extend(reversed(lines))
        return True

    def pop(self) -> tuple[str, bool]:
        """Remove the top line.

        Returns:
            Tuple of (line, True), or ("", False) when the stack is empty.
        """
        if not self._items:
            return "", False
        return self._items.pop(), True

    def peek_top(self) -> tuple[str, bool]:
        if not self._items:
            return "", False
        return self._items[-1], True

    def peek_all(self) -> list[str]:
        """Snapshot from top (next to run) to bottom."""
        return list(reversed(self._items))

    def clear(self) -> None:
        self._items.clear()

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
