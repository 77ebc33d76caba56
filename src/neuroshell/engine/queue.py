"""
Execution queue: FIFO backlog of raw command lines.

Holds the remaining body of a loaded script or buffered REPL input. Block
bodies produced by control-flow directives go on the stack instead.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable


class ExecutionQueue:
    """First-in, first-out list of raw lines."""

    def __init__(self):
        self._items: deque[str] = deque()

    def enqueue(self, line: str) -> None:
        self._items.append(line)

    def enqueue_all(self, lines: Iterable[str]) -> None:
        self._items.extend(lines)

    def dequeue(self) -> tuple[str, bool]:
        """Remove the oldest line.

        Returns:
            Tuple of (line, True), or ("", False) when the queue is empty.
        """
        if not self._items:
            return "", False
        return self._items.popleft(), True

    def peek(self) -> list[str]:
        """Snapshot in execution order."""
        return list(self._items)

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
