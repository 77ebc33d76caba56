"""Execution queue service."""

from __future__ import annotations

from typing import Iterable

from neuroshell.services.base import Service, requires_initialized


class QueueService(Service):
    name = "queue"

    @requires_initialized
    def enqueue(self, line: str) -> None:
        self.context.queue.enqueue(line)

    @requires_initialized
    def enqueue_all(self, lines: Iterable[str]) -> None:
        self.context.queue.enqueue_all(lines)

    @requires_initialized
    def dequeue(self) -> tuple[str, bool]:
        return self.context.queue.dequeue()

    @requires_initialized
    def peek(self) -> list[str]:
        return self.context.queue.peek()

    @requires_initialized
    def size(self) -> int:
        return self.context.queue.size()

    @requires_initialized
    def clear(self) -> None:
        self.context.queue.clear()
