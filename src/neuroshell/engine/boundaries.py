"""
Error and silent boundaries.

Control-flow directives wrap their body in marker lines before pushing it
onto the execution stack:

    ERROR_BOUNDARY_START:<id>    SILENT_BOUNDARY_START:<id>
    <body...>                    <body...>
    ERROR_BOUNDARY_END:<id>      SILENT_BOUNDARY_END:<id>

The dispatch loop turns those markers into pushes and pops on the two
independent boundary stacks kept here. Markers are only honoured when they
come off the execution stack.
"""

from __future__ import annotations

import itertools
import logging
from typing import NamedTuple, Sequence

from neuroshell.core.datamodels import ErrorBoundary, SilentBoundary

logger = logging.getLogger(__name__)

TRY_START = "ERROR_BOUNDARY_START:"
TRY_END = "ERROR_BOUNDARY_END:"
SILENT_START = "SILENT_BOUNDARY_START:"
SILENT_END = "SILENT_BOUNDARY_END:"


class Marker(NamedTuple):
    kind: str  # "try" or "silent"
    start: bool
    boundary_id: str


_MARKERS = (
    (TRY_START, "try", True),
    (TRY_END, "try", False),
    (SILENT_START, "silent", True),
    (SILENT_END, "silent", False),
)


def parse_marker(line: str) -> Marker | None:
    """Recognise a boundary marker line, or return None."""
    for prefix, kind, start in _MARKERS:
        if line.startswith(prefix):
            return Marker(kind, start, line[len(prefix):])
    return None


def wrap_try(try_id: str, body: Sequence[str]) -> list[str]:
    """Block body in execution order, framed by try markers."""
    return [f"{TRY_START}{try_id}", *body, f"{TRY_END}{try_id}"]


def wrap_silent(silent_id: str, body: Sequence[str]) -> list[str]:
    """Block body in execution order, framed by silent markers."""
    return [f"{SILENT_START}{silent_id}", *body, f"{SILENT_END}{silent_id}"]


class BoundaryManager:
    """Open try and silent boundaries, innermost last."""

    def __init__(self):
        self._try: list[ErrorBoundary] = []
        self._silent: list[SilentBoundary] = []
        self._try_ids = itertools.count(1)
        self._silent_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Id allocation
    # ------------------------------------------------------------------

    def next_try_id(self) -> str:
        return f"try_id_{next(self._try_ids)}"

    def next_silent_id(self) -> str:
        return f"silent_id_{next(self._silent_ids)}"

    # ------------------------------------------------------------------
    # Try boundaries
    # ------------------------------------------------------------------

    def push_error_boundary(self, try_id: str) -> None:
        self._try.append(ErrorBoundary(try_id=try_id, depth=len(self._try) + 1))
        logger.debug(f"Entered try block {try_id} (depth {len(self._try)})")

    def pop_error_boundary(self) -> ErrorBoundary | None:
        """Close the innermost try block; no-op when none is open."""
        if not self._try:
            return None
        boundary = self._try.pop()
        logger.debug(f"Exited try block {boundary.try_id}")
        return boundary

    def is_in_try_block(self) -> bool:
        return bool(self._try)

    def current_try_id(self) -> str:
        return self._try[-1].try_id if self._try else ""

    def current_try_depth(self) -> int:
        return len(self._try)

    def set_try_error_captured(self) -> None:
        """Flag the innermost try block as having captured an error."""
        if self._try:
            self._try[-1].captured = True

    def is_try_error_captured(self) -> bool:
        return bool(self._try) and self._try[-1].captured

    # ------------------------------------------------------------------
    # Silent boundaries
    # ------------------------------------------------------------------

    def push_silent_boundary(self, silent_id: str) -> None:
        self._silent.append(SilentBoundary(silent_id=silent_id, depth=len(self._silent) + 1))
        logger.debug(f"Entered silent block {silent_id} (depth {len(self._silent)})")

    def pop_silent_boundary(self) -> SilentBoundary | None:
        """Close the innermost silent block; no-op when none is open."""
        if not self._silent:
            return None
        return self._silent.pop()

    def is_in_silent_block(self) -> bool:
        return bool(self._silent)

    def current_silent_id(self) -> str:
        return self._silent[-1].silent_id if self._silent else ""

    def current_silent_depth(self) -> int:
        return len(self._silent)

    def clear(self) -> None:
        """Close every open boundary. Id counters keep running."""
        self._try.clear()
        self._silent.clear()
