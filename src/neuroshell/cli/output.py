"""
Terminal output for directives.

All directive output goes through a Printer so that silent blocks can
suppress it in one place.
"""

from __future__ import annotations

import sys
from typing import Callable, TextIO

# ANSI escape codes
GREY = "\033[90m"
RED = "\033[31m"
YELLOW = "\033[33m"
RESET = "\033[0m"


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class Printer:
    """Silent-aware writer for stdout and stderr.

    Args:
        is_silent: Called before every write; output is dropped while it
            returns True.
        stdout: Stream for regular output (default: sys.stdout at write time).
        stderr: Stream for feedback and errors (default: sys.stderr at write time).
    """

    def __init__(
        self,
        is_silent: Callable[[], bool] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.is_silent = is_silent or (lambda: False)
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def _colored(self, text: str, color: str, stream: TextIO) -> str:
        return f"{color}{text}{RESET}" if _isatty(stream) else text

    def print(self, text: str = "", end: str = "\n") -> None:
        if self.is_silent():
            return
        print(text, end=end, file=self.stdout, flush=True)

    def feedback(self, msg: str) -> None:
        """Grey status message on stderr."""
        if self.is_silent():
            return
        print(self._colored(msg, GREY, self.stderr), file=self.stderr)

    def warning(self, msg: str) -> None:
        if self.is_silent():
            return
        print(self._colored(msg, YELLOW, self.stderr), file=self.stderr)

    def error(self, msg: str) -> None:
        if self.is_silent():
            return
        print(self._colored(msg, RED, self.stderr), file=self.stderr)

    def echo_command(self, line: str) -> None:
        """Show a directive before it runs."""
        self.print(self._colored(f"> {line.strip()}", GREY, self.stdout))
