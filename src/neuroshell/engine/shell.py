"""
Shell: the dispatch loop that drains the execution stack and queue.

Each step takes one raw line (stack first, then queue), turns boundary
markers into boundary pushes and pops, and otherwise parses, interpolates
and runs the directive. A failing directive inside a try block is captured
and the rest of that block is skipped; outside any try block the failure is
terminal and all pending work is discarded.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from neuroshell.cli.output import Printer
from neuroshell.config import Config
from neuroshell.core.datamodels import Command, ParseMode, RunResult
from neuroshell.core.exceptions import (
    CommandNotFoundError,
    CommandUsageError,
    StackOverflowError,
)
from neuroshell.core.helpers import is_truthy
from neuroshell.engine.boundaries import (
    TRY_END,
    Marker,
    parse_marker,
    wrap_silent,
    wrap_try,
)
from neuroshell.engine.context import Context
from neuroshell.engine.parser import Parser
from neuroshell.engine.stack import DEFAULT_MAX_STACK_DEPTH, MAX_STACK_DEPTH_VARIABLE
from neuroshell.services import (
    ErrorManagementService,
    InterpolationService,
    QueueService,
    ScriptService,
    StackService,
    VariableService,
    create_default_registry,
)

if TYPE_CHECKING:
    from neuroshell.cli.commands.registry import CommandRegistry

logger = logging.getLogger(__name__)


def _check_body(lines: Sequence[str]) -> None:
    """Reject block bodies that would open or close boundaries themselves."""
    for line in lines:
        if parse_marker(line) is not None:
            raise CommandUsageError(f"boundary marker not allowed in a block: {line}")


class Shell:
    """One shell session.

    Args:
        commands: Directive registry used for dispatch.
        config: Settings; missing keys fall back to DEFAULTS.
        context: Session state; a fresh one is created if omitted.
        printer: Output sink; defaults to a silent-aware stdout printer.
        test_mode: Overrides the config's test_mode when not None.
    """

    def __init__(
        self,
        commands: "CommandRegistry",
        config: Config | None = None,
        context: Context | None = None,
        printer: Printer | None = None,
        test_mode: bool | None = None,
    ):
        self.config = config or Config()
        if test_mode is None:
            test_mode = bool(self.config.get("test_mode"))
        self.context = context or Context(
            test_mode=test_mode,
            interpolation_max_passes=int(self.config.get("interpolation_max_passes")),
        )
        self.commands = commands

        self.services = create_default_registry(self.context)
        self.variables: VariableService = self.services.get("variable")
        self.interpolation: InterpolationService = self.services.get("interpolation")
        self.stack: StackService = self.services.get("stack")
        self.queue: QueueService = self.services.get("queue")
        self.errors: ErrorManagementService = self.services.get("error_management")
        self.scripts: ScriptService = self.services.get("script")

        self.parser = Parser(
            parse_mode_for=self._parse_mode_for,
            default_command=self.config.get("default_command"),
        )
        self.printer = printer or Printer(is_silent=self.stack.is_in_silent_block)
        self.echo_commands = bool(self.config.get("echo_commands"))
        self.exit_requested = False
        self.exit_code = 0

        self.set_max_stack_depth(self.config.get("max_stack_depth"))

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def set_max_stack_depth(self, value) -> int:
        """Write the depth guard ceiling; invalid values use the default."""
        try:
            depth = int(value)
        except (TypeError, ValueError):
            depth = DEFAULT_MAX_STACK_DEPTH
        if depth <= 0:
            depth = DEFAULT_MAX_STACK_DEPTH
        self.variables.set_system_variable(MAX_STACK_DEPTH_VARIABLE, str(depth))
        return depth

    def _parse_mode_for(self, name: str) -> ParseMode:
        entry = self.commands.get(name)
        return entry.parse_mode if entry is not None else ParseMode.KEY_VALUE

    def _default_command(self) -> str | None:
        return self.variables.get("_default_command").strip() or None

    def _echo_enabled(self) -> bool:
        return self.echo_commands or is_truthy(self.variables.get("_echo_command"))

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def execute(self, text: str) -> RunResult:
        """Queue one or more lines of input and run until idle."""
        lines = [line for line in text.splitlines() if line.strip()]
        self.queue.enqueue_all(lines)
        return self.run()

    def run_script(self, path: str | Path) -> RunResult:
        """Load a script into the queue and run it.

        Raises:
            ScriptLoadError: If the script cannot be read.
        """
        self.scripts.load_script(path)
        return self.run()

    def reset(self) -> None:
        """Discard pending work, open boundaries and error state."""
        self.context.reset_execution()
        self.context.error_state.clear()

    # ------------------------------------------------------------------
    # Block expansion (used by control-flow directives)
    # ------------------------------------------------------------------

    def push_block(self, lines: Sequence[str]) -> None:
        """Push lines to run next, in order.

        Raises:
            CommandUsageError: If a line is a boundary marker.
            StackOverflowError: If the depth guard refused the block.
        """
        _check_body(lines)
        self._push_lines(lines)

    def _push_lines(self, lines: Sequence[str]) -> None:
        if not self.stack.push_all(lines):
            raise StackOverflowError(
                f"stack depth limit ({self.stack.max_depth()}) exceeded"
            )

    def push_try_block(self, body: Sequence[str]) -> str:
        _check_body(body)
        try_id = self.stack.next_try_id()
        self._push_lines(wrap_try(try_id, body))
        return try_id

    def push_silent_block(self, body: Sequence[str]) -> str:
        _check_body(body)
        silent_id = self.stack.next_silent_id()
        self._push_lines(wrap_silent(silent_id, body))
        return silent_id

    # ------------------------------------------------------------------
    # Dispatch loop
    # ------------------------------------------------------------------

    def _next_line(self) -> tuple[str, bool] | None:
        """Next raw line and whether it came from the stack."""
        line, ok = self.stack.pop()
        if ok:
            return line, True
        line, ok = self.queue.dequeue()
        if ok:
            return line, False
        return None

    def run(self) -> RunResult:
        """Drain the stack and queue."""
        result = RunResult()
        self.exit_requested = False

        while not self.exit_requested:
            item = self._next_line()
            if item is None:
                break
            line, from_stack = item

            if from_stack:
                marker = parse_marker(line)
                if marker is not None:
                    self._handle_marker(marker)
                    continue

            command, error = self.execute_line(line)
            result.executed += 1
            if error is None:
                continue

            if self.stack.is_in_try_block():
                self._capture(error)
                continue

            self._fail(command, error, result)
            return result

        if self.exit_requested:
            result.exited = True
            self.context.reset_execution()
        return result

    def execute_line(self, line: str) -> tuple[Command, Exception | None]:
        """Parse, interpolate and run one directive.

        Returns:
            The interpolated command and the exception it raised, if any.
        """
        command = self.parser.parse(line, default_command=self._default_command())
        command = self.interpolation.interpolate_command(command)

        if self._echo_enabled():
            self.printer.echo_command(line)

        self.errors.reset_error_state()
        try:
            entry = self.commands.get(command.name)
            if entry is None:
                raise CommandNotFoundError(f"unknown command: \\{command.name}")
            logger.debug(f"Dispatching \\{command.name} {command.options} {command.message!r}")
            entry.handler(self, command.options, command.message)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.debug(f"\\{command.name} failed: {message}")
            self.errors.set_error_state_from_exception(e)
            self._set_outcome("1", message)
            return command, e

        self.errors.set_error_state("0", "")
        self._set_outcome("0", "")
        return command, None

    def _set_outcome(self, status: str, error: str) -> None:
        self.variables.set_system_variable("_status", status)
        self.variables.set_system_variable("_error", error)

    # ------------------------------------------------------------------
    # Boundaries
    # ------------------------------------------------------------------

    def _handle_marker(self, marker: Marker) -> None:
        if marker.kind == "try":
            if marker.start:
                self.stack.push_error_boundary(marker.boundary_id)
            else:
                self._close_try(marker.boundary_id)
        elif marker.start:
            self.stack.push_silent_boundary(marker.boundary_id)
        else:
            self.stack.pop_silent_boundary()

    def _close_try(self, try_id: str) -> None:
        current = self.stack.current_try_id()
        if current != try_id:
            logger.warning(f"Try block end {try_id} does not match open block {current}")
        captured = self.stack.is_try_error_captured()
        self.stack.pop_error_boundary()
        if not captured:
            self._set_outcome("0", "")

    def _capture(self, error: Exception) -> None:
        """Absorb a failure into the innermost try block and skip its rest."""
        try_id = self.stack.current_try_id()
        self.stack.set_try_error_captured()
        logger.debug(f"Error captured by {try_id}: {error}")

        end = f"{TRY_END}{try_id}"
        while True:
            line, ok = self.stack.pop()
            if not ok:
                logger.warning(f"End of try block {try_id} not found on stack")
                self.stack.pop_error_boundary()
                return
            if line == end:
                self._close_try(try_id)
                return
            marker = parse_marker(line)
            if marker is not None and marker.kind == "silent":
                self._handle_marker(marker)

    def _fail(self, command: Command, error: Exception, result: RunResult) -> None:
        """Terminal failure: drop pending work and report."""
        message = str(error) or type(error).__name__
        self.context.reset_execution()

        result.success = False
        result.command = command.original_text.strip()
        result.error = message

        logger.info(f"Execution stopped at {result.command!r}: {message}")
        self.printer.error(f"Error: {message}")
