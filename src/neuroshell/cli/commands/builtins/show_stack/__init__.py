"""Show-stack command - print pending stack lines and open blocks."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.helpers import is_truthy

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

MAX_WIDTH = 80


@command_registry.register(
    "show-stack",
    "Display the execution stack",
    usage="\\show-stack[detailed=true]",
)
def cmd_show_stack(shell: "Shell", options: dict[str, str], message: str) -> None:
    out = shell.printer
    stack = shell.stack.peek_all()
    detailed = is_truthy(options.get("detailed", ""))

    if not stack:
        out.print("Execution stack is empty")
    else:
        out.print(f"Execution Stack (Size: {len(stack)})" if detailed else "Execution Stack:")
        for i, line in enumerate(stack):
            if i == 0:
                label = "TOP"
            elif i == len(stack) - 1:
                label = "BOTTOM"
            else:
                label = str(i)
            text = f"[{label:>6}] {line}"
            if len(text) > MAX_WIDTH:
                text = text[:MAX_WIDTH - 3] + "..."
            out.print(text)

    if detailed:
        if stack:
            out.print("")
            out.print("Stack operations: LIFO (Last In, First Out)")
            out.print(f"Next command to execute: {stack[0]}")
        out.print(f"Max depth: {shell.stack.max_depth()}")
        if shell.stack.is_in_try_block():
            out.print(f"Currently in try block: {shell.stack.current_try_id()} "
                      f"(depth: {shell.stack.current_try_depth()})")
        if shell.stack.is_in_silent_block():
            out.print(f"Currently in silent block: {shell.stack.current_silent_id()} "
                      f"(depth: {shell.stack.current_silent_depth()})")
