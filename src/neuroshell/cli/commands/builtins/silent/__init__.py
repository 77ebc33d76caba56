"""Silent command - run a directive without printing its output."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register(
    "silent",
    "Execute a command with output suppressed",
    usage="\\silent command",
    examples=["\\silent \\set[temp=value]"],
)
def cmd_silent(shell: "Shell", options: dict[str, str], message: str) -> None:
    body = message.strip()
    if body:
        shell.push_silent_block([body])
