"""Set command - assign user variables."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandUsageError

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

USAGE = "\\set[name=value, ...] or \\set name value"


@command_registry.register(
    "set",
    "Set one or more variables",
    usage=USAGE,
    examples=["\\set[name=Alice, greeting=\"Hello, world\"]", "\\set count 3"],
)
def cmd_set(shell: "Shell", options: dict[str, str], message: str) -> None:
    if options:
        pairs = list(options.items())
    else:
        name, _, value = message.strip().partition(" ")
        if not name:
            raise CommandUsageError(f"Usage: {USAGE}")
        pairs = [(name, value.strip())]

    for name, value in pairs:
        shell.variables.set(name, value)
        shell.printer.print(f"Setting {name} = {value}")
