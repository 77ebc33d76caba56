"""Try command - run a directive with its failure captured."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register(
    "try",
    "Execute a command and capture errors",
    usage="\\try command",
    examples=["\\try \\run missing.neuro", "\\echo status=${_status} error=${_error}"],
    notes=("If the command fails, _status is 1 and _error holds the message; "
           "the script continues with the next line."),
)
def cmd_try(shell: "Shell", options: dict[str, str], message: str) -> None:
    body = message.strip()
    if not body:
        shell.variables.set_system_variable("_output", "")
        return
    shell.push_try_block([body])
