"""If command - run a directive when a condition is truthy."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandUsageError
from neuroshell.core.helpers import is_truthy

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register(
    "if",
    "Execute a command when the condition is true",
    usage="\\if[condition=value] command",
    examples=["\\if[condition=${debug}] \\echo Debug mode is on"],
    notes=("Truthy: true, 1, yes, on, enabled and any other non-empty text. "
           "Falsy: false, 0, no, off, disabled and the empty string."),
)
def cmd_if(shell: "Shell", options: dict[str, str], message: str) -> None:
    """Record #if_result and push the command if the condition holds."""
    if "condition" not in options:
        raise CommandUsageError("condition parameter is required")

    result = is_truthy(options["condition"])
    shell.variables.set_system_variable("#if_result", "true" if result else "false")

    body = message.strip()
    if result and body:
        shell.push_block([body])
