"""If-not command - run a directive when a condition is falsy."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandUsageError
from neuroshell.core.helpers import is_truthy

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register(
    "if-not",
    "Execute a command when the condition is false",
    usage="\\if-not[condition=value] command",
    examples=["\\if-not[condition=${configured}] \\echo Run setup first"],
)
def cmd_if_not(shell: "Shell", options: dict[str, str], message: str) -> None:
    if "condition" not in options:
        raise CommandUsageError("condition parameter is required")

    result = not is_truthy(options["condition"])
    shell.variables.set_system_variable("#if_result", "true" if result else "false")

    body = message.strip()
    if result and body:
        shell.push_block([body])
