"""Get command - print one variable."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandUsageError

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

USAGE = "\\get[name] or \\get name"


@command_registry.register("get", "Show a variable's value", usage=USAGE,
                           examples=["\\get[@user]", "\\get _status"])
def cmd_get(shell: "Shell", options: dict[str, str], message: str) -> None:
    """Print `name = value` and store the value in _output."""
    if options:
        name = next(iter(options))
    else:
        fields = message.split()
        name = fields[0] if fields else ""
    if not name:
        raise CommandUsageError(f"Usage: {USAGE}")

    value = shell.variables.get(name)
    shell.variables.set_system_variable("_output", value)
    shell.printer.print(f"{name} = {value}")
