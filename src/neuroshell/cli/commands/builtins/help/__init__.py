"""Help command - show available directives."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandNotFoundError

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register("help", "Show available commands", usage="\\help [command]")
def cmd_help(shell: "Shell", options: dict[str, str], message: str) -> None:
    """List directives, or show one directive's details."""
    out = shell.printer
    name = message.strip().lstrip("\\") or next(iter(options), "")

    if name:
        entry = shell.commands.get(name)
        if entry is None:
            raise CommandNotFoundError(f"unknown command: \\{name}")
        out.print(entry.help_text())
        return

    out.print("Commands:")
    for entry in shell.commands.all_commands():
        out.print(f"  {entry.usage:<44} - {entry.description}")
    out.print("")
    out.print("Lines without a leading backslash are passed to the default command (\\echo).")
