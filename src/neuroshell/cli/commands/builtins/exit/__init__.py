"""Exit command - leave the shell."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register("exit", "Exit the shell", usage="\\exit[code=N, message=text]",
                           aliases=["quit"])
def cmd_exit(shell: "Shell", options: dict[str, str], message: str) -> None:
    code = options.get("code", "")
    shell.exit_code = int(code) if code.isdigit() and int(code) <= 255 else 0

    text = options.get("message") or message.strip()
    if text:
        if shell.exit_code:
            shell.printer.error(text)
        else:
            shell.printer.print(text)
    shell.exit_requested = True
