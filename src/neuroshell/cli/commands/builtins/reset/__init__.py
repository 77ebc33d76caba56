"""Reset command - drop pending work and error state."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register("reset", "Clear the stack, queue, open blocks and error state")
def cmd_reset(shell: "Shell", options: dict[str, str], message: str) -> None:
    shell.reset()
    shell.printer.feedback("Execution state reset.")
