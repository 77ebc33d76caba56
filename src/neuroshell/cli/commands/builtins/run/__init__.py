"""Run command - execute another script in place."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandUsageError

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register(
    "run",
    "Execute a .neuro script",
    usage="\\run path",
    examples=["\\run setup.neuro", "\\try \\run optional.neuro"],
    notes="The script's lines run before anything that follows \\run.",
)
def cmd_run(shell: "Shell", options: dict[str, str], message: str) -> None:
    path = message.strip()
    if not path:
        raise CommandUsageError("script path is required\n\nUsage: \\run path")

    lines = shell.scripts.read_lines(path)
    shell.push_block(lines)
