"""Vars command - list variables by namespace."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.datamodels import Namespace
from neuroshell.core.exceptions import CommandUsageError
from neuroshell.core.helpers import namespace_of

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

_TYPES = {ns.value: ns for ns in Namespace}


@command_registry.register(
    "vars",
    "List variables",
    usage="\\vars[pattern=regex, type=user|system|metadata|command|all]",
    examples=["\\vars", "\\vars[type=user]", "\\vars[pattern=^_]"],
)
def cmd_vars(shell: "Shell", options: dict[str, str], message: str) -> None:
    kind = options.get("type", "all").lower() or "all"
    if kind != "all" and kind not in _TYPES:
        raise CommandUsageError(
            f"invalid type: {kind} (must be user, system, metadata, command or all)"
        )

    pattern = options.get("pattern", "")
    try:
        regex = re.compile(pattern) if pattern else None
    except re.error as e:
        raise CommandUsageError(f"invalid pattern {pattern!r}: {e}") from None

    variables = shell.variables.get_all()
    names = sorted(
        name for name in variables
        if (kind == "all" or namespace_of(name) is _TYPES[kind])
        and (regex is None or regex.search(name))
    )

    if not names:
        shell.printer.print("No variables found.")
        return

    for ns in Namespace:
        group = [name for name in names if namespace_of(name) is ns]
        if not group:
            continue
        shell.printer.print(f"{ns.value.capitalize()} variables:")
        for name in group:
            shell.printer.print(f"  {name} = {variables[name]}")
