"""Echo command - print text and store it in a variable."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import CommandUsageError
from neuroshell.core.helpers import parse_bool_option

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}
_ESCAPE_RE = re.compile(r"\\(.)")

# Targets written through the system path rather than \set rules
_OUTPUT_VARIABLES = ("_output", "_error", "_status")


def interpret_escapes(text: str) -> str:
    """Replace \\n, \\t, \\r, \\\\ and escaped quotes; leave others as is."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


@command_registry.register(
    "echo",
    "Output text with optional raw mode",
    usage="\\echo[to=var, silent=true, raw=true] message",
    examples=[
        "\\echo Hello ${name}",
        "\\echo[to=greeting, silent=true] Hi there",
        "\\echo[raw=true] keep \\n as typed",
    ],
    notes="The result is stored in _output unless to= names another variable.",
)
def cmd_echo(shell: "Shell", options: dict[str, str], message: str) -> None:
    """Print the message and store it."""
    try:
        silent = parse_bool_option(options, "silent")
        raw = parse_bool_option(options, "raw")
    except ValueError as e:
        raise CommandUsageError(str(e)) from None

    text = message if raw else interpret_escapes(message)

    target = options.get("to") or "_output"
    if target in _OUTPUT_VARIABLES:
        shell.variables.set_system_variable(target, text)
    else:
        shell.variables.set(target, text)

    if not silent:
        shell.printer.print(text, end="" if text.endswith("\n") else "\n")
