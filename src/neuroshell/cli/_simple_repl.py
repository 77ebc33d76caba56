"""
Minimal REPL using the standard library readline module.
"""

from __future__ import annotations

import atexit
import readline
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

PROMPT = "neuro> "


class DirectiveCompleter:
    """readline completer for directive names and ${variables}."""

    def __init__(self, shell: "Shell"):
        self.shell = shell
        self.matches: list[str] = []

    def complete(self, text: str, state: int) -> str | None:
        """Return the state-th completion for text."""
        if state == 0:
            self.matches = self._matches(readline.get_line_buffer(), text)
        return self.matches[state] if state < len(self.matches) else None

    def _matches(self, line: str, text: str) -> list[str]:
        start = line.rfind("${")
        if start != -1 and "}" not in line[start:]:
            partial = line[start + 2:]
            prefix = text[:len(text) - len(partial)] if text.endswith(partial) else ""
            return [prefix + name + "}" for name in sorted(self.shell.variables.get_all())
                    if name.startswith(partial)]
        if line.startswith("\\") and " " not in line:
            return [name for name in sorted(self.shell.commands.get_completions())
                    if name.startswith(line)]
        return []


def _setup_readline(shell: "Shell", history_file: Path) -> None:
    history_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        readline.read_history_file(history_file)
    except OSError:
        pass
    readline.set_history_length(1000)
    atexit.register(readline.write_history_file, history_file)

    completer = DirectiveCompleter(shell)
    readline.set_completer(completer.complete)
    # Keep backslash and ${ inside the completion word
    readline.set_completer_delims(" \t\n")
    readline.parse_and_bind("tab: complete")


def repl(shell: "Shell", history_file: Path | None = None) -> int:
    """Run the simple REPL.

    Returns:
        Exit code requested with \\exit, or 0.
    """
    _setup_readline(shell, history_file or Path.home() / ".neuro" / "history")

    print("neuroshell (simple mode) - type \\help for commands, Ctrl+D to exit")

    while True:
        try:
            user_input = input(PROMPT).strip()
        except EOFError:
            print("\nGoodbye!")
            break
        except KeyboardInterrupt:
            print()
            continue

        if not user_input:
            continue

        result = shell.execute(user_input)
        if result.exited:
            break

    return shell.exit_code
