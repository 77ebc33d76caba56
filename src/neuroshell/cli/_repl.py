"""
Interactive REPL built on prompt_toolkit.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import Completer, Completion, merge_completers
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

PROMPT = "neuro> "


class DirectiveCompleter(Completer):
    """Completes `\\name` at the start of the line."""

    def __init__(self, shell: "Shell"):
        self.shell = shell

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("\\") or " " in text or "[" in text:
            return
        for name, description in sorted(self.shell.commands.get_completions().items()):
            if name.startswith(text):
                yield Completion(name, start_position=-len(text), display_meta=description)


class VariableCompleter(Completer):
    """Completes variable names after an unclosed `${`."""

    def __init__(self, shell: "Shell"):
        self.shell = shell

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        start = text.rfind("${")
        if start == -1 or "}" in text[start:]:
            return
        partial = text[start + 2:]
        for name, value in sorted(self.shell.variables.get_all().items()):
            if name.startswith(partial):
                meta = value if len(value) <= 30 else value[:27] + "..."
                yield Completion(name + "}", start_position=-len(partial), display_meta=meta)


def get_style() -> Style:
    """Get the prompt style."""
    return Style.from_dict({
        "prompt": "ansicyan bold",
        "bottom-toolbar": "noreverse",
    })


def repl(shell: "Shell", history_file: Path | None = None) -> int:
    """Run the interactive REPL.

    Features:
        - Command history (persistent across sessions)
        - Tab completion for directives and ${variables}
        - Ctrl+C to cancel input, Ctrl+D to exit

    Args:
        shell: The shell session to feed input into.
        history_file: History file (default: ~/.neuro/history).

    Returns:
        Exit code requested with \\exit, or 0.
    """
    history_file = history_file or Path.home() / ".neuro" / "history"
    history_file.parent.mkdir(parents=True, exist_ok=True)
    history = FileHistory(str(history_file))

    bindings = KeyBindings()

    @bindings.add("c-c")
    def _(event):
        """Handle Ctrl+C - cancel current input."""
        event.app.current_buffer.reset()

    def get_bottom_toolbar():
        ctx = shell.context
        status = shell.variables.get("_status") or "0"
        color = "ansired" if status != "0" else "ansigreen"
        return HTML(
            f" <b>status:</b> <{color}>{status}</{color}>"
            f" | <b>stack:</b> {ctx.stack.size()}"
            f" | <b>queue:</b> {ctx.queue.size()}"
        )

    session: PromptSession = PromptSession(
        history=history,
        completer=merge_completers([DirectiveCompleter(shell), VariableCompleter(shell)]),
        auto_suggest=AutoSuggestFromHistory(),
        style=get_style(),
        key_bindings=bindings,
        complete_while_typing=True,
        enable_history_search=True,
        bottom_toolbar=get_bottom_toolbar,
    )

    print("neuroshell - type \\help for commands, Ctrl+D to exit")

    while True:
        try:
            user_input = session.prompt(PROMPT).strip()
        except EOFError:
            print("Goodbye!")
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
