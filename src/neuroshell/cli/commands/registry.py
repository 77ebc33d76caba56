"""
Command registry for neuroshell directives.

Directives are registered with a name, handler function, and metadata. A
handler receives the running shell, the parsed options and the message,
and signals failure by raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from neuroshell.core.datamodels import ParseMode

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell

Handler = Callable[["Shell", "dict[str, str]", str], None]


@dataclass
class CommandEntry:
    """Entry for a registered directive."""

    name: str
    handler: Handler
    description: str
    usage: str | None = None
    parse_mode: ParseMode = ParseMode.KEY_VALUE
    aliases: list[str] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    notes: str | None = None

    def help_text(self) -> str:
        """Multi-line help shown by \\help <name>."""
        lines = [f"\\{self.name} - {self.description}", "", f"Usage: {self.usage}"]
        if self.aliases:
            lines.append("Aliases: " + ", ".join(f"\\{a}" for a in self.aliases))
        if self.examples:
            lines.append("")
            lines.append("Examples:")
            lines.extend(f"  {example}" for example in self.examples)
        if self.notes:
            lines.append("")
            lines.append(self.notes)
        return "\n".join(lines)


class CommandRegistry:
    """Registry for shell directives."""

    def __init__(self):
        self._commands: dict[str, CommandEntry] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        description: str,
        usage: str | None = None,
        parse_mode: ParseMode = ParseMode.KEY_VALUE,
        aliases: list[str] | None = None,
        examples: list[str] | None = None,
        notes: str | None = None,
    ) -> Callable:
        """Decorator to register a directive.

        Registering an existing name replaces the previous entry, which is
        how user commands override builtins.

        Args:
            name: Directive name without the backslash (e.g., "echo")
            description: Short description for \\help
            usage: Usage string (e.g., "\\echo[to=var] message")
            parse_mode: KEY_VALUE to parse bracket options, RAW to keep them verbatim
            aliases: Alternative names for the directive
            examples: Example lines shown by \\help <name>
            notes: Extra help text

        Returns:
            Decorator function

        Example:
            @command_registry.register("hello", "Say hello")
            def cmd_hello(shell, options, message):
                shell.printer.print(f"Hello, {message or 'world'}!")
        """
        def decorator(func: Handler) -> Handler:
            previous = self._commands.get(name)
            if previous is not None:
                for alias in previous.aliases:
                    self._aliases.pop(alias, None)

            entry = CommandEntry(
                name=name,
                handler=func,
                description=description,
                usage=usage or f"\\{name}",
                parse_mode=parse_mode,
                aliases=aliases or [],
                examples=examples or [],
                notes=notes,
            )
            self._commands[name] = entry
            for alias in entry.aliases:
                self._aliases[alias] = name
            return func
        return decorator

    def unregister(self, name: str) -> bool:
        entry = self._commands.pop(name, None)
        if entry is None:
            return False
        for alias in entry.aliases:
            self._aliases.pop(alias, None)
        return True

    def get(self, name: str) -> CommandEntry | None:
        """Get a directive by name or alias."""
        if name in self._commands:
            return self._commands[name]
        if name in self._aliases:
            return self._commands[self._aliases[name]]
        return None

    def all_commands(self) -> list[CommandEntry]:
        """Get all registered directives sorted by name."""
        return sorted(self._commands.values(), key=lambda e: e.name)

    def get_completions(self) -> dict[str, str]:
        """Get directive names (with backslash) and descriptions for completion."""
        result = {}
        for entry in self._commands.values():
            result[f"\\{entry.name}"] = entry.description
            for alias in entry.aliases:
                result[f"\\{alias}"] = entry.description
        return result

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands)


# Global command registry
command_registry = CommandRegistry()
