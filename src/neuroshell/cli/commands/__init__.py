"""
Directive system for neuroshell.

Directives are backslash-prefixed commands (`\\echo`, `\\set`, `\\try`...).
Commands are loaded from:
1. Package builtins
2. ~/.neuro/commands/ (user-hackable, may override builtins)
"""

from __future__ import annotations

from neuroshell.cli.commands.registry import CommandEntry, CommandRegistry, command_registry
from neuroshell.cli.commands.loader import (
    load_all_commands,
    load_builtin_commands,
    load_user_commands,
)

__all__ = [
    "CommandEntry",
    "CommandRegistry",
    "command_registry",
    "load_all_commands",
    "load_builtin_commands",
    "load_user_commands",
]
