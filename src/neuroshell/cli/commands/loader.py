"""
Command loader - discovers and loads directives.

Package builtins under `builtins/` load first, then user commands from
~/.neuro/commands/, so a user command registered under a builtin's name
replaces it.

Each command must be in its own subdirectory with an __init__.py file.
The command registers itself using the command_registry decorator:

    # ~/.neuro/commands/hello/__init__.py
    from neuroshell.cli.commands import command_registry

    @command_registry.register("hello", "Say hello")
    def cmd_hello(shell, options, message):
        shell.printer.print(f"Hello, {message or 'world'}!")
"""

from __future__ import annotations

import logging
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path

logger = logging.getLogger(__name__)

# Default user commands directory
USER_COMMANDS_DIR = Path.home() / ".neuro" / "commands"

# Package builtins directory
PACKAGE_BUILTINS_DIR = Path(__file__).parent / "builtins"


def discover_commands(commands_dir: Path) -> list[Path]:
    """
    Discover command directories in the given path.

    Args:
        commands_dir: Directory to search

    Returns:
        List of __init__.py paths for valid commands.
    """
    if not commands_dir.exists():
        return []

    if not commands_dir.is_dir():
        logger.warning(f"Commands path is not a directory: {commands_dir}")
        return []

    cmd_paths = []
    for subdir in sorted(commands_dir.iterdir()):
        if not subdir.is_dir():
            continue
        # Skip hidden and private directories
        if subdir.name.startswith((".", "_")):
            continue
        init_file = subdir / "__init__.py"
        if init_file.exists():
            cmd_paths.append(init_file)
        else:
            logger.debug(f"Skipping {subdir.name}: no __init__.py")

    return cmd_paths


def load_command(cmd_path: Path, prefix: str = "neuro_cmd") -> tuple[str, bool, str]:
    """
    Load a single command module.

    Returns:
        Tuple of (cmd_name, success, error_message)
    """
    cmd_name = cmd_path.parent.name
    module_name = f"{prefix}.{cmd_name}"

    try:
        spec = spec_from_file_location(module_name, cmd_path)
        if spec is None or spec.loader is None:
            return (cmd_name, False, "Could not create module spec")

        module = module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

        return (cmd_name, True, "")

    except SyntaxError as e:
        return (cmd_name, False, f"Syntax error: {e}")
    except ImportError as e:
        return (cmd_name, False, f"Import error: {e}")
    except Exception as e:
        return (cmd_name, False, f"Error: {e}")


def _load_dir(commands_dir: Path, prefix: str, verbose: bool) -> int:
    loaded = 0
    for cmd_path in discover_commands(commands_dir):
        cmd_name, success, error = load_command(cmd_path, prefix=prefix)
        if success:
            loaded += 1
            if verbose:
                logger.info(f"Loaded command: {cmd_name}")
        else:
            logger.warning(f"Failed to load command '{cmd_name}': {error}")
    return loaded


def load_builtin_commands(verbose: bool = False) -> int:
    """Load the package builtins. Returns the number loaded."""
    return _load_dir(PACKAGE_BUILTINS_DIR, "neuro_builtin", verbose)


def load_user_commands(user_dir: Path | None = None, verbose: bool = False) -> int:
    """Load commands from the user directory (default: ~/.neuro/commands)."""
    return _load_dir(user_dir or USER_COMMANDS_DIR, "neuro_cmd", verbose)


def load_all_commands(user_dir: Path | None = None, include_user: bool = True, verbose: bool = False) -> int:
    """
    Load builtins, then user commands.

    Args:
        user_dir: User commands directory (default: ~/.neuro/commands)
        include_user: Also load user commands
        verbose: Log info messages for successful loads

    Returns:
        Number of successfully loaded commands.
    """
    total = load_builtin_commands(verbose)
    if include_user:
        total += load_user_commands(user_dir, verbose)
    return total
