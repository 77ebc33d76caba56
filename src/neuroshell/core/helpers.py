"""
Helper functions for variable names and directive arguments.
"""

from __future__ import annotations

import re

from neuroshell.core.datamodels import Namespace
from neuroshell.core.exceptions import VariableValidationError

# Command-output variables that users may write with \set
ALLOWED_COMMAND_VARIABLES = frozenset({
    "_style",
    "_reply_way",
    "_echo_command",
    "_render_markdown",
    "_default_command",
    "_stream",
    "_editor",
    "_session_autosave",
    "_completion_mode",
    "_prompt_lines_count",
    "_prompt_line1",
    "_prompt_line2",
    "_prompt_line3",
    "_prompt_line4",
    "_prompt_line5",
})

_PREFIXES = {
    "@": Namespace.SYSTEM,
    "#": Namespace.METADATA,
    "_": Namespace.COMMAND,
}

_TRUTHY = {"true", "1", "yes", "on", "enabled"}
_FALSY = {"false", "0", "no", "off", "disabled"}

_WHITESPACE = re.compile(r"\s")


def namespace_of(name: str) -> Namespace:
    """Classify a variable name by its prefix."""
    return _PREFIXES.get(name[:1], Namespace.USER)


def is_user_writable(name: str) -> bool:
    """True if `\\set` may write this name."""
    ns = namespace_of(name)
    if ns is Namespace.USER:
        return True
    return ns is Namespace.COMMAND and name in ALLOWED_COMMAND_VARIABLES


def check_name(name: str) -> None:
    """Reject empty names and names containing whitespace."""
    if not name:
        raise VariableValidationError("variable name cannot be empty")
    if _WHITESPACE.search(name):
        raise VariableValidationError(f"variable name cannot contain whitespace: {name!r}")


def validate_user_name(name: str) -> None:
    """Validate a name for a user-level write.

    Raises:
        VariableValidationError: If the name is malformed or restricted.
    """
    check_name(name)
    if is_user_writable(name):
        return
    if namespace_of(name) is Namespace.COMMAND:
        raise VariableValidationError(
            f"variable name cannot start with _ unless allow-listed: {name}"
        )
    raise VariableValidationError(f"cannot set system variable: {name}")


def validate_system_name(name: str) -> None:
    """Validate a name for an internal (system) write."""
    check_name(name)
    if namespace_of(name) is Namespace.USER:
        raise VariableValidationError(
            f"system variables must start with @, # or _, got: {name}"
        )


def is_truthy(value: str) -> bool:
    """Interpret a directive argument as a boolean.

    Empty and the usual false spellings are falsy; every other value,
    including unrecognised text, is truthy.
    """
    value = (value or "").strip().lower()
    if not value:
        return False
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return True


def parse_bool_option(options: dict[str, str], key: str, default: bool = False) -> bool:
    """Read a strict true/false option.

    Raises:
        ValueError: If the option is present but not a boolean spelling.
    """
    raw = options.get(key, "")
    if raw == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"invalid value for {key} option: {raw} (must be true or false)")
