"""
Directive parser.

Turns one raw line into a Command:

    \\set[name=value, other="a, b"] trailing message
    \\echo hello
    plain text            -> default command with the text as message

Parsing never fails; input that does not look like a directive degrades to
the default command.
"""

from __future__ import annotations

import re
from typing import Callable

from neuroshell.core.datamodels import Command, ParseMode

DEFAULT_COMMAND = "echo"

_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_-]*$")


def unquote(value: str) -> str:
    """Strip one matching pair of surrounding single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def split_by_comma(content: str) -> list[str]:
    """Split on commas that are outside quotes and nested brackets."""
    parts: list[str] = []
    current: list[str] = []
    quote = ""
    depth = 0

    for ch in content:
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)

    if current:
        parts.append("".join(current))
    return parts


def parse_options(content: str) -> dict[str, str]:
    """Parse `key=value, flag` bracket content into an options dict."""
    options: dict[str, str] = {}
    for part in split_by_comma(content):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            options[key.strip()] = unquote(value.strip())
        else:
            options[part] = ""
    return options


def parse_array_value(value: str) -> list[str]:
    """Parse `[a, "b", c]` into a list; a scalar becomes a one-item list."""
    value = value.strip()
    if len(value) >= 2 and value[0] == "[" and value[-1] == "]":
        inner = value[1:-1].strip()
        return [unquote(item.strip()) for item in inner.split(",") if item.strip()]
    return [unquote(value)]


def _split_bracket(text: str) -> tuple[str, str, str] | None:
    """Split `name[content] message`, matching nested brackets.

    Returns None if there is no bracket directly after the name, the name
    is invalid, or the bracket is never closed.
    """
    bracket = text.find("[")
    if bracket <= 0:
        return None
    space = text.find(" ")
    if space != -1 and space < bracket:
        return None
    name = text[:bracket]
    if not _NAME_RE.match(name):
        return None

    depth = 0
    for i in range(bracket, len(text)):
        if text[i] == "[":
            depth += 1
        elif text[i] == "]":
            depth -= 1
            if depth == 0:
                return name, text[bracket + 1:i], text[i + 1:].strip()
    return None


class Parser:
    """Line-to-Command parser.

    Args:
        parse_mode_for: Callable giving the parse mode for a command name.
            Raw-mode commands keep their bracket content verbatim and get
            no options.
        default_command: Command used for lines without a leading backslash.
    """

    def __init__(
        self,
        parse_mode_for: Callable[[str], ParseMode] | None = None,
        default_command: str = DEFAULT_COMMAND,
    ):
        self.parse_mode_for = parse_mode_for
        self.default_command = default_command

    def parse(self, raw: str, default_command: str | None = None) -> Command:
        default = default_command or self.default_command
        text = raw.strip()

        if not text.startswith("\\"):
            return Command(name=default, message=text, original_text=raw)

        body = text[1:]
        split = _split_bracket(body)
        if split is not None:
            name, bracket_content, message = split
        else:
            name, _, message = body.partition(" ")
            bracket_content = ""
            message = message.strip()
            if not _NAME_RE.match(name):
                return Command(name=default, message=text, original_text=raw)

        mode = self.parse_mode_for(name) if self.parse_mode_for else ParseMode.KEY_VALUE
        options = {}
        if bracket_content and mode is not ParseMode.RAW:
            options = parse_options(bracket_content)

        return Command(
            name=name,
            message=message,
            bracket_content=bracket_content,
            options=options,
            parse_mode=mode,
            original_text=raw,
        )
