"""
Data models for the shell runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ParseMode(str, Enum):
    """How a directive's bracket content is handled by the parser."""

    KEY_VALUE = "key_value"
    RAW = "raw"


class Namespace(str, Enum):
    """Variable namespace, derived from the first character of the name."""

    USER = "user"
    SYSTEM = "system"
    METADATA = "metadata"
    COMMAND = "command"


class Command(BaseModel):
    """A parsed directive."""

    name: str
    message: str = ""
    bracket_content: str = ""
    options: dict[str, str] = Field(default_factory=dict)
    parse_mode: ParseMode = ParseMode.KEY_VALUE
    original_text: str = ""


@dataclass
class ErrorBoundary:
    """An open try block."""

    try_id: str
    depth: int
    captured: bool = False


@dataclass
class SilentBoundary:
    """An open silent block."""

    silent_id: str
    depth: int


class RunResult(BaseModel):
    """Outcome of draining the stack and queue."""

    success: bool = True
    executed: int = 0
    command: Optional[str] = None
    error: Optional[str] = None
    exited: bool = False


class VariableInfo(BaseModel):
    """Metadata about a variable name, used by listings and completion."""

    name: str
    value: str = ""
    namespace: Namespace
    read_only: bool
    description: str
