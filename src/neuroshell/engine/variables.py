"""
Variable store for the shell session.

Names are split into namespaces by their first character:

    name      user variables, writable with \\set
    @name     system facts (user, pwd, date, os...), computed on read
    #name     session metadata (session id, test mode, runtime sizes)
    _name     command output (_status, _error, _output); a small
              allow-list such as _style is also user-writable

Reads never fail: an unknown name resolves to the empty string.
"""

from __future__ import annotations

import getpass
import logging
import os
import platform
import time
from datetime import datetime
from pathlib import Path
from typing import Callable

from neuroshell.core.datamodels import Namespace, VariableInfo
from neuroshell.core.helpers import (
    is_user_writable,
    namespace_of,
    validate_system_name,
    validate_user_name,
)

logger = logging.getLogger(__name__)

# Fixed clock and session id used in test mode so output is reproducible
TEST_MODE_TIME = datetime(2025, 1, 1, 0, 0, 0)
TEST_MODE_SESSION_ID = "session_1609459200"

_DESCRIPTIONS = {
    Namespace.USER: "User-defined variable",
    Namespace.SYSTEM: "System variable (e.g., @pwd, @user, @date)",
    Namespace.METADATA: "Metadata variable (e.g., #session_id, #test_mode)",
    Namespace.COMMAND: "Command output or configuration variable",
}


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get("USER", "")


class VariableStore:
    """Namespaced string variables with per-namespace write rules."""

    def __init__(self, session_id: str | None = None, test_mode: bool = False):
        self._values: dict[str, str] = {}
        self._computed: dict[str, Callable[[], str]] = {}
        self.test_mode = test_mode
        if session_id is None:
            session_id = TEST_MODE_SESSION_ID if test_mode else f"session_{int(time.time())}"
        self.session_id = session_id

        self._computed.update({
            "@pwd": lambda: str(Path.cwd()),
            "@user": _current_user,
            "@home": lambda: str(Path.home()),
            "@date": lambda: self.now().strftime("%Y-%m-%d"),
            "@time": lambda: self.now().strftime("%H:%M:%S"),
            "@os": lambda: f"{platform.system().lower()}/{platform.machine().lower()}",
            "#session_id": lambda: self.session_id,
            "#test_mode": lambda: "true" if self.test_mode else "false",
        })

    def now(self) -> datetime:
        """Current time, frozen in test mode."""
        return TEST_MODE_TIME if self.test_mode else datetime.now()

    def register_computed(self, name: str, provider: Callable[[], str]) -> None:
        """Attach a read-only value computed on every read.

        Args:
            name: A system or metadata variable name.
            provider: Zero-argument callable returning the current value.
        """
        validate_system_name(name)
        self._computed[name] = provider

    def get(self, name: str) -> str:
        """Resolve a variable; unknown names resolve to ""."""
        provider = self._computed.get(name)
        if provider is not None:
            try:
                return provider()
            except OSError as e:
                logger.debug(f"Could not compute {name}: {e}")
                return ""
        return self._values.get(name, "")

    def has(self, name: str) -> bool:
        return name in self._computed or name in self._values

    def set(self, name: str, value: str) -> None:
        """Set a user variable.

        Raises:
            VariableValidationError: If the name is empty, contains whitespace,
                or lies in a restricted namespace.
        """
        validate_user_name(name)
        self._values[name] = str(value)

    def set_system_variable(self, name: str, value: str) -> None:
        """Set an @, # or _ variable on behalf of the runtime.

        Raises:
            VariableValidationError: If the name carries no system prefix.
        """
        validate_system_name(name)
        self._values[name] = str(value)

    def get_all(self) -> dict[str, str]:
        """All stored values plus the current computed values."""
        result = dict(self._values)
        for name in self._computed:
            result[name] = self.get(name)
        return result

    def describe(self, name: str) -> VariableInfo:
        """Describe a name's namespace and writability."""
        ns = namespace_of(name)
        return VariableInfo(
            name=name,
            value=self.get(name),
            namespace=ns,
            read_only=not is_user_writable(name),
            description=_DESCRIPTIONS[ns],
        )

    def clear(self) -> None:
        """Drop every stored value; computed values are unaffected."""
        self._values.clear()

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._values)
