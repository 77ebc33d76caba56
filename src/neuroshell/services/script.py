"""
Script service: reads `.neuro` files into the execution queue.
"""

from __future__ import annotations

import logging
from pathlib import Path

from neuroshell.core.exceptions import ScriptLoadError
from neuroshell.services.base import Service, requires_initialized

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", "%%")


def read_script_lines(path: str | Path) -> list[str]:
    """Read executable lines from a script.

    Blank lines and lines starting with `#` or `%%` are dropped; the rest
    are returned with trailing whitespace removed.

    Raises:
        ScriptLoadError: If the file is missing or unreadable.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ScriptLoadError(f"script not found: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptLoadError(f"could not read script {path}: {e}") from e

    lines = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue
        lines.append(line.rstrip())
    return lines


class ScriptService(Service):
    name = "script"

    @requires_initialized
    def load_script(self, path: str | Path) -> int:
        """Enqueue a script's lines and record its metadata.

        Returns:
            Number of lines enqueued.
        """
        lines = read_script_lines(path)
        self.context.queue.enqueue_all(lines)
        self.context.variables.set_system_variable("#script_file", str(Path(path).expanduser()))
        self.context.variables.set_system_variable("#script_lines", str(len(lines)))
        logger.debug(f"Loaded {len(lines)} lines from {path}")
        return len(lines)

    @requires_initialized
    def read_lines(self, path: str | Path) -> list[str]:
        return read_script_lines(path)
