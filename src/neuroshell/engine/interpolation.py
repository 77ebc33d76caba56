"""
Variable interpolation.

`${name}` references are replaced with values from the variable store.
Nested references resolve innermost first, so `${outer_${inner}}` looks up
`inner` and then the composed `outer_<value>` name. Expansion repeats until
the text stops changing or the pass limit is reached, which bounds
self-referential values such as `a = "${a}"`.
"""

from __future__ import annotations

import logging

from neuroshell.core.datamodels import Command
from neuroshell.engine.variables import VariableStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10

_OPEN = "${"


class Interpolator:
    """Pure, total `${...}` expansion over a VariableStore."""

    def __init__(self, variables: VariableStore, max_passes: int = DEFAULT_MAX_PASSES):
        self.variables = variables
        self.max_passes = max_passes if max_passes > 0 else DEFAULT_MAX_PASSES

    @staticmethod
    def has_variables(text: str) -> bool:
        return _OPEN in text

    def expand_once(self, text: str) -> str:
        """Single left-to-right scan.

        Each closing brace resolves the most recent unmatched `${`; the value
        is inserted verbatim and not rescanned in this pass. Unmatched `${`
        and stray `}` stay literal.
        """
        parts: list[str] = []
        opens: list[int] = []
        i = 0
        n = len(text)
        while i < n:
            if text.startswith(_OPEN, i):
                opens.append(len(parts))
                parts.append(_OPEN)
                i += 2
                continue
            ch = text[i]
            if ch == "}" and opens:
                start = opens.pop()
                name = "".join(parts[start + 1:])
                del parts[start:]
                parts.append(self.variables.get(name) if name else "")
            else:
                parts.append(ch)
            i += 1
        return "".join(parts)

    def interpolate_string(self, text: str) -> str:
        """Expand every reference in `text`, repeating up to max_passes."""
        if not text or not self.has_variables(text):
            return text

        original = text
        for _ in range(self.max_passes):
            expanded = self.expand_once(text)
            if expanded == text:
                break
            text = expanded
            if not self.has_variables(text):
                break
        else:
            logger.debug(f"Interpolation stopped after {self.max_passes} passes: {original!r}")

        if text != original:
            logger.debug(f"Interpolated {original!r} -> {text!r}")
        return text

    def interpolate_command(self, cmd: Command) -> Command:
        """Return a copy of `cmd` with message, bracket content and option
        values expanded. The name is never interpolated."""
        return cmd.model_copy(update={
            "message": self.interpolate_string(cmd.message),
            "bracket_content": self.interpolate_string(cmd.bracket_content),
            "options": {k: self.interpolate_string(v) for k, v in cmd.options.items()},
        })
