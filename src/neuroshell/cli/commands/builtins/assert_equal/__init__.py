"""Assert-equal command - fail unless two values match."""
from __future__ import annotations

from typing import TYPE_CHECKING

from neuroshell.cli.commands.registry import command_registry
from neuroshell.core.exceptions import AssertionFailedError, CommandUsageError

if TYPE_CHECKING:
    from neuroshell.engine.shell import Shell


@command_registry.register(
    "assert-equal",
    "Compare two values and fail if they differ",
    usage="\\assert-equal[expect=value, actual=value]",
    examples=["\\assert-equal[expect=3, actual=${count}]"],
    notes="Sets _assert_result (PASS/FAIL), _assert_expected and _assert_actual.",
)
def cmd_assert_equal(shell: "Shell", options: dict[str, str], message: str) -> None:
    if "expect" not in options or "actual" not in options:
        raise CommandUsageError("Usage: \\assert-equal[expect=value, actual=value]")

    expected = options["expect"]
    actual = options["actual"]
    passed = expected == actual

    shell.variables.set_system_variable("_assert_result", "PASS" if passed else "FAIL")
    shell.variables.set_system_variable("_assert_expected", expected)
    shell.variables.set_system_variable("_assert_actual", actual)

    if not passed:
        raise AssertionFailedError(f"assertion failed: expected {expected!r}, got {actual!r}")
    shell.printer.print("Assertion passed")
