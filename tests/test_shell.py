#!/usr/bin/env python3
"""
Tests for the dispatch loop: pull order, interpolation, try and silent
blocks, terminal failures and the depth guard.
"""

import pytest

from neuroshell.config import Config
from neuroshell.engine.shell import Shell


# ============================================================================
# Basic dispatch
# ============================================================================

class TestDispatch:
    """Tests for straight-line execution."""

    def test_set_then_echo(self, run):
        """Test that variables are interpolated before dispatch."""
        result, out = run(r"\set[a=1]", r"\echo value=${a}")
        assert result.success
        assert result.executed == 2
        assert out == "Setting a = 1\nvalue=1\n"

    def test_plain_text_goes_to_echo(self, run):
        """Test the default command."""
        _, out = run("just some text")
        assert out == "just some text\n"

    def test_status_variables_after_success(self, run, shell):
        """Test _status and _error after a successful directive."""
        run(r"\echo ok")
        assert shell.variables.get("_status") == "0"
        assert shell.variables.get("_error") == ""
        assert shell.variables.get("_output") == "ok"

    def test_stack_runs_before_queue(self, shell, run):
        """Test that stacked lines run before queued ones."""
        shell.queue.enqueue(r"\echo from queue")
        shell.stack.push(r"\echo from stack")
        _, out = run()
        assert out == "from stack\nfrom queue\n"

    def test_markers_from_queue_are_not_boundaries(self, run, shell):
        """Test that marker text in the queue is treated as input."""
        _, out = run("ERROR_BOUNDARY_START:try_id_99")
        assert out == "ERROR_BOUNDARY_START:try_id_99\n"
        assert not shell.stack.is_in_try_block()

    def test_test_mode_values(self, run):
        """Test frozen values in test mode."""
        _, out = run(r"\echo ${@date} ${#session_id}")
        assert out == "2025-01-01 session_1609459200\n"

    def test_default_command_variable(self, run):
        """Test that _default_command changes the fallback directive."""
        _, out = run(r"\set[_default_command=get, x=42]", "x")
        assert out.endswith("x = 42\n")

    def test_echo_command_variable(self, run):
        """Test that _echo_command shows each directive before it runs."""
        _, out = run(r"\set[_echo_command=true]", r"\echo hi")
        assert "> \\echo hi\nhi\n" in out

    def test_echo_commands_config(self, commands, capsys):
        """Test the echo_commands setting."""
        shell = Shell(commands, config=Config(echo_commands=True), test_mode=True)
        shell.execute(r"\echo hi")
        assert capsys.readouterr().out == "> \\echo hi\nhi\n"


# ============================================================================
# Terminal failures
# ============================================================================

class TestTerminalFailure:
    """Tests for failures outside any try block."""

    def test_unknown_command_stops_execution(self, run, shell):
        """Test that remaining queued lines are discarded."""
        result, out = run(r"\echo before", r"\nope", r"\echo never")
        assert not result.success
        assert result.command == r"\nope"
        assert "unknown command" in result.error
        assert out == "before\n"
        assert shell.queue.size() == 0
        assert shell.stack.size() == 0

    def test_failure_sets_error_state(self, run, shell):
        """Test that the failure is visible through error management."""
        run(r"\nope")
        assert shell.errors.is_error_state()
        status, message = shell.errors.get_current_error_state()
        assert status == "1"
        assert "nope" in message
        assert shell.variables.get("_status") == "1"

    def test_failure_is_reported_on_stderr(self, shell, capsys):
        """Test the user-visible error report."""
        shell.execute(r"\nope")
        assert "Error: unknown command: \\nope" in capsys.readouterr().err

    def test_next_run_starts_clean(self, run, shell):
        """Test that the shell keeps working after a terminal failure."""
        run(r"\nope")
        result, out = run(r"\echo again")
        assert result.success
        assert out == "again\n"
        assert not shell.errors.is_error_state()

    def test_failure_inside_silent_block_closes_it(self, shell, run, capsys):
        """Test that open silent blocks do not outlive a terminal failure."""
        result = shell.execute(r"\silent \nope")
        assert not result.success
        assert not shell.stack.is_in_silent_block()
        assert "Error:" in capsys.readouterr().err
        _, out = run(r"\echo visible")
        assert out == "visible\n"


# ============================================================================
# Try blocks
# ============================================================================

class TestTry:
    """Tests for captured failures."""

    def test_captured_failure_continues(self, run):
        """Test that the script continues after a failure in a try block."""
        result, out = run(r"\try \nope", r"\echo after status=${_status}")
        assert result.success
        assert out == "after status=1\n"

    def test_captured_error_message(self, run, shell):
        """Test _error after a captured failure."""
        run(r"\try \nope")
        assert shell.variables.get("_status") == "1"
        assert shell.variables.get("_error") == "unknown command: \\nope"
        assert not shell.stack.is_in_try_block()

    def test_error_state_set_while_captured(self, run, shell):
        """Test that the captured failure is recorded in error management."""
        run(r"\try \nope")
        assert shell.errors.is_error_state()

    def test_successful_try(self, run, shell):
        """Test a try block whose body succeeds."""
        _, out = run(r"\try \echo fine")
        assert out == "fine\n"
        assert shell.variables.get("_status") == "0"
        assert shell.variables.get("_error") == ""

    def test_empty_try(self, run, shell):
        """Test a try with nothing to run."""
        result, _ = run(r"\echo something", r"\try")
        assert result.success
        assert shell.variables.get("_status") == "0"
        assert shell.variables.get("_output") == ""

    def test_rest_of_block_is_skipped(self, run, tmp_path):
        """Test that lines after the failure inside the block do not run."""
        script = tmp_path / "body.neuro"
        script.write_text("\\echo first\n\\nope\n\\echo skipped\n")
        result, out = run(rf"\try \run {script}", r"\echo next")
        assert result.success
        assert out == "first\nnext\n"

    def test_nested_try_isolates_inner_failure(self, run, tmp_path):
        """Test that only the innermost block captures a failure."""
        script = tmp_path / "nested.neuro"
        script.write_text(
            "\\try \\nope\n"
            "\\echo inner=${_status}\n"
            "\\echo still running\n"
        )
        _, out = run(rf"\try \run {script}", r"\echo outer=${_status}")
        assert out == "inner=1\nstill running\nouter=0\n"

    def test_assertion_failure_in_try(self, run, shell):
        """Test that a failed assertion is capturable."""
        result, _ = run(r"\try \assert-equal[expect=1, actual=2]")
        assert result.success
        assert shell.variables.get("_assert_result") == "FAIL"
        assert "expected '1', got '2'" in shell.variables.get("_error")

    def test_silent_markers_stay_balanced_when_skipping(self, run, shell, tmp_path):
        """Test that skipping a block also closes silent blocks inside it."""
        script = tmp_path / "quiet.neuro"
        script.write_text("\\silent \\run " + str(tmp_path / "fail.neuro") + "\n\\echo skipped\n")
        (tmp_path / "fail.neuro").write_text("\\nope\n\\echo hidden\n")
        result, out = run(rf"\try \run {script}", r"\echo visible")
        assert result.success
        assert out == "visible\n"
        assert not shell.stack.is_in_silent_block()
        assert not shell.stack.is_in_try_block()


# ============================================================================
# Silent blocks
# ============================================================================

class TestSilent:
    """Tests for output suppression."""

    def test_output_is_suppressed(self, run, shell):
        """Test that a silent directive prints nothing but still runs."""
        _, out = run(r"\silent \set[a=1]", r"\echo shown ${a}")
        assert out == "shown 1\n"
        assert shell.variables.get("a") == "1"

    def test_silent_block_closes(self, run, shell):
        """Test that the silent boundary is popped after the block."""
        run(r"\silent \echo hidden")
        assert not shell.stack.is_in_silent_block()
        assert shell.stack.current_silent_depth() == 0

    def test_empty_silent(self, run):
        """Test a silent with nothing to run."""
        result, out = run(r"\silent")
        assert result.success
        assert out == ""

    def test_silent_try_failure(self, run, shell):
        """Test that a captured failure inside a silent block stays quiet."""
        result, out = run(r"\silent \try \nope", r"\echo ${_status}")
        assert result.success
        assert out == "1\n"

    def test_nested_silent_stays_quiet_until_outermost_closes(self, run, shell, tmp_path):
        """Test that closing an inner silent block does not re-enable output."""
        script = tmp_path / "outer.neuro"
        script.write_text("\\silent \\echo a\n\\echo b\n")
        result, out = run(rf"\silent \run {script}")
        assert result.success
        assert out == ""
        assert shell.variables.get("_output") == "b"
        assert not shell.stack.is_in_silent_block()

        _, out = run(r"\echo c")
        assert out == "c\n"

    def test_directly_nested_silent(self, run, shell):
        _, out = run(r"\silent \silent \echo x", r"\echo y")
        assert out == "y\n"
        assert shell.stack.current_silent_depth() == 0


# ============================================================================
# Block bodies
# ============================================================================

class TestBlockBodies:
    """Tests for marker text inside directive-supplied block bodies."""

    def test_if_body_marker_rejected(self, run, shell):
        """Test that \\if cannot open a boundary through its body."""
        result, out = run(r"\if[condition=1] SILENT_BOUNDARY_START:x", r"\echo hidden?")
        assert not result.success
        assert "boundary marker not allowed" in result.error
        assert not shell.stack.is_in_silent_block()

        _, out = run(r"\echo visible")
        assert out == "visible\n"

    def test_if_not_body_marker_rejected(self, run):
        result, _ = run(r"\if-not[condition=0] ERROR_BOUNDARY_END:try_id_1")
        assert not result.success
        assert "boundary marker not allowed" in result.error

    def test_try_body_marker_rejected(self, run, shell):
        result, _ = run(r"\try SILENT_BOUNDARY_START:x")
        assert not result.success
        assert shell.stack.size() == 0
        assert not shell.stack.is_in_try_block()

    def test_silent_body_marker_captured_by_try(self, run, shell):
        """Test that the rejection is an ordinary directive failure."""
        result, out = run(r"\try \silent SILENT_BOUNDARY_END:x", r"\echo status=${_status}")
        assert result.success
        assert out == "status=1\n"
        assert shell.variables.get("_error").startswith("boundary marker not allowed")
        assert not shell.stack.is_in_silent_block()

    def test_run_script_marker_rejected(self, run, shell, tmp_path):
        script = tmp_path / "sneaky.neuro"
        script.write_text("\\echo one\nSILENT_BOUNDARY_START:x\n")
        result, out = run(rf"\run {script}")
        assert not result.success
        assert out == ""
        assert not shell.stack.is_in_silent_block()


# ============================================================================
# Depth guard
# ============================================================================

class TestDepthGuard:
    """Tests for stack overflow handling at the directive level."""

    def test_configured_depth_written_to_variable(self, commands):
        """Test that the config ceiling reaches _max_stack_depth."""
        shell = Shell(commands, config=Config(max_stack_depth=50), test_mode=True)
        assert shell.variables.get("_max_stack_depth") == "50"

    @pytest.mark.parametrize("value", [0, -3, "lots", None])
    def test_invalid_depth_uses_default(self, shell, value):
        """Test fallback for invalid ceilings."""
        assert shell.set_max_stack_depth(value) == 1000
        assert shell.variables.get("_max_stack_depth") == "1000"

    def test_rejected_block_fails_directive(self, run, shell):
        """Test that a refused expansion is a directive failure."""
        shell.set_max_stack_depth(2)
        result, out = run(r"\try \echo x", r"\echo never")
        assert not result.success
        assert "stack depth limit (2) exceeded" in result.error
        assert out == ""

    def test_rejected_block_inside_try_is_captured(self, run, shell, tmp_path):
        """Test that overflow inside a try block is captured."""
        script = tmp_path / "big.neuro"
        script.write_text("".join(f"\\echo line {i}\n" for i in range(10)))
        shell.set_max_stack_depth(5)
        result, out = run(rf"\try \run {script}", r"\echo status=${_status}")
        assert result.success
        assert out == "status=1\n"


# ============================================================================
# Exit and reset
# ============================================================================

class TestExitAndReset:
    """Tests for \\exit and \\reset."""

    def test_exit_stops_loop(self, run, shell):
        """Test that exit discards pending work."""
        result, out = run(r"\echo a", r"\exit", r"\echo b")
        assert result.exited
        assert out == "a\n"
        assert shell.queue.size() == 0
        assert shell.exit_code == 0

    def test_exit_code(self, run, shell):
        """Test exit with a code."""
        result, _ = run(r"\exit[code=3]")
        assert result.exited
        assert shell.exit_code == 3

    def test_reset_clears_pending(self, shell, run):
        """Test that reset drops stacked and queued lines."""
        shell.stack.push(r"\echo stacked")
        shell.queue.enqueue(r"\echo queued")
        shell.reset()
        result, out = run()
        assert result.executed == 0
        assert out == ""

    def test_reset_keeps_variables(self, run, shell):
        """Test that reset clears error state but not variables."""
        run(r"\set[keep=1]", r"\nope")
        assert shell.errors.is_error_state()

        run(r"\reset")
        assert shell.errors.get_last_error_state() == ("0", "")
        assert not shell.errors.is_error_state()

        _, out = run(r"\echo ${keep}")
        assert out == "1\n"


# ============================================================================
# Scripts
# ============================================================================

class TestRunScript:
    """Tests for Shell.run_script."""

    def test_run_script(self, shell, tmp_path, capsys):
        """Test running a script file."""
        script = tmp_path / "hello.neuro"
        script.write_text("# greet\n\\set[name=World]\n\n\\echo Hello ${name}\n")
        result = shell.run_script(script)
        assert result.success
        assert capsys.readouterr().out == "Setting name = World\nHello World\n"
        assert shell.variables.get("#script_lines") == "2"

    def test_run_inside_script_preserves_order(self, shell, tmp_path, capsys):
        """Test that \\run executes the included lines before the rest."""
        inner = tmp_path / "inner.neuro"
        inner.write_text("\\echo inner 1\n\\echo inner 2\n")
        outer = tmp_path / "outer.neuro"
        outer.write_text(f"\\echo outer 1\n\\run {inner}\n\\echo outer 2\n")
        shell.run_script(outer)
        assert capsys.readouterr().out == "outer 1\ninner 1\ninner 2\nouter 2\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
