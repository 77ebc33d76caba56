"""
Session context: the single owner of a shell session's runtime state.
"""

from __future__ import annotations

from neuroshell.engine.boundaries import BoundaryManager
from neuroshell.engine.error_state import ErrorState
from neuroshell.engine.interpolation import DEFAULT_MAX_PASSES, Interpolator
from neuroshell.engine.queue import ExecutionQueue
from neuroshell.engine.stack import DepthGuard, ExecutionStack
from neuroshell.engine.variables import VariableStore


class Context:
    """Variables, queue, stack, boundaries and error state for one session.

    Components are reachable as attributes but only mutated through their
    own methods. Services wrap these components; nothing reads a global.
    """

    def __init__(
        self,
        test_mode: bool = False,
        session_id: str | None = None,
        interpolation_max_passes: int = DEFAULT_MAX_PASSES,
    ):
        self.variables = VariableStore(session_id=session_id, test_mode=test_mode)
        self.interpolator = Interpolator(self.variables, interpolation_max_passes)
        self.queue = ExecutionQueue()
        self.stack = ExecutionStack(DepthGuard(self.variables))
        self.boundaries = BoundaryManager()
        self.error_state = ErrorState()

        self.variables.register_computed("#stack_size", lambda: str(self.stack.size()))
        self.variables.register_computed("#queue_size", lambda: str(self.queue.size()))
        self.variables.register_computed("#try_depth", lambda: str(self.boundaries.current_try_depth()))
        self.variables.register_computed("#silent_depth", lambda: str(self.boundaries.current_silent_depth()))

    @property
    def test_mode(self) -> bool:
        return self.variables.test_mode

    @test_mode.setter
    def test_mode(self, value: bool) -> None:
        self.variables.test_mode = value

    def reset_execution(self) -> None:
        """Drop pending work and open boundaries; variables survive."""
        self.stack.clear()
        self.queue.clear()
        self.boundaries.clear()
