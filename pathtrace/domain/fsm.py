"""Finite state machines for engine and session lifecycles."""

from enum import Enum
from typing import Callable, Dict, Generic, Optional, Set, TypeVar

from .errors import InvalidTransition
from .types import EngineState

S = TypeVar("S", bound=Enum)


class StateMachine(Generic[S]):
    """
    Table-driven state machine with state-entry callbacks.

    Subclasses supply the initial state and the valid transition map.
    """

    def __init__(self, initial: S, transitions: Dict[S, Set[S]]):
        self._initial = initial
        self._current_state = initial
        self._valid_transitions = transitions
        self._state_callbacks: Dict[S, Callable[[Optional[dict]], None]] = {}

    @property
    def current_state(self) -> S:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: S) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: S, context: Optional[dict] = None) -> bool:
        """
        Attempt to transition to the target state.

        Returns:
            True if transition was successful, False otherwise
        """
        if not self.can_transition_to(target_state):
            return False

        self._current_state = target_state

        if target_state in self._state_callbacks:
            self._state_callbacks[target_state](context)

        return True

    def require(self, target_state: S, context: Optional[dict] = None) -> None:
        """Like transition_to, but raise InvalidTransition instead of returning False."""
        if not self.transition_to(target_state, context):
            raise InvalidTransition(self._current_state, target_state)

    def on_state_enter(self, state: S, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def reset(self):
        """Reset the state machine to its initial state without callbacks."""
        self._current_state = self._initial


class EngineStateMachine(StateMachine[EngineState]):
    """
    State machine for one engine run.

    State Transitions:
    READY -> RUNNING (first step)
    RUNNING -> FOUND (target finalized)
    RUNNING -> EXHAUSTED (frontier empty)
    """

    def __init__(self):
        super().__init__(EngineState.READY, {
            EngineState.READY: {EngineState.RUNNING},
            EngineState.RUNNING: {EngineState.FOUND, EngineState.EXHAUSTED},
            EngineState.FOUND: set(),
            EngineState.EXHAUSTED: set(),
        })

    def is_ready(self) -> bool:
        return self._current_state == EngineState.READY

    def is_finished(self) -> bool:
        """Check if the run is terminal (found or exhausted)."""
        return self._current_state.is_terminal

