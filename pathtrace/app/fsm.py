"""Finite State Machine for search session phases."""

from enum import Enum
from typing import Optional

from ..domain.fsm import StateMachine


class SessionState(Enum):
    """States of an interactive search session."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    NO_PATH = "no_path"
    ERROR = "error"


class SessionStateMachine(StateMachine[SessionState]):
    """
    Finite State Machine for managing session execution states.

    State Transitions:
    IDLE -> RUNNING (when a search starts)
    IDLE -> ERROR (when configuration is rejected)
    RUNNING -> PAUSED (when the caller cancels)
    RUNNING -> COMPLETE (when path is found or the full map is built)
    RUNNING -> NO_PATH (when no path exists)
    RUNNING -> ERROR (when an error occurs)
    PAUSED -> RUNNING (when stepping resumes)
    PAUSED -> IDLE (when reset)
    COMPLETE -> IDLE (when reset)
    NO_PATH -> IDLE (when reset)
    ERROR -> IDLE (when reset)
    """

    def __init__(self):
        super().__init__(SessionState.IDLE, {
            SessionState.IDLE: {SessionState.RUNNING, SessionState.ERROR},
            SessionState.RUNNING: {SessionState.PAUSED, SessionState.COMPLETE,
                                   SessionState.NO_PATH, SessionState.ERROR},
            SessionState.PAUSED: {SessionState.RUNNING, SessionState.IDLE},
            SessionState.COMPLETE: {SessionState.IDLE},
            SessionState.NO_PATH: {SessionState.IDLE},
            SessionState.ERROR: {SessionState.IDLE},
        })

    def is_running(self) -> bool:
        """Check if a search is currently running."""
        return self._current_state == SessionState.RUNNING

    def is_paused(self) -> bool:
        """Check if the search is paused."""
        return self._current_state == SessionState.PAUSED

    def is_idle(self) -> bool:
        """Check if the session is idle."""
        return self._current_state == SessionState.IDLE

    def is_finished(self) -> bool:
        """Check if the search has finished (complete, no path, or error)."""
        return self._current_state in (SessionState.COMPLETE, SessionState.NO_PATH, SessionState.ERROR)

    def start(self, context: Optional[dict] = None) -> bool:
        """Start the search."""
        return self.transition_to(SessionState.RUNNING, context)

    def pause(self, context: Optional[dict] = None) -> bool:
        """Pause the search."""
        return self.transition_to(SessionState.PAUSED, context)

    def resume(self, context: Optional[dict] = None) -> bool:
        """Resume the search."""
        return self.transition_to(SessionState.RUNNING, context)

    def complete(self, context: Optional[dict] = None) -> bool:
        """Mark the search as complete."""
        return self.transition_to(SessionState.COMPLETE, context)

    def fail_no_path(self, context: Optional[dict] = None) -> bool:
        """Mark the search as failed (no path)."""
        return self.transition_to(SessionState.NO_PATH, context)

    def fail_error(self, context: Optional[dict] = None) -> bool:
        """Mark the search as failed (error)."""
        return self.transition_to(SessionState.ERROR, context)

    def reset_to_idle(self, context: Optional[dict] = None) -> bool:
        """Reset to idle state."""
        return self.transition_to(SessionState.IDLE, context)

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            SessionState.IDLE: "Ready to start",
            SessionState.RUNNING: "Search running",
            SessionState.PAUSED: "Search paused",
            SessionState.COMPLETE: "Search complete",
            SessionState.NO_PATH: "No path exists",
            SessionState.ERROR: "Error occurred",
        }
        return descriptions.get(self._current_state, "Unknown state")
