"""Search session: explicit context object driving one engine."""

import dataclasses
import logging
from typing import Iterator, List, Optional

from ..domain.engine import ShortestPathEngine
from ..domain.errors import ConfigError, PathfindingError
from ..domain.neighbors import CostModel
from ..domain.types import EngineState, Outcome, SearchResult, StepRecord, format_distance
from .config import SearchConfig
from .fsm import SessionState, SessionStateMachine

logger = logging.getLogger(__name__)

MAX_DELAY_MS = 500
PLACEHOLDER = "—"


def delay_for_speed(speed: int, max_delay_ms: int = MAX_DELAY_MS) -> int:
    """
    Map a 0..100 speed control to an inter-step delay in milliseconds.

    0 is slowest (max_delay_ms), 100 is instant (0 ms).
    """
    speed = max(0, min(100, int(speed)))
    return int(max_delay_ms * (100 - speed) / 100 + 0.5)


class SearchSession:
    """
    Session that owns one engine and the interaction state around it.

    Holds what a UI would otherwise keep in globals: the running flag, the
    selected algorithm and movement rules, and the speed control. The
    engine itself never sleeps; callers wait delay_ms between step() calls
    if they want animation. Cancellation is cooperative: cancel() stops
    iter_steps() and run(), leaving partial results readable.
    """

    def __init__(self, config: Optional[SearchConfig] = None, speed: int = 50):
        self.config = config or SearchConfig()
        self._engine = ShortestPathEngine()
        self._state_machine = SessionStateMachine()
        self._cost_model: Optional[CostModel] = None
        self._cancel_requested = False
        self._speed = speed
        self.last_error: Optional[str] = None

        self._state_machine.on_state_enter(SessionState.ERROR, self._on_error_entered)

    # Properties

    @property
    def engine(self) -> ShortestPathEngine:
        return self._engine

    @property
    def cost_model(self) -> Optional[CostModel]:
        return self._cost_model

    @property
    def current_state(self) -> SessionState:
        """Get current session state."""
        return self._state_machine.current_state

    @property
    def is_running(self) -> bool:
        return self._state_machine.is_running()

    @property
    def speed(self) -> int:
        """Speed control value, 0..100."""
        return self._speed

    @speed.setter
    def speed(self, value: int):
        self._speed = max(0, min(100, int(value)))

    @property
    def delay_ms(self) -> int:
        """Delay a caller should wait between steps at the current speed."""
        return delay_for_speed(self._speed)

    # Configuration

    def update_config(self, **kwargs):
        """
        Replace algorithm options (algorithm, allow_diagonal, ...).

        A new AlgoConfig is built so values are validated; a run already
        handed to the engine keeps its own config.

        Raises:
            ConfigError: While a search is running or paused, or for an
                unknown option or value.
        """
        if self.is_running or self._state_machine.is_paused():
            raise ConfigError("Cannot change configuration during a search")
        try:
            self.config.algo = dataclasses.replace(self.config.algo, **kwargs)
        except TypeError:
            unknown = ", ".join(sorted(k for k in kwargs if not hasattr(self.config.algo, k)))
            raise ConfigError(f"Unknown algorithm option {unknown}") from None

    # Control

    def start(self) -> EngineState:
        """
        Build the cost model and initialize a fresh run.

        Raises:
            ConfigError: If a search is already running.
            UnknownNode, InvalidCost: If the problem is malformed.
        """
        if self.is_running:
            raise ConfigError("A search is already running")
        if not self._state_machine.is_idle():
            self.reset()

        problem = self.config.problem
        try:
            self._cost_model = self.config.build_cost_model()
            state = self._engine.initialize(
                problem.source, problem.target, self._cost_model, config=self.config.algo
            )
        except PathfindingError as e:
            self._state_machine.fail_error({"error": str(e)})
            raise

        self._cancel_requested = False
        self._state_machine.start()
        return state

    def step(self) -> List[StepRecord]:
        """
        Advance the engine by one step.

        Returns the StepRecords the step appended (empty when the step only
        detected exhaustion).
        """
        if self._state_machine.is_paused():
            self._cancel_requested = False
            self._state_machine.resume()
        if not self.is_running:
            raise ConfigError(f"Cannot step in state {self.current_state.value}")

        first_new = len(self._engine.trace)
        try:
            state = self._engine.step()
        except PathfindingError as e:
            self._state_machine.fail_error({"error": str(e)})
            raise

        if state.is_terminal:
            self._finish()
        return self._engine.trace[first_new:]

    def iter_steps(self) -> Iterator[StepRecord]:
        """
        Yield each new StepRecord as the search advances.

        Stops on a terminal state or after cancel(). The caller controls
        pacing between items.
        """
        while self.is_running and not self._cancel_requested:
            for record in self.step():
                yield record
                if self._cancel_requested:
                    break
        if self._cancel_requested and self.is_running:
            self._state_machine.pause()

    def run(self) -> SearchResult:
        """
        Run to completion (or until cancelled) and return the result.

        A paused session resumes; an idle or finished one starts afresh.
        """
        if self._state_machine.is_idle() or self._state_machine.is_finished():
            self.start()
        elif self._state_machine.is_paused():
            self._cancel_requested = False
            self._state_machine.resume()
        for _ in self.iter_steps():
            pass
        return self.result()

    def cancel(self):
        """Request a cooperative stop; partial maps remain valid."""
        self._cancel_requested = True
        if self.is_running:
            self._state_machine.pause()
            logger.info("Search cancelled after %d visited nodes", self._engine.visited_count)

    def reset(self):
        """Discard the run and return to idle."""
        self._engine.reset()
        self._cancel_requested = False
        self.last_error = None
        if not self._state_machine.reset_to_idle():
            self._state_machine.reset()

    def _finish(self):
        outcome = self._engine.result().outcome
        if outcome is Outcome.UNREACHABLE:
            self._state_machine.fail_no_path({"outcome": outcome})
        else:
            self._state_machine.complete({"outcome": outcome})

    def _on_error_entered(self, context):
        self.last_error = (context or {}).get("error")
        logger.warning("Search failed: %s", self.last_error)

    # Results

    def result(self) -> SearchResult:
        return self._engine.result()

    def summary(self) -> str:
        """
        One-line status: algorithm, nodes visited, path length.

        Placeholders are shown before a search has finished.
        """
        if not self._state_machine.is_finished():
            if self.is_running or self._state_machine.is_paused():
                label = f"{self._engine.config.label} (running...)"
                return self._format_summary(label, str(self._engine.visited_count), PLACEHOLDER)
            return self._format_summary(PLACEHOLDER, PLACEHOLDER, PLACEHOLDER)

        if self.current_state == SessionState.ERROR:
            return self._format_summary(self.config.algo.label, PLACEHOLDER, f"error: {self.last_error}")

        result = self.result()
        if result.found:
            path_text = f"length ≈ {format_distance(result.distance)}"
        elif result.outcome is Outcome.EXHAUSTED:
            path_text = f"{len(result.distances)} nodes reached"
        else:
            path_text = "no path found"
        return self._format_summary(self._engine.config.label, str(result.visited_count), path_text)

    @staticmethod
    def _format_summary(algo_label: str, nodes_visited: str, path_text: str) -> str:
        return f"Algorithm: {algo_label} | Nodes visited: {nodes_visited} | Path: {path_text}"

    def get_statistics(self) -> dict:
        """Get current session statistics."""
        return {
            "nodes_explored": self._engine.visited_count,
            "steps_recorded": len(self._engine.trace),
            "frontier_size": self._engine.frontier_size,
            "current_state": self._state_machine.current_state.value,
            "state_description": self._state_machine.get_state_description(),
            "delay_ms": self.delay_ms,
        }
