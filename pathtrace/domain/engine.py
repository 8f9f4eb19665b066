"""Dijkstra / A* engine with a replayable step trace."""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .errors import EmptyFrontier, ConfigError, PathfindingError
from .fsm import EngineStateMachine
from .heuristics import Heuristic, heuristic_for
from .neighbors import CostModel
from .path import reconstruct_path
from .priority_queue import PriorityFrontier
from .trace import TraceRecorder
from .types import (
    INFINITY,
    AlgoConfig,
    EngineState,
    NodeId,
    Outcome,
    SearchResult,
    StepKind,
    StepRecord,
    format_distance,
    format_node,
)

logger = logging.getLogger(__name__)


class ShortestPathEngine:
    """
    Shortest-path engine shared by Dijkstra and A*.

    One instance owns its distance, predecessor, visited, frontier and trace
    state from initialize() until the next initialize() or reset(). Each
    step() does one bounded unit of work: it finalizes one node and relaxes
    its edges, appending a StepRecord for the visit and for every improving
    relaxation. run() is just step() in a loop, so both produce the same
    trace. The engine never sleeps; pacing belongs to the caller.
    """

    def __init__(self, cost_model: Optional[CostModel] = None, config: Optional[AlgoConfig] = None):
        self.cost_model = cost_model
        self.config = config or AlgoConfig()
        self.reset()

    def reset(self):
        """Discard all run state and the trace."""
        self._fsm = EngineStateMachine()
        self._frontier = PriorityFrontier()
        self._trace = TraceRecorder()
        self._distances: Dict[NodeId, float] = {}
        self._predecessors: Dict[NodeId, Optional[NodeId]] = {}
        self._visited: Dict[NodeId, None] = {}  # insertion-ordered set
        self._heuristic: Optional[Heuristic] = None
        self._initialized = False
        self.source: Optional[NodeId] = None
        self.target: Optional[NodeId] = None
        self.current_node: Optional[NodeId] = None

    def initialize(self, source: NodeId, target: Optional[NodeId] = None,
                   cost_model: Optional[CostModel] = None,
                   heuristic: Optional[Heuristic] = None,
                   config: Optional[AlgoConfig] = None) -> EngineState:
        """
        Prepare a run from source, optionally towards target.

        Everything is validated before any state changes, so a failed call
        leaves the previous run intact.

        Args:
            source: Start node
            target: Node to stop at; None explores everything reachable
            cost_model: Overrides the model given at construction
            heuristic: Overrides the default A* heuristic (ignored for Dijkstra)
            config: Overrides the algorithm configuration

        Raises:
            UnknownNode: If source or target is outside the model.
            InvalidCost: If any configured cost is not positive.
            ConfigError: If no cost model is available, source is blocked,
                or the configured heuristic could overestimate.
        """
        cost_model = cost_model if cost_model is not None else self.cost_model
        config = config if config is not None else self.config
        if cost_model is None:
            raise ConfigError("No cost model configured")

        cost_model.validate_node(source)
        if target is not None:
            cost_model.validate_node(target)
        cost_model.validate()
        if cost_model.is_blocked(source):
            raise ConfigError(f"Source {format_node(source)} is blocked")

        if config.use_heuristic and heuristic is None:
            heuristic = heuristic_for(cost_model, config.heuristic)
        elif not config.use_heuristic:
            heuristic = None

        self.reset()
        self.cost_model = cost_model
        self.config = config
        self.source = source
        self.target = target
        self._heuristic = heuristic

        self._distances[source] = 0.0
        self._predecessors[source] = None
        self._frontier.insert(source, self._estimate(source))
        self._initialized = True

        logger.info(
            "Initialized %s from %s to %s over %r",
            config.label, format_node(source),
            format_node(target) if target is not None else "<all>", cost_model,
        )
        return self.state

    def step(self) -> EngineState:
        """
        Execute one step: finalize the next node and relax its edges.

        Returns the engine state after the step. In a terminal state this
        is a no-op.
        """
        if not self._initialized:
            raise PathfindingError("Engine not initialized")
        if self._fsm.is_finished():
            return self.state
        if self._fsm.is_ready():
            self._fsm.require(EngineState.RUNNING)

        node = self._extract_fresh()
        if node is None:
            self._finish(EngineState.EXHAUSTED)
            return self.state

        self._visited[node] = None
        self.current_node = node
        self._record(
            StepKind.VISIT, node,
            f"Visiting node {format_node(node)} "
            f"(distance {format_distance(self._distances[node])})",
        )

        if self.target is not None and node == self.target:
            self._finish(EngineState.FOUND)
            return self.state

        for neighbor, edge_cost in self.cost_model.neighbors(node):
            if self.cost_model.is_blocked(neighbor) or neighbor in self._visited:
                continue

            alt = self._distances[node] + edge_cost
            if alt < self._distances.get(neighbor, INFINITY):
                self._distances[neighbor] = alt
                self._predecessors[neighbor] = node
                self._frontier.insert(neighbor, alt + self._estimate(neighbor))
                self._record(
                    StepKind.RELAX, node,
                    f"Relaxed edge {format_node(node)} -> {format_node(neighbor)}: "
                    f"distance {format_distance(alt)}",
                    relaxed_neighbor=neighbor, new_distance=alt,
                )

        return self.state

    def run(self) -> EngineState:
        """Step until the target is found or the frontier is exhausted."""
        while not self._fsm.is_finished():
            self.step()
        return self.state

    def _extract_fresh(self) -> Optional[NodeId]:
        """Pop entries until one for an unvisited node appears; None when exhausted."""
        while True:
            try:
                entry = self._frontier.extract_min()
            except EmptyFrontier:
                return None
            if entry.node not in self._visited:
                return entry.node

    def _estimate(self, node: NodeId) -> float:
        """Heuristic estimate from node to target (0 for Dijkstra or no target)."""
        if self._heuristic is None or self.target is None:
            return 0.0
        return self._heuristic(node, self.target)

    def _record(self, kind: StepKind, node: NodeId, description: str,
                relaxed_neighbor: Optional[NodeId] = None,
                new_distance: Optional[float] = None):
        record = StepRecord.capture(
            index=self._trace.next_index,
            kind=kind,
            current_node=node,
            distances=self._distances,
            visited=self._visited,
            predecessors=self._predecessors,
            description=description,
            relaxed_neighbor=relaxed_neighbor,
            new_distance=new_distance,
        )
        self._trace.append(record)
        logger.debug("step %d: %s", record.index, description)

    def _finish(self, state: EngineState):
        self._fsm.require(state)
        self._trace.seal()
        if state == EngineState.FOUND:
            logger.info(
                "%s found %s at distance %s after visiting %d nodes",
                self.config.label, format_node(self.target),
                format_distance(self._distances[self.target]), len(self._visited),
            )
        else:
            logger.info(
                "%s exhausted the frontier after visiting %d nodes",
                self.config.label, len(self._visited),
            )

    @property
    def state(self) -> EngineState:
        """Current engine state."""
        return self._fsm.current_state

    @property
    def is_finished(self) -> bool:
        return self._fsm.is_finished()

    @property
    def distances(self) -> Mapping[NodeId, float]:
        """Read-only live view of the distance map."""
        return MappingProxyType(self._distances)

    @property
    def predecessors(self) -> Mapping[NodeId, Optional[NodeId]]:
        """Read-only live view of the predecessor map."""
        return MappingProxyType(self._predecessors)

    @property
    def visited(self) -> Tuple[NodeId, ...]:
        """Finalized nodes in visit order."""
        return tuple(self._visited)

    @property
    def visited_count(self) -> int:
        return len(self._visited)

    @property
    def frontier_size(self) -> int:
        """Frontier entries, stale ones included."""
        return len(self._frontier)

    def frontier_nodes(self) -> List[NodeId]:
        """Discovered but unfinalized nodes, in extraction order."""
        seen = {}
        for entry in self._frontier.snapshot():
            if entry.node not in self._visited:
                seen.setdefault(entry.node, None)
        return list(seen)

    @property
    def trace(self) -> TraceRecorder:
        return self._trace

    def distance_to(self, node: NodeId) -> float:
        """Best known distance to node (infinity if unreached)."""
        return self._distances.get(node, INFINITY)

    def path(self, target: Optional[NodeId] = None) -> List[NodeId]:
        """Best known path from source to target (the run's target by default)."""
        target = target if target is not None else self.target
        if target is None or self.source is None:
            return []
        return reconstruct_path(
            self._predecessors, self.source, target, self.cost_model.node_count
        )

    def result(self) -> SearchResult:
        """Summarize the run so far."""
        if not self._initialized:
            raise PathfindingError("Engine not initialized")

        if self.state == EngineState.FOUND:
            outcome = Outcome.FOUND
        elif self.state == EngineState.EXHAUSTED:
            outcome = Outcome.EXHAUSTED if self.target is None else Outcome.UNREACHABLE
        else:
            outcome = Outcome.INCOMPLETE

        found = outcome is Outcome.FOUND
        return SearchResult(
            outcome=outcome,
            source=self.source,
            target=self.target,
            distance=self.distance_to(self.target) if self.target is not None else INFINITY,
            path=self.path() if found else [],
            distances=dict(self._distances),
            predecessors=dict(self._predecessors),
            visited_count=len(self._visited),
            trace=self._trace,
        )


def find_path(cost_model: CostModel, source: NodeId, target: Optional[NodeId] = None,
              config: Optional[AlgoConfig] = None) -> SearchResult:
    """
    Convenience function to run a search from start to finish.

    Args:
        cost_model: Grid or graph to search
        source: Start node
        target: Target node, or None for a full distance map
        config: Algorithm configuration (Dijkstra by default)

    Returns:
        SearchResult with path, distances and trace
    """
    engine = ShortestPathEngine(cost_model, config)
    engine.initialize(source, target)
    engine.run()
    return engine.result()
