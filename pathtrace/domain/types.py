"""Core type definitions for the shortest-path engine."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Hashable, List, Literal, Mapping, Optional, Tuple, get_args

from .errors import ConfigError

# Grid cell as (row, col)
Coord = Tuple[int, int]

# Any hashable node id: a Coord in grid mode, str/int in graph mode
NodeId = Hashable

# Algorithm selector
AlgorithmId = Literal["dijkstra", "astar"]

# Heuristic function identifiers
HeuristicId = Literal["manhattan", "octile", "euclidean", "chebyshev", "zero"]

INFINITY = float("inf")


def format_node(node: NodeId) -> str:
    """Short label for a node: "r,c" for grid cells, str() otherwise."""
    if isinstance(node, tuple) and len(node) == 2:
        return f"{node[0]},{node[1]}"
    return str(node)


def format_distance(distance: float, digits: int = 2) -> str:
    """Distance with fixed decimals, "∞" when unreached."""
    if distance == INFINITY:
        return "∞"
    return f"{distance:.{digits}f}"


class EngineState(Enum):
    """Lifecycle of one engine run."""
    READY = "ready"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (EngineState.FOUND, EngineState.EXHAUSTED)


class StepKind(Enum):
    """What a StepRecord captures."""
    VISIT = "visit"
    RELAX = "relax"


class Outcome(Enum):
    """How a search ended, from the caller's point of view."""
    FOUND = "found"
    UNREACHABLE = "unreachable"
    EXHAUSTED = "exhausted"    # no target was given; full map computed
    INCOMPLETE = "incomplete"  # caller stopped stepping before a terminal state


@dataclass(frozen=True)
class StepRecord:
    """
    Immutable snapshot of engine state after one visit or relaxation.

    The containers are copies taken when the record is captured, wrapped
    read-only, so later engine mutation never rewrites history.
    """
    index: int
    kind: StepKind
    current_node: NodeId
    distances: Mapping[NodeId, float]
    visited: Tuple[NodeId, ...]
    predecessors: Mapping[NodeId, Optional[NodeId]]
    description: str
    relaxed_neighbor: Optional[NodeId] = None
    new_distance: Optional[float] = None

    @classmethod
    def capture(cls, index: int, kind: StepKind, current_node: NodeId,
                distances: Dict[NodeId, float], visited: Dict[NodeId, None],
                predecessors: Dict[NodeId, Optional[NodeId]], description: str,
                relaxed_neighbor: Optional[NodeId] = None,
                new_distance: Optional[float] = None) -> "StepRecord":
        """Build a record from live engine containers, copying each one."""
        return cls(
            index=index,
            kind=kind,
            current_node=current_node,
            distances=MappingProxyType(dict(distances)),
            visited=tuple(visited),
            predecessors=MappingProxyType(dict(predecessors)),
            description=description,
            relaxed_neighbor=relaxed_neighbor,
            new_distance=new_distance,
        )

    def distance_of(self, node: NodeId) -> float:
        """Distance of node at capture time (infinity if not yet reached)."""
        return self.distances.get(node, INFINITY)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-container view, handy for renderers and comparisons."""
        return {
            "index": self.index,
            "kind": self.kind.value,
            "current_node": self.current_node,
            "relaxed_neighbor": self.relaxed_neighbor,
            "new_distance": self.new_distance,
            "distances": dict(self.distances),
            "visited": list(self.visited),
            "predecessors": dict(self.predecessors),
            "description": self.description,
        }


@dataclass
class AlgoConfig:
    """Configuration for a search run."""
    algorithm: AlgorithmId = "dijkstra"
    allow_diagonal: bool = False
    corner_cutting: bool = True
    heuristic: Optional[HeuristicId] = None  # None picks octile/manhattan from allow_diagonal

    def __post_init__(self):
        if self.algorithm not in get_args(AlgorithmId):
            raise ConfigError(f"Unknown algorithm {self.algorithm!r}")
        if self.heuristic is not None and self.heuristic not in get_args(HeuristicId):
            raise ConfigError(f"Unknown heuristic {self.heuristic!r}")

    @property
    def use_heuristic(self) -> bool:
        """Whether frontier priorities include a heuristic term."""
        return self.algorithm == "astar"

    @property
    def label(self) -> str:
        """Human-readable algorithm name."""
        return "A*" if self.algorithm == "astar" else "Dijkstra's"


@dataclass
class SearchResult:
    """Result of a search, complete or partial."""
    outcome: Outcome
    source: NodeId
    target: Optional[NodeId]
    distance: float = INFINITY
    path: List[NodeId] = field(default_factory=list)
    distances: Dict[NodeId, float] = field(default_factory=dict)
    predecessors: Dict[NodeId, Optional[NodeId]] = field(default_factory=dict)
    visited_count: int = 0
    trace: Any = None  # TraceRecorder

    @property
    def found(self) -> bool:
        """Whether the target was reached."""
        return self.outcome is Outcome.FOUND
