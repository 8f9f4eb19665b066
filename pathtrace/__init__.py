"""Pathtrace - replayable Dijkstra and A* shortest-path engine.

Computes shortest paths over 4/8-connected grids and explicit weighted
graphs, recording every visit and relaxation as an immutable, step-indexed
trace so a presentation layer can animate or single-step the search.
"""

from .domain.types import (
    AlgoConfig,
    EngineState,
    Outcome,
    SearchResult,
    StepKind,
    StepRecord,
)
from .domain.errors import (
    ConfigError,
    CycleDetected,
    EmptyFrontier,
    InvalidCost,
    InvalidTransition,
    PathfindingError,
    TraceSealed,
    UnknownNode,
)
from .domain.neighbors import GraphCostModel, GridCostModel
from .domain.engine import ShortestPathEngine, find_path
from .domain.path import reconstruct_path, path_cost

__version__ = "1.0.0"

__all__ = [
    "AlgoConfig",
    "EngineState",
    "Outcome",
    "SearchResult",
    "StepKind",
    "StepRecord",
    "ConfigError",
    "CycleDetected",
    "EmptyFrontier",
    "InvalidCost",
    "InvalidTransition",
    "PathfindingError",
    "TraceSealed",
    "UnknownNode",
    "GraphCostModel",
    "GridCostModel",
    "ShortestPathEngine",
    "find_path",
    "reconstruct_path",
    "path_cost",
]
