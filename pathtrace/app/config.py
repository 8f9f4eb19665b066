"""Problem definitions and session configuration."""

from dataclasses import dataclass, field
from typing import Hashable, List, Optional, Tuple, Union

from ..domain.errors import ConfigError
from ..domain.neighbors import CostModel, GraphCostModel, GridCostModel
from ..domain.types import AlgoConfig, Coord

DEFAULT_ROWS = 15
DEFAULT_COLS = 25


@dataclass
class GridSpec:
    """A grid problem: dimensions, walls, endpoints."""
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    blocked: List[Coord] = field(default_factory=list)
    source: Optional[Coord] = None
    target: Optional[Coord] = None

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigError(f"Grid dimensions must be positive, got {self.rows}x{self.cols}")
        self.blocked = [tuple(cell) for cell in self.blocked]
        if self.source is None:
            self.source = (self.rows // 2, min(3, self.cols - 1))
        if self.target is None:
            self.target = (self.rows // 2, max(self.cols - 4, 0))
        self.source = tuple(self.source)
        self.target = tuple(self.target)

    def build_cost_model(self, algo: AlgoConfig) -> GridCostModel:
        # Endpoints are never walls
        blocked = [cell for cell in self.blocked if cell not in (self.source, self.target)]
        return GridCostModel(
            self.rows, self.cols, blocked,
            allow_diagonal=algo.allow_diagonal,
            corner_cutting=algo.corner_cutting,
        )


@dataclass
class GraphSpec:
    """An explicit graph problem: nodes, weighted edges, endpoints."""
    nodes: List[Hashable]
    edges: List[Tuple[Hashable, Hashable, float]]
    source: Hashable = None
    target: Optional[Hashable] = None

    def __post_init__(self):
        if not self.nodes:
            raise ConfigError("Graph must have at least one node")
        self.edges = [tuple(edge) for edge in self.edges]
        for edge in self.edges:
            if len(edge) != 3:
                raise ConfigError(f"Edge must be (from, to, weight), got {edge!r}")
        if self.source is None:
            self.source = self.nodes[0]

    def build_cost_model(self, algo: AlgoConfig) -> GraphCostModel:
        return GraphCostModel(self.nodes, self.edges)


ProblemSpec = Union[GridSpec, GraphSpec]


@dataclass
class SearchConfig:
    """Everything a session needs to run one search."""
    problem: ProblemSpec = field(default_factory=GridSpec)
    algo: AlgoConfig = field(default_factory=AlgoConfig)

    @property
    def is_grid(self) -> bool:
        return isinstance(self.problem, GridSpec)

    def build_cost_model(self) -> CostModel:
        return self.problem.build_cost_model(self.algo)
