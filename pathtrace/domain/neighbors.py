"""Cost models: neighbor generation and per-edge costs for grids and graphs."""

import math
from typing import Dict, Hashable, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .errors import InvalidCost, UnknownNode
from .types import Coord, NodeId

DIAGONAL_COST = math.sqrt(2)

# Movement directions as ((dr, dc), cost); order fixes tie-breaking among equal priorities
ORTHOGONAL_STEPS = [
    ((-1, 0), 1.0),   # up
    ((1, 0), 1.0),    # down
    ((0, -1), 1.0),   # left
    ((0, 1), 1.0),    # right
]
DIAGONAL_STEPS = [
    ((-1, -1), DIAGONAL_COST),
    ((-1, 1), DIAGONAL_COST),
    ((1, -1), DIAGONAL_COST),
    ((1, 1), DIAGONAL_COST),
]


class Edge(NamedTuple):
    """Undirected weighted edge of an explicit graph."""
    source: Hashable
    target: Hashable
    weight: float


class CostModel:
    """
    Geometry/weight function the engine expands nodes with.

    Subclasses provide neighbors(node) as (neighbor, cost) pairs. Blocked
    cells are reported by is_blocked() and filtered by the engine, not here.
    """

    def neighbors(self, node: NodeId) -> List[Tuple[NodeId, float]]:
        raise NotImplementedError

    def contains(self, node: NodeId) -> bool:
        raise NotImplementedError

    def is_blocked(self, node: NodeId) -> bool:
        return False

    def nodes(self) -> Iterator[NodeId]:
        raise NotImplementedError

    @property
    def node_count(self) -> int:
        raise NotImplementedError

    def step_costs(self) -> Iterator[Tuple[float, Optional[Tuple[NodeId, NodeId]]]]:
        """Every configured cost, with the edge it belongs to when known."""
        raise NotImplementedError

    def edge_cost(self, from_node: NodeId, to_node: NodeId) -> float:
        raise NotImplementedError

    def validate_node(self, node: NodeId) -> None:
        """Raise UnknownNode if node is outside the model."""
        if not self.contains(node):
            raise UnknownNode(node)

    def validate(self) -> None:
        """
        Check every configured cost is positive and finite.

        Raises:
            InvalidCost: On the first offending cost.
        """
        for cost, edge in self.step_costs():
            if not _is_valid_cost(cost):
                raise InvalidCost(cost, edge)


def _is_valid_cost(cost) -> bool:
    try:
        return cost > 0 and math.isfinite(cost)
    except TypeError:
        return False


class GridCostModel(CostModel):
    """
    Implicit 4/8-connected lattice of rows x cols cells.

    Orthogonal steps cost 1, diagonal steps cost sqrt(2). Edges are
    symmetric by construction.
    """

    def __init__(self, rows: int, cols: int, blocked: Iterable[Coord] = (),
                 allow_diagonal: bool = False, corner_cutting: bool = True):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self.allow_diagonal = allow_diagonal
        self.corner_cutting = corner_cutting

        blocked_set = set()
        for cell in blocked:
            cell = (int(cell[0]), int(cell[1]))
            if not self.contains(cell):
                raise UnknownNode(cell, "blocked cell is out of bounds")
            blocked_set.add(cell)
        self.blocked = frozenset(blocked_set)

    def __repr__(self) -> str:
        return (f"GridCostModel({self.rows}x{self.cols}, blocked={len(self.blocked)}, "
                f"diagonal={self.allow_diagonal}, corner_cutting={self.corner_cutting})")

    def contains(self, node: NodeId) -> bool:
        """Check if node is a (row, col) within grid bounds."""
        if not isinstance(node, tuple) or len(node) != 2:
            return False
        row, col = node
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_blocked(self, node: NodeId) -> bool:
        return node in self.blocked

    def nodes(self) -> Iterator[Coord]:
        """All cells in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    @property
    def node_count(self) -> int:
        return self.rows * self.cols

    def grid_neighbors(self, node: Coord, allow_diagonal: bool) -> List[Tuple[Coord, float]]:
        """
        Bounds-filtered neighbors of a cell with their movement costs.

        Cardinal neighbors come first, then diagonals if allowed. Blocked
        cells are not filtered.
        """
        row, col = node
        steps = ORTHOGONAL_STEPS + DIAGONAL_STEPS if allow_diagonal else ORTHOGONAL_STEPS

        neighbors = []
        for (dr, dc), cost in steps:
            candidate = (row + dr, col + dc)
            if self.contains(candidate):
                neighbors.append((candidate, cost))
        return neighbors

    def neighbors(self, node: Coord) -> List[Tuple[Coord, float]]:
        """Neighbors under this model's movement rules and corner-cutting policy."""
        neighbors = self.grid_neighbors(node, self.allow_diagonal)
        if self.corner_cutting or not self.allow_diagonal:
            return neighbors
        return [
            (candidate, cost) for candidate, cost in neighbors
            if not self._is_corner_blocked(node, candidate)
        ]

    def _is_corner_blocked(self, node: Coord, candidate: Coord) -> bool:
        """
        Check if a diagonal move squeezes between two blocked orthogonal cells.
        Orthogonal moves are never corner-blocked.
        """
        dr = candidate[0] - node[0]
        dc = candidate[1] - node[1]
        if abs(dr) + abs(dc) != 2:
            return False

        side1 = (node[0] + dr, node[1])
        side2 = (node[0], node[1] + dc)
        return self._blocks_corner(side1) and self._blocks_corner(side2)

    def _blocks_corner(self, cell: Coord) -> bool:
        # Out of bounds counts as blocked
        return not self.contains(cell) or cell in self.blocked

    def step_costs(self) -> Iterator[Tuple[float, None]]:
        steps = ORTHOGONAL_STEPS + DIAGONAL_STEPS if self.allow_diagonal else ORTHOGONAL_STEPS
        for _, cost in steps:
            yield cost, None

    def edge_cost(self, from_node: Coord, to_node: Coord) -> float:
        """Cost of moving between two adjacent cells."""
        self.validate_node(from_node)
        self.validate_node(to_node)

        dr = abs(to_node[0] - from_node[0])
        dc = abs(to_node[1] - from_node[1])
        if dr + dc == 1:
            return 1.0
        if dr == 1 and dc == 1 and self.allow_diagonal:
            return DIAGONAL_COST
        raise UnknownNode(to_node, f"not adjacent to {from_node!r}")


class GraphCostModel(CostModel):
    """
    Explicit weighted graph.

    Each edge is stored once and traversable from either endpoint.
    Construction rejects edges that reference unknown nodes; non-positive
    weights are rejected by validate(), which the engine runs on initialize.
    """

    def __init__(self, nodes: Iterable[Hashable], edges: Iterable[Tuple[Hashable, Hashable, float]]):
        self._nodes: Dict[Hashable, None] = dict.fromkeys(nodes)
        self.edges: List[Edge] = []
        self._adjacency: Dict[Hashable, List[Tuple[Hashable, float]]] = {
            node: [] for node in self._nodes
        }

        for source, target, weight in edges:
            for endpoint in (source, target):
                if endpoint not in self._nodes:
                    raise UnknownNode(endpoint, f"edge {source!r} - {target!r} references it")
            edge = Edge(source, target, weight)
            self.edges.append(edge)
            self._adjacency[source].append((target, weight))
            self._adjacency[target].append((source, weight))

    def __repr__(self) -> str:
        return f"GraphCostModel(nodes={len(self._nodes)}, edges={len(self.edges)})"

    def contains(self, node: NodeId) -> bool:
        try:
            return node in self._nodes
        except TypeError:
            # Unhashable ids can never be nodes
            return False

    def nodes(self) -> Iterator[Hashable]:
        return iter(self._nodes)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def graph_neighbors(self, node: Hashable) -> List[Tuple[Hashable, float]]:
        """All (neighbor, weight) pairs over edges incident to node, in edge order."""
        self.validate_node(node)
        return list(self._adjacency[node])

    def neighbors(self, node: Hashable) -> List[Tuple[Hashable, float]]:
        return self.graph_neighbors(node)

    def step_costs(self) -> Iterator[Tuple[float, Tuple[Hashable, Hashable]]]:
        for edge in self.edges:
            yield edge.weight, (edge.source, edge.target)

    def edge_cost(self, from_node: Hashable, to_node: Hashable) -> float:
        """Cheapest weight among edges joining the two nodes."""
        self.validate_node(from_node)
        self.validate_node(to_node)

        weights = [w for neighbor, w in self._adjacency[from_node] if neighbor == to_node]
        if not weights:
            raise UnknownNode(to_node, f"no edge from {from_node!r}")
        return min(weights)

