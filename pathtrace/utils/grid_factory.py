"""Factories for random grid and graph problem instances."""

from typing import Iterable, List, Optional

from ..app.config import GraphSpec, GridSpec
from ..domain.errors import ConfigError
from ..domain.types import Coord
from .rng import SeededRNG, default_rng


def random_blocked_cells(rows: int, cols: int, density: float,
                         rng: Optional[SeededRNG] = None,
                         keep_clear: Iterable[Coord] = ()) -> List[Coord]:
    """
    Pick random cells to block.

    Args:
        rows, cols: Grid dimensions
        density: Fraction of cells to block (0.0 to 1.0)
        rng: Random number generator to use (uses default if None)
        keep_clear: Cells that must stay open, e.g. source and target

    Returns:
        Blocked cells in row-major order
    """
    if not (0.0 <= density <= 1.0):
        raise ConfigError(f"Density must be between 0.0 and 1.0, got {density}")
    if rng is None:
        rng = default_rng

    clear = set(keep_clear)
    candidates = [
        (row, col) for row in range(rows) for col in range(cols)
        if (row, col) not in clear
    ]
    count = min(int(rows * cols * density), len(candidates))
    return sorted(rng.sample(candidates, count))


def random_grid(rows: int, cols: int, density: float,
                source: Optional[Coord] = None, target: Optional[Coord] = None,
                rng: Optional[SeededRNG] = None) -> GridSpec:
    """Grid problem with random walls; source and target are always open."""
    spec = GridSpec(rows=rows, cols=cols, source=source, target=target)
    spec.blocked = random_blocked_cells(
        rows, cols, density, rng, keep_clear=(spec.source, spec.target)
    )
    return spec


def random_graph(node_count: int, edge_probability: float, max_weight: int = 10,
                 rng: Optional[SeededRNG] = None) -> GraphSpec:
    """
    Graph problem over nodes 0..node_count-1 with random integer weights.

    Each unordered pair gets an edge with probability edge_probability.
    Source is node 0, target the last node.
    """
    if node_count <= 0:
        raise ConfigError(f"Node count must be positive, got {node_count}")
    if rng is None:
        rng = default_rng

    nodes = list(range(node_count))
    edges = []
    for a in nodes:
        for b in nodes[a + 1:]:
            if rng.random() < edge_probability:
                edges.append((a, b, float(rng.randint(1, max_weight))))
    return GraphSpec(nodes=nodes, edges=edges, source=0, target=node_count - 1)
