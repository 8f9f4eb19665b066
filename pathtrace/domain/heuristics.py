"""Heuristic functions for A* over grid cells."""

import math
from typing import Callable, Optional

from .errors import ConfigError
from .neighbors import DIAGONAL_COST, CostModel, GridCostModel
from .types import Coord, HeuristicId

Heuristic = Callable[[Coord, Coord], float]


def manhattan_distance(start: Coord, target: Coord) -> float:
    """
    Manhattan (L1) distance heuristic.
    Exact on an open 4-connected grid.
    """
    return abs(start[0] - target[0]) + abs(start[1] - target[1])


def octile_distance(start: Coord, target: Coord) -> float:
    """
    Octile distance heuristic for 8-directional movement.
    Assumes diagonal moves cost √2 and orthogonal moves cost 1.
    """
    dr = abs(start[0] - target[0])
    dc = abs(start[1] - target[1])

    # min(dr, dc) diagonal moves + the rest straight
    return max(dr, dc) - min(dr, dc) + DIAGONAL_COST * min(dr, dc)


def euclidean_distance(start: Coord, target: Coord) -> float:
    """
    Euclidean (L2) distance heuristic.
    Admissible for any movement but looser than octile on a grid.
    """
    dr = start[0] - target[0]
    dc = start[1] - target[1]
    return math.sqrt(dr * dr + dc * dc)


def chebyshev_distance(start: Coord, target: Coord) -> float:
    """Chebyshev (L∞) distance. Admissible whenever diagonal moves cost at least 1."""
    return max(abs(start[0] - target[0]), abs(start[1] - target[1]))


def zero_heuristic(start, target) -> float:
    """Always 0; turns A* into Dijkstra."""
    return 0.0


# Mapping from heuristic IDs to functions
HEURISTICS: dict[HeuristicId, Heuristic] = {
    "manhattan": manhattan_distance,
    "octile": octile_distance,
    "euclidean": euclidean_distance,
    "chebyshev": chebyshev_distance,
    "zero": zero_heuristic,
}


def get_heuristic(heuristic_id: HeuristicId) -> Heuristic:
    """Get heuristic function by ID."""
    try:
        return HEURISTICS[heuristic_id]
    except KeyError:
        raise ConfigError(f"Unknown heuristic {heuristic_id!r}") from None


def get_recommended_heuristic(allow_diagonal: bool) -> HeuristicId:
    """Get the recommended heuristic for the movement type."""
    return "octile" if allow_diagonal else "manhattan"


def is_admissible(heuristic_id: HeuristicId, allow_diagonal: bool) -> bool:
    """
    Check if a heuristic is admissible for the given movement rules.
    An admissible heuristic never overestimates the true cost.
    """
    if allow_diagonal:
        # Manhattan overestimates once diagonal shortcuts exist
        return heuristic_id in ("octile", "euclidean", "chebyshev", "zero")
    return heuristic_id in ("manhattan", "octile", "euclidean", "chebyshev", "zero")


def heuristic_for(cost_model: CostModel, heuristic_id: Optional[HeuristicId] = None) -> Optional[Heuristic]:
    """
    Pick the heuristic A* should use over cost_model.

    Grids get octile or manhattan depending on diagonal movement unless
    heuristic_id names another one. Explicit graphs have no geometry, so
    None is returned and A* degenerates to Dijkstra.

    Raises:
        ConfigError: If heuristic_id is unknown or could overestimate
            under the model's movement rules.
    """
    if not isinstance(cost_model, GridCostModel):
        return None
    if heuristic_id is None:
        heuristic_id = get_recommended_heuristic(cost_model.allow_diagonal)
    heuristic = get_heuristic(heuristic_id)
    if not is_admissible(heuristic_id, cost_model.allow_diagonal):
        moves = "diagonal" if cost_model.allow_diagonal else "4-connected"
        raise ConfigError(f"Heuristic {heuristic_id!r} overestimates with {moves} moves")
    return heuristic
