"""Path reconstruction and path cost utilities."""

from typing import List, Mapping, Optional

from .errors import CycleDetected
from .neighbors import CostModel
from .types import NodeId


def reconstruct_path(predecessors: Mapping[NodeId, Optional[NodeId]], source: NodeId,
                     target: NodeId, node_count: Optional[int] = None) -> List[NodeId]:
    """
    Reconstruct the path from source to target using predecessor links.

    Walks backward from target and reverses, so the result starts with
    source and ends with target. Returns an empty list when target was
    never reached, or when the chain ends at a root other than source.

    Args:
        predecessors: node -> previous node (None for the root)
        source: Start of the path
        target: End of the path
        node_count: Upper bound on path length; defaults to the map size + 1

    Raises:
        CycleDetected: If the walk exceeds node_count nodes.
    """
    if target == source:
        return [source]
    if predecessors.get(target) is None:
        return []

    limit = node_count if node_count is not None else len(predecessors) + 1

    path = []
    current = target
    while current is not None:
        if len(path) >= limit:
            raise CycleDetected(target, limit)
        path.append(current)
        if current == source:
            break
        current = predecessors.get(current)
    else:
        # Chain ended at some other root
        return []

    # Reverse to get path from source to target
    path.reverse()
    return path


def path_cost(path: List[NodeId], cost_model: CostModel) -> float:
    """Calculate the total cost of a path."""
    if len(path) < 2:
        return 0.0

    total_cost = 0.0
    for i in range(1, len(path)):
        total_cost += cost_model.edge_cost(path[i - 1], path[i])
    return total_cost


def validate_path(path: List[NodeId], cost_model: CostModel) -> bool:
    """
    Validate that a path is walkable and connected.
    Returns True if path is valid.
    """
    if not path:
        return False

    for node in path:
        if not cost_model.contains(node) or cost_model.is_blocked(node):
            return False

    for i in range(1, len(path)):
        neighbors = {neighbor for neighbor, _ in cost_model.neighbors(path[i - 1])}
        if path[i] not in neighbors:
            return False

    return True
