"""Distance and predecessor tables for display layers."""

from typing import Iterable, List, Mapping, Optional, Tuple

import numpy as np

from ..domain.neighbors import CostModel, GridCostModel
from ..domain.types import INFINITY, NodeId, format_node

NO_PREDECESSOR = "-"


def distance_matrix(distances: Mapping[NodeId, float], grid: GridCostModel) -> np.ndarray:
    """rows x cols float array of distances, inf where unreached."""
    matrix = np.full((grid.rows, grid.cols), np.inf, dtype=float)
    for (row, col), distance in distances.items():
        matrix[row, col] = distance
    return matrix


def predecessor_matrix(predecessors: Mapping[NodeId, Optional[NodeId]], grid: GridCostModel) -> np.ndarray:
    """rows x cols object array of "r,c" predecessor labels, "-" where none."""
    matrix = np.full((grid.rows, grid.cols), NO_PREDECESSOR, dtype=object)
    for (row, col), previous in predecessors.items():
        if previous is not None:
            matrix[row, col] = format_node(previous)
    return matrix


def _format_cell_distance(value: float) -> str:
    return "∞" if np.isinf(value) else f"{value:.1f}"


def _render(header: Iterable[str], rows: List[List[str]]) -> str:
    table = [list(header)] + rows
    widths = [max(len(row[i]) for row in table) for i in range(len(table[0]))]
    return "\n".join(
        " ".join(cell.rjust(width) for cell, width in zip(row, widths))
        for row in table
    )


def format_distance_table(distances: Mapping[NodeId, float], grid: GridCostModel) -> str:
    """Text table of the distance matrix with r\\c headers."""
    matrix = distance_matrix(distances, grid)
    header = ["r\\c"] + [str(col) for col in range(grid.cols)]
    rows = [
        [str(row)] + [_format_cell_distance(value) for value in matrix[row]]
        for row in range(grid.rows)
    ]
    return _render(header, rows)


def format_predecessor_table(predecessors: Mapping[NodeId, Optional[NodeId]], grid: GridCostModel) -> str:
    """Text table of the predecessor matrix with r\\c headers."""
    matrix = predecessor_matrix(predecessors, grid)
    header = ["r\\c"] + [str(col) for col in range(grid.cols)]
    rows = [[str(row)] + list(matrix[row]) for row in range(grid.rows)]
    return _render(header, rows)


def distance_rows(distances: Mapping[NodeId, float],
                  predecessors: Mapping[NodeId, Optional[NodeId]],
                  cost_model: CostModel) -> List[Tuple[NodeId, float, Optional[NodeId]]]:
    """(node, distance, predecessor) for every node in model order."""
    return [
        (node, distances.get(node, INFINITY), predecessors.get(node))
        for node in cost_model.nodes()
    ]


def format_distance_rows(distances: Mapping[NodeId, float],
                         predecessors: Mapping[NodeId, Optional[NodeId]],
                         cost_model: CostModel) -> str:
    """Text table of node, distance and predecessor, one node per line."""
    rows = [
        [format_node(node), _format_cell_distance(distance),
         format_node(previous) if previous is not None else NO_PREDECESSOR]
        for node, distance, previous in distance_rows(distances, predecessors, cost_model)
    ]
    return _render(["node", "dist", "prev"], rows)
