"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import math
from typing import Dict

import pytest

from pathtrace.domain.neighbors import CostModel, GraphCostModel, GridCostModel
from pathtrace.domain.types import AlgoConfig, NodeId


@pytest.fixture
def open_grid() -> GridCostModel:
    """5x5 grid with no walls, 4-connected."""
    return GridCostModel(5, 5)


@pytest.fixture
def open_grid_diagonal() -> GridCostModel:
    """5x5 grid with no walls, 8-connected."""
    return GridCostModel(5, 5, allow_diagonal=True)


@pytest.fixture
def abc_graph() -> GraphCostModel:
    """A-B (4), B-C (3), A-C (10): shortest A->C goes through B."""
    return GraphCostModel(["A", "B", "C"], [("A", "B", 4), ("B", "C", 3), ("A", "C", 10)])


@pytest.fixture
def abcd_graph() -> GraphCostModel:
    """The A-B-C triangle plus an isolated node D."""
    return GraphCostModel(
        ["A", "B", "C", "D"], [("A", "B", 4), ("B", "C", 3), ("A", "C", 10)]
    )


@pytest.fixture
def dijkstra() -> AlgoConfig:
    return AlgoConfig(algorithm="dijkstra")


@pytest.fixture
def astar() -> AlgoConfig:
    return AlgoConfig(algorithm="astar")


def brute_force_distances(cost_model: CostModel, source: NodeId) -> Dict[NodeId, float]:
    """Bellman-Ford over every open node; slow but obviously correct."""
    nodes = [node for node in cost_model.nodes() if not cost_model.is_blocked(node)]
    distances = {node: math.inf for node in nodes}
    distances[source] = 0.0

    for _ in range(len(nodes)):
        changed = False
        for node in nodes:
            if distances[node] == math.inf:
                continue
            for neighbor, cost in cost_model.neighbors(node):
                if cost_model.is_blocked(neighbor):
                    continue
                if distances[node] + cost < distances[neighbor] - 1e-12:
                    distances[neighbor] = distances[node] + cost
                    changed = True
        if not changed:
            break

    return {node: d for node, d in distances.items() if d != math.inf}


@pytest.fixture
def brute_force():
    """Reference shortest-path distances for comparison."""
    return brute_force_distances
