"""Tests for path reconstruction and path costs."""

import pytest

from pathtrace.domain.errors import CycleDetected, UnknownNode
from pathtrace.domain.path import path_cost, reconstruct_path, validate_path


class TestReconstructPath:
    """Predecessor walks."""

    def test_forward_order_with_both_endpoints(self):
        predecessors = {"A": None, "B": "A", "C": "B"}
        assert reconstruct_path(predecessors, "A", "C") == ["A", "B", "C"]

    def test_source_equals_target(self):
        assert reconstruct_path({"A": None}, "A", "A") == ["A"]

    def test_unreached_target_gives_empty_path(self):
        assert reconstruct_path({"A": None, "B": "A"}, "A", "D") == []

    def test_chain_to_another_root_gives_empty_path(self):
        predecessors = {"A": None, "X": None, "Y": "X"}
        assert reconstruct_path(predecessors, "A", "Y") == []

    def test_cycle_detected(self):
        predecessors = {"A": None, "B": "C", "C": "B"}
        with pytest.raises(CycleDetected):
            reconstruct_path(predecessors, "A", "B")

    def test_explicit_bound(self):
        predecessors = {"A": None, "B": "A", "C": "B"}
        with pytest.raises(CycleDetected):
            reconstruct_path(predecessors, "A", "C", node_count=2)


class TestPathCost:
    """Summing edge costs along paths."""

    def test_graph_path_cost(self, abc_graph):
        assert path_cost(["A", "B", "C"], abc_graph) == 7
        assert path_cost(["A"], abc_graph) == 0.0

    def test_non_adjacent_step(self, abcd_graph):
        with pytest.raises(UnknownNode):
            path_cost(["A", "D"], abcd_graph)

    def test_validate_path(self, abc_graph):
        assert validate_path(["A", "B", "C"], abc_graph)
        assert not validate_path([], abc_graph)
        assert not validate_path(["A", "Z"], abc_graph)
