"""Tests for the search session and table rendering."""

import numpy as np
import pytest

from pathtrace.app.config import GraphSpec, GridSpec, SearchConfig
from pathtrace.app.fsm import SessionState
from pathtrace.app.session import SearchSession, delay_for_speed
from pathtrace.app.tables import (
    distance_matrix,
    distance_rows,
    format_distance_table,
    format_predecessor_table,
    predecessor_matrix,
)
from pathtrace.domain.errors import ConfigError, InvalidCost
from pathtrace.domain.neighbors import GridCostModel
from pathtrace.domain.engine import find_path
from pathtrace.domain.types import AlgoConfig, Outcome


def grid_session(**algo) -> SearchSession:
    spec = GridSpec(rows=5, cols=5, source=(0, 0), target=(4, 4))
    return SearchSession(SearchConfig(problem=spec, algo=AlgoConfig(**algo)))


@pytest.mark.parametrize("speed, delay", [(0, 500), (50, 250), (100, 0), (150, 0), (-5, 500)])
def test_delay_for_speed(speed, delay):
    assert delay_for_speed(speed) == delay


class TestGridSpec:
    """Defaults and endpoint handling."""

    def test_defaults(self):
        spec = GridSpec()
        assert (spec.rows, spec.cols) == (15, 25)
        assert spec.source == (7, 3)
        assert spec.target == (7, 21)

    def test_endpoints_are_never_walls(self):
        spec = GridSpec(rows=3, cols=3, blocked=[(0, 0), (1, 1)], source=(0, 0), target=(2, 2))
        grid = spec.build_cost_model(AlgoConfig())
        assert grid.blocked == frozenset({(1, 1)})

    def test_bad_dimensions(self):
        with pytest.raises(ConfigError):
            GridSpec(rows=0, cols=3)


class TestSearchSession:
    """Session lifecycle around one engine."""

    def test_run_to_completion(self):
        session = grid_session()
        result = session.run()

        assert result.distance == 8
        assert session.current_state == SessionState.COMPLETE
        assert session.summary() == (
            f"Algorithm: Dijkstra's | Nodes visited: {result.visited_count} | Path: length ≈ 8.00"
        )

    def test_summary_placeholders_before_start(self):
        assert grid_session().summary() == "Algorithm: — | Nodes visited: — | Path: —"

    def test_no_path(self):
        spec = GraphSpec(nodes=["A", "B", "C", "D"],
                         edges=[("A", "B", 4), ("B", "C", 3), ("A", "C", 10)],
                         source="A", target="D")
        session = SearchSession(SearchConfig(problem=spec))
        result = session.run()

        assert result.outcome is Outcome.UNREACHABLE
        assert session.current_state == SessionState.NO_PATH
        assert session.summary().endswith("Path: no path found")

    def test_step_returns_new_records(self):
        session = grid_session()
        session.start()
        records = session.step()

        assert [r.index for r in records] == [0, 1, 2]
        assert records[0].description.startswith("Visiting node 0,0")

    def test_cancel_and_resume(self):
        session = grid_session(algorithm="astar", allow_diagonal=True)
        session.start()

        seen = []
        for record in session.iter_steps():
            seen.append(record)
            if len(seen) == 3:
                session.cancel()

        assert len(seen) == 3
        assert session.current_state == SessionState.PAUSED
        partial = session.result()
        assert partial.outcome is Outcome.INCOMPLETE
        assert partial.path == []

        final = session.run()
        reference = grid_session(algorithm="astar", allow_diagonal=True).run()
        assert final.found
        assert [r.to_dict() for r in final.trace] == [r.to_dict() for r in reference.trace]

    def test_start_while_running(self):
        session = grid_session()
        session.start()
        with pytest.raises(ConfigError):
            session.start()

    def test_restart_after_completion(self):
        session = grid_session()
        session.run()
        session.update_config(algorithm="astar")
        result = session.run()

        assert session.summary().startswith("Algorithm: A*")
        assert result.distance == 8

    def test_update_config_validation(self):
        session = grid_session()
        with pytest.raises(ConfigError):
            session.update_config(teleport=True)
        with pytest.raises(ConfigError):
            session.update_config(algorithm="bogus")
        assert session.config.algo.algorithm == "dijkstra"
        session.start()
        with pytest.raises(ConfigError):
            session.update_config(allow_diagonal=True)

    def test_update_config_refused_while_paused(self):
        session = grid_session()
        session.start()
        session.step()
        session.cancel()

        assert session.current_state == SessionState.PAUSED
        with pytest.raises(ConfigError):
            session.update_config(algorithm="astar")
        assert session.summary().startswith("Algorithm: Dijkstra's (running...)")

    def test_finished_run_keeps_its_label(self):
        session = grid_session()
        session.run()
        session.update_config(algorithm="astar")

        assert session.summary().startswith("Algorithm: Dijkstra's |")
        assert session.engine.config.algorithm == "dijkstra"

    def test_invalid_cost_moves_to_error(self):
        spec = GraphSpec(nodes=["A", "B"], edges=[("A", "B", -1)], source="A", target="B")
        session = SearchSession(SearchConfig(problem=spec))

        with pytest.raises(InvalidCost):
            session.start()
        assert session.current_state == SessionState.ERROR
        assert "positive" in session.last_error
        assert "error:" in session.summary()

    def test_speed_and_statistics(self):
        session = grid_session()
        session.speed = 80
        stats = session.get_statistics()

        assert session.delay_ms == 100
        assert stats["delay_ms"] == 100
        assert stats["current_state"] == "idle"


class TestTables:
    """Distance and predecessor tables."""

    def test_matrices(self):
        grid = GridCostModel(2, 2)
        result = find_path(grid, (0, 0))

        np.testing.assert_array_equal(distance_matrix(result.distances, grid), [[0, 1], [1, 2]])
        assert predecessor_matrix(result.predecessors, grid).tolist() == [
            ["-", "0,0"],
            ["0,0", "1,0"],
        ]

    def test_unreached_cells_are_infinite(self):
        grid = GridCostModel(2, 3, blocked=[(0, 1), (1, 1)])
        result = find_path(grid, (0, 0))
        matrix = distance_matrix(result.distances, grid)

        assert np.isinf(matrix[0, 2])
        assert "∞" in format_distance_table(result.distances, grid)

    def test_text_tables(self):
        grid = GridCostModel(2, 2)
        result = find_path(grid, (0, 0))

        distances = format_distance_table(result.distances, grid).splitlines()
        assert distances[0].split() == ["r\\c", "0", "1"]
        assert distances[1].split() == ["0", "0.0", "1.0"]
        predecessors = format_predecessor_table(result.predecessors, grid).splitlines()
        assert predecessors[2].split() == ["1", "0,0", "1,0"]

    def test_graph_rows(self, abcd_graph):
        result = find_path(abcd_graph, "A")
        assert distance_rows(result.distances, result.predecessors, abcd_graph) == [
            ("A", 0.0, None),
            ("B", 4, "A"),
            ("C", 7, "B"),
            ("D", float("inf"), None),
        ]
