"""Command-line entry point for the pathtrace engine."""

import argparse
import dataclasses
import logging
import sys
import time
from typing import List, Optional

from .app.config import DEFAULT_COLS, DEFAULT_ROWS, GridSpec, SearchConfig
from .app.session import SearchSession
from .app.tables import format_distance_rows, format_distance_table, format_predecessor_table
from .domain.errors import PathfindingError
from .domain.neighbors import GridCostModel
from .domain.types import AlgoConfig, Coord, format_node
from .utils.grid_factory import random_blocked_cells
from .utils.rng import SeededRNG
from .utils.serialization import load_problem, save_problem


def parse_coord(text: str) -> Coord:
    """Parse "r,c" into a (row, col) tuple."""
    try:
        row, col = text.split(",")
        return (int(row), int(col))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected 'row,col', got {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtrace",
        description="Run Dijkstra or A* over a grid or graph and print the result and trace",
    )
    parser.add_argument("--file", type=str, help="Load a saved grid/graph problem (JSON)")
    parser.add_argument("--save", type=str, help="Save the problem to a JSON file before running")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Grid rows")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Grid columns")
    parser.add_argument("--source", type=parse_coord, help="Source cell as row,col")
    parser.add_argument("--target", type=parse_coord, help="Target cell as row,col")
    parser.add_argument("--no-target", action="store_true", help="Explore everything reachable")
    parser.add_argument("--block", type=parse_coord, action="append", default=[],
                        help="Blocked cell as row,col (repeatable)")
    parser.add_argument("--density", type=float, default=0.0, help="Random wall density 0..1")
    parser.add_argument("--seed", type=int, help="Seed for random walls")
    parser.add_argument("--algorithm", choices=["dijkstra", "astar"], help="Search algorithm")
    parser.add_argument("--diagonal", action="store_true", help="Allow diagonal moves")
    parser.add_argument("--no-corner-cutting", action="store_true",
                        help="Forbid diagonals between two blocked cells")
    parser.add_argument("--tables", action="store_true", help="Print distance and predecessor tables")
    parser.add_argument("--trace", action="store_true", help="Print every recorded step")
    parser.add_argument("--animate", action="store_true", help="Print steps as they happen, paced by --speed")
    parser.add_argument("--speed", type=int, default=50, help="Animation speed 0 (slow) .. 100 (instant)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def build_config(args: argparse.Namespace) -> SearchConfig:
    """Turn parsed arguments into a search configuration."""
    if args.file:
        config = load_problem(args.file)
    else:
        spec = GridSpec(rows=args.rows, cols=args.cols, blocked=list(args.block),
                        source=args.source, target=args.target)
        if args.density:
            spec.blocked += random_blocked_cells(
                spec.rows, spec.cols, args.density, SeededRNG(args.seed),
                keep_clear=(spec.source, spec.target),
            )
        config = SearchConfig(problem=spec, algo=AlgoConfig())

    overrides = {}
    if args.algorithm:
        overrides["algorithm"] = args.algorithm
    if args.diagonal:
        overrides["allow_diagonal"] = True
    if args.no_corner_cutting:
        overrides["corner_cutting"] = False
    if overrides:
        config.algo = dataclasses.replace(config.algo, **overrides)
    if args.no_target:
        config.problem.target = None
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        if args.save:
            print(f"Saved problem to {save_problem(config, args.save)}")

        session = SearchSession(config, speed=args.speed)
        if args.animate:
            session.start()
            for record in session.iter_steps():
                print(f"[{record.index}] {record.description}")
                time.sleep(session.delay_ms / 1000)
            result = session.result()
        else:
            result = session.run()
    except PathfindingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.trace and not args.animate:
        for record in result.trace:
            print(f"[{record.index}] {record.description}")

    print(session.summary())
    if result.path:
        print("Path: " + " -> ".join(format_node(node) for node in result.path))

    if args.tables:
        cost_model = session.cost_model
        if isinstance(cost_model, GridCostModel):
            print("\nDistances:")
            print(format_distance_table(result.distances, cost_model))
            print("\nPredecessors:")
            print(format_predecessor_table(result.predecessors, cost_model))
        else:
            print()
            print(format_distance_rows(result.distances, result.predecessors, cost_model))

    return 0


if __name__ == "__main__":
    sys.exit(main())
