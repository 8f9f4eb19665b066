"""
Problem serialization utilities for saving and loading search setups.
Supports grid and graph problems plus algorithm options.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

from ..app.config import GraphSpec, GridSpec, SearchConfig
from ..domain.errors import ConfigError
from ..domain.types import AlgoConfig

FORMAT_VERSION = "1.0"


def _algo_to_dict(algo: AlgoConfig) -> Dict[str, Any]:
    return {
        "algorithm": algo.algorithm,
        "allow_diagonal": algo.allow_diagonal,
        "corner_cutting": algo.corner_cutting,
        "heuristic": algo.heuristic,
    }


def config_to_dict(config: SearchConfig, name: str = "") -> Dict[str, Any]:
    """Convert a search configuration to a JSON-ready dictionary."""
    problem = config.problem
    data: Dict[str, Any] = {
        "version": FORMAT_VERSION,
        "name": name,
        "created_at": datetime.now().isoformat(),
        "algo": _algo_to_dict(config.algo),
    }
    if config.is_grid:
        data["grid"] = {
            "rows": problem.rows,
            "cols": problem.cols,
            "blocked": [list(cell) for cell in problem.blocked],
            "source": list(problem.source),
            "target": list(problem.target),
        }
    else:
        data["graph"] = {
            "nodes": list(problem.nodes),
            "edges": [list(edge) for edge in problem.edges],
            "source": problem.source,
            "target": problem.target,
        }
    return data


def config_from_dict(data: Dict[str, Any]) -> SearchConfig:
    """
    Create a search configuration from a dictionary.

    Raises:
        ConfigError: If the data is malformed or has an unsupported version.
    """
    if not isinstance(data, dict):
        raise ConfigError("Problem data must be a JSON object")
    version = data.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ConfigError(f"Unsupported problem format version {version!r}")

    try:
        algo = AlgoConfig(**data.get("algo", {}))
        if "grid" in data:
            grid = data["grid"]
            problem: Union[GridSpec, GraphSpec] = GridSpec(
                rows=grid["rows"],
                cols=grid["cols"],
                blocked=[tuple(cell) for cell in grid.get("blocked", [])],
                source=tuple(grid["source"]) if grid.get("source") is not None else None,
                target=tuple(grid["target"]) if grid.get("target") is not None else None,
            )
        elif "graph" in data:
            graph = data["graph"]
            problem = GraphSpec(
                nodes=list(graph["nodes"]),
                edges=[tuple(edge) for edge in graph["edges"]],
                source=graph.get("source"),
                target=graph.get("target"),
            )
        else:
            raise ConfigError("Problem data needs a 'grid' or 'graph' section")
    except ConfigError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Malformed problem data: {e}") from e

    return SearchConfig(problem=problem, algo=algo)


def save_problem(config: SearchConfig, filepath: Union[str, Path], name: str = "") -> Path:
    """
    Save a search configuration to a JSON file.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path = Path(filepath)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config_to_dict(config, name), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ConfigError(f"Cannot write problem file {path}: {e}") from e
    return path


def load_problem(filepath: Union[str, Path]) -> SearchConfig:
    """
    Load a search configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or is malformed.
    """
    path = Path(filepath)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Problem file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read problem file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Problem file {path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Problem file {path} is not valid JSON: {e}") from e
    return config_from_dict(data)
