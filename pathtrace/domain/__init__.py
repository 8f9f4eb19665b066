"""Framework-agnostic shortest-path domain: cost models, frontier, engine, trace."""
