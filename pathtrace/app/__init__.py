"""Session layer: configuration, control flow and tables around the engine."""
