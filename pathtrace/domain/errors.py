"""Exception hierarchy for the shortest-path engine."""


class PathfindingError(Exception):
    """Base class for all pathtrace errors."""


class InvalidCost(PathfindingError, ValueError):
    """An edge or step cost is not strictly positive and finite."""

    def __init__(self, cost, edge=None):
        self.cost = cost
        self.edge = edge
        where = f" on edge {edge[0]!r} -> {edge[1]!r}" if edge else ""
        super().__init__(f"Edge cost must be positive, got {cost!r}{where}")


class UnknownNode(PathfindingError, KeyError):
    """A node id outside the configured node set was referenced."""

    def __init__(self, node, reason: str = "not in the configured node set"):
        self.node = node
        super().__init__(f"Unknown node {node!r}: {reason}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return self.args[0]


class EmptyFrontier(PathfindingError):
    """Raised by the frontier when no entries remain. The engine treats it as exhaustion."""


class CycleDetected(PathfindingError):
    """The predecessor map contains a cycle; an internal invariant was violated."""

    def __init__(self, target, limit: int):
        self.target = target
        self.limit = limit
        super().__init__(
            f"Predecessor walk from {target!r} exceeded {limit} nodes; map is cyclic"
        )


class InvalidTransition(PathfindingError):
    """A state machine was asked to make a transition it does not allow."""

    def __init__(self, from_state, to_state):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition {from_state.name} -> {to_state.name}")


class TraceSealed(PathfindingError):
    """A step record was appended after the run reached a terminal state."""


class ConfigError(PathfindingError, ValueError):
    """Session, CLI or file configuration is malformed."""
