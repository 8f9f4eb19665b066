"""Lazy-deletion priority frontier for Dijkstra and A*."""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import EmptyFrontier
from .types import NodeId


@dataclass(order=True, frozen=True)
class FrontierEntry:
    """
    Entry in the frontier.

    Comparison order:
    1. priority (lower is better)
    2. sequence (insertion order, so the first-found entry wins a tie)
    """
    priority: float
    sequence: int
    node: NodeId = field(default=None, compare=False)  # nodes need not be orderable


class PriorityFrontier:
    """
    Binary-heap min-priority queue over (node, priority) entries.

    Duplicate entries for the same node are allowed and expected: there is
    no decrease-key. Consumers discard entries for already-finalized nodes
    after extraction.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, NodeId]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        """Check if the frontier has no entries, stale ones included."""
        return not self._heap

    def insert(self, node: NodeId, priority: float) -> None:
        """Add an entry; an older entry for the same node is left in place."""
        heapq.heappush(self._heap, (priority, next(self._counter), node))

    def extract_min(self) -> FrontierEntry:
        """
        Remove and return the entry with the smallest priority.

        Raises:
            EmptyFrontier: If no entries remain.
        """
        if not self._heap:
            raise EmptyFrontier("Frontier is empty")
        priority, sequence, node = heapq.heappop(self._heap)
        return FrontierEntry(priority, sequence, node)

    def peek(self) -> Optional[FrontierEntry]:
        """Look at the next entry without removing it."""
        if not self._heap:
            return None
        priority, sequence, node = self._heap[0]
        return FrontierEntry(priority, sequence, node)

    def clear(self) -> None:
        """Remove all entries."""
        self._heap.clear()
        self._counter = itertools.count()

    def snapshot(self) -> List[FrontierEntry]:
        """
        All entries in extraction order, without removing them.
        Useful for visualization.
        """
        return [FrontierEntry(p, s, n) for p, s, n in sorted(self._heap, key=lambda e: (e[0], e[1]))]
