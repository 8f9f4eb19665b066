"""Append-only, replayable log of engine step records."""

from typing import Iterator, List, Optional, Sequence, Union, overload

from .errors import TraceSealed
from .types import NodeId, StepRecord


class TraceRecorder(Sequence[StepRecord]):
    """
    Zero-indexed log of StepRecords produced during one run.

    Records are appended by the engine only. Once the run reaches a
    terminal state the recorder is sealed and further appends fail; the
    next initialize() clears it.
    """

    def __init__(self):
        self._records: List[StepRecord] = []
        self._sealed = False

    def __len__(self) -> int:
        return len(self._records)

    @overload
    def __getitem__(self, index: int) -> StepRecord: ...

    @overload
    def __getitem__(self, index: slice) -> List[StepRecord]: ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return list(self._records[index])
        return self._records[index]

    def __iter__(self) -> Iterator[StepRecord]:
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"TraceRecorder(records={len(self._records)}, sealed={self._sealed})"

    @property
    def sealed(self) -> bool:
        """Whether the run has finished and the log is frozen."""
        return self._sealed

    @property
    def next_index(self) -> int:
        """Index the next appended record will get."""
        return len(self._records)

    @property
    def last(self) -> Optional[StepRecord]:
        """Most recent record, or None if empty."""
        return self._records[-1] if self._records else None

    def append(self, record: StepRecord) -> None:
        """Append a record; its index must match its position."""
        if self._sealed:
            raise TraceSealed(f"Cannot append step {record.index}: trace is sealed")
        if record.index != len(self._records):
            raise ValueError(
                f"Record index {record.index} does not match position {len(self._records)}"
            )
        self._records.append(record)

    def seal(self) -> None:
        """Freeze the log once the run is terminal."""
        self._sealed = True

    def clear(self) -> None:
        """Discard every record and unseal."""
        self._records = []
        self._sealed = False

    def records_for(self, node: NodeId) -> List[StepRecord]:
        """Records whose current or relaxed node is node, in step order."""
        return [
            record for record in self._records
            if record.current_node == node or record.relaxed_neighbor == node
        ]

    def descriptions(self) -> List[str]:
        """Human-readable description of every step."""
        return [record.description for record in self._records]
