"""In-memory record buffer with a persisted-through cursor."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Callable

from greenlog.models import Record


class RecordBuffer:
    """
    Ordered store of accepted records.

    ``cursor`` counts the leading records already handed to persistence and never
    decreases. Compaction removes saved records from the front part of the buffer,
    so the next unpersisted position is ``cursor - compacted``.
    """

    def __init__(self) -> None:
        self._records: list[Record] = []
        self._cursor = 0
        self._compacted = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def compacted(self) -> int:
        """Number of records removed by compaction so far."""
        return self._compacted

    @property
    def position(self) -> int:
        """Index of the first record not yet handed to persistence."""
        return self._cursor - self._compacted

    def append(self, record: Record) -> None:
        self._records.append(record)

    def pending(self) -> list[Record]:
        return self._records[self.position :]

    def advance(self, count: int) -> None:
        if count < 0:
            raise ValueError("cursor cannot move backwards")
        self._cursor += min(count, len(self._records) - self.position)

    def compact(self) -> int:
        """Drop every saved record, keeping the rest in order. Returns how many were removed."""
        head = self._records[: self.position]
        kept = [r for r in head if not r.saved]
        removed = len(head) - len(kept)
        # Only records behind the cursor can be saved.
        self._records = kept + self._records[self.position :]
        self._compacted += removed
        return removed

    def slice(self, offset: int = 0, predicate: Callable[[Record], bool] | None = None) -> list[Record]:
        records = self._records[offset:]
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]
