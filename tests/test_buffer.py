"""Tests for RecordBuffer cursor and compaction bookkeeping."""

from __future__ import annotations

import pytest

from greenlog.buffer import RecordBuffer
from greenlog.models import Level, Record


def _filled(n: int) -> RecordBuffer:
    buf = RecordBuffer()
    for i in range(n):
        buf.append(Record.create(Level.INFO, f"m{i}", timestamp=i))
    return buf


class TestRecordBuffer:
    def test_pending_follows_cursor(self):
        buf = _filled(3)
        assert [r.message for r in buf.pending()] == ["m0", "m1", "m2"]
        buf.advance(2)
        assert buf.cursor == 2
        assert [r.message for r in buf.pending()] == ["m2"]

    def test_advance_is_capped(self):
        buf = _filled(2)
        buf.advance(10)
        assert buf.cursor == 2

    def test_advance_rejects_negative(self):
        with pytest.raises(ValueError):
            _filled(1).advance(-1)

    def test_compact_keeps_unsaved_order(self):
        buf = _filled(4)
        buf[0].mark_saved()
        buf[2].mark_saved()
        buf.advance(3)

        assert buf.compact() == 2
        assert [r.message for r in buf] == ["m1", "m3"]
        assert buf.cursor == 3
        assert buf.compacted == 2
        assert [r.message for r in buf.pending()] == ["m3"]

    def test_slice(self):
        buf = _filled(4)
        assert [r.message for r in buf.slice(1, lambda r: r.timestamp % 2 == 1)] == ["m1", "m3"]
