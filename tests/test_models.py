"""Tests for levels, records and line encoding."""

from __future__ import annotations

import dataclasses
import json
import re

import pytest

from greenlog.models import (
    Encoding,
    Level,
    Record,
    _strip_zero_fractions,
    encode_record,
    readable_timestamp,
)

_READABLE_RE = re.compile(r"^\d{2}M-\d{2}D-\d{4}Y-\d{2}H-\d{2}MN-\d{2}S$")


class TestLevel:
    def test_labels(self):
        assert [lvl.label for lvl in Level] == ["Info", "Warning", "Error"]

    def test_values_match_persisted_codes(self):
        assert (Level.INFO, Level.WARNING, Level.ERROR) == (1, 2, 3)

    def test_from_name_case_insensitive(self):
        assert Level.from_name(" error ") is Level.ERROR

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            Level.from_name("fatal")


class TestRecord:
    def test_create_stamps_timestamps(self):
        record = Record.create(Level.INFO, "boot", timestamp=1_700_000_000)
        assert record.timestamp == 1_700_000_000
        assert _READABLE_RE.match(record.readable_timestamp)
        assert record.readable_timestamp == readable_timestamp(1_700_000_000)
        assert record.saved is False

    def test_create_uses_current_time(self):
        record = Record.create(Level.INFO, "now")
        assert isinstance(record.timestamp, int)
        assert record.timestamp > 0

    def test_as_dict_excludes_saved(self):
        record = Record.create(Level.ERROR, "boom", timestamp=10)
        record.mark_saved()
        data = record.as_dict()
        assert data == {
            "level": 3,
            "message": "boom",
            "timestamp": 10,
            "readable_timestamp": readable_timestamp(10),
        }
        assert type(data["level"]) is int

    def test_fields_are_immutable(self):
        record = Record.create(Level.INFO, "boot", timestamp=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.message = "rewritten"
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.level = Level.ERROR
        assert (record.level, record.message) == (Level.INFO, "boot")

    def test_mark_saved(self):
        record = Record.create(Level.INFO, "boot", timestamp=1)
        record.mark_saved()
        record.mark_saved()
        assert record.saved is True

    def test_from_dict_marks_saved(self):
        record = Record.from_dict({"level": 2, "message": "m", "timestamp": 5})
        assert record.level is Level.WARNING
        assert record.saved is True
        assert record.readable_timestamp == readable_timestamp(5)


class TestEncodeRecord:
    def test_one_line_json(self):
        record = Record.create(Level.INFO, "line\nbreak", timestamp=1)
        line = encode_record(record)
        assert "\n" not in line
        assert json.loads(line)["message"] == "line\nbreak"

    def test_unicode_unescaped_by_default(self):
        line = encode_record(Record.create(Level.INFO, "café", timestamp=1))
        assert "café" in line

    def test_unicode_escaped_without_flag(self):
        record = Record.create(Level.INFO, "café", timestamp=1)
        line = encode_record(record, Encoding.PRESERVE_ZERO_FRACTION)
        assert "caf\\u00e9" in line

    def test_strip_zero_fractions(self):
        assert _strip_zero_fractions({"a": 1.0, "b": [2.0, 2.5]}) == {"a": 1, "b": [2, 2.5]}

    def test_round_trip(self):
        record = Record.create(Level.ERROR, "disk full", timestamp=1_700_000_123)
        back = Record.from_dict(json.loads(encode_record(record)))
        assert (back.level, back.message, back.timestamp) == (
            record.level,
            record.message,
            record.timestamp,
        )
