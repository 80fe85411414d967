"""Core data types: levels, flag sets and the Record."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Flag, IntEnum, auto
from typing import Any


class Level(IntEnum):
    """Record severity. Values match the persisted ``level`` field."""

    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> Level:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown level name {name!r}") from None


class Behavior(Flag):
    """Logger behavior flags."""

    FLUSH_ON_SAVE = auto()  # drop saved records from the buffer after each save
    SHOW_CANCELLED = auto()  # emit a notice when an interceptor cancels a record
    SAVE_ON_TEARDOWN = auto()  # run a final save() on close()


class Encoding(Flag):
    """Serialization flags applied when a record is written to the sink."""

    UNESCAPED_UNICODE = auto()
    PRESERVE_ZERO_FRACTION = auto()


DEFAULT_ENCODING = Encoding.UNESCAPED_UNICODE | Encoding.PRESERVE_ZERO_FRACTION

# 10M-18D-2026Y-03H-45MN-12S
_READABLE_FORMAT = "%mM-%dD-%YY-%IH-%MMN-%SS"


def readable_timestamp(timestamp: int) -> str:
    """Render *timestamp* in the fixed local-time format stored on each record."""
    return time.strftime(_READABLE_FORMAT, time.localtime(timestamp))


@dataclass(frozen=True)
class Record:
    """
    One structured log entry.
    Everything except ``saved`` is fixed at creation; ``saved`` flips to True once,
    through ``mark_saved()``, after the record has been written to the sink.
    """

    level: Level
    message: str
    timestamp: int
    readable_timestamp: str
    saved: bool = field(default=False, compare=False)

    def mark_saved(self) -> None:
        object.__setattr__(self, "saved", True)

    @classmethod
    def create(cls, level: Level, message: str, timestamp: int | None = None) -> Record:
        ts = int(time.time()) if timestamp is None else int(timestamp)
        return cls(
            level=level,
            message=message,
            timestamp=ts,
            readable_timestamp=readable_timestamp(ts),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "level": int(self.level),
            "message": self.message,
            "timestamp": self.timestamp,
            "readable_timestamp": self.readable_timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Record:
        """Rebuild a record read back from the sink. Such records are already saved."""
        ts = int(data["timestamp"])
        return cls(
            level=Level(int(data["level"])),
            message=str(data["message"]),
            timestamp=ts,
            readable_timestamp=str(data.get("readable_timestamp") or readable_timestamp(ts)),
            saved=True,
        )


def _strip_zero_fractions(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _strip_zero_fractions(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_strip_zero_fractions(v) for v in value]
    return value


def encode_record(record: Record, encoding: Encoding = DEFAULT_ENCODING) -> str:
    """Serialize *record* to a single JSON line (no trailing newline)."""
    payload: Any = record.as_dict()
    if Encoding.PRESERVE_ZERO_FRACTION not in encoding:
        payload = _strip_zero_fractions(payload)
    return json.dumps(payload, ensure_ascii=Encoding.UNESCAPED_UNICODE not in encoding)
