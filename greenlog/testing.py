"""Test doubles for greenlog — use in unit / integration tests.

Usage::

    from greenlog.testing import MemorySink, RecordingDiagnostics

    diag = RecordingDiagnostics()
    logger = Logger(write_frequency=1, diagnostics=diag)
    logger.set_sink(MemorySink())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from greenlog.sink import Sink


@dataclass
class DiagnosticEvent:
    kind: str  # "warning" | "notice"
    event: str
    fields: dict[str, Any] = field(default_factory=dict)


class RecordingDiagnostics:
    """Diagnostics that keep every event in memory instead of logging it."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def warning(self, event: str, **fields: Any) -> None:
        self.events.append(DiagnosticEvent("warning", event, fields))

    def notice(self, event: str, **fields: Any) -> None:
        self.events.append(DiagnosticEvent("notice", event, fields))

    def named(self, event: str) -> list[DiagnosticEvent]:
        return [e for e in self.events if e.event == event]


class MemorySink(Sink):
    """Sink that stores written lines in a list.

    Parameters
    ----------
    fail_on:
        Zero-based write attempts that raise ``OSError`` instead of storing the line.
    """

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.lines: list[str] = []
        self.attempts = 0
        self.closed = False
        self._fail_on = fail_on or set()

    @property
    def path(self) -> str | None:
        return None

    def write_line(self, line: str) -> None:
        attempt = self.attempts
        self.attempts += 1
        if attempt in self._fail_on:
            raise OSError(f"simulated write failure #{attempt}")
        self.lines.append(line)

    def close(self) -> None:
        self.closed = True
