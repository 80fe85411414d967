"""Append-only sinks for persisted records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO


class Sink(ABC):
    """Line-oriented append-only destination."""

    @property
    @abstractmethod
    def path(self) -> str | None:
        """Location of the sink, if it has one."""
        ...

    @abstractmethod
    def write_line(self, line: str) -> None:
        """Append *line* followed by a newline. Raises OSError on failure."""
        ...

    def close(self) -> None:
        """Release the underlying resource."""


class FileSink(Sink):
    """Local file sink opened once in append mode."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh: IO[str] | None = open(self._path, "a", encoding="utf-8")

    @property
    def path(self) -> str:
        return str(self._path)

    @property
    def closed(self) -> bool:
        return self._fh is None

    def write_line(self, line: str) -> None:
        if self._fh is None:
            raise OSError(f"sink {self._path} is closed")
        self._fh.write(line + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
