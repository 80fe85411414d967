"""Diagnostics channel for recoverable warnings and notices."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import structlog


@runtime_checkable
class Diagnostics(Protocol):
    """Receives recoverable conditions the logger reports instead of raising."""

    def warning(self, event: str, **fields: Any) -> None: ...

    def notice(self, event: str, **fields: Any) -> None: ...


class StructlogDiagnostics:
    """Default diagnostics: forward to a structlog logger."""

    def __init__(self, logger_name: str = "greenlog") -> None:
        self._log = structlog.get_logger(logger_name)

    def warning(self, event: str, **fields: Any) -> None:
        self._log.warning(event, **fields)

    def notice(self, event: str, **fields: Any) -> None:
        self._log.info(event, **fields)
