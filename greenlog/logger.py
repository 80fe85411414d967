"""Logger — record ingestion, interceptor chain, buffering and persistence."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable

import structlog

from greenlog.buffer import RecordBuffer
from greenlog.diagnostics import Diagnostics, StructlogDiagnostics
from greenlog.exceptions import ConfigurationError, SinkPermissionError, SinkWriteError
from greenlog.formatter import Formatter, default_formatter, validate_formatter
from greenlog.interceptors import Interceptor, InterceptorChain
from greenlog.models import DEFAULT_ENCODING, Behavior, Encoding, Level, Record, encode_record
from greenlog.search import Entry
from greenlog.search import search as _search
from greenlog.sink import FileSink, Sink

if TYPE_CHECKING:
    from greenlog.core.config import LoggerSettings

log = structlog.get_logger("greenlog")


class Logger:
    """
    Minimal in-memory logging engine.

    Accepted records are buffered in arrival order. With ``write_frequency > 0``
    every Nth accepted record triggers ``save()``, which appends unsaved records to
    the sink. Call ``close()`` (or use the logger as a context manager) to release
    the sink; with ``Behavior.SAVE_ON_TEARDOWN`` a final save runs first.

    Not thread-safe: callers must serialize access.
    """

    def __init__(
        self,
        sink_path: str | Path | None = None,
        write_frequency: int = 0,
        formatter: Formatter | None = None,
        flags: Behavior = Behavior(0),
        *,
        encoding: Encoding = DEFAULT_ENCODING,
        diagnostics: Diagnostics | None = None,
        skip_failed_writes: bool = False,
    ) -> None:
        self._formatter: Formatter = default_formatter
        if formatter is not None:
            self.set_formatter(formatter)

        self._frequency = max(int(write_frequency), 0)
        self._flags = flags
        self._encoding = encoding
        self._diagnostics: Diagnostics = diagnostics or StructlogDiagnostics()
        self._skip_failed_writes = skip_failed_writes

        self._buffer = RecordBuffer()
        self._chain = InterceptorChain()
        self._sink: Sink | None = None
        self._counter = 1
        self._closed = False

        self.set_log_file(sink_path)

    @classmethod
    def from_settings(
        cls,
        settings: LoggerSettings,
        *,
        formatter: Formatter | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> Logger:
        return cls(
            sink_path=settings.sink_path,
            write_frequency=settings.write_frequency,
            formatter=formatter,
            flags=settings.behavior_flags(),
            diagnostics=diagnostics,
            skip_failed_writes=settings.skip_failed_writes,
        )

    # ── formatter ────────────────────────────────────────────────────────

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def set_formatter(self, formatter: Formatter) -> None:
        validate_formatter(formatter)
        self._formatter = formatter

    def format(self, record: Record) -> str:
        return self._formatter(record)

    # ── flags ────────────────────────────────────────────────────────────

    @property
    def flags(self) -> Behavior:
        return self._flags

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    def has_flag(self, flag: Behavior | Encoding) -> bool:
        if isinstance(flag, Behavior):
            return flag in self._flags
        if isinstance(flag, Encoding):
            return flag in self._encoding
        raise ConfigurationError(f"Unknown flag type {type(flag).__name__}.")

    def add_flag(self, flag: Behavior | Encoding) -> None:
        if isinstance(flag, Behavior):
            self._flags |= flag
        elif isinstance(flag, Encoding):
            self._encoding |= flag
        else:
            raise ConfigurationError(f"Unknown flag type {type(flag).__name__}.")

    def remove_flag(self, flag: Behavior | Encoding) -> None:
        if isinstance(flag, Behavior):
            self._flags &= ~flag
        elif isinstance(flag, Encoding):
            self._encoding &= ~flag
        else:
            raise ConfigurationError(f"Unknown flag type {type(flag).__name__}.")

    # ── sink ─────────────────────────────────────────────────────────────

    @property
    def write_frequency(self) -> int:
        return self._frequency

    def is_writeable(self) -> bool:
        return self._frequency > 0

    def has_log_file(self) -> bool:
        return self._sink is not None

    @property
    def sink(self) -> Sink | None:
        return self._sink

    def set_log_file(self, path: str | Path | None = None) -> bool:
        """Attach an append-mode file sink at *path*, or detach with None/"".

        Returns False (with a warning) when the logger would never flush: not
        writeable and without ``SAVE_ON_TEARDOWN``.

        Raises:
            SinkPermissionError: if *path* exists but is not writable.
        """
        if path is None or str(path) == "":
            self._detach()
            return True

        if not self.is_writeable() and Behavior.SAVE_ON_TEARDOWN not in self._flags:
            self._diagnostics.warning("logger.sink_refused", path=str(path))
            return False

        if os.path.exists(path) and not os.access(path, os.W_OK):
            raise SinkPermissionError(str(path))

        return self.set_sink(FileSink(path))

    def set_sink(self, sink: Sink) -> bool:
        """Attach an already-open sink, replacing (and closing) any previous one."""
        self._detach()
        self._sink = sink
        log.debug("logger.sink_attached", path=sink.path)
        return True

    def _detach(self) -> None:
        if self._sink is not None:
            self._sink.close()
            self._sink = None

    # ── persistence ──────────────────────────────────────────────────────

    @property
    def last_record_position(self) -> int:
        return self._buffer.cursor

    def save(self, limit: int = 0) -> int:
        """Write records not yet handed to the sink; return how many were written.

        ``limit`` caps the number of records processed (0 = all).

        Raises:
            SinkWriteError: if the sink fails (I/O or encoding error) and
                ``skip_failed_writes`` is off.
                Records written before the failure keep their saved marker.
                An I/O failure leaves the cursor on the failed record so the next
                save retries it; an unencodable record is passed over unsaved.
        """
        if self._sink is None:
            return 0

        processed = 0
        written = 0
        start = self._buffer.position
        try:
            for record in self._buffer.pending():
                try:
                    self._sink.write_line(encode_record(record, self._encoding))
                except (OSError, UnicodeEncodeError) as exc:
                    position = start + processed
                    if not self._skip_failed_writes:
                        if isinstance(exc, UnicodeEncodeError):
                            # Never encodable; leave it unsaved behind the cursor.
                            processed += 1
                        raise SinkWriteError(position, self._sink.path) from exc
                    self._diagnostics.warning(
                        "logger.write_failed", position=position, error=str(exc)
                    )
                else:
                    record.mark_saved()
                    written += 1

                processed += 1
                if processed == limit:
                    break
        finally:
            self._buffer.advance(processed)
            self.flush_records()

        log.debug("logger.saved", written=written, processed=processed, cursor=self._buffer.cursor)
        return written

    def flush_records(self) -> bool:
        """Drop saved records from the buffer when ``FLUSH_ON_SAVE`` is set."""
        if Behavior.FLUSH_ON_SAVE not in self._flags:
            return False
        removed = self._buffer.compact()
        if removed:
            log.debug("logger.compacted", removed=removed)
        return True

    # ── interceptors ─────────────────────────────────────────────────────

    def register_interceptor(self, interceptor: Interceptor) -> None:
        self._chain.register(interceptor)

    def unregister_interceptor(self, name: str) -> bool:
        return self._chain.unregister(name)

    @property
    def interceptors(self) -> list[str]:
        return self._chain.names()

    # ── ingestion ────────────────────────────────────────────────────────

    def _coerce_level(self, level: Any) -> Level:
        try:
            return Level(level)
        except (TypeError, ValueError):
            self._diagnostics.warning("logger.unknown_level", level=level)
            return Level.WARNING

    def add_record(
        self,
        message: str,
        parameters: Sequence[Any] = (),
        level: Level | int = Level.INFO,
    ) -> Record | None:
        """Build, filter and buffer one record.

        Returns the stored record, or None if the message was blank or an
        interceptor cancelled it. A template/parameter mismatch propagates as
        TypeError or ValueError.
        """
        if not message.strip():
            return None

        lvl = self._coerce_level(level)
        text = message if not parameters else message % tuple(parameters)
        record = Record.create(lvl, text)

        cancelled_by = self._chain.run(record, self._formatter)
        if cancelled_by is not None:
            if Behavior.SHOW_CANCELLED in self._flags:
                self._diagnostics.notice(
                    "logger.record_cancelled", interceptor=cancelled_by.name, message=text
                )
            return None

        self._buffer.append(record)

        if self.is_writeable():
            tick = self._counter
            self._counter += 1
            if tick % self._frequency == 0:
                self.save()

        return record

    def info(self, message: str, parameters: Sequence[Any] = ()) -> Record | None:
        return self.add_record(message, parameters, Level.INFO)

    def warning(self, message: str, parameters: Sequence[Any] = ()) -> Record | None:
        return self.add_record(message, parameters, Level.WARNING)

    def error(self, message: str, parameters: Sequence[Any] = ()) -> Record | None:
        return self.add_record(message, parameters, Level.ERROR)

    # ── query ────────────────────────────────────────────────────────────

    def get_records(
        self, offset: int = 0, predicate: Callable[[Record], bool] | None = None
    ) -> list[Record]:
        return self._buffer.slice(offset, predicate)

    def search(
        self,
        terms: Iterable[Any],
        fields: Iterable[str],
        records: Iterable[Entry] | None = None,
        limit: int = 0,
    ) -> dict[str, list[Entry]]:
        return _search(terms, fields, self._buffer if records is None else records, limit)

    def __len__(self) -> int:
        return len(self._buffer)

    # ── teardown ─────────────────────────────────────────────────────────

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Run the teardown save if configured, then release the sink. Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            if Behavior.SAVE_ON_TEARDOWN in self._flags:
                self.save()
        finally:
            self._detach()

    def __enter__(self) -> Logger:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
