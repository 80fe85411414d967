"""Tests for structlog / stdlib logging setup and default diagnostics."""

from __future__ import annotations

import logging

import pytest
import structlog

from greenlog.core.logging import setup_logging
from greenlog.diagnostics import Diagnostics, StructlogDiagnostics
from greenlog.testing import RecordingDiagnostics


@pytest.fixture
def restore_logging():
    root, ours = logging.getLogger(), logging.getLogger("greenlog")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    ours.handlers.clear()
    ours.setLevel(logging.NOTSET)
    ours.propagate = True
    structlog.reset_defaults()


class TestSetupLogging:
    def test_env_level_and_json(self, monkeypatch, restore_logging):
        monkeypatch.setenv("GREENLOG_LOG_LEVEL", "warning")
        monkeypatch.setenv("GREENLOG_LOG_FORMAT", "json")
        setup_logging()
        ours = logging.getLogger("greenlog")
        assert ours.level == logging.WARNING
        assert len(ours.handlers) == 1
        assert ours.propagate is False

    def test_root_logger_untouched(self, restore_logging):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        setup_logging("debug", "json")
        assert root.handlers == handlers
        assert root.level == level

    def test_repeat_setup_keeps_single_handler(self, restore_logging):
        setup_logging("info")
        setup_logging("info", "bogus")
        assert len(logging.getLogger("greenlog").handlers) == 1

    def test_explicit_level_overrides_env(self, monkeypatch, restore_logging):
        monkeypatch.setenv("GREENLOG_LOG_LEVEL", "ERROR")
        setup_logging("debug")
        assert logging.getLogger("greenlog").level == logging.DEBUG


class TestDiagnostics:
    def test_implementations_satisfy_protocol(self):
        assert isinstance(StructlogDiagnostics(), Diagnostics)
        assert isinstance(RecordingDiagnostics(), Diagnostics)

    def test_structlog_diagnostics_forwards(self):
        with structlog.testing.capture_logs() as logs:
            diag = StructlogDiagnostics()
            diag.warning("logger.unknown_level", level=9)
            diag.notice("logger.record_cancelled", interceptor="veto", message="m")
        assert logs == [
            {"event": "logger.unknown_level", "level": 9, "log_level": "warning"},
            {
                "event": "logger.record_cancelled",
                "interceptor": "veto",
                "message": "m",
                "log_level": "info",
            },
        ]
