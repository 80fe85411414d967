"""Shared pytest fixtures for GreenLog tests."""

import pytest

from greenlog.logger import Logger
from greenlog.testing import MemorySink, RecordingDiagnostics


@pytest.fixture
def diag():
    return RecordingDiagnostics()


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def make_logger(diag):
    """Build a Logger wired to the recording diagnostics; closed after the test."""
    created: list[Logger] = []

    def _make(**kwargs) -> Logger:
        kwargs.setdefault("diagnostics", diag)
        logger = Logger(**kwargs)
        created.append(logger)
        return logger

    yield _make
    for logger in created:
        logger.close()
