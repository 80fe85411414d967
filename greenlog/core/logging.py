"""Diagnostics output for GreenLog — structlog rendered through a stdlib handler.

Only the ``greenlog`` logger is configured; the host application's root logger,
its handlers and its level are left untouched.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

LOGGER_NAME = "greenlog"
_FORMATS = ("console", "json")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Route ``greenlog`` diagnostics (unknown levels, refused sinks, cancelled
    records, failed writes) to stderr.

    Falls back to environment variables:
        GREENLOG_LOG_LEVEL  — level for the ``greenlog`` logger (default: INFO)
        GREENLOG_LOG_FORMAT — console | json (default: console)
    """
    log_level = (level or os.environ.get("GREENLOG_LOG_LEVEL", "INFO")).upper()
    log_format = (log_format or os.environ.get("GREENLOG_LOG_FORMAT", "console")).lower()
    if log_format not in _FORMATS:
        log_format = "console"

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *pre_chain]
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "greenlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "greenlog": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "greenlog",
                },
            },
            "loggers": {
                LOGGER_NAME: {
                    "handlers": ["greenlog"],
                    "level": log_level,
                    "propagate": False,
                },
            },
        }
    )
