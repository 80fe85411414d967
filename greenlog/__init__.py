"""GreenLog: in-memory structured logger with interceptors and append-only persistence."""

__version__ = "0.1.0"

from greenlog.diagnostics import Diagnostics, StructlogDiagnostics
from greenlog.exceptions import (
    ConfigurationError,
    DuplicateNameError,
    GreenLogError,
    RecordDecodeError,
    SinkPermissionError,
    SinkWriteError,
)
from greenlog.formatter import Formatter, default_formatter, validate_formatter
from greenlog.interceptors import Interceptor, InterceptorChain, KeywordFilter, LevelThreshold
from greenlog.logger import Logger
from greenlog.models import Behavior, Encoding, Level, Record, encode_record
from greenlog.search import load_records, search
from greenlog.sink import FileSink, Sink

__all__ = [
    "Behavior",
    "ConfigurationError",
    "Diagnostics",
    "DuplicateNameError",
    "Encoding",
    "FileSink",
    "Formatter",
    "GreenLogError",
    "Interceptor",
    "InterceptorChain",
    "KeywordFilter",
    "Level",
    "LevelThreshold",
    "Logger",
    "Record",
    "RecordDecodeError",
    "Sink",
    "SinkPermissionError",
    "SinkWriteError",
    "StructlogDiagnostics",
    "default_formatter",
    "encode_record",
    "load_records",
    "search",
    "validate_formatter",
]
