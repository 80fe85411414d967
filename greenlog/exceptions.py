"""Custom exceptions for GreenLog."""


class GreenLogError(Exception):
    """Base exception for all GreenLog errors."""


class ConfigurationError(GreenLogError):
    """Raised when a logger is configured with an invalid formatter, flag or handler."""


class DuplicateNameError(ConfigurationError):
    """Raised when an interceptor name is already registered (case-insensitive)."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Could not register {name} because it is already registered.")


class SinkPermissionError(GreenLogError, PermissionError):
    """Raised when the sink path exists but cannot be written to."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Incompatible permissions found in file {path}, try to reset them.")


class SinkWriteError(GreenLogError):
    """Raised when appending a record to the sink fails."""

    def __init__(self, position: int, path: str | None = None):
        self.position = position
        self.path = path
        super().__init__(f"Failed to persist record at position {position} to {path}")


class RecordDecodeError(GreenLogError):
    """Raised when a persisted log line cannot be turned back into a record."""

    def __init__(self, path: str, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: {reason}")
