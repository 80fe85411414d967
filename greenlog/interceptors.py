"""Interceptor chain — named, ordered handlers that may cancel a record."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

import structlog

from greenlog.exceptions import ConfigurationError, DuplicateNameError
from greenlog.formatter import Formatter
from greenlog.models import Level, Record

log = structlog.get_logger("greenlog")


@runtime_checkable
class Interceptor(Protocol):
    """Interface that every interceptor must satisfy.

    ``process`` returns True to cancel the record, False to let it through.
    """

    @property
    def name(self) -> str: ...

    def process(self, record: Record, formatter: Formatter) -> bool: ...


class InterceptorChain:
    """Interceptor registration table, evaluated in registration order."""

    def __init__(self) -> None:
        self._interceptors: dict[str, Interceptor] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.upper()

    def register(self, interceptor: Interceptor) -> None:
        name = interceptor.name
        if not name:
            raise ConfigurationError("Interceptor name must not be empty.")
        key = self._key(name)
        if key in self._interceptors:
            raise DuplicateNameError(name)
        self._interceptors[key] = interceptor
        log.debug("interceptor.registered", interceptor=name)

    def unregister(self, name: str) -> bool:
        self._interceptors.pop(self._key(name), None)
        return True

    def get(self, name: str) -> Interceptor | None:
        return self._interceptors.get(self._key(name))

    def names(self) -> list[str]:
        return [i.name for i in self._interceptors.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._interceptors

    def __len__(self) -> int:
        return len(self._interceptors)

    def run(self, record: Record, formatter: Formatter) -> Interceptor | None:
        """Run the chain; return the first interceptor that cancels, or None."""
        for interceptor in self._interceptors.values():
            if interceptor.process(record, formatter):
                return interceptor
        return None


class LevelThreshold:
    """Cancel records below a minimum level."""

    def __init__(self, minimum: Level, name: str = "level-threshold") -> None:
        self.minimum = minimum
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def process(self, record: Record, formatter: Formatter) -> bool:
        return record.level < self.minimum


class KeywordFilter:
    """Cancel records whose message contains any keyword (case-insensitive)."""

    def __init__(self, name: str, keywords: Iterable[str]) -> None:
        self._name = name
        self.keywords = [k.lower() for k in keywords if k.strip()]

    @property
    def name(self) -> str:
        return self._name

    def process(self, record: Record, formatter: Formatter) -> bool:
        message = record.message.lower()
        return any(k in message for k in self.keywords)
