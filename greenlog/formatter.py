"""Formatter contract — a single ``Record -> str`` render function."""

from __future__ import annotations

import inspect
import time
import typing
from typing import Callable

from greenlog.exceptions import ConfigurationError
from greenlog.models import Record

Formatter = Callable[[Record], str]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def default_formatter(record: Record) -> str:
    """``[hour: 03 45:12, level: Info] -> message`` (UTC, 12-hour clock)."""
    hour = time.strftime("%I %M:%S", time.gmtime(record.timestamp))
    return f"[hour: {hour}, level: {record.level.label}] -> {record.message}"


def _return_annotation(func: Callable[..., object]) -> object:
    target = func if inspect.isroutine(func) else getattr(func, "__call__", func)
    try:
        hints = typing.get_type_hints(target)
    except Exception:
        # Unresolvable forward references; fall back to the raw annotation.
        return inspect.signature(func).return_annotation
    return hints.get("return", inspect.Signature.empty)


def validate_formatter(formatter: object) -> None:
    """Check that *formatter* takes exactly one positional argument and is declared to return ``str``.

    Raises:
        ConfigurationError: if the callable does not satisfy the contract.
    """
    if not callable(formatter):
        raise ConfigurationError(f"Formatter must be callable, got {type(formatter).__name__}.")

    try:
        sig = inspect.signature(formatter)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Formatter signature cannot be inspected: {exc}") from exc

    params = list(sig.parameters.values())
    if len(params) != 1 or params[0].kind not in _POSITIONAL:
        raise ConfigurationError("Formatter must have only one parameter.")

    ret = _return_annotation(formatter)
    if ret is inspect.Signature.empty:
        raise ConfigurationError("Formatter must return a string, no return type declared.")
    if ret is not str and ret != "str":
        name = getattr(ret, "__name__", str(ret))
        raise ConfigurationError(f"Formatter must return a string not {name}.")
