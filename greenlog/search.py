"""Linear multi-term / multi-field substring search over records."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Union

from greenlog.exceptions import RecordDecodeError
from greenlog.models import Record

Entry = Union[Record, Mapping[str, Any]]


def normalize_terms(terms: Iterable[Any]) -> list[str]:
    """Trim, drop empties and de-duplicate, keeping first-seen order."""
    seen: dict[str, None] = {}
    for term in terms:
        t = str(term).strip()
        if t:
            seen.setdefault(t, None)
    return list(seen)


def _fields_of(entry: object) -> Mapping[str, Any] | None:
    if isinstance(entry, Record):
        return entry.as_dict()
    if isinstance(entry, Mapping) and entry:
        return entry
    return None


def search(
    terms: Iterable[Any],
    fields: Iterable[str],
    records: Iterable[Entry],
    limit: int = 0,
) -> dict[str, list[Entry]]:
    """Case-insensitive substring search of *terms* across *fields* of *records*.

    Each match appends the whole entry under the matching term, so an entry can show
    up under several terms and more than once under one term when several fields
    match. ``limit`` caps the number of entries considered (0 = no cap).
    """
    normalized = normalize_terms(terms)
    if not normalized:
        return {}

    lowered = [(t, t.lower()) for t in normalized]
    field_names = list(fields)
    found: dict[str, list[Entry]] = {}
    considered = 0

    for entry in records:
        values = _fields_of(entry)
        if values is None:
            continue

        for field_name in field_names:
            if field_name not in values or values[field_name] is None:
                continue
            haystack = str(values[field_name]).lower()
            for term, needle in lowered:
                if needle in haystack:
                    found.setdefault(term, []).append(entry)

        considered += 1
        if considered == limit:
            break

    return found


def load_records(path: str | Path) -> list[Record]:
    """Read a persisted JSON-lines log back into records.

    Raises:
        RecordDecodeError: if a non-blank line is not a valid record.
    """
    records: list[Record] = []
    with open(path, encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                records.append(Record.from_dict(json.loads(line)))
            except (ValueError, KeyError, TypeError) as exc:
                raise RecordDecodeError(str(path), lineno, str(exc)) from exc
    return records
