"""Optional-typed accessors over parsed JSON documents.

Origin sites return loosely shaped JSON where any level may be missing or of
an unexpected type. These helpers answer ``None`` instead of raising so that
callers can treat "missing" and "empty" the same way.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

Key = Union[str, int]


def get_path(doc: Any, *keys: Key) -> Any:
    """Walk ``keys`` through nested mappings and lists, or return ``None``."""
    current = doc
    for key in keys:
        if isinstance(key, int) and not isinstance(key, bool):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return None
            if key < 0 or key >= len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, Mapping) or key not in current:
                return None
            current = current[key]
    return current


def get_str(doc: Any, *keys: Key) -> Optional[str]:
    """Return a non-empty string found at ``keys``."""
    value = get_path(doc, *keys)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_positive_int(doc: Any, *keys: Key) -> Optional[int]:
    """Return a positive integer found at ``keys``; digit strings count."""
    value = get_path(doc, *keys)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
        return number if number > 0 else None
    return None


def first_record(doc: Any) -> Optional[Mapping[str, Any]]:
    """Return the first element of a non-empty list when it is an object."""
    if not isinstance(doc, list) or not doc:
        return None
    record = doc[0]
    if not isinstance(record, Mapping):
        return None
    return record
