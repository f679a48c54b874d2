"""Typed accessors for parsed TOML tables.

Values read from ``rpl.toml`` are untyped; these helpers validate them at the
boundary and hand back ``None`` for anything missing or of the wrong type.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table from a mapping."""
    return as_str_dict(table.get(key))


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a stripped, non-empty string value."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return None


def get_command(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Get a command line given as a non-empty array of strings.

    Returns None if missing, empty, or if any element is not a string.
    """
    value = table.get(key)
    if not isinstance(value, list) or not value:
        return None
    items = cast(list[object], value)
    if not all(isinstance(item, str) and item for item in items):
        return None
    return tuple(cast(list[str], items))
