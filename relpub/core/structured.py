"""Helpers for narrowing untyped JSON/TOML data.

Used at the boundaries where manifests and release.toml are ingested.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


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


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def as_str_tuple(obj: object) -> tuple[str, ...] | None:
    """Return obj as a tuple of strings if it is a list of strings."""
    items = as_obj_list(obj)
    if items is None:
        return None
    if not all(isinstance(item, str) for item in items):
        return None
    return tuple(cast(list[str], items))


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped. None if missing, not a str, or blank."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    value = table.get(key)
    # bool is an int subclass; TOML `true` is not a number here.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))
