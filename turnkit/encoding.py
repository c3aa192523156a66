"""Plain-JSON encoding of game objects and the fingerprints the replay log uses."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from collections.abc import Mapping
from enum import Enum
from functools import singledispatch
from pathlib import Path
from typing import Any


@singledispatch
def to_plain(value: Any) -> Any:
    """Reduce ``value`` to dicts, lists and scalars.

    Dataclasses are walked field by field; anything else must offer a
    ``to_dict()`` (move sets, results) or be registered below.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: to_plain(getattr(value, field.name)) for field in dataclasses.fields(value)}
    if callable(getattr(value, "to_dict", None)):
        return to_plain(value.to_dict())
    raise TypeError(f"Cannot encode {type(value).__name__} as JSON.")


@to_plain.register(type(None))
@to_plain.register(bool)
@to_plain.register(int)
@to_plain.register(float)
@to_plain.register(str)
def _scalar(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


@to_plain.register
def _enum(value: Enum) -> Any:
    return value.value


@to_plain.register
def _path(value: Path) -> str:
    return str(value)


@to_plain.register
def _mapping(value: Mapping) -> dict[str, Any]:
    # cell indices are int keys; JSON objects only have string keys
    return {str(key): to_plain(item) for key, item in value.items()}


@to_plain.register(list)
@to_plain.register(tuple)
def _sequence(value: Any) -> list[Any]:
    return [to_plain(item) for item in value]


@to_plain.register(set)
@to_plain.register(frozenset)
def _unordered(value: Any) -> list[Any]:
    return [to_plain(item) for item in sorted(value)]


def canonical_json(value: Any, *, indent: int | None = None) -> str:
    """Encode with sorted keys so equal objects give equal text."""
    return json.dumps(
        to_plain(value),
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":") if indent is None else None,
        indent=indent,
    )


def fingerprint(value: Any) -> str:
    """Short SHA-256 of the canonical encoding, enough to tell states apart in a log."""
    return hashlib.sha256(canonical_json(value).encode("utf-8")).hexdigest()[:16]
