"""Projection of raw ``collStats`` output into display rows."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from bson import Binary, Decimal128, Int64, ObjectId, json_util

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class StatType(Enum):
    """Closed set of value variants a stats record may hold.

    Each member's value is the display name reported in ``StatEntry.type``.
    """

    NULL = "Null"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    LONG = "Long"
    DOUBLE = "Double"
    STRING = "String"
    DOCUMENT = "Document"
    ARRAY = "Array"
    DATE = "Date"
    OBJECT_ID = "ObjectId"
    BINARY = "Binary"
    DECIMAL128 = "Decimal128"
    OBJECT = "Object"


@dataclass(frozen=True, slots=True)
class StatEntry:
    """One statistics field rendered for display."""

    key: str
    value: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value, "Type": self.type}


def classify(value: Any) -> StatType:
    """Map a decoded BSON value onto its display variant."""
    # bool subclasses int and Int64 subclasses int, so order matters here.
    if value is None:
        return StatType.NULL
    if isinstance(value, bool):
        return StatType.BOOLEAN
    if isinstance(value, Int64):
        return StatType.LONG
    if isinstance(value, int):
        return StatType.INTEGER if _INT32_MIN <= value <= _INT32_MAX else StatType.LONG
    if isinstance(value, float):
        return StatType.DOUBLE
    if isinstance(value, str):
        return StatType.STRING
    if isinstance(value, Mapping):
        return StatType.DOCUMENT
    if isinstance(value, (list, tuple)):
        return StatType.ARRAY
    if isinstance(value, datetime):
        return StatType.DATE
    if isinstance(value, ObjectId):
        return StatType.OBJECT_ID
    if isinstance(value, (Binary, bytes)):
        return StatType.BINARY
    if isinstance(value, Decimal128):
        return StatType.DECIMAL128
    return StatType.OBJECT


def _render_json(value: Any) -> str:
    return json_util.dumps(value)


_RENDERERS: dict[StatType, Callable[[Any], str]] = {
    StatType.NULL: lambda value: "null",
    StatType.BOOLEAN: lambda value: "true" if value else "false",
    StatType.DOCUMENT: _render_json,
    StatType.ARRAY: _render_json,
    StatType.DATE: lambda value: value.isoformat(),
}


def render(value: Any, stat_type: StatType | None = None) -> str:
    """Return the canonical string form of ``value``."""
    resolved = classify(value) if stat_type is None else stat_type
    renderer = _RENDERERS.get(resolved, str)
    return renderer(value)


def project_stats(raw: Mapping[str, Any]) -> list[StatEntry]:
    """Convert a stats record into entries, keeping the record's key order.

    Encoding errors raised while rendering nested values are not caught.
    """
    entries: list[StatEntry] = []
    for key, value in raw.items():
        stat_type = classify(value)
        entries.append(
            StatEntry(key=str(key), value=render(value, stat_type), type=stat_type.value)
        )
    return entries
