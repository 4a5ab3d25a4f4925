from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .format_spec import FormatSpec, parse_format_spec

"""Field descriptor model.

A field descriptor identifies one logical column of a query result,
optionally wrapped by an aggregate function (``SUM(amount)``). Stored chart
configurations carry descriptors as camelCase mappings; ``as_field`` accepts
either form so that every consumer can work with ``FieldDescriptor``.
"""

__all__ = [
    "FieldDescriptor",
    "as_field",
    "field_key",
    "normalize_aggregate",
]

# Aggregate marker used by stored configs for "no aggregation"
NONE_AGGREGATE = "NONE"


def normalize_aggregate(aggregate: Any) -> str:
    """Return the aggregate name upper-cased, or '' when there is none."""
    if aggregate is None:
        return ""
    text = str(aggregate).strip()
    if text.upper() == NONE_AGGREGATE:
        return ""
    return text.upper()


def field_key(col_name: str | None, aggregate: str | None) -> str:
    """Compose the key of a column as it appears in a result row."""
    col = "" if col_name is None else str(col_name)
    if not aggregate or str(aggregate).upper() == NONE_AGGREGATE:
        return col
    return f"{aggregate}({col})"


@dataclass(frozen=True)
class FieldDescriptor:
    """Logical column reference with optional aggregate, alias and format."""
    col_name: str | None = None
    aggregate: str | None = None
    type: str | None = None
    category: str | None = None
    uid: str | None = None
    alias: str | None = None
    format: FormatSpec | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FieldDescriptor:
        alias = data.get("alias")
        if isinstance(alias, Mapping):
            alias = alias.get("name")
        return cls(
            col_name=data.get("colName", data.get("col_name")),
            aggregate=data.get("aggregate") or None,
            type=data.get("type"),
            category=data.get("category"),
            uid=data.get("uid"),
            alias=alias or None,
            format=parse_format_spec(data.get("format")),
        )

    @property
    def key(self) -> str:
        return field_key(self.col_name, self.aggregate)

    def is_same(self, other: FieldDescriptor) -> bool:
        """Identity by uid when both sides carry one, else by column and aggregate."""
        if self.uid and other.uid:
            return self.uid == other.uid
        return self.matches(other)

    def matches(self, other: FieldDescriptor) -> bool:
        """Case-insensitive equality over column name and aggregate."""
        return (
            (self.col_name or "").upper() == (other.col_name or "").upper()
            and normalize_aggregate(self.aggregate) == normalize_aggregate(other.aggregate)
        )


def as_field(value: Any) -> FieldDescriptor | None:
    if value is None or isinstance(value, FieldDescriptor):
        return value
    if isinstance(value, Mapping):
        return FieldDescriptor.from_dict(value)
    return None
