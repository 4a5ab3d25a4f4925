from __future__ import annotations

from typing import Any

from ..models.field import as_field, field_key
from .value_formatter import EMPTY_VALUE, ValueFormatter, to_display_string, to_formatted_value

"""Field labels shown in legends and tooltips."""

__all__ = [
    "UNKNOWN_FIELD_NAME",
    "get_column_render_name",
    "get_value_by_column_key",
    "value_formatter",
]

UNKNOWN_FIELD_NAME = "[unknown]"


def get_column_render_name(field: Any) -> str:
    descriptor = as_field(field)
    if descriptor is None:
        return UNKNOWN_FIELD_NAME
    if descriptor.alias:
        return descriptor.alias
    return field_key(descriptor.col_name, descriptor.aggregate)


def get_value_by_column_key(field: Any) -> str:
    descriptor = as_field(field)
    if descriptor is None:
        return ""
    return field_key(descriptor.col_name, descriptor.aggregate)


def value_formatter(
    field: Any,
    value: Any,
    formatter: ValueFormatter | None = None,
    empty_value: str = EMPTY_VALUE,
) -> str:
    """Render ``"<field name>: <formatted value>"``."""
    descriptor = as_field(field)
    if value is None:
        rendered = empty_value
    else:
        spec = descriptor.format if descriptor is not None else None
        rendered = to_display_string(to_formatted_value(value, spec, formatter), empty_value)
    return f"{get_column_render_name(descriptor)}: {rendered}"
