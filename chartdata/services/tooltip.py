from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..formatting.field_label import get_column_render_name, value_formatter
from ..formatting.value_formatter import ValueFormatter, to_display_string
from ..models.dataset import ChartDataSet, DataSetRow
from ..models.field import FieldDescriptor, as_field

"""Tooltip composition for rectangular (bar/line/scatter) and polar (pie/funnel) charts.

The chart library hands over an event payload with the hovered series name,
the datum's row data (case-sensitive keys) and the component type. Each
configured field resolves its value through the dataset row the event points
at and renders as ``"<name>: <value>"``; lines are joined with ``<br />``.
"""

__all__ = [
    "TOOLTIP_SEPARATOR",
    "get_series_tooltips_rectangular",
    "get_series_tooltips_polar",
]

logger = logging.getLogger(__name__)

TOOLTIP_SEPARATOR = "<br />"
MARK_COMPONENT_TYPES = ("markLine", "markArea")


def _fields(configs: Sequence[Any] | None) -> list[FieldDescriptor]:
    return [f for f in (as_field(c) for c in configs or []) if f is not None]


def _event_row(dataset: ChartDataSet, param: Mapping[str, Any]) -> DataSetRow | None:
    data = param.get("data")
    row_data = data.get("rowData") if isinstance(data, Mapping) else None
    return dataset.locate_row(row_data)


def _mark_tooltip(param: Mapping[str, Any]) -> str:
    return f"{param.get('name')}: {to_display_string(param.get('value'))}"


def _lines(
    row: DataSetRow,
    fields: list[FieldDescriptor],
    formatter: ValueFormatter | None,
) -> list[str]:
    return [value_formatter(f, row.get_cell(f), formatter) for f in fields]


def get_series_tooltips_rectangular(
    dataset: ChartDataSet,
    param: Mapping[str, Any] | None,
    group_configs: Sequence[Any] | None,
    color_configs: Sequence[Any] | None,
    aggregate_configs: Sequence[Any] | None,
    info_configs: Sequence[Any] | None = None,
    size_configs: Sequence[Any] | None = None,
    *,
    formatter: ValueFormatter | None = None,
    separator: str = TOOLTIP_SEPARATOR,
) -> str:
    """Tooltip for one hovered datum of a rectangular chart.

    The hovered series is identified by the datum name, falling back to the
    series name, and must match the render name of a configured metric or
    dimension; otherwise the series is synthetic and no tooltip is shown.
    Line order: dimensions, colors, the hovered metric, sizes, infos.
    """
    if not param:
        return ""
    if param.get("componentType") in MARK_COMPONENT_TYPES:
        return _mark_tooltip(param)
    data = param.get("data") if isinstance(param.get("data"), Mapping) else {}
    series_name = data.get("name") or param.get("seriesName")
    groups = _fields(group_configs)
    metric = next(
        (f for f in [*_fields(aggregate_configs), *groups] if get_column_render_name(f) == series_name),
        None,
    )
    if metric is None:
        logger.debug("series %r not configured; no tooltip", series_name)
        return ""
    row = _event_row(dataset, param)
    if row is None:
        return ""
    fields = [*groups, *_fields(color_configs), metric, *_fields(size_configs), *_fields(info_configs)]
    return separator.join(_lines(row, fields, formatter))


def get_series_tooltips_polar(
    dataset: ChartDataSet,
    param: Mapping[str, Any] | None,
    group_configs: Sequence[Any] | None,
    color_configs: Sequence[Any] | None,
    aggregate_configs: Sequence[Any] | None,
    info_configs: Sequence[Any] | None = None,
    size_configs: Sequence[Any] | None = None,
    *,
    formatter: ValueFormatter | None = None,
    separator: str = TOOLTIP_SEPARATOR,
) -> str:
    """Tooltip for one hovered slice of a polar chart: every configured field."""
    if not param:
        return ""
    if param.get("componentType") in MARK_COMPONENT_TYPES:
        return _mark_tooltip(param)
    row = _event_row(dataset, param)
    if row is None:
        return ""
    fields = [
        *_fields(group_configs),
        *_fields(color_configs),
        *_fields(aggregate_configs),
        *_fields(size_configs),
        *_fields(info_configs),
    ]
    return separator.join(_lines(row, fields, formatter))
