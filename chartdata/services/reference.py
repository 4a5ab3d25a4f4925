from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from ..models.dataset import ChartDataSet
from ..models.field import FieldDescriptor, as_field
from .config_tree import get_setting_value

"""Reference line / area geometry.

Reference settings live under ``reference.panel.configuration``: one tab per
metric, each holding a ``markLine`` and a ``markArea`` group. Values are
either a constant or an aggregate (average / max / min) over the metric
column the tab is bound to. The geometry is keyed on ``xAxis`` for
horizontal charts and ``yAxis`` otherwise.
"""

__all__ = [
    "ReferenceValueType",
    "get_reference",
    "get_reference_value",
]

logger = logging.getLogger(__name__)

REFERENCE_PATH = "reference.panel.configuration"


class ReferenceValueType:
    CONSTANT = "constant"
    AVERAGE = "average"
    MAX = "max"
    MIN = "min"


def _plain(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return value


def get_reference_value(
    dataset: ChartDataSet | None,
    field: FieldDescriptor | None,
    value_type: str | None,
    constant: Any,
    metric_uid: Any,
) -> Any:
    """Resolve one reference value; None when it cannot be computed."""
    if value_type == ReferenceValueType.CONSTANT:
        return constant
    if field is None or field.uid != metric_uid or not dataset:
        return None
    cells = pd.Series([row.get_cell(field) for row in dataset], dtype=object)
    values = pd.to_numeric(cells, errors="coerce").dropna()
    if values.empty:
        return None
    if value_type == ReferenceValueType.AVERAGE:
        return _plain(values.mean())
    if value_type == ReferenceValueType.MAX:
        return _plain(values.max())
    if value_type == ReferenceValueType.MIN:
        return _plain(values.min())
    logger.debug("unknown reference value type %r", value_type)
    return None


def _label(rows: Sequence[Any]) -> dict[str, Any]:
    return {
        "show": get_setting_value(rows, "showLabel"),
        "position": get_setting_value(rows, "position"),
        **(get_setting_value(rows, "font") or {}),
    }


def _mark_groups(tabs: Sequence[Any], key: str) -> list[Any]:
    groups = []
    for tab in tabs or []:
        groups.extend(r for r in tab.get("rows") or [] if r is not None and r.get("key") == key)
    return groups


def _mark_line_item(
    mark: Any, dataset: ChartDataSet | None, field: FieldDescriptor | None, axis: str
) -> dict[str, Any] | None:
    rows = mark.get("rows") or []
    if not get_setting_value(rows, "enableMarkLine"):
        return None
    value = get_reference_value(
        dataset,
        field,
        get_setting_value(rows, "valueType"),
        get_setting_value(rows, "constantValue"),
        get_setting_value(rows, "metric"),
    )
    if value is None:
        return None
    return {
        axis: value,
        "label": _label(rows),
        "lineStyle": get_setting_value(rows, "lineStyle"),
    }


def _mark_area_item(
    mark: Any, dataset: ChartDataSet | None, field: FieldDescriptor | None, axis: str
) -> list[dict[str, Any]] | None:
    rows = mark.get("rows") or []
    if not get_setting_value(rows, "enableMarkArea"):
        return None
    border = get_setting_value(rows, "borderStyle") or {}
    label = _label(rows)
    item_style = {
        "opacity": get_setting_value(rows, "opacity"),
        "color": get_setting_value(rows, "backgroundColor"),
        "borderColor": border.get("color"),
        "borderWidth": border.get("width"),
        "borderType": border.get("type"),
    }
    points = []
    for side in ("start", "end"):
        value = get_reference_value(
            dataset,
            field,
            get_setting_value(rows, f"{side}ValueType"),
            get_setting_value(rows, f"{side}ConstantValue"),
            get_setting_value(rows, f"{side}Metric"),
        )
        if value is None:
            return None
        points.append({axis: value, "label": dict(label), "itemStyle": dict(item_style)})
    return points


def get_reference(
    settings: Sequence[Any] | None,
    dataset: ChartDataSet | None,
    field: Any,
    is_horizontal: bool = False,
) -> dict[str, dict[str, list[Any]]]:
    """Build ``markLine`` / ``markArea`` fragments for one metric series."""
    tabs = get_setting_value(settings, REFERENCE_PATH, "rows") or []
    descriptor = as_field(field)
    axis = "xAxis" if is_horizontal else "yAxis"
    lines = [_mark_line_item(m, dataset, descriptor, axis) for m in _mark_groups(tabs, "markLine")]
    areas = [_mark_area_item(m, dataset, descriptor, axis) for m in _mark_groups(tabs, "markArea")]
    return {
        "markLine": {"data": [line for line in lines if line is not None]},
        "markArea": {"data": [area for area in areas if area is not None]},
    }
