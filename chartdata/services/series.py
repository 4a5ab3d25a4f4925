from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from ..formatting.value_formatter import ValueFormatter, is_nan, to_formatted_value
from ..models.data_section import ChartDataSectionType, as_sections
from ..models.dataset import ChartDataSet, DataSetRow
from ..models.field import as_field

"""Series composition helpers.

Grouping rows into color series, column extent for visual maps, scatter
symbol sizing, and the requirement check deciding whether a chart type can
render a given data configuration.
"""

__all__ = [
    "DEFAULT_COLUMN_MIN",
    "DEFAULT_COLUMN_MAX",
    "get_colorize_group_series_columns",
    "get_data_column_max_and_min",
    "get_scatter_symbol_size_fn",
    "is_match_requirement",
    "is_in_range",
]

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_MIN = 0
DEFAULT_COLUMN_MAX = 100
DEFAULT_SYMBOL_SIZE = 10
MIN_SYMBOL_SIZE = 3
# used when max equals min
DEFAULT_SYMBOL_DISTANCE = 100


def get_colorize_group_series_columns(
    dataset: ChartDataSet, color_field: Any, formatter: ValueFormatter | None = None
) -> list[dict[Any, list[DataSetRow]]]:
    """Bucket rows by the formatted value of ``color_field``.

    Buckets keep first-seen order; each is returned as a single-entry mapping
    so that legend order survives serialization.
    """
    field = as_field(color_field)
    buckets: dict[Any, list[DataSetRow]] = {}
    nan_key: Any = None
    for row in dataset or []:
        cell = row.get_cell(field)
        key = to_formatted_value(cell, field.format if field else None, formatter)
        if is_nan(key):
            # NaN != NaN; every NaN cell lands in the bucket of the first one
            if nan_key is None:
                nan_key = key
            key = nan_key
        buckets.setdefault(key, []).append(row)
    return [{key: rows} for key, rows in buckets.items()]


def _plain_number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else float(value)


def get_data_column_max_and_min(dataset: ChartDataSet | None, field: Any) -> dict[str, int | float]:
    """Return ``{"min", "max"}`` of the numeric column of ``field``.

    Falls back to 0/100 when the field or data is missing or a cell is not
    numeric.
    """
    descriptor = as_field(field)
    if descriptor is None or not dataset:
        return {"min": DEFAULT_COLUMN_MIN, "max": DEFAULT_COLUMN_MAX}
    cells = pd.Series([row.get_cell(descriptor) for row in dataset], dtype=object)
    values = pd.to_numeric(cells, errors="coerce").to_numpy(dtype=float)
    low, high = np.min(values), np.max(values)
    if np.isnan(low) or np.isnan(high):
        logger.debug("column %s has non-numeric cells; using default extent", descriptor.key)
    return {
        "min": DEFAULT_COLUMN_MIN if np.isnan(low) else _plain_number(low),
        "max": DEFAULT_COLUMN_MAX if np.isnan(high) else _plain_number(high),
    }


def get_scatter_symbol_size_fn(
    value_index: int,
    max_value: float,
    min_value: float,
    cycle_ratio: float | None = None,
    *,
    base_size: float = DEFAULT_SYMBOL_SIZE,
    min_size: float = MIN_SYMBOL_SIZE,
) -> Callable[[Sequence[Any]], float]:
    """Build a data point -> symbol size function.

    Size grows linearly from the lower bound (never above 0) to ``max_value``,
    where it reaches ``2 * base_size * cycle_ratio``; it never drops below
    ``min_size``.
    """
    low = min(0, min_value)
    scale = cycle_ratio or 1
    distance = (max_value - low) or DEFAULT_SYMBOL_DISTANCE

    def symbol_size(point: Sequence[Any]) -> float:
        try:
            value = float(point[value_index])
        except (IndexError, TypeError, ValueError):
            return min_size
        if not np.isfinite(value):
            return min_size
        return max(min_size, ((value - low) / distance) * scale * base_size * 2)

    return symbol_size


def is_in_range(limit: Any, count: int) -> bool:
    """Check a requirement limit: None (any), an exact count, or [min, max]."""
    if limit is None:
        return True
    if isinstance(limit, (list, tuple)):
        low = limit[0] if len(limit) > 0 else None
        high = limit[1] if len(limit) > 1 else None
        return (low is None or count >= low) and (high is None or count <= high)
    return count == limit


def _required_field_count(sections: list[Any], section_type: ChartDataSectionType) -> int:
    return sum(len(s.rows) for s in sections if s.is_type(section_type) and s.required)


def is_match_requirement(meta: Any, config: Any) -> bool:
    """True when any requirement of the chart meta accepts the data config."""
    requirements = meta.get("requirements") if isinstance(meta, Mapping) else getattr(meta, "requirements", None)
    datas = config.get("datas") if isinstance(config, Mapping) else getattr(config, "datas", None)
    sections = as_sections(datas)
    group_count = _required_field_count(sections, ChartDataSectionType.GROUP)
    aggregate_count = _required_field_count(sections, ChartDataSectionType.AGGREGATE)
    for requirement in requirements or []:
        requirement = requirement or {}
        if is_in_range(requirement.get(ChartDataSectionType.GROUP.value), group_count) and is_in_range(
            requirement.get(ChartDataSectionType.AGGREGATE.value), aggregate_count
        ):
            return True
    return False
