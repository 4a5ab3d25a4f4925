from __future__ import annotations

import logging

import pandas as pd

from ..formatting.field_label import get_column_render_name
from ..formatting.value_formatter import ValueFormatter, default_formatter, to_display_string
from ..models.dataset import ChartDataSet
from ..models.field import FieldDescriptor
from ..models.render_result import RenderResult

"""Render a whole dataset into display strings.

Configured fields are rendered in configuration order with their formats;
a dataset built without field configuration renders every column as-is.
"""

__all__ = [
    "render_dataset",
    "to_display_frame",
]

logger = logging.getLogger(__name__)


def _resolved_fields(dataset: ChartDataSet) -> tuple[list[FieldDescriptor], list[str]]:
    resolved: list[FieldDescriptor] = []
    missing: list[str] = []
    for f in dataset.fields:
        if dataset.get_field_index(f) < 0:
            missing.append(f.key)
        elif not any(f.matches(r) for r in resolved):
            resolved.append(f)
    return resolved, missing


def render_dataset(dataset: ChartDataSet, formatter: ValueFormatter | None = None) -> RenderResult:
    formatter = formatter or default_formatter
    fields, missing = _resolved_fields(dataset)
    for key in missing:
        logger.warning(f"configured field not in result: {key}")

    if not fields:
        headers = dataset.field_index.origin_keys
        table = [
            [to_display_string(row[i] if i < len(row) else None, formatter.empty_value) for i in range(len(headers))]
            for row in dataset
        ]
        return RenderResult(
            rows=len(dataset),
            columns=len(headers),
            fields=0,
            formatted_cells=0,
            passthrough_cells=0,
            headers=headers,
            table=table,
            missing_fields=missing,
        )

    formatted_cells = 0
    passthrough_cells = 0
    table = []
    for row in dataset:
        line = []
        for f in fields:
            cell = row.get_cell(f)
            value = formatter.format(cell, f.format)
            if f.format is not None and f.format.type is not None:
                if cell is None or value is cell:
                    passthrough_cells += 1
                else:
                    formatted_cells += 1
            line.append(to_display_string(value, formatter.empty_value))
        table.append(line)
    return RenderResult(
        rows=len(dataset),
        columns=len(dataset.field_index),
        fields=len(fields),
        formatted_cells=formatted_cells,
        passthrough_cells=passthrough_cells,
        headers=[get_column_render_name(f) for f in fields],
        table=table,
        missing_fields=missing,
    )


def to_display_frame(result: RenderResult) -> pd.DataFrame:
    return pd.DataFrame(result.table, columns=result.headers)
