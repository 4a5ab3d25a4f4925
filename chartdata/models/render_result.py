from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Result model of rendering a dataset into display strings.

Aggregates the counters reported on the SUMMARY line together with the
rendered table.
"""

__all__ = [
    "RenderResult",
]


@dataclass(frozen=True)
class RenderResult:
    """Rendered table plus per-cell counters.

    ``passthrough_cells`` counts cells whose field has a format configured
    but whose value was returned unformatted (non-numeric input, NaN ...).
    """
    rows: int
    columns: int
    fields: int  # configured fields resolved against the dataset
    formatted_cells: int
    passthrough_cells: int
    headers: list[str] = field(default_factory=list)
    table: list[list[Any]] = field(default_factory=list)
    missing_fields: list[str] = field(default_factory=list)  # configured but absent from metas
