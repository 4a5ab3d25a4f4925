from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import pandas as pd

from .data_section import iter_section_fields
from .field import FieldDescriptor, as_field, field_key

if TYPE_CHECKING:
    from ..formatting.value_formatter import ValueFormatter

"""Dataset model over raw query results.

Query engines return column names with inconsistent casing across
datasources, and aggregated columns come back as ``FUNC(col)``. The model
below resolves every column once into:

- an upper-cased key (``AVG(AGE)``) used for case-insensitive lookups, and
- an origin key carrying the casing of the matching field configuration
  (``AVG(Age)``), falling back to the metadata name.

The resulting ``DataSetFieldIndex`` is shared by every row of the dataset.
Rows are list subclasses so they still serialize as the raw cell arrays.
"""

__all__ = [
    "DataSetFieldIndex",
    "DataSetRow",
    "ChartDataSet",
    "parse_meta_name",
    "transform_to_dataset",
    "transform_to_object_array",
]

logger = logging.getLogger(__name__)

_AGGREGATE_NAME = re.compile(r"^\s*(?P<aggregate>\w+)\((?P<col_name>.*)\)\s*$")


def _meta_name(meta: Any) -> str:
    if isinstance(meta, Mapping):
        name = meta.get("name")
    else:
        name = meta
    return "" if name is None else str(name)


def parse_meta_name(name: str) -> FieldDescriptor:
    """Split ``FUNC(col)`` into aggregate and column name (case preserved)."""
    match = _AGGREGATE_NAME.match(name)
    if match is None:
        return FieldDescriptor(col_name=name)
    return FieldDescriptor(col_name=match.group("col_name"), aggregate=match.group("aggregate"))


class DataSetFieldIndex:
    """Column position lookup shared by all rows of one dataset."""

    def __init__(self, metas: Sequence[Any], fields: Iterable[FieldDescriptor] = ()) -> None:
        configured = list(fields)
        self._keys: list[str] = []
        self._origin_keys: list[str] = []
        self._positions: dict[str, int] = {}
        for position, meta in enumerate(metas or []):
            name = _meta_name(meta)
            parsed = parse_meta_name(name)
            key = field_key(parsed.col_name, parsed.aggregate).upper()
            config = next((f for f in configured if f.matches(parsed)), None)
            origin = field_key(config.col_name, config.aggregate) if config else name
            self._keys.append(key)
            self._origin_keys.append(origin)
            # first column wins when a query returns duplicated names
            self._positions.setdefault(key, position)

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def keys(self) -> list[str]:
        return list(self._keys)

    @property
    def origin_keys(self) -> list[str]:
        return list(self._origin_keys)

    def position_of_key(self, key: Any) -> int:
        if key is None:
            return -1
        return self._positions.get(str(key).upper(), -1)

    def position_of(self, field: Any) -> int:
        descriptor = as_field(field)
        if descriptor is None:
            return -1
        return self.position_of_key(descriptor.key)

    def key_at(self, position: int) -> str | None:
        if 0 <= position < len(self._keys):
            return self._keys[position]
        return None

    def origin_key_at(self, position: int) -> str | None:
        if 0 <= position < len(self._origin_keys):
            return self._origin_keys[position]
        return None


class DataSetRow(list):
    """One record of a dataset: the raw cells plus the shared field index."""

    def __init__(self, cells: Iterable[Any], index: DataSetFieldIndex) -> None:
        super().__init__(cells)
        self._index = index

    @property
    def field_index(self) -> DataSetFieldIndex:
        return self._index

    def _cell_at(self, position: int) -> Any:
        if 0 <= position < len(self):
            return self[position]
        return None

    def get_cell(self, field: Any) -> Any:
        return self._cell_at(self._index.position_of(field))

    def get_cell_by_key(self, key: str) -> Any:
        return self._cell_at(self._index.position_of_key(key))

    def get_field_key(self, field: Any) -> str | None:
        return self._index.key_at(self._index.position_of(field))

    def get_field_origin_key(self, field: Any) -> str | None:
        return self._index.origin_key_at(self._index.position_of(field))

    def get_field_index(self, field: Any) -> int:
        return self._index.position_of(field)

    def convert_to_object(self) -> dict[str, Any]:
        return dict(zip(self._index.keys, self, strict=False))

    def convert_to_case_sensitive_object(self) -> dict[str, Any]:
        return dict(zip(self._index.origin_keys, self, strict=False))


class ChartDataSet(list):
    """Ordered rows of one query result. Derived views are computed on demand."""

    def __init__(
        self,
        rows: Iterable[DataSetRow] = (),
        index: DataSetFieldIndex | None = None,
        fields: Iterable[FieldDescriptor] = (),
    ) -> None:
        super().__init__(rows)
        self._index = index or DataSetFieldIndex([])
        self._fields = tuple(fields)

    @property
    def field_index(self) -> DataSetFieldIndex:
        return self._index

    @property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        return self._fields

    def get_field_key(self, field: Any) -> str | None:
        return self._index.key_at(self._index.position_of(field))

    def get_field_origin_key(self, field: Any) -> str | None:
        return self._index.origin_key_at(self._index.position_of(field))

    def get_field_index(self, field: Any) -> int:
        return self._index.position_of(field)

    def locate_row(self, row_data: Mapping[str, Any] | None) -> DataSetRow | None:
        """Find the row a chart event refers to by its row-data object.

        Keys are compared case-insensitively. When no row matches, a detached
        row is built from ``row_data`` against the shared index so that field
        lookups still resolve.
        """
        if not row_data:
            return None
        wanted = {str(k).upper(): v for k, v in row_data.items()}
        for row in self:
            current = row.convert_to_object()
            shared = [k for k in wanted if k in current]
            if shared and all(current[k] == wanted[k] for k in shared):
                return row
        cells = [wanted.get(key) for key in self._index.keys]
        logger.debug("no dataset row matched event data; using detached row")
        return DataSetRow(cells, self._index)

    def to_frame(self, formatted: bool = False, formatter: ValueFormatter | None = None) -> pd.DataFrame:
        """Export rows as a DataFrame with origin-cased column names."""
        width = len(self._index)
        frame = pd.DataFrame(
            [list(row)[:width] for row in self],
            columns=self._index.origin_keys,
            dtype=object,
        )
        if not formatted:
            return frame
        if formatter is None:
            from ..formatting.value_formatter import default_formatter as formatter
        for position, column in enumerate(frame.columns):
            config = next(
                (f for f in self._fields if self._index.position_of(f) == position), None
            )
            if config is None or config.format is None:
                continue
            frame[column] = [formatter.format(v, config.format) for v in frame[column]]
        return frame


def transform_to_dataset(
    columns: Sequence[Sequence[Any]] | None,
    metas: Sequence[Any] | None,
    sections: Iterable[Any] | None = None,
) -> ChartDataSet:
    """Build a ChartDataSet from row arrays, column metadata and field config."""
    fields = list(iter_section_fields(sections))
    index = DataSetFieldIndex(metas or [], fields)
    if not columns:
        return ChartDataSet([], index, fields)
    rows = [DataSetRow(cells, index) for cells in columns]
    return ChartDataSet(rows, index, fields)


def transform_to_object_array(
    columns: Sequence[Sequence[Any]] | None, metas: Sequence[Any] | None
) -> list[dict[str, Any]]:
    names = [_meta_name(m) for m in metas or []]
    return [dict(zip(names, row, strict=False)) for row in columns or []]
