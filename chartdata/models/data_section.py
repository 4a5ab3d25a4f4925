from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .field import FieldDescriptor, as_field

"""Chart data section models.

A chart's data configuration is a list of sections (dimension, metrics,
color, size, info ...). Each section has a type and an ordered list of field
rows. The dataset model only needs the flattened field rows to recover the
original casing of column names; the drill and requirement helpers need the
section type and flags.
"""

__all__ = [
    "ChartDataSectionType",
    "DataSection",
    "as_sections",
    "iter_section_fields",
]


class ChartDataSectionType(str, Enum):
    GROUP = "group"
    AGGREGATE = "aggregate"
    COLOR = "color"
    INFO = "info"
    SIZE = "size"
    FILTER = "filter"
    MIXED = "mixed"


def _row_entry(row: Any) -> Any:
    field = as_field(row)
    return row if field is None else field


@dataclass(frozen=True)
class DataSection:
    key: str | None = None
    type: str | None = None
    rows: tuple[FieldDescriptor, ...] = ()
    required: bool = False
    drillable: bool = False
    # every configured row in order; entries that are not field mappings kept as given
    entries: tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DataSection:
        entries = tuple(_row_entry(r) for r in data.get("rows") or [])
        return cls(
            key=data.get("key"),
            type=data.get("type"),
            rows=tuple(r for r in entries if isinstance(r, FieldDescriptor)),
            required=bool(data.get("required")),
            drillable=bool(data.get("drillable")),
            entries=entries,
        )

    @property
    def all_rows(self) -> tuple[Any, ...]:
        return self.entries or self.rows

    def is_type(self, section_type: ChartDataSectionType) -> bool:
        return self.type == section_type.value


def as_sections(sections: Iterable[Any] | None) -> list[DataSection]:
    result: list[DataSection] = []
    for section in sections or []:
        if isinstance(section, DataSection):
            result.append(section)
        elif isinstance(section, Mapping):
            result.append(DataSection.from_dict(section))
    return result


def iter_section_fields(sections: Iterable[Any] | None) -> Iterator[FieldDescriptor]:
    for section in as_sections(sections):
        yield from section.rows
