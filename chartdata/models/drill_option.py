from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .field import FieldDescriptor, as_field

"""Drill state over a dimension hierarchy.

The fields of a drillable group section form the hierarchy levels, root at
index 0. The option keeps a cursor on the active level and remembers how it
got there:

- drill mode: the chart shows only the active level, and every level entered
  by drilling down records the filter condition taken from the clicked datum;
- expand mode: the chart shows all levels from the root to the cursor;
- normal mode: nothing drilled, the cursor sits on the root.

The option is owned by the chart holding it and passed explicitly to the
composer helpers.
"""

__all__ = [
    "DrillMode",
    "DrillCondition",
    "ChartDrillOption",
]


class DrillMode(str, Enum):
    NORMAL = "normal"
    DRILL = "drill"
    EXPAND = "expand"


@dataclass(frozen=True)
class DrillCondition:
    """Equality filter applied on the parent level when drilling down."""
    field: FieldDescriptor
    value: Any
    operator: str = "="


class ChartDrillOption:
    def __init__(self, fields: Iterable[Any]) -> None:
        self._levels: list[FieldDescriptor] = [
            f for f in (as_field(x) for x in fields or []) if f is not None
        ]
        self._cursor = 0
        self._is_selected_drill = False
        self._drill_down_conditions: list[DrillCondition] = []
        self._expanded = False

    def __repr__(self) -> str:
        return f"ChartDrillOption(levels={len(self._levels)}, cursor={self._cursor}, mode={self.mode.value})"

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def mode(self) -> DrillMode:
        if self._cursor == 0:
            return DrillMode.NORMAL
        return DrillMode.EXPAND if self._expanded else DrillMode.DRILL

    @property
    def levels(self) -> list[FieldDescriptor]:
        return list(self._levels)

    @property
    def is_drillable(self) -> bool:
        return len(self._levels) > 1

    @property
    def is_bottom_level(self) -> bool:
        return self._cursor >= len(self._levels) - 1

    @property
    def is_selected_drill(self) -> bool:
        return self._is_selected_drill

    @property
    def can_select(self) -> bool:
        return self.mode is not DrillMode.EXPAND

    @property
    def drill_down_conditions(self) -> list[DrillCondition]:
        return list(self._drill_down_conditions)

    @property
    def current_fields(self) -> list[FieldDescriptor] | None:
        """Fields to plot, or None when the chart is not drilled."""
        if self.mode is DrillMode.NORMAL:
            return None
        if self.mode is DrillMode.EXPAND:
            return self._levels[: self._cursor + 1]
        return [self._levels[self._cursor]]

    def toggle_selected_drill(self, enable: bool | None = None) -> None:
        self._is_selected_drill = not self._is_selected_drill if enable is None else enable

    def drill_down(self, filter_data: Mapping[str, Any] | None = None) -> None:
        if self.is_bottom_level or self._expanded:
            return
        parent = self._levels[self._cursor]
        self._cursor += 1
        if filter_data is not None and parent.col_name is not None:
            self._drill_down_conditions.append(
                DrillCondition(field=parent, value=filter_data.get(parent.col_name))
            )

    def drill_up(self, field: Any = None) -> None:
        """Step one level up, or rewind to the level drilled from ``field``."""
        if self._cursor == 0 or self._expanded:
            return
        target = as_field(field)
        if target is None:
            self._cursor -= 1
            if len(self._drill_down_conditions) > self._cursor:
                self._drill_down_conditions = self._drill_down_conditions[: self._cursor]
            return
        position = next(
            (i for i, c in enumerate(self._drill_down_conditions) if c.field.is_same(target)),
            -1,
        )
        if position == 0:
            self.clear_all()
        elif position > 0:
            self._drill_down_conditions = self._drill_down_conditions[:position]
            self._cursor = position

    def expand_down(self) -> None:
        if self.is_bottom_level or self.mode is DrillMode.DRILL:
            return
        self._cursor += 1
        self._expanded = True

    def expand_up(self) -> None:
        if not self._expanded:
            return
        self._cursor -= 1
        if self._cursor == 0:
            self._expanded = False

    def clear_all(self) -> None:
        self._cursor = 0
        self._drill_down_conditions = []
        self._expanded = False

    def has_same_levels(self, fields: Iterable[Any]) -> bool:
        others = [f for f in (as_field(x) for x in fields or []) if f is not None]
        return len(others) == len(self._levels) and all(
            a.is_same(b) for a, b in zip(self._levels, others, strict=False)
        )
