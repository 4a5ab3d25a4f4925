from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..models.data_section import ChartDataSectionType, DataSection, as_sections
from ..models.drill_option import ChartDrillOption, DrillMode

"""Drill-aware selection of the group fields a chart should plot."""

__all__ = [
    "get_drillable_rows",
    "resolve_drill_option",
]

logger = logging.getLogger(__name__)


def _section_rows(section: DataSection, option: ChartDrillOption | None) -> list[Any]:
    if not section.drillable:
        return list(section.all_rows)
    rows = list(section.rows)
    current = option.current_fields if option is not None else None
    if option is None or option.mode is DrillMode.NORMAL or not current:
        return rows[:1]
    return [r for r in rows if any(r.is_same(f) for f in current)]


def get_drillable_rows(
    sections: Iterable[Any] | None, option: ChartDrillOption | None = None
) -> list[Any]:
    """Return the group fields to plot.

    Non-drillable group sections contribute all their rows; rows that are not
    field mappings are passed through unchanged. A drillable
    section contributes its root field until the option is drilled or
    expanded, then the fields of the active level(s). Other section types
    contribute nothing.
    """
    result: list[Any] = []
    for section in as_sections(sections):
        if section.is_type(ChartDataSectionType.GROUP):
            result.extend(_section_rows(section, option))
    return result


def resolve_drill_option(
    sections: Iterable[Any] | None, current: ChartDrillOption | None = None
) -> ChartDrillOption | None:
    """Keep ``current`` while the drillable group section is unchanged.

    Returns None when no group section is drillable, and a fresh option when
    the section's fields differ from the ones ``current`` was built from.
    """
    section = next(
        (
            s
            for s in as_sections(sections)
            if s.is_type(ChartDataSectionType.GROUP) and s.drillable
        ),
        None,
    )
    if section is None:
        return None
    if current is not None and current.has_same_levels(section.rows):
        return current
    logger.debug("drillable section changed; resetting drill option")
    return ChartDrillOption(section.rows)
