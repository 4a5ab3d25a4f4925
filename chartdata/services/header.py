from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

"""Pivot-table header reconciliation.

Table headers are trees of ``{colName, isGroup?, children?}``. A group node
is a container only: it reserves its descendants but not itself. Any other
node reserves itself together with everything nested below it.
"""

__all__ = [
    "flatten_header_rows",
    "get_unused_header_rows",
]


def _attr(node: Any, name: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)


def _descendants(node: Any) -> Iterator[Any]:
    for child in _attr(node, "children") or []:
        yield child
        yield from _descendants(child)


def flatten_header_rows(nodes: Sequence[Any] | None) -> Iterator[Any]:
    """Yield the header rows reserved by a header tree, depth first."""
    for node in nodes or []:
        if _attr(node, "isGroup"):
            yield from flatten_header_rows(_attr(node, "children"))
        else:
            yield node
            yield from _descendants(node)


def get_unused_header_rows(all_rows: Sequence[Any] | None, original_rows: Sequence[Any] | None) -> list[Any]:
    """Return the rows of ``all_rows`` not reserved by ``original_rows``, in order."""
    used = {_attr(r, "colName") for r in flatten_header_rows(original_rows)}
    return [row for row in all_rows or [] if _attr(row, "colName") not in used]
