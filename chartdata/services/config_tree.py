from __future__ import annotations

from collections.abc import Sequence
from typing import Any

"""Lookups over style/setting configuration trees.

A tree is a list of nodes ``{key, value?, rows?}`` (raw mappings or
``ConfigNode``). A path is a list of keys, one per level; at each level the
first node whose ``key`` equals the segment is taken. A missing segment makes
the lookup return None rather than raise.
"""

__all__ = [
    "get_value",
    "get_styles",
    "get_style_value",
    "get_setting_value",
    "get_style_value_by_group",
    "get_grid_style",
]


def _find_node(nodes: Sequence[Any] | None, paths: Sequence[str] | None) -> Any:
    if not paths:
        return None
    node = None
    children = nodes
    for segment in paths:
        node = next((n for n in children or [] if n is not None and n.get("key") == segment), None)
        if node is None:
            return None
        children = node.get("rows")
    return node


def get_value(
    configs: Sequence[Any] | None,
    paths: Sequence[str] | None,
    target_key: str | None = "value",
) -> Any:
    """Return attribute ``target_key`` of the node at ``paths`` (default: its value)."""
    node = _find_node(configs, paths)
    if node is None:
        return None
    return node.get(target_key or "value")


def get_styles(
    configs: Sequence[Any] | None,
    paths: Sequence[str] | None,
    target_keys: Sequence[str],
) -> list[Any]:
    """Return the values of the children ``target_keys`` under the node at ``paths``.

    The output is parallel to ``target_keys``; absent children give None.
    """
    children = get_value(configs, paths, "rows") or []
    result = []
    for key in target_keys:
        child = next((c for c in children if c is not None and c.get("key") == key), None)
        result.append(child.get("value") if child is not None else None)
    return result


def get_style_value(configs: Sequence[Any] | None, paths: Sequence[str]) -> Any:
    return get_value(configs, paths)


def get_setting_value(configs: Sequence[Any] | None, path: str, target_key: str = "value") -> Any:
    """Dot-separated form of ``get_value``: ``get_setting_value(c, "a.b", "rows")``."""
    return get_value(configs, path.split("."), target_key)


def get_style_value_by_group(configs: Sequence[Any] | None, group_path: str, child_path: str) -> Any:
    return get_style_value(configs, [group_path, *child_path.split(".")])


def get_grid_style(styles: Sequence[Any] | None) -> dict[str, Any]:
    """Assemble the chart grid margins from the ``margin`` style group."""
    contain_label, left, right, bottom, top = get_styles(
        styles,
        ["margin"],
        ["containLabel", "marginLeft", "marginRight", "marginBottom", "marginTop"],
    )
    return {
        "left": left,
        "right": right,
        "bottom": bottom,
        "top": top,
        "containLabel": contain_label,
    }
