from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

"""Style/setting configuration tree node.

Chart style and setting configurations are trees of ``{key, value?, rows?}``
nodes, with arbitrary extra attributes (``label``, ``comType`` ...) kept in
``extras``. ``ConfigNode.get`` mirrors ``dict.get`` so that accessors work on
parsed nodes and on raw mappings alike.
"""

__all__ = ["ConfigNode"]

_ATTRIBUTES = ("key", "value", "rows", "label")


@dataclass
class ConfigNode:
    key: str | None = None
    value: Any = None
    rows: list[ConfigNode] = field(default_factory=list)
    label: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConfigNode:
        children = data.get("rows") or []
        return cls(
            key=data.get("key"),
            value=data.get("value"),
            rows=[cls.from_dict(c) if isinstance(c, Mapping) else c for c in children],
            label=data.get("label"),
            extras={k: v for k, v in data.items() if k not in _ATTRIBUTES},
        )

    def get(self, name: str, default: Any = None) -> Any:
        if name in _ATTRIBUTES:
            return getattr(self, name)
        return self.extras.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"key": self.key}
        if self.value is not None:
            data["value"] = self.value
        if self.rows:
            data["rows"] = [r.to_dict() for r in self.rows]
        if self.label is not None:
            data["label"] = self.label
        data.update(self.extras)
        return data
