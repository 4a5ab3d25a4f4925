from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..formatting.units import NumberUnit
from ..formatting.value_formatter import EMPTY_VALUE, MAX_DECIMAL_PLACES, ValueFormatter
from ..services.series import DEFAULT_SYMBOL_SIZE, MIN_SYMBOL_SIZE, get_scatter_symbol_size_fn
from ..services.tooltip import TOOLTIP_SEPARATOR

"""Engine configuration and query-result file loading.

Responsibilities:
- Load YAML (JSON is accepted as a YAML subset)
- Validate against the bundled JSON schemas in ``schemas/``
- Apply defaults for every optional setting
"""

__all__ = [
    "ConfigError",
    "InputError",
    "FormattingConfig",
    "TooltipConfig",
    "ScatterConfig",
    "EngineConfig",
    "QueryResult",
    "load_engine_config",
    "load_query_result",
]

SCHEMA_DIR = Path(__file__).parent / "schemas"
ENGINE_SCHEMA_PATH = SCHEMA_DIR / "engine_config.json"
QUERY_RESULT_SCHEMA_PATH = SCHEMA_DIR / "query_result.json"


class ConfigError(Exception):
    pass


class InputError(Exception):
    pass


@dataclass(frozen=True)
class FormattingConfig:
    max_decimal_places: int = MAX_DECIMAL_PLACES
    currencies: dict[str, str] = field(default_factory=dict)
    units: dict[str, NumberUnit] = field(default_factory=dict)


@dataclass(frozen=True)
class TooltipConfig:
    separator: str = TOOLTIP_SEPARATOR
    empty_value: str = EMPTY_VALUE


@dataclass(frozen=True)
class ScatterConfig:
    base_symbol_size: float = DEFAULT_SYMBOL_SIZE
    min_symbol_size: float = MIN_SYMBOL_SIZE


@dataclass(frozen=True)
class EngineConfig:
    formatting: FormattingConfig = field(default_factory=FormattingConfig)
    tooltip: TooltipConfig = field(default_factory=TooltipConfig)
    scatter: ScatterConfig = field(default_factory=ScatterConfig)
    log_level: str = "INFO"

    def build_formatter(self) -> ValueFormatter:
        return ValueFormatter(
            max_decimal_places=self.formatting.max_decimal_places,
            units=self.formatting.units,
            currencies=self.formatting.currencies,
            empty_value=self.tooltip.empty_value,
        )

    def symbol_size_fn(
        self, value_index: int, max_value: float, min_value: float, cycle_ratio: float | None = None
    ) -> Callable[[Sequence[Any]], float]:
        return get_scatter_symbol_size_fn(
            value_index,
            max_value,
            min_value,
            cycle_ratio,
            base_size=self.scatter.base_symbol_size,
            min_size=self.scatter.min_symbol_size,
        )


@dataclass(frozen=True)
class QueryResult:
    columns: list[list[Any]]
    metas: list[dict[str, Any]]
    sections: list[dict[str, Any]]


def _load_schema(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"schema not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e


def _read_yaml(path: Path, error: type[Exception]) -> Any:
    if not path.exists():
        raise error(f"file not found: {path}")
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise error(f"invalid yaml: {e}") from e


def _validate(data: Any, schema_path: Path, error: type[Exception]) -> None:
    try:
        jsonschema.validate(data, _load_schema(schema_path))
    except ValidationError as e:
        raise error(f"validation failed: {e.message}") from e


def load_engine_config(path: Path | None) -> EngineConfig:
    """Load engine settings; ``None`` returns the defaults."""
    if path is None:
        return EngineConfig()
    data = _read_yaml(path, ConfigError) or {}
    _validate(data, ENGINE_SCHEMA_PATH, ConfigError)

    fmt = data.get("formatting", {})
    units = {
        key: NumberUnit(Decimal(str(unit["multiplier"])), unit.get("label", ""))
        for key, unit in fmt.get("units", {}).items()
    }
    tooltip = data.get("tooltip", {})
    scatter = data.get("scatter", {})
    return EngineConfig(
        formatting=FormattingConfig(
            max_decimal_places=fmt.get("max_decimal_places", MAX_DECIMAL_PLACES),
            currencies={k.upper(): v for k, v in fmt.get("currencies", {}).items()},
            units=units,
        ),
        tooltip=TooltipConfig(
            separator=tooltip.get("separator", TOOLTIP_SEPARATOR),
            empty_value=tooltip.get("empty_value", EMPTY_VALUE),
        ),
        scatter=ScatterConfig(
            base_symbol_size=scatter.get("base_symbol_size", DEFAULT_SYMBOL_SIZE),
            min_symbol_size=scatter.get("min_symbol_size", MIN_SYMBOL_SIZE),
        ),
        log_level=data.get("logging", {}).get("level", "INFO"),
    )


def load_query_result(path: Path) -> QueryResult:
    """Load a query result file: ``columns``, ``metas`` and optional ``sections``."""
    data = _read_yaml(path, InputError)
    if not isinstance(data, dict):
        raise InputError(f"query result must be a mapping: {path}")
    _validate(data, QUERY_RESULT_SCHEMA_PATH, InputError)
    return QueryResult(
        columns=data["columns"],
        metas=data["metas"],
        sections=data.get("sections") or [],
    )
