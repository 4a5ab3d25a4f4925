from __future__ import annotations

import logging
import math
import numbers
import re
from collections.abc import Callable, Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

import pandas as pd

from ..models.format_spec import (
    CurrencyFormat,
    DateFormat,
    FieldFormatType,
    NumericFormat,
    PercentageFormat,
    ScientificNotationFormat,
    parse_format_spec,
)
from .date_pattern import render_date_pattern
from .units import CURRENCY_SYMBOLS, DEFAULT_UNIT_KEY, NUMBER_UNITS, NumberUnit

"""Value formatting for chart display.

``to_formatted_value(value, format)`` renders a raw cell according to a field
format configuration. Formatting never fails:

- ``None`` renders as the empty marker (``-``)
- ``NaN`` is returned unchanged; it marks values that must not be formatted
- non-numeric input to a numeric kind is returned unchanged
- out-of-range decimal places clamp to 0
- a missing or unknown format kind is a passthrough

Dispatch goes through a table keyed by ``FieldFormatType``; kinds without an
entry (``string``) fall through to passthrough. Additional kinds can be
registered per ``ValueFormatter`` instance.
"""

__all__ = [
    "MAX_DECIMAL_PLACES",
    "EMPTY_VALUE",
    "ValueFormatter",
    "default_formatter",
    "register_formatter",
    "to_formatted_value",
    "to_display_string",
    "is_nan",
]

logger = logging.getLogger(__name__)

MAX_DECIMAL_PLACES = 20
EMPTY_VALUE = "-"
# Minimum working precision for Decimal rounding; raised per value for large magnitudes
_PRECISION = 80

_NUMBER_TEXT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

FormatFn = Callable[["ValueFormatter", Any, Any], Any]
_FORMATTERS: dict[FieldFormatType, FormatFn] = {}


def register_formatter(kind: FieldFormatType) -> Callable[[FormatFn], FormatFn]:
    def decorator(fn: FormatFn) -> FormatFn:
        _FORMATTERS[kind] = fn
        return fn
    return decorator


def is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def to_decimal(value: Any) -> Decimal | None:
    """Return a finite Decimal for numeric input, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, numbers.Number):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return Decimal(str(value))
    if isinstance(value, str):
        text = value.strip()
        if not _NUMBER_TEXT.match(text):
            return None
        return Decimal(text)
    return None


def to_display_string(value: Any, empty_value: str = EMPTY_VALUE) -> str:
    """Stringify a formatted value the way chart labels show it."""
    if value is None:
        return empty_value
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)


class ValueFormatter:
    def __init__(
        self,
        *,
        max_decimal_places: int = MAX_DECIMAL_PLACES,
        units: Mapping[str, NumberUnit] | None = None,
        currencies: Mapping[str, str] | None = None,
        empty_value: str = EMPTY_VALUE,
    ) -> None:
        self.max_decimal_places = max_decimal_places
        self.units: dict[str, NumberUnit] = {**NUMBER_UNITS, **(units or {})}
        self.currencies: dict[str, str] = {**CURRENCY_SYMBOLS, **(currencies or {})}
        self.empty_value = empty_value
        self._formatters: dict[FieldFormatType, FormatFn] = dict(_FORMATTERS)

    def register(self, kind: FieldFormatType, fn: FormatFn) -> None:
        self._formatters[kind] = fn

    def format(self, value: Any, spec: Any) -> Any:
        if value is None:
            return self.empty_value
        if is_nan(value):
            return value
        parsed = parse_format_spec(spec)
        if parsed is None or parsed.type is None:
            return value
        handler = self._formatters.get(parsed.type)
        if handler is None:
            return value
        return handler(self, value, parsed.options)

    # helpers shared by the registered kinds

    def decimal_places(self, raw: Any) -> int:
        try:
            places = float(raw)
        except (TypeError, ValueError):
            return 0
        if not math.isfinite(places) or places < 0 or places > self.max_decimal_places:
            if raw is not None:
                logger.debug("decimal places %r out of range; using 0", raw)
            return 0
        return int(places)

    def unit(self, key: Any) -> NumberUnit:
        if isinstance(key, str) and key in self.units:
            return self.units[key]
        return self.units[DEFAULT_UNIT_KEY]

    def currency_symbol(self, code: Any) -> str:
        if not code:
            return ""
        return self.currencies.get(str(code).upper(), str(code))

    def render_number(
        self, number: Decimal, places: int, grouping: bool, divisor: Decimal = Decimal(1)
    ) -> str:
        """Divide by ``divisor`` and round half-up to ``places``, keeping every integer digit."""
        with localcontext() as ctx:
            ctx.rounding = ROUND_HALF_UP
            ctx.prec = len(number.as_tuple().digits) + _PRECISION
            scaled = number / divisor
            ctx.prec = max(_PRECISION, scaled.adjusted() + places + 2)
            rounded = scaled.quantize(Decimal(1).scaleb(-places))
            return format(rounded, ",f" if grouping else "f")


def _numeric_or_skip(value: Any) -> Decimal | None:
    number = to_decimal(value)
    if number is None:
        logger.debug("skip formatting non-numeric value %r", value)
    return number


@register_formatter(FieldFormatType.NUMERIC)
def _format_numeric(formatter: ValueFormatter, value: Any, options: NumericFormat) -> Any:
    number = _numeric_or_skip(value)
    if number is None:
        return value
    unit = formatter.unit(options.unit_key)
    text = formatter.render_number(
        number,
        formatter.decimal_places(options.decimal_places),
        options.use_thousand_separator,
        unit.multiplier,
    )
    return f"{options.prefix}{text}{unit.label}{options.suffix}"


@register_formatter(FieldFormatType.CURRENCY)
def _format_currency(formatter: ValueFormatter, value: Any, options: CurrencyFormat) -> Any:
    number = _numeric_or_skip(value)
    if number is None:
        return value
    unit = formatter.unit(options.unit_key)
    text = formatter.render_number(
        abs(number),
        formatter.decimal_places(options.decimal_places),
        options.use_thousand_separator,
        unit.multiplier,
    )
    sign = "-" if number < 0 else ""
    rendered = f"{sign}{formatter.currency_symbol(options.currency)}{text}"
    if unit.label:
        return f"{rendered} {unit.label}"
    return rendered


@register_formatter(FieldFormatType.PERCENTAGE)
def _format_percentage(formatter: ValueFormatter, value: Any, options: PercentageFormat) -> Any:
    number = _numeric_or_skip(value)
    if number is None:
        return value
    text = formatter.render_number(
        number,
        formatter.decimal_places(options.decimal_places),
        options.use_thousand_separator,
        Decimal("0.01"),
    )
    return f"{text}%"


@register_formatter(FieldFormatType.SCIENTIFIC_NOTATION)
def _format_scientific(
    formatter: ValueFormatter, value: Any, options: ScientificNotationFormat
) -> Any:
    number = _numeric_or_skip(value)
    if number is None:
        return value
    places = formatter.decimal_places(options.decimal_places)
    if number.is_zero():
        mantissa = "0." + "0" * places if places else "0"
        return f"{mantissa}e+0"
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ctx.rounding = ROUND_HALF_UP
        # Decimal renders the exponent without padding and always signed: 5.00e+1
        return format(number, f".{places}e")


@register_formatter(FieldFormatType.DATE)
def _format_date(formatter: ValueFormatter, value: Any, options: DateFormat) -> Any:
    pattern = options.format
    # only numeric-looking input is re-parsed; date strings pass through as-is
    if not pattern or to_decimal(value) is None:
        return value
    try:
        if isinstance(value, str):
            ts = pd.to_datetime(value.strip())
        else:
            ts = pd.to_datetime(value, unit="ms")
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug("date value %r not parsed: %s", value, e)
        return value
    if pd.isna(ts):
        return value
    return render_date_pattern(ts, pattern)


default_formatter = ValueFormatter()


def to_formatted_value(value: Any, spec: Any, formatter: ValueFormatter | None = None) -> Any:
    return (formatter or default_formatter).format(value, spec)
