from __future__ import annotations

import math
from decimal import Decimal

import pytest

from chartdata.formatting.units import NumberUnit
from chartdata.formatting.value_formatter import (
    ValueFormatter,
    to_display_string,
    to_formatted_value,
)
from chartdata.models.format_spec import FieldFormatType


def numeric(places, unit="none", grouping=False, prefix="", suffix=""):
    return {
        "type": "numeric",
        "numeric": {
            "decimalPlaces": places,
            "unitKey": unit,
            "useThousandSeparator": grouping,
            "prefix": prefix,
            "suffix": suffix,
        },
    }


@pytest.mark.parametrize(
    "value,fmt,expected",
    [
        (2000, numeric(3, "thousand", True, "a", "b"), "a2.000Kb"),
        (1111, numeric(3, "none", True, "", "b"), "1,111.000b"),
        (1111, numeric(0, "none", False, "", "b"), "1111b"),
        (3332, numeric(1, "none", True), "3,332.0"),
        (3322, numeric(-1), "3322"),
        (3333, numeric(1000), "3333"),
        ("3232a", numeric(10), "3232a"),
        (11, numeric(None), "11"),
        (12, numeric("null", None), "12"),
        (13, numeric(float("nan"), float("nan")), "13"),
        (0, numeric(0), "0"),
    ],
)
def test_numeric_format(value, fmt, expected):
    assert to_formatted_value(value, fmt) == expected


def test_large_magnitudes_keep_decimal_places():
    assert to_formatted_value(10**70, numeric(15)) == "1" + "0" * 70 + "." + "0" * 15
    assert to_formatted_value(1e100, numeric(2)) == "1" + "0" * 100 + ".00"
    assert to_formatted_value(10**90, numeric(20, "thousand")) == "1" + "0" * 87 + "." + "0" * 20 + "K"
    big = "123456789" * 10 + ".5"
    assert to_formatted_value(big, numeric(0)) == "123456789" * 9 + "123456790"

    currency = {"type": "currency", "currency": {"decimalPlaces": 2, "unitKey": "none", "currency": "USD"}}
    assert to_formatted_value(-(10**75), currency) == "-$1" + "0" * 75 + ".00"
    percentage = {"type": "percentage", "percentage": {"decimalPlaces": 1}}
    assert to_formatted_value(10**80, percentage) == "1" + "0" * 82 + ".0%"


@pytest.mark.parametrize(
    "fmt",
    [
        numeric(float("nan"), float("nan")),
        {"type": "currency", "currency": {"decimalPlaces": 3, "unitKey": "thousand", "currency": "CNY"}},
        {"type": "percentage", "percentage": {"decimalPlaces": 2}},
        {"type": "scientificNotation", "scientificNotation": {"decimalPlaces": 3}},
    ],
)
def test_nan_is_returned_unchanged(fmt):
    result = to_formatted_value(float("nan"), fmt)
    assert isinstance(result, float) and math.isnan(result)


def test_currency_with_unit_label():
    fmt = {
        "type": "currency",
        "currency": {
            "decimalPlaces": 3,
            "unitKey": "thousand",
            "useThousandSeparator": True,
            "currency": "CNY",
        },
    }
    assert to_formatted_value(3, fmt) == "¥0.003 K"


def test_currency_negative_and_unknown_code():
    fmt = {"type": "currency", "currency": {"decimalPlaces": 2, "unitKey": "none", "currency": "XYZ"}}
    assert to_formatted_value(-12.5, fmt) == "-XYZ12.50"


@pytest.mark.parametrize(
    "value,places,expected",
    [
        (4, 2, "400.00%"),
        (1, 20, "100.00000000000000000000%"),
        (1, 99, "100%"),
        (0.125, 1, "12.5%"),
    ],
)
def test_percentage(value, places, expected):
    fmt = {"type": "percentage", "percentage": {"decimalPlaces": places}}
    assert to_formatted_value(value, fmt) == expected


@pytest.mark.parametrize(
    "value,places,expected",
    [
        (50, 2, "5.00e+1"),
        (55, 3, "5.500e+1"),
        (0, 2, "0.00e+0"),
        (0.00123, 1, "1.2e-3"),
    ],
)
def test_scientific_notation(value, places, expected):
    fmt = {"type": "scientificNotation", "scientificNotation": {"decimalPlaces": places}}
    assert to_formatted_value(value, fmt) == expected


def test_date_numeric_text_is_reparsed():
    fmt = {"type": "date", "date": {"format": "YYYY-MM-DD"}}
    assert to_formatted_value("20130208", fmt) == "2013-02-08"


def test_date_text_passes_through():
    fmt = {"type": "date", "date": {"format": "YYYY-MM-DD"}}
    assert to_formatted_value("2013-02-08 00:00:00", fmt) == "2013-02-08 00:00:00"


def test_date_epoch_milliseconds():
    fmt = {"type": "date", "date": {"format": "YYYY/MM/DD HH:mm"}}
    assert to_formatted_value(1360281600000, fmt) == "2013/02/08 00:00"


@pytest.mark.parametrize(
    "value,fmt,expected",
    [
        (1, None, 1),
        (3, {"type": "", "currency": {"decimalPlaces": 3, "currency": "CNY"}}, 3),
        ("2022-03-01", {"type": "string", "currency": {"decimalPlaces": 3}}, "2022-03-01"),
        ("3", {"type": "string"}, "3"),
        ("7", {"type": "unknown-kind"}, "7"),
    ],
)
def test_passthrough_kinds(value, fmt, expected):
    assert to_formatted_value(value, fmt) == expected


def test_none_renders_empty_marker():
    assert to_formatted_value(None, numeric(2)) == "-"
    assert to_formatted_value(None, None) == "-"


def test_custom_units_currencies_and_limits():
    formatter = ValueFormatter(
        max_decimal_places=2,
        units={"lakh": NumberUnit(Decimal(100000), "L")},
        currencies={"BTC": "₿"},
        empty_value="n/a",
    )
    assert formatter.format(250000, numeric(1, "lakh")) == "2.5L"
    assert formatter.format(1, numeric(5)) == "1"
    fmt = {"type": "currency", "currency": {"decimalPlaces": 1, "currency": "btc"}}
    assert formatter.format(2, fmt) == "₿2.0"
    assert formatter.format(None, fmt) == "n/a"


def test_register_additional_kind():
    formatter = ValueFormatter()
    formatter.register(FieldFormatType.STRING, lambda f, value, options: str(value).upper())
    assert formatter.format("abc", {"type": "string"}) == "ABC"
    # the shared default stays untouched
    assert to_formatted_value("abc", {"type": "string"}) == "abc"


@pytest.mark.parametrize(
    "value,expected",
    [(None, "-"), (3.0, "3"), (2.5, "2.5"), (float("nan"), "NaN"), ("x", "x")],
)
def test_to_display_string(value, expected):
    assert to_display_string(value) == expected
