from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

"""Unit scales and currency symbols used by the value formatter."""

__all__ = [
    "NumberUnit",
    "NUMBER_UNITS",
    "CURRENCY_SYMBOLS",
    "DEFAULT_UNIT_KEY",
]

DEFAULT_UNIT_KEY = "none"


@dataclass(frozen=True)
class NumberUnit:
    multiplier: Decimal
    label: str


NUMBER_UNITS: dict[str, NumberUnit] = {
    "none": NumberUnit(Decimal(1), ""),
    "thousand": NumberUnit(Decimal(10) ** 3, "K"),
    "million": NumberUnit(Decimal(10) ** 6, "M"),
    "billion": NumberUnit(Decimal(10) ** 9, "B"),
    "wan": NumberUnit(Decimal(10) ** 4, "万"),
    "yi": NumberUnit(Decimal(10) ** 8, "亿"),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "CNY": "¥",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "HKD": "HK$",
    "TWD": "NT$",
    "KRW": "₩",
    "INR": "₹",
    "RUB": "₽",
    "AUD": "A$",
    "CAD": "CA$",
    "NZD": "NZ$",
    "SGD": "SGD",
    "CHF": "CHF",
    "SEK": "SEK",
    "BRL": "R$",
    "MXN": "MX$",
    "ILS": "₪",
    "VND": "₫",
    "THB": "THB",
    "PHP": "₱",
    "ZAR": "ZAR",
}
