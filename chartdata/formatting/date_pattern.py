from __future__ import annotations

import re

import pandas as pd

"""Render timestamps with dayjs/moment style patterns (``YYYY-MM-DD HH:mm``).

Text inside square brackets is emitted literally, as in dayjs.
"""

__all__ = ["render_date_pattern"]

_TOKENS = re.compile(
    r"\[(?P<literal>[^\]]*)\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|SSS|A|a"
)


def _hour12(ts: pd.Timestamp) -> int:
    return ts.hour % 12 or 12


_RENDERERS = {
    "YYYY": lambda ts: f"{ts.year:04d}",
    "YY": lambda ts: f"{ts.year % 100:02d}",
    "MMMM": lambda ts: ts.month_name(),
    "MMM": lambda ts: ts.month_name()[:3],
    "MM": lambda ts: f"{ts.month:02d}",
    "M": lambda ts: str(ts.month),
    "DD": lambda ts: f"{ts.day:02d}",
    "D": lambda ts: str(ts.day),
    "dddd": lambda ts: ts.day_name(),
    "ddd": lambda ts: ts.day_name()[:3],
    "HH": lambda ts: f"{ts.hour:02d}",
    "H": lambda ts: str(ts.hour),
    "hh": lambda ts: f"{_hour12(ts):02d}",
    "h": lambda ts: str(_hour12(ts)),
    "mm": lambda ts: f"{ts.minute:02d}",
    "m": lambda ts: str(ts.minute),
    "ss": lambda ts: f"{ts.second:02d}",
    "s": lambda ts: str(ts.second),
    "SSS": lambda ts: f"{ts.microsecond // 1000:03d}",
    "A": lambda ts: "AM" if ts.hour < 12 else "PM",
    "a": lambda ts: "am" if ts.hour < 12 else "pm",
}


def render_date_pattern(ts: pd.Timestamp, pattern: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        literal = match.group("literal")
        if literal is not None:
            return literal
        return _RENDERERS[match.group(0)](ts)

    return _TOKENS.sub(_replace, pattern)
