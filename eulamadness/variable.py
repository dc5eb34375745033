"""Loosely typed game variable with lenient conversions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Union

from .common import to_upper, trim

Value = Union[float, str, int, bool]

_WHITESPACE = " \t\n\v\f\r"
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text.lstrip(_WHITESPACE))
    if match is None:
        return 0.0
    literal = match.group()
    result = float(literal)
    if math.isinf(result) and "inf" not in literal.lower():
        return 0.0
    return result


def _parse_int(text: str) -> int:
    match = _INT_PREFIX.match(text.lstrip(_WHITESPACE))
    if match is None:
        return 0
    result = int(match.group())
    if not _INT_MIN <= result <= _INT_MAX:
        return 0
    return result


@dataclass
class Variable:
    """Holds a float, string, int or bool and converts between them."""

    value: Value = 0.0

    def as_float(self) -> float:
        value = self.value
        if isinstance(value, str):
            return _parse_float(value)
        return float(value)

    def as_str(self) -> str:
        value = self.value
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return f"{value:f}"
        return value

    def as_int(self) -> int:
        value = self.value
        if isinstance(value, str):
            return _parse_int(value)
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return int(value)

    def as_bool(self) -> bool:
        value = self.value
        if isinstance(value, str):
            return to_upper(trim(value)) == "TRUE"
        return bool(value)