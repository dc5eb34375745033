"""Integer/float 2D vectors plus string and rectangle helpers."""

from __future__ import annotations

import math
import string
from typing import Iterator, Union

Number = Union[int, float]

_WHITESPACE = " \t\n\v\f\r"
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _divide(numerator: Number, denominator: Number) -> Number:
    """Divide, truncating toward zero when both operands are integers."""
    if isinstance(numerator, int) and isinstance(denominator, int):
        quotient = abs(numerator) // abs(denominator)
        return quotient if (numerator < 0) == (denominator < 0) else -quotient
    return numerator / denominator


class Vec2:
    """Immutable 2D vector.

    A vector built from two ints is integral: every arithmetic result is
    truncated back to ints, so scaling or dividing behaves like integer
    pixel maths. A vector holding any float stays a float vector.
    """

    __slots__ = ("x", "y")

    x: Number
    y: Number

    def __init__(self, x: Number = 0, y: Number | None = None) -> None:
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", x if y is None else y)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Vec2 is immutable")

    @property
    def is_integral(self) -> bool:
        return isinstance(self.x, int) and isinstance(self.y, int)

    def _make(self, x: Number, y: Number) -> Vec2:
        if self.is_integral:
            return Vec2(int(x), int(y))
        return Vec2(float(x), float(y))

    def __add__(self, other: object) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return self._make(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return self._make(self.x - other.x, self.y - other.y)

    def __mul__(self, other: object) -> Vec2:
        if isinstance(other, Vec2):
            return self._make(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return self._make(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Vec2:
        if isinstance(other, (int, float)):
            return self._make(self.x * other, self.y * other)
        return NotImplemented

    def __truediv__(self, other: object) -> Vec2:
        if isinstance(other, Vec2):
            return self._make(_divide(self.x, other.x), _divide(self.y, other.y))
        if isinstance(other, (int, float)):
            return self._make(_divide(self.x, other), _divide(self.y, other))
        return NotImplemented

    def __neg__(self) -> Vec2:
        return self._make(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vec2({self.x!r}, {self.y!r})"

    def length(self) -> float:
        """Euclidean length as a float."""
        return math.sqrt(float(self.x * self.x + self.y * self.y))

    def normalized(self) -> Vec2:
        """Float vector of unit length pointing the same way."""
        size = self.length()
        if size == 0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vec2(self.x / size, self.y / size)


def to_upper(value: str) -> str:
    """Upper-case ASCII letters, leaving everything else as is."""
    return value.translate(_TO_UPPER)


def to_lower(value: str) -> str:
    """Lower-case ASCII letters, leaving everything else as is."""
    return value.translate(_TO_LOWER)


def left_trim(value: str) -> str:
    return value.lstrip(_WHITESPACE)


def right_trim(value: str) -> str:
    return value.rstrip(_WHITESPACE)


def trim(value: str) -> str:
    return value.strip(_WHITESPACE)


def next_token(value: str, token: str) -> tuple[str, str]:
    """Split off the text before the first ``token``.

    Returns ``(head, rest)``; when ``token`` is absent the whole value is
    the head and the rest is empty.
    """
    position = value.find(token)
    if position < 0:
        return value, ""
    return value[:position], value[position + len(token):]


def rect_contains(position: Vec2, size: Vec2, point: Vec2) -> bool:
    """Whether ``point`` lies in the rectangle, edges included."""
    return not (
        point.x < position.x
        or point.x - position.x > size.x
        or point.y < position.y
        or point.y - position.y > size.y
    )


def rect_overlaps(position_a: Vec2, size_a: Vec2, position_b: Vec2, size_b: Vec2) -> bool:
    """Whether two rectangles share area; touching edges do not count."""
    return not (
        position_b.x + size_b.x <= position_a.x
        or position_a.x + size_a.x <= position_b.x
        or position_b.y + size_b.y <= position_a.y
        or position_a.y + size_a.y <= position_b.y
    )