"""Fixed-width numeric readouts drawn from a digit sprite sheet."""

from __future__ import annotations

from typing import Any, Sequence, Union

from .common import Vec2

_BLANK_FRAME = 10
_POINT_OFFSET = 11
_BLANK_POINT_FRAME = 21


class DigitManager:
    """Draws non-negative numbers right-aligned in a fixed number of cells.

    Frames 0-9 are digits, 10 is an empty cell, 11-20 are digits followed
    by a decimal point and 21 is an empty cell with a point. ``point``
    counts cells from the right; the cell where it reaches zero carries
    the decimal point.
    """

    GLYPH_SIZE = Vec2(7, 12)

    def __init__(self, sprite_manager: Any) -> None:
        self._sprite_manager = sprite_manager
        self._digits = sprite_manager.get("Sprites/Digits.txt")

    def draw(
        self,
        position: Union[Vec2, Sequence[int]],
        value: int,
        length: int,
        point: int,
    ) -> None:
        if value < 0:
            raise ValueError("value must not be negative")
        if not isinstance(position, Vec2):
            position = Vec2(*position)

        x = position.x + length * self.GLYPH_SIZE.x
        for _ in range(length):
            if value:
                value, digit = divmod(value, 10)
                frame = digit + _POINT_OFFSET if point == 0 else digit
            else:
                frame = _BLANK_POINT_FRAME if point == 0 else _BLANK_FRAME
            self._sprite_manager.draw(self._digits, frame, Vec2(x, position.y))
            x -= self.GLYPH_SIZE.x
            point -= 1