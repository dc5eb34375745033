"""Bitmap text drawn from per-colour font sprite sheets."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Sequence, Union

from .common import Vec2


class FontColor(IntEnum):
    """Colours a font sheet exists for."""

    WHITE = 0
    GRAY = 1
    RED = 2
    GREEN = 3
    BLUE = 4
    PURPLE = 5
    GOLD = 6
    SWAMP = 7
    LIGHT_BLUE = 8


_FONT_FILES = {
    FontColor.WHITE: "Fonts/White.txt",
    FontColor.GRAY: "Fonts/Gray.txt",
    FontColor.RED: "Fonts/Red.txt",
    FontColor.GREEN: "Fonts/Green.txt",
    FontColor.BLUE: "Fonts/Blue.txt",
    FontColor.PURPLE: "Fonts/Purple.txt",
    FontColor.GOLD: "Fonts/Gold.txt",
    FontColor.SWAMP: "Fonts/Swamp.txt",
    FontColor.LIGHT_BLUE: "Fonts/LightBlue.txt",
}


class FontManager:
    """Queues printable ASCII text as sprite frames, one frame per glyph.

    Frame ``n`` of a font sheet is the glyph for character ``' ' + n``.
    A newline returns to the starting column one line lower, a tab skips
    four glyph widths, and any other character is ignored.
    """

    GLYPH_SIZE = Vec2(5, 12)
    TAB_WIDTH = 4

    def __init__(self, sprite_manager: Any) -> None:
        self._sprite_manager = sprite_manager
        self._fonts = {color: sprite_manager.get(path) for color, path in _FONT_FILES.items()}

    def draw(self, color: FontColor, position: Union[Vec2, Sequence[int]], text: str) -> None:
        font = self._fonts[FontColor(color)]
        if not isinstance(position, Vec2):
            position = Vec2(*position)

        cursor = position
        for symbol in text:
            if " " <= symbol <= "~":
                self._sprite_manager.draw(font, ord(symbol) - ord(" "), cursor)
                cursor += Vec2(self.GLYPH_SIZE.x, 0)
            elif symbol == "\n":
                cursor = Vec2(position.x, cursor.y + self.GLYPH_SIZE.y)
            elif symbol == "\t":
                cursor += Vec2(self.GLYPH_SIZE.x * self.TAB_WIDTH, 0)