"""Sprite sheets described by small text files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

import pygame

from .common import Vec2, next_token, right_trim, trim
from .lru import LRUCache
from .render import Flip

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


@dataclass(frozen=True)
class Frame:
    """Rectangle of one animation frame inside the texture."""

    position: Vec2
    size: Vec2


@dataclass(frozen=True)
class Sprite:
    texture: Optional[pygame.Surface]
    frames: tuple[Frame, ...]


def _frame_error(path: str) -> ValueError:
    return ValueError(f"frame should have x, y, width, height parameters for {path}")


def _to_int(text: str, path: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise _frame_error(path)
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise _frame_error(path)
    return value


def parse_sprite_info(data: Union[str, bytes], path: str) -> tuple[Optional[str], list[Frame]]:
    """Parse a sprite description into its texture path and frames.

    Lines are ``Texture <path>`` and ``Frame <x> <y> <width> <height>``,
    fields separated by single spaces; other lines are ignored. The last
    texture line wins.
    """
    if isinstance(data, bytes):
        data = data.decode("latin-1")

    texture: Optional[str] = None
    frames: list[Frame] = []

    for line in data.split("\n"):
        action, remainder = next_token(trim(line), " ")
        action = right_trim(action)

        if action == "Texture":
            name, remainder = next_token(remainder, " ")
            name = trim(name)
            if not name:
                raise ValueError(f"texture name should not be empty for {path}")
            texture = name
        elif action == "Frame":
            fields = []
            for _ in range(4):
                token, remainder = next_token(remainder, " ")
                fields.append(trim(token))
            if not all(fields):
                raise _frame_error(path)
            x, y, width, height = (_to_int(field, path) for field in fields)
            frames.append(Frame(Vec2(x, y), Vec2(width, height)))

    return texture, frames


class SpriteManager:
    """Loads sprites by description file and queues them for drawing."""

    def __init__(self, file_manager: Any, render_manager: Any, cache_size: int = 4) -> None:
        self._file_manager = file_manager
        self._render_manager = render_manager
        self._cache: LRUCache[str, Sprite] = LRUCache(cache_size)

    def get(self, path: str) -> Sprite:
        """Sprite described by the file at ``path``, cached.

        Without any frame line the whole texture becomes a single frame.
        """
        if path in self._cache:
            return self._cache.get(path)

        texture_name, frames = parse_sprite_info(self._file_manager.get(path), path)
        texture = self._render_manager.get(texture_name) if texture_name is not None else None

        if not frames:
            if texture is None:
                raise ValueError(f"can't query texture information for {path}")
            width, height = texture.get_size()
            frames = [Frame(Vec2(0, 0), Vec2(width, height))]

        sprite = Sprite(texture, tuple(frames))
        self._cache.put(path, sprite)
        return sprite

    def draw(
        self,
        sprite: Sprite,
        frame: int,
        position: Union[Vec2, Sequence[int]],
        scale: Union[Vec2, Sequence[float]] = Vec2(1.0, 1.0),
    ) -> None:
        """Queue ``frame`` of ``sprite``; a negative scale mirrors that axis."""
        frame_data = sprite.frames[frame]
        if not isinstance(position, Vec2):
            position = Vec2(*position)
        if not isinstance(scale, Vec2):
            scale = Vec2(*scale)

        size = frame_data.size * scale
        width, height = size.x, size.y
        flip = Flip.NONE
        if width < 0:
            width = -width
            flip |= Flip.HORIZONTAL
        if height < 0:
            height = -height
            flip |= Flip.VERTICAL

        self._render_manager.set_texture(sprite.texture)
        self._render_manager.draw_sprite(
            frame_data.position, frame_data.size, position, Vec2(width, height), flip
        )