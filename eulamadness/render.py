"""Layered, camera-aware drawing on top of a pygame window."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any, Iterator, Optional, Sequence, Union

import pygame

from .common import Vec2
from .lru import LRUCache

_MIN_WINDOW = (640, 480)


class Layer(IntEnum):
    """Draw layers, rendered in this order."""

    TILE = 0
    BACKGROUND = 1
    BACKGROUND_GLOW = 2
    FOREGROUND = 3
    FOREGROUND_GLOW = 4
    EFFECTS = 5
    EFFECTS_GLOW = 6
    LIGHT = 7
    INTERFACE = 8


GLOW_LAYERS = frozenset({Layer.BACKGROUND_GLOW, Layer.FOREGROUND_GLOW, Layer.EFFECTS_GLOW})


class Flip(IntFlag):
    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2


@dataclass(frozen=True)
class ColorCommand:
    red: int
    green: int
    blue: int
    alpha: int = 255


@dataclass(frozen=True)
class RectCommand:
    position: Vec2
    size: Vec2
    filled: bool


@dataclass(frozen=True)
class LineCommand:
    start: Vec2
    end: Vec2


@dataclass(frozen=True)
class TextureCommand:
    texture: pygame.Surface


@dataclass(frozen=True)
class SpriteCommand:
    texture_position: Vec2
    texture_size: Vec2
    target_position: Vec2
    target_size: Vec2
    flip: Flip


@dataclass(frozen=True)
class Vertex:
    position: Vec2
    color: tuple[int, int, int, int]
    tex_coord: Vec2 = Vec2(0.0, 0.0)


@dataclass(frozen=True)
class GeometryCommand:
    vertices: tuple[Vertex, ...]
    indices: Optional[tuple[int, ...]]


Command = Union[ColorCommand, RectCommand, LineCommand, TextureCommand, SpriteCommand, GeometryCommand]


def _blit(target: pygame.Surface, source: pygame.Surface, dest: tuple[int, int], additive: bool) -> None:
    if additive:
        if source.get_flags() & pygame.SRCALPHA:
            source = source.premul_alpha()
        target.blit(source, dest, special_flags=pygame.BLEND_RGB_ADD)
    else:
        target.blit(source, dest)


class RenderManager:
    """Collects draw commands per layer and renders them once per frame.

    Everything except the interface layer is offset by ``camera``. The
    logical ``size`` is scaled to fit the window, keeping its aspect.
    """

    def __init__(
        self,
        surface_manager: Any,
        width: int = 640,
        height: int = 480,
        title: str = "Game",
        cache_size: int = 4,
    ) -> None:
        self._surface_manager = surface_manager
        self._cache: LRUCache[str, pygame.Surface] = LRUCache(cache_size)
        self._size = Vec2(width, height)
        self._commands: dict[Layer, list[Command]] = {layer: [] for layer in Layer}
        self._active: dict[Layer, Optional[pygame.Surface]] = dict.fromkeys(Layer)
        self._layer = Layer.TILE
        self._default_light = (0, 0, 0, 255)
        self._draw_color = (0, 0, 0, 0)
        self.camera = Vec2(0, 0)
        self.light_enabled = False

        try:
            pygame.display.init()
            window = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        except pygame.error as exc:
            raise RuntimeError("Can't create window") from exc
        pygame.display.set_caption(title)

        if width < _MIN_WINDOW[0] and height < _MIN_WINDOW[1]:
            window = pygame.display.set_mode(_MIN_WINDOW, pygame.RESIZABLE)

        self._window: Optional[pygame.Surface] = window
        self._screen = pygame.Surface((width, height), pygame.SRCALPHA)
        self._light = pygame.Surface((width, height), pygame.SRCALPHA)
        self._reset()

    @property
    def size(self) -> Vec2:
        return self._size

    @property
    def layer(self) -> Layer:
        return self._layer

    @property
    def is_running(self) -> bool:
        return self._window is not None

    @property
    def default_light_color(self) -> tuple[int, int, int]:
        return self._default_light[:3]

    def get(self, path: str) -> pygame.Surface:
        """Texture for the image at ``path``, cached."""
        if path in self._cache:
            return self._cache.get(path)
        texture = self._surface_manager.get(path)
        self._cache.put(path, texture)
        return texture

    def set_layer(self, layer: Layer) -> None:
        self._layer = Layer(layer)

    def set_color(self, red: int, green: int, blue: int, alpha: int = 255) -> None:
        self._commands[self._layer].append(ColorCommand(red, green, blue, alpha))

    def set_texture(self, texture: Optional[pygame.Surface]) -> None:
        """Make ``texture`` the one sprites on the current layer are cut from."""
        if self._active[self._layer] is not texture:
            self._commands[self._layer].append(TextureCommand(texture))
            self._active[self._layer] = texture

    def draw_rect(self, position: Vec2, size: Vec2, filled: bool = False) -> None:
        self._commands[self._layer].append(RectCommand(position, size, filled))

    def draw_line(self, start: Vec2, end: Vec2) -> None:
        self._commands[self._layer].append(LineCommand(start, end))

    def draw_sprite(
        self,
        texture_position: Vec2,
        texture_size: Vec2,
        target_position: Vec2,
        target_size: Vec2,
        flip: Flip = Flip.NONE,
    ) -> None:
        if self._active[self._layer] is None:
            raise RuntimeError("layer has not active texture")
        self._commands[self._layer].append(
            SpriteCommand(texture_position, texture_size, target_position, target_size, Flip(flip))
        )

    def draw_geometry(self, vertices: Sequence[Vertex], indices: Optional[Sequence[int]] = None) -> None:
        """Queue triangles; without ``indices`` every three vertices make one."""
        if self._active[self._layer] is None:
            raise RuntimeError("layer has not active texture")
        self._commands[self._layer].append(
            GeometryCommand(tuple(vertices), None if indices is None else tuple(indices))
        )

    def commands(self, layer: Layer) -> tuple[Command, ...]:
        """Commands queued so far for ``layer`` in this frame."""
        return tuple(self._commands[Layer(layer)])

    def set_default_light_color(self, red: int, green: int, blue: int) -> None:
        self._default_light = (red, green, blue, 255)

    def run(self) -> None:
        """Render every queued command, present the frame and start a new one."""
        if not self.is_running:
            return

        for layer in Layer:
            if layer is Layer.LIGHT:
                if not self.light_enabled:
                    continue
                target = self._light
            else:
                target = self._screen
            self._render_layer(layer, target)

            if layer is Layer.LIGHT:
                self._screen.blit(self._light, (0, 0), special_flags=pygame.BLEND_RGB_MULT)

        self._present()
        self._reset()

    def _render_layer(self, layer: Layer, target: pygame.Surface) -> None:
        additive = layer in GLOW_LAYERS
        offset = Vec2(0, 0) if layer is Layer.INTERFACE else self.camera
        texture: Optional[pygame.Surface] = None

        for command in self._commands[layer]:
            match command:
                case ColorCommand():
                    self._draw_color = (command.red, command.green, command.blue, command.alpha)
                case RectCommand():
                    self._paint_rect(target, command, offset, additive)
                case LineCommand():
                    self._paint_line(target, command, offset, additive)
                case TextureCommand():
                    texture = command.texture
                case SpriteCommand():
                    if texture is not None:
                        self._paint_sprite(target, texture, command, offset, additive)
                case GeometryCommand():
                    self._paint_geometry(target, command, offset, additive)

    def _paint_rect(self, target: pygame.Surface, command: RectCommand, offset: Vec2, additive: bool) -> None:
        width, height = int(command.size.x), int(command.size.y)
        if width <= 0 or height <= 0:
            return
        scratch = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.rect(scratch, self._draw_color, scratch.get_rect(), 0 if command.filled else 1)
        dest = (int(command.position.x - offset.x), int(command.position.y - offset.y))
        _blit(target, scratch, dest, additive)

    def _paint_line(self, target: pygame.Surface, command: LineCommand, offset: Vec2, additive: bool) -> None:
        start, end = command.start, command.end
        left, top = int(min(start.x, end.x)), int(min(start.y, end.y))
        width = int(abs(end.x - start.x)) + 1
        height = int(abs(end.y - start.y)) + 1
        scratch = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.line(
            scratch,
            self._draw_color,
            (int(start.x) - left, int(start.y) - top),
            (int(end.x) - left, int(end.y) - top),
        )
        _blit(target, scratch, (int(left - offset.x), int(top - offset.y)), additive)

    @staticmethod
    def _paint_sprite(
        target: pygame.Surface,
        texture: pygame.Surface,
        command: SpriteCommand,
        offset: Vec2,
        additive: bool,
    ) -> None:
        source_rect = pygame.Rect(
            int(command.texture_position.x),
            int(command.texture_position.y),
            int(command.texture_size.x),
            int(command.texture_size.y),
        ).clip(texture.get_rect())
        width, height = int(command.target_size.x), int(command.target_size.y)
        if source_rect.width <= 0 or source_rect.height <= 0 or width <= 0 or height <= 0:
            return

        image = texture.subsurface(source_rect)
        if image.get_size() != (width, height):
            image = pygame.transform.scale(image, (width, height))
        if command.flip:
            image = pygame.transform.flip(
                image, bool(command.flip & Flip.HORIZONTAL), bool(command.flip & Flip.VERTICAL)
            )
        dest = (int(command.target_position.x - offset.x), int(command.target_position.y - offset.y))
        _blit(target, image, dest, additive)

    @staticmethod
    def _paint_geometry(target: pygame.Surface, command: GeometryCommand, offset: Vec2, additive: bool) -> None:
        """Fill each triangle with the average colour of its vertices."""
        vertices = command.vertices
        order = command.indices if command.indices is not None else range(len(vertices))
        corners = [vertices[index] for index in order]

        for start in range(0, len(corners) - 2, 3):
            triangle = corners[start:start + 3]
            points = [
                (float(vertex.position.x - offset.x), float(vertex.position.y - offset.y))
                for vertex in triangle
            ]
            left = math.floor(min(x for x, _ in points))
            top = math.floor(min(y for _, y in points))
            right = math.ceil(max(x for x, _ in points))
            bottom = math.ceil(max(y for _, y in points))
            color = tuple(sum(vertex.color[channel] for vertex in triangle) // 3 for channel in range(4))

            scratch = pygame.Surface((right - left + 1, bottom - top + 1), pygame.SRCALPHA)
            pygame.draw.polygon(scratch, color, [(x - left, y - top) for x, y in points])
            _blit(target, scratch, (left, top), additive)

    def _present(self) -> None:
        window = pygame.display.get_surface()
        if window is None:
            return
        window_width, window_height = window.get_size()
        factor = min(window_width / self._size.x, window_height / self._size.y)
        width = int(factor * self._size.x)
        height = int(factor * self._size.y)

        frame = self._screen
        if (width, height) != frame.get_size():
            frame = pygame.transform.scale(frame, (max(width, 0), max(height, 0)))

        window.fill((0, 0, 0))
        window.blit(frame, ((window_width - width) // 2, (window_height - height) // 2))
        pygame.display.flip()

    def poll_events(self) -> Iterator[pygame.event.Event]:
        """Yield pending window events; a quit event shuts the window down."""
        if not self.is_running:
            return
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.shutdown()
            yield event

    def shutdown(self) -> None:
        if self.is_running:
            self._reset()
            pygame.display.quit()
            self._window = None

    def _reset(self) -> None:
        self._layer = Layer.TILE
        self._active = dict.fromkeys(Layer)
        for queue in self._commands.values():
            queue.clear()

        self._draw_color = (0, 0, 0, 0)
        self._screen.fill((0, 0, 0, 0))
        if self.light_enabled:
            self._draw_color = self._default_light
            self._light.fill(self._default_light)