"""Level pieces, effects and the scrolling background."""

from __future__ import annotations

import math
from typing import Any, ClassVar, Optional

from .app import App
from .common import Vec2
from .entity import Entity
from .fonts import FontColor
from .render import Layer

TERRAIN_GROUP = 0x01
LADDER_GROUP = 0x02
DAMAGE_GROUP = 0x04
ITEM_GROUP = 0x08
PASSAGE_GROUP = 0x10
PLANK_GROUP = 0x20

_TILE = 16
_SCREEN_WIDTH = 320
_SCREEN_HEIGHT = 240


def _resolve(app: Optional[Any]) -> Any:
    return app if app is not None else App.instance()


class TileEntity(Entity):
    """A static block that draws one sprite frame on the background layer."""

    SPRITE_PATH: ClassVar[str] = "Sprites/Wall.txt"
    FRAME: ClassVar[int] = 0
    SIZE: ClassVar[Vec2] = Vec2(16, 16)
    GROUP: ClassVar[int] = 0

    def __init__(self, entity_id: int, app: Optional[Any] = None) -> None:
        super().__init__(entity_id)
        self.app = _resolve(app)
        self.collision_group = self.GROUP
        self.size = self.SIZE
        self.sprite = self.app.sprite_manager.get(self.SPRITE_PATH)

    def draw(self) -> None:
        self.app.render_manager.set_layer(Layer.BACKGROUND)
        self.app.sprite_manager.draw(self.sprite, self.FRAME, self.position)


class DirtEntity(TileEntity):
    FRAME = 1
    GROUP = TERRAIN_GROUP


class GrassEntity(TileEntity):
    FRAME = 2
    GROUP = TERRAIN_GROUP


class PlankEntity(TileEntity):
    SPRITE_PATH = "Sprites/Plank.txt"
    SIZE = Vec2(16, 2)
    GROUP = TERRAIN_GROUP


class StoneEntity(TileEntity):
    GROUP = TERRAIN_GROUP


class LadderEntity(TileEntity):
    """A climbable tile that also casts a small light."""

    SPRITE_PATH = "Sprites/Ladder.txt"
    GROUP = LADDER_GROUP

    def draw(self) -> None:
        super().draw()
        render = self.app.render_manager
        sprites = self.app.sprite_manager
        render.set_layer(Layer.LIGHT)
        light = sprites.get("Sprites/Light.txt")
        glow = light.frames[1].size
        sprites.draw(light, 1, self.position - glow * 2 / 2 + self.size / 2, Vec2(2.0, 2.0))


class ExplosionEntity(TileEntity):
    GROUP = DAMAGE_GROUP


class KeyEntity(TileEntity):
    SPRITE_PATH = "Sprites/Item.txt"
    GROUP = ITEM_GROUP


class MineEntity(TileEntity):
    SPRITE_PATH = "Sprites/Mine.txt"


class CurseEntity(TileEntity):
    SPRITE_PATH = "Sprites/Item.txt"
    GROUP = ITEM_GROUP


class SpikeEntity(TileEntity):
    SPRITE_PATH = "Sprites/Spike.txt"
    GROUP = DAMAGE_GROUP


class EntranceEntity(TileEntity):
    SPRITE_PATH = "Sprites/Passage.txt"
    GROUP = PASSAGE_GROUP


class ExitEntity(TileEntity):
    SPRITE_PATH = "Sprites/Passage.txt"
    GROUP = PASSAGE_GROUP


class FloatingTextEntity(Entity):
    """Text that drifts upward one pixel per tick and vanishes after a second."""

    LIFETIME = 1000

    def __init__(
        self,
        entity_id: int,
        app: Optional[Any] = None,
        text: str = "",
        color: FontColor = FontColor.WHITE,
    ) -> None:
        super().__init__(entity_id)
        self.app = _resolve(app)
        self.text = text
        self.color = color
        self.alarm.set(0, self.LIFETIME)

    def update(self, delta: int) -> None:
        self.position = Vec2(self.position.x, self.position.y - 1)

    def draw(self) -> None:
        self.app.render_manager.set_layer(Layer.EFFECTS)
        self.app.font_manager.draw(self.color, self.position, self.text)

    def on_alarm(self, alarm_id: int) -> None:
        self.remove()


class BackgroundTiler(Entity):
    """Fills the view with wall tiles that scroll with the camera."""

    def __init__(self, entity_id: int, app: Optional[Any] = None) -> None:
        super().__init__(entity_id)
        self.app = _resolve(app)
        self.background = self.app.sprite_manager.get("Sprites/Wall.txt")

    def draw(self) -> None:
        render = self.app.render_manager
        sprites = self.app.sprite_manager
        camera = render.camera
        offset = Vec2(int(math.fmod(camera.x, _TILE)), int(math.fmod(camera.y, _TILE)))
        origin = camera - offset

        render.set_layer(Layer.TILE)
        for column in range(-1, _SCREEN_WIDTH // _TILE + 1):
            for row in range(-1, _SCREEN_HEIGHT // _TILE + 1):
                sprites.draw(self.background, 0, Vec2(column * _TILE, row * _TILE) + origin)