from collections import namedtuple
from types import SimpleNamespace

import pytest

from eulamadness.common import Vec2
from eulamadness.entities import (
    DAMAGE_GROUP,
    ITEM_GROUP,
    LADDER_GROUP,
    PASSAGE_GROUP,
    TERRAIN_GROUP,
    BackgroundTiler,
    CurseEntity,
    DirtEntity,
    EntranceEntity,
    ExitEntity,
    ExplosionEntity,
    FloatingTextEntity,
    GrassEntity,
    KeyEntity,
    LadderEntity,
    MineEntity,
    PlankEntity,
    SpikeEntity,
    StoneEntity,
)
from eulamadness.entitymanager import EntityManager
from eulamadness.fonts import FontColor
from eulamadness.render import Layer
from eulamadness.sprites import Frame, Sprite

Drawn = namedtuple("Drawn", "path frame position scale layer")


class FakeRender:
    def __init__(self):
        self.layer = Layer.TILE
        self.camera = Vec2(0, 0)

    def set_layer(self, layer):
        self.layer = layer


class FakeSprites:
    def __init__(self, render):
        self.render = render
        self.sprites = {}
        self.paths = {}
        self.draws = []

    def get(self, path):
        if path not in self.sprites:
            sprite = Sprite(None, (Frame(Vec2(0, 0), Vec2(16, 16)), Frame(Vec2(16, 0), Vec2(32, 32))))
            self.sprites[path] = sprite
            self.paths[id(sprite)] = path
        return self.sprites[path]

    def draw(self, sprite, frame, position, scale=Vec2(1.0, 1.0)):
        self.draws.append(Drawn(self.paths[id(sprite)], frame, position, scale, self.render.layer))


class FakeFonts:
    def __init__(self, render):
        self.render = render
        self.draws = []

    def draw(self, color, position, text):
        self.draws.append((color, position, text, self.render.layer))


@pytest.fixture
def app():
    render = FakeRender()
    return SimpleNamespace(
        render_manager=render,
        sprite_manager=FakeSprites(render),
        font_manager=FakeFonts(render),
    )


TILES = [
    (DirtEntity, "Sprites/Wall.txt", 1, TERRAIN_GROUP),
    (GrassEntity, "Sprites/Wall.txt", 2, TERRAIN_GROUP),
    (PlankEntity, "Sprites/Plank.txt", 0, TERRAIN_GROUP),
    (StoneEntity, "Sprites/Wall.txt", 0, TERRAIN_GROUP),
    (ExplosionEntity, "Sprites/Wall.txt", 0, DAMAGE_GROUP),
    (KeyEntity, "Sprites/Item.txt", 0, ITEM_GROUP),
    (MineEntity, "Sprites/Mine.txt", 0, 0),
    (CurseEntity, "Sprites/Item.txt", 0, ITEM_GROUP),
    (SpikeEntity, "Sprites/Spike.txt", 0, DAMAGE_GROUP),
    (EntranceEntity, "Sprites/Passage.txt", 0, PASSAGE_GROUP),
    (ExitEntity, "Sprites/Passage.txt", 0, PASSAGE_GROUP),
]


@pytest.mark.parametrize("cls, path, frame, group", TILES)
def test_tile_draws_its_frame_on_background(app, cls, path, frame, group):
    tile = cls(1, app)
    tile.position = Vec2(32, 48)
    tile.draw()
    assert tile.collision_group == group
    assert app.sprite_manager.draws == [Drawn(path, frame, Vec2(32, 48), Vec2(1.0, 1.0), Layer.BACKGROUND)]


def test_tile_sizes(app):
    assert DirtEntity(1, app).size == Vec2(16, 16)
    assert PlankEntity(2, app).size == Vec2(16, 2)


def test_terrain_blocks_place(app):
    manager = EntityManager(None, clock=lambda: 0)
    dirt = manager.make_entity(DirtEntity, app)
    assert not manager.is_place_empty(dirt.position, Vec2(4, 4), TERRAIN_GROUP)
    assert manager.is_place_empty(dirt.position, Vec2(4, 4), LADDER_GROUP)


def test_ladder_is_climbable_not_solid(app):
    manager = EntityManager(None, clock=lambda: 0)
    ladder = manager.make_entity(LadderEntity, app)
    assert not manager.is_place_empty(ladder.position, Vec2(4, 4), LADDER_GROUP)
    assert manager.is_place_empty(ladder.position, Vec2(4, 4), TERRAIN_GROUP)


def test_ladder_light_is_centred(app):
    ladder = LadderEntity(1, app)
    ladder.position = Vec2(64, 32)
    ladder.draw()
    base, light = app.sprite_manager.draws
    assert base.layer == Layer.BACKGROUND
    assert light.path == "Sprites/Light.txt"
    assert light.layer == Layer.LIGHT
    assert light.frame == 1
    assert light.scale == Vec2(2.0, 2.0)
    glow = app.sprite_manager.get("Sprites/Light.txt").frames[1].size
    assert light.position + glow == ladder.position + ladder.size / 2


def test_floating_text_rises(app):
    text = FloatingTextEntity(1, app)
    text.position = Vec2(10, 10)
    text.tick(16)
    text.tick(16)
    assert text.position == Vec2(10, 8)


def test_floating_text_expires_after_lifetime(app):
    text = FloatingTextEntity(1, app)
    text.tick(FloatingTextEntity.LIFETIME - 1)
    assert not text.is_removed
    text.tick(1)
    assert text.is_removed


def test_floating_text_draws_on_effects(app):
    text = FloatingTextEntity(1, app, text="boom", color=FontColor.RED)
    text.position = Vec2(5, 6)
    text.draw()
    assert app.font_manager.draws == [(FontColor.RED, Vec2(5, 6), "boom", Layer.EFFECTS)]


@pytest.mark.parametrize("camera", [Vec2(0, 0), Vec2(37, 85), Vec2(-5, -21)])
def test_background_covers_view(app, camera):
    app.render_manager.camera = camera
    BackgroundTiler(1, app).draw()
    draws = app.sprite_manager.draws
    assert {d.layer for d in draws} == {Layer.TILE}
    assert {d.frame for d in draws} == {0}
    assert {d.path for d in draws} == {"Sprites/Wall.txt"}
    xs = [d.position.x for d in draws]
    ys = [d.position.y for d in draws]
    assert min(xs) <= camera.x
    assert min(ys) <= camera.y
    assert max(xs) + 16 >= camera.x + 320
    assert max(ys) + 16 >= camera.y + 240
    assert len({d.position for d in draws}) == len(draws)


def test_background_tiles_are_grid_aligned(app):
    app.render_manager.camera = Vec2(37, 85)
    BackgroundTiler(1, app).draw()
    assert all(d.position.x % 16 == 0 and d.position.y % 16 == 0 for d in app.sprite_manager.draws)