# eulamadness

The engine and the game entities of a small side-scrolling cave platformer,
built on pygame: a layered renderer with a camera and a light layer, sprite
sheets described by text files, bitmap fonts and digit readouts, fixed-timestep
entities with alarms and grid-based collision, and the hero, terrain, ladder
and effect entities that make up the game.

## Installing

```
pip install .
```

The package needs pygame.

## What is not included

There is no command that starts the game and no level generator: nothing
builds a level out of room templates. To play, write a short script that
creates an `App`, registers the entities, places them, and calls `App.run()`
in a loop (see below).

## Data files

`App` reads its assets through `eulamadness.filemanager.FileManager`, which
first looks in a data directory (`Data` by default) and then in an archive in
the `PACK` format (`data.pak` by default). Images are BMP files.

A sprite description is a text file with lines such as

```
Texture Images/Wall.bmp
Frame 0 0 16 16
Frame 16 0 16 16
```

The last `Texture` line wins; without any `Frame` line the whole texture is a
single frame. The entities expect `Sprites/Wall.txt`, `Sprites/Plank.txt`,
`Sprites/Ladder.txt`, `Sprites/Light.txt`, `Sprites/Item.txt`,
`Sprites/Mine.txt`, `Sprites/Spike.txt`, `Sprites/Passage.txt`,
`Sprites/Hero.txt` and `Sprites/Digits.txt`, and `FontManager` expects one font
sheet per colour under `Fonts/` (`White.txt`, `Gray.txt`, `Red.txt`,
`Green.txt`, `Blue.txt`, `Purple.txt`, `Gold.txt`, `Swamp.txt`,
`LightBlue.txt`).

## Driving the game

```python
from eulamadness.app import App
from eulamadness.common import Vec2
from eulamadness.entities import BackgroundTiler, DirtEntity, FloatingTextEntity
from eulamadness.hero import Hero

app = App.instance()
manager = app.entity_manager
manager.register_entity("FloatingTextEntity", FloatingTextEntity)

manager.make_entity(BackgroundTiler)
for column in range(10):
    block = manager.make_entity(DirtEntity)
    block.position = Vec2(column * 16, 0)
    manager.update_collision(block)

hero = manager.make_entity(Hero)
hero.position = Vec2(0, -64)
manager.update_collision(hero)

while True:
    app.run()  # raises SystemExit once the window is closed
```

Controls handled by `Hero`:

| Key                  | Action                                    |
|----------------------|-------------------------------------------|
| Left / Right, A / D  | walk                                      |
| Up / Down, W / S     | climb a ladder                            |
| Z                    | jump; with Down held, drop through planks |
| Down (while hanging) | let go of a ledge                         |
| X                    | spawn a "FloatingTextEntity" at the hero  |

## The modules

- `eulamadness.common`: `Vec2` (integer or float 2D vectors), string helpers
  (`trim`, `next_token`, ...) and `rect_contains` / `rect_overlaps`.
- `eulamadness.lru.LRUCache`: a least-recently-used cache.
- `eulamadness.alarm.Alarm`: repeating millisecond timers advanced by
  `update(delta)`; due alarms are taken one at a time from `next_due()`.
- `eulamadness.variable.Variable` and `eulamadness.state.State`: loosely typed
  game variables that read back with `as_float`, `as_int`, `as_str` and
  `as_bool`.
- `eulamadness.filemanager.FileManager`: files from a directory or a `PACK`
  archive, cached.
- `eulamadness.surfaces.SurfaceManager`: BMP files decoded into pygame
  surfaces.
- `eulamadness.gridmap.Gridmap`: a spatial hash for broad-phase collision.
- `eulamadness.entity.Entity`: position, size, collision group, alarms and
  pixel-stepped movement (`move_with_condition`).
- `eulamadness.entitymanager.EntityManager`: owns entities, steps them at a
  fixed timestep and answers `is_place_empty` / `collision_list` queries.
- `eulamadness.render`: `Layer` and `RenderManager`, which queues draw commands
  per layer and renders them with the camera offset and the light layer.
- `eulamadness.sprites`: `parse_sprite_info`, `Frame`, `Sprite` and
  `SpriteManager`.
- `eulamadness.fonts`: `FontColor` and `FontManager`.
- `eulamadness.digits.DigitManager`: fixed-width numeric readouts.
- `eulamadness.app.App`: wires all managers together.
- `eulamadness.entities`: terrain, ladder, item, hazard and passage tiles,
  `FloatingTextEntity` and `BackgroundTiler`.
- `eulamadness.hero`: `Hero`, with its `Key` and `HeroState` enums.

## Running the tests

```
pip install .[test]
pytest
```