"""The player character: input, platforming state machine and drawing."""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Any, Optional

import pygame

from .app import App
from .common import Vec2, rect_overlaps
from .entities import LADDER_GROUP, TERRAIN_GROUP, FloatingTextEntity, PlankEntity
from .entity import Entity
from .fonts import FontColor
from .render import Layer


class Key(Enum):
    """Actions the hero reacts to."""

    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    X = auto()
    Z = auto()
    C = auto()
    SHIFT = auto()
    ESCAPE = auto()


class HeroState(Enum):
    NORMAL = auto()
    JUMP = auto()
    FALL = auto()
    CLIMB = auto()
    HOLD = auto()


_KEY_MAP = {
    pygame.K_UP: Key.UP,
    pygame.K_w: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_s: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_a: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_d: Key.RIGHT,
    pygame.K_z: Key.Z,
    pygame.K_x: Key.X,
    pygame.K_c: Key.C,
    pygame.K_LSHIFT: Key.SHIFT,
    pygame.K_ESCAPE: Key.ESCAPE,
}

_SPRITE_FRAMES = {
    HeroState.NORMAL: 0,
    HeroState.JUMP: 2,
    HeroState.FALL: 0,
    HeroState.CLIMB: 5,
    HeroState.HOLD: 1,
}

_RUN_FRAME = 3
_WALK_SPEED = 100.0
_CLIMB_SPEED = 100.0
_DROP_SPEED = 80.0
_SPRITE_SIZE = 16


class Hero(Entity):
    """Runs, jumps, climbs ladders and hangs on to ledges."""

    GRAVITY = 500.0
    SIZE = Vec2(4, 12)

    def __init__(self, entity_id: int, app: Optional[Any] = None) -> None:
        super().__init__(entity_id)
        self.app = app if app is not None else App.instance()
        self.size = self.SIZE
        self.position = Vec2(0, 0)
        self.keys_pressed: set[Key] = set()
        self.keys_held: set[Key] = set()
        self.face_left = False
        self.ignore_planks = False
        self.alternate_run = False
        self.state = HeroState.NORMAL
        self.speed = Vec2(0.0, 0.0)
        self.fraction = Vec2(0.0, 0.0)

        render = self.app.render_manager
        render.light_enabled = True
        render.set_default_light_color(0, 0, 0)
        self.alarm.set(0, 100)

    def handle_input(self, event: Any) -> None:
        """Track pressed and held keys from key-down and key-up events."""
        event_type = getattr(event, "type", None)
        if event_type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        key = _KEY_MAP.get(getattr(event, "key", None))
        if key is None:
            return
        if event_type == pygame.KEYDOWN:
            self.keys_held.add(key)
            self.keys_pressed.add(key)
        else:
            self.keys_held.discard(key)

    # -- state machine -------------------------------------------------

    def _jump_speed(self) -> float:
        return -math.sqrt(2 * self.GRAVITY * (16 + (16 - self.size.y)))

    def _fallen(self, delta: int) -> Vec2:
        """Speed with horizontal motion cleared and gravity applied."""
        return Vec2(0.0, float(self.speed.y) + self.movement_per_tick(delta, self.GRAVITY))

    def _steer(self) -> None:
        x = self.speed.x
        if Key.RIGHT in self.keys_held:
            x = _WALK_SPEED
        if Key.LEFT in self.keys_held:
            x = -_WALK_SPEED
        self.speed = Vec2(float(x), float(self.speed.y))

    def _wants_climb(self) -> bool:
        if Key.UP not in self.keys_held and Key.DOWN not in self.keys_held:
            return False
        return not self.app.entity_manager.is_place_empty(self.position, self.size, LADDER_GROUP)

    def _wall_at(self, position: Vec2) -> bool:
        manager = self.app.entity_manager
        hits = manager.collision_list(position, Vec2(self.size.x, 2), TERRAIN_GROUP, self.id)
        return any(not isinstance(manager.entity(other), PlankEntity) for other in hits)

    def _spawn_death_text(self) -> None:
        text = self.app.entity_manager.make_entity_by_name("FloatingTextEntity")
        if isinstance(text, FloatingTextEntity):
            text.text = "You died, LMAO"
            text.color = FontColor.RED
        text.position = self.position

    def _update_normal(self, delta: int) -> bool:
        manager = self.app.entity_manager
        self.speed = self._fallen(delta)
        self._steer()

        if Key.X in self.keys_pressed:
            self._spawn_death_text()

        if self._wants_climb():
            self.state = HeroState.CLIMB
            return False

        ground = self.position + Vec2(-2, self.size.y)
        if not manager.is_place_empty(ground, Vec2(self.size.x + 4, 1), TERRAIN_GROUP, self.id):
            if Key.DOWN in self.keys_held:
                if Key.Z in self.keys_pressed:
                    self.ignore_planks = True
                    self.speed = Vec2(float(self.speed.x), _DROP_SPEED)
                    self.state = HeroState.FALL
                    return False
            elif Key.Z in self.keys_pressed:
                self.speed = Vec2(float(self.speed.x), self._jump_speed())
                self.state = HeroState.JUMP
                return False

        if self.movement_per_tick(delta, self.speed.y) >= 1.0:
            self.state = HeroState.FALL
        return False

    def _update_jump(self, delta: int) -> bool:
        self.speed = self._fallen(delta)
        if self._wants_climb():
            self.state = HeroState.CLIMB
            return False
        self._steer()
        if self.speed.y > 0:
            self.state = HeroState.FALL
        return False

    def _update_fall(self, delta: int) -> bool:
        manager = self.app.entity_manager
        self.speed = self._fallen(delta)
        if self._wants_climb():
            self.state = HeroState.CLIMB
            return False

        ledge_size = Vec2(self.size.x * 2, self.size.y)
        if Key.RIGHT in self.keys_held:
            self.speed = Vec2(_WALK_SPEED, float(self.speed.y))
            if self._wall_at(self.position + Vec2(self.size.x, 0)):
                above = self.position + Vec2(0, -self.size.y)
                if manager.is_place_empty(above, ledge_size, TERRAIN_GROUP, self.id):
                    self.state = HeroState.HOLD
                    return False
        if Key.LEFT in self.keys_held:
            self.speed = Vec2(-_WALK_SPEED, float(self.speed.y))
            if self._wall_at(self.position - Vec2(self.size.x, 0)):
                above = self.position - Vec2(self.size.x, self.size.y)
                if manager.is_place_empty(above, ledge_size, TERRAIN_GROUP, self.id):
                    self.state = HeroState.HOLD
                    return False

        below = self.position + Vec2(0, self.size.y)
        if not manager.is_place_empty(below, Vec2(self.size.x, 1), TERRAIN_GROUP, self.id):
            self.state = HeroState.NORMAL
        return False

    def _update_climb(self, delta: int) -> bool:
        if self.app.entity_manager.is_place_empty(self.position, self.size, LADDER_GROUP):
            self.state = HeroState.NORMAL
            return True

        x = y = 0.0
        if Key.RIGHT in self.keys_held:
            x = _CLIMB_SPEED
        if Key.LEFT in self.keys_held:
            x = -_CLIMB_SPEED
        if Key.UP in self.keys_held:
            y = -_CLIMB_SPEED
        if Key.DOWN in self.keys_held:
            y = _CLIMB_SPEED
        self.speed = Vec2(x, y)
        return False

    def _update_hold(self, delta: int) -> bool:
        self.speed = Vec2(0.0, 0.0)
        if Key.DOWN in self.keys_pressed:
            self.state = HeroState.FALL
        elif Key.Z in self.keys_pressed:
            self.speed = Vec2(0.0, self._jump_speed())
            self.state = HeroState.JUMP
        return False

    def _advance_state(self, delta: int) -> bool:
        """Run the current state's logic; True means evaluate again."""
        match self.state:
            case HeroState.NORMAL:
                return self._update_normal(delta)
            case HeroState.JUMP:
                return self._update_jump(delta)
            case HeroState.FALL:
                return self._update_fall(delta)
            case HeroState.CLIMB:
                return self._update_climb(delta)
            case HeroState.HOLD:
                return self._update_hold(delta)
        return False

    def _can_stand(self, position: Vec2) -> bool:
        manager = self.app.entity_manager
        for other_id in manager.collision_list(position, self.size, TERRAIN_GROUP, self.id):
            other = manager.entity(other_id)
            if not isinstance(other, PlankEntity):
                return False
            if self.ignore_planks or self.speed.y < 0:
                continue
            if rect_overlaps(self.position, self.size, other.position, other.size):
                continue
            return False
        return True

    def update(self, delta: int) -> None:
        while self._advance_state(delta):
            pass

        if self.speed.x < 0:
            self.face_left = True
        elif self.speed.x > 0:
            self.face_left = False

        step = self.movement_per_tick(delta, self.speed)
        self.fraction, (free_x, free_y) = self.move_with_condition(step, self.fraction, self._can_stand)
        if not free_x:
            self.speed = Vec2(0.0, float(self.speed.y))
        if not free_y:
            self.speed = Vec2(float(self.speed.x), 0.0)

        render = self.app.render_manager
        render.camera = self.position - render.size / 2

        self.ignore_planks = False
        self.keys_pressed.clear()

    # -- presentation --------------------------------------------------

    def draw(self) -> None:
        render = self.app.render_manager
        sprites = self.app.sprite_manager

        render.set_layer(Layer.FOREGROUND)
        hero = sprites.get("Sprites/Hero.txt")
        frame = _SPRITE_FRAMES[self.state]
        if self.state is HeroState.NORMAL and self.speed.x != 0 and self.alternate_run:
            frame = _RUN_FRAME

        offset = Vec2(int((_SPRITE_SIZE - self.size.x) / 2), _SPRITE_SIZE - self.size.y)
        scale = Vec2(-1.0 if self.face_left else 1.0, 1.0)
        sprites.draw(hero, frame, self.position - offset, scale)

        render.set_layer(Layer.LIGHT)
        light = sprites.get("Sprites/Light.txt")
        sprites.draw(light, 0, self.position - light.frames[0].size * 4 / 2, Vec2(4.0, 4.0))

    def on_alarm(self, alarm_id: int) -> None:
        if alarm_id == 0:
            self.alternate_run = not self.alternate_run