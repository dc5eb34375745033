"""Owns all entities, steps them at a fixed rate and answers collision queries."""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, Union

from .common import Vec2, rect_overlaps
from .entity import Entity
from .gridmap import Gridmap

EntityFactory = Callable[..., Entity]

_MAX_ATTEMPTS = 5


def _monotonic_millis() -> int:
    return time.monotonic_ns() // 1_000_000


class EntityManager:
    """Registry of live entities with a fixed-timestep update loop."""

    def __init__(
        self,
        render_manager: Any,
        timestep: int = 1000 // 30,
        clock: Callable[[], int] = _monotonic_millis,
    ) -> None:
        self._render_manager = render_manager
        self.timestep = timestep
        self._clock = clock
        self._entities: dict[int, Entity] = {}
        self._factories: dict[str, EntityFactory] = {}
        self._id_counter = 0
        self._last_update_tick = clock()
        self._gridmap = Gridmap()

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def run(self) -> None:
        """Dispatch input, step the simulation and draw every entity."""
        self._input()
        self.update()
        self._draw()

    def entity(self, entity_id: int) -> Entity:
        try:
            return self._entities[entity_id]
        except KeyError:
            raise KeyError(f"Could not find entity with id: {entity_id}") from None

    def update_collision(self, entity: Union[int, Entity]) -> None:
        """Move the entity's grid registration to its current rectangle."""
        if not isinstance(entity, Entity):
            entity = self.entity(entity)
        if entity.has_changes():
            self._gridmap.remove(entity.ack_position, entity.ack_size, entity.id)
            self._gridmap.add(entity.position, entity.size, entity.id)
            entity.ack_changes()

    def register_entity(self, name: str, factory: EntityFactory) -> None:
        if name in self._factories:
            raise ValueError(f"can't register duplicate entity with name {name}")
        self._factories[name] = factory

    def _adopt(self, entity: Entity) -> Entity:
        self._entities[entity.id] = entity
        self._gridmap.add(entity.position, entity.size, entity.id)
        entity.ack_changes()
        return entity

    def make_entity(self, factory: EntityFactory, *args: Any) -> Entity:
        """Build an entity with a fresh id and register it."""
        self._id_counter += 1
        return self._adopt(factory(self._id_counter, *args))

    def make_entity_by_name(self, name: str) -> Entity:
        factory = self._factories.get(name)
        if factory is None:
            raise KeyError(f"can't create entity with name {name}")
        return self.make_entity(factory)

    def is_place_empty(
        self,
        position: Vec2,
        size: Vec2,
        group: int,
        ignore_id: Optional[int] = None,
    ) -> bool:
        """Whether no entity of ``group`` overlaps the rectangle."""
        for entity_id in self._gridmap.query(position, size):
            other = self.entity(entity_id)
            if entity_id == ignore_id or not other.collides_with(group):
                continue
            if rect_overlaps(position, size, other.position, other.size):
                return False
        return True

    def collision_list(
        self,
        position: Vec2,
        size: Vec2,
        group: int,
        ignore_id: Optional[int] = None,
    ) -> set[int]:
        """Ids of the ``group`` entities overlapping the rectangle."""
        result: set[int] = set()
        for entity_id in self._gridmap.query(position, size):
            other = self.entity(entity_id)
            if other.id == ignore_id or not other.collides_with(group):
                continue
            if rect_overlaps(position, size, other.position, other.size):
                result.add(entity_id)
        return result

    def _input(self) -> None:
        for event in self._render_manager.poll_events():
            for entity in list(self._entities.values()):
                entity.handle_input(event)

    def update(self) -> None:
        """Run as many fixed steps as elapsed time calls for, at most four."""
        current = self._clock()
        attempts = _MAX_ATTEMPTS

        while True:
            attempts -= 1
            if not attempts or current - self._last_update_tick <= self.timestep:
                break
            self._last_update_tick += self.timestep
            self._step()

        if not attempts:
            self._last_update_tick = current

    def _step(self) -> None:
        removed: list[int] = []
        for entity_id, entity in list(self._entities.items()):
            if not entity.is_removed:
                entity.tick(self.timestep)

            if entity.is_removed:
                self._gridmap.remove(entity.ack_position, entity.ack_size, entity.id)
                removed.append(entity_id)
            else:
                self.update_collision(entity)

        for entity_id in removed:
            self._entities.pop(entity_id, None)

    def _draw(self) -> None:
        for entity in list(self._entities.values()):
            entity.draw()