"""Base class for everything that lives in the game world."""

from __future__ import annotations

from typing import Any, Callable, Union

from .alarm import Alarm
from .common import Vec2

_GROUP_MASK = 0xFFFFFFFF


class Entity:
    """A positioned, sized object that is ticked, drawn and collided.

    ``ack_position`` and ``ack_size`` record the rectangle last registered
    in the collision grid, so the owner can tell when it must be updated.
    """

    def __init__(self, entity_id: int) -> None:
        self._id = entity_id
        self._removed = False
        self.persistent = False
        self.collision_group = 0
        self.position = Vec2(0, 0)
        self.size = Vec2(0, 0)
        self.ack_position = Vec2(0, 0)
        self.ack_size = Vec2(0, 0)
        self.alarm = Alarm()

    @property
    def id(self) -> int:
        return self._id

    @property
    def is_removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        """Mark the entity for removal at the end of the current update."""
        self._removed = True

    def tick(self, delta: int) -> None:
        """Advance alarms, fire the due ones, then update."""
        self.alarm.update(delta)
        while (alarm_id := self.alarm.next_due()) is not None:
            self.on_alarm(alarm_id)
        self.update(delta)

    def handle_input(self, event: Any) -> None:
        """React to an input event; the base entity ignores it."""

    def update(self, delta: int) -> None:
        """Per-tick logic; the base entity does nothing."""

    def on_alarm(self, alarm_id: int) -> None:
        """Called when an alarm fires; the base entity does nothing."""

    def draw(self) -> None:
        """Queue drawing commands; the base entity draws nothing."""

    def has_changes(self) -> bool:
        return self.ack_position != self.position or self.ack_size != self.size

    def ack_changes(self) -> None:
        self.ack_position = self.position
        self.ack_size = self.size

    def collides_with(self, group: int) -> bool:
        return bool(self.collision_group & group & _GROUP_MASK)

    @staticmethod
    def movement_per_tick(delta: int, speed: Union[float, Vec2]) -> Union[float, Vec2]:
        """Distance covered in ``delta`` milliseconds at ``speed`` per second."""
        factor = delta / 1000.0
        if isinstance(speed, Vec2):
            return Vec2(float(speed.x) * factor, float(speed.y) * factor)
        return float(speed) * factor

    def next_movement(self, speed: float, fraction: float) -> tuple[int, float]:
        """Split ``speed + fraction`` into whole pixels and the remainder."""
        total = speed + fraction
        whole = int(total)
        return whole, total - whole

    def move_with_condition(
        self,
        speed: Vec2,
        fraction: Vec2,
        predicate: Callable[[Vec2], bool],
    ) -> tuple[Vec2, tuple[bool, bool]]:
        """Move by ``speed`` while ``predicate`` accepts the new position.

        Returns the new sub-pixel fraction and, per axis, whether the move
        went through unblocked.
        """
        distance_x, fraction_x = self.next_movement(speed.x, fraction.x)
        distance_y, fraction_y = self.next_movement(speed.y, fraction.y)
        free_x = free_y = True

        target = self.position + Vec2(distance_x, distance_y)
        if predicate(target):
            self.position = target
            return Vec2(float(fraction_x), float(fraction_y)), (free_x, free_y)

        step_x = -1 if distance_x < 0 else 1
        step_y = -1 if distance_y < 0 else 1

        for _ in range(abs(distance_x)):
            target = self.position + Vec2(step_x, 0)
            if not predicate(target):
                fraction_x = 0.0
                free_x = False
                break
            self.position = target

        for _ in range(abs(distance_y)):
            target = self.position + Vec2(0, step_y)
            if not predicate(target):
                fraction_y = 0.0
                free_y = False
                break
            self.position = target

        return Vec2(float(fraction_x), float(fraction_y)), (free_x, free_y)