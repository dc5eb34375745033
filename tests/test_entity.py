import pytest

from eulamadness.common import Vec2
from eulamadness.entity import Entity


class Recorder(Entity):
    def __init__(self, entity_id):
        super().__init__(entity_id)
        self.fired = []
        self.updates = []

    def on_alarm(self, alarm_id):
        self.fired.append(alarm_id)

    def update(self, delta):
        self.updates.append(delta)


def test_new_entity_has_no_changes():
    entity = Entity(1)
    assert entity.id == 1
    assert not entity.has_changes()


def test_position_change_is_tracked_until_acked():
    entity = Entity(1)
    entity.position = Vec2(5, 6)
    assert entity.has_changes()
    entity.ack_changes()
    assert not entity.has_changes()
    assert entity.ack_position == Vec2(5, 6)


def test_size_change_is_tracked():
    entity = Entity(1)
    entity.size = Vec2(16, 16)
    assert entity.has_changes()
    entity.ack_changes()
    assert entity.ack_size == entity.size


def test_remove_marks_entity():
    entity = Entity(2)
    assert not entity.is_removed
    entity.remove()
    assert entity.is_removed


def test_tick_fires_alarm_then_updates():
    entity = Recorder(1)
    entity.alarm.set(0, 100)
    Entity.tick(entity, 50)
    assert entity.fired == []
    Entity.tick(entity, 50)
    assert entity.fired == [0]
    assert entity.updates == [50, 50]


def test_collides_with_group_mask():
    entity = Entity(1)
    entity.collision_group = 0x01
    assert entity.collides_with(0x01 | 0x02)
    assert not entity.collides_with(0x02)


def test_movement_per_tick_scalar():
    assert Entity.movement_per_tick(1000, 100.0) == pytest.approx(100.0)
    assert Entity.movement_per_tick(0, 100.0) == 0.0


def test_movement_per_tick_vector_is_float():
    result = Entity.movement_per_tick(1000, Vec2(3, -4))
    assert result == Vec2(3.0, -4.0)
    assert not result.is_integral


@pytest.mark.parametrize("speed,fraction", [(1.5, 0.75), (-2.25, 0.5), (0.3, 0.3), (-0.9, -0.2)])
def test_next_movement_splits_whole_and_fraction(speed, fraction):
    whole, rest = Entity(1).next_movement(speed, fraction)
    assert isinstance(whole, int)
    assert whole + rest == pytest.approx(speed + fraction)
    assert abs(rest) < 1.0


def test_move_with_free_path_moves_whole_distance():
    entity = Entity(1)
    entity.position = Vec2(10, 10)
    fraction, flags = entity.move_with_condition(Vec2(3.5, -2.0), Vec2(0.0, 0.0), lambda p: True)
    assert entity.position == Vec2(13, 8)
    assert flags == (True, True)
    assert fraction.x == pytest.approx(0.5)


def test_move_blocked_stops_next_to_wall():
    entity = Entity(1)
    entity.position = Vec2(0, 0)
    fraction, flags = entity.move_with_condition(
        Vec2(5.5, 0.0), Vec2(0.0, 0.0), lambda p: p.x < 3
    )
    assert entity.position == Vec2(2, 0)
    assert flags == (False, True)
    assert fraction.x == 0.0


def test_move_blocked_vertically_keeps_horizontal_progress():
    entity = Entity(1)
    entity.position = Vec2(0, 0)
    fraction, flags = entity.move_with_condition(
        Vec2(-4.0, 6.0), Vec2(0.0, 0.0), lambda p: p.y <= 1
    )
    assert entity.position == Vec2(-4, 1)
    assert flags == (True, False)
    assert fraction.y == 0.0