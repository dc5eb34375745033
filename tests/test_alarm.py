from eulamadness.alarm import Alarm


def drain(alarm):
    return list(iter(alarm.next_due, None))


def test_nothing_due_initially():
    assert Alarm().next_due() is None


def test_fires_once_target_reached():
    alarm = Alarm()
    alarm.set(1, 100)
    alarm.update(99)
    assert drain(alarm) == []
    alarm.update(1)
    assert drain(alarm) == [1]
    assert alarm.next_due() is None


def test_large_delta_fires_repeatedly():
    alarm = Alarm()
    alarm.set(3, 100)
    alarm.update(250)
    assert drain(alarm) == [3, 3]


def test_repeats_after_each_period():
    alarm = Alarm()
    alarm.set(7, 50)
    fired = []
    for _ in range(4):
        alarm.update(25)
        fired.extend(drain(alarm))
    assert fired == [7, 7]


def test_unset_alarm_never_fires():
    alarm = Alarm()
    alarm.set(2, 50)
    alarm.unset(2)
    alarm.update(100)
    assert drain(alarm) == []


def test_set_restarts_the_count():
    alarm = Alarm()
    alarm.set(1, 100)
    alarm.update(60)
    alarm.set(1, 100)
    alarm.update(60)
    assert drain(alarm) == []


def test_alarms_fire_in_insertion_order():
    alarm = Alarm()
    alarm.set(5, 10)
    alarm.set(4, 10)
    alarm.update(10)
    assert drain(alarm) == [5, 4]