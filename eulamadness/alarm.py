"""Millisecond alarms that an entity advances each tick."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Optional


@dataclass
class _Timer:
    target: int = 0
    current: int = 0


class Alarm:
    """A set of repeating timers keyed by id."""

    def __init__(self) -> None:
        self._timers: dict[int, _Timer] = {}
        self._due: deque[int] = deque()

    def set(self, alarm_id: int, millis: int) -> None:
        """(Re)start ``alarm_id`` so it fires every ``millis`` milliseconds."""
        if millis < 0:
            raise ValueError("alarm period must not be negative")
        self._timers[alarm_id] = _Timer(target=millis)

    def unset(self, alarm_id: int) -> None:
        self._timers[alarm_id] = _Timer()

    def update(self, delta: int) -> None:
        """Advance all running alarms by ``delta`` milliseconds."""
        for alarm_id, timer in self._timers.items():
            if timer.target:
                timer.current += delta
            if timer.current >= timer.target:
                self._due.append(alarm_id)

    def next_due(self) -> Optional[int]:
        """Pop the next alarm that fired, or ``None`` when none is left."""
        while self._due:
            alarm_id = self._due.popleft()
            timer = self._timers.setdefault(alarm_id, _Timer())
            if not timer.target:
                timer.current = 0
                continue
            if timer.current >= timer.target:
                timer.current -= timer.target
            if timer.current >= timer.target:
                self._due.append(alarm_id)
            return alarm_id
        return None