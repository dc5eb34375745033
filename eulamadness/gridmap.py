"""Spatial hash that maps rectangles to the ids of entities inside them."""

from __future__ import annotations

from collections import defaultdict

from .common import Vec2

CELL_SIZE = 128
GRID_BUCKETS = 32768

_UINT32_MASK = 0xFFFFFFFF
_HASH_X = 73856093
_HASH_Y = 19349663


def _cell_index(coordinate: int) -> int:
    """Cell of a coordinate, treating it as an unsigned 32-bit number."""
    return (int(coordinate) & _UINT32_MASK) // CELL_SIZE


def _bucket(cell_x: int, cell_y: int) -> int:
    return ((cell_x * _HASH_X) ^ (cell_y * _HASH_Y)) % GRID_BUCKETS


class Gridmap:
    """Buckets entity ids by the grid cells their rectangles touch.

    A query returns every id registered in the touched buckets, which is a
    superset of the entities really overlapping the rectangle.
    """

    def __init__(self) -> None:
        self._grid: defaultdict[int, list[int]] = defaultdict(list)

    def _buckets(self, position: Vec2, size: Vec2):
        start_x = _cell_index(position.x)
        start_y = _cell_index(position.y)
        end_x = start_x + _cell_index(size.x + CELL_SIZE - 1)
        end_y = start_y + _cell_index(size.y + CELL_SIZE - 1)
        for cell_x in range(start_x, end_x + 1):
            for cell_y in range(start_y, end_y + 1):
                yield _bucket(cell_x, cell_y)

    def query(self, position: Vec2, size: Vec2) -> set[int]:
        """Ids registered in any cell the rectangle touches."""
        result: set[int] = set()
        for bucket in self._buckets(position, size):
            result.update(self._grid.get(bucket, ()))
        return result

    def add(self, position: Vec2, size: Vec2, entity_id: int) -> None:
        for bucket in self._buckets(position, size):
            self._grid[bucket].append(entity_id)

    def remove(self, position: Vec2, size: Vec2, entity_id: int) -> None:
        """Drop every occurrence of ``entity_id`` from the touched cells."""
        for bucket in self._buckets(position, size):
            cell = self._grid.get(bucket)
            if cell:
                cell[:] = [other for other in cell if other != entity_id]