from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterator

import numpy as np


CELL_SIZE = 40.0


@dataclass(frozen=True, slots=True)
class Position:
    x: int
    y: int

    def manhattan_distance(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def neighbors(self) -> tuple[Position, Position, Position, Position]:
        # Order matters: it feeds the pathfinder's deterministic tie-breaking.
        return (
            Position(self.x + 1, self.y),
            Position(self.x - 1, self.y),
            Position(self.x, self.y + 1),
            Position(self.x, self.y - 1),
        )


def grid_to_world(pos: Position) -> tuple[float, float]:
    """Top-left corner of the cell, in world units."""
    return pos.x * CELL_SIZE, pos.y * CELL_SIZE


def cell_center(pos: Position) -> tuple[float, float]:
    x, y = grid_to_world(pos)
    return x + CELL_SIZE * 0.5, y + CELL_SIZE * 0.5


def world_to_grid(x: float, y: float) -> Position:
    return Position(int(math.floor(x / CELL_SIZE)), int(math.floor(y / CELL_SIZE)))


class Grid:
    """
    Binary walkability map.

    Cells default to walkable. Anything outside [0, width) x [0, height) is
    never walkable and cannot be changed.
    """

    __slots__ = ("width", "height", "_walkable")

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._walkable = np.ones((self.height, self.width), dtype=bool)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def is_walkable(self, pos: Position) -> bool:
        if not self.in_bounds(pos):
            return False
        return bool(self._walkable[pos.y, pos.x])

    def set_walkable(self, pos: Position, walkable: bool) -> None:
        if not self.in_bounds(pos):
            return
        self._walkable[pos.y, pos.x] = bool(walkable)

    def blocked_cells(self) -> Iterator[Position]:
        for y, x in np.argwhere(~self._walkable):
            yield Position(int(x), int(y))

    def walkable_mask(self) -> np.ndarray:
        """Copy of the walkability array, indexed [y, x]."""
        return self._walkable.copy()
