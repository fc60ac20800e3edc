from __future__ import annotations
from dataclasses import dataclass, field

from ..ids import IdAllocator
from .entities import Enemy, Explosion, MuzzleFlash, Projectile, Tower
from .grid import Grid, Position


DEFAULT_GRID_WIDTH = 20
DEFAULT_GRID_HEIGHT = 15
DEFAULT_SPAWN = Position(0, 7)
DEFAULT_GOAL = Position(19, 7)


@dataclass(slots=True)
class GameState:
    grid: Grid = field(default_factory=lambda: Grid(DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT))
    spawn: Position = DEFAULT_SPAWN
    goal: Position = DEFAULT_GOAL

    gold: int = 200
    health: int = 20
    paused: bool = False
    game_over: bool = False
    elapsed: float = 0.0

    # Entities, keyed by id. Dicts keep insertion order, i.e. id order.
    towers: dict[int, Tower] = field(default_factory=dict)
    enemies: dict[int, Enemy] = field(default_factory=dict)
    projectiles: dict[int, Projectile] = field(default_factory=dict)
    muzzle_flashes: list[MuzzleFlash] = field(default_factory=list)
    explosions: list[Explosion] = field(default_factory=list)

    tower_ids: IdAllocator = field(default_factory=IdAllocator)
    enemy_ids: IdAllocator = field(default_factory=IdAllocator)
    projectile_ids: IdAllocator = field(default_factory=IdAllocator)

    # Running totals for summaries.
    kills: int = 0
    leaks: int = 0

    def tower_at(self, pos: Position) -> Tower | None:
        for tower in self.towers.values():
            if tower.position == pos:
                return tower
        return None
