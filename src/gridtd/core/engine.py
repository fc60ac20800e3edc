# src/gridtd/core/engine.py
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np

from .model.enemies import EnemyType
from .model.entities import Enemy, Explosion, MuzzleFlash, Projectile, Tower
from .model.grid import Grid, Position, cell_center, grid_to_world, world_to_grid
from .model.map import MapData, default_map
from .model.state import GameState
from .model.towers import TowerType
from .rules import placement, spawner
from .rules.damage import apply_hits
from .rules.effects import step_effects
from .rules.enemy_motion import step_enemies
from .rules.pathfinding import expand_waypoints, find_waypoints
from .rules.projectiles import step_projectiles
from .rules.tower_attack import step_towers


logger = logging.getLogger(__name__)

__all__ = ["Engine", "cell_center", "grid_to_world", "world_to_grid"]


class Engine:
    """
    Deterministic simulation: no GUI dependency.

    ``update(dt)`` advances the whole world by one tick of ``dt`` seconds in
    a fixed phase order:

    1. tower cooldowns, targeting and firing
    2. projectile flight and hit collection
    3. damage application and death sweep
    4. enemy movement and leak detection
    5. transient effect decay
    """

    def __init__(self, map_data: MapData | None = None) -> None:
        self.map = map_data if map_data is not None else default_map()
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        m = self.map
        state = GameState(
            grid=Grid(m.width, m.height),
            spawn=m.spawn,
            goal=m.goal,
            gold=m.gold,
            health=m.health,
        )
        for entry in m.towers:
            if placement.place_tower(state, entry.kind, entry.cell) is None:
                logger.warning(
                    "map %r: could not pre-place %s tower at %s",
                    m.name,
                    entry.kind.value,
                    entry.cell,
                )
        return state

    def reset(self) -> None:
        self.state = self._new_state()

    # -- tick ---------------------------------------------------------------

    def update(self, dt: float) -> None:
        s = self.state
        if s.paused or s.game_over or dt <= 0.0:
            return

        step_towers(s, dt)
        hits = step_projectiles(s, dt)
        apply_hits(s, hits)
        step_enemies(s, dt)
        step_effects(s, dt)
        s.elapsed += dt

    # -- intents ------------------------------------------------------------

    def place_tower(self, kind: TowerType | str, position: Position) -> bool:
        return placement.place_tower(self.state, kind, position) is not None

    def can_place_tower(self, kind: TowerType | str, position: Position) -> bool:
        return placement.can_place_tower(self.state, kind, position)

    def sell_tower(self, tower_id: int) -> int | None:
        return placement.sell_tower(self.state, tower_id)

    def clear_all(self) -> None:
        placement.clear_all(self.state)

    def spawn_enemy(self, kind: EnemyType | str = EnemyType.BASIC) -> bool:
        if self.state.game_over:
            return False
        return spawner.spawn_enemy(self.state, kind) is not None

    def set_paused(self, paused: bool) -> None:
        self.state.paused = bool(paused)

    def toggle_paused(self) -> bool:
        self.state.paused = not self.state.paused
        return self.state.paused

    # -- read-only views ----------------------------------------------------

    @property
    def width(self) -> int:
        return self.state.grid.width

    @property
    def height(self) -> int:
        return self.state.grid.height

    def in_bounds(self, pos: Position) -> bool:
        return self.state.grid.in_bounds(pos)

    def is_walkable(self, pos: Position) -> bool:
        return self.state.grid.is_walkable(pos)

    def walkable_mask(self) -> np.ndarray:
        """Copy of the walkability array, indexed [y, x]. Edits do not reach the grid."""
        return self.state.grid.walkable_mask()

    def route_preview(self) -> list[Position]:
        """Every cell a newly spawned enemy would walk, or [] when the goal is cut off."""
        s = self.state
        waypoints = find_waypoints(s.grid, s.spawn, s.goal)
        if waypoints is None:
            return []
        return expand_waypoints(waypoints)

    @property
    def spawn(self) -> Position:
        return self.state.spawn

    @property
    def goal(self) -> Position:
        return self.state.goal

    @property
    def towers(self) -> Mapping[int, Tower]:
        return MappingProxyType(self.state.towers)

    @property
    def enemies(self) -> Mapping[int, Enemy]:
        return MappingProxyType(self.state.enemies)

    @property
    def projectiles(self) -> Mapping[int, Projectile]:
        return MappingProxyType(self.state.projectiles)

    @property
    def muzzle_flashes(self) -> tuple[MuzzleFlash, ...]:
        return tuple(self.state.muzzle_flashes)

    @property
    def explosions(self) -> tuple[Explosion, ...]:
        return tuple(self.state.explosions)

    @property
    def gold(self) -> int:
        return self.state.gold

    @property
    def health(self) -> int:
        return self.state.health

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def observe(self) -> dict[str, Any]:
        """Plain-data snapshot for renderers and tooling."""
        s = self.state
        return {
            "map": self.map.name,
            "width": s.grid.width,
            "height": s.grid.height,
            "spawn": (s.spawn.x, s.spawn.y),
            "goal": (s.goal.x, s.goal.y),
            "gold": s.gold,
            "health": s.health,
            "paused": s.paused,
            "game_over": s.game_over,
            "elapsed": s.elapsed,
            "kills": s.kills,
            "leaks": s.leaks,
            "towers": [
                {
                    "id": t.id,
                    "kind": t.kind.value,
                    "cell": (t.position.x, t.position.y),
                    "cooldown": t.cooldown,
                    "target_id": t.target_id,
                    "rotation": t.rotation,
                }
                for t in s.towers.values()
            ],
            "enemies": [
                {
                    "id": e.id,
                    "kind": e.kind.value,
                    "x": e.x,
                    "y": e.y,
                    "health": e.health,
                    "max_health": e.max_health,
                    "current_waypoint": e.current_waypoint,
                    "path": [(p.x, p.y) for p in e.path],
                    "slowed": e.slow_duration > 0.0,
                }
                for e in s.enemies.values()
            ],
            "projectiles": [
                {
                    "id": p.id,
                    "kind": p.kind.value,
                    "x": p.x,
                    "y": p.y,
                    "target_id": p.target_id,
                    "target_x": p.target_x,
                    "target_y": p.target_y,
                }
                for p in s.projectiles.values()
            ],
            "muzzle_flashes": [
                {"x": f.x, "y": f.y, "color": f.color, "alpha": f.alpha}
                for f in s.muzzle_flashes
            ],
            "explosions": [
                {"x": b.x, "y": b.y, "radius": b.radius, "color": b.color, "alpha": b.alpha}
                for b in s.explosions
            ],
        }
