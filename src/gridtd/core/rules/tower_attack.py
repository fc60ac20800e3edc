# src/gridtd/core/rules/tower_attack.py
from __future__ import annotations

import math
from typing import Iterable

from ..model.entities import Enemy, MuzzleFlash, Projectile, Tower
from ..model.grid import CELL_SIZE
from ..model.towers import get_tower_def


def step_towers(state, dt: float) -> list[Projectile]:
    """
    Tower tick: cooldown -> target -> fire.

    Cooldowns decay first; every ready tower then picks the alive enemy in
    range that is furthest along its path. Projectiles and flashes are
    collected during the scan and only added to the state afterwards.
    Returns the projectiles fired this tick.
    """
    towers = state.towers
    if not towers:
        return []

    enemies = list(state.enemies.values())
    fired: list[Projectile] = []
    flashes: list[MuzzleFlash] = []

    for tower in towers.values():
        tower.tick_cooldown(dt)
        if not tower.can_fire():
            continue

        origin_x, origin_y = tower.center()
        target = select_target(tower, enemies)
        if target is None:
            tower.target_id = None
            continue

        tower_def = get_tower_def(tower.kind)
        tower.rotation = math.atan2(target.y - origin_y, target.x - origin_x)
        tower.target_id = target.id
        tower.cooldown = tower_def.cooldown

        fired.append(
            Projectile(
                id=state.projectile_ids.allocate(),
                kind=tower.kind,
                x=origin_x,
                y=origin_y,
                target_id=target.id,
                target_x=target.x,
                target_y=target.y,
                damage=tower_def.damage,
                speed=tower_def.projectile_speed,
            )
        )
        flashes.append(MuzzleFlash(x=origin_x, y=origin_y, color=tower_def.projectile_color))

    for projectile in fired:
        state.projectiles[projectile.id] = projectile
    state.muzzle_flashes.extend(flashes)
    return fired


def select_target(tower: Tower, enemies: Iterable[Enemy]) -> Enemy | None:
    chosen: Enemy | None = None
    for enemy in enemies_in_range(tower, enemies):
        # Strict comparison keeps the earliest enemy on ties.
        if chosen is None or enemy.current_waypoint > chosen.current_waypoint:
            chosen = enemy
    return chosen


def enemies_in_range(tower: Tower, enemies: Iterable[Enemy]) -> list[Enemy]:
    tx, ty = tower.center()
    range_world = get_tower_def(tower.kind).range * CELL_SIZE
    range_sq = range_world * range_world
    return [e for e in enemies if e.alive and _distance_sq(tx, ty, e.x, e.y) <= range_sq]


def _distance_sq(ax: float, ay: float, bx: float, by: float) -> float:
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy
