from __future__ import annotations

import logging
from typing import Iterable

from ..model.entities import Enemy, Explosion, Hit
from ..model.grid import CELL_SIZE
from ..model.towers import TowerType, get_tower_def


logger = logging.getLogger(__name__)

KILL_REWARD = 10
SLOW_DURATION = 2.0
SLOW_MULTIPLIER = 0.5


def apply_hits(state, hits: Iterable[Hit]) -> list[int]:
    """Apply all hits of a tick, then remove the dead. Returns the killed ids."""
    for hit in hits:
        apply_hit(state, hit)
    return sweep_dead(state)


def apply_hit(state, hit: Hit) -> None:
    kind = hit.kind
    if kind is TowerType.SPLASH:
        radius = get_tower_def(kind).splash_radius * CELL_SIZE
        for enemy in enemies_in_radius(state.enemies.values(), hit.x, hit.y, radius):
            enemy.take_damage(hit.damage)
        state.explosions.append(Explosion(x=hit.x, y=hit.y, max_radius=radius))
    elif kind is TowerType.SLOW:
        target = state.enemies.get(hit.enemy_id)
        if target is not None:
            target.take_damage(hit.damage)
            target.apply_slow(SLOW_DURATION, SLOW_MULTIPLIER)
    elif kind in (TowerType.BASIC, TowerType.SNIPER):
        target = state.enemies.get(hit.enemy_id)
        if target is not None:
            target.take_damage(hit.damage)
    else:
        raise ValueError(f"No damage rule for tower kind {kind!r}")


def enemies_in_radius(enemies: Iterable[Enemy], x: float, y: float, radius: float) -> list[Enemy]:
    radius_sq = radius * radius
    found: list[Enemy] = []
    for enemy in enemies:
        if not enemy.alive:
            continue
        dx = enemy.x - x
        dy = enemy.y - y
        if dx * dx + dy * dy <= radius_sq:
            found.append(enemy)
    return found


def sweep_dead(state) -> list[int]:
    dead = [enemy_id for enemy_id, enemy in state.enemies.items() if not enemy.alive]
    for enemy_id in dead:
        del state.enemies[enemy_id]
        state.gold += KILL_REWARD
        state.kills += 1
    if dead:
        logger.debug("killed enemies=%s gold=%s", dead, state.gold)
    return dead
