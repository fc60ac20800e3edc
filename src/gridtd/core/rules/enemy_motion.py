# src/gridtd/core/rules/enemy_motion.py
from __future__ import annotations

import logging
import math

from ..model.entities import Enemy
from ..model.grid import cell_center


logger = logging.getLogger(__name__)

WAYPOINT_THRESHOLD = 2.0


def step_enemies(state, dt: float) -> list[int]:
    """
    Move enemies along their waypoints and resolve leaks.

    An enemy standing on its current waypoint moves on to the next one;
    once the index runs past the end of the path the enemy has reached the
    goal: it is removed and the base loses one health point.
    Returns the ids of leaked enemies.
    """
    enemies = state.enemies
    if not enemies:
        return []

    leaked: list[int] = []
    for enemy in enemies.values():
        enemy.tick_slow(dt)
        if not move_enemy(enemy, dt):
            leaked.append(enemy.id)

    for enemy_id in leaked:
        del enemies[enemy_id]
        state.health = max(0, state.health - 1)
        state.leaks += 1
        logger.debug("enemy=%s leaked health=%s", enemy_id, state.health)

    if leaked and state.health <= 0 and not state.game_over:
        state.game_over = True
        logger.info("base destroyed after %.2fs", state.elapsed)
    return leaked


def move_enemy(enemy: Enemy, dt: float) -> bool:
    """Advance one enemy. Returns False once it has walked past its last waypoint."""
    if enemy.finished:
        return False

    tx, ty = cell_center(enemy.path[enemy.current_waypoint])
    dx = tx - enemy.x
    dy = ty - enemy.y
    dist = math.hypot(dx, dy)

    if dist < WAYPOINT_THRESHOLD:
        enemy.current_waypoint += 1
        return not enemy.finished

    step = enemy.effective_speed * dt
    if step >= dist:
        enemy.x = tx
        enemy.y = ty
    else:
        enemy.x += dx / dist * step
        enemy.y += dy / dist * step
    return True
