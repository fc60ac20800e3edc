from __future__ import annotations

import logging

from ..model.enemies import EnemyType
from ..model.entities import Enemy
from ..model.grid import cell_center
from .pathfinding import find_waypoints


logger = logging.getLogger(__name__)


def spawn_enemy(state, kind: EnemyType | str = EnemyType.BASIC) -> Enemy | None:
    """
    Create an enemy of ``kind`` at the spawn cell, routed to the goal.

    Returns None and leaves the state untouched when no route exists; the
    enemy id is only allocated once the route is known.
    """
    kind = EnemyType.parse(kind)
    path = find_waypoints(state.grid, state.spawn, state.goal)
    if path is None:
        logger.debug(
            "spawn rejected: no path from %s to %s, id %s stays free",
            state.spawn,
            state.goal,
            state.enemy_ids.peek(),
        )
        return None

    x, y = cell_center(state.spawn)
    enemy = Enemy(id=state.enemy_ids.allocate(), x=x, y=y, path=path, kind=kind)
    state.enemies[enemy.id] = enemy
    logger.debug("spawned enemy=%s kind=%s waypoints=%s", enemy.id, kind.value, len(path))
    return enemy
