from __future__ import annotations

import logging

from ..model.entities import Tower
from ..model.grid import Position
from ..model.towers import TowerType, get_tower_def
from .pathfinding import find_waypoints


logger = logging.getLogger(__name__)

SELL_REFUND_PCT = 75


def can_place_tower(state, kind: TowerType | str, position: Position) -> bool:
    tower_def = get_tower_def(kind)
    if state.gold < tower_def.cost:
        return False
    if not state.grid.is_walkable(position):
        return False
    if state.tower_at(position) is not None:
        return False
    return True


def place_tower(state, kind: TowerType | str, position: Position) -> Tower | None:
    if not can_place_tower(state, kind, position):
        logger.debug("placement rejected: kind=%s at %s gold=%s", kind, position, state.gold)
        return None

    tower_def = get_tower_def(kind)
    tower = Tower(id=state.tower_ids.allocate(), kind=tower_def.kind, position=position)
    state.towers[tower.id] = tower
    state.gold -= tower_def.cost
    state.grid.set_walkable(position, False)
    logger.debug("placed tower=%s kind=%s at %s", tower.id, tower.kind.value, position)

    reroute_enemies(state)
    return tower


def sell_tower(state, tower_id: int) -> int | None:
    tower = state.towers.pop(tower_id, None)
    if tower is None:
        return None
    refund = int(tower.cost * SELL_REFUND_PCT / 100)
    state.gold += refund
    state.grid.set_walkable(tower.position, True)
    logger.debug("sold tower=%s for %s", tower_id, refund)

    reroute_enemies(state)
    return refund


def clear_all(state) -> None:
    """Remove every tower, enemy, projectile and effect. Gold and health are kept."""
    for tower in state.towers.values():
        state.grid.set_walkable(tower.position, True)
    state.towers.clear()
    state.enemies.clear()
    state.projectiles.clear()
    state.muzzle_flashes.clear()
    state.explosions.clear()


def reroute_enemies(state) -> list[int]:
    """
    Recompute every enemy's route from its current cell to the goal.

    An enemy that has no route from where it stands keeps its previous path
    and waypoint index. Returns the ids of those orphaned enemies.
    """
    orphaned: list[int] = []
    for enemy in state.enemies.values():
        new_path = find_waypoints(state.grid, enemy.cell(), state.goal)
        if new_path is None:
            orphaned.append(enemy.id)
            continue
        enemy.path = new_path
        enemy.current_waypoint = 0
    if orphaned:
        logger.info("no route for enemies %s, keeping their previous paths", orphaned)
    return orphaned
