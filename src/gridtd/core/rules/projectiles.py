from __future__ import annotations

import math

from ..model.entities import Hit, Projectile


HIT_THRESHOLD = 5.0


def step_projectiles(state, dt: float) -> list[Hit]:
    """
    Move every projectile and collect the hits of this tick.

    Enemies are only read here; damage is applied by the caller once all
    projectiles have been evaluated.
    """
    projectiles = state.projectiles
    if not projectiles:
        return []

    enemies = state.enemies
    hits: list[Hit] = []
    finished: list[int] = []

    for projectile in projectiles.values():
        target = enemies.get(projectile.target_id)
        if target is not None:
            projectile.target_x = target.x
            projectile.target_y = target.y

        arrived, expired = _advance(projectile, dt)
        if not (arrived or expired):
            continue

        finished.append(projectile.id)
        # Arriving at the last known point of a vanished target is a miss.
        if arrived and target is not None:
            hits.append(
                Hit(
                    enemy_id=target.id,
                    kind=projectile.kind,
                    damage=projectile.damage,
                    x=projectile.target_x,
                    y=projectile.target_y,
                )
            )

    for projectile_id in finished:
        del projectiles[projectile_id]
    return hits


def _advance(projectile: Projectile, dt: float) -> tuple[bool, bool]:
    """Returns (arrived, expired). Arrival wins when both happen."""
    projectile.lifetime -= dt

    dx = projectile.target_x - projectile.x
    dy = projectile.target_y - projectile.y
    dist = math.hypot(dx, dy)
    if dist < HIT_THRESHOLD:
        return True, False
    if projectile.lifetime <= 0.0:
        return False, True

    step = projectile.speed * dt
    if step >= dist:
        projectile.x = projectile.target_x
        projectile.y = projectile.target_y
        return True, False

    projectile.x += dx / dist * step
    projectile.y += dy / dist * step
    return dist - step < HIT_THRESHOLD, False
