from __future__ import annotations


def step_effects(state, dt: float) -> None:
    """Decay muzzle flashes and explosions, dropping the expired ones."""
    if state.muzzle_flashes:
        state.muzzle_flashes = [flash for flash in state.muzzle_flashes if flash.decay(dt)]
    if state.explosions:
        state.explosions = [boom for boom in state.explosions if boom.decay(dt)]
