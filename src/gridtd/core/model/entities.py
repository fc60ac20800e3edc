from __future__ import annotations

from dataclasses import dataclass

from .enemies import EnemyType, get_enemy_def
from .grid import Position, cell_center, world_to_grid
from .towers import Color, TowerType, get_tower_def


PROJECTILE_LIFETIME = 5.0
MUZZLE_FLASH_LIFETIME = 0.1
EXPLOSION_LIFETIME = 0.3
EXPLOSION_COLOR: Color = (255, 161, 0)


@dataclass(slots=True)
class Tower:
    id: int
    kind: TowerType
    position: Position
    cooldown: float = 0.0
    target_id: int | None = None
    rotation: float = 0.0

    @property
    def cost(self) -> int:
        return get_tower_def(self.kind).cost

    def center(self) -> tuple[float, float]:
        return cell_center(self.position)

    def can_fire(self) -> bool:
        return self.cooldown <= 0.0

    def tick_cooldown(self, dt: float) -> None:
        # No banking: an overdue tower fires once, never more.
        if self.cooldown > 0.0:
            self.cooldown = max(0.0, self.cooldown - dt)


@dataclass(slots=True)
class Enemy:
    id: int
    x: float
    y: float
    path: list[Position]
    kind: EnemyType = EnemyType.BASIC
    current_waypoint: int = 0
    # Left as None, these are filled from the enemy kind.
    speed: float | None = None
    health: int | None = None
    max_health: int | None = None
    slow_duration: float = 0.0
    slow_multiplier: float = 1.0

    def __post_init__(self) -> None:
        self.kind = EnemyType.parse(self.kind)
        enemy_def = get_enemy_def(self.kind)
        if self.speed is None:
            self.speed = enemy_def.speed
        if self.max_health is None:
            self.max_health = enemy_def.health
        if self.health is None:
            self.health = self.max_health

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def finished(self) -> bool:
        return self.current_waypoint >= len(self.path)

    @property
    def effective_speed(self) -> float:
        return self.speed * self.slow_multiplier

    def take_damage(self, amount: int) -> None:
        self.health = max(self.health - int(amount), 0)

    def apply_slow(self, duration: float, multiplier: float) -> None:
        self.slow_duration = float(duration)
        self.slow_multiplier = float(multiplier)

    def tick_slow(self, dt: float) -> None:
        if self.slow_duration <= 0.0:
            return
        self.slow_duration = max(0.0, self.slow_duration - dt)
        if self.slow_duration == 0.0:
            self.slow_multiplier = 1.0

    def cell(self) -> Position:
        return world_to_grid(self.x, self.y)


@dataclass(slots=True)
class Projectile:
    id: int
    kind: TowerType
    x: float
    y: float
    target_id: int
    target_x: float
    target_y: float
    damage: int
    speed: float
    lifetime: float = PROJECTILE_LIFETIME

    @property
    def color(self) -> Color:
        return get_tower_def(self.kind).projectile_color


@dataclass(slots=True)
class MuzzleFlash:
    x: float
    y: float
    color: Color
    lifetime: float = MUZZLE_FLASH_LIFETIME
    max_lifetime: float = MUZZLE_FLASH_LIFETIME

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifetime / self.max_lifetime)

    def decay(self, dt: float) -> bool:
        self.lifetime -= dt
        return self.lifetime > 0.0


@dataclass(slots=True)
class Explosion:
    x: float
    y: float
    max_radius: float
    color: Color = EXPLOSION_COLOR
    radius: float = 0.0
    lifetime: float = EXPLOSION_LIFETIME
    max_lifetime: float = EXPLOSION_LIFETIME

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifetime / self.max_lifetime)

    def decay(self, dt: float) -> bool:
        self.lifetime -= dt
        progress = 1.0 - max(0.0, self.lifetime) / self.max_lifetime
        self.radius = self.max_radius * progress
        return self.lifetime > 0.0


@dataclass(slots=True)
class Hit:
    enemy_id: int
    kind: TowerType
    damage: int
    x: float
    y: float
