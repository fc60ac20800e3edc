from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


Color = tuple[int, int, int]


class TowerType(Enum):
    BASIC = "basic"
    SNIPER = "sniper"
    SPLASH = "splash"
    SLOW = "slow"

    @classmethod
    def parse(cls, value: str | TowerType) -> TowerType:
        if isinstance(value, TowerType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown tower kind: {value!r}") from exc


@dataclass(frozen=True)
class TowerDef:
    kind: TowerType
    title: str
    cost: int
    range: float          # cells
    damage: int
    fire_rate: float      # shots per second
    projectile_speed: float
    color: Color
    projectile_color: Color
    splash_radius: float  # cells, 0 when the tower has no area damage

    @property
    def cooldown(self) -> float:
        return 1.0 / self.fire_rate


TOWER_DEFS: dict[TowerType, TowerDef] = {
    TowerType.BASIC: TowerDef(
        kind=TowerType.BASIC,
        title="BASIC",
        cost=50,
        range=3.0,
        damage=10,
        fire_rate=1.0,
        projectile_speed=300.0,
        color=(0, 121, 241),
        projectile_color=(253, 249, 0),
        splash_radius=0.0,
    ),
    TowerType.SNIPER: TowerDef(
        kind=TowerType.SNIPER,
        title="SNIPER",
        cost=100,
        range=6.0,
        damage=50,
        fire_rate=0.3,
        projectile_speed=600.0,
        color=(230, 41, 55),
        projectile_color=(230, 41, 55),
        splash_radius=0.0,
    ),
    TowerType.SPLASH: TowerDef(
        kind=TowerType.SPLASH,
        title="SPLASH",
        cost=75,
        range=2.5,
        damage=15,
        fire_rate=0.8,
        projectile_speed=200.0,
        color=(255, 161, 0),
        projectile_color=(255, 161, 0),
        splash_radius=1.5,
    ),
    TowerType.SLOW: TowerDef(
        kind=TowerType.SLOW,
        title="SLOW",
        cost=60,
        range=3.5,
        damage=5,
        fire_rate=2.0,
        projectile_speed=250.0,
        color=(102, 191, 255),
        projectile_color=(100, 200, 255),
        splash_radius=0.0,
    ),
}

_missing = [kind.name for kind in TowerType if kind not in TOWER_DEFS]
if _missing:
    raise RuntimeError(f"TOWER_DEFS is missing entries for: {', '.join(_missing)}")


def get_tower_def(kind: TowerType | str) -> TowerDef:
    try:
        return TOWER_DEFS[TowerType.parse(kind)]
    except (KeyError, ValueError) as exc:
        raise KeyError(f"Unknown tower kind: {kind!r}") from exc


def list_tower_defs() -> list[TowerDef]:
    return [TOWER_DEFS[kind] for kind in TowerType]
