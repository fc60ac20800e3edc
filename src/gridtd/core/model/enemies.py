from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .towers import Color


class EnemyType(Enum):
    BASIC = "basic"
    FAST = "fast"
    TANK = "tank"
    FLYING = "flying"
    BOSS = "boss"

    @classmethod
    def parse(cls, value: str | EnemyType) -> EnemyType:
        if isinstance(value, EnemyType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown enemy kind: {value!r}") from exc


@dataclass(frozen=True)
class EnemyDef:
    kind: EnemyType
    title: str
    health: int
    speed: float   # world units per second
    color: Color
    size: float    # draw radius as a fraction of a cell


# Speeds are relative to the basic walker at 50 units/s.
ENEMY_DEFS: dict[EnemyType, EnemyDef] = {
    EnemyType.BASIC: EnemyDef(
        kind=EnemyType.BASIC,
        title="BASIC",
        health=100,
        speed=50.0,
        color=(255, 68, 68),
        size=0.25,
    ),
    EnemyType.FAST: EnemyDef(
        kind=EnemyType.FAST,
        title="FAST",
        health=50,
        speed=100.0,
        color=(255, 153, 68),
        size=0.2,
    ),
    EnemyType.TANK: EnemyDef(
        kind=EnemyType.TANK,
        title="TANK",
        health=300,
        speed=25.0,
        color=(153, 68, 68),
        size=0.4,
    ),
    EnemyType.FLYING: EnemyDef(
        kind=EnemyType.FLYING,
        title="FLYING",
        health=80,
        speed=75.0,
        color=(68, 255, 153),
        size=0.22,
    ),
    EnemyType.BOSS: EnemyDef(
        kind=EnemyType.BOSS,
        title="BOSS",
        health=1000,
        speed=12.5,
        color=(255, 0, 0),
        size=0.5,
    ),
}

_missing = [kind.name for kind in EnemyType if kind not in ENEMY_DEFS]
if _missing:
    raise RuntimeError(f"ENEMY_DEFS is missing entries for: {', '.join(_missing)}")


def get_enemy_def(kind: EnemyType | str) -> EnemyDef:
    try:
        return ENEMY_DEFS[EnemyType.parse(kind)]
    except (KeyError, ValueError) as exc:
        raise KeyError(f"Unknown enemy kind: {kind!r}") from exc


def list_enemy_defs() -> list[EnemyDef]:
    return [ENEMY_DEFS[kind] for kind in EnemyType]
