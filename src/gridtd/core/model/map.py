from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import json
from typing import Any

from .grid import Position
from .state import DEFAULT_GOAL, DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH, DEFAULT_SPAWN
from .towers import TowerType


@dataclass(frozen=True, slots=True)
class TowerPlacement:
    kind: TowerType
    cell: Position


@dataclass(slots=True)
class MapData:
    name: str
    width: int = DEFAULT_GRID_WIDTH
    height: int = DEFAULT_GRID_HEIGHT
    spawn: Position = DEFAULT_SPAWN
    goal: Position = DEFAULT_GOAL
    gold: int = 200
    health: int = 20
    towers: list[TowerPlacement] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Map {self.name!r} has invalid size {self.width}x{self.height}")
        for label, pos in (("spawn", self.spawn), ("goal", self.goal)):
            if not (0 <= pos.x < self.width and 0 <= pos.y < self.height):
                raise ValueError(f"Map {self.name!r}: {label} {pos} is outside the grid")


def default_map() -> MapData:
    return MapData(name="default")


def _parse_cell(value: Any, what: str) -> Position:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{what} must be a [x, y] pair, got {value!r}")
    return Position(int(value[0]), int(value[1]))


def load_map_json(path: str | Path) -> MapData:
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"map root must be a JSON object: {p}")

    world = data.get("world", {}) or {}
    economy = data.get("economy", {}) or {}

    towers: list[TowerPlacement] = []
    for entry in data.get("towers", []) or []:
        if not isinstance(entry, dict):
            raise ValueError(f"tower entry must be an object: {entry!r}")
        towers.append(
            TowerPlacement(
                kind=TowerType.parse(entry.get("kind", "basic")),
                cell=_parse_cell(entry.get("cell"), "tower cell"),
            )
        )

    spawn = data.get("spawn")
    goal = data.get("goal")
    return MapData(
        name=str(data.get("name", p.stem)),
        width=int(world.get("width", DEFAULT_GRID_WIDTH)),
        height=int(world.get("height", DEFAULT_GRID_HEIGHT)),
        spawn=_parse_cell(spawn, "spawn") if spawn is not None else DEFAULT_SPAWN,
        goal=_parse_cell(goal, "goal") if goal is not None else DEFAULT_GOAL,
        gold=int(economy.get("gold", 200)),
        health=int(economy.get("health", 20)),
        towers=towers,
    )


def resolve_map_path(map_arg: str, root: Path | None = None) -> Path:
    """
    Bare map names resolve to ``<root>/data/maps/<name>.json``; anything that
    looks like a file path is taken as given.
    """
    p = Path(map_arg)
    if p.suffix:
        return p
    base = Path("data/maps") if root is None else root / "data/maps"
    if p.parent == Path("."):
        return base / f"{p.name}.json"
    return p.with_suffix(".json")
