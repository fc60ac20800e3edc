from __future__ import annotations
import argparse
import logging
from pathlib import Path

from gridtd.core.engine import Engine
from gridtd.core.model.enemies import EnemyType
from gridtd.core.model.grid import Position
from gridtd.core.model.map import default_map, load_map_json, resolve_map_path
from gridtd.core.model.towers import TowerType


logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[3]


def _parse_tower(value: str) -> tuple[TowerType, Position]:
    """``kind:x,y`` -> (TowerType, Position)."""
    try:
        kind_str, cell_str = value.split(":", 1)
        x_str, y_str = cell_str.split(",", 1)
        return TowerType.parse(kind_str), Position(int(x_str), int(y_str))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected kind:x,y, got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run the tower-defense simulation without a window.")
    ap.add_argument("--map", default=None, help="Map name (e.g. meadow) or path to json")
    ap.add_argument("--seconds", type=float, default=30.0)
    ap.add_argument("--fps", type=int, default=60)
    ap.add_argument("--spawn-every", type=float, default=1.5, help="Seconds between enemy spawns (0 disables)")
    ap.add_argument(
        "--enemy",
        type=EnemyType.parse,
        default=EnemyType.BASIC,
        metavar="KIND",
        help="Enemy kind to spawn: " + ", ".join(k.value for k in EnemyType),
    )
    ap.add_argument("--max-enemies", type=int, default=20, help="Stop spawning after this many enemies")
    ap.add_argument(
        "--tower",
        action="append",
        default=[],
        type=_parse_tower,
        metavar="KIND:X,Y",
        help="Place a tower before the run (repeatable)",
    )
    ap.add_argument("--verbose", action="store_true")
    return ap


def run(
    engine: Engine,
    *,
    seconds: float,
    fps: int,
    spawn_every: float,
    max_enemies: int,
    enemy: EnemyType = EnemyType.BASIC,
) -> int:
    """Fixed-step loop. Returns the number of enemies spawned."""
    dt = 1.0 / fps
    ticks = int(seconds * fps)
    spawned = 0
    spawn_clock = 0.0
    for _ in range(ticks):
        if spawn_every > 0 and spawned < max_enemies:
            spawn_clock -= dt
            if spawn_clock <= 0.0:
                if engine.spawn_enemy(enemy):
                    spawned += 1
                else:
                    logger.warning("spawn failed at t=%.2fs: no path to goal", engine.state.elapsed)
                spawn_clock = spawn_every
        engine.update(dt)
        if engine.game_over:
            break
    return spawned


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    map_data = load_map_json(resolve_map_path(args.map, root=ROOT)) if args.map else default_map()
    engine = Engine(map_data)
    for kind, cell in args.tower:
        if not engine.place_tower(kind, cell):
            logger.warning("could not place %s tower at (%s,%s)", kind.value, cell.x, cell.y)

    spawned = run(
        engine,
        seconds=args.seconds,
        fps=args.fps,
        spawn_every=args.spawn_every,
        max_enemies=args.max_enemies,
        enemy=args.enemy,
    )

    s = engine.state
    print(
        f"map={map_data.name} t={s.elapsed:.2f}s gold={s.gold} health={s.health} "
        f"towers={len(s.towers)} enemies={len(s.enemies)} spawned={spawned} "
        f"kills={s.kills} leaks={s.leaks} game_over={s.game_over}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
