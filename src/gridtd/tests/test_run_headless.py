from pathlib import Path

import pytest

from gridtd.app import run_headless
from gridtd.core.engine import Engine
from gridtd.core.model.enemies import EnemyType
from gridtd.core.model.grid import Position
from gridtd.core.model.map import load_map_json
from gridtd.core.model.towers import TowerType


MAPS_DIR = Path(__file__).resolve().parents[3] / "data" / "maps"


def test_parse_tower_argument() -> None:
    assert run_headless._parse_tower("sniper:3,4") == (TowerType.SNIPER, Position(3, 4))


def test_bad_tower_argument_exits() -> None:
    with pytest.raises(SystemExit):
        run_headless.main(["--tower", "laser:1,1"])
    with pytest.raises(SystemExit):
        run_headless.main(["--tower", "basic:1"])


def test_run_respects_spawn_limit() -> None:
    engine = Engine(load_map_json(MAPS_DIR / "dev_small.json"))

    spawned = run_headless.run(engine, seconds=3.0, fps=30, spawn_every=0.5, max_enemies=2)

    assert spawned == 2


def test_run_reports_failed_spawns(caplog) -> None:
    engine = Engine(load_map_json(MAPS_DIR / "dev_small.json"))
    engine.state.gold = 10_000
    for y in range(10):
        assert engine.place_tower(TowerType.BASIC, Position(5, y))

    spawned = run_headless.run(engine, seconds=1.0, fps=10, spawn_every=0.5, max_enemies=5)

    assert spawned == 0
    assert "spawn failed" in caplog.text


def test_main_finds_bundled_map_from_any_directory(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    rc = run_headless.main(["--map", "meadow", "--seconds", "1", "--fps", "10", "--enemy", "tank"])

    assert rc == 0
    assert capsys.readouterr().out.startswith("map=meadow ")


def test_run_spawns_requested_enemy_kind() -> None:
    engine = Engine(load_map_json(MAPS_DIR / "dev_small.json"))

    run_headless.run(engine, seconds=0.5, fps=10, spawn_every=1.0, max_enemies=1, enemy=EnemyType.FAST)

    assert [e.kind for e in engine.enemies.values()] == [EnemyType.FAST]


def test_bad_enemy_argument_exits() -> None:
    with pytest.raises(SystemExit):
        run_headless.main(["--enemy", "dragon"])


def test_main_prints_summary(capsys) -> None:
    rc = run_headless.main(
        [
            "--map",
            str(MAPS_DIR / "dev_small.json"),
            "--seconds",
            "5",
            "--fps",
            "30",
            "--tower",
            "basic:4,4",
            "--tower",
            "slow:4,6",
        ]
    )

    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("map=dev_small ")
    assert "towers=2" in out
    assert "gold=" in out
    assert "game_over=False" in out
