import json
from pathlib import Path

import pytest

from gridtd.core.model.grid import Position
from gridtd.core.model.map import MapData, load_map_json, resolve_map_path
from gridtd.core.model.towers import TowerType


MAPS_DIR = Path(__file__).resolve().parents[3] / "data" / "maps"


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_bundled_maps_load() -> None:
    for path in sorted(MAPS_DIR.glob("*.json")):
        data = load_map_json(path)
        assert data.name == path.stem


def test_missing_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    data = load_map_json(_write(tmp_path, {}))

    assert data.name == "custom"
    assert (data.width, data.height) == (20, 15)
    assert data.spawn == Position(0, 7)
    assert data.goal == Position(19, 7)
    assert (data.gold, data.health) == (200, 20)
    assert data.towers == []


def test_towers_are_parsed(tmp_path: Path) -> None:
    data = load_map_json(
        _write(
            tmp_path,
            {
                "world": {"width": 8, "height": 6},
                "spawn": [0, 3],
                "goal": [7, 3],
                "towers": [{"kind": "Sniper", "cell": [4, 1]}],
            },
        )
    )

    assert len(data.towers) == 1
    assert data.towers[0].kind is TowerType.SNIPER
    assert data.towers[0].cell == Position(4, 1)


def test_spawn_outside_grid_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="spawn"):
        load_map_json(_write(tmp_path, {"world": {"width": 5, "height": 5}, "spawn": [5, 0], "goal": [4, 4]}))


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"goal": [1]},
        {"towers": [{"kind": "laser", "cell": [1, 1]}]},
        {"towers": ["basic"]},
        {"world": {"width": 0, "height": 5}, "spawn": [0, 0], "goal": [0, 0]},
    ],
)
def test_malformed_maps_raise_value_error(tmp_path: Path, payload) -> None:
    with pytest.raises(ValueError):
        load_map_json(_write(tmp_path, payload))


def test_map_data_validates_directly() -> None:
    with pytest.raises(ValueError):
        MapData(name="tiny", width=3, height=3, spawn=Position(0, 0), goal=Position(3, 0))


def test_resolve_map_path() -> None:
    assert resolve_map_path("meadow") == Path("data/maps/meadow.json")
    assert resolve_map_path("meadow", root=Path("/srv")) == Path("/srv/data/maps/meadow.json")
    assert resolve_map_path("other/custom.json") == Path("other/custom.json")
    assert resolve_map_path("custom.json", root=Path("/srv")) == Path("custom.json")
    assert resolve_map_path("/abs/custom.json", root=Path("/srv")) == Path("/abs/custom.json")


def test_bare_map_name_resolves_outside_the_repo(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    path = resolve_map_path("meadow", root=MAPS_DIR.parents[1])

    assert path.is_file()
    assert load_map_json(path).name == "meadow"
