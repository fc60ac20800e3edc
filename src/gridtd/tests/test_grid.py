import pytest

from gridtd.core.model.grid import CELL_SIZE, Grid, Position, cell_center, grid_to_world, world_to_grid
from gridtd.core.model.towers import TOWER_DEFS, TowerType, get_tower_def, list_tower_defs


def test_cells_default_to_walkable() -> None:
    grid = Grid(4, 3)
    assert all(grid.is_walkable(Position(x, y)) for x in range(4) for y in range(3))
    assert list(grid.blocked_cells()) == []


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (4, 0), (0, 3), (100, 100)])
def test_out_of_bounds_is_never_walkable(pos) -> None:
    grid = Grid(4, 3)
    p = Position(*pos)

    grid.set_walkable(p, True)

    assert not grid.is_walkable(p)
    assert not grid.in_bounds(p)


def test_set_walkable_overwrites() -> None:
    grid = Grid(4, 3)
    p = Position(2, 1)

    grid.set_walkable(p, False)
    assert not grid.is_walkable(p)
    assert list(grid.blocked_cells()) == [p]

    grid.set_walkable(p, True)
    assert grid.is_walkable(p)


def test_out_of_bounds_set_is_a_noop() -> None:
    grid = Grid(4, 3)
    grid.set_walkable(Position(7, 7), False)
    assert list(grid.blocked_cells()) == []


def test_walkable_mask_is_a_copy() -> None:
    grid = Grid(4, 3)
    mask = grid.walkable_mask()
    assert mask.shape == (3, 4)
    mask[0, 0] = False
    assert grid.is_walkable(Position(0, 0))


def test_invalid_size() -> None:
    with pytest.raises(ValueError):
        Grid(0, 5)


def test_neighbors_are_four_connected() -> None:
    p = Position(3, 3)
    assert set(p.neighbors()) == {Position(4, 3), Position(2, 3), Position(3, 4), Position(3, 2)}
    assert all(p.manhattan_distance(n) == 1 for n in p.neighbors())


@pytest.mark.parametrize("pos", [(0, 0), (1, 2), (19, 14), (-3, 5), (7, -2)])
def test_world_grid_round_trip(pos) -> None:
    p = Position(*pos)
    assert world_to_grid(*grid_to_world(p)) == p
    assert world_to_grid(*cell_center(p)) == p


def test_cell_center_is_offset_by_half_a_cell() -> None:
    x, y = cell_center(Position(2, 3))
    assert x == 2 * CELL_SIZE + CELL_SIZE / 2
    assert y == 3 * CELL_SIZE + CELL_SIZE / 2


def test_world_to_grid_floors() -> None:
    assert world_to_grid(CELL_SIZE - 0.01, 0.0) == Position(0, 0)
    assert world_to_grid(-0.01, 0.0) == Position(-1, 0)


def test_every_tower_type_has_a_definition() -> None:
    assert set(TOWER_DEFS) == set(TowerType)
    assert [d.kind for d in list_tower_defs()] == list(TowerType)


def test_tower_definitions_match_balance_table() -> None:
    basic = get_tower_def(TowerType.BASIC)
    assert (basic.cost, basic.range, basic.damage, basic.fire_rate) == (50, 3.0, 10, 1.0)
    sniper = get_tower_def("SNIPER")
    assert (sniper.cost, sniper.range, sniper.damage, sniper.projectile_speed) == (100, 6.0, 50, 600.0)
    splash = get_tower_def("splash")
    assert splash.splash_radius == 1.5
    assert get_tower_def("slow").cooldown == pytest.approx(0.5)
    assert all(d.splash_radius == 0.0 for d in list_tower_defs() if d.kind is not TowerType.SPLASH)


def test_unknown_tower_kind() -> None:
    with pytest.raises(ValueError):
        TowerType.parse("laser")
    with pytest.raises(KeyError):
        get_tower_def("laser")
