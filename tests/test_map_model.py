import numpy as np
import pytest

from maze_nav.path_planner.errors import InvalidDimension, InvalidGeometry, OutOfBounds
from maze_nav.path_planner.map_model import Grid, GridGeometry, VehicleFootprint, render_ascii


def test_build_initializes_free_cells_with_own_coordinates():
    grid = Grid.build(3, 4)
    assert grid.shape == (3, 4)
    for r in range(3):
        for c in range(4):
            cell = grid.at(r, c)
            assert (cell.row, cell.col) == (r, c)
            assert cell.blocked is False
    assert grid.blocked_count() == 0


@pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_build_rejects_non_positive_dimensions(rows, cols):
    with pytest.raises(InvalidDimension):
        Grid.build(rows, cols)


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 4)])
def test_at_is_bounds_checked(row, col):
    grid = Grid.build(3, 4)
    with pytest.raises(OutOfBounds):
        grid.at(row, col)
    # OutOfBounds 同时是 IndexError
    with pytest.raises(IndexError):
        grid.at(row, col)


def test_mark_blocked_is_sticky():
    grid = Grid.build(2, 2)
    assert grid.mark_blocked(1, 1) is True
    assert grid.mark_blocked(1, 1) is False
    assert grid.is_blocked(1, 1)
    assert grid.blocked_count() == 1


def test_blocked_mask_is_read_only():
    grid = Grid.build(2, 2)
    with pytest.raises(ValueError):
        grid.blocked_mask[0, 0] = True


def test_stamp_clips_at_grid_edges():
    grid = Grid.build(3, 3)
    mask = np.ones((3, 3), dtype=bool)
    added = grid.stamp(mask, 0, 0)
    assert added == 4
    assert grid.blocked_mask[:2, :2].all()
    assert grid.blocked_count() == 4
    # 完全在栅格外
    assert grid.stamp(mask, 10, 10) == 0
    assert grid.blocked_count() == 4


def test_geometry_from_flat_uses_wire_order():
    geometry = GridGeometry.from_flat([40.0, 30.0, 1.0, 2.0, 28.9, 38.2])
    assert (geometry.rows, geometry.cols) == (30, 40)
    assert geometry.start == (1, 2)
    assert geometry.goal == (28, 38)
    assert GridGeometry.from_flat(geometry.to_flat()) == geometry


def test_geometry_from_flat_rejects_short_message():
    with pytest.raises(InvalidGeometry):
        GridGeometry.from_flat([10, 10, 0, 0])


@pytest.mark.parametrize("values", [
    [float("inf"), 10, 0, 0, 1, 1],
    [10, 10, 0, 0, float("nan"), 1],
    5,
    "abcdefgh",
    None,
])
def test_geometry_from_flat_rejects_bad_values(values):
    with pytest.raises(InvalidGeometry):
        GridGeometry.from_flat(values)


@pytest.mark.parametrize("geometry", [
    GridGeometry(rows=0, cols=5, start_row=0, start_col=0, goal_row=0, goal_col=0),
    GridGeometry(rows=5, cols=5, start_row=5, start_col=0, goal_row=0, goal_col=0),
    GridGeometry(rows=5, cols=5, start_row=0, start_col=0, goal_row=0, goal_col=-1),
])
def test_geometry_validate(geometry):
    with pytest.raises(InvalidGeometry):
        geometry.validate()


def test_negative_footprint_rejected():
    with pytest.raises(ValueError):
        VehicleFootprint(half_width=-1, half_length=0)


def test_render_ascii():
    grid = Grid.build(2, 3)
    grid.mark_blocked(0, 1)
    text = render_ascii(grid, [(0, 0), (1, 1), (0, 2)])
    assert text == "S#G\n.*."
