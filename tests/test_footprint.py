import numpy as np
import pytest

from maze_nav.path_planner.errors import InvalidObstacles
from maze_nav.path_planner.footprint import footprint_stencil, inflate, is_cell_on_line
from maze_nav.path_planner.map_model import Grid, VehicleFootprint


def _inflate_reference(rows, cols, xs, ys, hw, hl):
    """逐障碍点、逐偏移直接调用判定函数"""
    expected = np.zeros((rows, cols), dtype=bool)
    for ox, oy in zip(xs, ys):
        for dx in range(-hw, hw + 1):
            for dy in range(-hl, hl + 1):
                x, y = ox + dx, oy + dy
                if is_cell_on_line(ox, oy, x, y) and 0 <= x < rows and 0 <= y < cols:
                    expected[x, y] = True
    return expected


def test_obstacle_cell_is_on_its_own_line():
    assert is_cell_on_line(2, 2, 2, 2)


@pytest.mark.parametrize("x2, y2, expected", [
    (1, 1, True),
    (0, 1, True),
    (1, 0, True),
    (-1, 1, True),
    (-1, 0, False),
    (0, -1, False),
    (-1, -1, False),
    (1, -1, False),
])
def test_predicate_shape_for_unit_offsets(x2, y2, expected):
    assert is_cell_on_line(0, 0, x2, y2) is expected


def test_predicate_is_translation_invariant():
    for dx in range(-4, 5):
        for dy in range(-5, 6):
            assert is_cell_on_line(0, 0, dx, dy) == is_cell_on_line(17, -3, 17 + dx, -3 + dy)


def test_unit_stencil():
    mask = footprint_stencil(VehicleFootprint(1, 1))
    expected = np.array([
        [False, False, True],
        [False, True, True],
        [False, True, True],
    ])
    assert np.array_equal(mask, expected)


def test_zero_footprint_marks_single_cell():
    grid = Grid.build(5, 5)
    added = inflate(grid, [2], [2], VehicleFootprint(0, 0))
    assert added == 1
    assert grid.is_blocked(2, 2)
    assert grid.blocked_count() == 1


@pytest.mark.parametrize("xs, ys, hw, hl", [
    ([5], [5], 3, 4),
    ([0, 9], [0, 9], 3, 10),
    ([1, 8, 4], [11, 0, 6], 10, 12),
    ([-3, 15], [4, 20], 4, 6),
])
def test_inflate_matches_per_offset_evaluation(xs, ys, hw, hl):
    rows, cols = 10, 12
    grid = Grid.build(rows, cols)
    inflate(grid, xs, ys, VehicleFootprint(hw, hl))
    assert np.array_equal(grid.blocked_mask, _inflate_reference(rows, cols, xs, ys, hw, hl))


def test_inflate_never_writes_out_of_bounds():
    grid = Grid.build(4, 4)
    # 障碍点远在栅格之外，膨胀范围也覆盖不到
    inflate(grid, [-50, 100], [-50, 100], VehicleFootprint(10, 12))
    assert grid.shape == (4, 4)
    assert grid.blocked_count() == 0


def test_inflate_never_clears_blocked_cells():
    grid = Grid.build(5, 5)
    grid.mark_blocked(0, 0)
    inflate(grid, [4], [4], VehicleFootprint(0, 0))
    assert grid.is_blocked(0, 0)
    assert grid.is_blocked(4, 4)


def test_inflate_rejects_mismatched_sequences():
    grid = Grid.build(5, 5)
    with pytest.raises(InvalidObstacles):
        inflate(grid, [1, 2, 3], [1, 2, 3, 4], VehicleFootprint(0, 0))
