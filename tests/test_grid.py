import numpy as np
import pytest

from tetris_crush.game import EMPTY, WALL, GameGrid, GridAccessError


def test_walled_grid_has_side_and_bottom_walls():
    grid = GameGrid(6, 5)
    assert all(grid.get(0, y) == WALL for y in range(5))
    assert all(grid.get(5, y) == WALL for y in range(5))
    assert all(grid.get(x, 4) == WALL for x in range(6))
    assert grid.get(2, 2) == EMPTY
    assert list(grid.playable_columns) == [1, 2, 3, 4]
    assert list(grid.playable_rows) == [0, 1, 2, 3]


def test_unwalled_grid_is_all_playable():
    grid = GameGrid(5, 4, walls=False)
    assert grid.filled_count() == 0
    assert not np.any(grid.grid == WALL)
    assert list(grid.playable_columns) == list(range(5))
    assert list(grid.playable_rows) == list(range(4))


def test_grid_rejects_tiny_dimensions():
    with pytest.raises(ValueError):
        GameGrid(3, 10)
    with pytest.raises(ValueError):
        GameGrid(10, 3)


def test_is_blocked_covers_bounds_walls_and_filled_cells():
    grid = GameGrid(6, 6)
    assert grid.is_blocked(-1, 2)
    assert grid.is_blocked(2, 6)
    assert grid.is_blocked(0, 2)
    assert not grid.is_blocked(2, 2)
    grid.set(2, 2, 3)
    assert grid.is_blocked(2, 2)
    assert not grid.can_place([(1, 1), (2, 2)])
    assert grid.can_place([(1, 1), (3, 3)])


def test_out_of_range_access_fails_fast():
    grid = GameGrid(6, 6, walls=False)
    with pytest.raises(GridAccessError):
        grid.get(-1, 0)
    with pytest.raises(GridAccessError):
        grid.set(6, 0, 1)
    # Still an IndexError for callers that only know the builtin
    with pytest.raises(IndexError):
        grid.get(0, 99)


def test_walls_are_immutable():
    grid = GameGrid(6, 6)
    with pytest.raises(GridAccessError):
        grid.set(0, 0, EMPTY)
    with pytest.raises(GridAccessError):
        grid.set(2, 2, WALL)
    assert grid.get(0, 0) == WALL


def test_reset_restores_empty_walled_well():
    grid = GameGrid(6, 6)
    grid.set(1, 1, 4)
    grid.reset()
    assert grid.filled_count() == 0
    assert grid.get(0, 3) == WALL


def test_load_rows_aligns_to_the_bottom_of_the_playable_area():
    grid = GameGrid(5, 6)
    grid.load_rows([[1, 0, 2], [3, 3, 3]])
    assert grid.get(1, 3) == 1 and grid.get(3, 3) == 2
    assert [grid.get(x, 4) for x in (1, 2, 3)] == [3, 3, 3]
    assert grid.get(2, 0) == EMPTY
    with pytest.raises(ValueError):
        grid.load_rows([[1, 1]])


def test_clone_state_is_a_copy():
    grid = GameGrid(5, 5)
    state = grid.clone_state()
    state[0, 1] = 7
    assert grid.get(1, 0) == EMPTY
