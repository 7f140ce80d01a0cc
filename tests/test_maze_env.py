import numpy as np
import pytest

from env.maze_env import Cell, GridMaze
from errors import BoundsError, ConfigurationError


def test_open_maze_has_no_walls_and_fixed_corners():
    maze = GridMaze.open(4)
    assert maze.size == 4
    assert maze.start == (0, 0)
    assert maze.target == (3, 3)
    assert all(maze.cell_state(x, y) is Cell.OPEN for x in range(4) for y in range(4))
    assert maze.walls() == []


def test_cell_state_uses_x_as_column():
    grid = np.zeros((4, 4), dtype=np.uint8)
    grid[0, 1] = 1  # row y=0, column x=1
    maze = GridMaze(grid)
    assert maze.cell_state(1, 0) is Cell.WALL
    assert maze.cell_state(0, 1) is Cell.OPEN
    assert maze.is_wall(1, 0)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 4), (10, 10)])
def test_out_of_range_access_raises_bounds_error(x, y):
    maze = GridMaze.open(4)
    with pytest.raises(BoundsError):
        maze.cell_state(x, y)


def test_bounds_error_is_an_index_error():
    with pytest.raises(IndexError):
        GridMaze.open(2).cell_state(2, 0)


def test_grid_is_read_only_and_copies_are_detached():
    source = np.zeros((3, 3), dtype=np.uint8)
    maze = GridMaze(source)

    source[1, 1] = 1
    assert maze.cell_state(1, 1) is Cell.OPEN

    copy = maze.get_grid()
    copy[2, 2] = 1
    assert maze.cell_state(2, 2) is Cell.OPEN

    with pytest.raises(ValueError):
        maze._grid[0, 0] = 1


def test_from_strings_and_render_text_agree():
    rows = ["..#", "#..", "..."]
    maze = GridMaze.from_strings(rows)
    assert maze.render_text() == rows
    assert maze.walls() == [(2, 0), (0, 1)]


@pytest.mark.parametrize("grid", [
    [],
    [[0, 0, 0], [0, 0, 0]],
    [[0, 2], [0, 0]],
    [[0, 0], [0]],
    [[0.5, 0], [1.7, 0]],
    [["0", "1"], ["1", "0"]],
])
def test_malformed_grids_are_rejected(grid):
    with pytest.raises(ConfigurationError):
        GridMaze(grid)


def test_from_strings_rejects_unknown_characters():
    with pytest.raises(ConfigurationError):
        GridMaze.from_strings(["..", ".x"])


@pytest.mark.parametrize("size", [0, -3, 2.5])
def test_open_rejects_non_positive_sizes(size):
    with pytest.raises(ConfigurationError):
        GridMaze.open(size)


def test_equal_grids_compare_equal():
    assert GridMaze.open(3) == GridMaze(np.zeros((3, 3)))
    assert hash(GridMaze.open(3)) == hash(GridMaze(np.zeros((3, 3))))
