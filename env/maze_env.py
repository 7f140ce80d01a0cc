"""
env/maze_env.py

Pure task definition for discrete grid maze navigation.

This module defines ONLY the grid and its lookup rules.
It contains NO fitness logic, NO genomes, NO search.

Responsibilities:
- Holding an immutable N x N grid of open/wall cells
- Bounds-checked cell lookup
- Fixed start (top-left) and target (bottom-right) cells

The maze is read-only after construction, so it can be shared by any
number of concurrent evaluators without locking.
"""

from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from errors import BoundsError, ConfigurationError


class Cell(IntEnum):
    OPEN = 0
    WALL = 1


class GridMaze:
    """
    Square grid maze with a fixed start and target.

    The grid is stored as a read-only uint8 array indexed [y, x]
    (0 = open, 1 = wall). Coordinates in the public API are (x, y)
    with x growing to the right and y growing downward.

    This class does NOT provide:
    - Maze generation
    - Agent movement
    - Cost computation
    """

    def __init__(self, grid):
        """
        Build a maze from an existing grid.

        Args:
            grid: N x N array-like of 0/1 (or Cell) values, indexed [y][x]

        Raises:
            ConfigurationError: if the grid is empty, not square or
                contains values other than OPEN/WALL
        """
        try:
            array = np.array(grid)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Maze grid is not a rectangular grid: {exc}") from exc

        if array.dtype != np.bool_ and not np.issubdtype(array.dtype, np.number):
            raise ConfigurationError(f"Maze cells must be numeric, got dtype {array.dtype}")
        if array.ndim != 2 or array.size == 0:
            raise ConfigurationError("Maze grid must be a non-empty 2D grid")
        if array.shape[0] != array.shape[1]:
            raise ConfigurationError(
                f"Maze grid must be square, got {array.shape[0]}x{array.shape[1]}"
            )
        if not np.isin(array, (Cell.OPEN, Cell.WALL)).all():
            raise ConfigurationError("Maze cells must be OPEN (0) or WALL (1)")

        self._grid = array.astype(np.uint8)
        self._grid.setflags(write=False)
        self._size = int(array.shape[0])

    @classmethod
    def open(cls, size: int) -> "GridMaze":
        """Maze of the given size with every cell open."""
        if not isinstance(size, int) or size <= 0:
            raise ConfigurationError(f"Maze size must be a positive integer, got {size!r}")
        return cls(np.zeros((size, size), dtype=np.uint8))

    @classmethod
    def from_strings(
        cls,
        rows: Iterable[str],
        wall: str = "#",
        free: str = "."
    ) -> "GridMaze":
        """
        Parse a maze from text rows, one string per grid row.

        Args:
            rows: Row strings, top row first
            wall: Character marking a wall cell
            free: Character marking an open cell

        Returns:
            maze: Parsed GridMaze
        """
        grid = []
        for y, row in enumerate(rows):
            line = []
            for x, ch in enumerate(row):
                if ch == wall:
                    line.append(Cell.WALL)
                elif ch == free:
                    line.append(Cell.OPEN)
                else:
                    raise ConfigurationError(
                        f"Unexpected character {ch!r} at ({x}, {y})"
                    )
            grid.append(line)

        widths = {len(line) for line in grid}
        if len(widths) > 1:
            raise ConfigurationError("Maze rows must all have the same length")

        return cls(grid)

    @property
    def size(self) -> int:
        return self._size

    @property
    def start(self) -> Tuple[int, int]:
        return (0, 0)

    @property
    def target(self) -> Tuple[int, int]:
        return (self._size - 1, self._size - 1)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._size and 0 <= y < self._size

    def cell_state(self, x: int, y: int) -> Cell:
        """
        Look up a single cell.

        Args:
            x: Column index
            y: Row index

        Returns:
            state: Cell.OPEN or Cell.WALL

        Raises:
            BoundsError: if (x, y) lies outside the grid
        """
        if not self.in_bounds(x, y):
            raise BoundsError(x, y, self._size)
        return Cell(int(self._grid[y, x]))

    def is_wall(self, x: int, y: int) -> bool:
        return self.cell_state(x, y) is Cell.WALL

    def get_grid(self) -> np.ndarray:
        """
        Get maze grid for visualization/debugging.

        Returns:
            grid: Writable copy of the (N, N) array, 1=wall, 0=open
        """
        return self._grid.copy()

    def render_text(self, wall: str = "#", free: str = ".") -> List[str]:
        return [
            "".join(wall if cell else free for cell in row)
            for row in self._grid
        ]

    def walls(self) -> Sequence[Tuple[int, int]]:
        """All wall cells as (x, y) pairs, row by row."""
        ys, xs = np.nonzero(self._grid)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def __eq__(self, other):
        if not isinstance(other, GridMaze):
            return NotImplemented
        return np.array_equal(self._grid, other._grid)

    def __hash__(self):
        return hash((self._size, self._grid.tobytes()))

    def __repr__(self):
        return f"GridMaze(size={self._size}, walls={int(self._grid.sum())})"


# Validation
if __name__ == "__main__":
    print("GridMaze - immutable grid maze")
    print("=" * 60)

    maze = GridMaze.from_strings([
        "....",
        ".##.",
        "...#",
        "#...",
    ])

    print(f"Maze: {maze}")
    print(f"Start: {maze.start}  Target: {maze.target}")
    for row in maze.render_text():
        print(f"  {row}")
    print(f"Cell (1, 1): {maze.cell_state(1, 1).name}")
