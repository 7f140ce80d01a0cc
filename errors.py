"""
errors.py

Error taxonomy for the maze path search.

- BoundsError: maze lookup outside the grid (a simulation defect)
- PoolClosedError: work submitted to a worker pool after shutdown
- ConfigurationError: invalid sizes or malformed maze input, raised
  before any generation runs
"""


class MazeSearchError(Exception):
    """Base class for all errors raised by this package."""


class BoundsError(MazeSearchError, IndexError):
    """Maze cell access outside [0, N)."""

    def __init__(self, x: int, y: int, size: int):
        super().__init__(f"Cell ({x}, {y}) is outside a {size}x{size} maze")
        self.x = x
        self.y = y
        self.size = size


class PoolClosedError(MazeSearchError, RuntimeError):
    """Task submitted to a worker pool that has been shut down."""


class ConfigurationError(MazeSearchError, ValueError):
    """Invalid run configuration or maze definition."""
