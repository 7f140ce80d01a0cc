# ============================================================
# LOCKED MODULE
# Grid agent with discrete move mechanics
# DO NOT MODIFY unless fixing a confirmed bug.
# Fitness values for every run depend on these rules.
# ============================================================

"""
Discrete agent that walks a square grid one move at a time.

This module implements the agent's body only.
It contains NO genome logic, NO search, and NO cost computation.

Key responsibilities:
- Position state on the grid
- Boundary clamping (moves off the grid are no-ops)
- Wall detection via an external cell query

The agent is a "token on a board", nothing more.
"""

from typing import Callable, Tuple

from sim.genome import Move


class GridAgent:
    """
    Agent on an N x N grid starting at the top-left cell.

    The agent does NOT:
    - Choose its own moves (the genome is external)
    - Compute costs (evaluator's responsibility)
    - Own the maze (walls are queried through a callable)
    """

    def __init__(self, size: int, position: Tuple[int, int] = (0, 0)):
        """
        Args:
            size: Grid dimension N
            position: Initial (x, y) cell
        """
        assert size > 0, "Grid size must be positive"

        self.size = size
        self.x, self.y = position
        self.steps = 0
        self.blocked = False

    # --------------------------------------------------
    # Lifecycle
    # --------------------------------------------------

    def reset(self, position: Tuple[int, int] = (0, 0)):
        """Reset agent state."""
        self.x, self.y = position
        self.steps = 0
        self.blocked = False

    # --------------------------------------------------
    # Control
    # --------------------------------------------------

    def apply_move(self, move: Move):
        """
        Apply one move, clamped at the grid boundary.

        UP/DOWN change y, LEFT/RIGHT change x, STAND does nothing.
        A move that would leave the grid leaves the position unchanged.
        """
        dx, dy = Move(move).delta

        self.x = min(max(self.x + dx, 0), self.size - 1)
        self.y = min(max(self.y + dy, 0), self.size - 1)

        self.steps += 1

    def step(self, move: Move, is_wall: Callable[[int, int], bool]) -> bool:
        """
        Apply a move, then check the cell the agent stands on.

        Args:
            move: Move to apply
            is_wall: function(x, y) -> bool

        Returns:
            blocked: True if the agent now stands on a wall
        """
        self.apply_move(move)
        self.blocked = is_wall(self.x, self.y)
        return self.blocked

    # --------------------------------------------------
    # Introspection
    # --------------------------------------------------

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def get_state(self) -> dict:
        return {
            "position": (self.x, self.y),
            "steps": self.steps,
            "blocked": self.blocked,
        }


# --------------------------------------------------
# Self-test (safe to run)
# --------------------------------------------------

if __name__ == "__main__":
    print("✓ Grid agent self-test")

    agent = GridAgent(size=4)

    def no_walls(x, y):
        return False

    for move in (Move.RIGHT, Move.RIGHT, Move.DOWN, Move.UP, Move.UP):
        agent.step(move, no_walls)
    assert agent.position == (2, 0)

    print("✓ Agent OK")
