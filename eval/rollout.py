"""
eval/rollout.py

Pure walk evaluation for grid maze navigation.

This module replays a genome on a maze and scores where the agent
ends up. It does NOT perform selection, mutation, or scheduling.

Responsibilities:
- Walk execution (start cell → moves in order → wall stop)
- Cost computation (Manhattan-style distance to the target corner)
- Path collection for rendering and reporting

This is used by:
- Population fitness evaluation (through the worker pool)
- The renderer, to draw the walked path
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from env.maze_env import GridMaze
from sim.agent import GridAgent
from sim.genome import Move


@dataclass(frozen=True)
class WalkResult:
    """Outcome of replaying one genome."""

    path: Tuple[Tuple[int, int], ...]
    final_position: Tuple[int, int]
    steps: int
    hit_wall: bool
    cost: int

    @property
    def reached_target(self) -> bool:
        # (N - y) + (N - x) bottoms out at 2, only on (N-1, N-1)
        return self.cost == 2


def cost_at(position: Tuple[int, int], size: int) -> int:
    """Cost of ending at `position`: (N - y) + (N - x)."""
    x, y = position
    return (size - y) + (size - x)


def minimum_cost(maze: GridMaze) -> int:
    """Best achievable cost, reached only on the target cell."""
    return cost_at(maze.target, maze.size)


def walk(genome: Sequence[Move], maze: GridMaze) -> WalkResult:
    """
    Replay a genome from the start cell.

    Episode flow:
    1. Place the agent on (0, 0)
    2. For each move in order:
       - Apply the move (clamped at the boundary)
       - Stop immediately if the agent stands on a wall
    3. Score the final position

    Args:
        genome: Sequence of Move values
        maze: Maze to walk

    Returns:
        result: WalkResult with path, final position and cost
    """
    agent = GridAgent(maze.size, maze.start)
    path: List[Tuple[int, int]] = [agent.position]

    for move in genome:
        blocked = agent.step(Move(move), maze.is_wall)
        path.append(agent.position)
        if blocked:
            break

    return WalkResult(
        path=tuple(path),
        final_position=agent.position,
        steps=agent.steps,
        hit_wall=agent.blocked,
        cost=cost_at(agent.position, maze.size),
    )


def evaluate_fitness(genome: Sequence[Move], maze: GridMaze) -> int:
    """
    Cost of a genome on a maze. Lower is better.

    Pure and side-effect free; safe to call concurrently on the same maze.
    """
    return walk(genome, maze).cost


class RolloutEvaluator:
    """
    Fitness callable bound to one maze.

    Instances are handed to the worker pool; they hold no mutable state,
    so any number of workers may call the same evaluator at once.
    """

    def __init__(self, maze: GridMaze):
        self.maze = maze

    def __call__(self, genome: Sequence[Move]) -> int:
        return evaluate_fitness(genome, self.maze)

    def evaluate(self, genome: Sequence[Move]) -> int:
        return evaluate_fitness(genome, self.maze)

    def evaluate_batch(self, genomes: list) -> List[int]:
        """
        Evaluate multiple genomes in sequence.

        Used as the sequential reference for pooled evaluation.
        """
        return [self.evaluate(genome) for genome in genomes]
