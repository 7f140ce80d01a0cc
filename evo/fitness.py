from typing import List, Optional

from env.maze_env import GridMaze
from eval.rollout import RolloutEvaluator
from sim.genome import Genome, random_genome
from sim.rng import RngRegistry
from workers.worker_pool import WorkerPool


class PopulationRunner:
    """Fans population-wide work out over a worker pool and waits for all of it."""

    def __init__(
        self,
        maze: GridMaze,
        pool: Optional[WorkerPool] = None,
        rngs: Optional[RngRegistry] = None
    ):
        self.maze = maze
        self.pool = pool
        self.rngs = rngs if rngs is not None else RngRegistry()
        self.evaluator = RolloutEvaluator(maze)

    def evaluate(self, population: List[Genome]) -> List[int]:
        # One task per index; each future carries its own result slot
        if self.pool is None:
            return self.evaluator.evaluate_batch(population)

        futures = [self.pool.submit(self.evaluator, genome) for genome in population]
        fitness = [0] * len(population)
        for i, future in enumerate(futures):
            fitness[i] = self.pool.wait(future)
        return fitness

    def _sample(self, genome_length: int) -> Genome:
        return random_genome(genome_length, rng=self.rngs.get())

    def spawn(self, population_size: int, genome_length: int) -> List[Genome]:
        # Sampled on the workers so each draw uses that worker's own generator
        if self.pool is None:
            return [self._sample(genome_length) for _ in range(population_size)]

        futures = [
            self.pool.submit(self._sample, genome_length)
            for _ in range(population_size)
        ]
        return self.pool.wait_all(futures)
