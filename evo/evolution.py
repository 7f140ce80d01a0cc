"""
evo/evolution.py

Generation driver for the genetic maze path search.

Algorithm:
    1. Sample P random genomes (on the worker pool)
    2. Evaluate every genome in parallel, wait for all (barrier)
    3. For each generation:
        a. Select the lower-cost half, fitness attached
        b. Carry the elite forward, add one mutated crossover child each
        c. Evaluate the new population in parallel, wait for all
        d. Record this generation's best and the running best
    4. Return the best genome found

Only evaluation runs on the workers. Selection, crossover, mutation and
replacement run on the calling thread after every evaluation task for
the generation has completed.

Each population is evaluated exactly once: the table produced at the
end of one generation is the table the next generation selects from.
"""

import time
from typing import Dict, List, Optional

import numpy as np

from env.maze_env import GridMaze
from errors import ConfigurationError
from eval.rollout import minimum_cost
from evo.fitness import PopulationRunner
from evo.operators import next_generation, select_elite
from sim.genome import Genome, genome_to_string, print_genome
from sim.rng import RngRegistry
from workers.worker_pool import WorkerPool


def validate_search_params(
    population_size: int,
    genome_length: int,
    generations: int
) -> None:
    """
    Fail fast on sizes the generation loop cannot work with.

    Raises:
        ConfigurationError: non-positive sizes or an odd population
    """
    for name, value in (
        ("population_size", population_size),
        ("genome_length", genome_length),
        ("generations", generations),
    ):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

    if population_size % 2:
        raise ConfigurationError(
            f"population_size must be even for elite/child pairing, got {population_size}"
        )


class Evolution:
    """
    Genetic search for a move sequence that reaches the target corner.

    Hyperparameters:
    - population_size: Genomes per generation (even)
    - genome_length: Moves per genome
    - generations: Generations run by run()
    """

    def __init__(
        self,
        maze: GridMaze,
        pool: Optional[WorkerPool] = None,
        population_size: int = 100,
        genome_length: int = 100,
        generations: int = 1000,
        seed: Optional[int] = None,
        stop_at_target: bool = False,
        verbose: bool = False
    ):
        """
        Initialize the search.

        Args:
            maze: Maze shared read-only by every evaluation
            pool: Worker pool for evaluation; None evaluates sequentially
            population_size: Number of genomes P
            genome_length: Moves per genome L
            generations: Generation count G
            seed: Seeds this run's per-thread generators and its operator generator
            stop_at_target: End run() early once the target cell is reached
            verbose: Print progress
        """
        validate_search_params(population_size, genome_length, generations)

        self.maze = maze
        self.pool = pool
        self.population_size = population_size
        self.genome_length = genome_length
        self.generations = generations
        self.stop_at_target = stop_at_target
        self.verbose = verbose

        # Worker-side draws come from this run's registry, never a global one
        self.rngs = RngRegistry(seed)
        self.rng = np.random.RandomState(seed)

        self.runner = PopulationRunner(maze, pool, rngs=self.rngs)
        self.target_cost = minimum_cost(maze)

        self.population: List[Genome] = []
        self.fitness: Optional[List[int]] = None

        # Tracking
        self.generation = 0
        self.best_fitness: Optional[int] = None
        self.best_genome: Optional[Genome] = None

        self.history = {
            'generation': [],
            'best_fitness': [],
            'mean_fitness': [],
            'running_best': [],
            'fitness_table': [],
        }

    def initialize_population(self) -> List[Genome]:
        """Sample a fresh population and evaluate it."""
        self.population = self.runner.spawn(self.population_size, self.genome_length)
        self.fitness = self.evaluate_population(self.population)
        self._track_best(self.population, self.fitness)

        if self.verbose:
            print(f"Initial population: best fitness = {min(self.fitness)}")

        return self.population

    def evaluate_population(self, population: List[Genome]) -> List[int]:
        """
        Evaluate all genomes, one pool task per index.

        Returns:
            fitness: Costs index-aligned with population
        """
        fitness = self.runner.evaluate(population)
        assert len(fitness) == len(population), "Lost or duplicated evaluation results"
        return fitness

    def _track_best(self, population: List[Genome], fitness: List[int]) -> int:
        best_idx = int(np.argmin(fitness))
        generation_best = int(fitness[best_idx])

        if self.best_fitness is None or generation_best < self.best_fitness:
            self.best_fitness = generation_best
            self.best_genome = population[best_idx]

        return generation_best

    def step(self) -> Dict:
        """
        Execute one generation.

        Returns:
            summary: Generation statistics
        """
        if self.fitness is None:
            self.initialize_population()

        elite = select_elite(self.population, self.fitness)
        population = next_generation(elite, rng=self.rng)
        assert len(population) == self.population_size, "Population size drifted"

        fitness = self.evaluate_population(population)

        self.population = population
        self.fitness = fitness
        self.generation += 1

        generation_best = self._track_best(population, fitness)

        summary = {
            'generation': self.generation,
            'best_fitness': generation_best,
            'mean_fitness': float(np.mean(fitness)),
            'running_best': self.best_fitness,
            'fitness_table': list(fitness),
            'elite_fitness': [cost for _, cost in elite],
        }

        for key in self.history:
            self.history[key].append(summary[key])

        return summary

    def reached_target(self) -> bool:
        return self.best_fitness is not None and self.best_fitness <= self.target_cost

    def run(self, generations: Optional[int] = None) -> Dict:
        """
        Run the search for a number of generations.

        Args:
            generations: Overrides the configured generation count

        Returns:
            results: Best genome, best fitness, history and timing
        """
        if generations is None:
            generations = self.generations
        validate_search_params(self.population_size, self.genome_length, generations)

        if self.verbose:
            print(f"Starting evolution for {generations} generations")
            print(f"Maze size: {self.maze.size}")
            print(f"Population size: {self.population_size}")
            print(f"Genome length: {self.genome_length}")
            workers = self.pool.num_workers if self.pool is not None else 0
            print(f"Workers: {workers}")
            print("=" * 60)

        start_time = time.time()

        if self.fitness is None:
            self.initialize_population()

        generations_run = 0
        for _ in range(generations):
            if self.stop_at_target and self.reached_target():
                break

            gen_start = time.time()
            summary = self.step()
            generations_run += 1
            gen_time = time.time() - gen_start

            if self.verbose:
                print(
                    f"Gen {summary['generation']:4d} | "
                    f"Best: {summary['best_fitness']:4d} | "
                    f"Mean: {summary['mean_fitness']:7.2f} | "
                    f"Running best: {summary['running_best']:4d} | "
                    f"Time: {gen_time:.3f}s"
                )
                print_genome(self.population[int(np.argmin(self.fitness))])

        total_time = time.time() - start_time

        if self.verbose:
            print("=" * 60)
            print(f"Evolution complete in {total_time:.1f}s")
            print(f"Best fitness achieved: {self.best_fitness}")
            print(f"Best genome: {genome_to_string(self.best_genome)}")

        return {
            'best_genome': self.best_genome,
            'best_fitness': self.best_fitness,
            'reached_target': self.reached_target(),
            'generations_run': generations_run,
            'history': self.history,
            'total_time': total_time,
        }

    def get_best_genome(self) -> Genome:
        if self.best_genome is None:
            raise RuntimeError("No genome evaluated yet. Run run() first.")
        return self.best_genome
