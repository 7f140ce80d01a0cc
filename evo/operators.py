"""Selection, crossover and mutation over move-sequence genomes."""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from sim.genome import MOVES, Genome, Move
from sim.rng import thread_rng

Scored = Tuple[Genome, int]


def select_elite(population: Sequence[Genome], fitness: Sequence[int]) -> List[Scored]:
    """
    Pick the lower-cost half of a population with fitness attached.

    The fitness table is ranked with a stable argsort, so equal costs
    keep their population order, and each genome is paired with the
    cost found at its own index before anything is reordered.

    Args:
        population: P genomes
        fitness: P costs, index-aligned with population

    Returns:
        elite: P // 2 (genome, cost) pairs, best first
    """
    if len(population) != len(fitness):
        raise ValueError(
            f"Population has {len(population)} genomes but {len(fitness)} fitness values"
        )

    order = np.argsort(np.asarray(fitness), kind="stable")
    half = len(population) // 2
    return [(population[i], int(fitness[i])) for i in order[:half]]


def crossover(
    parent_a: Genome,
    parent_b: Genome,
    point: Optional[int] = None,
    rng: Optional[np.random.RandomState] = None
) -> Genome:
    """
    Single-point crossover.

    child = parent_a[:k] + parent_b[k:], with k drawn uniformly from
    [0, L-1] unless `point` is given.
    """
    length = len(parent_a)
    if len(parent_b) != length:
        raise ValueError(f"Parents differ in length: {length} vs {len(parent_b)}")

    if point is None:
        if rng is None:
            rng = thread_rng()
        point = int(rng.randint(0, length))
    elif not 0 <= point < length:
        raise ValueError(f"Crossover point {point} outside [0, {length - 1}]")

    return tuple(parent_a[:point]) + tuple(parent_b[point:])


def mutate(
    genome: Genome,
    locus: Optional[int] = None,
    move: Optional[Move] = None,
    rng: Optional[np.random.RandomState] = None
) -> Genome:
    """
    Point mutation: replace exactly one locus.

    A sampled replacement is drawn from the four moves other than the
    current one, so the output always differs at that locus.
    """
    length = len(genome)
    if length == 0:
        raise ValueError("Cannot mutate an empty genome")

    if rng is None:
        rng = thread_rng()

    if locus is None:
        locus = int(rng.randint(0, length))
    elif not 0 <= locus < length:
        raise ValueError(f"Locus {locus} outside [0, {length - 1}]")

    if move is None:
        choices = [m for m in MOVES if m != genome[locus]]
        move = choices[rng.randint(0, len(choices))]

    mutated = list(genome)
    mutated[locus] = Move(move)
    return tuple(mutated)


def next_generation(
    elite: Sequence[Scored],
    rng: Optional[np.random.RandomState] = None
) -> List[Genome]:
    """
    Carry the elite forward and breed one child per elite.

    Elite i is paired with its mirror partner elite[len - i - 1]; the
    crossover child is mutated once. Output interleaves (elite, child),
    so its size is exactly twice the elite size.
    """
    half = len(elite)
    population: List[Genome] = []

    for i in range(half):
        parent = elite[i][0]
        partner = elite[half - i - 1][0]
        child = mutate(crossover(parent, partner, rng=rng), rng=rng)
        population.append(parent)
        population.append(child)

    return population
