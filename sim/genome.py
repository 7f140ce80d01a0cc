"""
sim/genome.py

Move alphabet and fixed-length move-sequence genomes.

A genome is an immutable tuple of Move values. Random genomes draw
every locus independently and uniformly from the five moves, using the
calling thread's private generator unless one is passed in.
"""

from enum import IntEnum
from typing import Iterable, Optional, Tuple

import numpy as np

from errors import ConfigurationError
from sim.rng import thread_rng


class Move(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    STAND = 4

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) of the move before boundary clamping."""
        return _DELTAS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Move":
        try:
            return _BY_SYMBOL[symbol.upper()]
        except KeyError:
            raise ValueError(f"Unknown move symbol {symbol!r}") from None


_SYMBOLS = {
    Move.UP: "U",
    Move.DOWN: "D",
    Move.LEFT: "L",
    Move.RIGHT: "R",
    Move.STAND: "S",
}
_BY_SYMBOL = {symbol: move for move, symbol in _SYMBOLS.items()}
_DELTAS = {
    Move.UP: (0, -1),
    Move.DOWN: (0, 1),
    Move.LEFT: (-1, 0),
    Move.RIGHT: (1, 0),
    Move.STAND: (0, 0),
}

MOVES = tuple(Move)

Genome = Tuple[Move, ...]


def random_genome(length: int, rng: Optional[np.random.RandomState] = None) -> Genome:
    """
    Sample a genome of independent uniform moves.

    Args:
        length: Number of moves (must be positive)
        rng: Generator to draw from; defaults to the calling thread's own

    Returns:
        genome: Tuple of `length` Move values
    """
    if not isinstance(length, (int, np.integer)) or length <= 0:
        raise ConfigurationError(f"Genome length must be a positive integer, got {length!r}")

    if rng is None:
        rng = thread_rng()

    draws = rng.randint(0, len(MOVES), size=int(length))
    return tuple(MOVES[i] for i in draws)


def make_genome(moves: Iterable) -> Genome:
    """Coerce ints or Move values into a genome tuple."""
    return tuple(Move(m) for m in moves)


def genome_to_string(genome: Genome) -> str:
    return "".join(move.symbol for move in genome)


def genome_from_string(text: str) -> Genome:
    return tuple(Move.from_symbol(ch) for ch in text.strip())


def print_genome(genome: Genome) -> None:
    print(genome_to_string(genome))
