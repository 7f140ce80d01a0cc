"""
experiments/config.py

Shared run configuration for the maze search scripts.

Defaults match the classic run: a 20x20 maze, 100 genomes of 100
moves, 1000 generations over 4 worker threads.
"""

from typing import Dict

from errors import ConfigurationError
from evo.evolution import validate_search_params


def get_shared_config() -> Dict:
    return {
        'maze_size': 20,
        'population_size': 100,
        'genome_length': 100,
        'generations': 1000,
        'num_workers': 4,
        'seed': None,
        'stop_at_target': False,
        'verbose': True,
    }


def validate_config(config: Dict) -> Dict:
    """
    Check a config dict before any generation runs.

    Returns:
        config: The same dict, for chaining

    Raises:
        ConfigurationError: missing keys, non-positive sizes, odd population
    """
    required = ('maze_size', 'population_size', 'genome_length', 'generations', 'num_workers')
    missing = [key for key in required if key not in config]
    if missing:
        raise ConfigurationError(f"Missing config keys: {', '.join(missing)}")

    for key in ('maze_size', 'num_workers'):
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"{key} must be a positive integer, got {value!r}")

    validate_search_params(
        config['population_size'],
        config['genome_length'],
        config['generations'],
    )
    return config
