"""
experiments/run_all.py

Controlled comparison of evaluation back-ends.

Runs the same search under identical conditions:
1. Sequential evaluation (no pool)
2. Pooled evaluation with 1 worker
3. Pooled evaluation with the configured worker count

All runs share one maze and one seed, so best fitness should be in the
same range; wall-clock time is what differs.
"""

import sys
import os
import time
from typing import Dict, List, Optional

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def create_maze(config: Dict):
    from env.maze_env import GridMaze

    return GridMaze.open(config['maze_size'])


def run_search(config: Dict, maze, num_workers: Optional[int], label: str) -> Dict:
    from evo.evolution import Evolution
    from workers.worker_pool import WorkerPool

    print("=" * 70)
    print(f"EXPERIMENT: {label}")
    print("=" * 70)

    pool = WorkerPool(num_workers) if num_workers else None
    try:
        evolution = Evolution(
            maze,
            pool=pool,
            population_size=config['population_size'],
            genome_length=config['genome_length'],
            generations=config['generations'],
            seed=config['seed'],
            stop_at_target=config['stop_at_target'],
            verbose=config['verbose'],
        )

        start = time.time()
        results = evolution.run()
        total_time = time.time() - start
    finally:
        if pool is not None:
            pool.shutdown()

    best_curve = results['history']['best_fitness']

    summary = {
        'method': label,
        'best_fitness': results['best_fitness'],
        'final_mean_fitness': results['history']['mean_fitness'][-1] if best_curve else float('nan'),
        'reached_target': results['reached_target'],
        'generations_run': results['generations_run'],
        'total_time': total_time,
        'evaluations': (results['generations_run'] + 1) * config['population_size'],
    }

    print(f"\n{label} Results:")
    print(f"  Best fitness: {summary['best_fitness']}")
    print(f"  Reached target: {summary['reached_target']}")
    print(f"  Total time: {summary['total_time']:.1f}s")
    print(f"  Evaluations: {summary['evaluations']:,}")

    return summary


def print_comparison_table(results: List[Dict]):
    print("\n")
    print("=" * 70)
    print("EXPERIMENTAL RESULTS SUMMARY")
    print("=" * 70)
    print()

    print(f"{'Method':<22} | {'Best':<6} | {'Mean':<8} | {'Target':<7} | {'Time (s)':<9} | {'Evals':<10}")
    print("-" * 70)

    for result in results:
        method = result['method']
        best = f"{result['best_fitness']:>4d}"
        mean = f"{result['final_mean_fitness']:7.2f}"
        target = "yes" if result['reached_target'] else "no"
        time_str = f"{result['total_time']:8.2f}"
        evals = f"{result['evaluations']:>9,}"

        print(f"{method:<22} | {best:<6} | {mean:<8} | {target:<7} | {time_str:<9} | {evals:<10}")

    print("=" * 70)
    print()

    fastest_idx = int(np.argmin([r['total_time'] for r in results]))
    best_idx = int(np.argmin([r['best_fitness'] for r in results]))

    print("Key Findings:")
    print(f"  Fastest: {results[fastest_idx]['method']}")
    print(f"  Best fitness: {results[best_idx]['method']}")
    print()


def run_all_experiments(**overrides) -> List[Dict]:
    from experiments.config import get_shared_config, validate_config

    config = get_shared_config()
    config.update(overrides)
    validate_config(config)

    print("EXPERIMENTAL COMPARISON: SEQUENTIAL vs POOLED EVALUATION")
    print()
    print("Shared configuration:")
    for key, value in config.items():
        print(f"  {key}: {value}")
    print()

    maze = create_maze(config)

    results = [
        run_search(config, maze, None, "Sequential"),
        run_search(config, maze, 1, "Pool (1 worker)"),
        run_search(config, maze, config['num_workers'], f"Pool ({config['num_workers']} workers)"),
    ]

    print_comparison_table(results)

    return results


if __name__ == "__main__":
    print("Starting experimental runs...")
    print()

    overrides = {
        'generations': 50,
        'population_size': 40,
        'seed': 42,
        'verbose': False,
    }

    results = run_all_experiments(**overrides)

    print("All experiments complete!")
