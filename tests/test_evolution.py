import pytest

from env.maze_env import GridMaze
from errors import ConfigurationError
from eval.rollout import evaluate_fitness
from evo.evolution import Evolution
from workers.worker_pool import WorkerPool


@pytest.fixture
def pool():
    pool = WorkerPool(3)
    yield pool
    pool.shutdown()


def _maze():
    return GridMaze.from_strings([
        "......",
        ".##...",
        "...#..",
        "#.....",
        "...##.",
        "......",
    ])


def test_population_and_fitness_sizes_hold_every_generation(pool):
    evolution = Evolution(_maze(), pool=pool, population_size=10, genome_length=12, generations=8, seed=1)
    evolution.initialize_population()

    for _ in range(8):
        summary = evolution.step()
        assert len(evolution.population) == 10
        assert len(evolution.fitness) == 10
        assert len(summary['fitness_table']) == 10
        assert len(summary['elite_fitness']) == 5


def test_fitness_table_matches_population(pool):
    maze = _maze()
    evolution = Evolution(maze, pool=pool, population_size=8, genome_length=10, generations=3, seed=2)
    evolution.run()
    assert evolution.fitness == [evaluate_fitness(g, maze) for g in evolution.population]


def test_running_best_never_gets_worse(pool):
    evolution = Evolution(_maze(), pool=pool, population_size=12, genome_length=15, generations=15, seed=3)
    results = evolution.run()

    running = results['history']['running_best']
    assert len(running) == 15
    assert all(b <= a for a, b in zip(running, running[1:]))
    assert results['best_fitness'] == running[-1]
    assert results['best_fitness'] <= min(results['history']['best_fitness'])


def test_best_genome_scores_best_fitness(pool):
    maze = _maze()
    results = Evolution(maze, pool=pool, population_size=6, genome_length=10, generations=5, seed=4).run()
    assert evaluate_fitness(results['best_genome'], maze) == results['best_fitness']


def test_elite_survives_into_next_generation(pool):
    evolution = Evolution(_maze(), pool=pool, population_size=8, genome_length=10, generations=1, seed=5)
    evolution.initialize_population()
    before = min(evolution.fitness)
    evolution.step()
    assert min(evolution.fitness) <= before


def test_runs_all_generations_without_early_stop():
    evolution = Evolution(GridMaze.open(2), population_size=4, genome_length=6, generations=5, seed=6)
    results = evolution.run()
    assert results['generations_run'] == 5
    assert len(results['history']['generation']) == 5


def test_stop_at_target_ends_early_on_easy_maze():
    evolution = Evolution(
        GridMaze.open(2), population_size=20, genome_length=6,
        generations=50, seed=7, stop_at_target=True,
    )
    results = evolution.run()
    assert results['reached_target']
    assert results['best_fitness'] == 2
    assert results['generations_run'] < 50


def test_sequential_driver_without_pool():
    results = Evolution(_maze(), population_size=6, genome_length=8, generations=3, seed=8).run()
    assert len(results['history']['fitness_table'][-1]) == 6


def test_task_failure_aborts_the_run(pool, monkeypatch):
    evolution = Evolution(_maze(), pool=pool, population_size=4, genome_length=5, generations=2, seed=9)

    def broken(genome):
        raise RuntimeError("evaluator defect")

    monkeypatch.setattr(evolution.runner, "evaluator", broken)
    with pytest.raises(RuntimeError, match="evaluator defect"):
        evolution.run()


def test_verbose_run_prints_progress(capsys):
    Evolution(GridMaze.open(3), population_size=4, genome_length=4, generations=2, seed=10, verbose=True).run()
    out = capsys.readouterr().out
    assert "Starting evolution for 2 generations" in out
    assert "Gen    2" in out
    assert "Best genome:" in out
    genome_lines = [line for line in out.splitlines() if len(line) == 4 and set(line) <= set("UDLRS")]
    assert len(genome_lines) == 2


@pytest.mark.parametrize("kwargs", [
    {"population_size": 0},
    {"population_size": 7},
    {"genome_length": 0},
    {"generations": -1},
    {"population_size": True},
])
def test_bad_configuration_fails_before_running(kwargs):
    params = {"population_size": 4, "genome_length": 4, "generations": 2}
    params.update(kwargs)
    with pytest.raises(ConfigurationError):
        Evolution(GridMaze.open(3), **params)


def test_get_best_genome_requires_a_run():
    evolution = Evolution(GridMaze.open(3), population_size=4, genome_length=4, generations=1)
    with pytest.raises(RuntimeError):
        evolution.get_best_genome()


def test_selection_waits_for_every_evaluation(pool, monkeypatch):
    import threading
    import time

    import evo.evolution as evolution_module
    from evo.operators import select_elite

    maze = _maze()
    lock = threading.Lock()
    completed = {"count": 0}
    seen_at_selection = []

    def slow_evaluator(genome):
        time.sleep(0.002)
        cost = evaluate_fitness(genome, maze)
        with lock:
            completed["count"] += 1
        return cost

    def counting_select(population, fitness):
        with lock:
            seen_at_selection.append(completed["count"])
            completed["count"] = 0
        return select_elite(population, fitness)

    evolution = Evolution(maze, pool=pool, population_size=8, genome_length=10, generations=4, seed=11)
    monkeypatch.setattr(evolution.runner, "evaluator", slow_evaluator)
    monkeypatch.setattr(evolution_module, "select_elite", counting_select)
    evolution.run()

    assert seen_at_selection == [8] * 4


def test_each_run_owns_its_generators():
    first = Evolution(GridMaze.open(3), population_size=4, genome_length=4, generations=1, seed=1)
    rng = first.rngs.get()

    second = Evolution(GridMaze.open(3), population_size=4, genome_length=4, generations=1, seed=2)

    assert first.rngs is not second.rngs
    assert first.rngs.get() is rng


def test_seeded_sequential_runs_sample_the_same_population():
    a = Evolution(_maze(), population_size=6, genome_length=9, generations=2, seed=12)
    b = Evolution(_maze(), population_size=6, genome_length=9, generations=2, seed=12)
    Evolution(_maze(), population_size=6, genome_length=9, generations=2, seed=99)
    assert a.initialize_population() == b.initialize_population()
    assert a.run()['best_genome'] == b.run()['best_genome']
