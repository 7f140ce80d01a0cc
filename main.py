from env.maze_env import GridMaze
from evo.evolution import Evolution
from experiments.config import get_shared_config, validate_config
from sim.genome import genome_to_string
from workers.worker_pool import WorkerPool

if __name__ == "__main__":
    config = validate_config(get_shared_config())
    maze = GridMaze.open(config['maze_size'])

    with WorkerPool(config['num_workers']) as pool:
        evo = Evolution(
            maze,
            pool=pool,
            population_size=config['population_size'],
            genome_length=config['genome_length'],
            generations=config['generations'],
            seed=config['seed'],
            stop_at_target=config['stop_at_target'],
            verbose=config['verbose'],
        )
        results = evo.run()

    print("Final:", results['best_fitness'], genome_to_string(results['best_genome']))
