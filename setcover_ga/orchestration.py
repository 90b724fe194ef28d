"""
Orchestration module for the set-cover GA.

Implements the complete run workflow: load the matrix, set up the RNG,
run the evolution engine and report populations and solutions.
"""

from typing import Dict, Optional
from pathlib import Path
import numpy as np

from .data_models import EvolutionResult, Population
from .engine import EvolutionEngine, GAConfig
from .io_utils import (
    load_problem_matrix,
    format_problem_matrix,
    format_population,
    format_solutions
)


def resolve_seed(seed: Optional[int]) -> int:
    """Return seed, drawing a fresh one when it is None."""
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    return seed


def print_population(title: str, population: Population) -> None:
    print(f"{title}:")
    if len(population):
        print(format_population(population))
    else:
        print("  (empty)")


def run_set_cover(run_config: Dict) -> EvolutionResult:
    """
    Search for exact covers of the configured problem matrix.

    Args:
        run_config: Validated run configuration dict

    Algorithm:
        1. Load the problem matrix from run_config['input']['matrix']
        2. Setup RNG (run_config['random_seed'] or a fresh seed)
        3. Run the evolution engine
        4. Print problem matrix, initial/children/mutation populations
        5. Print summary with viable solutions (ranked, best first)
        6. Save population plot if run_config['output']['plot'] is set

    Returns:
        EvolutionResult of the run
    """
    print("=" * 70)
    print("SET COVER GA")
    print("=" * 70)

    matrix_path = run_config['input']['matrix']
    print(f"Loading problem matrix from: {matrix_path}")
    problem = load_problem_matrix(matrix_path)
    print(f"Universe: {problem.num_elements} elements, {problem.num_sets} candidate sets")

    ga_config = GAConfig.from_dict(run_config['ga'])
    print(f"Population size: {ga_config.population_size}")
    print(f"Generations: {ga_config.max_generations}")
    print(f"Mutation probability: {ga_config.mutation_prob} "
          f"(per gene: {ga_config.individual_mutation_prob})")
    print(f"Replacement strategy: {ga_config.replacement}")

    # Setup RNG
    seed = resolve_seed(run_config.get('random_seed'))
    print(f"Random seed: {seed}")
    rng = np.random.default_rng(seed)

    def report_progress(generation: int, population: Population) -> None:
        if (generation + 1) % 10 == 0 or generation == ga_config.max_generations - 1:
            valid = sum(1 for ind in population if 0 <= ind.fitness < ga_config.penalty)
            print(f"  Progress: {generation + 1}/{ga_config.max_generations} generations, "
                  f"{valid} viable individuals")

    engine = EvolutionEngine(problem, ga_config, rng, progress=report_progress)

    print()
    print(f"Evolving {ga_config.population_size} individuals...")
    result = engine.run()
    result.metadata['seed'] = seed
    result.metadata['matrix_path'] = str(matrix_path)
    print(f"Crossover point: {result.crossover_point}")

    if run_config['output'].get('show_populations', True):
        print()
        print("Problem matrix:")
        print(format_problem_matrix(problem))
        print_population("Initial population", result.initial)
        print_population("Children population", result.children)
        print_population(f"Mutation population (total: {len(result.mutants)})", result.mutants)

    # Print summary
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Solutions found: {result.count}")
    if result.best is not None:
        print(f"Best cost: {result.best.cost} sets "
              f"(sets {', '.join(str(i + 1) for i in result.best.selected_sets())})")
    for line in format_solutions(result):
        print(f"  {line}")

    plot_path = run_config['output'].get('plot')
    if plot_path:
        from .visualization_utils import plot_population
        plot_population(result.population, problem, Path(plot_path), penalty=result.penalty)

    return result
