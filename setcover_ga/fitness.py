"""
Fitness evaluation against the exact-cover constraint.

A chromosome scores the number of sets it selects when the selected sets
partition the universe; anything else (uncovered or multiply covered
elements) scores the fixed penalty. Lower is better.
"""

import numpy as np

from .data_models import Individual, Population, ProblemMatrix


def coverage_counts(individual: Individual, problem: ProblemMatrix) -> np.ndarray:
    """
    Count how many selected sets contain each element.

    Args:
        individual: Individual whose chromosome selects candidate sets
        problem: Problem matrix

    Returns:
        Integer array of length num_elements

    Raises:
        ValueError: If the chromosome length differs from num_sets
    """
    if len(individual.chromosome) != problem.num_sets:
        raise ValueError(
            f"Chromosome length {len(individual.chromosome)} does not match "
            f"num_sets {problem.num_sets}"
        )

    selected = individual.chromosome == 1
    return problem.matrix[selected].sum(axis=0, dtype=np.int64)


def is_exact_cover(individual: Individual, problem: ProblemMatrix) -> bool:
    """True if every element is covered exactly once."""
    counts = coverage_counts(individual, problem)
    cover_count = int(np.count_nonzero(counts >= 1))
    over_covered = bool((counts > 1).any())
    return cover_count == problem.num_elements and not over_covered


def evaluate_fitness(individual: Individual, problem: ProblemMatrix, penalty: int) -> int:
    """
    Score one individual and store the score on it.

    Args:
        individual: Individual to evaluate (fitness updated in place)
        problem: Problem matrix
        penalty: Fitness assigned to invalid candidates

    Returns:
        Number of selected sets for an exact cover, otherwise penalty
    """
    if is_exact_cover(individual, problem):
        individual.fitness = individual.set_count()
    else:
        individual.fitness = penalty
    return individual.fitness


def evaluate_population(population: Population, problem: ProblemMatrix, penalty: int) -> None:
    for individual in population:
        evaluate_fitness(individual, problem, penalty)
