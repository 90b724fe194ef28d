"""
Crossover operators for the set-cover GA.

Implements single fixed-point crossover and the children population
builder that pairs consecutive population members.
"""

from typing import Tuple

import numpy as np

from .data_models import Individual, Population


def choose_crossover_point(num_genes: int, rng: np.random.Generator) -> int:
    """
    Draw the crossover point used for a whole run.

    Args:
        num_genes: Chromosome length (number of candidate sets)
        rng: Random number generator

    Returns:
        Integer uniformly drawn from [0, num_genes)
    """
    if num_genes <= 0:
        raise ValueError(f"Chromosome length must be positive, got {num_genes}")
    return int(rng.integers(0, num_genes))


def single_point_crossover(
    parent1: Individual,
    parent2: Individual,
    point: int
) -> Tuple[Individual, Individual]:
    """
    Combine two parents at a fixed crossover point.

    child1 takes parent1's genes before point and parent2's genes from
    point onward; child2 takes the complementary split.

    Args:
        parent1: First parent
        parent2: Second parent
        point: Crossover point, 0 <= point <= chromosome length

    Returns:
        Tuple of (child1, child2), both unevaluated

    Raises:
        ValueError: If parents differ in length or point is out of range
    """
    length = len(parent1.chromosome)
    if len(parent2.chromosome) != length:
        raise ValueError(
            f"Parents must have equal length, got {length} and {len(parent2.chromosome)}"
        )
    if not 0 <= point <= length:
        raise ValueError(f"Crossover point {point} out of range [0, {length}]")

    child1 = Individual(
        chromosome=np.concatenate((parent1.chromosome[:point], parent2.chromosome[point:]))
    )
    child2 = Individual(
        chromosome=np.concatenate((parent2.chromosome[:point], parent1.chromosome[point:]))
    )

    return child1, child2


def create_children_population(population: Population, point: int) -> Population:
    """
    Build a children population of the same size as the source.

    Members are processed in non-overlapping pairs: index i is paired with
    (i + 1) mod size for i = 0, 2, 4, ... For an odd size the last pair
    wraps around to the first member and only its first child is kept.

    Args:
        population: Source population (not modified)
        point: Crossover point

    Returns:
        New Population of unevaluated children
    """
    size = len(population)
    children = Population()

    for i in range(0, size, 2):
        parent1 = population[i]
        parent2 = population[(i + 1) % size]
        child1, child2 = single_point_crossover(parent1, parent2, point)

        children.append(child1)
        if len(children) < size:
            children.append(child2)

    return children
