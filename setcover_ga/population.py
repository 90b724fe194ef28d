"""
Population initialisation for the set-cover GA.
"""

import numpy as np

from .data_models import Individual, Population


def initialize_population(
    size: int,
    num_genes: int,
    rng: np.random.Generator
) -> Population:
    """
    Sample a population of random selection vectors.

    Each gene is drawn independently and uniformly from {0, 1}. Callers
    pass num_sets as num_genes: one gene per candidate set.

    Args:
        size: Number of individuals
        num_genes: Chromosome length (number of candidate sets)
        rng: Random number generator

    Returns:
        Population with all fitness values unevaluated

    Raises:
        ValueError: If size is negative or num_genes is not positive
    """
    if size < 0:
        raise ValueError(f"Population size must be non-negative, got {size}")
    if num_genes <= 0:
        raise ValueError(f"Chromosome length must be positive, got {num_genes}")

    return Population([
        Individual(chromosome=rng.integers(0, 2, size=num_genes, dtype=np.int8))
        for _ in range(size)
    ])
