"""
Mutation operators for the set-cover GA.

Implements the two-stage bit-flip mutation and the mutation population
builder.
"""

import numpy as np

from .data_models import Individual, Population


MUTATION_PROB = 0.2
INDIVIDUAL_MUTATION_PROB = 0.3


def mutate(
    individual: Individual,
    rng: np.random.Generator,
    mutation_prob: float = MUTATION_PROB,
    gene_mutation_prob: float = INDIVIDUAL_MUTATION_PROB
) -> bool:
    """
    Flip genes in place behind a two-stage random gate.

    With probability mutation_prob the individual is considered at all;
    if so, every gene flips independently with probability
    gene_mutation_prob.

    Args:
        individual: Individual to mutate (modified in place)
        rng: Random number generator
        mutation_prob: Probability that the individual is considered
        gene_mutation_prob: Per-gene flip probability

    Returns:
        True if at least one gene flipped. A mutated individual has its
        fitness reset to unevaluated; otherwise it is left untouched.
    """
    if rng.random() >= mutation_prob:
        return False

    flips = rng.random(len(individual.chromosome)) < gene_mutation_prob
    if not flips.any():
        return False

    individual.chromosome[flips] = 1 - individual.chromosome[flips]
    individual.reset_fitness()
    return True


def create_mutation_population(
    population: Population,
    rng: np.random.Generator,
    mutation_prob: float = MUTATION_PROB,
    gene_mutation_prob: float = INDIVIDUAL_MUTATION_PROB
) -> Population:
    """
    Mutate a copy of every individual and keep the copies that changed.

    The source population is not modified. The result holds at most
    len(population) individuals, all unevaluated.

    Args:
        population: Source population
        rng: Random number generator
        mutation_prob: Probability that an individual is considered
        gene_mutation_prob: Per-gene flip probability

    Returns:
        New Population of mutated copies
    """
    mutants = Population()

    for individual in population:
        candidate = individual.copy()
        if mutate(candidate, rng, mutation_prob, gene_mutation_prob):
            mutants.append(candidate)

    return mutants
