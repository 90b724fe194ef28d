"""
Data models for the set-cover GA.

Core data structures representing the problem matrix, individuals,
populations and the result of an evolution run.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Any

import numpy as np


UNEVALUATED = -1


@dataclass(frozen=True, eq=False)
class ProblemMatrix:
    """
    Immutable set-membership matrix.

    Rows are candidate sets, columns are universe elements; entry 1 means
    "set i contains element j".

    Attributes:
        num_elements: Universe size
        num_sets: Number of candidate sets
        matrix: num_sets x num_elements array of 0/1 values (read-only)
    """
    num_elements: int
    num_sets: int
    matrix: np.ndarray

    def __post_init__(self):
        """Validate dimensions and freeze the matrix."""
        if self.num_elements <= 0 or self.num_sets <= 0:
            raise ValueError(
                f"Dimensions must be positive, got num_elements={self.num_elements}, "
                f"num_sets={self.num_sets}"
            )

        raw = np.asarray(self.matrix)
        if raw.shape != (self.num_sets, self.num_elements):
            raise ValueError(
                f"Matrix shape {raw.shape} does not match "
                f"({self.num_sets}, {self.num_elements})"
            )
        # Checked before the int8 cast, which would truncate fractions
        if not np.isin(raw, (0, 1)).all():
            raise ValueError("Matrix entries must be 0 or 1")

        matrix = raw.astype(np.int8)
        matrix.flags.writeable = False
        object.__setattr__(self, "matrix", matrix)

    def row(self, set_index: int) -> np.ndarray:
        """Membership row of one candidate set."""
        return self.matrix[set_index]


@dataclass(eq=False)
class Individual:
    """
    A selection of candidate sets (one gene per set).

    Attributes:
        chromosome: 0/1 vector of length num_sets (1 = set included)
        fitness: -1 when unevaluated, otherwise the evaluator's score
    """
    chromosome: np.ndarray
    fitness: int = UNEVALUATED

    def __post_init__(self):
        """Ensure the chromosome is an owned 0/1 int8 array."""
        genes = np.asarray(self.chromosome)
        if not np.isin(genes, (0, 1)).all():
            raise ValueError(f"Chromosome genes must be 0 or 1, got {genes.tolist()}")
        self.chromosome = genes.astype(np.int8)

    def __len__(self) -> int:
        return len(self.chromosome)

    def copy(self) -> "Individual":
        """
        Create a deep copy of this individual.

        Returns:
            New Individual with its own chromosome array
        """
        return Individual(chromosome=self.chromosome.copy(), fitness=self.fitness)

    def reset_fitness(self) -> None:
        self.fitness = UNEVALUATED

    @property
    def is_evaluated(self) -> bool:
        return self.fitness != UNEVALUATED

    def selected_sets(self) -> List[int]:
        """Indices of included candidate sets."""
        return [int(i) for i in np.flatnonzero(self.chromosome)]

    def set_count(self) -> int:
        return int(self.chromosome.sum())

    def genes(self) -> tuple[int, ...]:
        return tuple(int(g) for g in self.chromosome)


class Population:
    """
    Ordered, owned collection of individuals.

    Populations never share Individual objects; use copy() to duplicate.
    """

    def __init__(self, individuals: Optional[List[Individual]] = None):
        self.individuals: List[Individual] = list(individuals) if individuals else []

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def append(self, individual: Individual) -> None:
        self.individuals.append(individual)

    def copy(self) -> "Population":
        """Deep copy (every individual is copied)."""
        return Population([ind.copy() for ind in self.individuals])

    def ranked(self) -> "Population":
        """
        Return a new population sorted ascending by fitness.

        The sort is stable, so individuals with equal fitness keep their
        relative order. Individuals are moved, not copied.
        """
        return Population(sorted(self.individuals, key=lambda ind: ind.fitness))

    def fitness_values(self) -> List[int]:
        return [ind.fitness for ind in self.individuals]


@dataclass
class Solution:
    """A viable exact cover found in the final population."""
    chromosome: tuple[int, ...]
    cost: int

    def selected_sets(self) -> List[int]:
        return [i for i, gene in enumerate(self.chromosome) if gene == 1]


@dataclass
class EvolutionResult:
    """
    Outcome of an evolution run.

    Attributes:
        solutions: Viable exact covers in ranked order (best first)
        population: Final population, ranked ascending by fitness
        initial: Copy of the initial population, taken before evaluation
        children: Children population produced by crossover
        mutants: Mutation population (only copies that actually changed)
        crossover_point: Crossover point used for the run
        generations: Number of generations executed
        penalty: Fitness value marking invalid candidates
        metadata: Additional information (seed, replacement strategy, ...)
    """
    solutions: List[Solution]
    population: Population
    initial: Population
    children: Population
    mutants: Population
    crossover_point: int
    generations: int
    penalty: int
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def count(self) -> int:
        """Number of viable solutions."""
        return len(self.solutions)

    @property
    def best(self) -> Optional[Solution]:
        return self.solutions[0] if self.solutions else None
