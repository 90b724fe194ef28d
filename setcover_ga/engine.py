"""
Evolution engine for the set-cover GA.

Drives generations over a population, ranks individuals and extracts
viable exact covers.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from .data_models import EvolutionResult, Population, ProblemMatrix, Solution
from .population import initialize_population
from .fitness import evaluate_population
from .crossover import choose_crossover_point, create_children_population
from .mutation import create_mutation_population, MUTATION_PROB, INDIVIDUAL_MUTATION_PROB


POPULATION_SIZE = 80
MAX_GENERATIONS = 100


@dataclass
class GAConfig:
    """
    Genetic algorithm parameters.

    Attributes:
        population_size: Number of individuals in the evolving population
        max_generations: Generation count; also the invalid-candidate penalty
        mutation_prob: Probability that an individual is considered for mutation
        individual_mutation_prob: Per-gene flip probability once considered
        replacement: Replacement strategy name ("keep" or "elitist")
    """
    population_size: int = POPULATION_SIZE
    max_generations: int = MAX_GENERATIONS
    mutation_prob: float = MUTATION_PROB
    individual_mutation_prob: float = INDIVIDUAL_MUTATION_PROB
    replacement: str = "keep"

    @property
    def penalty(self) -> int:
        """Fitness of an individual that is not an exact cover."""
        return self.max_generations

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GAConfig":
        """Build from the 'ga' section of a run configuration."""
        data = data or {}
        return cls(
            population_size=data.get('population_size', POPULATION_SIZE),
            max_generations=data.get('max_generations', MAX_GENERATIONS),
            mutation_prob=data.get('mutation_prob', MUTATION_PROB),
            individual_mutation_prob=data.get('individual_mutation_prob', INDIVIDUAL_MUTATION_PROB),
            replacement=data.get('replacement', 'keep'),
        )


# Replacement strategies: (population, children, mutants, problem, penalty) -> next population.
ReplacementStrategy = Callable[[Population, Population, Population, ProblemMatrix, int], Population]


def keep_population(
    population: Population,
    children: Population,
    mutants: Population,
    problem: ProblemMatrix,
    penalty: int
) -> Population:
    """
    Keep the current population unchanged.

    Children and mutants are never fed back, so every generation only
    re-evaluates the same individuals.
    """
    return population


def elitist_replacement(
    population: Population,
    children: Population,
    mutants: Population,
    problem: ProblemMatrix,
    penalty: int
) -> Population:
    """
    Select the best individuals from population, children and mutants.

    Children and mutants are evaluated, the union is ranked ascending by
    fitness (stable, so current members win ties) and the first
    len(population) individuals survive.
    """
    evaluate_population(children, problem, penalty)
    evaluate_population(mutants, problem, penalty)

    pool = Population(population.individuals + children.individuals + mutants.individuals)
    survivors = pool.ranked().individuals[:len(population)]
    return Population([ind.copy() for ind in survivors])


REPLACEMENT_STRATEGIES: Dict[str, ReplacementStrategy] = {
    'keep': keep_population,
    'elitist': elitist_replacement,
}


def get_replacement_strategy(name: str) -> ReplacementStrategy:
    if name not in REPLACEMENT_STRATEGIES:
        raise ValueError(
            f"Unknown replacement strategy: '{name}'. "
            f"Must be one of {sorted(REPLACEMENT_STRATEGIES)}"
        )
    return REPLACEMENT_STRATEGIES[name]


def collect_solutions(population: Population, penalty: int) -> list[Solution]:
    """
    Collect every individual scoring strictly below the penalty.

    Args:
        population: Evaluated population (order is preserved)
        penalty: Invalid-candidate fitness

    Returns:
        List of Solution objects
    """
    return [
        Solution(chromosome=ind.genes(), cost=ind.fitness)
        for ind in population
        if 0 <= ind.fitness < penalty
    ]


class EvolutionEngine:
    """
    Generational control loop.

    The random generator is passed in explicitly so that a fixed seed
    reproduces a run exactly.
    """

    def __init__(
        self,
        problem: ProblemMatrix,
        config: GAConfig,
        rng: np.random.Generator,
        replacement: Optional[ReplacementStrategy] = None,
        progress: Optional[Callable[[int, Population], None]] = None
    ):
        """
        Args:
            problem: Problem matrix
            config: GA parameters
            rng: Random number generator
            replacement: Replacement strategy; defaults to the one named in config
            progress: Optional callback invoked after each generation
        """
        self.problem = problem
        self.config = config
        self.rng = rng
        if replacement is None:
            self.replacement = get_replacement_strategy(config.replacement)
            self.replacement_name = self.replacement.__name__
        else:
            # Hooks may be partials or callable objects without __name__
            self.replacement = replacement
            self.replacement_name = getattr(replacement, '__name__', repr(replacement))
        self.progress = progress

    @property
    def penalty(self) -> int:
        return self.config.penalty

    def initialize(self) -> Population:
        return initialize_population(self.config.population_size, self.problem.num_sets, self.rng)

    def breed(self, population: Population, crossover_point: int) -> Tuple[Population, Population]:
        """
        Derive the children and mutation populations from a population.

        Returns:
            Tuple of (children, mutants)
        """
        children = create_children_population(population, crossover_point)
        mutants = create_mutation_population(
            population,
            self.rng,
            self.config.mutation_prob,
            self.config.individual_mutation_prob
        )
        return children, mutants

    def run(self, population: Optional[Population] = None) -> EvolutionResult:
        """
        Run the generation loop and extract viable solutions.

        Algorithm:
            1. Draw the crossover point (once per run)
            2. Sample the initial population unless one is given
            3. Breed children and mutants from it
            4. For each generation: evaluate the population, then apply the
               replacement strategy; when it returns a new population,
               breed fresh children and mutants from the survivors
            5. Rank the population ascending by fitness
            6. Collect individuals scoring below the penalty

        Args:
            population: Optional initial population (sampled when omitted)

        Returns:
            EvolutionResult with ranked population and viable solutions
        """
        crossover_point = choose_crossover_point(self.problem.num_sets, self.rng)

        if population is None:
            population = self.initialize()

        initial = population.copy()
        children, mutants = self.breed(population, crossover_point)

        for generation in range(self.config.max_generations):
            evaluate_population(population, self.problem, self.penalty)

            next_population = self.replacement(
                population, children, mutants, self.problem, self.penalty
            )
            if next_population is not population:
                population = next_population
                children, mutants = self.breed(population, crossover_point)

            if self.progress is not None:
                self.progress(generation, population)

        # Covers runs with zero generations
        evaluate_population(population, self.problem, self.penalty)

        ranked = population.ranked()
        return EvolutionResult(
            solutions=collect_solutions(ranked, self.penalty),
            population=ranked,
            initial=initial,
            children=children,
            mutants=mutants,
            crossover_point=crossover_point,
            generations=self.config.max_generations,
            penalty=self.penalty,
            metadata={'replacement': self.replacement_name},
        )
