"""
Set Cover GA

Genetic algorithm search for minimum-cost exact covers. Input is a binary
matrix whose rows are candidate sets and whose columns are universe
elements; chromosomes select candidate sets and are scored by how many
sets they use when they cover every element exactly once.

Modules:
- data_models: Core data structures (ProblemMatrix, Individual, Population, EvolutionResult)
- io_utils: Matrix file parsing and console formatting
- population: Random population initialisation
- fitness: Exact-cover fitness evaluation
- crossover: Single-point crossover and children population builder
- mutation: Two-stage bit-flip mutation and mutation population builder
- engine: Generation loop, replacement strategies, solution extraction
- orchestration: Complete run workflow with console reporting
- visualization_utils: Population plots
- cli: Run configuration loading and validation
"""

__version__ = "0.1.0"

from .data_models import ProblemMatrix, Individual, Population, Solution, EvolutionResult
from .engine import EvolutionEngine, GAConfig

__all__ = [
    "ProblemMatrix",
    "Individual",
    "Population",
    "Solution",
    "EvolutionResult",
    "EvolutionEngine",
    "GAConfig",
]
