"""
I/O utilities for the set-cover GA.

Handles problem matrix parsing and console formatting of matrices,
populations and solutions.
"""

from pathlib import Path
from typing import List, Union

import numpy as np

from .data_models import ProblemMatrix, Population, EvolutionResult


class ResourceUnavailable(Exception):
    """Raised when the problem matrix source cannot be opened."""
    pass


class MalformedInput(ValueError):
    """Raised when dimensions or matrix values cannot be parsed."""
    pass


def load_problem_matrix(matrix_path: Union[str, Path]) -> ProblemMatrix:
    """
    Load a problem matrix from a whitespace-separated text file.

    Format:
        num_elements num_sets
        followed by num_sets rows of num_elements values (0 or 1)

    Example (3 elements, 3 sets):
        3 3
        1 1 0
        0 0 1
        1 1 1

    Tokens after the last matrix row are ignored.

    Args:
        matrix_path: Path to matrix file

    Returns:
        ProblemMatrix loaded from the file

    Raises:
        ResourceUnavailable: If the file cannot be opened
        MalformedInput: If dimensions or values cannot be parsed
    """
    matrix_path = Path(matrix_path)

    try:
        with open(matrix_path, 'r') as f:
            text = f.read()
    except OSError as e:
        raise ResourceUnavailable(f"Cannot open matrix file {matrix_path}: {e}") from e

    return parse_problem_matrix(text, source=str(matrix_path))


def parse_problem_matrix(text: str, source: str = "<string>") -> ProblemMatrix:
    """
    Parse problem matrix text (see load_problem_matrix for the format).

    Raises:
        MalformedInput: If dimensions or values cannot be parsed
    """
    tokens = text.split()

    if len(tokens) < 2:
        raise MalformedInput(f"Cannot read dimensions from {source}")

    try:
        num_elements = int(tokens[0])
        num_sets = int(tokens[1])
    except ValueError:
        raise MalformedInput(
            f"Invalid dimensions in {source}: {tokens[0]!r} {tokens[1]!r}"
        )

    if num_elements <= 0 or num_sets <= 0:
        raise MalformedInput(
            f"Dimensions must be positive in {source}, got {num_elements} x {num_sets}"
        )

    expected = num_elements * num_sets
    values = tokens[2:2 + expected]
    if len(values) < expected:
        raise MalformedInput(
            f"Matrix in {source} is truncated: expected {expected} values, got {len(values)}"
        )

    rows = []
    for i in range(num_sets):
        row = []
        for j in range(num_elements):
            token = values[i * num_elements + j]
            try:
                value = int(token)
            except ValueError:
                raise MalformedInput(f"Invalid value {token!r} at row {i + 1}, column {j + 1} in {source}")
            if value not in (0, 1):
                raise MalformedInput(
                    f"Value {value} at row {i + 1}, column {j + 1} in {source} must be 0 or 1"
                )
            row.append(value)
        rows.append(row)

    return ProblemMatrix(
        num_elements=num_elements,
        num_sets=num_sets,
        matrix=np.array(rows, dtype=np.int8)
    )


def format_genes(genes) -> str:
    return " ".join(str(int(g)) for g in genes)


def format_problem_matrix(problem: ProblemMatrix) -> str:
    """One line per candidate set, in the same layout as population dumps."""
    lines = []
    for i in range(problem.num_sets):
        lines.append(f"Set {i + 1}: Elements [ {format_genes(problem.row(i))} ]")
    return "\n".join(lines)


def format_population(population: Population) -> str:
    """
    Format every individual's selection vector and fitness.

    Returns:
        Multi-line string, e.g. "Individual 1: Chromosome [ 1 0 1 ] Fitness: -1"
    """
    lines = []
    for i, individual in enumerate(population):
        lines.append(
            f"Individual {i + 1}: Chromosome [ {format_genes(individual.chromosome)} ] "
            f"Fitness: {individual.fitness}"
        )
    return "\n".join(lines)


def format_solutions(result: EvolutionResult) -> List[str]:
    """Format viable solutions as 'genes  (cost N)' lines, best first."""
    return [
        f"{format_genes(solution.chromosome)}  (cost {solution.cost})"
        for solution in result.solutions
    ]
