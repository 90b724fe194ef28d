"""
Visualization utilities for the set-cover GA.

Renders a population as a chromosome bitmap next to its fitness values.
"""

from pathlib import Path
from typing import Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .data_models import Population, ProblemMatrix


def population_bitmap(population: Population, num_genes: int) -> np.ndarray:
    """Stack chromosomes into a (len(population), num_genes) array."""
    if len(population) == 0:
        return np.zeros((0, num_genes), dtype=np.int8)
    return np.vstack([ind.chromosome for ind in population])


def plot_population(
    population: Population,
    problem: ProblemMatrix,
    output_path: Path,
    penalty: int,
    figsize: Tuple[int, int] = (12, 8)
) -> Path:
    """
    Save a two-panel plot of a population.

    Left panel shows the selection vectors (one row per individual, one
    column per candidate set). Right panel shows each individual's fitness
    with the penalty level marked.

    Args:
        population: Population to plot (typically the ranked final population)
        problem: Problem matrix (for the number of candidate sets)
        output_path: Path to save PNG file
        penalty: Invalid-candidate fitness
        figsize: Figure size (width, height) in inches

    Returns:
        Path of the saved PNG
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    bitmap = population_bitmap(population, problem.num_sets)
    fitness = population.fitness_values()

    fig, (ax_genes, ax_fitness) = plt.subplots(
        1, 2, figsize=figsize, gridspec_kw={'width_ratios': [3, 1]}
    )

    ax_genes.imshow(bitmap, aspect='auto', cmap='Greys', interpolation='nearest', vmin=0, vmax=1)
    ax_genes.set_title("Selection vectors")
    ax_genes.set_xlabel("Candidate set")
    ax_genes.set_ylabel("Individual (rank)")

    positions = np.arange(len(fitness))
    colors = ['tab:green' if 0 <= f < penalty else 'tab:red' for f in fitness]
    ax_fitness.barh(positions, fitness, color=colors)
    ax_fitness.axvline(penalty, color='black', linestyle='--', linewidth=1, label='penalty')
    ax_fitness.invert_yaxis()
    ax_fitness.set_title("Fitness (lower is better)")
    ax_fitness.set_xlabel("Sets used")
    ax_fitness.legend(loc='lower right')

    fig.tight_layout()
    fig.savefig(output_path, dpi=100)
    plt.close(fig)

    print(f"  Saved visualization: {output_path}")
    return output_path
