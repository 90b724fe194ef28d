#!/usr/bin/env python3
"""
Set Cover GA - Exact cover search

Main entry point for the genetic-algorithm exact cover search.
Reads a problem matrix, evolves a population of set selections and
prints the viable exact covers found.
"""

import sys
import argparse
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from setcover_ga.cli import run_from_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Set Cover GA - Minimum-cost exact cover search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py                               # Solve matrix.txt with config.yaml
  python3 main.py problems/p1.txt               # Solve a specific matrix file
  python3 main.py --seed 42                     # Reproducible run
  python3 main.py --replacement elitist         # Feed children and mutants back
  python3 main.py --plot output/population.png  # Save a population plot
  python3 main.py --config custom.yaml --quiet  # Custom config, summary only
        """
    )

    parser.add_argument(
        'matrix',
        nargs='?',
        default=None,
        help='Problem matrix file (default: input.matrix from config, matrix.txt)'
    )

    parser.add_argument(
        '--config', '-c',
        default='config.yaml',
        help='Configuration file path (default: config.yaml, skipped if missing)'
    )

    parser.add_argument(
        '--seed', '-s',
        type=int,
        metavar='N',
        help='Random seed (default: random_seed from config, else fresh)'
    )

    parser.add_argument(
        '--generations', '-g',
        type=int,
        metavar='N',
        help='Number of generations (also the invalid-candidate penalty)'
    )

    parser.add_argument(
        '--population-size', '-p',
        type=int,
        metavar='N',
        help='Number of individuals in the population'
    )

    parser.add_argument(
        '--replacement', '-r',
        choices=['keep', 'elitist'],
        help='Replacement strategy between generations'
    )

    parser.add_argument(
        '--plot',
        type=str,
        metavar='PATH',
        help='Save a population plot (PNG) to PATH'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Skip the problem matrix and population dumps'
    )

    return parser


def main(argv=None):
    """Main entry point with command-line argument parsing"""
    args = build_parser().parse_args(argv)

    config_path = args.config
    if config_path == 'config.yaml' and not Path(config_path).exists():
        config_path = None

    overrides = {
        'matrix': args.matrix,
        'random_seed': args.seed,
        'max_generations': args.generations,
        'population_size': args.population_size,
        'replacement': args.replacement,
        'plot': args.plot,
        'quiet': args.quiet,
    }

    try:
        run_from_config(config_path, overrides)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except MemoryError:
        print("Error: memory allocation failed")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
