#!/usr/bin/env python3
"""
Test runner for the set cover GA
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))


def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = loader.discover(
        start_dir=str(Path(__file__).parent / "tests"),
        top_level_dir=str(Path(__file__).parent)
    )

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


def run_integration_test():
    """Run a basic integration test on the bundled matrix"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    try:
        import numpy as np
        from setcover_ga.io_utils import load_problem_matrix
        from setcover_ga.engine import EvolutionEngine, GAConfig

        print("Loading matrix.txt...")
        problem = load_problem_matrix(Path(__file__).parent / "matrix.txt")

        print("Running evolution engine...")
        config = GAConfig(replacement="elitist")
        result = EvolutionEngine(problem, config, np.random.default_rng(0)).run()

        print(f"Solutions found: {result.count}")
        if result.best is not None:
            print(f"Best cost: {result.best.cost}")

        # Every reported solution must score below the penalty
        success = all(0 <= s.cost < result.penalty for s in result.solutions)

        if success:
            print("✓ Integration test PASSED")
        else:
            print("✗ Integration test FAILED")

        return success

    except Exception as e:
        print(f"✗ Integration test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    print("Running Set Cover GA Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
