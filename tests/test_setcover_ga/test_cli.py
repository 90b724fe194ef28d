"""
Tests for run configuration handling and the end-to-end workflow.
"""

import unittest
import tempfile
import shutil
import io
import contextlib
from pathlib import Path

import yaml

from setcover_ga.cli import (
    ConfigValidationError,
    load_run_config,
    merge_with_defaults,
    apply_overrides,
    validate_run_config,
    prepare_run_config,
    DEFAULT_CONFIG,
    run_from_config,
)
from setcover_ga.engine import GAConfig
from setcover_ga.io_utils import MalformedInput, ResourceUnavailable


MATRIX_TEXT = "3 3\n1 1 0\n0 0 1\n1 1 1\n"


class TestConfigLoading(unittest.TestCase):
    """Test YAML configuration loading."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_load_valid_config(self):
        config_path = self.temp_dir / "config.yaml"
        with open(config_path, 'w') as f:
            yaml.dump({'ga': {'population_size': 10}}, f)

        config = load_run_config(str(config_path))

        self.assertEqual(config['ga']['population_size'], 10)

    def test_missing_config(self):
        with self.assertRaises(FileNotFoundError):
            load_run_config(str(self.temp_dir / "missing.yaml"))

    def test_empty_config(self):
        config_path = self.temp_dir / "empty.yaml"
        config_path.write_text("")

        with self.assertRaises(ConfigValidationError):
            load_run_config(str(config_path))

    def test_invalid_yaml(self):
        config_path = self.temp_dir / "bad.yaml"
        config_path.write_text("ga: [unclosed\n")

        with self.assertRaises(ConfigValidationError):
            load_run_config(str(config_path))

    def test_non_mapping_config(self):
        config_path = self.temp_dir / "list.yaml"
        config_path.write_text("- a\n- b\n")

        with self.assertRaises(ConfigValidationError):
            load_run_config(str(config_path))


class TestConfigValidation(unittest.TestCase):
    """Test merging, overrides and validation."""

    def test_defaults_are_valid(self):
        config = merge_with_defaults({})

        validate_run_config(config)
        self.assertEqual(config['input']['matrix'], 'matrix.txt')
        self.assertEqual(config['ga']['population_size'], 80)
        self.assertIsNone(config['random_seed'])

    def test_ga_defaults_match_engine_defaults(self):
        self.assertEqual(GAConfig.from_dict(DEFAULT_CONFIG['ga']), GAConfig())

    def test_partial_section_is_completed(self):
        config = merge_with_defaults({'ga': {'max_generations': 5}})

        self.assertEqual(config['ga']['max_generations'], 5)
        self.assertEqual(config['ga']['mutation_prob'], 0.2)

    def test_overrides(self):
        config = merge_with_defaults({})
        apply_overrides(config, {
            'matrix': 'other.txt',
            'random_seed': 3,
            'max_generations': 7,
            'population_size': None,
            'replacement': 'elitist',
            'plot': 'out.png',
            'quiet': True,
        })

        self.assertEqual(config['input']['matrix'], 'other.txt')
        self.assertEqual(config['random_seed'], 3)
        self.assertEqual(config['ga']['max_generations'], 7)
        self.assertEqual(config['ga']['population_size'], 80)
        self.assertEqual(config['ga']['replacement'], 'elitist')
        self.assertEqual(config['output']['plot'], 'out.png')
        self.assertFalse(config['output']['show_populations'])

    def assert_invalid(self, raw):
        with self.assertRaises(ConfigValidationError):
            validate_run_config(merge_with_defaults(raw))

    def test_invalid_population_size(self):
        self.assert_invalid({'ga': {'population_size': 0}})
        self.assert_invalid({'ga': {'population_size': 2.5}})
        self.assert_invalid({'ga': {'population_size': True}})

    def test_invalid_generations(self):
        self.assert_invalid({'ga': {'max_generations': -3}})

    def test_invalid_probabilities(self):
        self.assert_invalid({'ga': {'mutation_prob': 1.5}})
        self.assert_invalid({'ga': {'individual_mutation_prob': 'high'}})

    def test_invalid_replacement(self):
        self.assert_invalid({'ga': {'replacement': 'roulette'}})

    def test_invalid_seed(self):
        self.assert_invalid({'random_seed': -1})
        self.assert_invalid({'random_seed': 'abc'})

    def test_invalid_sections(self):
        self.assert_invalid({'ga': [1, 2]})
        self.assert_invalid({'input': {'matrix': None}})


class TestRunFromConfig(unittest.TestCase):
    """Test the complete workflow."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.matrix_path = self.temp_dir / "matrix.txt"
        self.matrix_path.write_text(MATRIX_TEXT)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def run_quietly(self, config_path, overrides):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            result = run_from_config(config_path, overrides)
        return result, buffer.getvalue()

    def test_run_with_defaults_and_overrides(self):
        result, output = self.run_quietly(None, {
            'matrix': str(self.matrix_path),
            'random_seed': 42,
            'population_size': 12,
        })

        self.assertEqual(len(result.population), 12)
        self.assertEqual(result.metadata['seed'], 42)
        self.assertIn("Random seed: 42", output)
        self.assertIn("Initial population:", output)
        self.assertIn(f"Solutions found: {result.count}", output)
        for solution in result.solutions:
            self.assertIn(solution.cost, (1, 2))

    def test_run_from_yaml(self):
        config_path = self.temp_dir / "run.yaml"
        with open(config_path, 'w') as f:
            yaml.dump({
                'input': {'matrix': str(self.matrix_path)},
                'ga': {'population_size': 8, 'max_generations': 5, 'replacement': 'elitist'},
                'random_seed': 1,
                'output': {'show_populations': False},
            }, f)

        result, output = self.run_quietly(str(config_path), None)

        self.assertEqual(result.penalty, 5)
        self.assertNotIn("Initial population:", output)
        self.assertIn("SUMMARY", output)

    def test_same_seed_reproduces_run(self):
        overrides = {'matrix': str(self.matrix_path), 'random_seed': 9, 'population_size': 10}

        result_a, _ = self.run_quietly(None, overrides)
        result_b, _ = self.run_quietly(None, overrides)

        self.assertEqual(result_a.solutions, result_b.solutions)

    def test_run_writes_plot(self):
        plot_path = self.temp_dir / "population.png"

        self.run_quietly(None, {
            'matrix': str(self.matrix_path),
            'random_seed': 0,
            'population_size': 6,
            'plot': str(plot_path),
            'quiet': True,
        })

        self.assertTrue(plot_path.exists())

    def test_missing_matrix(self):
        with self.assertRaises(ResourceUnavailable):
            self.run_quietly(None, {'matrix': str(self.temp_dir / "nope.txt")})

    def test_malformed_matrix(self):
        bad_path = self.temp_dir / "bad.txt"
        bad_path.write_text("2 2\n1 0\n")

        with self.assertRaises(MalformedInput):
            self.run_quietly(None, {'matrix': str(bad_path)})

    def test_prepare_rejects_invalid_override(self):
        with self.assertRaises(ConfigValidationError):
            prepare_run_config(None, {'population_size': 0})


class TestMainEntryPoint(unittest.TestCase):
    """Test the command-line entry point."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.matrix_path = self.temp_dir / "matrix.txt"
        self.matrix_path.write_text(MATRIX_TEXT)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_successful_run(self):
        from main import main

        config_path = self.temp_dir / "run.yaml"
        config_path.write_text("ga:\n  replacement: keep\n")

        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            main([str(self.matrix_path), "--config", str(config_path),
                  "--seed", "4", "-p", "6", "-g", "3", "--quiet"])

        self.assertIn("Run completed successfully!", buffer.getvalue())

    def test_errors_exit_with_status_one(self):
        from main import main

        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            with self.assertRaises(SystemExit) as ctx:
                main([str(self.temp_dir / "missing.txt"), "--seed", "1"])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Error:", buffer.getvalue())


if __name__ == '__main__':
    unittest.main()
