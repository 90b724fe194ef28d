"""
CLI module for the set-cover GA.

Handles run configuration loading, validation, command-line overrides
and dispatch to the orchestration layer.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml

from .engine import REPLACEMENT_STRATEGIES, POPULATION_SIZE, MAX_GENERATIONS
from .mutation import MUTATION_PROB, INDIVIDUAL_MUTATION_PROB


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


DEFAULT_CONFIG: Dict[str, Any] = {
    'input': {'matrix': 'matrix.txt'},
    'ga': {
        'population_size': POPULATION_SIZE,
        'max_generations': MAX_GENERATIONS,
        'mutation_prob': MUTATION_PROB,
        'individual_mutation_prob': INDIVIDUAL_MUTATION_PROB,
        'replacement': 'keep',
    },
    'random_seed': None,
    'output': {'show_populations': True, 'plot': None},
}


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def merge_with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill missing sections and fields from DEFAULT_CONFIG.

    Sections present in config but not dictionaries are left as they are
    so validation can report them.
    """
    merged: Dict[str, Any] = {}
    for key, default in DEFAULT_CONFIG.items():
        value = config.get(key, None if isinstance(default, dict) else default)
        if isinstance(default, dict):
            if value is None:
                merged[key] = dict(default)
            elif isinstance(value, dict):
                merged[key] = {**default, **value}
            else:
                merged[key] = value
        else:
            merged[key] = value

    for key, value in config.items():
        if key not in merged:
            merged[key] = value

    return merged


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply command-line overrides on top of a merged configuration.

    Recognised keys: matrix, random_seed, max_generations, population_size,
    replacement, plot, quiet. None values are ignored.
    """
    if not overrides:
        return config

    if overrides.get('matrix') is not None:
        config['input']['matrix'] = overrides['matrix']
    if overrides.get('random_seed') is not None:
        config['random_seed'] = overrides['random_seed']
    for field in ('max_generations', 'population_size', 'replacement'):
        if overrides.get(field) is not None:
            config['ga'][field] = overrides[field]
    if overrides.get('plot') is not None:
        config['output']['plot'] = overrides['plot']
    if overrides.get('quiet'):
        config['output']['show_populations'] = False

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Expects a configuration already passed through merge_with_defaults.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    for section in ('input', 'ga', 'output'):
        if not isinstance(config.get(section), dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    # Validate input section
    matrix = config['input'].get('matrix')
    if not matrix or not isinstance(matrix, (str, Path)):
        raise ConfigValidationError("Missing required field: 'input.matrix'")

    _validate_ga_config(config['ga'])

    seed = config.get('random_seed')
    if seed is not None and (not _is_int(seed) or seed < 0):
        raise ConfigValidationError(
            f"'random_seed' must be a non-negative integer or null, got: {seed}"
        )

    plot = config['output'].get('plot')
    if plot is not None and not isinstance(plot, (str, Path)):
        raise ConfigValidationError(f"'output.plot' must be a path or null, got: {plot}")


def _validate_ga_config(ga_config: Dict[str, Any]) -> None:
    """
    Validate the 'ga' section.

    Raises:
        ConfigValidationError: If a parameter is out of range
    """
    population_size = ga_config['population_size']
    if not _is_int(population_size) or population_size <= 0:
        raise ConfigValidationError(
            f"'ga.population_size' must be a positive integer, got: {population_size}"
        )

    max_generations = ga_config['max_generations']
    if not _is_int(max_generations) or max_generations <= 0:
        raise ConfigValidationError(
            f"'ga.max_generations' must be a positive integer, got: {max_generations}"
        )

    for field in ('mutation_prob', 'individual_mutation_prob'):
        value = ga_config[field]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
            raise ConfigValidationError(
                f"'ga.{field}' must be a probability in [0, 1], got: {value}"
            )

    replacement = ga_config['replacement']
    if replacement not in REPLACEMENT_STRATEGIES:
        raise ConfigValidationError(
            f"Invalid replacement: '{replacement}'. "
            f"Must be one of {sorted(REPLACEMENT_STRATEGIES)}"
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def prepare_run_config(
    config_path: Optional[str],
    overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Load (when a path is given), merge, override and validate a configuration.

    Args:
        config_path: Path to YAML file, or None for built-in defaults
        overrides: Command-line overrides (see apply_overrides)

    Returns:
        Validated configuration dictionary
    """
    config = load_run_config(config_path) if config_path else {}
    config = merge_with_defaults(config)
    config = apply_overrides(config, overrides)
    validate_run_config(config)
    return config


def run_from_config(config_path: Optional[str], overrides: Optional[Dict[str, Any]] = None):
    """
    Load run configuration and execute the GA.

    This is the main entry point called by main.py.

    Args:
        config_path: Path to run configuration YAML file (None for defaults)
        overrides: Command-line overrides

    Returns:
        EvolutionResult of the run

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        ResourceUnavailable, MalformedInput: If the matrix cannot be loaded
    """
    if config_path:
        print(f"Loading configuration from: {config_path}")
    else:
        print("Using built-in default configuration")

    print("Validating configuration...")
    config = prepare_run_config(config_path, overrides)

    from .orchestration import run_set_cover
    result = run_set_cover(config)

    print("\nRun completed successfully!")
    return result
