"""
YAML configuration loader with validation.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dataclasses import fields, is_dataclass

from .schema import (
    SimulationConfig, GridConfig, PhysicsConfig, SolverSettings,
    BoundaryConfig, RunConfig, OutputConfig, ProblemConfig,
    sod_preset, blast_preset,
)


SECTIONS = {
    'grid': GridConfig,
    'physics': PhysicsConfig,
    'solver': SolverSettings,
    'boundaries': BoundaryConfig,
    'run': RunConfig,
    'output': OutputConfig,
    'problem': ProblemConfig,
}

PRESETS = {
    'sod': sod_preset,
    'blast': blast_preset,
}


def _merge_dict(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Handle string representations of numbers (e.g., "1.0e-10")
    if field_type in (float, 'float') and isinstance(value, (str, int)) and not isinstance(value, bool):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type in (int, 'int') and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    if field_type in (bool, 'bool') and isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a nested dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            continue  # Skip unknown fields
        field_type = field_types[key]
        if is_dataclass(field_type) and isinstance(value, dict):
            kwargs[key] = _dict_to_dataclass(field_type, value)
        else:
            kwargs[key] = _coerce_type(value, field_type)

    return cls(**kwargs)


def load_yaml(path: Union[str, Path]) -> SimulationConfig:
    """
    Load simulation configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        SimulationConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return from_dict(data)


def from_dict(data: Dict[str, Any]) -> SimulationConfig:
    """
    Create SimulationConfig from a dictionary.

    Handles nested structures and applies defaults for missing values.
    A top-level `preset` key selects a base configuration that the other
    sections override.
    """
    data = dict(data)
    preset = data.pop('preset', None)
    if preset:
        if preset not in PRESETS:
            raise ValueError(f"Unknown preset '{preset}'. Use one of: {sorted(PRESETS)}")
        data = _merge_dict(PRESETS[preset]().to_dict(), data)

    config_dict = {}
    for name, cls in SECTIONS.items():
        if name in data and data[name] is not None:
            config_dict[name] = _dict_to_dataclass(cls, data[name])

    return SimulationConfig(**config_dict)


def apply_cli_overrides(config: SimulationConfig, args) -> SimulationConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not None).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated SimulationConfig
    """
    config_dict = config.to_dict()

    cli_mapping = {
        # Grid
        'nx': ('grid', 'nx'),
        'ny': ('grid', 'ny'),
        'dx': ('grid', 'dx'),
        'dy': ('grid', 'dy'),

        # Physics
        'gamma': ('physics', 'gamma'),

        # Solver
        'sigma': ('solver', 'sigma'),
        'riemann_iterations': ('solver', 'riemann_iterations'),

        # Run control
        'max_steps': ('run', 'max_steps'),
        't_end': ('run', 't_end'),

        # Output
        'output_dir': ('output', 'directory'),
        'prefix': ('output', 'prefix'),
        'dt_output': ('output', 'dt_output'),
        'n_output': ('output', 'n_output'),
        'print_freq': ('output', 'print_freq'),

        # Problem
        'problem': ('problem', 'name'),
    }

    for cli_name, config_path in cli_mapping.items():
        if hasattr(args, cli_name):
            value = getattr(args, cli_name)
            if value is not None:
                target = config_dict
                for key in config_path[:-1]:
                    target = target[key]
                target[config_path[-1]] = value

    return from_dict(config_dict)


def save_yaml(config: SimulationConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
