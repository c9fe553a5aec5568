"""
Configuration module for the Godunov hydro solver.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    ConfigurationError,
    SimulationConfig,
    GridConfig,
    PhysicsConfig,
    SolverSettings,
    BoundaryConfig,
    RunConfig,
    OutputConfig,
    ProblemConfig,
    sod_preset,
    blast_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
)

__all__ = [
    # Schema classes
    'ConfigurationError',
    'SimulationConfig',
    'GridConfig',
    'PhysicsConfig',
    'SolverSettings',
    'BoundaryConfig',
    'RunConfig',
    'OutputConfig',
    'ProblemConfig',
    # Presets
    'sod_preset',
    'blast_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
]
