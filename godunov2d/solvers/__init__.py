"""
Solver components for the 2D Godunov scheme.

This package provides:
    - Boundary conditions on primitive strips (reflective, outflow, periodic)
    - CFL-limited global time step
    - The generic directional sweep and the time loop driving it
    - Initial conditions for standard test problems
"""

from .params import HydroParams

from .boundary_conditions import (
    BoundaryKind,
    apply_boundary_conditions,
)

from .time_stepping import (
    TimeStepConfig,
    WaveSpeeds,
    compute_wave_speeds,
    compute_timestep,
)

from .sweep import (
    Axis,
    SweepWorkspace,
    load_strip,
    run_sweep,
)

from .engine import (
    EngineState,
    RunSummary,
    HydroEngine,
)

from .initial_conditions import (
    cell_centers,
    uniform_state,
    sod_shock_tube,
    blast_wave,
    initialize_mesh,
)

__all__ = [
    'HydroParams',
    # Boundary conditions
    'BoundaryKind',
    'apply_boundary_conditions',
    # Time stepping
    'TimeStepConfig',
    'WaveSpeeds',
    'compute_wave_speeds',
    'compute_timestep',
    # Sweeps and time loop
    'Axis',
    'SweepWorkspace',
    'load_strip',
    'run_sweep',
    'EngineState',
    'RunSummary',
    'HydroEngine',
    # Initial conditions
    'cell_centers',
    'uniform_state',
    'sod_shock_tube',
    'blast_wave',
    'initialize_mesh',
]
