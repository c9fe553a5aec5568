"""
Numerical methods for the 2D Godunov solver.

This module provides:
- Slope-limited reconstruction with characteristic tracing
- Iterative two-shock Riemann solver and Godunov fluxes
- Conservative flux-difference update
- Conservation and floor diagnostics
"""

from .reconstruction import (
    limited_slope,
    compute_slopes,
    trace,
)

from .riemann import (
    solve_interface,
    godunov_flux,
    riemann_fluxes,
)

from .updates import apply_flux_update

from .diagnostics import (
    ConservedTotals,
    FloorHits,
    compensated_sum,
    compute_totals,
    conservation_tolerance,
    relative_drift,
    count_floor_hits,
    compute_solution_bounds,
)

__all__ = [
    # Reconstruction
    'limited_slope',
    'compute_slopes',
    'trace',
    # Riemann solver
    'solve_interface',
    'godunov_flux',
    'riemann_fluxes',
    # Update
    'apply_flux_update',
    # Diagnostics
    'ConservedTotals',
    'FloorHits',
    'compensated_sum',
    'compute_totals',
    'conservation_tolerance',
    'relative_drift',
    'count_floor_hits',
    'compute_solution_bounds',
]
