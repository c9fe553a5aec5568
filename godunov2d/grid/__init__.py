"""
Grid module for the Godunov solver.

Provides the conserved-variable mesh on a uniform rectangular grid and the
per-direction accessors used by the dimensional sweeps.
"""

from .mesh import (
    Mesh,
    PassAccessor,
    XPassAccessor,
    YPassAccessor,
    format_array,
)

__all__ = [
    'Mesh',
    'PassAccessor',
    'XPassAccessor',
    'YPassAccessor',
    'format_array',
]
