"""
Physics module: ideal-gas equation of state and variable conversions.
"""

from .eos import (
    pressure_floor,
    conserved_to_primitive,
    primitive_to_conserved,
    sound_speed,
)

__all__ = [
    'pressure_floor',
    'conserved_to_primitive',
    'primitive_to_conserved',
    'sound_speed',
]
