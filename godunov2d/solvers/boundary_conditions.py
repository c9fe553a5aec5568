"""
Ghost-cell boundary conditions for directional primitive strips.

Strip Layout:
    strip.shape = (4, nt, np + 4)
    - Low ghosts:  strip[:, :, 0], strip[:, :, 1]
    - Interior:    strip[:, :, 2 : np + 2]
    - High ghosts: strip[:, :, np + 2], strip[:, :, np + 3]
    Variables are in the sweep frame: [ρ, u_normal, u_transverse, p].

Boundary Kinds:
    1. Reflective: mirror about the face, normal velocity negated (solid wall).
           low:  ghost k      <- padded 3 - k
           high: ghost np+2+k <- padded np+1-k
    2. Outflow: zero gradient, both ghosts copy the adjacent interior cell.
    3. Periodic: ghosts copy the interior cells from the opposite end.
       Must be set on both ends of the same axis.
"""

from enum import Enum

import numpy as np
import numpy.typing as npt

from ..constants import NGHOST, Q_UN

NDArrayFloat = npt.NDArray[np.floating]


class BoundaryKind(Enum):
    """Boundary condition kind for one edge of the domain."""

    REFLECTIVE = "reflective"
    OUTFLOW = "outflow"
    PERIODIC = "periodic"

    @classmethod
    def from_name(cls, name) -> 'BoundaryKind':
        """Parse a kind from its name (case-insensitive) or pass an instance through."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        aliases = {
            'reflective': cls.REFLECTIVE,
            'reflect': cls.REFLECTIVE,
            'wall': cls.REFLECTIVE,
            'outflow': cls.OUTFLOW,
            'zero_gradient': cls.OUTFLOW,
            'transmissive': cls.OUTFLOW,
            'periodic': cls.PERIODIC,
        }
        if key not in aliases:
            raise ValueError(f"Unknown boundary kind '{name}'. "
                             f"Use one of: {sorted(k.value for k in cls)}")
        return aliases[key]


def _fill_low(strip: NDArrayFloat, kind: BoundaryKind, np_: int) -> None:
    for k in range(NGHOST):
        if kind is BoundaryKind.REFLECTIVE:
            src = min(3 - k, np_ + 1)
            strip[:, :, k] = strip[:, :, src]
            strip[Q_UN, :, k] = -strip[Q_UN, :, src]
        elif kind is BoundaryKind.OUTFLOW:
            strip[:, :, k] = strip[:, :, NGHOST]
        else:
            strip[:, :, k] = strip[:, :, NGHOST + (np_ - NGHOST + k) % np_]


def _fill_high(strip: NDArrayFloat, kind: BoundaryKind, np_: int) -> None:
    for k in range(NGHOST):
        dst = np_ + NGHOST + k
        if kind is BoundaryKind.REFLECTIVE:
            src = max(np_ + 1 - k, NGHOST)
            strip[:, :, dst] = strip[:, :, src]
            strip[Q_UN, :, dst] = -strip[Q_UN, :, src]
        elif kind is BoundaryKind.OUTFLOW:
            strip[:, :, dst] = strip[:, :, np_ + 1]
        else:
            strip[:, :, dst] = strip[:, :, NGHOST + k % np_]


def apply_boundary_conditions(strip: NDArrayFloat,
                              low: BoundaryKind,
                              high: BoundaryKind) -> NDArrayFloat:
    """
    Fill the two ghost cells at each end of every row of a primitive strip.

    Parameters
    ----------
    strip : ndarray, shape (4, nt, np + 4)
        Primitive strip with interior cells already populated. Modified in place.
    low, high : BoundaryKind
        Boundary kinds at the low and high end of the pass direction.

    Returns
    -------
    strip : ndarray
        The same array, for chaining.

    Notes
    -----
    For a single-cell strip (np = 1) the reflective mirror falls back to the
    only interior cell.
    """
    low = BoundaryKind.from_name(low)
    high = BoundaryKind.from_name(high)
    if (low is BoundaryKind.PERIODIC) != (high is BoundaryKind.PERIODIC):
        raise ValueError("Periodic boundaries must be set on both ends of an axis")

    np_ = strip.shape[-1] - 2 * NGHOST
    _fill_low(strip, low, np_)
    _fill_high(strip, high, np_)
    return strip
