"""Diagnostic quantities for conservation and solution-health checks."""

from typing import Any, Dict, NamedTuple

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import RHO_IDX, E_IDX
from ..physics.eos import conserved_to_primitive, pressure_floor

NDArrayFloat = npt.NDArray[np.floating]


class ConservedTotals(NamedTuple):
    """Volume-weighted totals of the conserved scalars."""
    mass: float
    energy: float


class FloorHits(NamedTuple):
    """Number of cells clamped by the density and pressure floors."""
    density: int
    pressure: int


@njit(cache=True)
def compensated_sum(values: np.ndarray) -> float:
    """
    Neumaier-compensated sum of a flat array.

    The running error term recovers the low-order bits lost when adding
    values of very different magnitude.
    """
    total = 0.0
    comp = 0.0
    for k in range(values.size):
        x = values[k]
        t = total + x
        if abs(total) >= abs(x):
            comp += (total - t) + x
        else:
            comp += (x - t) + total
        total = t
    return total + comp


def compute_totals(mesh: NDArrayFloat, dx: float, dy: float) -> ConservedTotals:
    """
    Total mass and total energy of a conserved mesh.

    Parameters
    ----------
    mesh : ndarray, shape (4, ny, nx)
        Conserved state.
    dx, dy : float
        Cell sizes.
    """
    vol = dx * dy
    mass = compensated_sum(np.ascontiguousarray(mesh[RHO_IDX]).reshape(-1))
    energy = compensated_sum(np.ascontiguousarray(mesh[E_IDX]).reshape(-1))
    return ConservedTotals(mass=vol * mass, energy=vol * energy)


def conservation_tolerance(total: float) -> float:
    """
    Half an ulp at the magnitude of `total`.

    A drift below a small multiple of this value is round-off.
    """
    _, exponent = np.frexp(total)
    return float(np.ldexp(np.finfo(np.float64).eps, int(exponent) - 1))


def relative_drift(current: float, initial: float) -> float:
    """Relative change of a conserved total; absolute change if initial is zero."""
    if initial == 0.0:
        return abs(current - initial)
    return abs(current - initial) / abs(initial)


def count_floor_hits(mesh: NDArrayFloat, gamma: float,
                     small_r: float, small_c: float) -> FloorHits:
    """Count cells whose density or pressure would be clamped by the EOS floors."""
    rho = mesh[RHO_IDX]
    n_rho = int(np.count_nonzero(rho < small_r))

    rho_f = np.maximum(rho, small_r)
    vx = mesh[1] / rho_f
    vy = mesh[2] / rho_f
    eint = mesh[E_IDX] - 0.5 * rho_f * (vx * vx + vy * vy)
    n_p = int(np.count_nonzero((gamma - 1.0) * eint < rho_f * pressure_floor(gamma, small_c)))
    return FloorHits(density=n_rho, pressure=n_p)


def compute_solution_bounds(mesh: NDArrayFloat, gamma: float,
                            small_r: float, small_c: float) -> Dict[str, Any]:
    """Check solution for physical bounds and anomalies."""
    W = conserved_to_primitive(mesh, gamma, small_r, small_c)
    rho = W[0]
    p = W[3]
    vel_mag = np.sqrt(W[1]**2 + W[2]**2)

    return {
        'has_nan': bool(np.any(np.isnan(mesh))),
        'has_inf': bool(np.any(np.isinf(mesh))),
        'rho_min': float(rho.min()),
        'rho_max': float(rho.max()),
        'p_min': float(p.min()),
        'p_max': float(p.max()),
        'vel_max': float(vel_mag.max()),
        'vel_max_loc': tuple(int(x) for x in np.unravel_index(np.argmax(vel_mag), vel_mag.shape)),
    }
