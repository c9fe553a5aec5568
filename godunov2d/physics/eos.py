"""
Ideal-gas (γ-law) equation of state and variable conversions.

Conserved: U = [ρ, ρ·vx, ρ·vy, E]     (E = total energy per unit volume)
Primitive: W = [ρ, vx, vy, p]

    e = E - ½ρ(vx² + vy²)
    p = (γ - 1)·e
    c = sqrt(γ·p/ρ)

Floors:
    ρ is clamped to small_r, p to ρ·p_floor with p_floor = small_c²/γ.
    Clamping is silent: degenerate cells (vacuum, negative internal energy)
    are carried through rather than reported.
"""

import numpy as np
import numpy.typing as npt

NDArrayFloat = npt.NDArray[np.floating]


def pressure_floor(gamma: float, small_c: float) -> float:
    """Specific pressure floor p_floor = small_c² / γ."""
    return small_c * small_c / gamma


def conserved_to_primitive(U: NDArrayFloat, gamma: float,
                           small_r: float, small_c: float) -> NDArrayFloat:
    """
    Convert conserved variables to floored primitive variables.

    Parameters
    ----------
    U : ndarray, shape (4, ...)
        Conserved state [ρ, ρ·vx, ρ·vy, E].
    gamma : float
        Ratio of specific heats.
    small_r : float
        Density floor.
    small_c : float
        Sound-speed floor; sets the pressure floor ρ·small_c²/γ.

    Returns
    -------
    W : ndarray, shape (4, ...)
        Primitive state [ρ, vx, vy, p].
    """
    rho = np.maximum(U[0], small_r)
    vx = U[1] / rho
    vy = U[2] / rho
    eint = U[3] - 0.5 * rho * (vx * vx + vy * vy)
    p = np.maximum((gamma - 1.0) * eint, rho * pressure_floor(gamma, small_c))

    W = np.empty(np.shape(U), dtype=np.float64)
    W[0] = rho
    W[1] = vx
    W[2] = vy
    W[3] = p
    return W


def primitive_to_conserved(W: NDArrayFloat, gamma: float) -> NDArrayFloat:
    """Convert primitive [ρ, vx, vy, p] to conserved [ρ, ρ·vx, ρ·vy, E]."""
    rho = W[0]
    vx = W[1]
    vy = W[2]
    p = W[3]

    U = np.empty(np.shape(W), dtype=np.float64)
    U[0] = rho
    U[1] = rho * vx
    U[2] = rho * vy
    U[3] = p / (gamma - 1.0) + 0.5 * rho * (vx * vx + vy * vy)
    return U


def sound_speed(rho: NDArrayFloat, p: NDArrayFloat, gamma: float) -> NDArrayFloat:
    """Adiabatic sound speed c = sqrt(γ·p/ρ)."""
    return np.sqrt(gamma * p / rho)
