"""
Slope-limited piecewise-linear reconstruction with characteristic tracing.

For every padded cell k = 1 .. np+2 of a primitive strip, limited slopes of
[ρ, u, v, p] are projected onto the three characteristic fields (u-c, u, u+c)
and each field is traced over the step with its own Courant number. Fields
moving away from a face do not contribute to the state at that face.

Characteristic amplitudes (primitive Riemann-invariant form):
    α₋ = ½ (dp/(ρc) - du) ρ/c
    α₊ = ½ (dp/(ρc) + du) ρ/c
    α₀ = dρ - dp/c²

Output arrays, shape (4, nt, np+2), index k-1 for padded cell k:
    qr : state at the LEFT face of the cell (right-going side of that face)
    ql : state at the RIGHT face of the cell (left-going side of that face)

Reference: Colella & Woodward (1984), J. Comput. Phys. 54; the two-shock
tracing follows Colella & Glaz (1985), J. Comput. Phys. 59.
"""

from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from ..constants import N_VARS, Q_RHO, Q_UN, Q_UT, Q_P

NDArrayFloat = npt.NDArray[np.floating]


def limited_slope(dl: NDArrayFloat, dr: NDArrayFloat) -> NDArrayFloat:
    """
    Monotonized central slope limited to the smaller one-sided difference.

        dcen = ½(dl + dr)
        slope = 0                                     if dl·dr <= 0
              = sign(dcen) · min(|dl|, |dr|, |dcen|)  otherwise

    The limited slope never carries q ± ½·slope outside the range of the cell
    and its two neighbours.
    """
    dcen = 0.5 * (dl + dr)
    dsgn = np.where(dcen >= 0.0, 1.0, -1.0)
    dlim = np.where(dl * dr <= 0.0, 0.0, np.minimum(np.abs(dl), np.abs(dr)))
    return dsgn * np.minimum(dlim, np.abs(dcen))


def compute_slopes(strip: NDArrayFloat) -> NDArrayFloat:
    """
    Limited slopes for padded cells 1 .. np+2.

    Parameters
    ----------
    strip : ndarray, shape (4, nt, np+4)

    Returns
    -------
    slopes : ndarray, shape (4, nt, np+2)
    """
    dl = strip[..., 1:-1] - strip[..., :-2]
    dr = strip[..., 2:] - strip[..., 1:-1]
    return limited_slope(dl, dr)


def _upwind_weights(speed: NDArrayFloat, dtdx: float,
                    toward_right_face: bool) -> NDArrayFloat:
    """Tracing weight of one characteristic, zero when it moves away from the face."""
    if toward_right_face:
        return np.where(speed <= 0.0, 0.0, speed * dtdx - 1.0)
    return np.where(speed >= 0.0, 0.0, speed * dtdx + 1.0)


def trace(strip: NDArrayFloat, gamma: float, dtdx: float,
          ql: Optional[NDArrayFloat] = None,
          qr: Optional[NDArrayFloat] = None) -> Tuple[NDArrayFloat, NDArrayFloat]:
    """
    Compute traced interface states from a boundary-filled primitive strip.

    Parameters
    ----------
    strip : ndarray, shape (4, nt, np+4)
        Primitive strip [ρ, u, v, p] with ghost cells filled.
    gamma : float
        Ratio of specific heats.
    dtdx : float
        Δt / Δx along the pass direction.
    ql, qr : ndarray, shape (4, nt, np+2), optional
        Preallocated outputs. New arrays are created if omitted.

    Returns
    -------
    ql, qr : ndarray, shape (4, nt, np+2)
        States at the right face (ql) and left face (qr) of each padded cell.
    """
    n_out = strip.shape[-1] - 2
    out_shape = (N_VARS, strip.shape[1], n_out)
    if ql is None:
        ql = np.empty(out_shape)
    if qr is None:
        qr = np.empty(out_shape)

    cell = strip[..., 1:-1]
    r = cell[Q_RHO]
    u = cell[Q_UN]
    v = cell[Q_UT]
    p = cell[Q_P]

    csq = gamma * p / r
    cc = np.sqrt(csq)

    slopes = compute_slopes(strip)
    dr = slopes[Q_RHO]
    du = slopes[Q_UN]
    dv = slopes[Q_UT]
    dp = slopes[Q_P]

    alpham = 0.5 * (dp / (r * cc) - du) * r / cc
    alphap = 0.5 * (dp / (r * cc) + du) * r / cc
    alphazr = dr - dp / csq

    for out, toward_right in ((qr, False), (ql, True)):
        spminus = _upwind_weights(u - cc, dtdx, toward_right)
        spzero = _upwind_weights(u, dtdx, toward_right)
        spplus = _upwind_weights(u + cc, dtdx, toward_right)

        ap = -0.5 * spplus * alphap
        am = -0.5 * spminus * alpham
        azr = -0.5 * spzero * alphazr
        azv = -0.5 * spzero * dv

        out[Q_RHO] = r + (ap + am + azr)
        out[Q_UN] = u + (ap - am) * cc / r
        out[Q_UT] = v + azv
        out[Q_P] = p + (ap + am) * csq

    return ql, qr
