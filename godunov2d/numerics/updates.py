"""
Conservative finite-volume update.

    U_i += (Δt/Δx) · (F_i - F_{i+1})

Each interface flux is subtracted from one cell and added to its neighbour,
so the sum of U over the pass line changes only by the two boundary fluxes.
"""

from typing import Sequence

import numpy as np
import numpy.typing as npt

NDArrayFloat = npt.NDArray[np.floating]


def apply_flux_update(planes: Sequence[NDArrayFloat], flux: NDArrayFloat,
                      dtdx: float) -> None:
    """
    Difference interface fluxes into conserved planes, in place.

    Parameters
    ----------
    planes : sequence of 4 ndarrays, each shape (nt, np)
        Conserved variables oriented for the sweep (ρ, normal momentum,
        transverse momentum, E). Views into the mesh: the mesh is updated.
    flux : ndarray, shape (4, nt, np+1)
        Interface fluxes in the same variable order.
    dtdx : float
        Δt / Δx along the pass direction.
    """
    for var, plane in enumerate(planes):
        plane += dtdx * (flux[var, :, :-1] - flux[var, :, 1:])
