"""
Generic directional sweep.

One sweep advances the mesh by Δt along a single axis:

    mesh --EOS--> primitive strip --BC--> ghosts filled
         --trace--> ql, qr --Riemann--> fluxes --update--> mesh

The axis descriptor carries everything direction-specific (mesh accessor,
cell size, boundary kinds), so the x and y passes share this code path.
Scratch arrays live in a SweepWorkspace allocated once per run and reused
for every step.
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from ..constants import N_VARS, get_interior_slice, get_strip_shape
from ..grid.mesh import Mesh, PassAccessor
from ..numerics.reconstruction import trace
from ..numerics.riemann import riemann_fluxes
from ..numerics.updates import apply_flux_update
from ..physics.eos import conserved_to_primitive
from .boundary_conditions import BoundaryKind, apply_boundary_conditions
from .params import HydroParams

NDArrayFloat = npt.NDArray[np.floating]


@dataclass(frozen=True)
class Axis:
    """Direction-specific description of a sweep."""
    accessor: PassAccessor
    spacing: float          # Cell size along the pass
    low: BoundaryKind
    high: BoundaryKind

    @property
    def name(self) -> str:
        return self.accessor.name


class SweepWorkspace:
    """
    Scratch buffers for one axis.

    Shapes for np cells along the pass and nt rows:
        strip      (4, nt, np+4)
        ql, qr     (4, nt, np+2)
        flux       (4, nt, np+1)
        correction (nt, np+1)
    """

    def __init__(self, np_: int, nt: int) -> None:
        self.np = np_
        self.nt = nt
        self.strip = np.zeros(get_strip_shape(np_, nt))
        self.ql = np.zeros((N_VARS, nt, np_ + 2))
        self.qr = np.zeros((N_VARS, nt, np_ + 2))
        self.flux = np.zeros((N_VARS, nt, np_ + 1))
        self.correction = np.zeros((nt, np_ + 1))

    @classmethod
    def for_axis(cls, mesh: Mesh, axis: Axis) -> 'SweepWorkspace':
        return cls(axis.accessor.pass_length(mesh), axis.accessor.transverse_length(mesh))


def load_strip(mesh: Mesh, axis: Axis, params: HydroParams,
               strip: NDArrayFloat) -> NDArrayFloat:
    """Convert the oriented mesh planes into the interior of a primitive strip."""
    U = np.stack(axis.accessor.planes(mesh))
    strip[:, :, get_interior_slice()] = conserved_to_primitive(
        U, params.gamma, params.small_r, params.small_c)
    return strip


def run_sweep(mesh: Mesh, axis: Axis, dt: float, params: HydroParams,
              work: SweepWorkspace) -> float:
    """
    Advance the mesh in place by one directional sweep.

    Parameters
    ----------
    mesh : Mesh
        Conserved state, updated in place.
    axis : Axis
        Sweep direction descriptor.
    dt : float
        Time step.
    params : HydroParams
        Gas and solver constants.
    work : SweepWorkspace
        Scratch buffers sized for this axis.

    Returns
    -------
    float
        Largest final relative pressure correction of the Riemann iteration
        over all interfaces of the sweep.
    """
    dtdx = dt / axis.spacing

    load_strip(mesh, axis, params, work.strip)
    apply_boundary_conditions(work.strip, axis.low, axis.high)
    trace(work.strip, params.gamma, dtdx, ql=work.ql, qr=work.qr)
    riemann_fluxes(work.ql, work.qr, params.gamma, params.small_r, params.small_c,
                   params.riemann_iterations, flux=work.flux, correction=work.correction)
    apply_flux_update(axis.accessor.planes(mesh), work.flux, dtdx)

    return float(np.max(work.correction))
