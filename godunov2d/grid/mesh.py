"""
Conserved-variable mesh for a uniform 2D structured grid.

Storage Layout:
    One contiguous plane per conserved variable, row-major inside a plane:

        data.shape = (N_VARS, ny, nx)
        flat index of (var, x, y) = x + nx * (y + ny * var)

    Variables: [ρ, ρ·vx, ρ·vy, E]

Directional sweeps see the mesh through a pass accessor. The x-pass reads
planes as (ny, nx) rows; the y-pass reads transposed planes (nx, ny) with the
two momentum components swapped, so that the same 1D routines handle both
directions. All accessor results are numpy views: writing into them updates
the mesh in place.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from ..constants import N_VARS, RHO_IDX, MX_IDX, MY_IDX, E_IDX

NDArrayFloat = npt.NDArray[np.floating]


class Mesh:
    """Owned contiguous buffer of conserved variables."""

    def __init__(self, nx: int, ny: int, data: Optional[NDArrayFloat] = None) -> None:
        if nx <= 0 or ny <= 0:
            raise ValueError(f"Grid dimensions must be positive, got ({nx}, {ny})")
        self.nx = nx
        self.ny = ny
        if data is None:
            self.data = np.zeros((N_VARS, ny, nx), dtype=np.float64)
        else:
            data = np.asarray(data, dtype=np.float64)
            if data.shape != (N_VARS, ny, nx):
                raise ValueError(f"Mesh data shape {data.shape} incompatible with grid "
                                 f"({nx}, {ny}), expected {(N_VARS, ny, nx)}")
            self.data = np.ascontiguousarray(data)

    @classmethod
    def from_flat(cls, flat: NDArrayFloat, nx: int, ny: int) -> 'Mesh':
        """Build a mesh from a flat buffer laid out as x + nx*(y + ny*var)."""
        flat = np.asarray(flat, dtype=np.float64)
        if flat.size != N_VARS * nx * ny:
            raise ValueError(f"Flat buffer of size {flat.size} does not hold "
                             f"{N_VARS} x {nx} x {ny} values")
        return cls(nx, ny, flat.reshape(N_VARS, ny, nx))

    @staticmethod
    def flat_index(var: int, x: int, y: int, nx: int, ny: int) -> int:
        """Position of (var, x, y) in the flat buffer."""
        return x + nx * (y + ny * var)

    def at(self, var: int, x: int, y: int) -> float:
        return float(self.data[var, y, x])

    def set(self, var: int, x: int, y: int, value: float) -> None:
        self.data[var, y, x] = value

    def plane(self, var: int) -> NDArrayFloat:
        """View of one variable, shape (ny, nx)."""
        return self.data[var]

    @property
    def flat(self) -> NDArrayFloat:
        """Flat view of the whole buffer."""
        return self.data.reshape(-1)

    @property
    def n_cells(self) -> int:
        return self.nx * self.ny

    def copy(self) -> 'Mesh':
        return Mesh(self.nx, self.ny, self.data.copy())

    def __repr__(self) -> str:
        return f"Mesh(nx={self.nx}, ny={self.ny})"


class PassAccessor(ABC):
    """Orientation of the mesh seen by a directional sweep."""

    name: str = ""

    @abstractmethod
    def planes(self, mesh: Mesh) -> Tuple[NDArrayFloat, NDArrayFloat,
                                          NDArrayFloat, NDArrayFloat]:
        """
        Return (ρ, normal momentum, transverse momentum, E) as views of shape
        (nt, np): rows are transverse lines, columns run along the pass.
        """

    @abstractmethod
    def pass_length(self, mesh: Mesh) -> int:
        """Number of cells along the pass direction."""

    @abstractmethod
    def transverse_length(self, mesh: Mesh) -> int:
        """Number of rows swept."""


class XPassAccessor(PassAccessor):
    """x-sweep: planes as stored, rows are constant-y lines."""

    name = "x"

    def planes(self, mesh: Mesh):
        d = mesh.data
        return d[RHO_IDX], d[MX_IDX], d[MY_IDX], d[E_IDX]

    def pass_length(self, mesh: Mesh) -> int:
        return mesh.nx

    def transverse_length(self, mesh: Mesh) -> int:
        return mesh.ny


class YPassAccessor(PassAccessor):
    """y-sweep: transposed planes, rows are constant-x lines, vy is normal."""

    name = "y"

    def planes(self, mesh: Mesh):
        d = mesh.data
        return d[RHO_IDX].T, d[MY_IDX].T, d[MX_IDX].T, d[E_IDX].T

    def pass_length(self, mesh: Mesh) -> int:
        return mesh.ny

    def transverse_length(self, mesh: Mesh) -> int:
        return mesh.nx


def format_array(mesh: Mesh, label: str = "") -> str:
    """
    Render every variable plane as a table, for debugging small grids.

    Rows are y indices, columns x indices.
    """
    lines = [f"Array {label}"]
    for var in range(N_VARS):
        lines.append(f"Variable {var}:")
        header = " " * 3 + "".join(f"|i{i:8d}i" for i in range(mesh.nx)) + "|"
        lines.append(header)
        for j in range(mesh.ny):
            row = "".join(f"|{mesh.data[var, j, i]:10g}" for i in range(mesh.nx))
            lines.append(f"{j:3d}{row}|")
    return "\n".join(lines)
