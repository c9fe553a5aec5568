"""
VTK Output Writer for hydro snapshots.

This module writes conserved-variable meshes to VTK files for visualization
in ParaView or other VTK-compatible viewers.

Supports:
- Legacy VTK ASCII format (structured points, uniform spacing)
- Scalar fields: density, pressure, total energy, Mach number
- Vector fields: velocity
- ParaView .vtk.series index for time series

File Format:
    Uses VTK Legacy ASCII format (.vtk) which is widely supported
    and easy to debug. Solution values are CELL_DATA since the
    finite-volume mesh stores cell averages.
"""

import os
from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np
from loguru import logger

from ..constants import N_VARS
from ..physics.eos import conserved_to_primitive, sound_speed
from ._array_utils import sanitize_array


class SnapshotSink(Protocol):
    """Anything the engine can hand a mesh snapshot to."""

    def write(self, label: str, mesh: np.ndarray, dx: float, dy: float,
              nvar: int, nx: int, ny: int, time: Optional[float] = None) -> Optional[str]:
        ...


def write_vtk(filename: str,
              mesh: np.ndarray,
              dx: float,
              dy: float,
              gamma: float = 1.4,
              small_r: float = 1.0e-10,
              small_c: float = 1.0e-10,
              additional_scalars: Optional[Dict[str, np.ndarray]] = None) -> str:
    """
    Write a conserved mesh to a VTK file.

    Parameters
    ----------
    filename : str
        Output filename (will add .vtk extension if not present).
    mesh : ndarray, shape (4, ny, nx)
        Conserved state [ρ, ρvx, ρvy, E].
    dx, dy : float
        Cell sizes.
    gamma : float
        Ratio of specific heats (for pressure and Mach number).
    small_r, small_c : float
        EOS floors used for the primitive conversion.
    additional_scalars : dict, optional
        Additional scalar fields of shape (ny, nx).

    Returns
    -------
    str
        Path to the written file.
    """
    if not filename.endswith('.vtk'):
        filename = filename + '.vtk'

    output_dir = os.path.dirname(filename)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    mesh = np.asarray(mesh)
    if mesh.ndim != 3 or mesh.shape[0] != N_VARS:
        raise ValueError(f"Mesh shape {mesh.shape} is not ({N_VARS}, ny, nx)")
    _, ny, nx = mesh.shape

    W = conserved_to_primitive(mesh, gamma, small_r, small_c)
    rho = sanitize_array(W[0])
    u = sanitize_array(W[1])
    v = sanitize_array(W[2])
    p = sanitize_array(W[3])
    energy = sanitize_array(mesh[3])
    with np.errstate(divide='ignore', invalid='ignore'):
        mach = sanitize_array(np.sqrt(u**2 + v**2) / sound_speed(rho, p, gamma))

    with open(filename, 'w') as f:
        # Header
        f.write("# vtk DataFile Version 3.0\n")
        f.write("Godunov 2D Euler Solution\n")
        f.write("ASCII\n")
        f.write("DATASET STRUCTURED_POINTS\n")

        # Node dimensions; cells are the data carriers
        f.write(f"DIMENSIONS {nx + 1} {ny + 1} 1\n")
        f.write("ORIGIN 0.0 0.0 0.0\n")
        f.write(f"SPACING {dx:.10e} {dy:.10e} 1.0\n")

        f.write(f"\nCELL_DATA {nx * ny}\n")
        _write_scalar_field(f, "Density", rho)
        _write_scalar_field(f, "Pressure", p)
        _write_scalar_field(f, "Energy", energy)
        _write_scalar_field(f, "MachNumber", mach)
        _write_vector_field(f, "Velocity", u, v)

        if additional_scalars:
            for name, data in additional_scalars.items():
                if data.shape != (ny, nx):
                    raise ValueError(f"Scalar '{name}' has wrong shape: {data.shape}")
                _write_scalar_field(f, name, sanitize_array(data))

    return filename


def _write_scalar_field(f, name: str, data: np.ndarray):
    """Write a scalar field to VTK file, x varying fastest."""
    f.write(f"SCALARS {name} double 1\n")
    f.write("LOOKUP_TABLE default\n")
    f.write("\n".join(f"{val:.10e}" for val in data.reshape(-1)))
    f.write("\n")


def _write_vector_field(f, name: str, vx: np.ndarray, vy: np.ndarray):
    """Write a 2D vector field to VTK file (z component zero)."""
    f.write(f"VECTORS {name} double\n")
    for a, b in zip(vx.reshape(-1), vy.reshape(-1)):
        f.write(f"{a:.10e} {b:.10e} 0.0\n")


def write_series_index(series_filename: str, entries: List[Tuple[float, str]]) -> str:
    """Write a ParaView .vtk.series file listing (time, file) entries."""
    with open(series_filename, 'w') as f:
        f.write('{\n')
        f.write('  "file-series-version" : "1.0",\n')
        f.write('  "files" : [\n')
        for idx, (time, vtk_file) in enumerate(entries):
            comma = "," if idx < len(entries) - 1 else ""
            f.write(f'    {{ "name" : "{os.path.basename(vtk_file)}", "time" : {time} }}{comma}\n')
        f.write('  ]\n')
        f.write('}\n')
    return series_filename


class VTKWriter:
    """
    Snapshot sink writing one VTK file per label.

    Example
    -------
    >>> writer = VTKWriter("output/blast", gamma=1.4)
    >>> engine = HydroEngine(config, sink=writer)
    >>> engine.run(mesh)
    >>> writer.finalize()  # Writes .vtk.series file
    """

    def __init__(self,
                 directory: str,
                 gamma: float = 1.4,
                 small_r: float = 1.0e-10,
                 small_c: float = 1.0e-10,
                 series_name: str = "solution"):
        self.directory = directory
        self.gamma = gamma
        self.small_r = small_r
        self.small_c = small_c
        self.series_name = series_name
        self.files: List[Tuple[float, str]] = []

    def write(self, label: str, mesh: np.ndarray, dx: float, dy: float,
              nvar: int, nx: int, ny: int, time: Optional[float] = None) -> str:
        """
        Write one snapshot.

        Parameters
        ----------
        label : str
            File stem, e.g. "blast_00010".
        mesh : ndarray
            Conserved state, shape (nvar, ny, nx) or flat of nvar*nx*ny values.
        dx, dy : float
            Cell sizes.
        nvar, nx, ny : int
            Variable count and grid dimensions.
        time : float, optional
            Simulation time of the snapshot, recorded in the .vtk.series
            index. Without it the snapshot index is used.

        Returns
        -------
        str
            Path to written file.
        """
        data = np.asarray(mesh).reshape(nvar, ny, nx)
        filename = write_vtk(os.path.join(self.directory, label), data, dx, dy,
                             self.gamma, self.small_r, self.small_c)
        stamp = float(len(self.files)) if time is None else float(time)
        self.files.append((stamp, filename))
        logger.debug(f"Wrote VTK snapshot {filename}")
        return filename

    def finalize(self) -> str:
        """
        Write .vtk.series file for ParaView time series loading.

        Returns
        -------
        str
            Path to the .vtk.series file, or "" if nothing was written.
        """
        if not self.files:
            return ""
        os.makedirs(self.directory, exist_ok=True)
        series_filename = os.path.join(self.directory, f"{self.series_name}.vtk.series")
        return write_series_index(series_filename, self.files)
