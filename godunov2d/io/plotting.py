"""
Visualization utilities for hydro snapshots.

Renders density, pressure and velocity magnitude of a conserved mesh to a
PNG file. Also usable as a snapshot sink through PlotWriter.
"""

import os
from typing import Optional

import numpy as np

from ..physics.eos import conserved_to_primitive
from ._array_utils import safe_minmax, sanitize_array

# Lazy import matplotlib to avoid issues when not installed
_plt = None
_matplotlib = None


def _ensure_matplotlib():
    """Ensure matplotlib is available and configured."""
    global _plt, _matplotlib
    if _plt is None:
        import matplotlib
        matplotlib.use('Agg')  # Non-interactive backend
        import matplotlib.pyplot as plt
        _matplotlib = matplotlib
        _plt = plt
    return _plt


def plot_snapshot(filename: str, mesh: np.ndarray, dx: float, dy: float,
                  gamma: float = 1.4, small_r: float = 1.0e-10,
                  small_c: float = 1.0e-10, title: Optional[str] = None) -> str:
    """
    Plot density, pressure and speed of a conserved mesh.

    Parameters
    ----------
    filename : str
        Output filename (.png appended if missing).
    mesh : ndarray, shape (4, ny, nx)
        Conserved state.
    dx, dy : float
        Cell sizes, used for the axis extents.
    gamma, small_r, small_c : float
        EOS constants for the primitive conversion.
    title : str, optional
        Figure title.

    Returns
    -------
    str
        Path to the saved figure.
    """
    plt = _ensure_matplotlib()

    if not filename.endswith('.png'):
        filename = filename + '.png'
    output_dir = os.path.dirname(filename)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    mesh = np.asarray(mesh)
    _, ny, nx = mesh.shape
    W = conserved_to_primitive(mesh, gamma, small_r, small_c)
    fields = [
        ("Density", sanitize_array(W[0])),
        ("Pressure", sanitize_array(W[3])),
        ("Speed", sanitize_array(np.sqrt(W[1]**2 + W[2]**2))),
    ]
    extent = (0.0, nx * dx, 0.0, ny * dy)

    fig, axes = plt.subplots(1, len(fields), figsize=(5 * len(fields), 4.5))
    for ax, (name, data) in zip(axes, fields):
        vmin, vmax = safe_minmax(data)
        im = ax.imshow(data, origin='lower', extent=extent, cmap='viridis',
                       vmin=vmin, vmax=vmax, aspect='equal')
        ax.set_title(name)
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        fig.colorbar(im, ax=ax, shrink=0.8)

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    fig.savefig(filename, dpi=100)
    plt.close(fig)
    return filename


class PlotWriter:
    """Snapshot sink rendering one PNG per label."""

    def __init__(self, directory: str, gamma: float = 1.4,
                 small_r: float = 1.0e-10, small_c: float = 1.0e-10):
        self.directory = directory
        self.gamma = gamma
        self.small_r = small_r
        self.small_c = small_c

    def write(self, label: str, mesh: np.ndarray, dx: float, dy: float,
              nvar: int, nx: int, ny: int, time: Optional[float] = None) -> str:
        data = np.asarray(mesh).reshape(nvar, ny, nx)
        title = label if time is None else f"{label}  t={time:.4e}"
        return plot_snapshot(os.path.join(self.directory, label), data, dx, dy,
                             self.gamma, self.small_r, self.small_c, title=title)
