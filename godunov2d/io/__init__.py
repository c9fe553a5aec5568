"""
I/O module for the hydro solver.

Provides snapshot writers (legacy VTK, PNG plots).
"""

from .output import SnapshotSink, write_vtk, write_series_index, VTKWriter
from .plotting import plot_snapshot, PlotWriter

__all__ = ['SnapshotSink', 'write_vtk', 'write_series_index', 'VTKWriter',
           'plot_snapshot', 'PlotWriter']
