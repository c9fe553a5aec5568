"""
Shared pytest fixtures for the test suite.

Small grids and fixed gas constants keep every engine run to a fraction of
a second once the numba kernels are compiled (they are cached on disk).
"""

from typing import List

import pytest
import numpy as np

from godunov2d.config import (
    SimulationConfig, GridConfig, BoundaryConfig, RunConfig, OutputConfig, ProblemConfig,
)
from godunov2d.solvers import HydroParams


GAMMA = 1.4
SMALL_R = 1.0e-10
SMALL_C = 1.0e-10


class MemorySink:
    """Snapshot sink keeping copies of every mesh it receives."""

    def __init__(self):
        self.labels: List[str] = []
        self.meshes: List[np.ndarray] = []
        self.times: List[float] = []
        self.finalized = False

    def write(self, label, mesh, dx, dy, nvar, nx, ny, time=None):
        self.labels.append(label)
        self.times.append(time)
        self.meshes.append(np.array(mesh).reshape(nvar, ny, nx))

    def finalize(self):
        self.finalized = True


@pytest.fixture
def params():
    return HydroParams(gamma=GAMMA, small_r=SMALL_R, small_c=SMALL_C, riemann_iterations=10)


@pytest.fixture
def memory_sink():
    return MemorySink()


def make_config(nx=16, ny=16, boundaries="reflective", max_steps=10, t_end=-1.0,
                problem="blast", **output) -> SimulationConfig:
    """Build a small validated configuration; `boundaries` applies to all four edges."""
    output.setdefault('print_freq', 0)
    return SimulationConfig(
        grid=GridConfig(nx=nx, ny=ny, dx=1.0 / nx, dy=1.0 / ny),
        boundaries=BoundaryConfig(boundaries, boundaries, boundaries, boundaries),
        run=RunConfig(max_steps=max_steps, t_end=t_end),
        output=OutputConfig(prefix="test_", **output),
        problem=ProblemConfig(name=problem),
    ).validate()


@pytest.fixture
def config_factory():
    return make_config
