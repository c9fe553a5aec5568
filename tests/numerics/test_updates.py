"""
Tests for the conservative flux-difference update.
"""

import numpy as np
from numpy.testing import assert_allclose

from godunov2d.grid import Mesh, XPassAccessor, YPassAccessor
from godunov2d.numerics import apply_flux_update


def test_interior_fluxes_telescope():
    """Total change along a pass line equals the net boundary flux."""
    rng = np.random.default_rng(1)
    nt, n = 3, 7
    planes = [rng.uniform(1.0, 2.0, size=(nt, n)) for _ in range(4)]
    before = [p.sum(axis=1) for p in planes]
    flux = rng.normal(size=(4, nt, n + 1))
    dtdx = 0.37

    apply_flux_update(planes, flux, dtdx)

    for var in range(4):
        change = planes[var].sum(axis=1) - before[var]
        assert_allclose(change, dtdx * (flux[var, :, 0] - flux[var, :, -1]), atol=1e-12)


def test_single_cell_update():
    plane = np.array([[1.0]])
    flux = np.zeros((4, 1, 2))
    flux[0, 0] = [0.5, 0.2]
    apply_flux_update([plane, plane.copy(), plane.copy(), plane.copy()], flux, 2.0)
    assert plane[0, 0] == 1.0 + 2.0 * (0.5 - 0.2)


def test_x_accessor_updates_mesh_in_place():
    mesh = Mesh(4, 2)
    mesh.data[:] = 1.0
    flux = np.zeros((4, 2, 5))
    flux[1, :, 0] = 1.0
    apply_flux_update(XPassAccessor().planes(mesh), flux, 0.5)
    assert mesh.at(1, 0, 0) == 1.5
    assert mesh.at(1, 0, 1) == 1.5
    assert mesh.at(2, 0, 0) == 1.0


def test_y_accessor_routes_normal_momentum_to_my():
    """In the y sweep the normal momentum flux lands on ρ·vy."""
    mesh = Mesh(2, 4)
    mesh.data[:] = 1.0
    flux = np.zeros((4, 2, 5))
    flux[1, :, 0] = 1.0
    apply_flux_update(YPassAccessor().planes(mesh), flux, 0.5)
    assert mesh.at(2, 0, 0) == 1.5
    assert mesh.at(2, 1, 0) == 1.5
    assert mesh.at(1, 0, 0) == 1.0
    assert mesh.at(2, 0, 1) == 1.0
