"""
Tests for the mesh container and per-axis accessors.
"""

import pytest
import numpy as np

from godunov2d.grid import Mesh, XPassAccessor, YPassAccessor, format_array


class TestMesh:

    def test_zero_initialized(self):
        mesh = Mesh(3, 2)
        assert mesh.data.shape == (4, 2, 3)
        assert mesh.n_cells == 6
        assert np.all(mesh.data == 0.0)

    def test_at_and_set(self):
        mesh = Mesh(3, 2)
        mesh.set(2, 1, 0, 4.5)
        assert mesh.at(2, 1, 0) == 4.5
        assert mesh.data[2, 0, 1] == 4.5

    def test_flat_layout(self):
        """Flat position is x + nx·(y + ny·var)."""
        nx, ny = 3, 2
        flat = np.arange(4 * nx * ny, dtype=float)
        mesh = Mesh.from_flat(flat, nx, ny)
        for var in range(4):
            for y in range(ny):
                for x in range(nx):
                    assert mesh.at(var, x, y) == flat[Mesh.flat_index(var, x, y, nx, ny)]
        np.testing.assert_array_equal(mesh.flat, flat)

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            Mesh(3, 2, np.zeros((4, 3, 2)))
        with pytest.raises(ValueError):
            Mesh.from_flat(np.zeros(10), 3, 2)
        with pytest.raises(ValueError):
            Mesh(0, 2)

    def test_copy_is_independent(self):
        mesh = Mesh(2, 2)
        other = mesh.copy()
        other.set(0, 0, 0, 1.0)
        assert mesh.at(0, 0, 0) == 0.0


class TestAccessors:

    def test_x_planes_are_views(self):
        mesh = Mesh(4, 3)
        acc = XPassAccessor()
        planes = acc.planes(mesh)
        assert acc.pass_length(mesh) == 4
        assert acc.transverse_length(mesh) == 3
        planes[1][2, 3] = 7.0
        assert mesh.at(1, 3, 2) == 7.0

    def test_y_planes_swap_momentum(self):
        mesh = Mesh(4, 3)
        acc = YPassAccessor()
        rho, mn, mt, E = acc.planes(mesh)
        assert acc.pass_length(mesh) == 3
        assert acc.transverse_length(mesh) == 4
        assert rho.shape == (4, 3)
        mn[1, 2] = 5.0      # row = x index, column = y index
        mt[0, 0] = -1.0
        assert mesh.at(2, 1, 2) == 5.0
        assert mesh.at(1, 0, 0) == -1.0


def test_format_array():
    mesh = Mesh(2, 2)
    mesh.set(3, 1, 1, 2.5)
    text = format_array(mesh, "debug")
    assert text.startswith("Array debug")
    assert "Variable 3:" in text
    assert "2.5" in text
