"""
Tests for the γ-law equation of state and its floors.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from godunov2d.physics import (
    pressure_floor, conserved_to_primitive, primitive_to_conserved, sound_speed,
)

GAMMA = 1.4
SMALL_R = 1.0e-10
SMALL_C = 1.0e-10


class TestConversions:

    def test_known_state(self):
        """ρ=2, v=(1, -0.5), p=3 maps to the textbook conserved state."""
        W = np.array([2.0, 1.0, -0.5, 3.0])
        U = primitive_to_conserved(W, GAMMA)
        assert_allclose(U, [2.0, 2.0, -1.0, 3.0 / 0.4 + 0.5 * 2.0 * 1.25])

        W_back = conserved_to_primitive(U, GAMMA, SMALL_R, SMALL_C)
        assert_allclose(W_back, W, rtol=1e-14)

    def test_field_shape_preserved(self):
        W = np.ones((4, 3, 5))
        U = primitive_to_conserved(W, GAMMA)
        assert U.shape == (4, 3, 5)
        assert conserved_to_primitive(U, GAMMA, SMALL_R, SMALL_C).shape == (4, 3, 5)

    def test_sound_speed(self):
        assert sound_speed(1.0, 1.0 / GAMMA, GAMMA) == pytest.approx(1.0)


class TestFloors:

    def test_density_floor(self):
        U = np.array([-1.0, 0.0, 0.0, 1.0])
        W = conserved_to_primitive(U, GAMMA, SMALL_R, SMALL_C)
        assert W[0] == SMALL_R

    def test_negative_internal_energy_hits_pressure_floor(self):
        """Kinetic energy above total energy: pressure is clamped to ρ·c²/γ."""
        rho = 2.0
        U = np.array([rho, 2.0 * rho, 0.0, 0.1])
        W = conserved_to_primitive(U, GAMMA, SMALL_R, 1.0e-3)
        assert W[3] == pytest.approx(rho * 1.0e-6 / GAMMA)
        assert W[3] > 0.0

    def test_pressure_floor_value(self):
        assert pressure_floor(GAMMA, 2.0) == pytest.approx(4.0 / GAMMA)

    def test_floors_never_produce_nan(self):
        rng = np.random.default_rng(0)
        U = rng.normal(size=(4, 32, 32))
        W = conserved_to_primitive(U, GAMMA, SMALL_R, SMALL_C)
        assert np.all(np.isfinite(W))
        assert np.all(W[0] >= SMALL_R)
        assert np.all(W[3] > 0.0)
