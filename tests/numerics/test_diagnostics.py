"""
Tests for conservation and floor diagnostics.
"""

import math

import pytest
import numpy as np

from godunov2d.numerics import (
    compensated_sum, compute_totals, conservation_tolerance, relative_drift,
    count_floor_hits, compute_solution_bounds,
)
from godunov2d.physics import primitive_to_conserved


class TestCompensatedSum:

    def test_recovers_small_terms(self):
        values = np.array([1.0e16, 1.0, -1.0e16])
        assert compensated_sum(values) == 1.0

    def test_matches_fsum_on_random_data(self):
        rng = np.random.default_rng(5)
        values = rng.normal(scale=1e6, size=1000)
        assert compensated_sum(values) == pytest.approx(math.fsum(values), rel=1e-15)

    def test_empty(self):
        assert compensated_sum(np.zeros(0)) == 0.0


class TestTotals:

    def test_volume_weighted(self):
        W = np.zeros((4, 3, 5))
        W[0] = 2.0
        W[3] = 0.4
        U = primitive_to_conserved(W, 1.4)
        totals = compute_totals(U, 0.1, 0.2)
        assert totals.mass == pytest.approx(15 * 2.0 * 0.02)
        assert totals.energy == pytest.approx(15 * 1.0 * 0.02)

    def test_tolerance_is_ulp_scaled(self):
        eps = np.finfo(np.float64).eps
        assert conservation_tolerance(1.0) == eps
        assert conservation_tolerance(1024.0) == 1024.0 * eps

    def test_relative_drift(self):
        assert relative_drift(1.001, 1.0) == pytest.approx(1e-3)
        assert relative_drift(0.5, 0.0) == 0.5


class TestFloorHits:

    def test_counts_clamped_cells(self):
        U = np.zeros((4, 2, 2))
        U[0] = 1.0
        U[3] = 1.0
        U[0, 0, 0] = -1.0        # density below floor
        U[1, 1, 1] = 3.0         # kinetic energy above total energy
        hits = count_floor_hits(U, 1.4, 1e-10, 1e-10)
        assert hits.density == 1
        assert hits.pressure == 1

    def test_clean_state(self):
        W = np.ones((4, 4, 4))
        hits = count_floor_hits(primitive_to_conserved(W, 1.4), 1.4, 1e-10, 1e-10)
        assert hits == (0, 0)

    def test_solution_bounds(self):
        W = np.ones((4, 3, 3))
        W[3, 1, 2] = 5.0
        bounds = compute_solution_bounds(primitive_to_conserved(W, 1.4), 1.4, 1e-10, 1e-10)
        assert not bounds['has_nan']
        assert bounds['p_max'] == pytest.approx(5.0)
        assert bounds['rho_min'] == pytest.approx(1.0)
