# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for anomaly conversions across circular, elliptic, parabolic and hyperbolic orbits."""

import math

import pytest


class TestOrbitType:

    @pytest.mark.parametrize("e,expected", [
        (0.0, "circular"),
        (5e-9, "circular"),
        (0.3, "elliptic"),
        (1.0, "parabolic"),
        (1.0 + 5e-9, "parabolic"),
        (1.5, "hyperbolic"),
    ])
    def test_classification(self, e, expected):
        from almagest.domain.anomalies import orbit_type
        assert str(orbit_type(e)) == expected


class TestElliptic:
    """Kepler's equation and the half-angle relations."""

    def test_known_values(self):
        from almagest.domain.anomalies import eccentric_to_mean, true_to_eccentric
        # Vallado example 2-1: M = 235.4 deg, e = 0.4 gives E = 220.512074767522 deg
        e = 0.4
        ea = math.radians(220.512074767522) - 2.0 * math.pi
        assert eccentric_to_mean(ea, e) == pytest.approx(math.radians(235.4) - 2.0 * math.pi, abs=1e-10)
        assert true_to_eccentric(0.0, e) == 0.0

    def test_mean_to_eccentric(self):
        from almagest.domain.anomalies import mean_to_eccentric
        ea = mean_to_eccentric(math.radians(235.4), 0.4)
        assert math.degrees(ea) % 360.0 == pytest.approx(220.512074767522, abs=1e-8)

    @pytest.mark.parametrize("e", [0.01, 0.3, 0.7, 0.95, 0.999])
    @pytest.mark.parametrize("mean", [-3.0, -1.0, 0.0, 0.5, 2.0, 3.1])
    def test_kepler_solution_satisfies_equation(self, mean, e):
        from almagest.domain.anomalies import mean_to_eccentric
        ea = mean_to_eccentric(mean, e)
        assert ea - e * math.sin(ea) == pytest.approx(mean, abs=1e-9)
        assert -math.pi <= ea < math.pi

    @pytest.mark.parametrize("nu", [-2.5, -0.3, 0.0, 1.2, 3.0])
    def test_true_mean_round_trip(self, nu):
        from almagest.domain.anomalies import mean_to_true, true_to_mean
        assert mean_to_true(true_to_mean(nu, 0.6), 0.6) == pytest.approx(nu, abs=1e-9)

    def test_results_are_normalized(self):
        from almagest.domain.anomalies import eccentric_to_mean, true_to_eccentric
        assert -math.pi <= eccentric_to_mean(7.0, 0.1) < math.pi
        assert -math.pi <= true_to_eccentric(4.0, 0.1) < math.pi

    def test_convergence_failure(self):
        from almagest.domain.anomalies import AnomalyError, ConvergenceFailure, mean_to_eccentric
        with pytest.raises(ConvergenceFailure, match="failed to converge after 1 iterations") as exc_info:
            mean_to_eccentric(2.0, 0.99, tolerance=1e-300, max_iterations=1)
        assert isinstance(exc_info.value, AnomalyError)
        assert exc_info.value.iterations == 1


class TestParabolic:
    """Barker's equation."""

    def test_barker(self):
        from almagest.domain.anomalies import parabolic_to_mean, true_to_parabolic
        d = true_to_parabolic(math.pi / 2.0)
        assert d == pytest.approx(1.0)
        assert parabolic_to_mean(d) == pytest.approx(4.0 / 3.0)

    @pytest.mark.parametrize("mean", [-10.0, -0.5, 0.0, 0.25, 4.0 / 3.0, 50.0])
    def test_inverse(self, mean):
        from almagest.domain.anomalies import mean_to_parabolic, parabolic_to_mean
        assert parabolic_to_mean(mean_to_parabolic(mean)) == pytest.approx(mean, abs=1e-10)

    def test_true_round_trip(self):
        from almagest.domain.anomalies import mean_parabolic_to_true, true_to_mean_parabolic
        assert mean_parabolic_to_true(true_to_mean_parabolic(2.0)) == pytest.approx(2.0, abs=1e-12)


class TestHyperbolic:
    """Hyperbolic anomaly and the asymptote limit."""

    def test_asymptote(self):
        from almagest.domain.anomalies import hyperbolic_asymptote_angle
        assert hyperbolic_asymptote_angle(2.0) == pytest.approx(2.0 * math.pi / 3.0)

    def test_beyond_asymptote(self):
        from almagest.domain.anomalies import InvalidTrueAnomaly, true_to_hyperbolic
        with pytest.raises(InvalidTrueAnomaly, match="outside valid range") as exc_info:
            true_to_hyperbolic(2.2, 2.0)
        assert exc_info.value.max_nu == pytest.approx(2.0 * math.pi / 3.0)

    @pytest.mark.parametrize("mean", [-20.0, -1.0, 0.0, 0.3, 5.0, 100.0])
    def test_kepler_solution_satisfies_equation(self, mean):
        from almagest.domain.anomalies import mean_to_hyperbolic
        f = mean_to_hyperbolic(mean, 1.8)
        assert 1.8 * math.sinh(f) - f == pytest.approx(mean, abs=1e-9)

    @pytest.mark.parametrize("nu", [-1.5, 0.0, 0.4, 1.9])
    def test_true_round_trip(self, nu):
        from almagest.domain.anomalies import mean_hyperbolic_to_true, true_to_mean_hyperbolic
        assert mean_hyperbolic_to_true(true_to_mean_hyperbolic(nu, 2.0), 2.0) == pytest.approx(nu, abs=1e-10)


class TestDispatch:
    """Conversions that pick the formula from the eccentricity."""

    def test_circular_mean_equals_true(self):
        from almagest.domain.anomalies import mean_to_true_any, true_to_mean_any
        assert true_to_mean_any(1.234, 0.0) == 1.234
        assert mean_to_true_any(1.234, 0.0) == 1.234

    @pytest.mark.parametrize("e", [0.2, 1.0, 3.0])
    def test_round_trips(self, e):
        from almagest.domain.anomalies import (
            eccentric_to_true_any,
            mean_to_true_any,
            true_to_eccentric_any,
            true_to_mean_any,
        )
        nu = 0.9
        assert eccentric_to_true_any(true_to_eccentric_any(nu, e), e) == pytest.approx(nu, abs=1e-12)
        assert mean_to_true_any(true_to_mean_any(nu, e), e) == pytest.approx(nu, abs=1e-9)

    def test_parabolic_uses_barker(self):
        from almagest.domain.anomalies import true_to_mean_any
        assert true_to_mean_any(math.pi / 2.0, 1.0) == pytest.approx(4.0 / 3.0)
