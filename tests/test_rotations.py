# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for time-dependent rotations (matrix plus derivative)."""

import math

import numpy as np
import pytest


def _spinning(angle, rate):
    """Frame rotated by ``angle`` about z and spinning at ``rate`` rad/s."""
    from almagest.domain.rotations import Rotation
    from almagest.domain.units import rotation_z
    return Rotation.from_matrix(rotation_z(angle)).with_angular_velocity((0.0, 0.0, rate))


class TestSkewMatrix:

    def test_cross_product(self):
        from almagest.domain.rotations import skew_matrix
        w = np.array([0.3, -1.2, 2.0])
        r = np.array([4.0, 0.5, -1.5])
        np.testing.assert_allclose(skew_matrix(w) @ r, np.cross(w, r), atol=1e-15)

    def test_antisymmetric(self):
        from almagest.domain.rotations import skew_matrix
        s = skew_matrix((1.0, 2.0, 3.0))
        np.testing.assert_array_equal(s, -s.T)


class TestRotation:
    """Composition, inversion and state transformation."""

    def test_identity(self):
        from almagest.domain.rotations import Rotation
        rot = Rotation.identity()
        r, v = rot.rotate_state([1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        np.testing.assert_array_equal(r, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(v, [4.0, 5.0, 6.0])

    def test_angular_velocity_matches_analytic_derivative(self):
        angle, rate = 0.7, 7.3e-5
        rot = _spinning(angle, rate)
        s, c = math.sin(angle), math.cos(angle)
        expected = rate * np.array([[-s, c, 0.0], [-c, -s, 0.0], [0.0, 0.0, 0.0]])
        np.testing.assert_allclose(rot.dm, expected, atol=1e-18)

    def test_inertial_point_seen_from_spinning_frame(self):
        rate = 1e-3
        rot = _spinning(0.0, rate)
        r, v = rot.rotate_state([1.0, 0.0, 0.0], [0.0, 0.0, 0.0])
        np.testing.assert_allclose(r, [1.0, 0.0, 0.0], atol=1e-15)
        np.testing.assert_allclose(v, [0.0, -rate, 0.0], atol=1e-18)

    def test_transpose_inverts(self):
        rot = _spinning(1.1, 2e-4)
        r0 = np.array([7000.0, -300.0, 1200.0])
        v0 = np.array([1.0, 7.5, -0.2])
        r1, v1 = rot.rotate_state(r0, v0)
        r2, v2 = rot.transpose().rotate_state(r1, v1)
        np.testing.assert_allclose(r2, r0, atol=1e-9)
        np.testing.assert_allclose(v2, v0, atol=1e-12)

    def test_compose_with_transpose_is_identity(self):
        from almagest.domain.rotations import Rotation
        rot = _spinning(-2.3, 5e-5)
        assert rot.compose(rot.transpose()).isclose(Rotation.identity(), atol=1e-14)

    def test_compose_applies_self_first(self):
        from almagest.domain.rotations import Rotation
        from almagest.domain.units import rotation_x, rotation_z
        first = Rotation.from_matrix(rotation_z(0.4))
        second = Rotation.from_matrix(rotation_x(0.9))
        composed = first.compose(second)
        np.testing.assert_allclose(composed.m, rotation_x(0.9) @ rotation_z(0.4), atol=1e-15)

    def test_compose_adds_rates(self):
        a = _spinning(0.2, 1e-4)
        b = _spinning(0.5, 3e-4)
        expected = _spinning(0.7, 4e-4)
        assert a.compose(b).isclose(expected, atol=1e-15)

    def test_compose_product_rule(self):
        a = _spinning(0.2, 1e-4)
        b = _spinning(0.5, 3e-4)
        composed = a.compose(b)
        np.testing.assert_allclose(composed.dm, b.dm @ a.m + b.m @ a.dm, atol=1e-18)

    def test_with_derivative(self):
        from almagest.domain.rotations import Rotation
        dm = np.full((3, 3), 0.5)
        rot = Rotation.identity().with_derivative(dm)
        np.testing.assert_array_equal(rot.dm, dm)
        np.testing.assert_array_equal(rot.m, np.eye(3))

    def test_isclose_tolerance(self):
        from almagest.domain.rotations import Rotation
        nudged = Rotation.from_matrix(np.eye(3) + 1e-10)
        assert not nudged.isclose(Rotation.identity())
        assert nudged.isclose(Rotation.identity(), atol=1e-9)

    @pytest.mark.parametrize("angle", [0.0, 1.0, -3.0])
    def test_matrix_stays_orthonormal(self, angle):
        rot = _spinning(angle, 1e-4).compose(_spinning(2.0 * angle, -2e-4))
        np.testing.assert_allclose(rot.m @ rot.m.T, np.eye(3), atol=1e-15)
