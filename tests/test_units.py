# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for angles, rotation matrices, distances, velocities and frequency bands."""

import math

import numpy as np
import pytest


class TestRotationMatrices:
    """Passive rotations about the coordinate axes."""

    def test_rotation_z_passive(self):
        from almagest.domain.units import rotation_z
        # rotating the frame by +90 deg moves the x axis onto -y
        v = rotation_z(math.pi / 2.0) @ np.array([1.0, 0.0, 0.0])
        np.testing.assert_allclose(v, [0.0, -1.0, 0.0], atol=1e-15)

    def test_rotation_x_passive(self):
        from almagest.domain.units import rotation_x
        v = rotation_x(math.pi / 2.0) @ np.array([0.0, 1.0, 0.0])
        np.testing.assert_allclose(v, [0.0, 0.0, -1.0], atol=1e-15)

    def test_rotation_y_passive(self):
        from almagest.domain.units import rotation_y
        v = rotation_y(math.pi / 2.0) @ np.array([0.0, 0.0, 1.0])
        np.testing.assert_allclose(v, [-1.0, 0.0, 0.0], atol=1e-15)

    @pytest.mark.parametrize("name", ["rotation_x", "rotation_y", "rotation_z"])
    def test_orthonormal_and_inverse(self, name):
        from almagest.domain import units
        rot = getattr(units, name)
        m = rot(0.7)
        np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-15)
        assert np.linalg.det(m) == pytest.approx(1.0)
        np.testing.assert_allclose(rot(-0.7), m.T, atol=1e-15)


class TestAngle:
    """Angle construction, trigonometry and normalization."""

    def test_conversions(self):
        from almagest.domain.units import Angle
        assert Angle.from_degrees(180.0).radians == pytest.approx(math.pi)
        assert Angle(math.pi / 2.0).degrees == pytest.approx(90.0)
        assert Angle.from_arcseconds(3600.0).degrees == pytest.approx(1.0)
        assert Angle.from_degrees(1.0).arcseconds == pytest.approx(3600.0)
        assert Angle.from_hms(6, 0, 0.0).degrees == pytest.approx(90.0)

    @pytest.mark.parametrize("radians", [-7.0, -1.0, 0.0, 0.3, 2.5, 100.0])
    def test_pythagorean_identity(self, radians):
        from almagest.domain.units import Angle
        a = Angle(radians)
        s, c = a.sin_cos()
        assert s * s + c * c == pytest.approx(1.0, abs=1e-15)
        assert a.tan() == pytest.approx(s / c)

    def test_inverse_trig(self):
        from almagest.domain.units import Angle
        assert Angle.from_atan2(1.0, -1.0).radians == pytest.approx(3.0 * math.pi / 4.0)
        assert Angle.from_asin(1.0).radians == pytest.approx(math.pi / 2.0)
        assert Angle.from_acos(-1.0).radians == pytest.approx(math.pi)
        assert Angle.from_atan(1.0).radians == pytest.approx(math.pi / 4.0)
        assert Angle.from_asinh(math.sinh(0.5)).radians == pytest.approx(0.5)
        assert Angle.from_acosh(math.cosh(0.5)).radians == pytest.approx(0.5)
        assert Angle.from_atanh(math.tanh(0.5)).radians == pytest.approx(0.5)

    def test_hyperbolic(self):
        from almagest.domain.units import Angle
        a = Angle(0.8)
        assert a.cosh() ** 2 - a.sinh() ** 2 == pytest.approx(1.0)
        assert a.tanh() == pytest.approx(a.sinh() / a.cosh())

    @pytest.mark.parametrize("radians,expected", [
        (-0.5, 2.0 * math.pi - 0.5),
        (7.0, 7.0 - 2.0 * math.pi),
        (0.0, 0.0),
    ])
    def test_mod_two_pi(self, radians, expected):
        from almagest.domain.units import Angle
        assert Angle(radians).mod_two_pi().radians == pytest.approx(expected)

    def test_mod_two_pi_signed(self):
        from almagest.domain.units import Angle
        assert Angle(-7.0).mod_two_pi_signed().radians == pytest.approx(-7.0 + 2.0 * math.pi)
        assert Angle(7.0).mod_two_pi_signed().radians == pytest.approx(7.0 - 2.0 * math.pi)

    def test_normalize_two_pi(self):
        from almagest.domain.units import Angle
        assert Angle(3.5).normalize_two_pi().radians == pytest.approx(3.5 - 2.0 * math.pi)
        assert Angle(-0.5).normalize_two_pi(math.pi).radians == pytest.approx(2.0 * math.pi - 0.5)
        assert Angle(math.pi).normalize_two_pi().radians == pytest.approx(-math.pi)

    def test_normalized_constructors(self):
        from almagest.domain.units import Angle
        assert Angle.from_degrees_normalized(-90.0).degrees == pytest.approx(270.0)
        assert Angle.from_degrees_normalized(720.5).degrees == pytest.approx(0.5)
        assert Angle.from_arcseconds_normalized_signed(-1300000.0).arcseconds == pytest.approx(-4000.0)

    def test_arithmetic(self):
        from almagest.domain.units import Angle
        a, b = Angle(1.0), Angle(0.25)
        assert (a + b).radians == 1.25
        assert (a - b).radians == 0.75
        assert (-a).radians == -1.0
        assert (a * 2.0).radians == 2.0
        assert (2.0 * a).radians == 2.0
        assert Angle(-1.0).abs() == a
        assert b < a
        assert float(a) == 1.0

    def test_rotation_methods(self):
        from almagest.domain.units import Angle, rotation_z
        np.testing.assert_array_equal(Angle(0.4).rotation_z(), rotation_z(0.4))


class TestDistanceVelocity:

    def test_distance(self):
        from almagest.domain.units import ASTRONOMICAL_UNIT, Distance
        assert Distance.from_kilometers(1.5).meters == 1500.0
        assert Distance.from_astronomical_units(1.0).meters == ASTRONOMICAL_UNIT
        assert Distance(ASTRONOMICAL_UNIT).astronomical_units == 1.0
        assert Distance(2500.0).kilometers == 2.5
        assert str(Distance(2500.0)) == "2.5 km"

    def test_velocity(self):
        from almagest.domain.units import Velocity
        assert Velocity.from_kilometers_per_second(7.5).meters_per_second == 7500.0
        assert Velocity(7500.0).kilometers_per_second == 7.5
        assert str(Velocity(7500.0)) == "7.5 km/s"


class TestFrequency:

    def test_conversions(self):
        from almagest.domain.units import Frequency
        f = Frequency.from_gigahertz(2.25)
        assert f.hertz == 2.25e9
        assert f.megahertz == pytest.approx(2250.0)
        assert f.kilohertz == pytest.approx(2.25e6)
        assert Frequency.from_terahertz(1.0).gigahertz == pytest.approx(1000.0)

    def test_wavelength(self):
        from almagest.domain.units import SPEED_OF_LIGHT, Frequency
        assert Frequency(SPEED_OF_LIGHT).wavelength().meters == pytest.approx(1.0)

    @pytest.mark.parametrize("ghz,band", [
        (0.01, "HF"),
        (0.145, "VHF"),
        (0.435, "UHF"),
        (1.5, "L"),
        (2.2, "S"),
        (5.0, "C"),
        (8.4, "X"),
        (14.0, "Ku"),
        (20.0, "K"),
        (32.0, "Ka"),
        (60.0, "V"),
        (94.0, "W"),
        (140.0, "G"),
    ])
    def test_bands(self, ghz, band):
        from almagest.domain.units import Frequency
        assert Frequency.from_gigahertz(ghz).band().value == band

    def test_band_edges(self):
        from almagest.domain.units import Frequency, FrequencyBand
        assert Frequency.from_gigahertz(1.0).band() is FrequencyBand.L
        assert Frequency.from_gigahertz(8.0).band() is FrequencyBand.X
        assert Frequency.from_megahertz(1.0).band() is None
        assert Frequency.from_gigahertz(400.0).band() is None
