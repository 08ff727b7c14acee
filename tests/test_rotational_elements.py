# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the polynomial plus trigonometric rotational-element evaluator."""

import math

import pytest

CENTURY = 3155760000.0
DAY = 86400.0


def _angles():
    from almagest.domain.rotational_elements import NutationPrecessionAngles
    return NutationPrecessionAngles(theta0=(0.5, 1.0), theta1=(2.0, -3.0))


class TestNutationPrecessionAngles:

    def test_angles_in_centuries(self):
        angles = _angles()
        assert angles.angles(0.0) == [0.5, 1.0]
        assert angles.angles(CENTURY) == pytest.approx([2.5, -2.0])

    def test_quadratic_term(self):
        from almagest.domain.rotational_elements import NutationPrecessionAngles
        angles = NutationPrecessionAngles(theta0=(0.0,), theta1=(0.0,), theta2=(1.0,))
        assert angles.angles(2.0 * CENTURY) == pytest.approx([4.0])
        assert angles.rates(2.0 * CENTURY) == pytest.approx([4.0])


class TestRotationalElement:

    def test_polynomial_only(self):
        from almagest.domain.rotational_elements import ElementKind, RotationalElement
        ra = RotationalElement(ElementKind.RIGHT_ASCENSION, 1.0, 0.1, 0.01)
        assert ra.angle(CENTURY) == pytest.approx(1.11)
        assert ra.angle_rate(CENTURY) == pytest.approx((0.1 + 0.02) / CENTURY)

    def test_prime_meridian_uses_days(self):
        from almagest.domain.rotational_elements import ElementKind, RotationalElement
        w = RotationalElement(ElementKind.ROTATION, 0.0, 2.0, 0.0)
        assert w.angle(10.0 * DAY) == pytest.approx(20.0)
        assert w.angle_rate(0.0) == pytest.approx(2.0 / DAY)

    def test_declination_uses_cosine(self):
        from almagest.domain.rotational_elements import ElementKind, RotationalElement
        dec = RotationalElement(ElementKind.DECLINATION, 0.0, 0.0, 0.0, (0.1, 0.2))
        assert dec.angle(0.0, _angles()) == pytest.approx(0.1 * math.cos(0.5) + 0.2 * math.cos(1.0))
        expected_rate = -(0.1 * 2.0 * math.sin(0.5) - 0.2 * 3.0 * math.sin(1.0)) / CENTURY
        assert dec.angle_rate(0.0, _angles()) == pytest.approx(expected_rate)

    def test_right_ascension_uses_sine(self):
        from almagest.domain.rotational_elements import ElementKind, RotationalElement
        ra = RotationalElement(ElementKind.RIGHT_ASCENSION, 0.0, 0.0, 0.0, (0.1, 0.2))
        assert ra.angle(0.0, _angles()) == pytest.approx(0.1 * math.sin(0.5) + 0.2 * math.sin(1.0))
        expected_rate = (0.1 * 2.0 * math.cos(0.5) - 0.2 * 3.0 * math.cos(1.0)) / CENTURY
        assert ra.angle_rate(0.0, _angles()) == pytest.approx(expected_rate)

    def test_prime_meridian_series_in_centuries(self):
        from almagest.domain.rotational_elements import ElementKind, RotationalElement
        w = RotationalElement(ElementKind.ROTATION, 0.0, 1.0, 0.0, (0.1,))
        t = 0.25 * CENTURY
        assert w.angle(t, _angles()) == pytest.approx(t / DAY + 0.1 * math.sin(0.5 + 2.0 * 0.25))

    def test_amplitudes_ignored_without_angles(self):
        from almagest.domain.rotational_elements import ElementKind, RotationalElement
        ra = RotationalElement(ElementKind.RIGHT_ASCENSION, 1.0, 0.0, 0.0, (0.1, 0.2))
        assert ra.angle(CENTURY) == 1.0

    def test_elements_triple(self):
        from almagest.domain.rotational_elements import (
            ElementKind,
            RotationalElement,
            RotationalElements,
        )
        elements = RotationalElements(
            right_ascension=RotationalElement(ElementKind.RIGHT_ASCENSION, 1.0, 0.0, 0.0),
            declination=RotationalElement(ElementKind.DECLINATION, 2.0, 0.0, 0.0),
            prime_meridian=RotationalElement(ElementKind.ROTATION, 3.0, 1.0, 0.0),
        )
        assert elements.elements(DAY) == pytest.approx((1.0, 2.0, 4.0))
        assert elements.rates(0.0) == pytest.approx((0.0, 0.0, 1.0 / DAY))
