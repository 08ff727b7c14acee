# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""IAU rotational elements of solar-system bodies.

Each element is a quadratic polynomial plus a trigonometric series over the
nutation-precession angles of the body's system:

    alpha(t) = c0 + c1*T + c2*T^2 + sum(a_i * sin(theta_i(T)))
    delta(t) = c0 + c1*T + c2*T^2 + sum(a_i * cos(theta_i(T)))
    W(t)     = c0 + c1*d + c2*d^2 + sum(a_i * sin(theta_i(T)))

T is TDB Julian centuries and d TDB days since J2000. Rates are the
term-by-term derivatives in rad/s. All angles are in radians.

References:
    Archinal, B. A. et al. (2018). Report of the IAU Working Group on
    Cartographic Coordinates and Rotational Elements: 2015.
    Celest. Mech. Dyn. Astron. 130:22.
"""

import math
from dataclasses import dataclass
from enum import Enum

from almagest.domain.deltas import SECONDS_PER_DAY, SECONDS_PER_JULIAN_CENTURY


class ElementKind(Enum):
    RIGHT_ASCENSION = "right_ascension"
    DECLINATION = "declination"
    ROTATION = "prime_meridian"

    @property
    def polynomial_unit(self) -> float:
        """Seconds per polynomial time unit."""
        if self is ElementKind.ROTATION:
            return float(SECONDS_PER_DAY)
        return float(SECONDS_PER_JULIAN_CENTURY)


@dataclass(frozen=True)
class NutationPrecessionAngles:
    """Angles theta_i(T) = theta0 + theta1*T + theta2*T^2, radians per century powers."""

    theta0: tuple[float, ...]
    theta1: tuple[float, ...]
    theta2: tuple[float, ...] = ()

    def angles(self, t: float) -> list[float]:
        centuries = t / SECONDS_PER_JULIAN_CENTURY
        theta2 = self.theta2 or (0.0,) * len(self.theta0)
        return [
            a + b * centuries + c * centuries**2
            for a, b, c in zip(self.theta0, self.theta1, theta2)
        ]

    def rates(self, t: float) -> list[float]:
        """Angle rates in radians per century."""
        centuries = t / SECONDS_PER_JULIAN_CENTURY
        theta2 = self.theta2 or (0.0,) * len(self.theta0)
        return [b + 2.0 * c * centuries for b, c in zip(self.theta1, theta2)]


@dataclass(frozen=True)
class RotationalElement:
    kind: ElementKind
    c0: float
    c1: float
    c2: float
    amplitudes: tuple[float, ...] = ()

    def _trig(self, x: float) -> float:
        return math.cos(x) if self.kind is ElementKind.DECLINATION else math.sin(x)

    def angle(self, t: float, nut_prec: "NutationPrecessionAngles | None" = None) -> float:
        """Element value at ``t`` TDB seconds since J2000."""
        u = t / self.kind.polynomial_unit
        value = self.c0 + self.c1 * u + self.c2 * u**2
        if nut_prec is not None and self.amplitudes:
            value += sum(
                a * self._trig(theta)
                for a, theta in zip(self.amplitudes, nut_prec.angles(t))
            )
        return value

    def angle_rate(self, t: float, nut_prec: "NutationPrecessionAngles | None" = None) -> float:
        """Element rate in rad/s."""
        unit = self.kind.polynomial_unit
        rate = self.c1 / unit + 2.0 * self.c2 * t / unit**2
        if nut_prec is not None and self.amplitudes:
            series = 0.0
            for a, theta, theta_dot in zip(
                self.amplitudes, nut_prec.angles(t), nut_prec.rates(t)
            ):
                if self.kind is ElementKind.DECLINATION:
                    series -= a * theta_dot * math.sin(theta)
                else:
                    series += a * theta_dot * math.cos(theta)
            rate += series / SECONDS_PER_JULIAN_CENTURY
        return rate


@dataclass(frozen=True)
class RotationalElements:
    """Right ascension and declination of the pole plus the prime meridian."""

    right_ascension: RotationalElement
    declination: RotationalElement
    prime_meridian: RotationalElement
    nut_prec: "NutationPrecessionAngles | None" = None

    def elements(self, t: float) -> tuple[float, float, float]:
        return (
            self.right_ascension.angle(t, self.nut_prec),
            self.declination.angle(t, self.nut_prec),
            self.prime_meridian.angle(t, self.nut_prec),
        )

    def rates(self, t: float) -> tuple[float, float, float]:
        return (
            self.right_ascension.angle_rate(t, self.nut_prec),
            self.declination.angle_rate(t, self.nut_prec),
            self.prime_meridian.angle_rate(t, self.nut_prec),
        )
