# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Conversions between true, eccentric and mean anomaly.

Covers all conic types. For parabolic orbits the "eccentric" anomaly is
the parabolic anomaly D = tan(nu/2) and the mean anomaly follows Barker's
equation; for hyperbolic orbits it is the hyperbolic anomaly F.

Elliptic results are normalized to [-pi, pi). Kepler's equation is solved
with a Halley-corrected Newton iteration, the hyperbolic one with plain
Newton, and Barker's equation in closed form (Cardano).

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications,
    4th ed., Algorithms 2-5.
    Curtis, H. D. (2014). Orbital Mechanics for Engineering Students, Ch. 3.
"""
import math
from enum import Enum

_TWO_PI: float = 2.0 * math.pi

_DEFAULT_TOLERANCE: float = 1e-10
_DEFAULT_MAX_ITERATIONS: int = 50

_CIRCULAR_ATOL: float = 1e-8
_PARABOLIC_RTOL: float = 1e-8


class OrbitType(Enum):
    CIRCULAR = "circular"
    ELLIPTIC = "elliptic"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"

    def __str__(self) -> str:
        return self.value


def orbit_type(eccentricity: float) -> OrbitType:
    """Classify a conic by eccentricity (circular and parabolic within tolerance)."""
    if abs(eccentricity) <= _CIRCULAR_ATOL:
        return OrbitType.CIRCULAR
    if abs(eccentricity - 1.0) <= _PARABOLIC_RTOL:
        return OrbitType.PARABOLIC
    if 0.0 < eccentricity < 1.0:
        return OrbitType.ELLIPTIC
    return OrbitType.HYPERBOLIC


# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #


class AnomalyError(ValueError):
    """Base class for anomaly conversion errors."""


class ConvergenceFailure(AnomalyError):
    def __init__(self, iterations: int, residual: float) -> None:
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f"failed to converge after {iterations} iterations (residual: {residual})"
        )


class InvalidTrueAnomaly(AnomalyError):
    def __init__(self, nu: float, max_nu: float) -> None:
        self.nu = nu
        self.max_nu = max_nu
        super().__init__(
            f"True anomaly {nu} rad outside valid range [-{max_nu} rad, {max_nu} rad]"
        )


def _normalize(angle: float) -> float:
    """Wrap to [-pi, pi)."""
    return angle - _TWO_PI * math.floor((angle + math.pi) / _TWO_PI)


# --------------------------------------------------------------------------- #
# Elliptic
# --------------------------------------------------------------------------- #


def true_to_eccentric(nu: float, e: float) -> float:
    factor = math.sqrt((1.0 - e) / (1.0 + e))
    return _normalize(2.0 * math.atan(factor * math.tan(nu / 2.0)))


def eccentric_to_true(ea: float, e: float) -> float:
    factor = math.sqrt((1.0 + e) / (1.0 - e))
    return _normalize(2.0 * math.atan(factor * math.tan(ea / 2.0)))


def eccentric_to_mean(ea: float, e: float) -> float:
    return _normalize(ea - e * math.sin(ea))


def mean_to_eccentric(
    mean: float,
    e: float,
    tolerance: float = _DEFAULT_TOLERANCE,
    max_iterations: int = _DEFAULT_MAX_ITERATIONS,
) -> float:
    """Solve Kepler's equation M = E - e sin E.

    Raises:
        ConvergenceFailure: If the step does not drop below ``tolerance``.
    """
    m = _normalize(mean)
    if e < 0.8:
        ea = m
    elif m < math.pi:
        ea = m + e / 2.0
    else:
        ea = m - e / 2.0

    for _ in range(max_iterations):
        sin_e = math.sin(ea)
        f = ea - e * sin_e - m
        df = 1.0 - e * math.cos(ea)
        delta = f / (df + 0.5 * f * e * sin_e / df)
        ea -= delta
        if abs(delta) < tolerance:
            return _normalize(ea)

    raise ConvergenceFailure(max_iterations, abs(ea - e * math.sin(ea) - m))


def true_to_mean(nu: float, e: float) -> float:
    return eccentric_to_mean(true_to_eccentric(nu, e), e)


def mean_to_true(mean: float, e: float) -> float:
    return eccentric_to_true(mean_to_eccentric(mean, e), e)


# --------------------------------------------------------------------------- #
# Parabolic
# --------------------------------------------------------------------------- #


def true_to_parabolic(nu: float) -> float:
    return math.tan(nu / 2.0)


def parabolic_to_true(d: float) -> float:
    return 2.0 * math.atan(d)


def parabolic_to_mean(d: float) -> float:
    """Barker's equation."""
    return d + d**3 / 3.0


def mean_to_parabolic(mean: float) -> float:
    """Inverse of Barker's equation (Cardano's solution of the cubic)."""
    a = 1.5 * mean
    z = (a + math.sqrt(a * a + 1.0)) ** (1.0 / 3.0)
    return z - 1.0 / z


def true_to_mean_parabolic(nu: float) -> float:
    return parabolic_to_mean(true_to_parabolic(nu))


def mean_parabolic_to_true(mean: float) -> float:
    return parabolic_to_true(mean_to_parabolic(mean))


# --------------------------------------------------------------------------- #
# Hyperbolic
# --------------------------------------------------------------------------- #


def hyperbolic_asymptote_angle(e: float) -> float:
    """Limiting true anomaly of a hyperbola, acos(-1/e)."""
    return math.acos(-1.0 / e)


def true_to_hyperbolic(nu: float, e: float) -> float:
    """Hyperbolic anomaly F for true anomaly ``nu``.

    Raises:
        InvalidTrueAnomaly: If ``nu`` lies beyond the asymptotes.
    """
    nu_max = hyperbolic_asymptote_angle(e)
    if abs(nu) >= nu_max:
        raise InvalidTrueAnomaly(nu, nu_max)
    factor = math.sqrt((e - 1.0) / (e + 1.0))
    return 2.0 * math.atanh(factor * math.tan(nu / 2.0))


def hyperbolic_to_true(f: float, e: float) -> float:
    factor = math.sqrt((e + 1.0) / (e - 1.0))
    return 2.0 * math.atan(factor * math.tanh(f / 2.0))


def hyperbolic_to_mean(f: float, e: float) -> float:
    return e * math.sinh(f) - f


def mean_to_hyperbolic(
    mean: float,
    e: float,
    tolerance: float = _DEFAULT_TOLERANCE,
    max_iterations: int = _DEFAULT_MAX_ITERATIONS,
) -> float:
    """Solve the hyperbolic Kepler equation M = e sinh F - F."""
    f = math.asinh(mean / e)
    for _ in range(max_iterations):
        g = e * math.sinh(f) - f - mean
        dg = e * math.cosh(f) - 1.0
        delta = g / dg
        f -= delta
        if abs(delta) < tolerance:
            return f

    raise ConvergenceFailure(max_iterations, abs(e * math.sinh(f) - f - mean))


def true_to_mean_hyperbolic(nu: float, e: float) -> float:
    return hyperbolic_to_mean(true_to_hyperbolic(nu, e), e)


def mean_hyperbolic_to_true(mean: float, e: float) -> float:
    return hyperbolic_to_true(mean_to_hyperbolic(mean, e), e)


# --------------------------------------------------------------------------- #
# Dispatch by orbit type
# --------------------------------------------------------------------------- #


def true_to_eccentric_any(nu: float, e: float) -> float:
    """Eccentric, parabolic or hyperbolic anomaly, depending on ``e``."""
    kind = orbit_type(e)
    if kind is OrbitType.PARABOLIC:
        return true_to_parabolic(nu)
    if kind is OrbitType.HYPERBOLIC:
        return true_to_hyperbolic(nu, e)
    return true_to_eccentric(nu, e)


def eccentric_to_true_any(anomaly: float, e: float) -> float:
    kind = orbit_type(e)
    if kind is OrbitType.PARABOLIC:
        return parabolic_to_true(anomaly)
    if kind is OrbitType.HYPERBOLIC:
        return hyperbolic_to_true(anomaly, e)
    return eccentric_to_true(anomaly, e)


def true_to_mean_any(nu: float, e: float) -> float:
    kind = orbit_type(e)
    if kind is OrbitType.CIRCULAR:
        return nu
    if kind is OrbitType.PARABOLIC:
        return true_to_mean_parabolic(nu)
    if kind is OrbitType.HYPERBOLIC:
        return true_to_mean_hyperbolic(nu, e)
    return true_to_mean(nu, e)


def mean_to_true_any(mean: float, e: float) -> float:
    kind = orbit_type(e)
    if kind is OrbitType.CIRCULAR:
        return mean
    if kind is OrbitType.PARABOLIC:
        return mean_parabolic_to_true(mean)
    if kind is OrbitType.HYPERBOLIC:
        return mean_hyperbolic_to_true(mean, e)
    return mean_to_true(mean, e)
