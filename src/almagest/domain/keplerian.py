# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Classical Keplerian elements and their Cartesian equivalent.

Units are SI throughout: metres, m/s, radians, m^3/s^2. Constructors and
builder setters accept plain floats or the ``Distance``/``Angle`` wrappers
from ``almagest.domain.units``.

Keplerian -> Cartesian goes through the perifocal frame:

    p     = a (1 - e^2)                  (a for circular orbits)
    r_pqw = p / (1 + e cos nu) (cos nu, sin nu, 0)
    v_pqw = sqrt(mu / p) (-sin nu, e + cos nu, 0)
    r     = R3(-RAAN) R1(-i) R3(-omega) r_pqw

Cartesian -> Keplerian uses the eccentricity vector, the angular momentum
h = r x v and the node vector n = z x h. Undefined angles of equatorial
and circular orbits are set to zero and their phase carried by the true
anomaly.

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications,
    4th ed., Algorithms 9 and 10.
"""
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from almagest.domain.anomalies import (
    AnomalyError,
    OrbitType,
    eccentric_to_true_any,
    mean_to_true_any,
    orbit_type,
)
from almagest.domain.deltas import TimeDelta
from almagest.domain.units import rotation_x, rotation_z

_TWO_PI: float = 2.0 * math.pi
_EQUATORIAL_ATOL: float = 1e-8


# --------------------------------------------------------------------------- #
# Gravitational parameter
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, order=True)
class GravitationalParameter:
    """GM in m^3/s^2."""

    value: float

    @classmethod
    def from_m3_per_s2(cls, mu: float) -> "GravitationalParameter":
        return cls(float(mu))

    @classmethod
    def from_km3_per_s2(cls, mu: float) -> "GravitationalParameter":
        return cls(1e9 * mu)

    @property
    def km3_per_s2(self) -> float:
        return self.value * 1e-9

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.km3_per_s2} km³/s²"


# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #


class KeplerianError(ValueError):
    """Base class for invalid Keplerian elements."""


class NegativeEccentricity(KeplerianError):
    def __init__(self, eccentricity: float) -> None:
        self.eccentricity = eccentricity
        super().__init__(f"eccentricity cannot be negative but was {eccentricity}")


class InvalidShape(KeplerianError):
    def __init__(self, semi_major_axis: float, eccentricity: float) -> None:
        self.semi_major_axis = semi_major_axis
        self.eccentricity = eccentricity
        sign = "negative" if semi_major_axis < 0.0 else "positive"
        super().__init__(
            f"{sign} semi-major axis ({semi_major_axis}) for "
            f"{orbit_type(eccentricity)} eccentricity ({eccentricity})"
        )


class MissingShape(KeplerianError):
    def __init__(self) -> None:
        super().__init__(
            "no orbital shape parameters (semi-major axis and eccentricity, "
            "radii, or altitudes) were provided"
        )


class InvalidInclination(KeplerianError):
    def __init__(self, inclination: float) -> None:
        self.inclination = inclination
        super().__init__(f"inclination must be between 0 and 180 deg but was {inclination}")


class InvalidLongitudeOfAscendingNode(KeplerianError):
    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(
            f"longitude of ascending node must be between 0 and 360 deg but was {value}"
        )


class InvalidArgumentOfPeriapsis(KeplerianError):
    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"argument of periapsis must be between 0 and 360 deg but was {value}")


class InvalidAnomaly(KeplerianError):
    """Anomaly conversion failed while building elements."""

    def __init__(self, inner: AnomalyError) -> None:
        self.inner = inner
        super().__init__(str(inner))


# --------------------------------------------------------------------------- #
# Cartesian state
# --------------------------------------------------------------------------- #


def _azimuth(v: np.ndarray) -> float:
    return math.atan2(v[1], v[0])


def _mod_two_pi(angle: float) -> float:
    a = math.fmod(angle, _TWO_PI)
    if a < 0.0:
        a += _TWO_PI
    return a


@dataclass(frozen=True, eq=False)
class CartesianState:
    """Position (m) and velocity (m/s) as 3-element NumPy arrays."""

    position: np.ndarray
    velocity: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", np.asarray(self.position, dtype=float))
        object.__setattr__(self, "velocity", np.asarray(self.velocity, dtype=float))

    def isclose(self, other: "CartesianState", rtol: float = 1e-8, atol: float = 0.0) -> bool:
        return bool(
            np.allclose(self.position, other.position, rtol=rtol, atol=atol)
            and np.allclose(self.velocity, other.velocity, rtol=rtol, atol=atol)
        )

    def eccentricity_vector(self, mu) -> np.ndarray:
        mu = float(mu)
        r, v = self.position, self.velocity
        rm = float(np.linalg.norm(r))
        return ((float(v @ v) - mu / rm) * r - float(r @ v) * v) / mu

    def to_keplerian(self, mu) -> "Keplerian":
        """Osculating elements about a body with gravitational parameter ``mu``."""
        gm = float(mu)
        r, v = self.position, self.velocity
        rm = float(np.linalg.norm(r))
        vm = float(np.linalg.norm(v))
        h = np.cross(r, v)
        hm = float(np.linalg.norm(h))
        node = np.cross(np.array([0.0, 0.0, 1.0]), h)
        e_vec = self.eccentricity_vector(gm)
        ecc = float(np.linalg.norm(e_vec))
        inclination = math.acos(max(-1.0, min(1.0, h[2] / hm)))

        equatorial = abs(inclination) <= _EQUATORIAL_ATOL
        circular = orbit_type(ecc) is OrbitType.CIRCULAR

        if circular:
            sma = hm**2 / gm
        else:
            sma = -gm / (2.0 * (vm**2 / 2.0 - gm / rm))

        if equatorial and not circular:
            raan = 0.0
            argp = _azimuth(e_vec)
            nu = math.atan2(float(h @ np.cross(e_vec, r)) / hm, float(r @ e_vec))
        elif not equatorial and circular:
            raan = _azimuth(node)
            argp = 0.0
            nu = math.atan2(float(r @ np.cross(h, node)) / hm, float(r @ node))
        elif equatorial and circular:
            raan = 0.0
            argp = 0.0
            nu = _azimuth(r)
        else:
            if sma > 0.0:
                e_se = float(r @ v) / math.sqrt(gm * sma)
                e_ce = rm * vm**2 / gm - 1.0
                anomaly = math.atan2(e_se, e_ce)
            else:
                e_sh = float(r @ v) / math.sqrt(-gm * sma)
                e_ch = rm * vm**2 / gm - 1.0
                anomaly = math.log((e_ch + e_sh) / (e_ch - e_sh)) / 2.0
            nu = eccentric_to_true_any(anomaly, ecc)
            px = float(r @ node)
            py = float(r @ np.cross(h, node)) / hm
            raan = _azimuth(node)
            argp = math.atan2(py, px) - nu

        return Keplerian(
            semi_major_axis=sma,
            eccentricity=ecc,
            inclination=inclination,
            longitude_of_ascending_node=_mod_two_pi(raan),
            argument_of_periapsis=_mod_two_pi(argp),
            true_anomaly=nu,
        )


# --------------------------------------------------------------------------- #
# Keplerian elements
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Keplerian:
    """Classical orbital elements.

    Attributes:
        semi_major_axis: a in metres (negative for hyperbolic orbits).
        eccentricity: e >= 0.
        inclination: i in [0, pi] radians.
        longitude_of_ascending_node: RAAN in [0, 2pi] radians.
        argument_of_periapsis: omega in [0, 2pi] radians.
        true_anomaly: nu in radians.
    """

    semi_major_axis: float
    eccentricity: float
    inclination: float
    longitude_of_ascending_node: float
    argument_of_periapsis: float
    true_anomaly: float

    @staticmethod
    def builder() -> "KeplerianBuilder":
        return KeplerianBuilder()

    @property
    def orbit_type(self) -> OrbitType:
        return orbit_type(self.eccentricity)

    def semi_parameter(self) -> float:
        if self.orbit_type is OrbitType.CIRCULAR:
            return self.semi_major_axis
        return self.semi_major_axis * (1.0 - self.eccentricity**2)

    def to_perifocal(self, mu) -> tuple[np.ndarray, np.ndarray]:
        """Position and velocity in the perifocal (PQW) frame."""
        e = self.eccentricity
        p = self.semi_parameter()
        sin_nu, cos_nu = math.sin(self.true_anomaly), math.cos(self.true_anomaly)
        sqrt_mu_p = math.sqrt(float(mu) / p)
        pos = np.array([cos_nu, sin_nu, 0.0]) * (p / (1.0 + e * cos_nu))
        vel = np.array([-sin_nu, e + cos_nu, 0.0]) * sqrt_mu_p
        return pos, vel

    def to_cartesian(self, mu) -> CartesianState:
        pos, vel = self.to_perifocal(mu)
        rot = (
            rotation_z(self.longitude_of_ascending_node).T
            @ rotation_x(self.inclination).T
            @ rotation_z(self.argument_of_periapsis).T
        )
        return CartesianState(rot @ pos, rot @ vel)

    def orbital_period(self, mu) -> Optional[TimeDelta]:
        """Period of a closed orbit; None for parabolic and hyperbolic orbits."""
        if self.orbit_type not in (OrbitType.CIRCULAR, OrbitType.ELLIPTIC):
            return None
        seconds = _TWO_PI * math.sqrt(self.semi_major_axis**3 / float(mu))
        return TimeDelta.from_decimal_seconds(seconds)

    def trace(self, mu, n: int) -> Optional[list[CartesianState]]:
        """``n`` states evenly spaced in eccentric anomaly over [-pi, pi].

        None for open orbits.
        """
        if self.orbit_type not in (OrbitType.CIRCULAR, OrbitType.ELLIPTIC):
            return None
        states = []
        for ea in np.linspace(-math.pi, math.pi, n):
            nu = eccentric_to_true_any(float(ea), self.eccentricity)
            states.append(_replace_anomaly(self, nu).to_cartesian(mu))
        return states

    def isclose(self, other: "Keplerian", rtol: float = 1e-8, atol: float = 1e-12) -> bool:
        pairs = zip(_astuple(self), _astuple(other))
        return all(math.isclose(a, b, rel_tol=rtol, abs_tol=atol) for a, b in pairs)


def _astuple(k: Keplerian) -> tuple[float, ...]:
    return (
        k.semi_major_axis,
        k.eccentricity,
        k.inclination,
        k.longitude_of_ascending_node,
        k.argument_of_periapsis,
        k.true_anomaly,
    )


def _replace_anomaly(k: Keplerian, nu: float) -> Keplerian:
    return Keplerian(
        k.semi_major_axis,
        k.eccentricity,
        k.inclination,
        k.longitude_of_ascending_node,
        k.argument_of_periapsis,
        nu,
    )


class KeplerianBuilder:
    """Fluent builder validating shape and angles on ``build``."""

    def __init__(self) -> None:
        self._shape: Optional[tuple[float, float]] = None
        self._inclination = 0.0
        self._raan = 0.0
        self._argp = 0.0
        self._true_anomaly: Optional[float] = None
        self._mean_anomaly: Optional[float] = None

    def with_semi_major_axis(self, semi_major_axis, eccentricity: float) -> "KeplerianBuilder":
        self._shape = (float(semi_major_axis), float(eccentricity))
        return self

    def with_radii(self, periapsis_radius, apoapsis_radius) -> "KeplerianBuilder":
        rp, ra = float(periapsis_radius), float(apoapsis_radius)
        self._shape = ((rp + ra) / 2.0, (ra - rp) / (ra + rp))
        return self

    def with_altitudes(self, periapsis_altitude, apoapsis_altitude, mean_radius) -> "KeplerianBuilder":
        radius = float(mean_radius)
        return self.with_radii(float(periapsis_altitude) + radius, float(apoapsis_altitude) + radius)

    def with_inclination(self, inclination) -> "KeplerianBuilder":
        self._inclination = float(inclination)
        return self

    def with_longitude_of_ascending_node(self, value) -> "KeplerianBuilder":
        self._raan = float(value)
        return self

    def with_argument_of_periapsis(self, value) -> "KeplerianBuilder":
        self._argp = float(value)
        return self

    def with_true_anomaly(self, value) -> "KeplerianBuilder":
        self._true_anomaly = float(value)
        return self

    def with_mean_anomaly(self, value) -> "KeplerianBuilder":
        self._mean_anomaly = float(value)
        return self

    def build(self) -> Keplerian:
        """Validate and build.

        Raises:
            KeplerianError: Missing or inconsistent shape, angles out of
                range, or a failed mean-to-true anomaly conversion.
        """
        if self._shape is None:
            raise MissingShape()
        sma, ecc = self._shape
        if ecc < 0.0:
            raise NegativeEccentricity(ecc)
        if (ecc > 1.0 and sma > 0.0) or (ecc < 1.0 and sma < 0.0):
            raise InvalidShape(sma, ecc)
        if not 0.0 <= self._inclination <= math.pi:
            raise InvalidInclination(self._inclination)
        if not 0.0 <= self._raan <= _TWO_PI:
            raise InvalidLongitudeOfAscendingNode(self._raan)
        if not 0.0 <= self._argp <= _TWO_PI:
            raise InvalidArgumentOfPeriapsis(self._argp)

        if self._true_anomaly is not None:
            nu = self._true_anomaly
        elif self._mean_anomaly is not None:
            try:
                nu = mean_to_true_any(self._mean_anomaly, ecc)
            except AnomalyError as exc:
                raise InvalidAnomaly(exc) from exc
        else:
            nu = 0.0

        return Keplerian(sma, ecc, self._inclination, self._raan, self._argp, nu)
