# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Unit-safe wrappers for angles, distances, velocities and frequencies.

All values are stored in SI base units (radians, metres, m/s, Hz); other
units only appear in named constructors and accessors.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

ASTRONOMICAL_UNIT: float = 1.495978707e11
"""IAU 2012 astronomical unit in metres."""

SPEED_OF_LIGHT: float = 299792458.0
"""Speed of light in vacuum, m/s."""

ROTATION_RATE_EARTH: float = 7.2921150e-5
"""Nominal Earth rotation rate, rad/s."""

_TWO_PI: float = 2.0 * math.pi
_ARCSECONDS_IN_CIRCLE: float = 360.0 * 3600.0
_RADIANS_IN_ARCSECOND: float = _TWO_PI / _ARCSECONDS_IN_CIRCLE


# --------------------------------------------------------------------------- #
# Passive rotation matrices
# --------------------------------------------------------------------------- #


def rotation_x(angle: float) -> np.ndarray:
    """Frame rotation about X by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])


def rotation_y(angle: float) -> np.ndarray:
    """Frame rotation about Y by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])


def rotation_z(angle: float) -> np.ndarray:
    """Frame rotation about Z by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])


# --------------------------------------------------------------------------- #
# Angle
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, order=True)
class Angle:
    """A plane angle in radians."""

    radians: float = 0.0

    @classmethod
    def from_degrees(cls, degrees: float) -> "Angle":
        return cls(math.radians(degrees))

    @classmethod
    def from_degrees_normalized(cls, degrees: float) -> "Angle":
        return cls(math.radians(math.fmod(degrees, 360.0))).mod_two_pi()

    @classmethod
    def from_arcseconds(cls, arcseconds: float) -> "Angle":
        return cls(arcseconds * _RADIANS_IN_ARCSECOND)

    @classmethod
    def from_arcseconds_normalized_signed(cls, arcseconds: float) -> "Angle":
        return cls(math.fmod(arcseconds, _ARCSECONDS_IN_CIRCLE) * _RADIANS_IN_ARCSECOND)

    @classmethod
    def from_hms(cls, hours: int, minutes: int, seconds: float) -> "Angle":
        return cls.from_degrees(15.0 * (hours + minutes / 60.0 + seconds / 3600.0))

    @classmethod
    def from_atan2(cls, y: float, x: float) -> "Angle":
        return cls(math.atan2(y, x))

    @classmethod
    def from_asin(cls, value: float) -> "Angle":
        return cls(math.asin(value))

    @classmethod
    def from_acos(cls, value: float) -> "Angle":
        return cls(math.acos(value))

    @classmethod
    def from_atan(cls, value: float) -> "Angle":
        return cls(math.atan(value))

    @classmethod
    def from_asinh(cls, value: float) -> "Angle":
        return cls(math.asinh(value))

    @classmethod
    def from_acosh(cls, value: float) -> "Angle":
        return cls(math.acosh(value))

    @classmethod
    def from_atanh(cls, value: float) -> "Angle":
        return cls(math.atanh(value))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    @property
    def arcseconds(self) -> float:
        return self.radians / _RADIANS_IN_ARCSECOND

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)

    def sin_cos(self) -> tuple[float, float]:
        return math.sin(self.radians), math.cos(self.radians)

    def sinh(self) -> float:
        return math.sinh(self.radians)

    def cosh(self) -> float:
        return math.cosh(self.radians)

    def tanh(self) -> float:
        return math.tanh(self.radians)

    def abs(self) -> "Angle":
        return Angle(abs(self.radians))

    def mod_two_pi(self) -> "Angle":
        """Normalize to [0, 2π)."""
        a = math.fmod(self.radians, _TWO_PI)
        if a < 0.0:
            a += _TWO_PI
        return Angle(a)

    def mod_two_pi_signed(self) -> "Angle":
        """Normalize to (-2π, 2π), keeping the sign."""
        return Angle(math.fmod(self.radians, _TWO_PI))

    def normalize_two_pi(self, center: "Angle | float" = 0.0) -> "Angle":
        """Normalize to [center - π, center + π)."""
        c = center.radians if isinstance(center, Angle) else center
        return Angle(self.radians - _TWO_PI * math.floor((self.radians + math.pi - c) / _TWO_PI))

    def rotation_x(self) -> np.ndarray:
        return rotation_x(self.radians)

    def rotation_y(self) -> np.ndarray:
        return rotation_y(self.radians)

    def rotation_z(self) -> np.ndarray:
        return rotation_z(self.radians)

    def __add__(self, other: "Angle") -> "Angle":
        return Angle(self.radians + other.radians)

    def __sub__(self, other: "Angle") -> "Angle":
        return Angle(self.radians - other.radians)

    def __neg__(self) -> "Angle":
        return Angle(-self.radians)

    def __mul__(self, factor: float) -> "Angle":
        return Angle(self.radians * factor)

    __rmul__ = __mul__

    def __float__(self) -> float:
        return self.radians

    def __str__(self) -> str:
        return f"{self.degrees} deg"


# --------------------------------------------------------------------------- #
# Distance and velocity
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, order=True)
class Distance:
    meters: float = 0.0

    @classmethod
    def from_kilometers(cls, km: float) -> "Distance":
        return cls(km * 1e3)

    @classmethod
    def from_astronomical_units(cls, au: float) -> "Distance":
        return cls(au * ASTRONOMICAL_UNIT)

    @property
    def kilometers(self) -> float:
        return self.meters * 1e-3

    @property
    def astronomical_units(self) -> float:
        return self.meters / ASTRONOMICAL_UNIT

    def __float__(self) -> float:
        return self.meters

    def __str__(self) -> str:
        return f"{self.kilometers} km"


@dataclass(frozen=True, order=True)
class Velocity:
    meters_per_second: float = 0.0

    @classmethod
    def from_kilometers_per_second(cls, kps: float) -> "Velocity":
        return cls(kps * 1e3)

    @property
    def kilometers_per_second(self) -> float:
        return self.meters_per_second * 1e-3

    def __float__(self) -> float:
        return self.meters_per_second

    def __str__(self) -> str:
        return f"{self.kilometers_per_second} km/s"


# --------------------------------------------------------------------------- #
# Frequency
# --------------------------------------------------------------------------- #


class FrequencyBand(Enum):
    """IEEE radar bands."""

    HF = "HF"
    VHF = "VHF"
    UHF = "UHF"
    L = "L"
    S = "S"
    C = "C"
    X = "X"
    KU = "Ku"
    K = "K"
    KA = "Ka"
    V = "V"
    W = "W"
    G = "G"


_BAND_UPPER_LIMITS: tuple[tuple[float, FrequencyBand], ...] = (
    (30e6, FrequencyBand.HF),
    (300e6, FrequencyBand.VHF),
    (1e9, FrequencyBand.UHF),
    (2e9, FrequencyBand.L),
    (4e9, FrequencyBand.S),
    (8e9, FrequencyBand.C),
    (12e9, FrequencyBand.X),
    (18e9, FrequencyBand.KU),
    (27e9, FrequencyBand.K),
    (40e9, FrequencyBand.KA),
    (75e9, FrequencyBand.V),
    (110e9, FrequencyBand.W),
    (300e9, FrequencyBand.G),
)
"""Exclusive upper limit in Hz for each band; HF starts at 3 MHz."""


@dataclass(frozen=True, order=True)
class Frequency:
    hertz: float = 0.0

    @classmethod
    def from_kilohertz(cls, value: float) -> "Frequency":
        return cls(value * 1e3)

    @classmethod
    def from_megahertz(cls, value: float) -> "Frequency":
        return cls(value * 1e6)

    @classmethod
    def from_gigahertz(cls, value: float) -> "Frequency":
        return cls(value * 1e9)

    @classmethod
    def from_terahertz(cls, value: float) -> "Frequency":
        return cls(value * 1e12)

    @property
    def kilohertz(self) -> float:
        return self.hertz * 1e-3

    @property
    def megahertz(self) -> float:
        return self.hertz * 1e-6

    @property
    def gigahertz(self) -> float:
        return self.hertz * 1e-9

    @property
    def terahertz(self) -> float:
        return self.hertz * 1e-12

    def wavelength(self) -> Distance:
        return Distance(SPEED_OF_LIGHT / self.hertz)

    def band(self) -> Optional[FrequencyBand]:
        if self.hertz < 3e6:
            return None
        for limit, band in _BAND_UPPER_LIMITS:
            if self.hertz < limit:
                return band
        return None

    def __float__(self) -> float:
        return self.hertz

    def __str__(self) -> str:
        return f"{self.gigahertz} GHz"
