# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Signed, scale-free time differences with femtosecond resolution.

A ``TimeDelta`` is stored as an integer number of seconds plus a
``Subsecond``. The subsecond is always the positive fraction elapsed since
the last whole second, so minus one femtosecond is ``(-1, 0.999999999999999)``.

The Julian-date view treats a delta as seconds since J2000 and shifts it to
the other standard epochs.

References:
    IAU SOFA, Time Scale and Calendar Tools (2021).
    Wallace, P. T. (1998). "Time scales." SOFA documentation.
"""

import math
from enum import Enum
from functools import total_ordering

from almagest.domain.subsecond import Subsecond

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 3600
SECONDS_PER_DAY: int = 86400
SECONDS_PER_HALF_DAY: int = 43200
SECONDS_PER_JULIAN_YEAR: int = 31557600
SECONDS_PER_JULIAN_CENTURY: int = 3155760000

SECONDS_BETWEEN_JD_AND_J2000: int = 211813488000
"""JD 0 (-4712-01-01T12:00) to J2000 (2000-01-01T12:00)."""

SECONDS_BETWEEN_MJD_AND_J2000: int = 4453444800
"""MJD 0 (1858-11-17T00:00) to J2000."""

SECONDS_BETWEEN_J1950_AND_J2000: int = 1577880000
"""J1950 (1949-12-31T22:09:50) to J2000."""

SECONDS_BETWEEN_J1977_AND_J2000: int = 725803200
"""1977-01-01T00:00 to J2000."""

_INT64_MAX: float = float(2**63 - 1)
_INT64_MIN: float = float(-(2**63))


class Epoch(Enum):
    """Reference epochs for the Julian-date view."""

    JULIAN_DATE = "JD"
    MODIFIED_JULIAN_DATE = "MJD"
    J1950 = "J1950"
    J2000 = "J2000"

    @property
    def seconds_to_j2000(self) -> int:
        return _EPOCH_SHIFTS[self]


_EPOCH_SHIFTS = {
    Epoch.JULIAN_DATE: SECONDS_BETWEEN_JD_AND_J2000,
    Epoch.MODIFIED_JULIAN_DATE: SECONDS_BETWEEN_MJD_AND_J2000,
    Epoch.J1950: SECONDS_BETWEEN_J1950_AND_J2000,
    Epoch.J2000: 0,
}


class Unit(Enum):
    """Units for the Julian-date view."""

    SECONDS = 1
    DAYS = SECONDS_PER_DAY
    CENTURIES = SECONDS_PER_JULIAN_CENTURY


class TimeDeltaError(ValueError):
    """Raised when a float cannot be represented as a TimeDelta."""

    def __init__(self, raw: float, detail: str) -> None:
        self.raw = raw
        self.detail = detail
        super().__init__(f"`{raw}` cannot be represented as a `TimeDelta`: {detail}")


def _normalize(seconds: int, fraction: float) -> tuple[int, float]:
    """Fold any finite ``fraction`` into ``seconds`` so that 0 <= fraction < 1."""
    whole = math.floor(fraction)
    seconds += whole
    fraction -= whole
    if fraction >= 1.0:
        seconds += 1
        fraction = 0.0
    elif fraction < 0.0:
        fraction = 0.0
    return seconds, fraction


@total_ordering
class TimeDelta:
    """Signed duration as ``(seconds, subsecond)``."""

    __slots__ = ("_seconds", "_subsecond")

    def __init__(self, seconds: int = 0, subsecond: Subsecond | float = 0.0) -> None:
        if not isinstance(subsecond, Subsecond):
            subsecond = Subsecond(subsecond)
        self._seconds = int(seconds)
        self._subsecond = subsecond

    # -- Constructors ------------------------------------------------------ #

    @classmethod
    def zero(cls) -> "TimeDelta":
        return cls(0, Subsecond(0.0))

    @classmethod
    def from_seconds(cls, seconds: int) -> "TimeDelta":
        return cls(seconds, Subsecond(0.0))

    @classmethod
    def from_decimal_seconds(cls, value: float) -> "TimeDelta":
        """Build a delta from float seconds.

        Raises
        ------
        TimeDeltaError
            If ``value`` is NaN, infinite, or outside the signed 64-bit range.
        """
        value = float(value)
        if math.isnan(value):
            raise TimeDeltaError(value, "NaN is unrepresentable")
        if value >= _INT64_MAX:
            raise TimeDeltaError(
                value, "input seconds cannot exceed the maximum value of an i64"
            )
        if value <= _INT64_MIN:
            raise TimeDeltaError(
                value, "input seconds cannot be less than the minimum value of an i64"
            )
        seconds, fraction = _normalize(0, value)
        return cls(seconds, Subsecond(fraction))

    @classmethod
    def from_minutes(cls, value: float) -> "TimeDelta":
        return cls.from_decimal_seconds(value * SECONDS_PER_MINUTE)

    @classmethod
    def from_hours(cls, value: float) -> "TimeDelta":
        return cls.from_decimal_seconds(value * SECONDS_PER_HOUR)

    @classmethod
    def from_days(cls, value: float) -> "TimeDelta":
        return cls.from_decimal_seconds(value * SECONDS_PER_DAY)

    @classmethod
    def from_julian_years(cls, value: float) -> "TimeDelta":
        return cls.from_decimal_seconds(value * SECONDS_PER_JULIAN_YEAR)

    @classmethod
    def from_julian_centuries(cls, value: float) -> "TimeDelta":
        return cls.from_decimal_seconds(value * SECONDS_PER_JULIAN_CENTURY)

    @classmethod
    def from_julian_date(cls, julian_date: float, epoch: Epoch = Epoch.JULIAN_DATE) -> "TimeDelta":
        """Seconds since J2000 for a one-part Julian date counted from ``epoch``."""
        days = math.floor(julian_date)
        whole = cls.from_seconds(days * SECONDS_PER_DAY - epoch.seconds_to_j2000)
        return whole + cls.from_decimal_seconds((julian_date - days) * SECONDS_PER_DAY)

    @classmethod
    def from_two_part_julian_date(cls, jd1: float, jd2: float) -> "TimeDelta":
        """Seconds since J2000 for a split Julian date ``jd1 + jd2``."""
        d1 = math.floor(jd1)
        d2 = math.floor(jd2)
        whole = cls.from_seconds((d1 + d2) * SECONDS_PER_DAY - SECONDS_BETWEEN_JD_AND_J2000)
        fraction = ((jd1 - d1) + (jd2 - d2)) * SECONDS_PER_DAY
        return whole + cls.from_decimal_seconds(fraction)

    # -- Accessors --------------------------------------------------------- #

    @property
    def seconds(self) -> int:
        return self._seconds

    @property
    def subsecond(self) -> Subsecond:
        return self._subsecond

    def is_zero(self) -> bool:
        return self._seconds == 0 and self._subsecond.value == 0.0

    def is_positive(self) -> bool:
        return self._seconds > 0 or (self._seconds == 0 and self._subsecond.value > 0.0)

    def is_negative(self) -> bool:
        return self._seconds < 0

    def to_decimal_seconds(self) -> float:
        return self._subsecond.value + float(self._seconds)

    def to_days(self) -> float:
        return self.to_decimal_seconds() / SECONDS_PER_DAY

    def to_julian_years(self) -> float:
        return self.to_decimal_seconds() / SECONDS_PER_JULIAN_YEAR

    def to_julian_centuries(self) -> float:
        return self.to_decimal_seconds() / SECONDS_PER_JULIAN_CENTURY

    # -- Julian dates ------------------------------------------------------ #

    def julian_date(self, epoch: Epoch = Epoch.JULIAN_DATE, unit: Unit = Unit.DAYS) -> float:
        """Treat the delta as seconds since J2000 and express it from ``epoch``."""
        seconds = float(self._seconds + epoch.seconds_to_j2000) + self._subsecond.value
        if unit is Unit.SECONDS:
            return seconds
        return seconds / unit.value

    def two_part_julian_date(self) -> tuple[float, float]:
        """Julian date split into whole days and the day fraction."""
        total = self._seconds + SECONDS_BETWEEN_JD_AND_J2000
        days, remainder = divmod(total, SECONDS_PER_DAY)
        return float(days), (remainder + self._subsecond.value) / SECONDS_PER_DAY

    def seconds_since_j2000(self) -> float:
        return self.julian_date(Epoch.J2000, Unit.SECONDS)

    def days_since_j2000(self) -> float:
        return self.julian_date(Epoch.J2000, Unit.DAYS)

    def centuries_since_j2000(self) -> float:
        return self.julian_date(Epoch.J2000, Unit.CENTURIES)

    # -- Arithmetic -------------------------------------------------------- #

    def __neg__(self) -> "TimeDelta":
        if self._subsecond.value == 0.0:
            return TimeDelta(-self._seconds, Subsecond(0.0))
        return TimeDelta(-self._seconds - 1, Subsecond(1.0 - self._subsecond.value))

    def __add__(self, other: "TimeDelta") -> "TimeDelta":
        if not isinstance(other, TimeDelta):
            return NotImplemented
        seconds = self._seconds + other._seconds
        fraction = self._subsecond.value + other._subsecond.value
        if fraction >= 1.0:
            seconds += 1
            fraction -= 1.0
        return TimeDelta(seconds, Subsecond(fraction))

    def __sub__(self, other: "TimeDelta") -> "TimeDelta":
        if not isinstance(other, TimeDelta):
            return NotImplemented
        seconds = self._seconds - other._seconds
        fraction = self._subsecond.value - other._subsecond.value
        if fraction < 0.0:
            if fraction > -2.220446049250313e-16:
                fraction = 0.0
            else:
                seconds -= 1
                fraction += 1.0
                if fraction >= 1.0:
                    seconds += 1
                    fraction = 0.0
        return TimeDelta(seconds, Subsecond(fraction))

    def scale(self, factor: float) -> "TimeDelta":
        """Multiply by ``factor``; lossy beyond float precision."""
        scaled = self._seconds * factor
        whole = math.floor(scaled)
        fraction = (scaled - whole) + self._subsecond.value * factor
        seconds, fraction = _normalize(int(whole), fraction)
        return TimeDelta(seconds, Subsecond(fraction))

    def __mul__(self, factor: float) -> "TimeDelta":
        if isinstance(factor, TimeDelta):
            return NotImplemented
        return self.scale(float(factor))

    __rmul__ = __mul__

    # -- Comparison -------------------------------------------------------- #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return self._seconds == other._seconds and self._subsecond == other._subsecond

    def __lt__(self, other: "TimeDelta") -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        if self._seconds != other._seconds:
            return self._seconds < other._seconds
        return self._subsecond < other._subsecond

    def __hash__(self) -> int:
        return hash((self._seconds, self._subsecond))

    def __repr__(self) -> str:
        return f"TimeDelta(seconds={self._seconds}, subsecond={self._subsecond.value!r})"

    def __str__(self) -> str:
        return f"{self.to_decimal_seconds()} s"
