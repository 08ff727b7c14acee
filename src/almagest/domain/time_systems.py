# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Time value object: an instant on a continuous astronomical time scale.

A ``Time`` is a scale tag plus a ``TimeDelta`` from the J2000 epoch of that
same scale (2000-01-01T12:00:00). The same physical instant therefore has
different deltas on different scales; ``to_scale`` applies the offsets.

Calendar accessors shift by half a day, since J2000 falls at noon, and
decompose the result into a proleptic Gregorian date and time of day.

References:
    IAU 2000 Resolution B1.9 (TT), B1.5 (TCG/TCB).
    IERS Conventions 2010, Chapter 10.
"""

import re
from typing import Optional

from almagest.domain.calendar_dates import Date
from almagest.domain.deltas import Epoch, TimeDelta, Unit
from almagest.domain.subsecond import Subsecond
from almagest.domain.time_of_day import TimeOfDay
from almagest.domain.time_scales import TimeScale

_ISO_DATETIME = re.compile(
    r"^(?P<date>-?\d{4,}-?\d{2}-?\d{2})T(?P<time>\d{2}:?\d{2}:?\d{2}(?:\.\d+)?)"
    r"(?:\s+(?P<scale>\S+))?$"
)

# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #


class TimeError(ValueError):
    """Base class for errors raised by ``Time``."""


class InvalidIsoDateTime(TimeError):
    def __init__(self, iso: str) -> None:
        self.iso = iso
        super().__init__(f"invalid ISO string `{iso}`")


class ScaleMismatch(TimeError):
    def __init__(self, expected: TimeScale, actual: TimeScale) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"time scale mismatch: expected {expected} but got {actual}")


class LeapSecondOutsideUtc(TimeError):
    def __init__(self) -> None:
        super().__init__(
            "leap seconds do not exist in continuous time scales; use `Utc` instead"
        )


# --------------------------------------------------------------------------- #
# Time
# --------------------------------------------------------------------------- #


class Time:
    """An instant on a continuous time scale, relative to J2000."""

    __slots__ = ("_scale", "_delta")

    def __init__(
        self,
        scale: TimeScale,
        seconds: int = 0,
        subsecond: Subsecond | float = 0.0,
    ) -> None:
        self._scale = scale
        self._delta = TimeDelta(seconds, subsecond)

    # -- Construction ------------------------------------------------------ #

    @classmethod
    def from_delta(cls, scale: TimeScale, delta: TimeDelta) -> "Time":
        return cls(scale, delta.seconds, delta.subsecond)

    @classmethod
    def j2000(cls, scale: TimeScale = TimeScale.TAI) -> "Time":
        return cls(scale, 0)

    @classmethod
    def builder_with_scale(cls, scale: TimeScale) -> "TimeBuilder":
        return TimeBuilder(scale)

    @classmethod
    def from_date_and_time(cls, scale: TimeScale, date: Date, time: TimeOfDay) -> "Time":
        if time.second == 60:
            raise LeapSecondOutsideUtc()
        seconds = date.seconds_since_j2000() + time.second_of_day()
        return cls(scale, seconds, time.subsecond)

    @classmethod
    def from_iso(cls, iso: str, scale: Optional[TimeScale] = None) -> "Time":
        """Parse ``YYYY-MM-DDTHH:MM:SS[.f] [ABBR]``.

        An abbreviation in the string must agree with ``scale`` when both are
        given. Without either, the instant is taken as TAI.
        """
        match = _ISO_DATETIME.match(iso.strip())
        if match is None:
            raise InvalidIsoDateTime(iso)
        if match["scale"] is not None:
            parsed = TimeScale.from_abbreviation(match["scale"])
            if scale is not None and parsed is not scale:
                raise ScaleMismatch(scale, parsed)
            scale = parsed
        if scale is None:
            scale = TimeScale.default()
        date = Date.from_iso(match["date"])
        time = TimeOfDay.from_iso(match["time"])
        return cls.from_date_and_time(scale, date, time)

    @classmethod
    def from_julian_date(
        cls, scale: TimeScale, julian_date: float, epoch: Epoch = Epoch.JULIAN_DATE
    ) -> "Time":
        return cls.from_delta(scale, TimeDelta.from_julian_date(julian_date, epoch))

    @classmethod
    def from_two_part_julian_date(cls, scale: TimeScale, jd1: float, jd2: float) -> "Time":
        return cls.from_delta(scale, TimeDelta.from_two_part_julian_date(jd1, jd2))

    # -- Accessors --------------------------------------------------------- #

    @property
    def scale(self) -> TimeScale:
        return self._scale

    @property
    def seconds(self) -> int:
        return self._delta.seconds

    @property
    def subsecond(self) -> Subsecond:
        return self._delta.subsecond

    def to_delta(self) -> TimeDelta:
        return self._delta

    def date(self) -> Date:
        return Date.from_seconds_since_j2000(self._delta.seconds)

    def time(self) -> TimeOfDay:
        return TimeOfDay.from_seconds_since_j2000(self._delta.seconds).with_subsecond(
            self._delta.subsecond
        )

    @property
    def year(self) -> int:
        return self.date().year

    @property
    def month(self) -> int:
        return self.date().month

    @property
    def day(self) -> int:
        return self.date().day

    @property
    def day_of_year(self) -> int:
        return self.date().day_of_year()

    @property
    def hour(self) -> int:
        return self.time().hour

    @property
    def minute(self) -> int:
        return self.time().minute

    @property
    def second(self) -> int:
        return self.time().second

    @property
    def millisecond(self) -> int:
        return self.subsecond.milliseconds

    @property
    def microsecond(self) -> int:
        return self.subsecond.microseconds

    @property
    def nanosecond(self) -> int:
        return self.subsecond.nanoseconds

    @property
    def picosecond(self) -> int:
        return self.subsecond.picoseconds

    @property
    def femtosecond(self) -> int:
        return self.subsecond.femtoseconds

    @property
    def decimal_seconds(self) -> float:
        return self.time().decimal_seconds

    def julian_date(self, epoch: Epoch = Epoch.JULIAN_DATE, unit: Unit = Unit.DAYS) -> float:
        return self._delta.julian_date(epoch, unit)

    def two_part_julian_date(self) -> tuple[float, float]:
        return self._delta.two_part_julian_date()

    def seconds_since_j2000(self) -> float:
        return self._delta.seconds_since_j2000()

    def days_since_j2000(self) -> float:
        return self._delta.days_since_j2000()

    def centuries_since_j2000(self) -> float:
        return self._delta.centuries_since_j2000()

    # -- Scale handling ---------------------------------------------------- #

    def with_scale(self, scale: TimeScale) -> "Time":
        """Relabel the same delta on another scale without applying offsets."""
        return Time.from_delta(scale, self._delta)

    def to_scale(self, scale: TimeScale, provider=None) -> "Time":
        """Convert to ``scale`` using an ``OffsetProvider``.

        The default provider handles every pair except those involving UT1,
        which need a provider constructed with an EOP series.
        """
        if scale is self._scale:
            return self
        if provider is None:
            from almagest.domain.offsets import default_provider

            provider = default_provider()
        offset = provider.offset(self._scale, scale, self._delta)
        return Time.from_delta(scale, self._delta + offset)

    def to_utc(self, leap_seconds=None, provider=None):
        """Convert to ``Utc``, going through TAI first if needed."""
        from almagest.domain.utc import Utc

        tai = self.to_scale(TimeScale.TAI, provider)
        return Utc.from_tai(tai, leap_seconds)

    def isclose(self, other: "Time", rtol: float = 1e-8, atol: float = 1e-14) -> bool:
        if other.scale is not self._scale:
            raise ScaleMismatch(self._scale, other.scale)
        difference = abs((self._delta - other._delta).to_decimal_seconds())
        return difference <= atol + rtol * abs(other._delta.to_decimal_seconds())

    # -- Arithmetic and comparison ---------------------------------------- #

    def __add__(self, delta: TimeDelta) -> "Time":
        if not isinstance(delta, TimeDelta):
            return NotImplemented
        return Time.from_delta(self._scale, self._delta + delta)

    def __sub__(self, other):
        if isinstance(other, TimeDelta):
            return Time.from_delta(self._scale, self._delta - other)
        if isinstance(other, Time):
            if other.scale is not self._scale:
                raise ScaleMismatch(self._scale, other.scale)
            return self._delta - other._delta
        return NotImplemented

    def _check_comparable(self, other: "Time") -> None:
        if other.scale is not self._scale:
            raise TypeError(
                f"cannot order times on different scales: {self._scale} and {other.scale}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._scale is other._scale and self._delta == other._delta

    def __lt__(self, other: "Time") -> bool:
        self._check_comparable(other)
        return self._delta < other._delta

    def __le__(self, other: "Time") -> bool:
        self._check_comparable(other)
        return self._delta <= other._delta

    def __gt__(self, other: "Time") -> bool:
        self._check_comparable(other)
        return self._delta > other._delta

    def __ge__(self, other: "Time") -> bool:
        self._check_comparable(other)
        return self._delta >= other._delta

    def __hash__(self) -> int:
        return hash((self._scale, self._delta))

    def __repr__(self) -> str:
        return f"Time({self._scale.name}, {self._delta.seconds}, {self._delta.subsecond.value!r})"

    def format(self, precision: int = 3) -> str:
        return f"{self.date()}T{self.time().format(precision)} {self._scale}"

    def __str__(self) -> str:
        return self.format()


class TimeBuilder:
    """Assembles a ``Time`` from calendar fields."""

    def __init__(self, scale: TimeScale) -> None:
        self._scale = scale
        self._date = Date()
        self._time = TimeOfDay()

    def with_ymd(self, year: int, month: int, day: int) -> "TimeBuilder":
        self._date = Date(year, month, day)
        return self

    def with_doy(self, year: int, day_of_year: int) -> "TimeBuilder":
        self._date = Date.from_day_of_year(year, day_of_year)
        return self

    def with_hms(self, hour: int, minute: int, seconds: float) -> "TimeBuilder":
        self._time = TimeOfDay.from_hms(hour, minute, seconds)
        return self

    def build(self) -> Time:
        return Time.from_date_and_time(self._scale, self._date, self._time)
