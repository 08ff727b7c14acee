# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Coordinated Universal Time as a calendar representation.

UTC is not a continuous scale. A ``Utc`` is a validated date and time of day
that may carry second 60 on days ending with an inserted leap second. Every
computation goes through TAI using a leap-second table.

Dates before 1960 raise ``UtcUndefined``. Conversions to TAI are only
available from 1972-01-01 onward, where TAI-UTC is a whole number of seconds.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from almagest.domain.calendar_dates import Date
from almagest.domain.deltas import TimeDelta
from almagest.domain.time_of_day import InvalidSeconds, TimeOfDay
from almagest.domain.time_scales import TimeScale
from almagest.domain.time_systems import Time

_UTC_SUFFIX = re.compile(r"(?:Z|\s+UTC)$")

_FIRST_UTC_YEAR: int = 1960


class UtcError(ValueError):
    """Base class for UTC errors."""


class UtcUndefined(UtcError):
    def __init__(self, message: str = "UTC is not defined for dates before 1960-01-01") -> None:
        super().__init__(message)


class NonLeapSecondDate(UtcError, InvalidSeconds):
    """Second 60 on a date without an inserted leap second."""

    def __init__(self, date: Date) -> None:
        self.date = date
        self.seconds = 60
        ValueError.__init__(self, f"invalid seconds: no leap second on {date}")


class InvalidUtcIso(UtcError):
    def __init__(self, iso: str) -> None:
        self.iso = iso
        super().__init__(f"invalid ISO string `{iso}`")


def _table(leap_seconds):
    if leap_seconds is not None:
        return leap_seconds
    from almagest.domain.leap_seconds import load_leap_seconds

    return load_leap_seconds()


@dataclass(frozen=True, order=True)
class Utc:
    """A UTC calendar instant, validated against a leap-second table."""

    date: Date = field(default_factory=Date)
    time: TimeOfDay = field(default_factory=TimeOfDay)

    def __post_init__(self) -> None:
        if self.date.year < _FIRST_UTC_YEAR:
            raise UtcUndefined()

    @classmethod
    def new(cls, date: Date, time: TimeOfDay, leap_seconds=None) -> "Utc":
        """Validating constructor: second 60 must fall on a leap-second date."""
        if time.second == 60 and not _table(leap_seconds).is_leap_second_date(date):
            raise NonLeapSecondDate(date)
        return cls(date, time)

    @classmethod
    def builder(cls) -> "UtcBuilder":
        return UtcBuilder()

    @classmethod
    def from_iso(cls, iso: str, leap_seconds=None) -> "Utc":
        """Parse ``YYYY-MM-DDTHH:MM:SS[.f]`` with an optional ``Z`` or `` UTC``."""
        text = _UTC_SUFFIX.sub("", iso.strip())
        date_part, sep, time_part = text.partition("T")
        if not sep:
            raise InvalidUtcIso(iso)
        return cls.new(Date.from_iso(date_part), TimeOfDay.from_iso(time_part), leap_seconds)

    @classmethod
    def from_delta(cls, delta: TimeDelta) -> "Utc":
        """Inverse of ``to_delta`` for instants outside a leap second."""
        date = Date.from_seconds_since_j2000(delta.seconds)
        time = TimeOfDay.from_seconds_since_j2000(delta.seconds).with_subsecond(delta.subsecond)
        return cls(date, time)

    @classmethod
    def from_tai(cls, tai: Time, leap_seconds=None) -> "Utc":
        table = _table(leap_seconds)
        delta = tai.to_delta()
        offset = table.delta_tai_utc(delta)
        if offset is None:
            raise UtcUndefined(
                f"no leap-second data for TAI instants before {table.first_date}"
            )
        utc = cls.from_delta(delta - offset)
        if table.is_leap_second(delta):
            # the shifted delta lands on 23:59:59 of the leap-second date
            time = TimeOfDay(23, 59, 60, utc.time.subsecond)
            return cls(utc.date, time)
        return utc

    # -- Accessors --------------------------------------------------------- #

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def minute(self) -> int:
        return self.time.minute

    @property
    def second(self) -> int:
        return self.time.second

    @property
    def decimal_seconds(self) -> float:
        return self.time.decimal_seconds

    def to_delta(self) -> TimeDelta:
        """Seconds since J2000 counting every UTC day as 86400 s.

        Second 60 maps onto midnight of the following day.
        """
        seconds = self.date.seconds_since_j2000() + self.time.second_of_day()
        return TimeDelta(seconds, self.time.subsecond)

    def to_tai(self, leap_seconds=None) -> Time:
        table = _table(leap_seconds)
        leap_second = self.time.second == 60
        if leap_second and not table.is_leap_second_date(self.date):
            raise NonLeapSecondDate(self.date)
        delta = self.to_delta()
        offset = table.delta_utc_tai(delta, leap_second=leap_second)
        if offset is None:
            raise UtcUndefined(f"no leap-second data for UTC dates before {table.first_date}")
        return Time.from_delta(TimeScale.TAI, delta - offset)

    def to_scale(self, scale: TimeScale, leap_seconds=None, provider=None) -> Time:
        return self.to_tai(leap_seconds).to_scale(scale, provider)

    def __str__(self) -> str:
        return f"{self.date}T{self.time} UTC"


class UtcBuilder:
    def __init__(self) -> None:
        self._date = Date()
        self._time = TimeOfDay()

    def with_ymd(self, year: int, month: int, day: int) -> "UtcBuilder":
        self._date = Date(year, month, day)
        return self

    def with_hms(self, hour: int, minute: int, seconds: float) -> "UtcBuilder":
        self._time = TimeOfDay.from_hms(hour, minute, seconds)
        return self

    def build(self, leap_seconds=None) -> Utc:
        return Utc.new(self._date, self._time, leap_seconds)
