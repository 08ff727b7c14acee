# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Proleptic Gregorian calendar dates counted in days from J2000.

Day 0 is 2000-01-01. Year 0 and negative years follow the astronomical
convention (1 BC is year 0).

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and
    Applications, 4th ed., Section 3.5.
"""

import re
from dataclasses import dataclass

from almagest.domain.deltas import (
    SECONDS_PER_DAY,
    SECONDS_PER_HALF_DAY,
    Epoch,
    Unit,
)

_ISO_DATE = re.compile(r"^(?P<year>-?\d{4,})-?(?P<month>\d{2})-?(?P<day>\d{2})$")

_PREVIOUS_MONTH_END: tuple[int, ...] = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_PREVIOUS_MONTH_END_LEAP: tuple[int, ...] = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)


class DateError(ValueError):
    """Base class for calendar date errors."""


class InvalidDate(DateError):
    def __init__(self, year: int, month: int, day: int) -> None:
        self.year, self.month, self.day = year, month, day
        super().__init__(f"invalid date `{year}-{month}-{day}`")


class InvalidIsoString(DateError):
    def __init__(self, iso: str) -> None:
        self.iso = iso
        super().__init__(f"invalid ISO string `{iso}`")


class NonLeapYear(DateError):
    def __init__(self) -> None:
        super().__init__("day of year cannot be 366 for a non-leap year")


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 400 == 0 or year % 100 != 0)


def _last_day_of_year(year: int) -> int:
    """Day number (J2000 based) of December 31 of ``year``."""
    return 365 * year + year // 4 - year // 100 + year // 400 - 730120


def _find_year(days: int) -> int:
    year = (400 * days + 292194288) // 146097
    while days <= _last_day_of_year(year - 1):
        year -= 1
    while days > _last_day_of_year(year):
        year += 1
    return year


def _month_and_day(day_of_year: int, leap: bool) -> tuple[int, int]:
    ends = _PREVIOUS_MONTH_END_LEAP if leap else _PREVIOUS_MONTH_END
    month = 1 if day_of_year < 32 else (10 * day_of_year + (313 if leap else 323)) // 306
    return month, day_of_year - ends[month - 1]


@dataclass(frozen=True, order=True)
class Date:
    """Calendar date in the proleptic Gregorian calendar."""

    year: int = 2000
    month: int = 1
    day: int = 1

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidDate(self.year, self.month, self.day)
        ends = _PREVIOUS_MONTH_END_LEAP if is_leap_year(self.year) else _PREVIOUS_MONTH_END
        month_length = (ends[self.month] if self.month < 12 else ends[11] + 31) - ends[self.month - 1]
        if not 1 <= self.day <= month_length:
            raise InvalidDate(self.year, self.month, self.day)

    @classmethod
    def from_iso(cls, iso: str) -> "Date":
        """Parse ``YYYY-MM-DD`` (dashes optional, extended years allowed)."""
        match = _ISO_DATE.match(iso.strip())
        if match is None:
            raise InvalidIsoString(iso)
        return cls(int(match["year"]), int(match["month"]), int(match["day"]))

    @classmethod
    def from_day_of_year(cls, year: int, day_of_year: int) -> "Date":
        leap = is_leap_year(year)
        if day_of_year == 366 and not leap:
            raise NonLeapYear()
        if not 1 <= day_of_year <= 366:
            raise InvalidDate(year, 1, day_of_year)
        month, day = _month_and_day(day_of_year, leap)
        return cls(year, month, day)

    @classmethod
    def from_days_since_j2000(cls, days: int) -> "Date":
        year = _find_year(days)
        day_of_year = days - _last_day_of_year(year - 1)
        month, day = _month_and_day(day_of_year, is_leap_year(year))
        return cls(year, month, day)

    @classmethod
    def from_seconds_since_j2000(cls, seconds: int) -> "Date":
        """Date containing the instant ``seconds`` after J2000 noon."""
        return cls.from_days_since_j2000((seconds + SECONDS_PER_HALF_DAY) // SECONDS_PER_DAY)

    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    def day_of_year(self) -> int:
        ends = _PREVIOUS_MONTH_END_LEAP if self.is_leap_year() else _PREVIOUS_MONTH_END
        return ends[self.month - 1] + self.day

    def days_since_j2000(self) -> int:
        return _last_day_of_year(self.year - 1) + self.day_of_year()

    def seconds_since_j2000(self) -> int:
        """Seconds from J2000 noon to midnight starting this date."""
        return self.days_since_j2000() * SECONDS_PER_DAY - SECONDS_PER_HALF_DAY

    def julian_date(self, epoch: Epoch = Epoch.JULIAN_DATE, unit: Unit = Unit.DAYS) -> float:
        seconds = float(self.seconds_since_j2000() + epoch.seconds_to_j2000)
        return seconds if unit is Unit.SECONDS else seconds / unit.value

    def add_days(self, days: int) -> "Date":
        return Date.from_days_since_j2000(self.days_since_j2000() + days)

    def __str__(self) -> str:
        sign = "-" if self.year < 0 else ""
        return f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"
