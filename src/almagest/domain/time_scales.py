# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Astronomical time scales.

UTC is deliberately absent: it is not a continuous scale and lives in
``almagest.domain.utc``.
"""

from enum import Enum


class UnknownTimeScale(ValueError):
    def __init__(self, abbreviation: str) -> None:
        self.abbreviation = abbreviation
        super().__init__(f"unknown time scale: {abbreviation}")


class TimeScale(Enum):
    """Continuous time scales, identified by their abbreviation."""

    TAI = ("TAI", "International Atomic Time")
    TT = ("TT", "Terrestrial Time")
    TCG = ("TCG", "Geocentric Coordinate Time")
    TCB = ("TCB", "Barycentric Coordinate Time")
    TDB = ("TDB", "Barycentric Dynamical Time")
    UT1 = ("UT1", "Universal Time")

    @property
    def abbreviation(self) -> str:
        return self.value[0]

    @property
    def full_name(self) -> str:
        return self.value[1]

    @classmethod
    def from_abbreviation(cls, abbreviation: str) -> "TimeScale":
        """Case-insensitive lookup; raises ``UnknownTimeScale``."""
        try:
            return cls[abbreviation.strip().upper()]
        except KeyError:
            raise UnknownTimeScale(abbreviation) from None

    @classmethod
    def default(cls) -> "TimeScale":
        return cls.TAI

    def __str__(self) -> str:
        return self.abbreviation
