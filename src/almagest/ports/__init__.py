# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for time-scale offsets and Earth orientation data.

The domain ships default implementations (``DefaultOffsetProvider``,
``LeapSecondsTable``, ``EopSeries``); adapters load the data files that
back them.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class OffsetProvider(Protocol):
    """Port for offsets between continuous time scales."""

    def offset(self, origin, target, delta):
        """Offset ``target - origin`` at ``delta`` seconds since J2000 in ``origin``."""
        ...


@runtime_checkable
class LeapSecondsProvider(Protocol):
    """Port for TAI-UTC lookups."""

    def delta_tai_utc(self, tai):
        """TAI - UTC at a TAI instant, or None before the table start."""
        ...

    def delta_utc_tai(self, utc, leap_second: bool = False):
        """UTC - TAI at a UTC instant, or None before the table start."""
        ...

    def is_leap_second_date(self, date) -> bool:
        ...

    def is_leap_second(self, tai) -> bool:
        ...


@runtime_checkable
class EopProvider(Protocol):
    """Port for UT1-TAI, polar motion and nutation corrections."""

    def delta_ut1_tai(self, tai):
        ...

    def delta_tai_ut1(self, ut1):
        ...

    def polar_motion(self, tai) -> tuple[float, float]:
        """Pole coordinates (xp, yp) in radians."""
        ...

    def nutation_corrections(self, tai, system) -> tuple[float, float]:
        """Celestial pole offsets in radians for ``system``."""
        ...
