# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Earth Orientation Parameters (EOP): UT1-TAI, polar motion and nutation corrections.

An ``EopSeries`` holds daily IERS samples and interpolates them linearly in
TAI seconds since J2000. Queries outside the tabulated support still return
a linearly extrapolated value, together with an ``ExtrapolatedDeltaUt1Tai``
marker that the caller may log, raise or ignore.

Samples are typically read from an IERS ``finals`` CSV file through
``almagest.adapters.iers_csv.load_finals_csv``.

References:
    IERS Conventions 2010, Chapter 5.
    IERS Technical Note 36.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from almagest.domain.calendar_dates import Date
from almagest.domain.deltas import SECONDS_BETWEEN_MJD_AND_J2000, SECONDS_PER_DAY, TimeDelta
from almagest.domain.reference_systems import ReferenceSystem

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)

# --------------------------------------------------------------------------- #
# Data structures
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class EopEntry:
    """A single daily EOP sample.

    Angles are in arcseconds. Nutation corrections are optional in the IERS
    files and default to zero.
    """

    mjd: int
    dut1: float  # UT1-UTC, seconds
    xp: float
    yp: float
    dpsi: float = 0.0
    deps: float = 0.0
    dx: float = 0.0
    dy: float = 0.0


class EopError(ValueError):
    """Invalid EOP input."""


class ExtrapolatedDeltaUt1Tai(EopError):
    """Marker for a query outside the tabulated support.

    Carries the extrapolated value so that best-effort callers can proceed.
    """

    def __init__(
        self,
        req_date: Date,
        min_date: Date,
        max_date: Date,
        extrapolated_value,
        quantity: str = "UT1-TAI",
    ) -> None:
        self.req_date = req_date
        self.min_date = min_date
        self.max_date = max_date
        self.extrapolated_value = extrapolated_value
        self.quantity = quantity
        super().__init__(
            f"{quantity} is only available between {min_date} and {max_date}; "
            f"value for {req_date} was extrapolated"
        )


# --------------------------------------------------------------------------- #
# Series
# --------------------------------------------------------------------------- #


def _interpolate(x: np.ndarray, y: np.ndarray, t: float) -> float:
    """Piecewise-linear interpolation, extended linearly past both ends."""
    if len(x) == 1:
        return float(y[0])
    idx = int(np.searchsorted(x, t, side="right")) - 1
    idx = min(max(idx, 0), len(x) - 2)
    x0, x1 = x[idx], x[idx + 1]
    y0, y1 = y[idx], y[idx + 1]
    return float(y0 + (t - x0) * (y1 - y0) / (x1 - x0))


class EopSeries:
    """Tabulated EOP samples with UT1-TAI derived from a leap-second table.

    Parameters
    ----------
    entries : iterable of EopEntry
        Daily samples; they are sorted by MJD. Rows before the start of the
        leap-second table are skipped with a warning.
    leap_seconds : LeapSecondsTable, optional
        Defaults to the bundled table.
    strict : bool
        If True, provider methods raise ``ExtrapolatedDeltaUt1Tai`` instead
        of logging it.
    """

    def __init__(self, entries, leap_seconds=None, strict: bool = False) -> None:
        if leap_seconds is None:
            from almagest.domain.leap_seconds import load_leap_seconds

            leap_seconds = load_leap_seconds()

        kept = []
        tai_seconds = []
        ut1_tai = []
        for entry in sorted(entries, key=lambda e: e.mjd):
            if kept and kept[-1].mjd == entry.mjd:
                raise EopError(f"duplicate EOP sample for MJD {entry.mjd}")
            utc = TimeDelta.from_seconds(entry.mjd * SECONDS_PER_DAY - SECONDS_BETWEEN_MJD_AND_J2000)
            utc_tai = leap_seconds.delta_utc_tai(utc)
            if utc_tai is None:
                logger.warning(
                    "Skipping EOP sample at MJD %d: no leap-second data before %s",
                    entry.mjd,
                    leap_seconds.first_date,
                )
                continue
            kept.append(entry)
            tai_seconds.append((utc - utc_tai).to_decimal_seconds())
            ut1_tai.append(entry.dut1 + utc_tai.to_decimal_seconds())

        if not kept:
            raise EopError("EOP series cannot be empty")

        self._entries = tuple(kept)
        self._strict = strict
        self._t = np.array(tai_seconds)
        self._ut1_tai = np.array(ut1_tai)
        self._xp = np.array([e.xp for e in kept]) * _ARCSEC_TO_RAD
        self._yp = np.array([e.yp for e in kept]) * _ARCSEC_TO_RAD
        self._dpsi = np.array([e.dpsi for e in kept]) * _ARCSEC_TO_RAD
        self._deps = np.array([e.deps for e in kept]) * _ARCSEC_TO_RAD
        self._dx = np.array([e.dx for e in kept]) * _ARCSEC_TO_RAD
        self._dy = np.array([e.dy for e in kept]) * _ARCSEC_TO_RAD
        for arr in (self._t, self._ut1_tai, self._xp, self._yp,
                    self._dpsi, self._deps, self._dx, self._dy):
            arr.flags.writeable = False

    @property
    def entries(self) -> tuple[EopEntry, ...]:
        return self._entries

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def first_date(self) -> Date:
        return Date.from_seconds_since_j2000(int(self._t[0]))

    @property
    def last_date(self) -> Date:
        return Date.from_seconds_since_j2000(int(self._t[-1]))

    def __len__(self) -> int:
        return len(self._entries)

    def _marker(self, seconds: float, value, quantity: str) -> Optional[ExtrapolatedDeltaUt1Tai]:
        if self._t[0] <= seconds <= self._t[-1]:
            return None
        return ExtrapolatedDeltaUt1Tai(
            req_date=Date.from_seconds_since_j2000(math.floor(seconds)),
            min_date=Date.from_seconds_since_j2000(int(self._t[0])),
            max_date=Date.from_seconds_since_j2000(int(self._t[-1])),
            extrapolated_value=value,
            quantity=quantity,
        )

    def _resolve(self, value, marker: Optional[ExtrapolatedDeltaUt1Tai]):
        if marker is not None:
            if self._strict:
                raise marker
            logger.warning("%s", marker)
        return value

    # -- Lookups returning (value, marker) --------------------------------- #

    def lookup_delta_ut1_tai(self, tai: TimeDelta):
        """UT1 - TAI at a TAI instant, with an extrapolation marker or None."""
        seconds = tai.to_decimal_seconds()
        value = TimeDelta.from_decimal_seconds(_interpolate(self._t, self._ut1_tai, seconds))
        return value, self._marker(seconds, value, "UT1-TAI")

    def lookup_delta_tai_ut1(self, ut1: TimeDelta):
        """TAI - UT1 at a UT1 instant, inverting the series by iteration."""
        seconds = ut1.to_decimal_seconds()
        val = _interpolate(self._t, self._ut1_tai, seconds)
        for _ in range(2):
            val = _interpolate(self._t, self._ut1_tai, seconds - val)
        value = -TimeDelta.from_decimal_seconds(val)
        return value, self._marker(seconds, value, "UT1-TAI")

    def lookup_polar_motion(self, tai: TimeDelta):
        """Pole coordinates ``(xp, yp)`` in radians."""
        seconds = tai.to_decimal_seconds()
        value = (
            _interpolate(self._t, self._xp, seconds),
            _interpolate(self._t, self._yp, seconds),
        )
        return value, self._marker(seconds, value, "polar motion")

    def lookup_nutation_corrections(self, tai: TimeDelta, system: ReferenceSystem):
        """Celestial pole offsets in radians.

        ``(dpsi, deps)`` for IERS1996, ``(dX, dY)`` for the CIO-based systems.
        """
        seconds = tai.to_decimal_seconds()
        if system is ReferenceSystem.IERS1996:
            a, b = self._dpsi, self._deps
        else:
            a, b = self._dx, self._dy
        value = (_interpolate(self._t, a, seconds), _interpolate(self._t, b, seconds))
        return value, self._marker(seconds, value, "nutation corrections")

    # -- Provider surface --------------------------------------------------- #

    def delta_ut1_tai(self, tai: TimeDelta) -> TimeDelta:
        return self._resolve(*self.lookup_delta_ut1_tai(tai))

    def delta_tai_ut1(self, ut1: TimeDelta) -> TimeDelta:
        return self._resolve(*self.lookup_delta_tai_ut1(ut1))

    def polar_motion(self, tai: TimeDelta) -> tuple[float, float]:
        return self._resolve(*self.lookup_polar_motion(tai))

    def nutation_corrections(self, tai: TimeDelta, system: ReferenceSystem) -> tuple[float, float]:
        return self._resolve(*self.lookup_nutation_corrections(tai, system))
