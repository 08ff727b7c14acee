# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Leap-second table mapping between UTC and TAI.

Each entry is the UTC date on which a cumulative TAI-UTC value takes
effect. Only whole-second steps on day boundaries are modelled, so the
table starts on 1972-01-01 with TAI-UTC = 10 s.

Instants are passed as ``TimeDelta`` seconds since J2000 on the respective
scale so that the table stays independent of the ``Utc`` and ``Time`` types.

References:
    IERS Bulletin C (leap second announcements).
    IERS Conventions 2010, Chapter 5.
"""

import bisect
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from almagest.domain.calendar_dates import Date
from almagest.domain.deltas import TimeDelta

# --------------------------------------------------------------------------- #
# Data structures
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class LeapSecondEntry:
    """TAI-UTC in whole seconds, valid from 00:00 UTC of ``date``."""

    date: Date
    tai_utc: int


class LeapSecondsTable:
    """Immutable, sorted leap-second table."""

    def __init__(self, entries) -> None:
        entries = tuple(sorted(entries, key=lambda e: e.date))
        if not entries:
            raise ValueError("a leap-second table needs at least one entry")
        self._entries = entries
        self._epochs_utc = tuple(e.date.seconds_since_j2000() for e in entries)
        # The step into each later entry starts at the inserted leap second.
        self._epochs_tai = tuple(
            epoch + entry.tai_utc - (0 if i == 0 else 1)
            for i, (epoch, entry) in enumerate(zip(self._epochs_utc, entries))
        )
        self._leap_second_dates = frozenset(e.date.add_days(-1) for e in entries[1:])
        self._leap_second_epochs = frozenset(self._epochs_tai[1:])

    @property
    def entries(self) -> tuple[LeapSecondEntry, ...]:
        return self._entries

    @property
    def first_date(self) -> Date:
        return self._entries[0].date

    def delta_tai_utc(self, tai: TimeDelta) -> Optional[TimeDelta]:
        """TAI - UTC at a TAI instant, or None before the table starts."""
        idx = bisect.bisect_right(self._epochs_tai, tai.seconds) - 1
        if idx < 0:
            return None
        return TimeDelta.from_seconds(self._entries[idx].tai_utc)

    def delta_utc_tai(self, utc: TimeDelta, leap_second: bool = False) -> Optional[TimeDelta]:
        """UTC - TAI at a UTC instant given as its seconds-of-day count since J2000.

        ``leap_second`` marks an instant inside ``23:59:60``, whose count
        coincides with midnight of the next day.
        """
        idx = bisect.bisect_right(self._epochs_utc, utc.seconds) - 1
        if idx < 0:
            return None
        seconds = self._entries[idx].tai_utc
        if leap_second:
            seconds -= 1
        return -TimeDelta.from_seconds(seconds)

    def is_leap_second_date(self, date: Date) -> bool:
        """True if ``date`` ends with an inserted leap second."""
        return date in self._leap_second_dates

    def is_leap_second(self, tai: TimeDelta) -> bool:
        """True if the TAI instant falls inside an inserted leap second."""
        return tai.seconds in self._leap_second_epochs

    def __len__(self) -> int:
        return len(self._entries)


# --------------------------------------------------------------------------- #
# Loading
# --------------------------------------------------------------------------- #

_CACHED_TABLE: Optional[LeapSecondsTable] = None


def load_leap_seconds(path: Optional[str] = None) -> LeapSecondsTable:
    """Load the leap-second table from bundled JSON or a custom path.

    Parameters
    ----------
    path : str, optional
        JSON file with ``{"entries": [{"date": "YYYY-MM-DD", "tai_utc": n}]}``.
        If None, the bundled table is used and cached.
    """
    global _CACHED_TABLE

    if path is None and _CACHED_TABLE is not None:
        return _CACHED_TABLE

    if path is None:
        data_path = Path(__file__).parent.parent / "data" / "leap_seconds.json"
    else:
        data_path = Path(path)

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    table = LeapSecondsTable(
        LeapSecondEntry(date=Date.from_iso(e["date"]), tai_utc=int(e["tai_utc"]))
        for e in data["entries"]
    )

    if path is None:
        _CACHED_TABLE = table

    return table
