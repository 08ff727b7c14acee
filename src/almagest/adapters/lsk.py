# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
NAIF leap-seconds kernel (LSK) adapter.

Only the ``DELTET/DELTA_AT`` assignment inside ``\\begindata`` blocks is
read: alternating TAI-UTC counts and ``@YYYY-MON-D`` dates, e.g.::

    \\begindata
    DELTET/DELTA_AT        = ( 10,   @1972-JAN-1
                               11,   @1972-JUL-1 )
    \\begintext
"""
import logging
import re
from pathlib import Path

from almagest.domain.calendar_dates import Date
from almagest.domain.leap_seconds import LeapSecondEntry, LeapSecondsTable

logger = logging.getLogger(__name__)

LEAP_SECONDS_KERNEL_KEY = "DELTET/DELTA_AT"

_DATA_BLOCK = re.compile(r"\\begindata(.*?)(?:\\begintext|\Z)", re.DOTALL)
_ASSIGNMENT = re.compile(re.escape(LEAP_SECONDS_KERNEL_KEY) + r"\s*=\s*\((.*?)\)", re.DOTALL)
_PAIR = re.compile(r"([+-]?\d+)\s*,?\s*@(\d{4})-([A-Za-z]{3})-(\d{1,2})")

_MONTHS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}


class LeapSecondsKernelError(ValueError):
    """A kernel has no usable leap-second data."""


def parse_lsk(text: str) -> LeapSecondsTable:
    """Build a leap-second table from the text of an LSK.

    Raises:
        LeapSecondsKernelError: No ``DELTET/DELTA_AT`` entry, or an entry
            with an unknown month.
    """
    data = "\n".join(_DATA_BLOCK.findall(text))
    match = _ASSIGNMENT.search(data)
    if match is None:
        raise LeapSecondsKernelError(
            f"no leap seconds found in kernel under key `{LEAP_SECONDS_KERNEL_KEY}`"
        )

    entries: dict[Date, LeapSecondEntry] = {}
    for count, year, month, day in _PAIR.findall(match.group(1)):
        month_number = _MONTHS.get(month.upper())
        if month_number is None:
            raise LeapSecondsKernelError(f"unknown month `{month}` in leap-seconds kernel")
        date = Date(int(year), month_number, int(day))
        if date in entries:
            logger.warning("Ignoring duplicate leap-second entry for %s", date)
            continue
        entries[date] = LeapSecondEntry(date=date, tai_utc=int(count))

    if not entries:
        raise LeapSecondsKernelError(
            f"no leap seconds found in kernel under key `{LEAP_SECONDS_KERNEL_KEY}`"
        )
    return LeapSecondsTable(entries.values())


def load_lsk(path) -> LeapSecondsTable:
    """Read and parse the LSK at ``path``."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        table = parse_lsk(f.read())
    logger.info("Loaded %d leap-second entries from %s", len(table), path)
    return table
