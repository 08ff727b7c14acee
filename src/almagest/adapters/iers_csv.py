# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
IERS ``finals`` CSV adapter.

Reads the semicolon-separated ``finals.all.csv`` (IAU 1980) and
``finals2000A.all.csv`` files published by the IERS Rapid Service into an
``EopSeries``. Rows without pole coordinates (the far prediction tail) are
skipped. Pole coordinates and UT1-UTC are read in arcseconds and seconds;
nutation corrections are published in milliarcseconds and converted.

Columns used: ``MJD``, ``x_pole``, ``y_pole``, ``UT1-UTC`` and, when present,
``dPsi``/``dEpsilon`` (1980) or ``dX``/``dY`` (2000A).
"""
import csv
import logging
from pathlib import Path
from typing import Optional

from almagest.domain.earth_orientation import EopEntry, EopSeries

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ("MJD", "x_pole", "y_pole", "UT1-UTC")
_MAS_TO_ARCSEC: float = 1e-3


class FinalsCsvError(ValueError):
    """A finals CSV file is malformed."""


def _field(row: dict, name: str, path: Path, row_number: int) -> Optional[float]:
    raw = row.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise FinalsCsvError(
            f"finals CSV at `{path}` has an invalid {name} value in row {row_number}: {raw!r}"
        ) from None


def _correction(row: dict, name: str, path: Path, row_number: int) -> float:
    value = _field(row, name, path, row_number)
    return 0.0 if value is None else value * _MAS_TO_ARCSEC


def read_finals_csv(path) -> list[EopEntry]:
    """Parse the rows of a finals CSV file into ``EopEntry`` samples.

    Raises:
        FinalsCsvError: Missing columns, unparseable numbers, or a row with
            ``x_pole`` but no ``y_pole`` or ``UT1-UTC``.
    """
    path = Path(path)
    entries = []
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f, delimiter=";")
        missing = [c for c in _REQUIRED_COLUMNS if c not in (reader.fieldnames or ())]
        if missing:
            raise FinalsCsvError(f"finals CSV at `{path}` lacks columns {', '.join(missing)}")

        for row_number, row in enumerate(reader, start=1):
            xp = _field(row, "x_pole", path, row_number)
            if xp is None:
                continue
            yp = _field(row, "y_pole", path, row_number)
            dut1 = _field(row, "UT1-UTC", path, row_number)
            mjd = _field(row, "MJD", path, row_number)
            if yp is None or dut1 is None or mjd is None:
                raise FinalsCsvError(
                    f"finals CSV at `{path}` is missing data from row {row_number}"
                )
            entries.append(EopEntry(
                mjd=int(mjd),
                dut1=dut1,
                xp=xp,
                yp=yp,
                dpsi=_correction(row, "dPsi", path, row_number),
                deps=_correction(row, "dEpsilon", path, row_number),
                dx=_correction(row, "dX", path, row_number),
                dy=_correction(row, "dY", path, row_number),
            ))

    logger.info("Read %d EOP samples from %s", len(entries), path)
    return entries


def load_finals_csv(path, leap_seconds=None, strict: bool = False) -> EopSeries:
    """Load a finals CSV file as an ``EopSeries``."""
    return EopSeries(read_finals_csv(path), leap_seconds=leap_seconds, strict=strict)
