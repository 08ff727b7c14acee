# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""CIO-based celestial to intermediate transformation (IAU 2006/2000A).

Provides the CIP coordinates X, Y, the CIO locator s, the TIO locator s'
and the GCRS to CIRS matrix built from them. Time arguments are Julian
centuries since J2000 (TDB for X, Y and s; TT for s').

The CIP series (about 2700 terms) is evaluated by ERFA. The CIO locator
series s + XY/2 is read from bundled JSON and summed per order, last term
first.

References:
    IERS Conventions 2010, Chapter 5, Eqs. 5.6, 5.13 and 5.16.
    Capitaine, N. & Wallace, P. T. (2006). A&A 450, 855-872.
"""

import json
import math
from pathlib import Path
from typing import Optional

import erfa
import numpy as np

from almagest.domain.fundamental_arguments import arguments_iers03
from almagest.domain.units import rotation_y, rotation_z

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)
_J2000_JD: float = 2451545.0
_DAYS_PER_CENTURY: float = 36525.0

_TIO_DRIFT: float = -47e-6
"""Secular drift of the TIO locator, arcsec per century."""

# --------------------------------------------------------------------------- #
# Data loading
# --------------------------------------------------------------------------- #

_CACHED_S06: Optional[dict] = None


def _load_s06(path: Optional[str] = None) -> dict:
    """Load the CIO locator series: polynomial plus per-order terms.

    Returns dict with ``polynomial`` (6 coefficients, arcsec) and
    ``orders``, a list of (mults (N, 8), sin (N,), cos (N,)) tuples.
    """
    global _CACHED_S06

    if path is None and _CACHED_S06 is not None:
        return _CACHED_S06

    if path is None:
        data_path = Path(__file__).parent.parent / "data" / "cio_s06.json"
    else:
        data_path = Path(path)

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    orders = []
    for terms in data["orders"]:
        orders.append((
            np.array([t["args"] for t in terms]),
            np.array([t["sin"] for t in terms]),
            np.array([t["cos"] for t in terms]),
        ))
    series = {"polynomial": tuple(data["polynomial"]), "orders": tuple(orders)}

    if path is None:
        _CACHED_S06 = series
    return series


# --------------------------------------------------------------------------- #
# CIP, CIO and TIO
# --------------------------------------------------------------------------- #


def cip_coordinates(t_tdb: float) -> tuple[float, float]:
    """CIP (X, Y) in radians from the IAU 2006/2000A series."""
    x, y = erfa.xy06(_J2000_JD, t_tdb * _DAYS_PER_CENTURY)
    return float(x), float(y)


def cip_from_matrix(bpn: np.ndarray) -> tuple[float, float]:
    """CIP (X, Y) read off a bias-precession-nutation matrix."""
    return float(bpn[2, 0]), float(bpn[2, 1])


def cio_locator(t_tdb: float, x: float, y: float) -> float:
    """CIO locator s in radians, given the CIP coordinates at the same date."""
    series = _load_s06()
    fa = np.array(arguments_iers03(t_tdb))

    coefficients = list(series["polynomial"])
    for order, (mults, sin_amp, cos_amp) in enumerate(series["orders"]):
        phi = mults @ fa
        terms = sin_amp * np.sin(phi) + cos_amp * np.cos(phi)
        acc = coefficients[order]
        for term in terms[::-1]:
            acc += float(term)
        coefficients[order] = acc

    s = 0.0
    for c in reversed(coefficients):
        s = s * t_tdb + c
    return s * _ARCSEC_TO_RAD - x * y / 2.0


def tio_locator(t_tt: float) -> float:
    """TIO locator s' in radians, IAU 2000 secular approximation."""
    return _TIO_DRIFT * t_tt * _ARCSEC_TO_RAD


def celestial_to_intermediate(x: float, y: float, s: float) -> np.ndarray:
    """GCRS to CIRS matrix from the CIP coordinates and the CIO locator.

    Q^T = R3(-(E + s)) * R2(d) * R3(E)
    """
    r2 = x * x + y * y
    e = math.atan2(y, x) if r2 > 0.0 else 0.0
    d = math.atan(math.sqrt(r2 / (1.0 - r2)))
    return rotation_z(-(e + s)) @ rotation_y(d) @ rotation_z(e)
