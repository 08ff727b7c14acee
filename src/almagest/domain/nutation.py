# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Nutation in longitude and obliquity: IAU 1980, 2000A, 2000B and 2006A.

All models take TDB Julian centuries since J2000 and return a ``Nutation``
(dpsi, deps) in radians.

IAU 1980 and 2000B are evaluated from bundled coefficient tables. The terms
are tabulated by descending amplitude and accumulated in reverse, smallest
first. IAU 2000A (1365 terms) is delegated to ERFA; IAU 2006A adjusts it for
the IAU 2006 J2 rate.

References:
    Seidelmann, P. K. (1982). Celest. Mech. 27, 79-106 (IAU 1980 theory).
    McCarthy, D. D. & Luzum, B. J. (2003). Celest. Mech. 85, 37-49 (IAU 2000B).
    Wallace, P. T. & Capitaine, N. (2006). A&A 459, 981-985.
    IERS Conventions 2010, Chapter 5.
"""

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import erfa
import numpy as np

from almagest.domain.fundamental_arguments import luni_solar_simon1994
from almagest.domain.reference_systems import ReferenceSystem
from almagest.domain.units import rotation_x, rotation_z

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_TWO_PI: float = 2.0 * math.pi
_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)
_MAS_TO_RAD: float = _ARCSEC_TO_RAD * 1e-3
_POINT1_MAS_TO_RAD: float = _MAS_TO_RAD * 1e-1
_POINT1_UAS_TO_RAD: float = _ARCSEC_TO_RAD * 1e-7

_J2000_JD: float = 2451545.0
_DAYS_PER_CENTURY: float = 36525.0

_IAU2000B_OFFSET_DPSI: float = -0.135 * _MAS_TO_RAD
"""Fixed planetary offset replacing the IAU 2000A planetary terms in 2000B."""

_IAU2000B_OFFSET_DEPS: float = 0.388 * _MAS_TO_RAD

# Delaunay arguments of the IAU 1980 theory: cubic in T (arcsec) plus whole
# revolutions per century.
_L_1980 = ((485866.733, 715922.633, 31.31, 0.064), 1325.0)
_LP_1980 = ((1287099.804, 1292581.224, -0.577, -0.012), 99.0)
_F_1980 = ((335778.877, 295263.137, -13.257, 0.011), 1342.0)
_D_1980 = ((1072261.307, 1105601.328, -6.891, 0.019), 1236.0)
_OM_1980 = ((450160.280, -482890.539, 7.455, 0.008), -5.0)


# --------------------------------------------------------------------------- #
# Data structures
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Nutation:
    """Nutation in longitude ``dpsi`` and obliquity ``deps``, radians."""

    dpsi: float = 0.0
    deps: float = 0.0

    def __add__(self, other: "Nutation") -> "Nutation":
        return Nutation(self.dpsi + other.dpsi, self.deps + other.deps)

    def nutation_matrix(self, epsa: float) -> np.ndarray:
        """Mean-of-date to true-of-date rotation.

        N = R1(-(epsa + deps)) * R3(-dpsi) * R1(epsa)
        """
        return rotation_x(-(self.deps + epsa)) @ rotation_z(-self.dpsi) @ rotation_x(epsa)


# --------------------------------------------------------------------------- #
# Coefficient tables (cached NumPy arrays)
# --------------------------------------------------------------------------- #

_SERIES_CACHE: dict[str, Optional[dict]] = {"iau1980": None, "iau2000b": None}

_SERIES_FILES = {
    "iau1980": "iau1980_nutation.json",
    "iau2000b": "iau2000b_nutation.json",
}


def _load_series(model: str, path: Optional[str] = None) -> dict:
    """Load a luni-solar series into arrays in tabulated (descending) order.

    Returns dict with keys ``mults`` (N, 5) and the amplitude columns
    ``sin_psi``, ``sin_psi_t``, ``cos_psi``, ``cos_eps``, ``cos_eps_t``,
    ``sin_eps``; columns absent from the table are zero.
    """
    if path is None and _SERIES_CACHE[model] is not None:
        return _SERIES_CACHE[model]

    if path is None:
        data_path = Path(__file__).parent.parent / "data" / _SERIES_FILES[model]
    else:
        data_path = Path(path)

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    terms = data["terms"]
    mults = np.array([[t["l"], t["lp"], t["f"], t["d"], t["om"]] for t in terms])
    series = {"mults": mults}
    for key in ("sin_psi", "sin_psi_t", "cos_psi", "cos_eps", "cos_eps_t", "sin_eps"):
        series[key] = np.array([t.get(key, 0.0) for t in terms])
    for arr in series.values():
        arr.flags.writeable = False

    if path is None:
        _SERIES_CACHE[model] = series
    return series


def _sum_ascending(values: np.ndarray) -> float:
    """Sequential sum from the last (smallest) term to the first."""
    total = 0.0
    for value in values[::-1]:
        total += float(value)
    return total


def _luni_solar(t: float, args: np.ndarray, series: dict, reduce: bool) -> tuple[float, float]:
    phi = series["mults"] @ args
    if reduce:
        phi = np.fmod(phi, _TWO_PI)
    sin_phi = np.sin(phi)
    cos_phi = np.cos(phi)
    dpsi = (series["sin_psi"] + series["sin_psi_t"] * t) * sin_phi + series["cos_psi"] * cos_phi
    deps = (series["cos_eps"] + series["cos_eps_t"] * t) * cos_phi + series["sin_eps"] * sin_phi
    return _sum_ascending(dpsi), _sum_ascending(deps)


# --------------------------------------------------------------------------- #
# IAU 1980
# --------------------------------------------------------------------------- #


def _argument_1980(t: float, coefficients: tuple) -> float:
    poly, revolutions = coefficients
    value = 0.0
    for c in reversed(poly):
        value = value * t + c
    x = value * _ARCSEC_TO_RAD + math.fmod(revolutions * t, 1.0) * _TWO_PI
    return x - _TWO_PI * math.floor((x + math.pi) / _TWO_PI)


def delaunay_arguments_iau1980(t: float) -> tuple[float, float, float, float, float]:
    """(l, l', F, D, Omega) of the IAU 1980 theory, radians in [-pi, pi)."""
    return (
        _argument_1980(t, _L_1980),
        _argument_1980(t, _LP_1980),
        _argument_1980(t, _F_1980),
        _argument_1980(t, _D_1980),
        _argument_1980(t, _OM_1980),
    )


def nutation_iau1980(t: float) -> Nutation:
    """IAU 1980 nutation, 106 terms."""
    args = np.array(delaunay_arguments_iau1980(t))
    dpsi, deps = _luni_solar(t, args, _load_series("iau1980"), reduce=False)
    return Nutation(dpsi * _POINT1_MAS_TO_RAD, deps * _POINT1_MAS_TO_RAD)


# --------------------------------------------------------------------------- #
# IAU 2000A/B and 2006A
# --------------------------------------------------------------------------- #


def nutation_iau2000a(t: float) -> Nutation:
    """IAU 2000A nutation (MHB2000 luni-solar and planetary terms)."""
    dpsi, deps = erfa.nut00a(_J2000_JD, t * _DAYS_PER_CENTURY)
    return Nutation(float(dpsi), float(deps))


def nutation_iau2000b(t: float) -> Nutation:
    """IAU 2000B nutation: 77 luni-solar terms plus fixed planetary offsets."""
    args = np.array(luni_solar_simon1994(t))
    dpsi, deps = _luni_solar(t, args, _load_series("iau2000b"), reduce=True)
    return Nutation(
        dpsi * _POINT1_UAS_TO_RAD + _IAU2000B_OFFSET_DPSI,
        deps * _POINT1_UAS_TO_RAD + _IAU2000B_OFFSET_DEPS,
    )


def nutation_iau2006a(t: float) -> Nutation:
    """IAU 2000A nutation adjusted to the IAU 2006 precession."""
    nut = nutation_iau2000a(t)
    j2 = -2.7774e-6 * t
    return Nutation(
        nut.dpsi + (0.4697e-6 + j2) * nut.dpsi,
        nut.deps + j2 * nut.deps,
    )


def nutation(system: ReferenceSystem, t: float) -> Nutation:
    """Nutation model of ``system`` at TDB centuries ``t``."""
    if system is ReferenceSystem.IERS1996:
        return nutation_iau1980(t)
    if system is ReferenceSystem.IERS2003_A:
        return nutation_iau2000a(t)
    if system is ReferenceSystem.IERS2003_B:
        return nutation_iau2000b(t)
    return nutation_iau2006a(t)
