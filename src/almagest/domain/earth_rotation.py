# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Earth rotation angle, sidereal time and polar motion.

Functions take TT Julian centuries since J2000 (``t_tt``) and UT1 days
since J2000 (``ut1_days``) as plain floats. Angles are radians; sidereal
times are reduced to [0, 2pi).

    ERA      IAU 2000 Earth rotation angle
    GMST     IAU 1982, 2000 and 2006 mean sidereal time
    EE       equation of the equinoxes, IAU 1994 and IAU 2000 (with
             complementary terms)
    GAST     apparent sidereal time = GMST + EE

References:
    IERS Conventions 2010, Chapter 5, Eqs. 5.14, 5.15 and 5.32.
    Capitaine, N., Wallace, P. T. & McCarthy, D. D. (2003). A&A 406, 1135.
    Aoki, S. et al. (1982). A&A 105, 359-361.
"""

import json
import math
from pathlib import Path
from typing import Optional

import numpy as np

from almagest.domain.cio import tio_locator
from almagest.domain.fundamental_arguments import arguments_iers03
from almagest.domain.nutation import (
    nutation,
    nutation_iau1980,
    nutation_iau2000a,
    nutation_iau2000b,
    nutation_iau2006a,
)
from almagest.domain.precession_nutation import (
    bias_precession_matrix,
    ecliptic_corrections,
    mean_obliquity,
    mean_obliquity_iau1980,
    mean_obliquity_iau2006,
    precession_corrections_iau2000,
)
from almagest.domain.reference_systems import ReferenceSystem
from almagest.domain.units import rotation_x, rotation_y, rotation_z

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_TWO_PI: float = 2.0 * math.pi
_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)
_SECONDS_OF_TIME_TO_RAD: float = 15.0 * _ARCSEC_TO_RAD
_SECONDS_PER_DAY: float = 86400.0
_DAYS_PER_CENTURY: float = 36525.0

_ERA_OFFSET: float = 0.7790572732640
_ERA_RATE: float = 0.00273781191135448
"""Excess of the ERA over one revolution per UT1 day, in revolutions."""

_GMST82 = (24110.54841 - 43200.0, 8640184.812866, 0.093104, -6.2e-6)
"""IAU 1982 GMST polynomial in seconds of time, shifted to a 0h UT1 epoch."""

_GMST00 = (0.014506, 4612.15739966, 1.39667721, -0.00009344, 0.00001882)
_GMST06 = (0.014506, 4612.156534, 1.3915817, -0.00000044, -0.000029956, -0.0000000368)


def _poly(t: float, coefficients: tuple[float, ...]) -> float:
    value = 0.0
    for c in reversed(coefficients):
        value = value * t + c
    return value


def _mod_two_pi(angle: float) -> float:
    a = math.fmod(angle, _TWO_PI)
    if a < 0.0:
        a += _TWO_PI
    return a


# --------------------------------------------------------------------------- #
# Earth rotation angle and mean sidereal time
# --------------------------------------------------------------------------- #


def earth_rotation_angle(ut1_days: float) -> float:
    """IAU 2000 Earth rotation angle at UT1 days since J2000."""
    fraction = ut1_days % 1.0
    return _mod_two_pi(_TWO_PI * (fraction + _ERA_OFFSET + _ERA_RATE * ut1_days))


def gmst_iau1982(ut1_days: float) -> float:
    """IAU 1982 Greenwich mean sidereal time."""
    t = ut1_days / _DAYS_PER_CENTURY
    f = (ut1_days % 1.0) * _SECONDS_PER_DAY
    return _mod_two_pi((_poly(t, _GMST82) + f) * _SECONDS_OF_TIME_TO_RAD)


def gmst_iau2000(t_tt: float, ut1_days: float) -> float:
    """IAU 2000 GMST, consistent with IAU 2000 precession."""
    return _mod_two_pi(earth_rotation_angle(ut1_days) + _poly(t_tt, _GMST00) * _ARCSEC_TO_RAD)


def gmst_iau2006(t_tt: float, ut1_days: float) -> float:
    """IAU 2006 GMST, consistent with IAU 2006 precession."""
    return _mod_two_pi(earth_rotation_angle(ut1_days) + _poly(t_tt, _GMST06) * _ARCSEC_TO_RAD)


def greenwich_mean_sidereal_time(system: ReferenceSystem, t_tt: float, ut1_days: float) -> float:
    if system is ReferenceSystem.IERS1996:
        return gmst_iau1982(ut1_days)
    if system is ReferenceSystem.IERS2010:
        return gmst_iau2006(t_tt, ut1_days)
    return gmst_iau2000(t_tt, ut1_days)


# --------------------------------------------------------------------------- #
# Equation of the equinoxes
# --------------------------------------------------------------------------- #

_CACHED_COMPLEMENTARY: Optional[dict] = None


def _load_complementary_terms(path: Optional[str] = None) -> dict:
    """Load the E0 and E1 complementary term tables.

    Returns dict mapping ``e0``/``e1`` to (mults (N, 8), sin (N,), cos (N,)).
    """
    global _CACHED_COMPLEMENTARY

    if path is None and _CACHED_COMPLEMENTARY is not None:
        return _CACHED_COMPLEMENTARY

    if path is None:
        data_path = Path(__file__).parent.parent / "data" / "ee_complementary.json"
    else:
        data_path = Path(path)

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    tables = {}
    for key in ("e0", "e1"):
        terms = data[key]
        tables[key] = (
            np.array([t["nfa"] for t in terms], dtype=float),
            np.array([t["s"] for t in terms]),
            np.array([t["c"] for t in terms]),
        )

    if path is None:
        _CACHED_COMPLEMENTARY = tables
    return tables


def _sum_terms(fa: np.ndarray, table: tuple) -> float:
    mults, sin_amp, cos_amp = table
    a = mults @ fa
    terms = sin_amp * np.sin(a) + cos_amp * np.cos(a)
    total = 0.0
    for term in terms[::-1]:
        total += float(term)
    return total


def complementary_terms_iau2000(t_tt: float) -> float:
    """Complementary terms of the IAU 2000 equation of the equinoxes."""
    tables = _load_complementary_terms()
    fa = np.array(arguments_iers03(t_tt))
    s0 = _sum_terms(fa, tables["e0"])
    s1 = _sum_terms(fa, tables["e1"])
    return (s0 + s1 * t_tt) * _ARCSEC_TO_RAD


def equation_of_the_equinoxes_iau1994(t_tdb: float) -> float:
    """IAU 1994 equation of the equinoxes, with the Omega terms."""
    om = _mod_two_pi(
        _poly(t_tdb, (450160.280, -482890.539, 7.455, 0.008)) * _ARCSEC_TO_RAD
        + ((-5.0 * t_tdb) % 1.0) * _TWO_PI
    )
    dpsi = nutation_iau1980(t_tdb).dpsi
    eps0 = mean_obliquity_iau1980(t_tdb)
    return math.cos(eps0) * dpsi + (0.00264 * math.sin(om) + 0.000063 * math.sin(2.0 * om)) * _ARCSEC_TO_RAD


def equation_of_the_equinoxes_iau2000(t_tt: float, epsa: float, dpsi: float) -> float:
    """Equation of the equinoxes for a given mean obliquity and nutation in longitude."""
    return math.cos(epsa) * dpsi + complementary_terms_iau2000(t_tt)


def equation_of_the_equinoxes_iau2000a(t_tt: float) -> float:
    _, depspr = precession_corrections_iau2000(t_tt)
    epsa = mean_obliquity_iau1980(t_tt) + depspr
    return equation_of_the_equinoxes_iau2000(t_tt, epsa, nutation_iau2000a(t_tt).dpsi)


def equation_of_the_equinoxes_iau2000b(t_tt: float) -> float:
    _, depspr = precession_corrections_iau2000(t_tt)
    epsa = mean_obliquity_iau1980(t_tt) + depspr
    return equation_of_the_equinoxes_iau2000(t_tt, epsa, nutation_iau2000b(t_tt).dpsi)


def equation_of_the_equinoxes_iau2006a(t_tt: float) -> float:
    epsa = mean_obliquity_iau2006(t_tt)
    return equation_of_the_equinoxes_iau2000(t_tt, epsa, nutation_iau2006a(t_tt).dpsi)


# --------------------------------------------------------------------------- #
# Apparent sidereal time
# --------------------------------------------------------------------------- #


def gast_iau1994(ut1_days: float) -> float:
    """GMST82 plus the IAU 1994 equation of the equinoxes, both evaluated at UT1."""
    t = ut1_days / _DAYS_PER_CENTURY
    return _mod_two_pi(gmst_iau1982(ut1_days) + equation_of_the_equinoxes_iau1994(t))


def gast_iau2000a(t_tt: float, ut1_days: float) -> float:
    return _mod_two_pi(gmst_iau2000(t_tt, ut1_days) + equation_of_the_equinoxes_iau2000a(t_tt))


def gast_iau2000b(t_tt: float, ut1_days: float) -> float:
    return _mod_two_pi(gmst_iau2000(t_tt, ut1_days) + equation_of_the_equinoxes_iau2000b(t_tt))


def gast_iau2006a(t_tt: float, ut1_days: float) -> float:
    return _mod_two_pi(gmst_iau2006(t_tt, ut1_days) + equation_of_the_equinoxes_iau2006a(t_tt))


def greenwich_apparent_sidereal_time(
    system: ReferenceSystem,
    t_tt: float,
    ut1_days: float,
    corrections: tuple[float, float] = (0.0, 0.0),
) -> float:
    """GAST of ``system``, optionally including celestial pole offsets.

    With zero ``corrections`` the standard IAU models are used. Otherwise
    the offsets are converted to nutation increments and folded into the
    equation of the equinoxes.
    """
    if corrections[0] == 0.0 and corrections[1] == 0.0:
        if system is ReferenceSystem.IERS1996:
            return gast_iau1994(ut1_days)
        if system is ReferenceSystem.IERS2003_A:
            return gast_iau2000a(t_tt, ut1_days)
        if system is ReferenceSystem.IERS2003_B:
            return gast_iau2000b(t_tt, ut1_days)
        return gast_iau2006a(t_tt, ut1_days)

    gmst = greenwich_mean_sidereal_time(system, t_tt, ut1_days)
    rpb = bias_precession_matrix(system, t_tt)
    epsa = mean_obliquity(system, t_tt)
    nut = nutation(system, t_tt)
    increment = ecliptic_corrections(system, corrections, nut, epsa, rpb)
    nut = nut + increment
    if system is ReferenceSystem.IERS1996:
        ee = equation_of_the_equinoxes_iau1994(t_tt)
        return _mod_two_pi(gmst + ee + math.cos(epsa) * increment.dpsi)
    return _mod_two_pi(gmst + equation_of_the_equinoxes_iau2000(t_tt, epsa, nut.dpsi))


def earth_rotation(
    system: ReferenceSystem,
    t_tt: float,
    ut1_days: float,
    corrections: tuple[float, float] = (0.0, 0.0),
) -> np.ndarray:
    """True-of-date to pseudo-Earth-fixed rotation, R3(GAST)."""
    return rotation_z(greenwich_apparent_sidereal_time(system, t_tt, ut1_days, corrections))


# --------------------------------------------------------------------------- #
# Polar motion
# --------------------------------------------------------------------------- #


def polar_motion_matrix_iau1980(xp: float, yp: float) -> np.ndarray:
    """W = R1(-yp) * R2(-xp)."""
    return rotation_x(-yp) @ rotation_y(-xp)


def polar_motion_matrix_iau2000(xp: float, yp: float, sp: float) -> np.ndarray:
    """W = R1(-yp) * R2(-xp) * R3(s'), with the TIO locator ``sp``."""
    return polar_motion_matrix_iau1980(xp, yp) @ rotation_z(sp)


def polar_motion_matrix(system: ReferenceSystem, t_tt: float, xp: float, yp: float) -> np.ndarray:
    """Pseudo-Earth-fixed (or TIRS) to ITRS rotation; identity for a zero pole."""
    if xp == 0.0 and yp == 0.0:
        return np.eye(3)
    if system is ReferenceSystem.IERS1996:
        return polar_motion_matrix_iau1980(xp, yp)
    return polar_motion_matrix_iau2000(xp, yp, tio_locator(t_tt))
