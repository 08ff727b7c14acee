# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Mean obliquity, frame bias, precession and the nutation matrix.

Equinox-based building blocks of the ICRF -> MOD -> TOD chain for each
IERS convention:

    IERS1996     IAU 1976 precession, IAU 1980 obliquity and nutation
    IERS2003     IAU 2000 precession (Lieske + corrections), IAU 2000A/B
    IERS2010     IAU 2006 Fukushima-Williams precession, IAU 2006A

Time arguments are TT Julian centuries since J2000. The nutation series
are evaluated at the same numerical value interpreted as TDB, the
difference being below the accuracy of the models. Matrices are passive
3x3 NumPy arrays.

References:
    Lieske, J. H. et al. (1977). A&A 58, 1-16.
    IERS Conventions 2003, Chapter 5.
    IERS Conventions 2010, Chapter 5, Eqs. 5.4, 5.39 and 5.40.
    Fukushima, T. (2003). AJ 126, 494-534.
"""

import math

import numpy as np

from almagest.domain.nutation import Nutation, nutation
from almagest.domain.reference_systems import ReferenceSystem
from almagest.domain.units import rotation_x, rotation_y, rotation_z

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)

_EPS0: float = 84381.448 * _ARCSEC_TO_RAD
"""J2000.0 obliquity (Lieske et al. 1977)."""

# Frame bias, IAU 2000
_D_PSI_BIAS: float = -0.041775 * _ARCSEC_TO_RAD
_D_EPS_BIAS: float = -0.0068192 * _ARCSEC_TO_RAD
_D_RA0: float = -0.0146 * _ARCSEC_TO_RAD

# IAU 2000 precession-rate corrections, arcsec per century
_PRECOR: float = -0.29965 * _ARCSEC_TO_RAD
_OBLCOR: float = -0.02524 * _ARCSEC_TO_RAD


def _poly_arcsec(t: float, coefficients: tuple[float, ...]) -> float:
    value = 0.0
    for c in reversed(coefficients):
        value = value * t + c
    return value * _ARCSEC_TO_RAD


# --------------------------------------------------------------------------- #
# Obliquity
# --------------------------------------------------------------------------- #


def mean_obliquity_iau1980(t_tt: float) -> float:
    """Mean obliquity of the ecliptic, IAU 1980, radians."""
    return _poly_arcsec(t_tt, (84381.448, -46.8150, -0.00059, 0.001813))


def mean_obliquity_iau2006(t_tt: float) -> float:
    """Mean obliquity of the ecliptic, IAU 2006, radians."""
    return _poly_arcsec(
        t_tt,
        (84381.406, -46.836769, -0.0001831, 0.00200340, -0.000000576, -0.0000000434),
    )


def mean_obliquity(system: ReferenceSystem, t_tt: float) -> float:
    """IERS1996 and IERS2003 use the IAU 1980 value, IERS2010 the IAU 2006 one."""
    if system is ReferenceSystem.IERS2010:
        return mean_obliquity_iau2006(t_tt)
    return mean_obliquity_iau1980(t_tt)


# --------------------------------------------------------------------------- #
# Frame bias and precession
# --------------------------------------------------------------------------- #


def frame_bias_matrix() -> np.ndarray:
    """Constant ICRS to mean J2000 frame bias, IAU 2000.

    B = R1(-d_eps) * R2(d_psi * sin(eps0)) * R3(d_ra0)
    """
    return (
        rotation_x(-_D_EPS_BIAS)
        @ rotation_y(math.sin(_EPS0) * _D_PSI_BIAS)
        @ rotation_z(_D_RA0)
    )


def precession_corrections_iau2000(t_tt: float) -> tuple[float, float]:
    """IAU 2000 corrections (dpsi_pr, deps_pr) to the Lieske precession rates."""
    return t_tt * _PRECOR, t_tt * _OBLCOR


def precession_matrix_iau1976(t_tt: float) -> np.ndarray:
    """IAU 1976 precession from J2000 to date, without frame bias."""
    tas2r = t_tt * _ARCSEC_TO_RAD
    w = 2306.2181
    zeta = (w + (0.30188 + 0.017998 * t_tt) * t_tt) * tas2r
    z = (w + (1.09468 + 0.018203 * t_tt) * t_tt) * tas2r
    theta = (2004.3109 + (-0.42665 - 0.041833 * t_tt) * t_tt) * tas2r
    return rotation_z(-z) @ rotation_y(theta) @ rotation_z(-zeta)


def bias_precession_iau1976(t_tt: float) -> np.ndarray:
    return precession_matrix_iau1976(t_tt) @ frame_bias_matrix()


def bias_precession_iau2000(t_tt: float) -> np.ndarray:
    """Lieske precession with the IAU 2000 rate corrections, times frame bias."""
    psia77 = _poly_arcsec(t_tt, (0.0, 5038.7784, -1.07259, -0.001147))
    oma77 = _EPS0 + _poly_arcsec(t_tt, (0.0, 0.0, 0.05127, -0.007726))
    chia = _poly_arcsec(t_tt, (0.0, 10.5526, -2.38064, -0.001125))

    dpsipr, depspr = precession_corrections_iau2000(t_tt)
    psia = psia77 + dpsipr
    oma = oma77 + depspr

    rp = rotation_z(chia) @ rotation_x(-oma) @ rotation_z(-psia) @ rotation_x(_EPS0)
    return rp @ frame_bias_matrix()


def bias_precession_iau2006(t_tt: float) -> np.ndarray:
    """IAU 2006 bias-precession from the Fukushima-Williams angles.

    P = R1(-eps_A) * R3(-psi_bar) * R1(phi_bar) * R3(gamma_bar)
    """
    gamb = _poly_arcsec(
        t_tt, (-0.052928, 10.556378, 0.4932044, -0.00031238, -0.000002788, 0.0000000260)
    )
    phib = _poly_arcsec(
        t_tt, (84381.412819, -46.811016, 0.0511268, 0.00053289, -0.000000440, -0.0000000176)
    )
    psib = _poly_arcsec(
        t_tt, (-0.041775, 5038.481484, 1.5584175, -0.00018522, -0.000026452, -0.0000000148)
    )
    epsa = mean_obliquity_iau2006(t_tt)
    return rotation_x(-epsa) @ rotation_z(-psib) @ rotation_x(phib) @ rotation_z(gamb)


def bias_precession_matrix(system: ReferenceSystem, t_tt: float) -> np.ndarray:
    """ICRF to mean-of-date rotation for ``system``."""
    if system is ReferenceSystem.IERS1996:
        return bias_precession_iau1976(t_tt)
    if system is ReferenceSystem.IERS2010:
        return bias_precession_iau2006(t_tt)
    return bias_precession_iau2000(t_tt)


# --------------------------------------------------------------------------- #
# Nutation matrix with celestial pole offsets
# --------------------------------------------------------------------------- #


def ecliptic_corrections(
    system: ReferenceSystem,
    corrections: tuple[float, float],
    nut: Nutation,
    epsa: float,
    rpb: np.ndarray,
) -> Nutation:
    """Express celestial pole offsets as increments of (dpsi, deps).

    IERS1996 offsets are already (ddpsi, ddeps). For the CIO-based
    conventions they are (dX, dY) and are rotated through the uncorrected
    bias-precession-nutation matrix.
    """
    a, b = corrections
    if system is ReferenceSystem.IERS1996:
        return Nutation(a, b)
    rbpn = nut.nutation_matrix(epsa) @ rpb
    v = rbpn @ np.array([a, b, 0.0])
    return Nutation(float(v[0]) / math.sin(epsa), float(v[1]))


def nutation_matrix(
    system: ReferenceSystem,
    t: float,
    corrections: tuple[float, float] = (0.0, 0.0),
) -> np.ndarray:
    """Mean-of-date to true-of-date rotation, including pole offsets.

    IERS1996 ignores ``corrections`` here; they enter through the
    sidereal time instead.
    """
    epsa = mean_obliquity(system, t)
    nut = nutation(system, t)
    if system is not ReferenceSystem.IERS1996:
        rpb = bias_precession_matrix(system, t)
        nut = nut + ecliptic_corrections(system, corrections, nut, epsa, rpb)
    return nut.nutation_matrix(epsa)
