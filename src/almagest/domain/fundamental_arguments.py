# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Fundamental arguments of nutation theory.

Luni-solar Delaunay arguments (l, l', F, D, Omega), planetary mean
longitudes and the general accumulated precession in longitude, as
functions of TDB Julian centuries since J2000. Results are in radians,
reduced with the sign of the input kept (range (-2pi, 2pi)).

Three parameter sets are provided:
    IERS 2003 Conventions (used by IAU 2000A/2006 series),
    MHB2000 (luni-solar and planetary variants used by IAU 2000A planetary terms),
    Simon et al. 1994 (linear terms only, used by IAU 2000B).

All fourteen IERS 2003 arguments are public, Mercury through Neptune
included, although only Venus, Earth and p_A enter the CIO and
equation-of-the-equinoxes series here. The MHB2000 set is the argument
basis of the IAU 2000A planetary terms, which are evaluated through ERFA.

References:
    IERS Conventions 2003, Chapter 5, Eqs. 5.43 and 5.44.
    Mathews, Herring & Buffett (2002). J. Geophys. Res. 107(B4).
    Simon, J. L. et al. (1994). A&A 282, 663-683.
"""

import math

_TWO_PI: float = 2.0 * math.pi
_ARCSECONDS_IN_CIRCLE: float = 1296000.0
_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)


def _poly(t: float, coefficients: tuple[float, ...]) -> float:
    result = 0.0
    for c in reversed(coefficients):
        result = result * t + c
    return result


def _arcsec_signed(t: float, coefficients: tuple[float, ...]) -> float:
    return math.fmod(_poly(t, coefficients), _ARCSECONDS_IN_CIRCLE) * _ARCSEC_TO_RAD


def _radians_signed(t: float, coefficients: tuple[float, ...]) -> float:
    return math.fmod(_poly(t, coefficients), _TWO_PI)


# --------------------------------------------------------------------------- #
# IERS 2003
# --------------------------------------------------------------------------- #

_L_IERS03 = (485868.249036, 1717915923.2178, 31.8792, 0.051635, -0.00024470)
_LP_IERS03 = (1287104.793048, 129596581.0481, -0.5532, 0.000136, -0.00001149)
_F_IERS03 = (335779.526232, 1739527262.8478, -12.7512, -0.001037, 0.00000417)
_D_IERS03 = (1072260.703692, 1602961601.2090, -6.3706, 0.006593, -0.00003169)
_OMEGA_IERS03 = (450160.398036, -6962890.5431, 7.4722, 0.007702, -0.00005939)


def l_iers03(t: float) -> float:
    """Mean anomaly of the Moon."""
    return _arcsec_signed(t, _L_IERS03)


def lp_iers03(t: float) -> float:
    """Mean anomaly of the Sun."""
    return _arcsec_signed(t, _LP_IERS03)


def f_iers03(t: float) -> float:
    """Mean longitude of the Moon minus that of the ascending node."""
    return _arcsec_signed(t, _F_IERS03)


def d_iers03(t: float) -> float:
    """Mean elongation of the Moon from the Sun."""
    return _arcsec_signed(t, _D_IERS03)


def omega_iers03(t: float) -> float:
    """Mean longitude of the Moon's ascending node."""
    return _arcsec_signed(t, _OMEGA_IERS03)


def mercury_l_iers03(t: float) -> float:
    return _radians_signed(t, (4.402608842, 2608.7903141574))


def venus_l_iers03(t: float) -> float:
    return _radians_signed(t, (3.176146697, 1021.3285546211))


def earth_l_iers03(t: float) -> float:
    return _radians_signed(t, (1.753470314, 628.3075849991))


def mars_l_iers03(t: float) -> float:
    return _radians_signed(t, (6.203480913, 334.0612426700))


def jupiter_l_iers03(t: float) -> float:
    return _radians_signed(t, (0.599546497, 52.9690962641))


def saturn_l_iers03(t: float) -> float:
    return _radians_signed(t, (0.874016757, 21.3299104960))


def uranus_l_iers03(t: float) -> float:
    return _radians_signed(t, (5.481293872, 7.4781598567))


def neptune_l_iers03(t: float) -> float:
    return _radians_signed(t, (5.311886287, 3.8133035638))


def pa_iers03(t: float) -> float:
    """General accumulated precession in longitude (not reduced)."""
    return _poly(t, (0.0, 0.024381750, 0.00000538691))


def luni_solar_iers03(t: float) -> tuple[float, float, float, float, float]:
    """(l, l', F, D, Omega) in radians."""
    return l_iers03(t), lp_iers03(t), f_iers03(t), d_iers03(t), omega_iers03(t)


def arguments_iers03(t: float) -> tuple[float, ...]:
    """(l, l', F, D, Omega, L_Ve, L_E, p_A), the argument set of the CIO series."""
    return luni_solar_iers03(t) + (venus_l_iers03(t), earth_l_iers03(t), pa_iers03(t))


# --------------------------------------------------------------------------- #
# MHB2000
# --------------------------------------------------------------------------- #


def l_mhb2000(t: float) -> float:
    return _radians_signed(t, (2.35555598, 8328.6914269554))


def lp_mhb2000(t: float) -> float:
    return _arcsec_signed(t, (1287104.79305, 129596581.0481, -0.5532, 0.000136, -0.00001149))


def f_mhb2000(t: float) -> float:
    return _radians_signed(t, (1.627905234, 8433.466158131))


def d_mhb2000_luni_solar(t: float) -> float:
    return _arcsec_signed(t, (1072260.70369, 1602961601.2090, -6.3706, 0.006593, -0.00003169))


def d_mhb2000_planetary(t: float) -> float:
    return _radians_signed(t, (5.198466741, 7771.3771468121))


def omega_mhb2000(t: float) -> float:
    return _radians_signed(t, (2.18243920, -33.757045))


def neptune_l_mhb2000(t: float) -> float:
    return _radians_signed(t, (5.3211590, 3.81277740))


# --------------------------------------------------------------------------- #
# Simon et al. 1994
# --------------------------------------------------------------------------- #


def l_simon1994(t: float) -> float:
    return _arcsec_signed(t, (485868.249036, 1717915923.2178))


def lp_simon1994(t: float) -> float:
    return _arcsec_signed(t, (1287104.79305, 129596581.0481))


def f_simon1994(t: float) -> float:
    return _arcsec_signed(t, (335779.526232, 1739527262.8478))


def d_simon1994(t: float) -> float:
    return _arcsec_signed(t, (1072260.70369, 1602961601.2090))


def omega_simon1994(t: float) -> float:
    return _arcsec_signed(t, (450160.398036, -6962890.5431))


def luni_solar_simon1994(t: float) -> tuple[float, float, float, float, float]:
    return l_simon1994(t), lp_simon1994(t), f_simon1994(t), d_simon1994(t), omega_simon1994(t)
