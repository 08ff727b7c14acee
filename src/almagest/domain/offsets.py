# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Offsets between continuous time scales.

Every offset is evaluated at a delta expressed in the origin scale and is
returned as a ``TimeDelta`` to add to that delta.

Direct edges: TAI-TT, TT-TCG, TT-TDB, TDB-TCB and TAI-UT1. All other pairs
are routed through an intermediate scale; the delta is advanced by the
first offset before the second edge is evaluated.

References:
    IAU 2000 Resolutions B1.5 and B1.9.
    IAU 2006 Resolution B3 (TDB).
    Fairhead, L. & Bretagnon, P. (1990). A&A 229, 240-247.
    Kaplan, G. H. (2005). USNO Circular 179, Eq. 2.6.
"""

import math
from typing import Optional

from almagest.domain.deltas import TimeDelta
from almagest.domain.time_scales import TimeScale

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

_TAI_TT: float = 32.184
"""TT - TAI in seconds."""

_J77_TT: float = -725803167.816
"""1977-01-01T00:00:00 TAI expressed as seconds since J2000 TT."""

_LG: float = 6.969290134e-10
_INV_LG: float = _LG / (1.0 - _LG)

_LB: float = 1.550519768e-8
_INV_LB: float = _LB / (1.0 - _LB)

_TDB_0: float = -6.55e-5
"""TDB - TCB at 1977-01-01T00:00:00 TAI, in seconds."""

_TCB_77: float = _TDB_0 + _LB * _J77_TT

# Fairhead & Bretagnon approximation of TDB - TT
_K: float = 1.657e-3
_EB: float = 1.671e-2
_M_0: float = 6.239996
_M_1: float = 1.99096871e-7


class MissingEopProvider(ValueError):
    def __init__(self) -> None:
        super().__init__("a UT1-TAI provider is required but was not provided")


# --------------------------------------------------------------------------- #
# Direct edges (float seconds)
# --------------------------------------------------------------------------- #


def tt_to_tcg(delta: float) -> float:
    return _INV_LG * (delta - _J77_TT)


def tcg_to_tt(delta: float) -> float:
    return -_LG * (delta - _J77_TT)


def tdb_to_tcb(delta: float) -> float:
    return _INV_LB * delta - _TCB_77 / (1.0 - _LB)


def tcb_to_tdb(delta: float) -> float:
    return _TCB_77 - _LB * delta


def tt_to_tdb(delta: float) -> float:
    g = _M_0 + _M_1 * delta
    return _K * math.sin(g + _EB * math.sin(g))


def tdb_to_tt(delta: float) -> float:
    """Inverse of ``tt_to_tdb`` by two fixed-point iterations."""
    offset = 0.0
    for _ in range(2):
        g = _M_0 + _M_1 * (delta + offset)
        offset = -_K * math.sin(g + _EB * math.sin(g))
    return offset


_DIRECT = {
    (TimeScale.TAI, TimeScale.TT): lambda _: _TAI_TT,
    (TimeScale.TT, TimeScale.TAI): lambda _: -_TAI_TT,
    (TimeScale.TT, TimeScale.TCG): tt_to_tcg,
    (TimeScale.TCG, TimeScale.TT): tcg_to_tt,
    (TimeScale.TT, TimeScale.TDB): tt_to_tdb,
    (TimeScale.TDB, TimeScale.TT): tdb_to_tt,
    (TimeScale.TDB, TimeScale.TCB): tdb_to_tcb,
    (TimeScale.TCB, TimeScale.TDB): tcb_to_tdb,
}

# intermediate scale for pairs without a direct edge (symmetric)
_VIA = {
    frozenset((TimeScale.TAI, TimeScale.TDB)): TimeScale.TT,
    frozenset((TimeScale.TDB, TimeScale.TCG)): TimeScale.TT,
    frozenset((TimeScale.TAI, TimeScale.TCG)): TimeScale.TT,
    frozenset((TimeScale.TAI, TimeScale.TCB)): TimeScale.TDB,
    frozenset((TimeScale.TT, TimeScale.TCB)): TimeScale.TDB,
    frozenset((TimeScale.TCB, TimeScale.TCG)): TimeScale.TDB,
}

# --------------------------------------------------------------------------- #
# Provider
# --------------------------------------------------------------------------- #


class DefaultOffsetProvider:
    """Offsets for every pair of ``TimeScale`` values.

    Pairs involving UT1 need ``eop``, an object with ``delta_ut1_tai`` and
    ``delta_tai_ut1`` (see ``almagest.ports.EopProvider``).
    """

    def __init__(self, eop=None) -> None:
        self._eop = eop

    @property
    def eop(self):
        return self._eop

    def offset(self, origin: TimeScale, target: TimeScale, delta: TimeDelta) -> TimeDelta:
        if origin is target:
            return TimeDelta.zero()
        if origin is TimeScale.UT1 or target is TimeScale.UT1:
            return self._ut1_offset(origin, target, delta)
        edge = _DIRECT.get((origin, target))
        if edge is not None:
            return TimeDelta.from_decimal_seconds(edge(delta.to_decimal_seconds()))
        via = _VIA[frozenset((origin, target))]
        return self._two_step(origin, via, target, delta)

    def _two_step(
        self, origin: TimeScale, via: TimeScale, target: TimeScale, delta: TimeDelta
    ) -> TimeDelta:
        offset = self.offset(origin, via, delta)
        return offset + self.offset(via, target, delta + offset)

    def _ut1_offset(self, origin: TimeScale, target: TimeScale, delta: TimeDelta) -> TimeDelta:
        if self._eop is None:
            raise MissingEopProvider()
        if origin is TimeScale.TAI:
            return self._eop.delta_ut1_tai(delta)
        if target is TimeScale.TAI:
            return self._eop.delta_tai_ut1(delta)
        return self._two_step(origin, TimeScale.TAI, target, delta)


_DEFAULT_PROVIDER: Optional[DefaultOffsetProvider] = None


def default_provider() -> DefaultOffsetProvider:
    """Shared provider without EOP data."""
    global _DEFAULT_PROVIDER
    if _DEFAULT_PROVIDER is None:
        _DEFAULT_PROVIDER = DefaultOffsetProvider()
    return _DEFAULT_PROVIDER
