# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""IERS conventions that select the precession-nutation model."""

from enum import Enum


class ReferenceSystem(Enum):
    """IERS conventions.

    IERS1996 is the equinox-based IAU 1976/1980 model. IERS2003 comes in
    the full IAU 2000A and truncated 2000B nutation variants. IERS2010 uses
    IAU 2006 precession with IAU 2000A nutation.
    """

    IERS1996 = "IERS1996"
    IERS2003_A = "IERS2003A"
    IERS2003_B = "IERS2003B"
    IERS2010 = "IERS2010"

    @property
    def is_cio_based(self) -> bool:
        return self is not ReferenceSystem.IERS1996

    @classmethod
    def from_name(cls, name: str) -> "ReferenceSystem":
        key = name.strip().upper().replace("-", "").replace("_", "")
        if key == "IERS2003":
            return cls.IERS2003_A
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"unknown IERS reference system: {name}")

    def __str__(self) -> str:
        return self.value
