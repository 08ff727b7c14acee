# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Fractions of a second in [0, 1) with femtosecond digit extraction."""

import math
from functools import total_ordering

_FEMTOSECONDS_PER_SECOND: float = 1e15
"""Equality, ordering and hashing work on the value rounded to whole femtoseconds."""


class InvalidSubsecond(ValueError):
    """Raised when a subsecond is not a finite value in [0, 1)."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(
            f"subsecond must be in the range [0.0, 1.0), but was `{value}`"
        )


@total_ordering
class Subsecond:
    """Fraction of a second, 0 <= value < 1."""

    __slots__ = ("_value",)

    def __init__(self, value: float = 0.0) -> None:
        value = float(value)
        if not math.isfinite(value) or not 0.0 <= value < 1.0:
            raise InvalidSubsecond(value)
        self._value = value

    @property
    def value(self) -> float:
        return self._value

    @property
    def milliseconds(self) -> int:
        return math.trunc(self._value * 1e3)

    @property
    def microseconds(self) -> int:
        return math.trunc(self._value * 1e6) % 1000

    @property
    def nanoseconds(self) -> int:
        return math.trunc(self._value * 1e9) % 1000

    @property
    def picoseconds(self) -> int:
        return math.trunc(self._value * 1e12) % 1000

    @property
    def femtoseconds(self) -> int:
        return math.trunc(self._value * 1e15) % 1000

    def __float__(self) -> float:
        return self._value

    def _key(self) -> int:
        return round(self._value * _FEMTOSECONDS_PER_SECOND)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subsecond):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "Subsecond") -> bool:
        if not isinstance(other, Subsecond):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Subsecond({self._value!r})"

    def __str__(self) -> str:
        return f"{self._value:.3f}"

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        return format(self._value, spec)
