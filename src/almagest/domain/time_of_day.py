# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Time of day with a leap-second slot (second 60)."""

import math
import re
from dataclasses import dataclass, field

from almagest.domain.deltas import SECONDS_PER_DAY, SECONDS_PER_HALF_DAY
from almagest.domain.subsecond import Subsecond

_ISO_TIME = re.compile(
    r"^(?P<hour>\d{2}):?(?P<minute>\d{2}):?(?P<second>\d{2})(?P<subsecond>\.\d+)?$"
)


class TimeOfDayError(ValueError):
    """Base class for time-of-day errors."""


class InvalidTime(TimeOfDayError):
    """An hour, minute or second field is out of range."""

    _RANGES = {
        "hour": "[0..24)",
        "minute": "[0..60)",
        "second": "[0..61)",
        "second_of_day": "[0..86401)",
    }

    def __init__(self, field_name: str, value: int) -> None:
        self.field = field_name
        self.value = value
        super().__init__(
            f"{field_name} must be in the range {self._RANGES[field_name]} but was {value}"
        )


class InvalidSeconds(TimeOfDayError):
    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"seconds must be in the range [0.0..61.0) but was {seconds}")


class NonFiniteSeconds(TimeOfDayError):
    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"seconds must be finite but was {seconds}")


class InvalidIsoTime(TimeOfDayError):
    def __init__(self, iso: str) -> None:
        self.iso = iso
        super().__init__(f"invalid ISO string `{iso}`")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time ``HH:MM:SS`` plus a subsecond."""

    hour: int = 0
    minute: int = 0
    second: int = 0
    subsecond: Subsecond = field(default_factory=Subsecond)

    def __post_init__(self) -> None:
        if not 0 <= self.hour < 24:
            raise InvalidTime("hour", self.hour)
        if not 0 <= self.minute < 60:
            raise InvalidTime("minute", self.minute)
        if not 0 <= self.second < 61:
            raise InvalidTime("second", self.second)

    @classmethod
    def from_hms(cls, hour: int, minute: int, seconds: float) -> "TimeOfDay":
        """Split float ``seconds`` into whole seconds and a subsecond."""
        if not math.isfinite(seconds):
            raise NonFiniteSeconds(seconds)
        if not 0.0 <= seconds < 61.0:
            raise InvalidSeconds(seconds)
        whole = math.trunc(seconds)
        return cls(hour, minute, whole, Subsecond(seconds - whole))

    @classmethod
    def from_second_of_day(cls, second_of_day: int) -> "TimeOfDay":
        """Build from ``0..86400``; 86400 is the leap second ``23:59:60``."""
        if not 0 <= second_of_day <= SECONDS_PER_DAY:
            raise InvalidTime("second_of_day", second_of_day)
        if second_of_day == SECONDS_PER_DAY:
            return cls(23, 59, 60)
        hour, rest = divmod(second_of_day, 3600)
        minute, second = divmod(rest, 60)
        return cls(hour, minute, second)

    @classmethod
    def from_seconds_since_j2000(cls, seconds: int) -> "TimeOfDay":
        return cls.from_second_of_day((seconds + SECONDS_PER_HALF_DAY) % SECONDS_PER_DAY)

    @classmethod
    def from_iso(cls, iso: str) -> "TimeOfDay":
        match = _ISO_TIME.match(iso.strip())
        if match is None:
            raise InvalidIsoTime(iso)
        subsecond = Subsecond(float(match["subsecond"])) if match["subsecond"] else Subsecond()
        return cls(int(match["hour"]), int(match["minute"]), int(match["second"]), subsecond)

    def with_subsecond(self, subsecond: Subsecond) -> "TimeOfDay":
        return TimeOfDay(self.hour, self.minute, self.second, subsecond)

    def second_of_day(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    @property
    def decimal_seconds(self) -> float:
        return self.second + self.subsecond.value

    def format(self, precision: int = 3) -> str:
        fraction = f"{self.subsecond.value:.{precision}f}"
        # never round up into the next second
        if fraction.startswith("1"):
            fraction = "0." + "9" * precision
        digits = fraction[1:] if precision > 0 else ""
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}{digits}"

    def __str__(self) -> str:
        return self.format()
