# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Almagest

Astrodynamics foundations: femtosecond-resolution time on the TAI, TT, TCG,
TCB, TDB and UT1 scales with UTC and leap seconds, a NAIF-identified
catalog of celestial bodies with IAU rotational elements, IERS 1996/2003/2010
celestial-to-terrestrial rotations, IAU body-fixed frames, and conversion
between Cartesian and Keplerian orbital states.
"""

from almagest.domain.subsecond import Subsecond
from almagest.domain.deltas import (
    Epoch,
    TimeDelta,
    Unit,
)
from almagest.domain.calendar_dates import Date
from almagest.domain.time_of_day import TimeOfDay
from almagest.domain.leap_seconds import (
    LeapSecondsTable,
    load_leap_seconds,
)
from almagest.domain.utc import (
    Utc,
    UtcBuilder,
)
from almagest.domain.time_scales import TimeScale
from almagest.domain.time_systems import (
    Time,
    TimeBuilder,
)
from almagest.domain.offsets import (
    DefaultOffsetProvider,
    MissingEopProvider,
)
from almagest.domain.earth_orientation import (
    EopEntry,
    EopSeries,
    ExtrapolatedDeltaUt1Tai,
)
from almagest.domain.bodies import Origin
from almagest.domain.units import (
    ASTRONOMICAL_UNIT,
    ROTATION_RATE_EARTH,
    SPEED_OF_LIGHT,
    Angle,
    Distance,
    Frequency,
    FrequencyBand,
    Velocity,
)
from almagest.domain.reference_systems import ReferenceSystem
from almagest.domain.rotations import Rotation
from almagest.domain.frames import (
    CIRF,
    ICRF,
    ITRF,
    TEME,
    TIRF,
    ReferenceFrame,
    RotationError,
    RotationProvider,
    UnknownFrame,
)
from almagest.domain.anomalies import OrbitType
from almagest.domain.keplerian import (
    CartesianState,
    GravitationalParameter,
    Keplerian,
    KeplerianBuilder,
)
from almagest.domain.state_records import (
    KeplerianRecord,
    OrbitStateRecord,
    StateVector,
    keplerian_record_to_state,
    record_to_state,
    state_to_record,
)

__version__ = "0.1.0"

__all__ = [
    "Subsecond",
    "Epoch",
    "TimeDelta",
    "Unit",
    "Date",
    "TimeOfDay",
    "LeapSecondsTable",
    "load_leap_seconds",
    "Utc",
    "UtcBuilder",
    "TimeScale",
    "Time",
    "TimeBuilder",
    "DefaultOffsetProvider",
    "MissingEopProvider",
    "EopEntry",
    "EopSeries",
    "ExtrapolatedDeltaUt1Tai",
    "Origin",
    "ASTRONOMICAL_UNIT",
    "ROTATION_RATE_EARTH",
    "SPEED_OF_LIGHT",
    "Angle",
    "Distance",
    "Frequency",
    "FrequencyBand",
    "Velocity",
    "ReferenceSystem",
    "Rotation",
    "CIRF",
    "ICRF",
    "ITRF",
    "TEME",
    "TIRF",
    "ReferenceFrame",
    "RotationError",
    "RotationProvider",
    "UnknownFrame",
    "OrbitType",
    "CartesianState",
    "GravitationalParameter",
    "Keplerian",
    "KeplerianBuilder",
    "KeplerianRecord",
    "OrbitStateRecord",
    "StateVector",
    "keplerian_record_to_state",
    "record_to_state",
    "state_to_record",
]
