# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Geometric subset of CCSDS orbit data messages.

``OrbitStateRecord`` and ``KeplerianRecord`` mirror the state vector and
Keplerian element blocks of an OPM/OMM/OEM, as produced by a message
parser: epoch string, TIME_SYSTEM, REF_FRAME and CENTER_NAME metadata,
kilometres and degrees. Wire formats (KVN, XML, JSON) are out of scope.

``record_to_state`` resolves the metadata into a ``StateVector`` in SI
units; ``state_to_record`` goes the other way.

Reference: CCSDS 502.0-B-3 (Orbit Data Messages).
"""
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from almagest.domain.bodies import Origin
from almagest.domain.frames import ReferenceFrame, RotationProvider
from almagest.domain.keplerian import CartesianState, GravitationalParameter, Keplerian
from almagest.domain.time_scales import TimeScale
from almagest.domain.time_systems import Time
from almagest.domain.utc import Utc


class StateRecordError(ValueError):
    """A record cannot be resolved into a state."""


class MissingGravitationalParameter(StateRecordError):
    def __init__(self, center: str) -> None:
        self.center = center
        super().__init__(f"no gravitational parameter given or known for '{center}'")


@dataclass(frozen=True)
class OrbitStateRecord:
    """Cartesian state block with metadata (km, km/s)."""
    epoch: str
    time_system: str
    ref_frame: str
    center_name: str
    position_km: tuple[float, float, float]
    velocity_km_s: tuple[float, float, float]
    gm_km3_s2: Optional[float] = None


@dataclass(frozen=True)
class KeplerianRecord:
    """OPM Keplerian element block (km, degrees).

    Exactly one of ``true_anomaly_deg`` and ``mean_anomaly_deg`` is expected;
    the true anomaly wins if both are set.
    """
    epoch: str
    time_system: str
    ref_frame: str
    center_name: str
    semi_major_axis_km: float
    eccentricity: float
    inclination_deg: float
    ra_of_asc_node_deg: float
    arg_of_pericenter_deg: float
    true_anomaly_deg: Optional[float] = None
    mean_anomaly_deg: Optional[float] = None
    gm_km3_s2: Optional[float] = None


@dataclass(frozen=True, eq=False)
class StateVector:
    """Position (m) and velocity (m/s) of an object at a time, in a frame, about an origin."""
    time: Time
    frame: ReferenceFrame
    origin: Origin
    position: np.ndarray
    velocity: np.ndarray

    def cartesian(self) -> CartesianState:
        return CartesianState(self.position, self.velocity)

    def to_frame(self, target: ReferenceFrame, provider: Optional[RotationProvider] = None) -> "StateVector":
        """Same state expressed in ``target``."""
        provider = provider or RotationProvider()
        rotation = provider.rotation(self.frame, target, self.time)
        pos, vel = rotation.rotate_state(self.position, self.velocity)
        return StateVector(self.time, target, self.origin, pos, vel)

    def to_keplerian(self, mu: Optional[GravitationalParameter] = None) -> Keplerian:
        """Osculating elements; ``mu`` defaults to the origin's GM."""
        if mu is None:
            mu = _origin_mu(self.origin)
        return self.cartesian().to_keplerian(mu)


def _origin_mu(origin: Origin) -> GravitationalParameter:
    if not origin.has_gravitational_parameter():
        raise MissingGravitationalParameter(origin.name)
    return GravitationalParameter.from_km3_per_s2(origin.gravitational_parameter())


def _record_mu(gm_km3_s2: Optional[float], origin: Origin) -> GravitationalParameter:
    if gm_km3_s2 is not None:
        return GravitationalParameter.from_km3_per_s2(gm_km3_s2)
    return _origin_mu(origin)


def resolve_epoch(epoch: str, time_system: str, leap_seconds=None) -> Time:
    """Parse a record epoch. UTC epochs are converted to TAI."""
    if time_system.strip().upper() == "UTC":
        return Utc.from_iso(epoch, leap_seconds).to_tai(leap_seconds)
    return Time.from_iso(epoch, TimeScale.from_abbreviation(time_system.strip()))


def record_to_state(record: OrbitStateRecord, leap_seconds=None) -> StateVector:
    """Resolve a Cartesian record.

    Raises:
        UnknownFrame, UnknownOriginName, UnknownTimeScale or a time parsing
        error when the metadata cannot be resolved.
    """
    time = resolve_epoch(record.epoch, record.time_system, leap_seconds)
    frame = ReferenceFrame.from_name(record.ref_frame)
    origin = Origin.from_name(record.center_name)
    position = np.array(record.position_km, dtype=float) * 1e3
    velocity = np.array(record.velocity_km_s, dtype=float) * 1e3
    return StateVector(time, frame, origin, position, velocity)


def keplerian_record_to_state(record: KeplerianRecord, leap_seconds=None) -> StateVector:
    """Resolve a Keplerian record into a Cartesian state about its centre."""
    time = resolve_epoch(record.epoch, record.time_system, leap_seconds)
    frame = ReferenceFrame.from_name(record.ref_frame)
    origin = Origin.from_name(record.center_name)
    mu = _record_mu(record.gm_km3_s2, origin)

    builder = (
        Keplerian.builder()
        .with_semi_major_axis(record.semi_major_axis_km * 1e3, record.eccentricity)
        .with_inclination(math.radians(record.inclination_deg))
        .with_longitude_of_ascending_node(math.radians(record.ra_of_asc_node_deg))
        .with_argument_of_periapsis(math.radians(record.arg_of_pericenter_deg))
    )
    if record.true_anomaly_deg is not None:
        builder = builder.with_true_anomaly(math.radians(record.true_anomaly_deg))
    elif record.mean_anomaly_deg is not None:
        builder = builder.with_mean_anomaly(math.radians(record.mean_anomaly_deg))

    cartesian = builder.build().to_cartesian(mu)
    return StateVector(time, frame, origin, cartesian.position, cartesian.velocity)


def _format_epoch(state: StateVector, time_system: str, leap_seconds, provider) -> str:
    if time_system.upper() == "UTC":
        tai = state.time.to_scale(TimeScale.TAI, provider)
        utc = Utc.from_tai(tai, leap_seconds)
        return f"{utc.date}T{utc.time.format(6)}"
    time = state.time.to_scale(TimeScale.from_abbreviation(time_system), provider)
    return f"{time.date()}T{time.time().format(6)}"


def state_to_record(
    state: StateVector,
    time_system: Optional[str] = None,
    gm_km3_s2: Optional[float] = None,
    leap_seconds=None,
    provider=None,
) -> OrbitStateRecord:
    """Inverse of ``record_to_state``; ``time_system`` defaults to the state's scale."""
    system = time_system or state.time.scale.abbreviation
    return OrbitStateRecord(
        epoch=_format_epoch(state, system, leap_seconds, provider),
        time_system=system.upper(),
        ref_frame=state.frame.abbreviation,
        center_name=state.origin.name.upper(),
        position_km=tuple(float(x) * 1e-3 for x in state.position),
        velocity_km_s=tuple(float(x) * 1e-3 for x in state.velocity),
        gm_km3_s2=gm_km3_s2,
    )
