# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for resolving orbit data records into SI state vectors and back."""

import math

import numpy as np
import pytest

POSITION_KM = (-1076.22532467967, -6765.89636432773, -332.308783350379)
VELOCITY_KM_S = (9.35685775154103, -3.31234775037644, -1.18801577532701)


def _record(**overrides):
    from almagest.domain.state_records import OrbitStateRecord
    fields = dict(
        epoch="2024-07-05T09:09:18.173",
        time_system="TT",
        ref_frame="ICRF",
        center_name="EARTH",
        position_km=POSITION_KM,
        velocity_km_s=VELOCITY_KM_S,
    )
    fields.update(overrides)
    return OrbitStateRecord(**fields)


def _keplerian_record(**overrides):
    from almagest.domain.state_records import KeplerianRecord
    fields = dict(
        epoch="2024-07-05T09:09:18.173",
        time_system="TDB",
        ref_frame="ICRF",
        center_name="Earth",
        semi_major_axis_km=24464.560,
        eccentricity=0.7311,
        inclination_deg=math.degrees(0.122138),
        ra_of_asc_node_deg=math.degrees(1.00681),
        arg_of_pericenter_deg=math.degrees(3.10686),
        true_anomaly_deg=math.degrees(0.44369564302687126),
    )
    fields.update(overrides)
    return KeplerianRecord(**fields)


class TestRecordToState:
    """Metadata resolution and unit conversion."""

    def test_resolves_metadata(self):
        from almagest.domain.frames import ReferenceFrame
        from almagest.domain.bodies import Origin
        from almagest.domain.state_records import record_to_state
        from almagest.domain.time_scales import TimeScale
        state = record_to_state(_record())
        assert state.time.scale is TimeScale.TT
        assert (state.time.hour, state.time.minute, state.time.second) == (9, 9, 18)
        assert state.frame == ReferenceFrame.from_name("ICRF")
        assert state.origin == Origin.from_name("Earth")
        np.testing.assert_allclose(state.position, np.array(POSITION_KM) * 1e3)
        np.testing.assert_allclose(state.velocity, np.array(VELOCITY_KM_S) * 1e3)

    def test_utc_epoch_becomes_tai(self):
        from almagest.domain.state_records import record_to_state
        from almagest.domain.time_scales import TimeScale
        state = record_to_state(_record(time_system="UTC"))
        assert state.time.scale is TimeScale.TAI
        # TAI - UTC = 37 s since 2017
        assert (state.time.hour, state.time.minute, state.time.second) == (9, 9, 55)

    def test_time_system_is_case_insensitive(self):
        from almagest.domain.state_records import record_to_state
        from almagest.domain.time_scales import TimeScale
        assert record_to_state(_record(time_system=" tdb ")).time.scale is TimeScale.TDB

    @pytest.mark.parametrize("field,value,error", [
        ("ref_frame", "EME1950", "UnknownFrame"),
        ("center_name", "Vulcan", "UnknownOriginName"),
        ("time_system", "GPS", "UnknownTimeScale"),
    ])
    def test_unresolvable_metadata(self, field, value, error):
        from almagest.domain import bodies, frames, time_scales
        from almagest.domain.state_records import record_to_state
        errors = {
            "UnknownFrame": frames.UnknownFrame,
            "UnknownOriginName": bodies.UnknownOriginName,
            "UnknownTimeScale": time_scales.UnknownTimeScale,
        }
        with pytest.raises(errors[error]):
            record_to_state(_record(**{field: value}))


class TestKeplerianRecord:

    def test_matches_cartesian_record(self):
        from almagest.domain.state_records import keplerian_record_to_state
        state = keplerian_record_to_state(_keplerian_record())
        np.testing.assert_allclose(state.position, np.array(POSITION_KM) * 1e3, rtol=1e-8)
        np.testing.assert_allclose(state.velocity, np.array(VELOCITY_KM_S) * 1e3, rtol=1e-6)

    def test_explicit_gm_overrides_catalog(self):
        from almagest.domain.state_records import keplerian_record_to_state
        default = keplerian_record_to_state(_keplerian_record())
        scaled = keplerian_record_to_state(_keplerian_record(gm_km3_s2=4.0 * 398600.43550702266))
        np.testing.assert_allclose(scaled.velocity, 2.0 * default.velocity, rtol=1e-12)
        np.testing.assert_allclose(scaled.position, default.position, rtol=1e-12)

    def test_mean_anomaly(self):
        from almagest.domain.anomalies import mean_to_true
        from almagest.domain.state_records import keplerian_record_to_state
        record = _keplerian_record(true_anomaly_deg=None, mean_anomaly_deg=10.0)
        state = keplerian_record_to_state(record)
        nu = state.to_keplerian().true_anomaly
        assert nu == pytest.approx(mean_to_true(math.radians(10.0), 0.7311), abs=1e-9)

    def test_missing_gravitational_parameter(self):
        from almagest.domain.state_records import MissingGravitationalParameter, keplerian_record_to_state
        with pytest.raises(MissingGravitationalParameter, match="Phobos"):
            keplerian_record_to_state(_keplerian_record(center_name="Phobos"))

    def test_invalid_elements_propagate(self):
        from almagest.domain.keplerian import InvalidShape
        from almagest.domain.state_records import keplerian_record_to_state
        with pytest.raises(InvalidShape):
            keplerian_record_to_state(_keplerian_record(eccentricity=1.5))


class TestStateVector:
    """Frame changes and element extraction."""

    def test_to_keplerian_uses_origin_gm(self):
        from almagest.domain.state_records import record_to_state
        k = record_to_state(_record()).to_keplerian()
        assert k.semi_major_axis == pytest.approx(24464560.0, rel=1e-8)
        assert k.eccentricity == pytest.approx(0.7311, rel=1e-8)

    def test_same_frame_is_unchanged(self):
        from almagest.domain.frames import ReferenceFrame
        from almagest.domain.state_records import record_to_state
        state = record_to_state(_record())
        moved = state.to_frame(ReferenceFrame.from_name("ICRF"))
        np.testing.assert_array_equal(moved.position, state.position)
        np.testing.assert_array_equal(moved.velocity, state.velocity)

    def test_body_fixed_round_trip(self):
        from almagest.domain.frames import ReferenceFrame
        from almagest.domain.state_records import record_to_state
        state = record_to_state(_record(time_system="TDB"))
        fixed = state.to_frame(ReferenceFrame.from_name("IAU_EARTH"))
        assert fixed.frame.abbreviation == "IAU_EARTH"
        assert np.linalg.norm(fixed.position) == pytest.approx(np.linalg.norm(state.position))
        back = fixed.to_frame(ReferenceFrame.from_name("ICRF"))
        np.testing.assert_allclose(back.position, state.position, atol=1e-6)
        np.testing.assert_allclose(back.velocity, state.velocity, atol=1e-9)


class TestStateToRecord:

    def test_round_trip_in_state_scale(self):
        from almagest.domain.state_records import record_to_state, state_to_record
        state = record_to_state(_record())
        record = state_to_record(state)
        assert record.epoch == "2024-07-05T09:09:18.173000"
        assert record.time_system == "TT"
        assert record.ref_frame == "ICRF"
        assert record.center_name == "EARTH"
        np.testing.assert_allclose(record.position_km, POSITION_KM, rtol=1e-15)
        assert record_to_state(record).time.isclose(state.time)

    def test_utc_output(self):
        from almagest.domain.state_records import record_to_state, state_to_record
        state = record_to_state(_record(time_system="UTC"))
        record = state_to_record(state, time_system="utc", gm_km3_s2=398600.4418)
        assert record.epoch == "2024-07-05T09:09:18.173000"
        assert record.time_system == "UTC"
        assert record.gm_km3_s2 == 398600.4418

    def test_system_frame_abbreviation(self):
        from almagest.domain.frames import ReferenceFrame
        from almagest.domain.state_records import record_to_state, state_to_record
        state = record_to_state(_record()).to_frame(ReferenceFrame.from_name("MOD"))
        assert state_to_record(state).ref_frame == "MOD(IERS2003A)"
