# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for time, frame and orbit conversions.

Usage:
    # Time scales (UTC is accepted on either side)
    almagest convert-time 2024-12-30T10:27:13.145 --from TAI --to TDB
    almagest convert-time 2024-12-30T10:27:13.145 --from UTC --to UT1 --eop finals2000A.all.csv
    almagest utc-to-tai 2016-12-31T23:59:60.5

    # Frame rotations
    almagest frame-rotation --from ICRF --to ITRF --time 2024-07-05T09:09:18.173 --eop finals2000A.all.csv
    almagest frame-rotation --from ICRF --to IAU_MOON --time 2024-07-05T09:09:18.173

    # Bodies and orbits
    almagest body Jupiter
    almagest kepler --mu 398600.435507 --position 6068.279 -1692.843 -2516.619 \\
        --velocity -0.660415 5.495938 -5.303093
"""
import argparse
import logging
import math
import sys

import numpy as np

from almagest.adapters.iers_csv import load_finals_csv
from almagest.adapters.lsk import load_lsk
from almagest.domain.bodies import Origin
from almagest.domain.frames import ReferenceFrame, RotationProvider
from almagest.domain.keplerian import CartesianState, GravitationalParameter
from almagest.domain.offsets import DefaultOffsetProvider
from almagest.domain.time_scales import TimeScale
from almagest.domain.time_systems import Time
from almagest.domain.utc import Utc

logger = logging.getLogger(__name__)


def _load_leap_seconds(args):
    return load_lsk(args.lsk) if args.lsk else None


def _load_eop(args, leap_seconds):
    if not args.eop:
        return None
    logger.debug("Loading EOP data from %s", args.eop)
    return load_finals_csv(args.eop, leap_seconds=leap_seconds)


def _parse_time(iso: str, scale_name: str, leap_seconds) -> Time:
    """UTC input is converted to TAI; other scales are kept."""
    if scale_name.strip().upper() == "UTC":
        return Utc.from_iso(iso, leap_seconds).to_tai(leap_seconds)
    return Time.from_iso(iso, TimeScale.from_abbreviation(scale_name))


def _format_matrix(m: np.ndarray) -> str:
    return "\n".join("  ".join(f"{x: .15e}" for x in row) for row in m)


# --------------------------------------------------------------------------- #
# Sub-commands
# --------------------------------------------------------------------------- #


def cmd_convert_time(args) -> None:
    leap_seconds = _load_leap_seconds(args)
    provider = DefaultOffsetProvider(eop=_load_eop(args, leap_seconds))
    time = _parse_time(args.iso, args.from_scale, leap_seconds)
    if args.to_scale.upper() == "UTC":
        print(time.to_utc(leap_seconds, provider))
        return
    target = TimeScale.from_abbreviation(args.to_scale)
    print(time.to_scale(target, provider).format(args.precision))


def cmd_utc_to_tai(args) -> None:
    leap_seconds = _load_leap_seconds(args)
    utc = Utc.from_iso(args.iso, leap_seconds)
    print(utc.to_tai(leap_seconds).format(args.precision))


def cmd_frame_rotation(args) -> None:
    leap_seconds = _load_leap_seconds(args)
    eop = _load_eop(args, leap_seconds)
    offsets = DefaultOffsetProvider(eop=eop)
    time = _parse_time(args.time, args.scale, leap_seconds)
    origin = ReferenceFrame.from_name(args.from_frame)
    target = ReferenceFrame.from_name(args.to_frame)
    rotation = RotationProvider(offsets=offsets, eop=eop).rotation(origin, target, time)
    print(f"{origin} -> {target} at {time}")
    print("M:")
    print(_format_matrix(rotation.m))
    print("dM/dt [1/s]:")
    print(_format_matrix(rotation.dm))


def cmd_body(args) -> None:
    origin = Origin.from_name(args.name)
    print(f"{origin.name} (NAIF ID {origin.id})")
    if origin.has_gravitational_parameter():
        print(f"  GM:               {origin.gravitational_parameter()} km^3/s^2")
    if origin.has_mean_radius():
        print(f"  mean radius:      {origin.mean_radius()} km")
    if origin.has_radii():
        a, b, c = origin.radii()
        print(f"  radii:            {a}, {b}, {c} km")
    if origin.is_spheroid():
        print(f"  flattening:       {origin.flattening()}")
    if origin.has_rotational_elements():
        t = Time.from_iso(args.time, TimeScale.TDB).seconds_since_j2000() if args.time else 0.0
        ra, dec, w = origin.rotational_elements(t)
        print(f"  right ascension:  {math.degrees(ra)} deg")
        print(f"  declination:      {math.degrees(dec)} deg")
        print(f"  rotation angle:   {math.degrees(w)} deg")


def cmd_kepler(args) -> None:
    mu = GravitationalParameter.from_km3_per_s2(args.mu)
    state = CartesianState(
        np.array(args.position) * 1e3,
        np.array(args.velocity) * 1e3,
    )
    k = state.to_keplerian(mu)
    print(f"orbit type:                  {k.orbit_type}")
    print(f"semi-major axis:             {k.semi_major_axis * 1e-3} km")
    print(f"eccentricity:                {k.eccentricity}")
    print(f"inclination:                 {math.degrees(k.inclination)} deg")
    print(f"longitude of ascending node: {math.degrees(k.longitude_of_ascending_node)} deg")
    print(f"argument of periapsis:       {math.degrees(k.argument_of_periapsis)} deg")
    print(f"true anomaly:                {math.degrees(k.true_anomaly)} deg")
    period = k.orbital_period(mu)
    if period is not None:
        print(f"orbital period:              {period.to_decimal_seconds()} s")


# --------------------------------------------------------------------------- #
# Entry point
# --------------------------------------------------------------------------- #


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="almagest",
        description="Astrodynamics conversions: time scales, reference frames, orbits",
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log debug output (frame paths, EOP extrapolation) to stderr"
    )
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('convert-time', help="Convert an instant between time scales")
    p.add_argument('iso', help="ISO 8601 instant, e.g. 2024-12-30T10:27:13.145")
    p.add_argument('--from', dest='from_scale', required=True, help="Source scale (TAI, TT, ..., UTC)")
    p.add_argument('--to', dest='to_scale', required=True, help="Target scale (TAI, TT, ..., UTC)")
    p.add_argument('--precision', type=int, default=6, help="Decimal places of seconds (default: 6)")
    p.add_argument('--eop', help="IERS finals CSV, needed for UT1")
    p.add_argument('--lsk', help="SPICE leap-seconds kernel replacing the built-in table")
    p.set_defaults(func=cmd_convert_time)

    p = sub.add_parser('utc-to-tai', help="Convert a UTC instant to TAI")
    p.add_argument('iso', help="UTC instant; second 60 is accepted on leap-second dates")
    p.add_argument('--precision', type=int, default=6, help="Decimal places of seconds (default: 6)")
    p.add_argument('--lsk', help="SPICE leap-seconds kernel replacing the built-in table")
    p.set_defaults(func=cmd_utc_to_tai)

    p = sub.add_parser('frame-rotation', help="Print the rotation between two reference frames")
    p.add_argument('--from', dest='from_frame', required=True, help="Origin frame, e.g. ICRF, MOD(IERS1996)")
    p.add_argument('--to', dest='to_frame', required=True, help="Target frame, e.g. ITRF, IAU_MOON")
    p.add_argument('--time', required=True, help="ISO 8601 instant")
    p.add_argument('--scale', default='TAI', help="Scale of --time (default: TAI; UTC accepted)")
    p.add_argument('--eop', help="IERS finals CSV, needed for ITRF and the equinox chain")
    p.add_argument('--lsk', help="SPICE leap-seconds kernel replacing the built-in table")
    p.set_defaults(func=cmd_frame_rotation)

    p = sub.add_parser('body', help="Show catalog data for a celestial body")
    p.add_argument('name', help="Body name or alias, e.g. Earth, luna, ssb")
    p.add_argument('--time', help="TDB instant for the rotational elements (default: J2000)")
    p.set_defaults(func=cmd_body)

    p = sub.add_parser('kepler', help="Keplerian elements of a Cartesian state")
    p.add_argument('--mu', type=float, required=True, help="Gravitational parameter [km^3/s^2]")
    p.add_argument('--position', type=float, nargs=3, required=True, metavar=('X', 'Y', 'Z'),
                   help="Position [km]")
    p.add_argument('--velocity', type=float, nargs=3, required=True, metavar=('VX', 'VY', 'VZ'),
                   help="Velocity [km/s]")
    p.set_defaults(func=cmd_kepler)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        args.func(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
