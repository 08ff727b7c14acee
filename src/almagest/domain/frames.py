# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Reference frames and the rotation provider connecting them.

Frames form a graph whose edges are the primitive transformations:

    ICRF -> MOD(sys) -> TOD(sys) -> PEF(sys) -> ITRF    equinox-based
    ICRF -> CIRF -> TIRF -> ITRF                         CIO-based
    PEF(IERS1996) -> TEME
    ICRF -> IAU(body)

Every edge is traversable in both directions, the reverse being the
transpose. ``RotationProvider.rotation`` composes the edges along the
cheapest path between two frames. Polar-motion edges cost two hops so that
ITRF is reached through the CIO-based chain unless an equinox-based frame
is an endpoint.

Time conversions go through an offset provider; UT1 and the pole
coordinates need an EOP provider (see ``almagest.ports.EopProvider``).

References:
    IERS Conventions 2010, Chapter 5.
    Vallado, D. A. et al. (2006). AIAA 2006-6753 (TEME).
    Archinal, B. A. et al. (2018). Celest. Mech. Dyn. Astron. 130:22.
"""

import heapq
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Optional

from almagest.domain.bodies import Origin, OriginError
from almagest.domain.cio import celestial_to_intermediate, cio_locator, cip_coordinates
from almagest.domain.earth_orientation import EopError
from almagest.domain.earth_rotation import (
    earth_rotation,
    earth_rotation_angle,
    equation_of_the_equinoxes_iau1994,
    polar_motion_matrix,
)
from almagest.domain.offsets import DefaultOffsetProvider, MissingEopProvider
from almagest.domain.precession_nutation import bias_precession_matrix, nutation_matrix
from almagest.domain.reference_systems import ReferenceSystem
from almagest.domain.rotations import Rotation
from almagest.domain.time_scales import TimeScale
from almagest.domain.units import ROTATION_RATE_EARTH, rotation_x, rotation_z

logger = logging.getLogger(__name__)

_TWO_PI: float = 2.0 * math.pi
_EARTH_ANGULAR_VELOCITY = (0.0, 0.0, ROTATION_RATE_EARTH)

# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #


class UnknownFrame(ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no frame with name '{name}' is known")


class RotationErrorKind(Enum):
    OFFSET = "offset error"
    EOP = "EOP error"


class RotationError(ValueError):
    """A rotation could not be evaluated.

    ``kind`` tells whether a time-scale conversion or an EOP lookup failed;
    the underlying exception is kept in ``inner``.
    """

    def __init__(self, kind: RotationErrorKind, inner: Exception) -> None:
        self.kind = kind
        self.inner = inner
        super().__init__(f"{kind.value}: {inner}")

    @classmethod
    def offset(cls, inner: Exception) -> "RotationError":
        return cls(RotationErrorKind.OFFSET, inner)

    @classmethod
    def eop(cls, inner: Exception) -> "RotationError":
        return cls(RotationErrorKind.EOP, inner)


# --------------------------------------------------------------------------- #
# Frames
# --------------------------------------------------------------------------- #


class FrameKind(Enum):
    ICRF = "ICRF"
    CIRF = "CIRF"
    TIRF = "TIRF"
    ITRF = "ITRF"
    MOD = "MOD"
    TOD = "TOD"
    PEF = "PEF"
    TEME = "TEME"
    IAU = "IAU"


_FIXED_NAMES = {
    FrameKind.ICRF: "International Celestial Reference Frame",
    FrameKind.CIRF: "Celestial Intermediate Reference Frame",
    FrameKind.TIRF: "Terrestrial Intermediate Reference Frame",
    FrameKind.ITRF: "International Terrestrial Reference Frame",
    FrameKind.MOD: "Mean of Date",
    FrameKind.TOD: "True of Date",
    FrameKind.PEF: "Pseudo-Earth Fixed",
    FrameKind.TEME: "True Equator Mean Equinox",
}

_SYSTEM_KINDS = (FrameKind.MOD, FrameKind.TOD, FrameKind.PEF)
_ROTATING_KINDS = (FrameKind.TIRF, FrameKind.ITRF, FrameKind.PEF, FrameKind.IAU)

_SYSTEM_FRAME_PATTERN = re.compile(r"^(MOD|TOD|PEF)(?:[(_]([A-Z0-9]+)\)?)?$")


@dataclass(frozen=True)
class ReferenceFrame:
    """A reference frame, parameterised by IERS convention or body where needed.

    Construct via the module constants (``ICRF``, ``CIRF``, ``TIRF``,
    ``ITRF``, ``TEME``), the ``mod``/``tod``/``pef``/``iau`` factories or
    ``from_name``.
    """

    kind: FrameKind
    system: Optional[ReferenceSystem] = None
    origin: Optional[Origin] = None

    @classmethod
    def mean_of_date(cls, system: ReferenceSystem) -> "ReferenceFrame":
        return cls(FrameKind.MOD, system=system)

    @classmethod
    def true_of_date(cls, system: ReferenceSystem) -> "ReferenceFrame":
        return cls(FrameKind.TOD, system=system)

    @classmethod
    def pseudo_earth_fixed(cls, system: ReferenceSystem) -> "ReferenceFrame":
        return cls(FrameKind.PEF, system=system)

    @classmethod
    def iau(cls, origin: Origin) -> "ReferenceFrame":
        """Body-fixed frame of ``origin``; the body needs rotational elements."""
        if not origin.has_rotational_elements():
            raise UnknownFrame(f"IAU_{origin.name}")
        return cls(FrameKind.IAU, origin=origin)

    @classmethod
    def from_name(cls, name: str) -> "ReferenceFrame":
        """Parse an abbreviation such as ``ICRF``, ``TOD(IERS1996)`` or ``IAU_MARS``.

        MOD, TOD and PEF without a convention default to IERS2003A.
        """
        key = name.strip().upper()
        for kind in (FrameKind.ICRF, FrameKind.CIRF, FrameKind.TIRF, FrameKind.ITRF, FrameKind.TEME):
            if key == kind.value:
                return cls(kind)

        match = _SYSTEM_FRAME_PATTERN.match(key)
        if match:
            kind = FrameKind(match.group(1))
            system = ReferenceSystem.IERS2003_A
            if match.group(2):
                try:
                    system = ReferenceSystem.from_name(match.group(2))
                except ValueError:
                    raise UnknownFrame(name) from None
            return cls(kind, system=system)

        prefix, sep, body = name.strip().partition("_")
        if sep and prefix.lower() == "iau" and body:
            origin = _lookup_origin(body)
            if origin is not None and origin.has_rotational_elements():
                return cls(FrameKind.IAU, origin=origin)
        raise UnknownFrame(name)

    @property
    def name(self) -> str:
        if self.kind is FrameKind.IAU:
            body = self.origin.name
            if body in ("Sun", "Moon"):
                return f"IAU Body-Fixed Reference Frame for the {body}"
            return f"IAU Body-Fixed Reference Frame for {body}"
        name = _FIXED_NAMES[self.kind]
        if self.kind in _SYSTEM_KINDS:
            return f"{name} ({self.system.value})"
        return name

    @property
    def abbreviation(self) -> str:
        if self.kind is FrameKind.IAU:
            body = self.origin.name.replace(" ", "_").replace("-", "_").upper()
            return f"IAU_{body}"
        if self.kind in _SYSTEM_KINDS:
            return f"{self.kind.value}({self.system.value})"
        return self.kind.value

    @property
    def is_rotating(self) -> bool:
        return self.kind in _ROTATING_KINDS

    def __str__(self) -> str:
        return self.abbreviation


def _lookup_origin(body: str) -> Optional[Origin]:
    candidates = (body, body.replace("_", " "), body.replace("_", "-"))
    for candidate in candidates:
        try:
            return Origin.from_name(candidate)
        except OriginError:
            continue
    return None


ICRF = ReferenceFrame(FrameKind.ICRF)
CIRF = ReferenceFrame(FrameKind.CIRF)
TIRF = ReferenceFrame(FrameKind.TIRF)
ITRF = ReferenceFrame(FrameKind.ITRF)
TEME = ReferenceFrame(FrameKind.TEME)


# --------------------------------------------------------------------------- #
# Frame graph
# --------------------------------------------------------------------------- #

_POLAR_MOTION_COST: int = 2


def _neighbours(frame: ReferenceFrame, target: ReferenceFrame) -> list[tuple[ReferenceFrame, int]]:
    """Adjacent frames with edge costs, in a fixed order."""
    kind = frame.kind
    if kind is FrameKind.ICRF:
        out = [(ReferenceFrame.mean_of_date(s), 1) for s in ReferenceSystem]
        out.append((CIRF, 1))
        if target.kind is FrameKind.IAU:
            out.append((target, 1))
        return out
    if kind is FrameKind.CIRF:
        return [(ICRF, 1), (TIRF, 1)]
    if kind is FrameKind.TIRF:
        return [(CIRF, 1), (ITRF, _POLAR_MOTION_COST)]
    if kind is FrameKind.ITRF:
        out = [(ReferenceFrame.pseudo_earth_fixed(s), _POLAR_MOTION_COST) for s in ReferenceSystem]
        out.append((TIRF, _POLAR_MOTION_COST))
        return out
    if kind is FrameKind.MOD:
        return [(ICRF, 1), (ReferenceFrame.true_of_date(frame.system), 1)]
    if kind is FrameKind.TOD:
        return [
            (ReferenceFrame.mean_of_date(frame.system), 1),
            (ReferenceFrame.pseudo_earth_fixed(frame.system), 1),
        ]
    if kind is FrameKind.PEF:
        out = [(ReferenceFrame.true_of_date(frame.system), 1), (ITRF, _POLAR_MOTION_COST)]
        if frame.system is ReferenceSystem.IERS1996:
            out.append((TEME, 1))
        return out
    if kind is FrameKind.TEME:
        return [(ReferenceFrame.pseudo_earth_fixed(ReferenceSystem.IERS1996), 1)]
    return [(ICRF, 1)]


def find_path(origin: ReferenceFrame, target: ReferenceFrame) -> list[ReferenceFrame]:
    """Cheapest chain of frames from ``origin`` to ``target``, both included.

    Dijkstra over the frame graph; ties go to the first-discovered path.
    """
    if origin == target:
        return [origin]

    counter = 0
    queue = [(0, counter, origin)]
    previous: dict[ReferenceFrame, Optional[ReferenceFrame]] = {origin: None}
    best = {origin: 0}
    done = set()

    while queue:
        cost, _, frame = heapq.heappop(queue)
        if frame in done:
            continue
        if frame == target:
            break
        done.add(frame)
        for neighbour, weight in _neighbours(frame, target):
            new_cost = cost + weight
            if neighbour not in best or new_cost < best[neighbour]:
                best[neighbour] = new_cost
                previous[neighbour] = frame
                counter += 1
                heapq.heappush(queue, (new_cost, counter, neighbour))

    path = [target]
    while path[-1] != origin:
        path.append(previous[path[-1]])
    path.reverse()
    return path


# --------------------------------------------------------------------------- #
# Rotation provider
# --------------------------------------------------------------------------- #


class RotationProvider:
    """Evaluates rotations between any two reference frames.

    Parameters
    ----------
    offsets : OffsetProvider, optional
        Time-scale offsets. Defaults to ``DefaultOffsetProvider(eop)``.
    eop : EopProvider, optional
        Source of UT1-TAI, pole coordinates and celestial pole offsets.
        Without it, pole offsets are taken as zero and frames that need UT1
        or polar motion raise ``RotationError``.
    """

    def __init__(self, offsets=None, eop=None) -> None:
        self._eop = eop
        self._offsets = offsets if offsets is not None else DefaultOffsetProvider(eop)

    # -- Inputs ------------------------------------------------------------- #

    def _to_scale(self, time, scale: TimeScale):
        try:
            return time.to_scale(scale, self._offsets)
        except ValueError as exc:
            raise RotationError.offset(exc) from exc

    def corrections(self, time, system: ReferenceSystem) -> tuple[float, float]:
        """Celestial pole offsets for ``system`` at ``time``, radians."""
        if self._eop is None:
            return 0.0, 0.0
        tai = self._to_scale(time, TimeScale.TAI).to_delta()
        try:
            return self._eop.nutation_corrections(tai, system)
        except EopError as exc:
            raise RotationError.eop(exc) from exc

    def pole_coordinates(self, time) -> tuple[float, float]:
        """Pole coordinates (xp, yp) at ``time``, radians."""
        if self._eop is None:
            raise RotationError.eop(MissingEopProvider())
        tai = self._to_scale(time, TimeScale.TAI).to_delta()
        try:
            return self._eop.polar_motion(tai)
        except EopError as exc:
            raise RotationError.eop(exc) from exc

    # -- Primitive edges ---------------------------------------------------- #

    def icrf_to_mod(self, time, system: ReferenceSystem) -> Rotation:
        tt = self._to_scale(time, TimeScale.TT)
        return Rotation.from_matrix(bias_precession_matrix(system, tt.centuries_since_j2000()))

    def mod_to_tod(self, time, system: ReferenceSystem) -> Rotation:
        tdb = self._to_scale(time, TimeScale.TDB)
        corr = self.corrections(time, system)
        return Rotation.from_matrix(nutation_matrix(system, tdb.centuries_since_j2000(), corr))

    def tod_to_pef(self, time, system: ReferenceSystem) -> Rotation:
        tt = self._to_scale(time, TimeScale.TT)
        ut1 = self._to_scale(time, TimeScale.UT1)
        corr = self.corrections(time, system)
        m = earth_rotation(system, tt.centuries_since_j2000(), ut1.days_since_j2000(), corr)
        return Rotation.from_matrix(m).with_angular_velocity(_EARTH_ANGULAR_VELOCITY)

    def pef_to_itrf(self, time, system: ReferenceSystem) -> Rotation:
        tt = self._to_scale(time, TimeScale.TT)
        xp, yp = self.pole_coordinates(time)
        return Rotation.from_matrix(polar_motion_matrix(system, tt.centuries_since_j2000(), xp, yp))

    def pef_to_teme(self, time) -> Rotation:
        tdb = self._to_scale(time, TimeScale.TDB)
        eoe = equation_of_the_equinoxes_iau1994(tdb.centuries_since_j2000())
        return Rotation.from_matrix(rotation_z(-eoe))

    def icrf_to_cirf(self, time) -> Rotation:
        """CIO-based celestial to intermediate rotation, IAU 2006/2000A.

        The CIO locator is evaluated from the model CIP; pole offsets are
        added afterwards and default to zero when unavailable.
        """
        tdb = self._to_scale(time, TimeScale.TDB)
        t = tdb.centuries_since_j2000()
        x, y = cip_coordinates(t)
        s = cio_locator(t, x, y)
        try:
            dx, dy = self.corrections(time, ReferenceSystem.IERS2010)
        except RotationError as exc:
            logger.warning("CIP offsets unavailable, using zero: %s", exc)
            dx, dy = 0.0, 0.0
        return Rotation.from_matrix(celestial_to_intermediate(x + dx, y + dy, s))

    def cirf_to_tirf(self, time) -> Rotation:
        ut1 = self._to_scale(time, TimeScale.UT1)
        era = earth_rotation_angle(ut1.days_since_j2000())
        return Rotation.from_matrix(rotation_z(era)).with_angular_velocity(_EARTH_ANGULAR_VELOCITY)

    def tirf_to_itrf(self, time) -> Rotation:
        return self.pef_to_itrf(time, ReferenceSystem.IERS2010)

    def icrf_to_iau(self, time, origin: Origin) -> Rotation:
        """Body-fixed rotation from the IAU rotational elements of ``origin``."""
        seconds = self._to_scale(time, TimeScale.TDB).seconds_since_j2000()
        ra, dec, w = origin.rotational_elements(seconds)
        ra_dot, dec_dot, w_dot = origin.rotational_element_rates(seconds)
        m = (
            rotation_z(w % _TWO_PI)
            @ rotation_x(math.pi / 2.0 - dec)
            @ rotation_z(ra + math.pi / 2.0)
        )
        return Rotation.from_matrix(m).with_angular_velocity((ra_dot, -dec_dot, w_dot))

    # -- Graph traversal ---------------------------------------------------- #

    def _forward_edge(self, origin: ReferenceFrame, target: ReferenceFrame, time) -> Optional[Rotation]:
        a, b = origin.kind, target.kind
        if a is FrameKind.ICRF and b is FrameKind.MOD:
            return self.icrf_to_mod(time, target.system)
        if a is FrameKind.MOD and b is FrameKind.TOD:
            return self.mod_to_tod(time, origin.system)
        if a is FrameKind.TOD and b is FrameKind.PEF:
            return self.tod_to_pef(time, origin.system)
        if a is FrameKind.PEF and b is FrameKind.ITRF:
            return self.pef_to_itrf(time, origin.system)
        if a is FrameKind.PEF and b is FrameKind.TEME:
            return self.pef_to_teme(time)
        if a is FrameKind.ICRF and b is FrameKind.CIRF:
            return self.icrf_to_cirf(time)
        if a is FrameKind.CIRF and b is FrameKind.TIRF:
            return self.cirf_to_tirf(time)
        if a is FrameKind.TIRF and b is FrameKind.ITRF:
            return self.tirf_to_itrf(time)
        if a is FrameKind.ICRF and b is FrameKind.IAU:
            return self.icrf_to_iau(time, target.origin)
        return None

    def _edge(self, origin: ReferenceFrame, target: ReferenceFrame, time) -> Rotation:
        rotation = self._forward_edge(origin, target, time)
        if rotation is not None:
            return rotation
        return self._forward_edge(target, origin, time).transpose()

    def rotation(self, origin: ReferenceFrame, target: ReferenceFrame, time) -> Rotation:
        """Rotation taking coordinates in ``origin`` to ``target`` at ``time``."""
        if origin == target:
            return Rotation.identity()
        path = find_path(origin, target)
        logger.debug("Rotation %s -> %s via %s", origin, target, " -> ".join(str(f) for f in path))
        result = self._edge(path[0], path[1], time)
        for a, b in zip(path[1:], path[2:]):
            result = result.compose(self._edge(a, b, time))
        return result

    def composed_rotation(self, frames, time) -> Rotation:
        """Chain rotations through ``frames`` in order; the first failure propagates."""
        frames = list(frames)
        if len(frames) < 2:
            return Rotation.identity()
        rotations = [self.rotation(a, b, time) for a, b in zip(frames, frames[1:])]
        return reduce(lambda acc, r: acc.compose(r), rotations)
