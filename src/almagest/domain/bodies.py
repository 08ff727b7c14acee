# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Catalog of NAIF-identified solar-system origins.

Covers the Sun, the solar-system and planetary barycenters, the planets,
their natural satellites and a selection of minor bodies. Physical data
(GM, radii, IAU rotational elements) is attached where available and loaded
from bundled JSON on first use.

Planets and their satellites take their nutation-precession angles from
the system barycenter (NAIF ID ``id // 100``).

References:
    NAIF Integer ID codes, SPICE Toolkit documentation.
    NAIF pck00011.tpc and gm_de440.tpc kernels.
    Archinal, B. A. et al. (2018). Celest. Mech. Dyn. Astron. 130:22.
"""

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from almagest.domain.rotational_elements import (
    ElementKind,
    NutationPrecessionAngles,
    RotationalElement,
    RotationalElements,
)

# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #


class OriginError(ValueError):
    """Base class for origin catalog errors."""


class UnknownOriginName(OriginError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no origin with name `{name}` is known")


class UnknownOriginId(OriginError):
    def __init__(self, naif_id: int) -> None:
        self.naif_id = naif_id
        super().__init__(f"no origin with NAIF ID `{naif_id}` is known")


class UndefinedOriginProperty(OriginError):
    def __init__(self, origin: str, prop: str) -> None:
        self.origin = origin
        self.prop = prop
        super().__init__(f"undefined property '{prop}' for origin '{origin}'")


# --------------------------------------------------------------------------- #
# Catalog data
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class _OriginData:
    name: str
    aliases: tuple[str, ...] = ()
    gm: Optional[float] = None
    mean_radius: Optional[float] = None
    radii: Optional[tuple[float, float, float]] = None
    rotational_elements: Optional[RotationalElements] = None


@dataclass(frozen=True)
class _Catalog:
    by_id: dict
    by_name: dict


_CACHED_CATALOG: Optional[_Catalog] = None


def _element(kind: ElementKind, entry: dict) -> RotationalElement:
    c0, c1, c2 = (math.radians(c) for c in entry[kind.value])
    amplitudes = tuple(math.radians(a) for a in entry.get(f"nut_prec_{kind.value}", ()))
    return RotationalElement(kind, c0, c1, c2, amplitudes)


def _nut_prec_angles(raw) -> NutationPrecessionAngles:
    theta0 = tuple(math.radians(row[0]) for row in raw)
    theta1 = tuple(math.radians(row[1]) for row in raw)
    theta2 = tuple(math.radians(row[2]) if len(row) > 2 else 0.0 for row in raw)
    return NutationPrecessionAngles(theta0, theta1, theta2)


def _system_barycenter(naif_id: int) -> Optional[int]:
    """Barycenter of the planetary system a planet or satellite belongs to."""
    return naif_id // 100 if 100 < naif_id < 1000 else None


def _load_catalog(path: Optional[str] = None) -> _Catalog:
    """Load the origin catalog from bundled JSON or a custom path."""
    global _CACHED_CATALOG

    if path is None and _CACHED_CATALOG is not None:
        return _CACHED_CATALOG

    if path is None:
        data_path = Path(__file__).parent.parent / "data" / "bodies.json"
    else:
        data_path = Path(path)

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    raw = {int(e["id"]): e for e in data["origins"]}
    angles = {
        naif_id: _nut_prec_angles(e["nut_prec_angles"])
        for naif_id, e in raw.items()
        if "nut_prec_angles" in e
    }

    by_id = {}
    by_name = {}
    for naif_id, e in raw.items():
        elements = None
        if "right_ascension" in e:
            nut_prec = angles.get(_system_barycenter(naif_id))
            elements = RotationalElements(
                right_ascension=_element(ElementKind.RIGHT_ASCENSION, e),
                declination=_element(ElementKind.DECLINATION, e),
                prime_meridian=_element(ElementKind.ROTATION, e),
                nut_prec=nut_prec,
            )
        item = _OriginData(
            name=e["name"],
            aliases=tuple(e.get("aliases", ())),
            gm=e.get("gm"),
            mean_radius=e.get("mean_radius"),
            radii=tuple(e["radii"]) if "radii" in e else None,
            rotational_elements=elements,
        )
        by_id[naif_id] = item
        by_name[item.name.lower()] = naif_id
        for alias in item.aliases:
            by_name[alias.lower()] = naif_id

    catalog = _Catalog(by_id=by_id, by_name=by_name)

    if path is None:
        _CACHED_CATALOG = catalog

    return catalog


# --------------------------------------------------------------------------- #
# Origin
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Origin:
    """A NAIF-identified origin. Construct via ``from_id`` or ``from_name``."""

    id: int
    name: str

    @classmethod
    def from_id(cls, naif_id: int) -> "Origin":
        data = _load_catalog().by_id.get(naif_id)
        if data is None:
            raise UnknownOriginId(naif_id)
        return cls(naif_id, data.name)

    @classmethod
    def from_name(cls, name: str) -> "Origin":
        """Look up by canonical name or alias, ignoring case."""
        naif_id = _load_catalog().by_name.get(name.strip().lower())
        if naif_id is None:
            raise UnknownOriginName(name)
        return cls.from_id(naif_id)

    @classmethod
    def all(cls) -> list["Origin"]:
        return [cls(naif_id, d.name) for naif_id, d in _load_catalog().by_id.items()]

    @property
    def _data(self) -> _OriginData:
        return _load_catalog().by_id[self.id]

    def __str__(self) -> str:
        return self.name

    # -- Capabilities ------------------------------------------------------ #

    def has_gravitational_parameter(self) -> bool:
        return self._data.gm is not None

    def has_mean_radius(self) -> bool:
        return self._data.mean_radius is not None

    def has_radii(self) -> bool:
        return self._data.radii is not None

    def is_spheroid(self) -> bool:
        radii = self._data.radii
        return radii is not None and radii[0] == radii[1]

    def has_rotational_elements(self) -> bool:
        return self._data.rotational_elements is not None

    def _require(self, value, prop: str):
        if value is None:
            raise UndefinedOriginProperty(self.name, prop)
        return value

    # -- Physical data ----------------------------------------------------- #

    def gravitational_parameter(self) -> float:
        """GM in km^3/s^2."""
        return self._require(self._data.gm, "gravitational parameter")

    def mean_radius(self) -> float:
        """Mean radius in km."""
        return self._require(self._data.mean_radius, "mean radius")

    def radii(self) -> tuple[float, float, float]:
        """Triaxial radii in km."""
        return self._require(self._data.radii, "radii")

    def equatorial_radius(self) -> float:
        if not self.is_spheroid():
            raise UndefinedOriginProperty(self.name, "equatorial radius")
        return self._data.radii[0]

    def polar_radius(self) -> float:
        if not self.is_spheroid():
            raise UndefinedOriginProperty(self.name, "polar radius")
        return self._data.radii[2]

    def flattening(self) -> float:
        if not self.is_spheroid():
            raise UndefinedOriginProperty(self.name, "flattening")
        equatorial, _, polar = self._data.radii
        return (equatorial - polar) / equatorial

    # -- Rotational elements ----------------------------------------------- #

    def _elements(self) -> RotationalElements:
        return self._require(self._data.rotational_elements, "rotational elements")

    def rotational_elements(self, t: float) -> tuple[float, float, float]:
        """(alpha, delta, W) in radians at ``t`` TDB seconds since J2000."""
        return self._elements().elements(t)

    def rotational_element_rates(self, t: float) -> tuple[float, float, float]:
        """Rates of (alpha, delta, W) in rad/s."""
        return self._elements().rates(t)

    def right_ascension(self, t: float) -> float:
        return self.rotational_elements(t)[0]

    def right_ascension_rate(self, t: float) -> float:
        return self.rotational_element_rates(t)[0]

    def declination(self, t: float) -> float:
        return self.rotational_elements(t)[1]

    def declination_rate(self, t: float) -> float:
        return self.rotational_element_rates(t)[1]

    def rotation_angle(self, t: float) -> float:
        return self.rotational_elements(t)[2]

    def rotation_rate(self, t: float) -> float:
        return self.rotational_element_rates(t)[2]

    def iau_rotation_angles(self, t: float) -> tuple[float, float, float]:
        """Euler angles (alpha + pi/2, pi/2 - delta, W mod 2pi) for the body-fixed frame."""
        ra, dec, w = self.rotational_elements(t)
        return ra + math.pi / 2.0, math.pi / 2.0 - dec, w % (2.0 * math.pi)
