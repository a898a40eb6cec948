from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from numbers import Real

from astrowheel.core.angles import directed_arc, normalize_degrees, sign_index
from astrowheel.exceptions import (
    DegenerateGeometryError,
    InvalidInputError,
    MissingParameterError,
    UnsupportedHouseSystemError,
)

LOG = logging.getLogger(__name__)

__all__ = [
    "HOUSE_ALIASES",
    "HousePolicy",
    "HouseResult",
    "HouseSystem",
    "calculate_house_cusps",
    "compute_houses",
    "house_from_position",
    "house_of",
    "house_system_descriptions",
    "list_house_systems",
    "required_parameters",
    "resolve_house_system",
]


# --------------------------- Systems ---------------------------------------


class HouseSystem(str, Enum):
    PLACIDUS = "Placidus"
    KOCH = "Koch"
    EQUAL = "Equal"
    WHOLE_SIGN = "Whole Sign"
    PORPHYRY = "Porphyry"
    REGIOMONTANUS = "Regiomontanus"
    CAMPANUS = "Campanus"
    MORINUS = "Morinus"
    TOPOCENTRIC = "Topocentric"


HOUSE_ALIASES: Mapping[str, HouseSystem] = {
    "wholesign": HouseSystem.WHOLE_SIGN,
    "whole_sign": HouseSystem.WHOLE_SIGN,
    "whole": HouseSystem.WHOLE_SIGN,
    "ws": HouseSystem.WHOLE_SIGN,
    "topo": HouseSystem.TOPOCENTRIC,
}

_LATITUDE = "latitude"
_MIDHEAVEN = "midheaven"

_REQUIRED: Mapping[HouseSystem, tuple[str, ...]] = {
    HouseSystem.PLACIDUS: (_LATITUDE, _MIDHEAVEN),
    HouseSystem.KOCH: (_LATITUDE, _MIDHEAVEN),
    HouseSystem.EQUAL: (),
    HouseSystem.WHOLE_SIGN: (),
    HouseSystem.PORPHYRY: (_MIDHEAVEN,),
    HouseSystem.REGIOMONTANUS: (_LATITUDE, _MIDHEAVEN),
    HouseSystem.CAMPANUS: (_LATITUDE, _MIDHEAVEN),
    HouseSystem.MORINUS: (_MIDHEAVEN,),
    HouseSystem.TOPOCENTRIC: (_LATITUDE, _MIDHEAVEN),
}

_DESCRIPTIONS: Mapping[HouseSystem, str] = {
    HouseSystem.PLACIDUS: "Time-based division of the diurnal arcs; the most common Western system",
    HouseSystem.KOCH: "Birthplace system by Walter Koch, time-based like Placidus",
    HouseSystem.EQUAL: "Twelve 30° segments measured from the Ascendant",
    HouseSystem.WHOLE_SIGN: "Each house is a whole sign, starting with the rising sign",
    HouseSystem.PORPHYRY: "Each quadrant between the angles is trisected along the ecliptic",
    HouseSystem.REGIOMONTANUS: "Medieval division of the celestial equator",
    HouseSystem.CAMPANUS: "Medieval division of the prime vertical",
    HouseSystem.MORINUS: "Equal divisions of the equator projected onto the ecliptic",
    HouseSystem.TOPOCENTRIC: "Polich–Page system, close to Placidus at moderate latitudes",
}

# Systems whose true astronomical formula is replaced by the quadrant
# trisection. Reported through ``HouseResult.meta["method"]``.
_PROPORTIONAL_ARC = frozenset(
    {
        HouseSystem.PLACIDUS,
        HouseSystem.KOCH,
        HouseSystem.REGIOMONTANUS,
        HouseSystem.CAMPANUS,
        HouseSystem.MORINUS,
        HouseSystem.TOPOCENTRIC,
    }
)


def list_house_systems() -> list[str]:
    """Return the house system identifiers supported by this engine."""

    return [system.value for system in HouseSystem]


def house_system_descriptions() -> dict[str, str]:
    return {system.value: _DESCRIPTIONS[system] for system in HouseSystem}


def resolve_house_system(name: HouseSystem | str) -> HouseSystem:
    """Return the :class:`HouseSystem` for ``name`` or raise."""

    if isinstance(name, HouseSystem):
        return name
    if not isinstance(name, str):
        raise UnsupportedHouseSystemError(f"House system {name!r} is not supported")
    token = name.strip()
    for system in HouseSystem:
        if token == system.value or token.lower() == system.value.lower():
            return system
        if token.upper() == system.name:
            return system
    alias = HOUSE_ALIASES.get(token.lower().replace(" ", ""))
    if alias is not None:
        return alias
    raise UnsupportedHouseSystemError(
        f"House system {name!r} is not supported. Valid options: {list_house_systems()}"
    )


def required_parameters(system: HouseSystem | str) -> tuple[str, ...]:
    return _REQUIRED[resolve_house_system(system)]


# --------------------------- Policy ----------------------------------------

# Systems that need no latitude, so they stay defined inside the polar circles.
_FALLBACK_SYSTEMS = (HouseSystem.PORPHYRY, HouseSystem.EQUAL)


@dataclass(frozen=True)
class HousePolicy:
    """Configuration controlling the Placidus polar fallback."""

    extreme_lat_deg: float = 66.5  # polar circles, where Placidus is undefined
    placidus_fallback: HouseSystem = HouseSystem.PORPHYRY

    def __post_init__(self) -> None:
        fallback = resolve_house_system(self.placidus_fallback)
        if fallback not in _FALLBACK_SYSTEMS:
            allowed = ", ".join(s.value for s in _FALLBACK_SYSTEMS)
            raise InvalidInputError(
                f"Placidus fallback must be one of {allowed}, got {fallback.value!r}"
            )
        object.__setattr__(self, "placidus_fallback", fallback)


@dataclass
class HouseResult:
    """Bundle of cusp longitudes and metadata about the computation."""

    cusps: list[float]  # 12 longitudes, cusp 1..12
    meta: dict[str, object]


# --------------------------- Validation ------------------------------------


def _is_real(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _check_ascendant(ascendant: object) -> float:
    if not _is_real(ascendant) or not math.isfinite(float(ascendant)):
        raise InvalidInputError(f"Ascendant must be a number, got {ascendant!r}")
    value = float(ascendant)
    if value < 0.0 or value >= 360.0:
        raise InvalidInputError(f"Ascendant must be in [0, 360), got {value}")
    return normalize_degrees(value)


def _check_optional_angle(name: str, value: object) -> float | None:
    if value is None:
        return None
    if not _is_real(value) or not math.isfinite(float(value)):
        raise InvalidInputError(f"{name} must be a finite number, got {value!r}")
    return normalize_degrees(float(value))


def _check_latitude(value: object) -> float | None:
    if value is None:
        return None
    if not _is_real(value) or not math.isfinite(float(value)):
        raise InvalidInputError(f"Latitude must be a finite number, got {value!r}")
    lat = float(value)
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError(f"Latitude must be in [-90, 90], got {lat}")
    return lat


def _require(system: HouseSystem, latitude: float | None, midheaven: float | None) -> None:
    supplied = {_LATITUDE: latitude, _MIDHEAVEN: midheaven}
    missing = [name for name in _REQUIRED[system] if supplied[name] is None]
    if missing:
        raise MissingParameterError(system.value, missing)


# --------------------------- Subdivisions ----------------------------------


def _trisect(start: float, end: float) -> tuple[float, float]:
    """Points at 1/3 and 2/3 of the forward arc ``start``→``end``."""

    arc = directed_arc(start, end)
    return (
        normalize_degrees(start + arc / 3.0),
        normalize_degrees(start + 2.0 * arc / 3.0),
    )


def _equal(asc_lon: float) -> list[float]:
    """Compute equal houses by stepping 30° from the Ascendant."""

    return [normalize_degrees(asc_lon + 30.0 * i) for i in range(12)]


def _whole_sign(asc_lon: float) -> list[float]:
    """Compute whole sign house cusps from the Ascendant longitude."""

    sign0 = sign_index(asc_lon)
    return [normalize_degrees(30.0 * ((sign0 + i) % 12)) for i in range(12)]


def _angular_cusps(asc_lon: float, mc_lon: float) -> list[float]:
    cusps = [0.0] * 12
    cusps[0] = asc_lon
    cusps[9] = mc_lon
    cusps[6] = normalize_degrees(asc_lon + 180.0)
    cusps[3] = normalize_degrees(mc_lon + 180.0)
    return cusps


def _porphyry(asc_lon: float, mc_lon: float) -> list[float]:
    """Compute Porphyry houses by trisecting the quadrants between angles."""

    cusps = _angular_cusps(asc_lon, mc_lon)
    cusps[10], cusps[11] = _trisect(cusps[9], cusps[0])  # MC → ASC
    cusps[1], cusps[2] = _trisect(cusps[0], cusps[3])  # ASC → IC
    cusps[4], cusps[5] = _trisect(cusps[3], cusps[6])  # IC → DSC
    cusps[7], cusps[8] = _trisect(cusps[6], cusps[9])  # DSC → MC
    return cusps


def _placidus_subdivision(asc_lon: float, mc_lon: float, lat_deg: float) -> list[float]:
    """Proportional-arc stand-in for the Placidus semi-arc division."""

    cusps = _porphyry(asc_lon, mc_lon)
    if not all(math.isfinite(c) for c in cusps):
        raise DegenerateGeometryError(
            f"non-finite Placidus cusp for asc={asc_lon} mc={mc_lon} lat={lat_deg}"
        )
    return cusps


def _placidus_with_fallback(
    asc_lon: float, mc_lon: float, lat_deg: float, policy: HousePolicy
) -> tuple[list[float], dict[str, object]]:
    meta: dict[str, object] = {"system": HouseSystem.PLACIDUS.value}
    fallback = f"placidus→{policy.placidus_fallback.value.lower()}"
    if abs(lat_deg) >= policy.extreme_lat_deg:
        LOG.debug("Placidus undefined at latitude %.4f; using %s", lat_deg, fallback)
        meta["fallback"] = fallback
        return _fallback_cusps(asc_lon, mc_lon, policy), meta
    try:
        cusps = _placidus_subdivision(asc_lon, mc_lon, lat_deg)
    except (ArithmeticError, ValueError) as exc:
        LOG.warning("Placidus calculation failed: %s. Falling back to %s.", exc, fallback)
        meta["fallback"] = fallback
        return _fallback_cusps(asc_lon, mc_lon, policy), meta
    return cusps, meta


def _fallback_cusps(asc_lon: float, mc_lon: float, policy: HousePolicy) -> list[float]:
    if policy.placidus_fallback is HouseSystem.EQUAL:
        return _equal(asc_lon)
    return _porphyry(asc_lon, mc_lon)


# --------------------------- Public API ------------------------------------


def compute_houses(
    ascendant: float,
    system: HouseSystem | str = HouseSystem.PLACIDUS,
    *,
    latitude: float | None = None,
    midheaven: float | None = None,
    policy: HousePolicy | None = None,
) -> HouseResult:
    """Compute house cusps for the requested system.

    Koch, Regiomontanus, Campanus, Morinus and Topocentric validate their
    own inputs and then share the Porphyry quadrant trisection; their
    ``meta["method"]`` is ``"proportional_arc"`` to say so.  Placidus uses
    the same subdivision and drops to ``policy.placidus_fallback`` inside
    the polar circles or when its subdivision degenerates.
    """

    asc = _check_ascendant(ascendant)
    resolved = resolve_house_system(system)
    lat = _check_latitude(latitude)
    mc = _check_optional_angle("Midheaven", midheaven)
    pol = policy or HousePolicy()
    _require(resolved, lat, mc)

    meta: dict[str, object] = {"system": resolved.value}
    if resolved is HouseSystem.EQUAL:
        cusps = _equal(asc)
    elif resolved is HouseSystem.WHOLE_SIGN:
        cusps = _whole_sign(asc)
    elif resolved is HouseSystem.PORPHYRY:
        cusps = _porphyry(asc, mc)
    elif resolved is HouseSystem.PLACIDUS:
        cusps, meta = _placidus_with_fallback(asc, mc, lat, pol)
    elif resolved in (
        HouseSystem.KOCH,
        HouseSystem.REGIOMONTANUS,
        HouseSystem.CAMPANUS,
        HouseSystem.MORINUS,
        HouseSystem.TOPOCENTRIC,
    ):
        cusps = _porphyry(asc, mc)
    else:  # pragma: no cover - every member is handled above
        raise UnsupportedHouseSystemError(f"House system {resolved.value!r} has no procedure")

    if resolved in _PROPORTIONAL_ARC and "fallback" not in meta:
        meta["method"] = "proportional_arc"
    return HouseResult(cusps=cusps, meta=meta)


def calculate_house_cusps(
    ascendant: float,
    system: HouseSystem | str = HouseSystem.PLACIDUS,
    *,
    latitude: float | None = None,
    midheaven: float | None = None,
    policy: HousePolicy | None = None,
) -> list[float]:
    """Return the 12 cusp longitudes; index 0 is the Ascendant, 9 the Midheaven."""

    return compute_houses(
        ascendant,
        system,
        latitude=latitude,
        midheaven=midheaven,
        policy=policy,
    ).cusps


def house_of(longitude: float, cusps: Sequence[float]) -> int:
    """Return the 1-based house whose span contains ``longitude``.

    Each house runs forward from its cusp to the next one, so spans that
    straddle 0° Aries are handled without special cases.
    """

    if len(cusps) != 12:
        raise ValueError(f"expected 12 cusps, got {len(cusps)}")
    for idx in range(12):
        start = cusps[idx]
        span = directed_arc(start, cusps[(idx + 1) % 12])
        if directed_arc(start, longitude) < span:
            return idx + 1
    # Degenerate (zero-width) spans only; fall back to the nearest cusp behind.
    offsets = [directed_arc(c, longitude) for c in cusps]
    return offsets.index(min(offsets)) + 1


def house_from_position(position: float, rotation: float = 0.0) -> int:
    """Equal 30° house lookup relative to ``rotation``."""

    return int(directed_arc(rotation, position) // 30.0) + 1
