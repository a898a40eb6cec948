"""Built-in aspect definitions and the angle table used to complete partial ones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

__all__ = [
    "ASPECT_ANGLES",
    "AspectDefinition",
    "DEFAULT_ASPECTS",
    "DEFAULT_COLOR",
    "DEFAULT_LINE_STYLE",
    "default_symbol",
]


DEFAULT_COLOR = "#888888"
DEFAULT_LINE_STYLE = "solid"


@dataclass(frozen=True, slots=True)
class AspectDefinition:
    """A fully resolved aspect type: ideal angle, orb and styling."""

    name: str
    angle: float
    orb: float
    color: str = DEFAULT_COLOR
    line_style: str = DEFAULT_LINE_STYLE
    symbol: str = ""
    enabled: bool = True


def default_symbol(name: str) -> str:
    return name[:3].upper()


# Ideal angles for named aspects, used when a configured type omits ``angle``.
ASPECT_ANGLES: Mapping[str, float] = {
    "conjunction": 0.0,
    "semisextile": 30.0,
    "semiquintile": 36.0,
    "novile": 40.0,
    "semisquare": 45.0,
    "septile": 51.4286,
    "sextile": 60.0,
    "quintile": 72.0,
    "square": 90.0,
    "trine": 120.0,
    "sesquisquare": 135.0,
    "biquintile": 144.0,
    "quincunx": 150.0,
    "opposition": 180.0,
}


DEFAULT_ASPECTS: Mapping[str, AspectDefinition] = {
    "conjunction": AspectDefinition("conjunction", 0.0, 8.0, "#FF4500", symbol="CON"),
    "opposition": AspectDefinition("opposition", 180.0, 6.0, "#DC143C", symbol="OPP"),
    "trine": AspectDefinition("trine", 120.0, 6.0, "#2E8B57", symbol="TRI"),
    "square": AspectDefinition("square", 90.0, 6.0, "#FF0000", symbol="SQR"),
    "sextile": AspectDefinition("sextile", 60.0, 4.0, "#4682B4", symbol="SEX"),
}
