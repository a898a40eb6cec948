"""Value objects handed to the geometry engine."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

__all__ = ["Body", "bodies_from_lists", "bodies_from_mapping", "ensure_unique_names"]


@dataclass(frozen=True, slots=True)
class Body:
    """A named point on the ecliptic with an opaque styling token."""

    name: str
    longitude: float
    color: str | None = None

    def __post_init__(self) -> None:
        lon = float(self.longitude)
        if not math.isfinite(lon):
            raise ValueError(f"longitude for {self.name!r} must be finite")
        object.__setattr__(self, "longitude", lon)


def ensure_unique_names(bodies: Iterable[Body]) -> None:
    seen: set[str] = set()
    for body in bodies:
        if body.name in seen:
            raise ValueError(f"duplicate body name {body.name!r}")
        seen.add(body.name)


def bodies_from_mapping(positions: Mapping[str, Any]) -> list[Body]:
    """Flatten ``{name: longitude}`` or ``{name: {"longitude": ..., "color": ...}}``."""

    bodies: list[Body] = []
    for name, value in positions.items():
        if isinstance(value, Mapping):
            if "longitude" not in value:
                raise ValueError(f"position for {name!r} has no longitude")
            bodies.append(Body(name, value["longitude"], value.get("color")))
        else:
            bodies.append(Body(name, value))
    return bodies


def bodies_from_lists(
    names: Sequence[str],
    longitudes: Sequence[float],
    colors: Sequence[str | None] | None = None,
) -> list[Body]:
    if len(names) != len(longitudes):
        raise ValueError(
            f"names and longitudes differ in length ({len(names)} != {len(longitudes)})"
        )
    if colors is not None and len(colors) != len(names):
        raise ValueError(
            f"names and colors differ in length ({len(names)} != {len(colors)})"
        )
    palette = colors if colors is not None else [None] * len(names)
    bodies = [Body(n, lon, c) for n, lon, c in zip(names, longitudes, palette)]
    ensure_unique_names(bodies)
    return bodies
