from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import combinations, product

from astrowheel.core.angles import shortest_arc
from astrowheel.models import Body, ensure_unique_names

from .definitions import AspectDefinition
from .settings import AspectSettings

EPS = 1e-9

__all__ = ["Aspect", "detect_aspects", "detect_cross_aspects", "match_pair"]


@dataclass(frozen=True, slots=True)
class Aspect:
    """A detected angular relationship between two bodies."""

    body_a: str
    body_b: str
    name: str
    angle: float
    separation: float
    deviation: float
    orb: float
    color: str
    line_style: str
    symbol: str
    enabled: bool = True
    is_cross: bool = False


def match_pair(
    body_a: Body,
    body_b: Body,
    definitions: Iterable[AspectDefinition],
    *,
    is_cross: bool = False,
) -> list[Aspect]:
    """Every definition the pair satisfies; overlapping orbs yield several hits."""

    separation = shortest_arc(body_a.longitude, body_b.longitude)
    hits: list[Aspect] = []
    for definition in definitions:
        deviation = abs(separation - definition.angle)
        if deviation <= definition.orb + EPS:
            hits.append(
                Aspect(
                    body_a=body_a.name,
                    body_b=body_b.name,
                    name=definition.name,
                    angle=definition.angle,
                    separation=separation,
                    deviation=deviation,
                    orb=definition.orb,
                    color=definition.color,
                    line_style=definition.line_style,
                    symbol=definition.symbol,
                    enabled=definition.enabled,
                    is_cross=is_cross,
                )
            )
    return hits


def detect_aspects(bodies: Sequence[Body], settings: AspectSettings) -> list[Aspect]:
    """Detect aspects among the unordered pairs of a single body set.

    Args:
        bodies: the set, in caller order; pairs are visited as ``(i, j)`` with ``i < j``.
        settings: aspect types and orbs for this relationship.
    """

    if len(bodies) < 2:
        return []
    ensure_unique_names(bodies)
    definitions = settings.definitions()
    out: list[Aspect] = []
    for body_a, body_b in combinations(bodies, 2):
        out.extend(match_pair(body_a, body_b, definitions))
    return out


def detect_cross_aspects(
    bodies_a: Sequence[Body], bodies_b: Sequence[Body], settings: AspectSettings
) -> list[Aspect]:
    """Detect aspects across two independent sets (synastry); full cross product."""

    if not bodies_a or not bodies_b:
        return []
    ensure_unique_names(bodies_a)
    ensure_unique_names(bodies_b)
    definitions = settings.definitions()
    out: list[Aspect] = []
    for body_a, body_b in product(bodies_a, bodies_b):
        out.extend(match_pair(body_a, body_b, definitions, is_cross=True))
    return out
