"""Angular utilities shared by the house, aspect and layout modules.

Comparing longitudes with raw subtraction invites subtle bugs around the
0°/360° boundary.  Everything in the engine goes through the helpers in
this module instead: :func:`shortest_arc` when the question is "how far
apart", :func:`directed_arc` when a span has to be walked in one
rotational direction.

:func:`point_on_circle` fixes the screen convention for the whole chart:
0° points up and angles grow clockwise.  The house, aspect and layout
modules all project through it so the wheel never drifts out of phase.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Final

__all__ = [
    "EPSILON_DEG",
    "directed_arc",
    "mean_direction",
    "normalize_degrees",
    "point_on_circle",
    "shortest_arc",
    "sign_index",
]


EPSILON_DEG: Final[float] = 1e-9


def normalize_degrees(angle: float) -> float:
    """Return ``angle`` normalised to the ``[0, 360)`` interval.

    Parameters
    ----------
    angle:
        Value in **degrees**. Negative inputs and inputs many turns away
        from the canonical range are wrapped by multiples of 360°.

    Returns
    -------
    float
        A degree value in ``[0, 360)``. Values within ``1e-9`` of ``360``
        are coerced to ``0`` so the result never equals 360 because of
        floating point noise.
    """

    value = float(angle)
    if not math.isfinite(value):
        raise ValueError(f"angle must be finite, got {angle!r}")
    wrapped = ((value % 360.0) + 360.0) % 360.0
    if wrapped >= 360.0 - EPSILON_DEG:
        wrapped = 0.0
    return wrapped


def shortest_arc(a: float, b: float) -> float:
    """Return the unsigned separation between ``a`` and ``b`` in ``[0, 180]``."""

    d = normalize_degrees(float(b) - float(a))
    return min(d, 360.0 - d)


def directed_arc(start: float, end: float) -> float:
    """Return the arc walked forward from ``start`` to ``end`` in ``[0, 360)``.

    Used wherever a span is subdivided proportionally, so every division
    proceeds in the same rotational direction.
    """

    return normalize_degrees(float(end) - float(start))


def point_on_circle(
    center_x: float, center_y: float, radius: float, bearing: float
) -> tuple[float, float]:
    """Project ``bearing`` onto a circle; 0° is up, angles increase clockwise."""

    rad = math.radians(float(bearing) - 90.0)
    return center_x + radius * math.cos(rad), center_y + radius * math.sin(rad)


def sign_index(longitude: float) -> int:
    """Return the zero-indexed zodiac sign (0 = Aries) for ``longitude``."""

    return int(normalize_degrees(longitude) // 30.0) % 12


def mean_direction(angles: Iterable[float]) -> float | None:
    """Circular mean of ``angles`` via the resultant of their unit vectors.

    Returns ``None`` when the vectors cancel out and no direction exists.
    """

    sum_x = 0.0
    sum_y = 0.0
    for angle in angles:
        rad = math.radians(float(angle))
        sum_x += math.cos(rad)
        sum_y += math.sin(rad)
    if math.hypot(sum_x, sum_y) < EPSILON_DEG:
        return None
    return normalize_degrees(math.degrees(math.atan2(sum_y, sum_x)))
