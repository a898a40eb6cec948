"""Angle kernel shared across the chart geometry engine."""

from .angles import (
    EPSILON_DEG,
    directed_arc,
    mean_direction,
    normalize_degrees,
    point_on_circle,
    shortest_arc,
    sign_index,
)

__all__ = [
    "EPSILON_DEG",
    "directed_arc",
    "mean_direction",
    "normalize_degrees",
    "point_on_circle",
    "shortest_arc",
    "sign_index",
]
