"""Body placement on a wheel and collision-aware label anchoring.

Each projected body carries two points.  The *exact* point is the true
longitude on the body ring and is what the position dot is drawn at; the
resolver never touches it.  The *anchor* is where the glyph or label goes.
When anchors crowd together the resolver fans a cluster out angularly
around its circular mean, keeping the bodies in zodiacal order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace

from astrowheel.core.angles import (
    EPSILON_DEG,
    directed_arc,
    mean_direction,
    normalize_degrees,
    point_on_circle,
)
from astrowheel.models import Body

LOG = logging.getLogger(__name__)

__all__ = [
    "OverlapOptions",
    "ProjectedBody",
    "find_clusters",
    "min_angular_spacing",
    "project_bodies",
    "project_body",
    "resolve_overlaps",
]


@dataclass(frozen=True, slots=True)
class ProjectedBody:
    """Computed position for a body on a ring."""

    name: str
    longitude: float
    radius: float
    exact_x: float
    exact_y: float
    anchor_x: float
    anchor_y: float
    color: str | None = None
    adjusted_longitude: float | None = None

    def icon_origin(self, icon_size: float) -> tuple[float, float]:
        """Top-left corner of an icon of ``icon_size`` centred on the anchor."""
        half = icon_size / 2.0
        return self.anchor_x - half, self.anchor_y - half

    def needs_connector(self, threshold: float) -> bool:
        """True when the anchor sits far enough from the dot to warrant a leader line."""
        return math.hypot(self.anchor_x - self.exact_x, self.anchor_y - self.exact_y) > threshold


@dataclass(frozen=True)
class OverlapOptions:
    """Runtime knobs for :func:`resolve_overlaps`."""

    center_x: float
    center_y: float
    radius: float
    min_distance: float = 24.0
    max_spread_deg: float = 30.0
    spread_buffer: float = 1.1

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if self.min_distance < 0.0:
            raise ValueError(f"min_distance must be non-negative, got {self.min_distance}")


def project_body(
    body: Body,
    *,
    center_x: float,
    center_y: float,
    radius: float,
    icon_radius: float | None = None,
) -> ProjectedBody:
    exact_x, exact_y = point_on_circle(center_x, center_y, radius, body.longitude)
    if icon_radius is None or icon_radius == radius:
        anchor_x, anchor_y = exact_x, exact_y
    else:
        anchor_x, anchor_y = point_on_circle(center_x, center_y, icon_radius, body.longitude)
    return ProjectedBody(
        name=body.name,
        longitude=normalize_degrees(body.longitude),
        radius=radius,
        exact_x=exact_x,
        exact_y=exact_y,
        anchor_x=anchor_x,
        anchor_y=anchor_y,
        color=body.color,
    )


def project_bodies(
    bodies: Iterable[Body],
    *,
    center_x: float,
    center_y: float,
    radius: float,
    icon_radius: float | None = None,
) -> list[ProjectedBody]:
    return [
        project_body(
            body,
            center_x=center_x,
            center_y=center_y,
            radius=radius,
            icon_radius=icon_radius,
        )
        for body in bodies
    ]


def min_angular_spacing(min_distance: float, radius: float) -> float:
    """Angle (degrees) subtended by a chord-ish gap of ``min_distance`` at ``radius``."""

    return (min_distance / radius) * (180.0 / math.pi)


def _components(count: int, linked: Callable[[int, int], bool]) -> list[list[int]]:
    """Union-find over ``range(count)``; members of each component stay ascending."""

    parent = list(range(count))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i in range(count):
        for j in range(i + 1, count):
            if linked(i, j):
                root_i, root_j = find(i), find(j)
                if root_i != root_j:
                    parent[root_j] = root_i

    groups: dict[int, list[int]] = {}
    for idx in range(count):
        groups.setdefault(find(idx), []).append(idx)
    return list(groups.values())


def find_clusters(projected: Sequence[ProjectedBody], min_distance: float) -> list[list[int]]:
    """Connected components of the "anchors closer than ``min_distance``" relation."""

    def close(i: int, j: int) -> bool:
        a, b = projected[i], projected[j]
        return math.hypot(a.anchor_x - b.anchor_x, a.anchor_y - b.anchor_y) < min_distance

    return _components(len(projected), close)


def _circular_order(members: list[int], projected: Sequence[ProjectedBody]) -> list[int]:
    """Order cluster members clockwise, starting just after the widest gap."""

    ordered = sorted(members, key=lambda idx: (projected[idx].longitude, idx))
    count = len(ordered)
    best = count - 1
    best_gap = directed_arc(projected[ordered[-1]].longitude, projected[ordered[0]].longitude)
    for k in range(count - 1):
        gap = directed_arc(projected[ordered[k]].longitude, projected[ordered[k + 1]].longitude)
        if gap > best_gap:
            best, best_gap = k, gap
    start = (best + 1) % count
    return ordered[start:] + ordered[:start]


@dataclass(frozen=True)
class _GroupLayout:
    """Where one cluster ends up: its clockwise arc and any rotated anchors."""

    start: float
    length: float
    adjusted: dict[int, float | None]


def _spread_cluster(
    ordered: list[int],
    projected: Sequence[ProjectedBody],
    min_angle: float,
    options: OverlapOptions,
) -> dict[int, float | None]:
    n = len(ordered)
    first = projected[ordered[0]].longitude
    last = projected[ordered[-1]].longitude
    span = directed_arc(first, last)
    required = (n - 1) * min_angle
    if span >= required - EPSILON_DEG:
        return {idx: None for idx in ordered}

    center = mean_direction(projected[idx].longitude for idx in ordered)
    if center is None:
        center = normalize_degrees(first + span / 2.0)
    # max_spread_deg caps the buffer only; spacing never drops below min_angle.
    spread = max(span, required, min(options.max_spread_deg, required * options.spread_buffer))
    # A cluster wrapping the whole wheel is dealt out evenly.
    spread = min(spread, 360.0 * (n - 1) / n)
    step = spread / (n - 1)
    start = center - spread / 2.0
    return {idx: normalize_degrees(start + i * step) for i, idx in enumerate(ordered)}


def _layout_group(
    members: list[int],
    projected: Sequence[ProjectedBody],
    min_angle: float,
    options: OverlapOptions,
) -> _GroupLayout:
    if len(members) == 1:
        idx = members[0]
        return _GroupLayout(projected[idx].longitude, 0.0, {idx: None})
    ordered = _circular_order(members, projected)
    adjusted = _spread_cluster(ordered, projected, min_angle, options)

    def bearing(idx: int) -> float:
        new_lon = adjusted[idx]
        return projected[idx].longitude if new_lon is None else new_lon

    start = bearing(ordered[0])
    return _GroupLayout(start, directed_arc(start, bearing(ordered[-1])), adjusted)


def _arcs_crowd(a: _GroupLayout, b: _GroupLayout, min_angle: float) -> bool:
    """True when two clockwise arcs overlap or sit less than ``min_angle`` apart."""

    ahead = directed_arc(a.start, b.start)
    behind = directed_arc(b.start, a.start)
    if ahead <= a.length or behind <= b.length:
        return True
    return min(ahead - a.length, behind - b.length) < min_angle - EPSILON_DEG


def resolve_overlaps(
    projected: Sequence[ProjectedBody], options: OverlapOptions
) -> list[ProjectedBody]:
    """Return copies of ``projected`` with colliding anchors fanned out.

    Output order matches input order. Exact points are never moved; a body
    only gets ``adjusted_longitude`` when its anchor was actually rotated.

    A fanned-out cluster that reaches a neighbouring anchor absorbs it and
    is laid out again, repeating until no two clusters crowd each other,
    so the clockwise order of the bodies survives the spreading.
    """

    if len(projected) <= 1:
        return list(projected)

    min_angle = min_angular_spacing(options.min_distance, options.radius)
    groups = find_clusters(projected, options.min_distance)
    while True:
        layouts = [_layout_group(members, projected, min_angle, options) for members in groups]
        merged = _components(
            len(groups), lambda i, j: _arcs_crowd(layouts[i], layouts[j], min_angle)
        )
        if len(merged) == len(groups):
            break
        LOG.debug("Merging %d crowded clusters into %d", len(groups), len(merged))
        groups = [sorted(idx for g in component for idx in groups[g]) for component in merged]

    adjusted: dict[int, float | None] = {}
    for members, layout in zip(groups, layouts):
        adjusted.update(layout.adjusted)
        if len(members) > 1:
            LOG.debug(
                "Resolved cluster of %d bodies: %s",
                len(members),
                ", ".join(projected[idx].name for idx in members),
            )

    out: list[ProjectedBody] = []
    for idx, body in enumerate(projected):
        new_lon = adjusted[idx]
        bearing = body.longitude if new_lon is None else new_lon
        anchor_x, anchor_y = point_on_circle(
            options.center_x, options.center_y, options.radius, bearing
        )
        out.append(
            replace(
                body,
                anchor_x=anchor_x,
                anchor_y=anchor_y,
                adjusted_longitude=new_lon,
            )
        )
    return out
