"""Placement of bodies on wheel rings and anchor collision resolution."""

from .positions import (
    OverlapOptions,
    ProjectedBody,
    find_clusters,
    min_angular_spacing,
    project_bodies,
    project_body,
    resolve_overlaps,
)

__all__ = [
    "OverlapOptions",
    "ProjectedBody",
    "find_clusters",
    "min_angular_spacing",
    "project_bodies",
    "project_body",
    "resolve_overlaps",
]
