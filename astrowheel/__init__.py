"""Geometry engine for astrological wheel charts.

Computes house cusps, detects aspects between bodies, and places body
glyphs on wheel rings without collisions. Rendering is left to callers.
"""

from __future__ import annotations

from .aspects import (
    Aspect,
    AspectDefinition,
    AspectEngine,
    AspectSettings,
    ChartAspectSettings,
    detect_aspects,
    detect_cross_aspects,
)
from .chart import ChartGeometry
from .config import Settings, load_settings, save_settings
from .core import directed_arc, normalize_degrees, point_on_circle, shortest_arc
from .exceptions import (
    AstroWheelError,
    DegenerateGeometryError,
    InvalidInputError,
    MissingParameterError,
    UnsupportedHouseSystemError,
)
from .houses import HouseSystem, calculate_house_cusps, compute_houses, house_of
from .layout import OverlapOptions, ProjectedBody, project_bodies, resolve_overlaps
from .models import Body, bodies_from_lists, bodies_from_mapping

__version__ = "0.1.0"

__all__ = [
    "Aspect",
    "AspectDefinition",
    "AspectEngine",
    "AspectSettings",
    "AstroWheelError",
    "Body",
    "ChartAspectSettings",
    "ChartGeometry",
    "DegenerateGeometryError",
    "HouseSystem",
    "InvalidInputError",
    "MissingParameterError",
    "OverlapOptions",
    "ProjectedBody",
    "Settings",
    "UnsupportedHouseSystemError",
    "__version__",
    "bodies_from_lists",
    "bodies_from_mapping",
    "calculate_house_cusps",
    "compute_houses",
    "detect_aspects",
    "detect_cross_aspects",
    "directed_arc",
    "house_of",
    "load_settings",
    "normalize_degrees",
    "point_on_circle",
    "project_bodies",
    "resolve_overlaps",
    "save_settings",
    "shortest_arc",
]
