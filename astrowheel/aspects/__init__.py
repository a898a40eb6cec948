"""Aspect detection: pure matchers, settings, and the memoising engine."""

from .cache import AspectCache, fingerprint
from .definitions import ASPECT_ANGLES, DEFAULT_ASPECTS, AspectDefinition
from .engine import AspectEngine
from .filters import renderable_aspects, stroke_dasharray
from .matcher import Aspect, detect_aspects, detect_cross_aspects, match_pair
from .settings import AspectSettings, AspectTypeCfg, ChartAspectSettings

__all__ = [
    "ASPECT_ANGLES",
    "Aspect",
    "AspectCache",
    "AspectDefinition",
    "AspectEngine",
    "AspectSettings",
    "AspectTypeCfg",
    "ChartAspectSettings",
    "DEFAULT_ASPECTS",
    "detect_aspects",
    "detect_cross_aspects",
    "fingerprint",
    "match_pair",
    "renderable_aspects",
    "stroke_dasharray",
]
