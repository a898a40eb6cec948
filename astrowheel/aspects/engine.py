from __future__ import annotations

import logging
from collections.abc import Sequence

from astrowheel.models import Body

from .cache import AspectCache, fingerprint
from .matcher import Aspect, detect_aspects, detect_cross_aspects
from .settings import AspectSettings

LOG = logging.getLogger(__name__)

__all__ = ["AspectEngine"]


class AspectEngine:
    """Aspect detection with an injected single-slot cache for same-set calls.

    The returned lists are shared with the cache; callers must treat them
    as read-only.
    """

    def __init__(self, cache: AspectCache[list[Aspect]] | None = None) -> None:
        self.cache: AspectCache[list[Aspect]] = cache if cache is not None else AspectCache()

    def detect(self, bodies: Sequence[Body], settings: AspectSettings) -> list[Aspect]:
        if len(bodies) < 2:
            return []
        key = fingerprint(bodies, settings)
        aspects, cached = self.cache.get_or_compute(
            key, lambda: detect_aspects(bodies, settings)
        )
        if cached:
            LOG.debug("Using cached aspects (%d)", len(aspects))
        else:
            LOG.debug("Calculated %d aspects for %d bodies", len(aspects), len(bodies))
        return aspects

    def detect_cross(
        self,
        bodies_a: Sequence[Body],
        bodies_b: Sequence[Body],
        settings: AspectSettings,
    ) -> list[Aspect]:
        aspects = detect_cross_aspects(bodies_a, bodies_b, settings)
        LOG.debug(
            "Calculated %d cross aspects for %dx%d bodies",
            len(aspects),
            len(bodies_a),
            len(bodies_b),
        )
        return aspects
