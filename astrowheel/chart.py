"""Facade tying houses, aspects and ring layout to one :class:`Settings` object."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Literal

from cachetools import LRUCache

from astrowheel.aspects import Aspect, AspectEngine, renderable_aspects
from astrowheel.boot.logging import configure_logging
from astrowheel.config.settings import Settings
from astrowheel.houses import HouseResult, compute_houses, house_of
from astrowheel.layout import OverlapOptions, ProjectedBody, project_bodies, resolve_overlaps
from astrowheel.models import Body, ensure_unique_names

LOG = logging.getLogger(__name__)

__all__ = ["ChartGeometry", "Ring"]

Ring = Literal["primary", "secondary"]


class ChartGeometry:
    """Computes everything a wheel renderer needs from one settings object.

    House cusps are memoised on the houses configuration. Each aspect
    relationship keeps its own engine so that redrawing one wheel does not
    evict the other's cached result.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        if self.settings.logging.level is not None:
            configure_logging(self.settings.logging.level)
        self._houses: LRUCache[tuple, HouseResult] = LRUCache(maxsize=8)
        self._houses_lock = threading.Lock()
        self.engines: dict[str, AspectEngine] = {
            "primary": AspectEngine(),
            "secondary": AspectEngine(),
        }

    # ------------------------------------------------------------------ houses

    def houses(self) -> HouseResult:
        cfg = self.settings.houses
        key = cfg.cache_key()
        with self._houses_lock:
            result = self._houses.get(key)
            if result is None:
                result = compute_houses(
                    cfg.ascendant,
                    cfg.system,
                    latitude=cfg.latitude,
                    midheaven=cfg.midheaven,
                )
                self._houses[key] = result
                LOG.debug("Computed %s cusps %s", cfg.system.value, result.meta)
        return result

    def cusps(self) -> list[float]:
        return list(self.houses().cusps)

    def house_of(self, body: Body) -> int:
        return house_of(body.longitude, self.houses().cusps)

    # ----------------------------------------------------------------- aspects

    def aspects(
        self,
        primary: Sequence[Body],
        secondary: Sequence[Body] | None = None,
        *,
        renderable_only: bool = False,
    ) -> dict[str, list[Aspect]]:
        """Detect aspects within each wheel and, with two wheels, across them.

        Keys are ``"primary"``, ``"secondary"`` and ``"synastry"``; the last
        two are present only when ``secondary`` is given.
        """

        ensure_unique_names(primary)
        cfg = self.settings.aspects
        results: dict[str, list[Aspect]] = {
            "primary": self.engines["primary"].detect(primary, cfg.primary),
        }
        if secondary is not None:
            ensure_unique_names(secondary)
            results["secondary"] = self.engines["secondary"].detect(secondary, cfg.secondary)
            results["synastry"] = self.engines["primary"].detect_cross(
                primary, secondary, cfg.synastry
            )
        if renderable_only:
            results = {
                rel: renderable_aspects(found, cfg.for_relationship(rel))
                for rel, found in results.items()
            }
        return results

    # ------------------------------------------------------------------ layout

    def _ring_radii(self, ring: Ring) -> tuple[float, float | None]:
        """``(dot radius, icon radius)``; only the primary ring has a separate icon ring."""

        layout = self.settings.layout
        if ring == "primary":
            return layout.planet_radius, layout.icon_radius
        if ring == "secondary":
            return layout.secondary_radius, None
        raise ValueError(f"unknown ring {ring!r}")

    def overlap_options(self, ring: Ring = "primary") -> OverlapOptions:
        layout = self.settings.layout
        radius, icon_radius = self._ring_radii(ring)
        return OverlapOptions(
            center_x=layout.center_x,
            center_y=layout.center_y,
            radius=icon_radius if icon_radius is not None else radius,
            min_distance=layout.min_distance,
            max_spread_deg=layout.max_spread_deg,
        )

    def layout(self, bodies: Sequence[Body], ring: Ring = "primary") -> list[ProjectedBody]:
        """Project ``bodies`` onto ``ring`` and fan out colliding anchors."""

        layout = self.settings.layout
        radius, icon_radius = self._ring_radii(ring)
        projected = project_bodies(
            bodies,
            center_x=layout.center_x,
            center_y=layout.center_y,
            radius=radius,
            icon_radius=icon_radius,
        )
        return resolve_overlaps(projected, self.overlap_options(ring))
