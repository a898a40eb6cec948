"""Consumer-side helpers deciding which detected aspects get drawn."""

from __future__ import annotations

from collections.abc import Iterable

from .matcher import Aspect
from .settings import AspectSettings

__all__ = ["renderable_aspects", "stroke_dasharray"]

_DASHES = {
    "solid": "none",
    "dashed": "5, 5",
    "dotted": "1, 3",
}


def stroke_dasharray(line_style: str | None) -> str:
    return _DASHES.get((line_style or "solid").lower(), "none")


def renderable_aspects(aspects: Iterable[Aspect], settings: AspectSettings) -> list[Aspect]:
    """Drop aspects whose type is disabled or drawn with ``line_style='none'``.

    Nothing is drawn when the relationship itself is disabled.
    """

    if not settings.enabled:
        return []
    return [a for a in aspects if a.enabled and a.line_style != "none"]
