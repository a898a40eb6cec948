from __future__ import annotations

import logging
import math

from astrowheel.aspects import AspectCache, AspectEngine, AspectSettings, fingerprint
from astrowheel.models import Body


def test_repeated_detection_returns_cached_list(natal_bodies, caplog) -> None:
    engine = AspectEngine()
    settings = AspectSettings()
    with caplog.at_level(logging.DEBUG, logger="astrowheel.aspects.engine"):
        first = engine.detect(natal_bodies, settings)
        second = engine.detect(list(natal_bodies), settings)
    assert second is first
    assert engine.cache.hits == 1
    assert engine.cache.misses == 1
    assert "Using cached aspects" in caplog.text


def test_tiny_longitude_change_invalidates(natal_bodies) -> None:
    engine = AspectEngine()
    settings = AspectSettings()
    first = engine.detect(natal_bodies, settings)
    moved = list(natal_bodies)
    moved[0] = Body("Sun", math.nextafter(0.0, 1.0))
    second = engine.detect(moved, settings)
    assert second is not first
    assert engine.cache.misses == 2


def test_settings_change_invalidates(natal_bodies) -> None:
    engine = AspectEngine()
    first = engine.detect(natal_bodies, AspectSettings())
    second = engine.detect(natal_bodies, AspectSettings(orb=3.0, types={"trine": {}}))
    assert second is not first
    assert [a.name for a in second] == ["trine"]


def test_single_slot_holds_latest_only(natal_bodies) -> None:
    engine = AspectEngine()
    settings = AspectSettings()
    first = engine.detect(natal_bodies, settings)
    engine.detect(natal_bodies[:2], settings)
    again = engine.detect(natal_bodies, settings)
    assert again is not first
    assert len(engine.cache) == 1


def test_fewer_than_two_bodies_bypass_cache() -> None:
    engine = AspectEngine()
    assert engine.detect([Body("Sun", 0.0)], AspectSettings()) == []
    assert len(engine.cache) == 0
    assert engine.cache.misses == 0


def test_injected_cache_shared_between_engines(natal_bodies) -> None:
    cache: AspectCache = AspectCache()
    settings = AspectSettings()
    first = AspectEngine(cache).detect(natal_bodies, settings)
    second = AspectEngine(cache).detect(natal_bodies, settings)
    assert second is first
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == 0


def test_fingerprint_depends_on_order_and_names() -> None:
    settings = AspectSettings()
    a = [Body("Sun", 0.0), Body("Moon", 90.0)]
    b = [Body("Moon", 90.0), Body("Sun", 0.0)]
    c = [Body("Sun", 0.0), Body("Mars", 90.0)]
    assert fingerprint(a, settings) == fingerprint(list(a), settings)
    assert fingerprint(a, settings) != fingerprint(b, settings)
    assert fingerprint(a, settings) != fingerprint(c, settings)
