from __future__ import annotations

import pytest

from astrowheel.aspects import (
    AspectDefinition,
    AspectSettings,
    detect_aspects,
    detect_cross_aspects,
    match_pair,
)
from astrowheel.models import Body


def test_opposition_deviation_reported() -> None:
    aspects = detect_aspects([Body("Sun", 0.0), Body("Moon", 182.0)], AspectSettings())
    assert len(aspects) == 1
    hit = aspects[0]
    assert (hit.body_a, hit.body_b, hit.name) == ("Sun", "Moon", "opposition")
    assert hit.separation == pytest.approx(178.0)
    assert hit.deviation == pytest.approx(2.0)
    assert hit.orb == 6.0
    assert hit.color == "#DC143C"
    assert hit.symbol == "OPP"
    assert not hit.is_cross


def test_pairs_visited_in_input_order(natal_bodies) -> None:
    aspects = detect_aspects(natal_bodies, AspectSettings())
    summary = [(a.body_a, a.body_b, a.name) for a in aspects]
    assert summary == [
        ("Sun", "Moon", "opposition"),
        ("Sun", "Mars", "square"),
        ("Sun", "Venus", "trine"),
        ("Moon", "Mars", "square"),
        ("Moon", "Venus", "sextile"),
    ]


def test_orb_boundary_is_inclusive() -> None:
    settings = AspectSettings(types={"square": {"orb": 2.0}})
    hits = detect_aspects([Body("A", 0.0), Body("B", 92.0)], settings)
    assert [a.name for a in hits] == ["square"]
    misses = detect_aspects([Body("A", 0.0), Body("B", 92.01)], settings)
    assert misses == []


def test_separation_measured_across_aries() -> None:
    aspects = detect_aspects([Body("A", 355.0), Body("B", 3.0)], AspectSettings())
    assert [a.name for a in aspects] == ["conjunction"]
    assert aspects[0].separation == pytest.approx(8.0)


@pytest.mark.parametrize("bodies", [[], [Body("Sun", 10.0)]])
def test_fewer_than_two_bodies(bodies: list[Body]) -> None:
    assert detect_aspects(bodies, AspectSettings()) == []


def test_overlapping_orbs_yield_every_match() -> None:
    settings = AspectSettings(
        types={
            "square": {"orb": 10.0},
            "quintile": {"orb": 10.0},
        }
    )
    hits = detect_aspects([Body("A", 0.0), Body("B", 80.0)], settings)
    assert [(a.name, a.deviation) for a in hits] == [
        ("square", pytest.approx(10.0)),
        ("quintile", pytest.approx(8.0)),
    ]


def test_disabled_types_are_still_reported() -> None:
    settings = AspectSettings(types={"trine": {"enabled": False}})
    hits = detect_aspects([Body("A", 0.0), Body("B", 120.0)], settings)
    assert len(hits) == 1
    assert hits[0].enabled is False


def test_duplicate_names_rejected() -> None:
    with pytest.raises(ValueError, match="duplicate"):
        detect_aspects([Body("Sun", 0.0), Body("Sun", 90.0)], AspectSettings())


def test_cross_aspects_full_product() -> None:
    primary = [Body("Sun", 0.0), Body("Moon", 90.0)]
    secondary = [Body("Sun", 180.5), Body("Venus", 85.0)]
    hits = detect_cross_aspects(primary, secondary, AspectSettings())
    summary = [(a.body_a, a.body_b, a.name) for a in hits]
    assert summary == [
        ("Sun", "Sun", "opposition"),
        ("Sun", "Venus", "square"),
        ("Moon", "Sun", "square"),
        ("Moon", "Venus", "conjunction"),
    ]
    assert all(a.is_cross for a in hits)


def test_cross_aspects_single_bodies_are_enough() -> None:
    hits = detect_cross_aspects([Body("Sun", 0.0)], [Body("Moon", 0.0)], AspectSettings())
    assert [a.name for a in hits] == ["conjunction"]


@pytest.mark.parametrize("left, right", [([], [Body("Moon", 0.0)]), ([Body("Sun", 0.0)], [])])
def test_cross_aspects_empty_side(left: list[Body], right: list[Body]) -> None:
    assert detect_cross_aspects(left, right, AspectSettings()) == []


def test_match_pair_with_explicit_definitions() -> None:
    definitions = [AspectDefinition("septile", 51.4286, 1.0)]
    hits = match_pair(Body("A", 10.0), Body("B", 61.0), definitions)
    assert len(hits) == 1
    assert hits[0].deviation == pytest.approx(0.4286, abs=1e-6)
