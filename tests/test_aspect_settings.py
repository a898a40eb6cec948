from __future__ import annotations

import pytest
from pydantic import ValidationError

from astrowheel.aspects import (
    DEFAULT_ASPECTS,
    AspectSettings,
    ChartAspectSettings,
    detect_aspects,
    renderable_aspects,
    stroke_dasharray,
)
from astrowheel.models import Body


def test_default_table_is_the_five_majors() -> None:
    names = [d.name for d in AspectSettings().definitions()]
    assert names == ["conjunction", "opposition", "trine", "square", "sextile"]
    assert AspectSettings().definition("Trine") == DEFAULT_ASPECTS["trine"]


def test_partial_type_falls_back_to_builtin_styling() -> None:
    settings = AspectSettings(orb=3.0, types={"Square": {"color": "#123456"}})
    (square,) = settings.definitions()
    assert square.name == "square"
    assert square.angle == 90.0
    assert square.orb == 3.0
    assert square.color == "#123456"
    assert square.symbol == "SQR"


def test_minor_type_angle_comes_from_table() -> None:
    settings = AspectSettings(types={"quincunx": {"tolerance": 2}})
    definition = settings.definition("quincunx")
    assert definition is not None
    assert definition.angle == 150.0
    assert definition.orb == 2.0
    assert definition.symbol == "QUI"
    assert definition.color == "#888888"


def test_camel_case_aliases_accepted() -> None:
    settings = AspectSettings(
        types={"trigon": {"idealAngle": 120, "lineStyle": "dashed", "abbr": "Tg"}}
    )
    definition = settings.definition("trigon")
    assert definition is not None
    assert definition.angle == 120.0
    assert definition.line_style == "dashed"
    assert definition.symbol == "Tg"


def test_unknown_type_without_angle_rejected() -> None:
    with pytest.raises(ValidationError, match="needs an angle"):
        AspectSettings(types={"mystery": {"orb": 1.0}})


def test_invalid_line_style_rejected() -> None:
    with pytest.raises(ValidationError):
        AspectSettings(types={"trine": {"line_style": "wavy"}})


def test_legacy_flat_payload_becomes_primary() -> None:
    chart = ChartAspectSettings.model_validate({"orb": 2.0, "types": {"trine": {}}})
    assert chart.primary.orb == 2.0
    assert [d.name for d in chart.primary.definitions()] == ["trine"]
    assert chart.secondary == AspectSettings()


def test_relationship_aliases() -> None:
    chart = ChartAspectSettings.model_validate(
        {
            "primaryPrimary": {"orb": 1.0},
            "secondary_secondary": {"enabled": False},
            "primarySecondary": {"orb": 4.0},
        }
    )
    assert chart.for_relationship("primary").orb == 1.0
    assert chart.for_relationship("secondary").enabled is False
    assert chart.for_relationship("synastry").orb == 4.0
    with pytest.raises(ValueError):
        chart.for_relationship("transit")  # type: ignore[arg-type]


def test_renderable_filters_hidden_and_disabled() -> None:
    settings = AspectSettings(
        types={
            "conjunction": {"line_style": "none"},
            "opposition": {"enabled": False},
            "trine": {"line_style": "dotted"},
        }
    )
    bodies = [Body("A", 0.0), Body("B", 0.5), Body("C", 180.0), Body("D", 120.0)]
    found = detect_aspects(bodies, settings)
    assert {a.name for a in found} == {"conjunction", "opposition", "trine"}
    drawn = renderable_aspects(found, settings)
    assert {a.name for a in drawn} == {"trine"}
    assert renderable_aspects(found, settings.model_copy(update={"enabled": False})) == []


@pytest.mark.parametrize(
    "style, expected",
    [("solid", "none"), ("dashed", "5, 5"), ("dotted", "1, 3"), (None, "none")],
)
def test_stroke_dasharray(style: str | None, expected: str) -> None:
    assert stroke_dasharray(style) == expected
