"""Pytest configuration for astrowheel."""

from __future__ import annotations

import pytest

from astrowheel.models import Body


@pytest.fixture(autouse=True)
def _isolated_config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("ASTROWHEEL_HOME", str(tmp_path / "home"))


@pytest.fixture
def natal_bodies() -> list[Body]:
    return [
        Body("Sun", 0.0, "#FFD700"),
        Body("Moon", 182.0, "#C0C0C0"),
        Body("Mars", 91.0, "#B22222"),
        Body("Venus", 240.0, "#2E8B57"),
    ]
