"""Configuration models and helpers for chart geometry settings."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from astrowheel.aspects.settings import ChartAspectSettings
from astrowheel.houses.engine import HouseSystem, resolve_house_system

CURRENT_SETTINGS_SCHEMA_VERSION = 1

# -------------------- Settings Schema --------------------


class HousesCfg(BaseModel):
    """Birth angles and house system selection."""

    ascendant: float = Field(default=0.0, ge=0.0, lt=360.0)
    midheaven: Optional[float] = 270.0
    latitude: Optional[float] = Field(default=0.0, ge=-90.0, le=90.0)
    system: HouseSystem = HouseSystem.PLACIDUS

    @field_validator("system", mode="before")
    @classmethod
    def _resolve_system(cls, value: object) -> object:
        if isinstance(value, str):
            return resolve_house_system(value)
        return value

    def cache_key(self) -> tuple[float, Optional[float], Optional[float], str]:
        return (self.ascendant, self.midheaven, self.latitude, self.system.value)


class LayoutCfg(BaseModel):
    """Ring radii and spacing for body placement (SVG user units)."""

    center_x: float = 230.0
    center_y: float = 230.0
    planet_radius: float = Field(default=105.0, gt=0.0)
    icon_radius: Optional[float] = Field(default=None, gt=0.0)
    secondary_radius: float = Field(default=75.0, gt=0.0)
    min_distance: float = Field(default=24.0, ge=0.0)
    max_spread_deg: float = 30.0
    icon_size: float = 24.0

    @field_validator("max_spread_deg", mode="before")
    @classmethod
    def _cap_spread(cls, value: float) -> float:
        numeric = float(value)
        return max(0.0, min(180.0, numeric))


class LoggingCfg(BaseModel):
    """Level for the ``astrowheel`` logger; ``None`` leaves logging untouched."""

    level: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    houses: HousesCfg = Field(default_factory=HousesCfg)
    aspects: ChartAspectSettings = Field(default_factory=ChartAspectSettings)
    layout: LayoutCfg = Field(default_factory=LayoutCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)

    @model_validator(mode="before")
    @classmethod
    def _alias_legacy_fields(cls, values: Dict[str, object]):
        """Accept a legacy top-level ``aspect_settings`` block as the primary relationship."""

        if isinstance(values, dict) and "aspect_settings" in values:
            values = dict(values)
            legacy = values.pop("aspect_settings")
            aspects = dict(values.get("aspects") or {})
            aspects.setdefault("primary", legacy)
            values["aspects"] = aspects
        return values


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("ASTROWHEEL_HOME", str(Path.home() / ".astrowheel")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="json")
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    data = deepcopy(raw)
    data["schema_version"] = _coerce_schema_version(raw.get("schema_version"))
    return Settings(**data)
