"""Aspect configuration models."""

from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from .definitions import (
    ASPECT_ANGLES,
    DEFAULT_ASPECTS,
    DEFAULT_COLOR,
    DEFAULT_LINE_STYLE,
    AspectDefinition,
    default_symbol,
)

__all__ = [
    "AspectSettings",
    "AspectTypeCfg",
    "ChartAspectSettings",
    "LineStyle",
    "Relationship",
]


LineStyle = Literal["solid", "dashed", "dotted", "none"]
Relationship = Literal["primary", "secondary", "synastry"]


class AspectTypeCfg(BaseModel):
    """One configured aspect type. Omitted fields fall back to the built-ins."""

    angle: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=180.0,
        validation_alias=AliasChoices("angle", "idealAngle", "ideal_angle"),
    )
    orb: Optional[float] = Field(
        default=None,
        ge=0.0,
        validation_alias=AliasChoices("orb", "tolerance"),
    )
    color: Optional[str] = None
    line_style: Optional[LineStyle] = Field(
        default=None,
        validation_alias=AliasChoices("line_style", "lineStyle"),
    )
    symbol: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("symbol", "abbr"),
    )
    enabled: Optional[bool] = None


class AspectSettings(BaseModel):
    """Aspect detection settings for one body-set relationship.

    ``orb`` is the tolerance for configured types that carry none of their
    own. When ``types`` is ``None`` the built-in table is used as-is.
    """

    enabled: bool = True
    orb: float = Field(default=6.0, ge=0.0)
    types: Optional[Dict[str, AspectTypeCfg]] = None

    @field_validator("types", mode="before")
    @classmethod
    def _lowercase_names(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        return {str(key).strip().lower(): item for key, item in value.items()}

    @model_validator(mode="after")
    def _require_known_angles(self) -> "AspectSettings":
        for name, cfg in (self.types or {}).items():
            if cfg.angle is None and name not in ASPECT_ANGLES:
                raise ValueError(f"aspect type '{name}' needs an angle")
        return self

    def definitions(self) -> tuple[AspectDefinition, ...]:
        """Resolve the configured types against the built-in table."""

        if self.types is None:
            return tuple(DEFAULT_ASPECTS.values())
        return tuple(self._resolve(name, cfg) for name, cfg in self.types.items())

    def definition(self, name: str) -> AspectDefinition | None:
        key = name.strip().lower()
        for item in self.definitions():
            if item.name == key:
                return item
        return None

    def _resolve(self, name: str, cfg: AspectTypeCfg) -> AspectDefinition:
        base = DEFAULT_ASPECTS.get(name)
        if cfg.angle is not None:
            angle = cfg.angle
        elif base is not None:
            angle = base.angle
        else:
            angle = ASPECT_ANGLES[name]
        return AspectDefinition(
            name=name,
            angle=float(angle),
            orb=float(cfg.orb if cfg.orb is not None else self.orb),
            color=cfg.color or (base.color if base else DEFAULT_COLOR),
            line_style=cfg.line_style or (base.line_style if base else DEFAULT_LINE_STYLE),
            symbol=cfg.symbol or (base.symbol if base else default_symbol(name)),
            enabled=cfg.enabled if cfg.enabled is not None else True,
        )


_LEGACY_KEYS = frozenset({"enabled", "orb", "types"})


class ChartAspectSettings(BaseModel):
    """Aspect settings per relationship: within each wheel and across them."""

    primary: AspectSettings = Field(
        default_factory=AspectSettings,
        validation_alias=AliasChoices("primary", "primary_primary", "primaryPrimary"),
    )
    secondary: AspectSettings = Field(
        default_factory=AspectSettings,
        validation_alias=AliasChoices("secondary", "secondary_secondary", "secondarySecondary"),
    )
    synastry: AspectSettings = Field(
        default_factory=AspectSettings,
        validation_alias=AliasChoices("synastry", "primary_secondary", "primarySecondary"),
    )

    @model_validator(mode="before")
    @classmethod
    def _alias_legacy_fields(cls, values: object) -> object:
        """Treat a flat single-relationship payload as the primary settings."""

        if isinstance(values, dict) and values and set(values) <= _LEGACY_KEYS:
            return {"primary": dict(values)}
        return values

    def for_relationship(self, relationship: Relationship) -> AspectSettings:
        if relationship == "primary":
            return self.primary
        if relationship == "secondary":
            return self.secondary
        if relationship == "synastry":
            return self.synastry
        raise ValueError(f"unknown relationship {relationship!r}")
