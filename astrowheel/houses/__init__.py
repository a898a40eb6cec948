"""House system computation utilities.

This subpackage groups functionality for calculating house cusps while
respecting fallback policies at extreme latitudes.
"""

from .engine import (
    HOUSE_ALIASES,
    HousePolicy,
    HouseResult,
    HouseSystem,
    calculate_house_cusps,
    compute_houses,
    house_from_position,
    house_of,
    house_system_descriptions,
    list_house_systems,
    required_parameters,
    resolve_house_system,
)

__all__ = [
    "HOUSE_ALIASES",
    "HousePolicy",
    "HouseResult",
    "HouseSystem",
    "calculate_house_cusps",
    "compute_houses",
    "house_from_position",
    "house_of",
    "house_system_descriptions",
    "list_house_systems",
    "required_parameters",
    "resolve_house_system",
]
