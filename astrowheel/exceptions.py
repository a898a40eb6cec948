"""Exception hierarchy for the chart geometry engine."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "AstroWheelError",
    "DegenerateGeometryError",
    "InvalidInputError",
    "MissingParameterError",
    "UnsupportedHouseSystemError",
]


class AstroWheelError(Exception):
    """Base class for errors raised by :mod:`astrowheel`."""


class InvalidInputError(AstroWheelError, ValueError):
    """Raised when an angle or coordinate falls outside its documented range."""


class UnsupportedHouseSystemError(AstroWheelError, ValueError):
    """Raised when a house system name cannot be resolved."""


class MissingParameterError(AstroWheelError, ValueError):
    """Raised when a house system is invoked without its required inputs."""

    def __init__(self, system: str, missing: Iterable[str]) -> None:
        self.system = system
        self.missing = tuple(missing)
        names = " and ".join(self.missing)
        super().__init__(f"{system} house system requires {names}")


class DegenerateGeometryError(AstroWheelError, ArithmeticError):
    """Internal failure inside a latitude-sensitive subdivision.

    Never escapes :mod:`astrowheel.houses`; the engine resolves it by
    falling back to the Porphyry subdivision.
    """
