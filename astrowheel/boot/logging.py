"""Opt-in logging setup for the ``astrowheel`` logger hierarchy.

Importing the library never touches logging. Applications either call
:func:`configure_logging` themselves or set ``logging.level`` in the
settings file, which :class:`astrowheel.chart.ChartGeometry` applies.
The root logger is left alone in both cases.
"""

from __future__ import annotations

import logging
import os

__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]

LOGGER_NAME = "astrowheel"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_HANDLER_FLAG = "_astrowheel_handler"


def _coerce_level(value: str | int | None, default: int = logging.WARNING) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if not name:
        return default
    if name.isdigit():
        return int(name)
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else default


def configure_logging(level: str | int | None = None, *, stream: bool = False) -> logging.Logger:
    """Set the level of the ``astrowheel`` logger and optionally give it a handler.

    ``level`` falls back to ``ASTROWHEEL_LOG_LEVEL`` and then ``LOG_LEVEL``;
    unknown names mean WARNING. With ``stream=True`` a stderr handler is
    attached once and propagation to the root logger is switched off so
    records are not printed twice. Calling again is safe.
    """

    if level is None:
        level = os.getenv("ASTROWHEEL_LOG_LEVEL") or os.getenv("LOG_LEVEL")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_coerce_level(level))
    if stream:
        if not any(getattr(h, _HANDLER_FLAG, False) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            setattr(handler, _HANDLER_FLAG, True)
            logger.addHandler(handler)
        logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)
