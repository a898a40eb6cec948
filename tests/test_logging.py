from __future__ import annotations

import logging

import pytest

from astrowheel import ChartGeometry, Settings
from astrowheel.boot import LOGGER_NAME, configure_logging, get_logger
from astrowheel.boot.logging import _coerce_level


@pytest.fixture(autouse=True)
def _restore_package_logger(monkeypatch):
    monkeypatch.delenv("ASTROWHEEL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, logging.WARNING),
        ("", logging.WARNING),
        ("debug", logging.DEBUG),
        (" Info ", logging.INFO),
        ("15", 15),
        (logging.ERROR, logging.ERROR),
        ("chatty", logging.WARNING),
    ],
)
def test_coerce_level(value, expected) -> None:
    assert _coerce_level(value) == expected


def test_only_package_logger_is_touched() -> None:
    root = logging.getLogger()
    root_handlers, root_level = list(root.handlers), root.level
    logger = configure_logging("debug")
    assert logger is get_logger()
    assert logger.name == "astrowheel"
    assert logger.level == logging.DEBUG
    assert logging.getLogger("astrowheel.houses.engine").getEffectiveLevel() == logging.DEBUG
    assert root.handlers == root_handlers
    assert root.level == root_level


def test_package_env_var_beats_generic(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert configure_logging().level == logging.ERROR
    monkeypatch.setenv("ASTROWHEEL_LOG_LEVEL", "info")
    assert configure_logging().level == logging.INFO
    assert configure_logging("debug").level == logging.DEBUG


def test_stream_handler_attached_once() -> None:
    configure_logging("info", stream=True)
    logger = configure_logging("info", stream=True)
    flagged = [h for h in logger.handlers if getattr(h, "_astrowheel_handler", False)]
    assert len(flagged) == 1
    assert logger.propagate is False


def test_chart_applies_configured_level(caplog) -> None:
    ChartGeometry(Settings(logging={"level": "debug"}))
    assert get_logger().level == logging.DEBUG
    with caplog.at_level(logging.DEBUG, logger="astrowheel.chart"):
        ChartGeometry().houses()
    assert "Computed Placidus cusps" in caplog.text


def test_chart_leaves_logging_alone_by_default() -> None:
    before = get_logger().level
    ChartGeometry()
    assert get_logger().level == before
