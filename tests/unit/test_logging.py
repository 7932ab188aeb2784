"""Unit tests for the logging helpers."""

import logging
from logging.handlers import MemoryHandler

from rich.logging import RichHandler

from tally.logging import (
    ThirdPartyPrefixFilter,
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

# pylint: disable=magic-value-comparison


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


def test_prefix_filter_marks_third_party_records():
    """Third-party records get a short bracketed prefix; ours get none."""
    prefix_filter = ThirdPartyPrefixFilter()

    third_party = _record("sqlalchemy.engine.Engine")
    ours = _record("tally.service_layer.handlers")

    assert prefix_filter.filter(third_party) is True
    assert prefix_filter.filter(ours) is True
    assert third_party.prefix == "[sqlalchemy]"
    assert ours.prefix == ""


def test_console_handler_levels():
    """Debug mode forces DEBUG; otherwise the given level is used."""
    handler = config_console_handler(level=logging.WARNING)
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.WARNING
    assert any(isinstance(f, ThirdPartyPrefixFilter) for f in handler.filters)

    debug_handler = config_console_handler(level=logging.WARNING, debug_mode=True)
    assert debug_handler.level == logging.DEBUG
    assert not debug_handler.filters


def test_flight_recorder_writes_only_when_flushed(tmp_path):
    """Records stay in memory until a WARNING arrives, then all are written."""
    path = tmp_path / "latest.log"
    recorder = config_flight_recorder(path, capacity=100)
    assert isinstance(recorder, MemoryHandler)

    logger = logging.getLogger("tally.test.flight")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(recorder)
    try:
        logger.debug("quiet detail")
        assert not path.exists()

        logger.warning("something odd")
        content = path.read_text(encoding="utf-8")
        assert "quiet detail" in content
        assert "something odd" in content
    finally:
        logger.removeHandler(recorder)
        recorder.close()


def test_log_startup_summary(caplog, tmp_path):
    """The one-line summary is logged at INFO with diagnostics at DEBUG."""
    logger = logging.getLogger("tally.test.startup")
    with caplog.at_level(logging.DEBUG, logger="tally.test.startup"):
        log_startup(
            logger,
            app_version="1.2.3",
            level=logging.INFO,
            handlers=[],
            log_path=tmp_path / "latest.log",
            flight_recorder=True,
            flight_capacity=10,
            logger_levels={"sqlalchemy": logging.WARNING},
        )

    assert "TALLY 1.2.3: console=INFO, flight-recorder=ON" in caplog.messages
    assert any(m.startswith("Flight recorder: path=") for m in caplog.messages)
    assert "Per-logger overrides: {'sqlalchemy': 'WARNING'}" in caplog.messages
