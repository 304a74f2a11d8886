"""Tests for logging configuration."""

import io
import logging

from ledgerit import logging_setup


def _stream_handlers(logger, stream):
    """Handlers attached by configure_logging for the given stream."""
    return [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is stream
    ]


def test_configure_logging_writes_to_stream(reset_logging):
    stream = io.StringIO()
    logging_setup.configure_logging("INFO", fmt="%(levelname)s %(message)s", stream=stream)

    logging_setup.get_logger("ledgerit.domain.ledger").info("created %s", 1)

    assert stream.getvalue() == "INFO created 1\n"
    assert len(_stream_handlers(reset_logging, stream)) == 1
    assert reset_logging.propagate is False


def test_configure_logging_only_once(reset_logging):
    first = io.StringIO()
    second = io.StringIO()
    logging_setup.configure_logging("DEBUG", stream=first)
    logging_setup.configure_logging("ERROR", stream=second)

    assert reset_logging.level == logging.DEBUG
    assert len(_stream_handlers(reset_logging, first)) == 1
    assert _stream_handlers(reset_logging, second) == []


def test_level_from_env(reset_logging, monkeypatch):
    monkeypatch.setenv("LEDGERIT_LOG_LEVEL", "error")
    logging_setup.configure_logging(stream=io.StringIO())
    assert reset_logging.level == logging.ERROR


def test_invalid_level_falls_back_to_warning(reset_logging, monkeypatch):
    monkeypatch.setenv("LEDGERIT_LOG_LEVEL", "chatty")
    logging_setup.configure_logging("loud", stream=io.StringIO())
    assert reset_logging.level == logging.WARNING


def test_get_logger_is_silent_until_configured(reset_logging):
    for handler in list(reset_logging.handlers):
        reset_logging.removeHandler(handler)

    logging_setup.get_logger("ledgerit.database")

    assert any(isinstance(h, logging.NullHandler) for h in reset_logging.handlers)


def test_configure_replaces_null_handler(reset_logging):
    logging_setup.get_logger("ledgerit.cli")
    logging_setup.configure_logging("INFO", stream=io.StringIO())

    assert not any(isinstance(h, logging.NullHandler) for h in reset_logging.handlers)
