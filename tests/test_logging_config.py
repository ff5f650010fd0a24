"""Tests for logging configuration."""

import logging

import pytest

from huntsim.logging_config import LOG_LEVEL_ENV, configure_logging


@pytest.fixture(autouse=True)
def restore_levels():
    names = ("huntsim", "host.app")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_returns_package_logger(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    logger = configure_logging()
    assert logger.name == "huntsim"
    assert logger.level == logging.INFO


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert configure_logging().level == logging.DEBUG


def test_explicit_level_beats_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    assert configure_logging(level="warning").level == logging.WARNING


def test_extra_loggers_are_aligned(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    configure_logging(level="ERROR", extra_loggers=["host.app"])
    assert logging.getLogger("host.app").level == logging.ERROR


def test_module_loggers_inherit_package_level(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    configure_logging(level="WARNING")
    assert logging.getLogger("huntsim.scheduler").getEffectiveLevel() == logging.WARNING
