"""Tests for opt-in logging setup and the observer helpers."""

from __future__ import annotations

import io
import logging

import pytest

from stochopt.foundation.logging import LOGGER_NAME, configure_stochopt_logging
from stochopt.foundation.observer import EventRecorder, LifecycleEvent, LoggingListener, MetaheuristicListener


@pytest.fixture
def clean_package_logger(monkeypatch):
    logger = logging.getLogger(LOGGER_NAME)
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logging.NOTSET)
    return logger


def test_configure_attaches_single_handler(clean_package_logger, monkeypatch):
    # pytest attaches its capture handler to the root logger for the test call
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    stream = io.StringIO()
    logger = configure_stochopt_logging(level=logging.DEBUG, stream=stream)
    assert logger is clean_package_logger
    assert len(logger.handlers) == 1
    assert logger.propagate is False
    logging.getLogger(f"{LOGGER_NAME}.engine").debug("hello")
    assert stream.getvalue() == "hello\n"
    configure_stochopt_logging(stream=stream)
    assert len(logger.handlers) == 1


def test_configure_respects_existing_root_handlers(monkeypatch):
    logger = logging.getLogger(LOGGER_NAME)
    monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
    monkeypatch.setattr(logger, "handlers", [])
    configure_stochopt_logging()
    assert logger.handlers == []


class _FakeRun:
    def __init__(self, step, state):
        self.step = step
        self.steps = 10
        self.state = state


class _Best:
    evaluation = 0.25


def test_event_recorder_is_a_listener():
    recorder = EventRecorder()
    assert isinstance(recorder, MetaheuristicListener)
    recorder.on_event(LifecycleEvent.INITIATED, _FakeRun(-1, []))
    recorder.on_event(LifecycleEvent.ADVANCED, _FakeRun(0, []))
    assert recorder.names() == ["initiated", "advanced"]
    assert recorder.events[1] == (LifecycleEvent.ADVANCED, 0)
    assert recorder.count(LifecycleEvent.ADVANCED) == 1


def test_logging_listener_reports_progress(caplog):
    listener = LoggingListener()
    with caplog.at_level(logging.INFO, logger="stochopt.progress"):
        listener.on_event(LifecycleEvent.EVALUATED, _FakeRun(1, [_Best()]))
        listener.on_event(LifecycleEvent.ADVANCED, _FakeRun(1, [_Best()]))
    assert len(caplog.records) == 1
    assert "step 1/10" in caplog.records[0].getMessage()
    assert "0.25" in caplog.records[0].getMessage()
