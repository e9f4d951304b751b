"""Shared pytest fixtures for Countdown tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from countdown.timer.engine import TimerEngine
from countdown.timer.frame_clock import FrameClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def frame_clock(qapp):
    """Frame clock that only ticks when the test calls ``advance``."""
    c = FrameClock()
    yield c
    c.stop()


@pytest.fixture
def make_engine(frame_clock):
    """Factory for engines bound to ``frame_clock``; destroyed after the test."""
    created = []

    def factory(length=10, **kwargs):
        e = TimerEngine(length, frame_clock, **kwargs)
        created.append(e)
        return e

    yield factory
    for e in created:
        e.destroy()


@pytest.fixture
def engine(make_engine):
    """Fresh 10 second TimerEngine."""
    return make_engine(10)
