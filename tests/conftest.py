"""Shared pytest fixtures for the Pomodoro timer tests."""

import os
import sys
import tempfile

# Headless Qt, and keep settings/storage out of the real home directory.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("POMODORO_DATA_DIR", tempfile.mkdtemp(prefix="pomodoro-tests-"))

import pytest

from PyQt6.QtWidgets import QApplication

from pomodoro.database.db import configure_engine, init_db
from pomodoro.notifications import Notifier
from pomodoro.persistence import LocalStorage, SnapshotStore
from pomodoro.timer.engine import TimerEngine
from pomodoro.timer.state import TimerConfig

from helpers import FakeClock, RecordingChannel


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def config():
    return TimerConfig()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return LocalStorage()


@pytest.fixture
def store(storage, config):
    return SnapshotStore(storage, config)


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def notifier(qapp, channel):
    """Notifier with permission already granted."""
    n = Notifier(channel, is_available=lambda: True)
    n.request_permission()
    return n


@pytest.fixture
def engine(qapp, config, clock, store, notifier):
    """Fresh TimerEngine wired to a fake clock, storage and notifier."""
    e = TimerEngine(
        parent=None, config=config, clock=clock, store=store, notifier=notifier,
    )
    yield e
    e.shutdown()


@pytest.fixture
def bare_engine(qapp, config, clock):
    """TimerEngine without storage or notifier (pure state-machine tests)."""
    e = TimerEngine(parent=None, config=config, clock=clock)
    yield e
    e.shutdown()
