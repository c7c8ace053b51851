"""Test configuration and fixtures."""

import os
import sys
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src/ (same as main.py) and the test helpers to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

import pytest
from PySide6.QtWidgets import QApplication

from core.config import AppConfig
from core.state import AppState
from fakes import DeferredRunner, RecordingScheduler


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def app_state():
    return AppState(AppConfig())


@pytest.fixture()
def runner():
    return DeferredRunner()


@pytest.fixture()
def scheduler():
    return RecordingScheduler()


@pytest.fixture()
def notifications(app_state):
    seen = []
    app_state.notification.connect(seen.append)
    return seen
