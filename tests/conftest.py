"""Shared pytest fixtures: headless Qt, deterministic state and temp paths."""

import os
import random

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from gui.qt import QCoreApplication
from core.chart_state import ChartState
from core.curve_sampler import CurveSampler
from core.path_manager import PathManager
from core.settings_manager import SettingsManager


class FakeScheduler:
    """Collects deferred callbacks instead of starting Qt timers."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay_ms, callback):
        self.calls.append((delay_ms, callback))

    def fire(self, index):
        self.calls[index][1]()

    def fire_all(self):
        for _delay, callback in list(self.calls):
            callback()


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def sampler():
    return CurveSampler.shared()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def chart_state(scheduler):
    return ChartState(rng=random.Random(1234), scheduler=scheduler)


@pytest.fixture
def path_manager(tmp_path):
    return PathManager(base_dir=str(tmp_path), executable_path="python", main_script_path=str(tmp_path / "main.py"))


@pytest.fixture
def settings_manager(path_manager):
    return SettingsManager(path_manager)
