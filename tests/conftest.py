"""Shared fixtures: isolated config directory and scripted clipboard readers."""

import pytest

from clip_pop.config import CONFIG_DIR_ENV
from clip_pop.errors import ClipboardAccessError


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config directory override at a fresh temp folder."""
    directory = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(directory))
    return directory


@pytest.fixture(autouse=True)
def no_ambient_config_dir(monkeypatch):
    """Never touch the real user config directory from a test."""
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)


class ScriptedReader:
    """Clipboard reader returning queued values; exceptions in the queue are raised."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        value = self.values.pop(0)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def scripted_reader():
    return ScriptedReader


@pytest.fixture
def access_failure():
    return ClipboardAccessError("clipboard unavailable: busy")
