import random

import pytest

import config


@pytest.fixture(autouse=True)
def quiet_console(monkeypatch):
    monkeypatch.setattr(config, "ENABLE_GAME_EVENT_LOGGING", False)


@pytest.fixture
def rng():
    return random.Random(1234)
