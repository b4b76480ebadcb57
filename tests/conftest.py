import random

import pytest

from game.p3D.config import GameConfig
from game.p3D.driver import FrameDriver
from game.p3D.world import WorldState


@pytest.fixture(autouse=True)
def _seed():
    random.seed(1234)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def world(config):
    return WorldState(config)


@pytest.fixture
def driver(world):
    return FrameDriver(world=world, clock=lambda: 0.0)


@pytest.fixture
def fixed_random(monkeypatch):
    """Pin random.random() to a constant for the duration of a test"""
    def _pin(value):
        monkeypatch.setattr(random, "random", lambda: value)
    return _pin
