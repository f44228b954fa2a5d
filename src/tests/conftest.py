# src/tests/conftest.py
import os
import random

import pytest

# headless pygame for the renderer / env tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from src.flappy.avatar import Avatar
from src.flappy.state import SessionState


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def running():
    """A running normal-difficulty session with the avatar mid-air and no pipes."""
    return SessionState(difficulty="normal", started=True, avatar=Avatar(y=200.0, vy=0.0))
