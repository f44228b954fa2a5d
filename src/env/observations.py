# src/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from src.flappy.config import WIDTH, PLAY_HEIGHT, PIPE_WIDTH, BIRD_X, BIRD_HALF
from src.flappy.obstacles import Obstacle, Obstacles, pipe_speed
from src.flappy.difficulty import profile_of
from src.flappy.state import SessionState

VY_SCALE = 10.0      # |vy| mapped to 1.0 (px/tick)
SPEED_SCALE = 10.0   # pipe speed mapped to 1.0 (px/tick)
OBS_SIZE = 6

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_obstacle(obstacles: Obstacles) -> Optional[Obstacle]:
    """First pipe whose trailing edge is not yet behind the avatar."""
    for ob in obstacles:
        if ob.right >= BIRD_X - BIRD_HALF:
            return ob
    return None


def build_observation(state: SessionState) -> np.ndarray:
    """
    Returns float32 (6,):
      [y_norm, vy_norm, next_dx, next_top, next_bottom, speed_norm]
    - y_norm: avatar center / PLAY_HEIGHT
    - vy_norm: vy / VY_SCALE, clipped to [-1, 1]
    - next_dx: distance from the avatar's back edge to the next pipe's trailing edge, / (WIDTH + PIPE_WIDTH)
    - next_top / next_bottom: gap edges / PLAY_HEIGHT (no pipe ahead -> 0.0 / 1.0, fully open)
    - speed_norm: current pipe speed / SPEED_SCALE
    """
    av = state.avatar
    y_norm = _clamp01(av.y / PLAY_HEIGHT)
    vy_norm = max(-1.0, min(1.0, av.vy / VY_SCALE))

    ob = next_obstacle(state.obstacles)
    if ob is None:
        dx, top, bottom = 1.0, 0.0, 1.0
    else:
        dx = _clamp01((ob.right - (BIRD_X - BIRD_HALF)) / (WIDTH + PIPE_WIDTH))
        top = _clamp01(ob.top / PLAY_HEIGHT)
        bottom = _clamp01(ob.bottom / PLAY_HEIGHT)

    speed = _clamp01(pipe_speed(profile_of(state.difficulty), state.score) / SPEED_SCALE)
    return np.array([y_norm, vy_norm, dx, top, bottom, speed], dtype=np.float32)
