# src/flappy/obstacles.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass, replace
from typing import Tuple

from .config import (
    WIDTH, PIPE_WIDTH, PIPE_MIN, PIPE_MAX, PIPE_INTERVAL,
    MIN_GAP, GAP_DECAY_EVERY, GAP_DECAY_STEP, SPEED_GROWTH_EVERY, SPEED_GROWTH_STEP
)
from .difficulty import DifficultyProfile


@dataclass(frozen=True)
class Obstacle:
    """A pipe pair: solid above `top`, solid below `bottom`, open in between."""
    x: float           # left edge
    top: float         # y of the gap's upper edge
    bottom: float      # y of the gap's lower edge
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + PIPE_WIDTH

    @property
    def gap(self) -> float:
        return self.bottom - self.top


Obstacles = Tuple[Obstacle, ...]


def pipe_gap(profile: DifficultyProfile, score: int) -> float:
    """Gap narrows by GAP_DECAY_STEP every GAP_DECAY_EVERY points, floored at MIN_GAP."""
    return max(MIN_GAP, profile.gap - (score // GAP_DECAY_EVERY) * GAP_DECAY_STEP)


def pipe_speed(profile: DifficultyProfile, score: int) -> float:
    return profile.speed + (score // SPEED_GROWTH_EVERY) * SPEED_GROWTH_STEP


def spawn_obstacle(rng: random.Random, gap: float) -> Obstacle:
    """New pipe at the right edge with its gap top drawn on whole pixels of the free range."""
    room = PIPE_MAX - PIPE_MIN - gap
    top = math.floor(rng.random() * room) + PIPE_MIN
    return Obstacle(x=float(WIDTH), top=float(top), bottom=float(top + gap))


def advance(obstacles: Obstacles, speed: float) -> Obstacles:
    return tuple(replace(ob, x=ob.x - speed) for ob in obstacles)


def retire(obstacles: Obstacles) -> Obstacles:
    """Drop pipes fully past the left edge. Oldest first, so only the head is ever inspected."""
    start = 0
    while start < len(obstacles) and obstacles[start].x < -PIPE_WIDTH:
        start += 1
    return obstacles[start:] if start else obstacles


def step_obstacles(obstacles: Obstacles,
                   frame: int,
                   profile: DifficultyProfile,
                   score: int,
                   rng: random.Random) -> Tuple[int, Obstacles]:
    """
    One tick of the pipe stream: bump the frame counter, spawn on the cadence,
    scroll everything at the current speed, evict what left the screen.
    Returns (new_frame, new_obstacles).
    """
    frame += 1
    if frame % PIPE_INTERVAL == 0:
        obstacles = obstacles + (spawn_obstacle(rng, pipe_gap(profile, score)),)
    obstacles = advance(obstacles, pipe_speed(profile, score))
    return frame, retire(obstacles)
