# src/flappy/collision.py
from __future__ import annotations
from dataclasses import replace
from typing import List, Tuple

from .config import BIRD_X, BIRD_HALF
from .avatar import Avatar
from .obstacles import Obstacle, Obstacles

# avatar's fixed horizontal span
BIRD_LEFT = BIRD_X - BIRD_HALF
BIRD_RIGHT = BIRD_X + BIRD_HALF


def overlaps_horizontally(ob: Obstacle) -> bool:
    return BIRD_RIGHT > ob.x and BIRD_LEFT < ob.right


def hits(avatar: Avatar, ob: Obstacle) -> bool:
    """Avatar box touches a pipe body: horizontal overlap and not fully inside the gap."""
    if not overlaps_horizontally(ob):
        return False
    return avatar.top < ob.top or avatar.bottom > ob.bottom


def has_passed(ob: Obstacle) -> bool:
    # trailing edge strictly behind the avatar's leading edge; excludes any overlap
    return ob.right < BIRD_LEFT


def resolve(avatar: Avatar, obstacles: Obstacles, score: int) -> Tuple[Obstacles, int, bool]:
    """
    Collision + scoring pass over pipes in ascending x.
    Stops at the first hit (the session is over, nothing else counts this tick).
    Each pipe scores once, guarded by its `passed` flag.
    Returns (obstacles, score, collided).
    """
    out: List[Obstacle] = []
    collided = False
    for i, ob in enumerate(obstacles):
        if hits(avatar, ob):
            collided = True
            out.extend(obstacles[i:])
            break
        if not ob.passed and has_passed(ob):
            ob = replace(ob, passed=True)
            score += 1
        out.append(ob)
    return tuple(out), score, collided
