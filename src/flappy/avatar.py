# src/flappy/avatar.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple

from .config import HEIGHT, PLAY_HEIGHT, BIRD_HALF, FLAP


@dataclass(frozen=True)
class Avatar:
    """
    The bird. Only vertical motion:
    - y is the vertical center (px, grows downward)
    - vy is px/tick, negative = moving up
    """
    y: float = HEIGHT / 2
    vy: float = 0.0

    @property
    def top(self) -> float:
        return self.y - BIRD_HALF

    @property
    def bottom(self) -> float:
        return self.y + BIRD_HALF


def integrate(avatar: Avatar, gravity: float) -> Avatar:
    """One tick of constant-acceleration motion (velocity first, then position)."""
    vy = avatar.vy + gravity
    return Avatar(y=avatar.y + vy, vy=vy)


def flap(avatar: Avatar) -> Avatar:
    return replace(avatar, vy=FLAP)


def clamp(avatar: Avatar) -> Tuple[Avatar, bool]:
    """
    Keep the avatar inside [BIRD_HALF, PLAY_HEIGHT - BIRD_HALF].
    Ground contact freezes it on the ground and reports True;
    the ceiling is a soft stop that only kills the velocity.
    """
    if avatar.bottom >= PLAY_HEIGHT:
        return Avatar(y=PLAY_HEIGHT - BIRD_HALF, vy=avatar.vy), True
    if avatar.top < 0:
        return Avatar(y=BIRD_HALF, vy=0.0), False
    return avatar, False


def rotation(avatar: Avatar) -> float:
    # radians, nose-down positive
    return min(avatar.vy / 10.0, 0.5)
