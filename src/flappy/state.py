# src/flappy/state.py
"""
Session state machine and the fixed-step `update`.

    IDLE --flap--> RUNNING --pipe hit / ground--> ENDED --flap / reset--> IDLE
    any  --difficulty change / reset-->  IDLE

`update(state, events, rng)` is pure: it never mutates `state` and all the
randomness (pipe placement) comes from the `rng` it is handed.
"""
from __future__ import annotations
import enum
import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from .config import DIFFICULTY_DEFAULT, SEED_DEFAULT
from .avatar import Avatar, integrate, clamp, flap, rotation
from .obstacles import Obstacles, step_obstacles, pipe_gap, pipe_speed
from .collision import resolve
from .difficulty import profile_of, validate_profiles

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass(frozen=True)
class Events:
    """Inputs captured by the driver during one frame, applied at the next tick boundary."""
    flap: bool = False
    set_difficulty: Optional[str] = None
    reset: bool = False


NO_EVENTS = Events()


@dataclass(frozen=True)
class SessionState:
    difficulty: str = DIFFICULTY_DEFAULT
    started: bool = False
    over: bool = False
    score: int = 0
    high_score: int = 0
    frame: int = 0
    avatar: Avatar = Avatar()
    obstacles: Obstacles = ()

    @property
    def phase(self) -> Phase:
        if self.over:
            return Phase.ENDED
        return Phase.RUNNING if self.started else Phase.IDLE


def new_session(difficulty: str = DIFFICULTY_DEFAULT, high_score: int = 0) -> SessionState:
    profile_of(difficulty)  # unknown ids fail here, not mid-run
    return SessionState(difficulty=difficulty, high_score=high_score)


def reset(state: SessionState) -> SessionState:
    """Canonical idle state; only the difficulty and the best score survive."""
    return new_session(state.difficulty, state.high_score)


def end_session(state: SessionState) -> SessionState:
    # high score is committed on the over: False -> True edge only
    if state.over:
        return state
    logger.info("Game over: score=%d high=%d difficulty=%s",
                state.score, max(state.high_score, state.score), state.difficulty)
    return replace(state, over=True, high_score=max(state.high_score, state.score))


# --- Input transitions, keyed by (phase, event kind) ---

def _start(state: SessionState) -> SessionState:
    return replace(state, started=True, avatar=flap(state.avatar))


def _flap(state: SessionState) -> SessionState:
    return replace(state, avatar=flap(state.avatar))


def _restart(state: SessionState) -> SessionState:
    return reset(state)


Transition = Callable[[SessionState], SessionState]

TRANSITIONS: Dict[Tuple[Phase, str], Transition] = {
    (Phase.IDLE, "flap"): _start,
    (Phase.RUNNING, "flap"): _flap,
    (Phase.ENDED, "flap"): _restart,
    (Phase.IDLE, "reset"): _restart,
    (Phase.RUNNING, "reset"): _restart,
    (Phase.ENDED, "reset"): _restart,
}


def apply_events(state: SessionState, events: Events) -> Tuple[SessionState, bool]:
    """
    Apply difficulty change, reset and flap, in that order.
    Returns (state, started) where `started` is True when this input began a run.
    """
    started = False
    if events.set_difficulty is not None:
        profile_of(events.set_difficulty)
        logger.debug("Difficulty %s -> %s", state.difficulty, events.set_difficulty)
        state = reset(replace(state, difficulty=events.set_difficulty))
    for kind, fired in (("reset", events.reset), ("flap", events.flap)):
        if fired:
            before = state.phase
            state = TRANSITIONS[(before, kind)](state)
            if state.phase is not before:
                logger.debug("%s: %s -> %s", kind, before.value, state.phase.value)
                started = state.phase is Phase.RUNNING
    return state, started


def tick(state: SessionState, rng: random.Random) -> SessionState:
    """
    One fixed simulation step. Only a running session moves:
    avatar -> pipe stream -> collision & scoring.
    """
    if state.phase is not Phase.RUNNING:
        return state
    profile = profile_of(state.difficulty)

    avatar, hit_ground = clamp(integrate(state.avatar, profile.gravity))
    if hit_ground:
        return end_session(replace(state, avatar=avatar))

    frame, obstacles = step_obstacles(state.obstacles, state.frame, profile, state.score, rng)
    obstacles, score, collided = resolve(avatar, obstacles, state.score)

    state = replace(state, avatar=avatar, frame=frame, obstacles=obstacles, score=score)
    return end_session(state) if collided else state


def update(state: SessionState, events: Events, rng: random.Random) -> SessionState:
    """Sole entry point of the core: inputs at the tick boundary, then one tick."""
    state, started = apply_events(state, events)
    if started:
        # the starting flap owns this tick; physics begins on the next one
        return state
    return tick(state, rng)


# --- Read-only projection for renderers / observers ---

@dataclass(frozen=True)
class Snapshot:
    phase: Phase
    difficulty: str
    score: int
    high_score: int
    avatar_y: float
    avatar_vy: float
    tilt: float
    obstacles: Obstacles
    speed: float
    gap: float


def snapshot(state: SessionState) -> Snapshot:
    profile = profile_of(state.difficulty)
    return Snapshot(
        phase=state.phase,
        difficulty=state.difficulty,
        score=state.score,
        high_score=state.high_score,
        avatar_y=state.avatar.y,
        avatar_vy=state.avatar.vy,
        tilt=rotation(state.avatar),
        obstacles=state.obstacles,
        speed=pipe_speed(profile, state.score),
        gap=pipe_gap(profile, state.score),
    )


class Game:
    """
    Owns the current SessionState and the seeded pipe RNG for a driver.
    seed=None draws a random seed (kept in `self.seed` so runs can be reproduced).
    """
    def __init__(self, difficulty: str = DIFFICULTY_DEFAULT, seed: Optional[int] = SEED_DEFAULT):
        validate_profiles()
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.state = new_session(difficulty)
        logger.debug("Game created: difficulty=%s seed=%d", difficulty, seed)

    def update(self, events: Events = NO_EVENTS) -> SessionState:
        self.state = update(self.state, events, self.rng)
        return self.state

    def reseed(self, seed: Optional[int]) -> None:
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def snapshot(self) -> Snapshot:
        return snapshot(self.state)
