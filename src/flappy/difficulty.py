# src/flappy/difficulty.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping

from .config import DIFFICULTY_SETTINGS, MIN_GAP, PIPE_MIN, PIPE_MAX


class ConfigError(ValueError):
    """Raised when the static game configuration cannot produce a playable session."""


@dataclass(frozen=True)
class DifficultyProfile:
    gap: float       # base pipe gap (px)
    speed: float     # base horizontal pipe speed (px/tick)
    gravity: float   # vertical acceleration (px/tick^2)


DIFFICULTIES: Dict[str, DifficultyProfile] = {
    name: DifficultyProfile(gap=float(s["gap"]), speed=float(s["speed"]), gravity=float(s["gravity"]))
    for name, s in DIFFICULTY_SETTINGS.items()
}


def profile_of(difficulty: str) -> DifficultyProfile:
    try:
        return DIFFICULTIES[difficulty]
    except KeyError:
        raise ConfigError(
            f"Unknown difficulty {difficulty!r} (expected one of {sorted(DIFFICULTIES)})"
        ) from None


def validate_profiles(profiles: Mapping[str, DifficultyProfile] = DIFFICULTIES) -> None:
    """
    Startup check that every preset can spawn pipes:
    - all fields strictly positive,
    - base gap not below MIN_GAP (the narrowed gap never goes under it),
    - the gap plus both margins leaves room for the random top edge.
    """
    if not profiles:
        raise ConfigError("No difficulty profiles configured")
    for name, p in profiles.items():
        if p.gap <= 0 or p.speed <= 0 or p.gravity <= 0:
            raise ConfigError(f"Difficulty {name!r}: gap, speed and gravity must be > 0 ({p})")
        if p.gap < MIN_GAP:
            raise ConfigError(f"Difficulty {name!r}: gap {p.gap} is below MIN_GAP={MIN_GAP}")
        room = PIPE_MAX - PIPE_MIN - p.gap
        if room <= 0:
            raise ConfigError(
                f"Difficulty {name!r}: gap {p.gap} leaves no room between margins "
                f"[{PIPE_MIN}, {PIPE_MAX}]"
            )
