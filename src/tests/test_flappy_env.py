# src/tests/test_flappy_env.py
"""
Tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  python -m pytest src/tests/test_flappy_env.py
"""
from __future__ import annotations
from typing import List, Tuple

import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from src.env.flappy_env import FlappyEnv
from src.flappy.avatar import Avatar
from src.flappy.config import WIDTH, HEIGHT, PLAY_HEIGHT, BIRD_X, BIRD_HALF, PIPE_WIDTH
from src.flappy.difficulty import ConfigError
from src.flappy.obstacles import Obstacle
from src.flappy.state import SessionState


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv()
    try:
        check_env(env)
    finally:
        env.close()


def test_reset_starts_running_run():
    env = FlappyEnv(difficulty="hard")
    try:
        obs, info = env.reset(seed=5)
        assert env.observation_space.contains(obs)
        assert info == {"seed": 5, "score": 0, "difficulty": "hard"}
        assert env.state.started and not env.state.over
    finally:
        env.close()


def test_smoke_random_rollout():
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=2)
    try:
        obs, info = env.reset(seed=123)
        env.action_space.seed(123)
        terminated = False
        for t in range(2000):
            obs, r, term, trunc, info = env.step(env.action_space.sample())
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                terminated = term
                break
        assert terminated, "random flapping should crash eventually"
        assert r == -1.0
        assert env.high_score == info["high_score"]
    finally:
        env.close()


def test_noop_falls_to_the_ground():
    env = FlappyEnv(frame_skip=4)
    try:
        env.reset(seed=0)
        for _ in range(100):
            _, _, term, _, info = env.step(0)
            if term:
                break
        assert term and info["score"] == 0
    finally:
        env.close()


def test_point_and_death_in_same_decision():
    """Pipe cleared on the first sub-tick, ground hit on the second: +1 and -1 both land."""
    env = FlappyEnv(frame_skip=2)
    try:
        env.reset(seed=0)
        back = BIRD_X - BIRD_HALF
        env.state = SessionState(
            difficulty="normal", started=True, frame=1,
            avatar=Avatar(y=PLAY_HEIGHT - BIRD_HALF - 2, vy=1.0),
            obstacles=(Obstacle(x=back - PIPE_WIDTH + 1, top=100.0, bottom=300.0),),
        )
        _, r, term, _, info = env.step(0)
        assert term and info["score"] == 1
        assert r == 0.0
    finally:
        env.close()


def test_time_limit_truncates():
    env = FlappyEnv(frame_skip=1, time_limit_seconds=0.05)   # 3 decisions
    try:
        env.reset(seed=1)
        flags = [env.step(0)[3] for _ in range(3)]
        assert flags == [False, False, True]
    finally:
        env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv()
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.1) for _ in range(500)]
    t1 = rollout(7, action_seq)
    t2 = rollout(7, action_seq)
    assert len(t1) == len(t2)
    for (o1, r1, te1, tr1), (o2, r2, te2, tr2) in zip(t1, t2):
        assert np.array_equal(o1, o2)
        assert (r1, te1, tr1) == (r2, te2, tr2)


def test_rgb_array_render(tmp_path):
    env = FlappyEnv(render_mode="rgb_array", assets_dir=str(tmp_path))
    try:
        env.reset(seed=3)
        env.step(1)
        frame = env.render()
        assert frame.shape == (HEIGHT, WIDTH, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()


def test_bad_arguments():
    with pytest.raises(AssertionError):
        FlappyEnv(frame_skip=0)
    with pytest.raises(ConfigError):
        FlappyEnv(difficulty="insane")
