# src/env/flappy_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.flappy.config import WIDTH, HEIGHT, FPS, DIFFICULTY_DEFAULT, ASSETS_DIR
from src.flappy.difficulty import profile_of, validate_profiles
from src.flappy.state import Events, NO_EVENTS, Phase, SessionState, new_session, update, snapshot
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

FLAP_EVENTS = Events(flap=True)


class FlappyEnv(gym.Env):
    """
    Flappy Gymnasium environment (vector observations).
    - Simulation at 60 ticks/s (the game's fixed step).
    - Agent acts every `frame_skip` ticks (default 2) -> 30 decisions/sec.
    - Observation: shape (6,), float32, see build_observation.
    - Reward: +0.1 per surviving decision, +1 per pipe cleared, -1 on death.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 difficulty: str = DIFFICULTY_DEFAULT,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 assets_dir: str = ASSETS_DIR):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], render_mode
        validate_profiles()
        profile_of(difficulty)
        self.render_mode = render_mode
        self.difficulty = difficulty
        self.frame_skip = int(frame_skip)
        self.assets_dir = assets_dir

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.state: Optional[SessionState] = None
        self.rng: Optional[random.Random] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.high_score: int = 0

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy: explicit seed drives the pipe RNG directly;
        # otherwise derive one from gymnasium's np_random.
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.current_seed = int(seed)
        self.rng = random.Random(self.current_seed)

        difficulty = (options or {}).get("difficulty", self.difficulty)
        state = new_session(difficulty, high_score=self.high_score)
        # first flap starts the run
        self.state = update(state, FLAP_EVENTS, self.rng)
        self.timestep = 0

        obs = build_observation(self.state)
        info = {"seed": self.current_seed, "score": 0, "difficulty": difficulty}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None and self.rng is not None, "Call reset() before step()"

        score_before = self.state.score
        events = FLAP_EVENTS if int(action) == 1 else NO_EVENTS
        for i in range(self.frame_skip):
            self.state = update(self.state, events if i == 0 else NO_EVENTS, self.rng)
            if self.state.phase is Phase.ENDED:
                break

        terminated = self.state.phase is Phase.ENDED
        gained = self.state.score - score_before
        # points cleared before dying in the same decision still count
        reward = (-1.0 if terminated else 0.1) + float(gained)
        if terminated:
            self.high_score = self.state.high_score

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = build_observation(self.state)
        info = {
            "score": self.state.score,
            "high_score": self.state.high_score,
            "timestep": self.timestep,
            "frame": self.state.frame,
            "seed": self.current_seed,
            "pipes": len(self.state.obstacles),
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            from src.flappy.assets import AssetStore
            from src.flappy.render import Renderer
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Flappy — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            assets = AssetStore(self.assets_dir)
            assets.load_all()
            self.renderer = Renderer(assets)

        self.renderer.draw(self.screen, snapshot(self.state))

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
