# src/tests/test_observations.py
import numpy as np

from src.env.observations import build_observation, next_obstacle, OBS_LOW, OBS_HIGH, OBS_SIZE
from src.flappy.avatar import Avatar
from src.flappy.config import PLAY_HEIGHT
from src.flappy.obstacles import Obstacle
from src.flappy.state import SessionState, new_session


def _in_box(obs):
    return np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH)


def test_shape_dtype_and_sentinels():
    obs = build_observation(new_session("normal"))
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert obs[0] == np.float32(0.64)           # 256 / 400
    assert obs[1] == 0.0
    assert obs[2] == 1.0 and obs[3] == 0.0 and obs[4] == 1.0
    assert obs[5] == np.float32(0.2)
    assert _in_box(obs)


def test_next_obstacle_skips_pipes_behind():
    behind = Obstacle(x=-20.0, top=50.0, bottom=150.0, passed=True)
    ahead = Obstacle(x=100.0, top=80.0, bottom=180.0)
    assert next_obstacle((behind, ahead)) is ahead
    assert next_obstacle((behind,)) is None


def test_gap_edges_normalized():
    s = SessionState(started=True, avatar=Avatar(y=100.0, vy=-6.0),
                     obstacles=(Obstacle(x=100.0, top=80.0, bottom=180.0),))
    obs = build_observation(s)
    assert obs[1] == np.float32(-0.6)
    assert obs[3] == np.float32(80.0 / PLAY_HEIGHT)
    assert obs[4] == np.float32(180.0 / PLAY_HEIGHT)
    assert 0.0 < obs[2] < 1.0


def test_extremes_stay_in_box():
    s = SessionState(started=True, over=True, score=500, avatar=Avatar(y=PLAY_HEIGHT + 30, vy=40.0))
    assert _in_box(build_observation(s))
