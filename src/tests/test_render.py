# src/tests/test_render.py
import numpy as np
import pygame
import pytest

from src.flappy.assets import AssetStore
from src.flappy.config import (
    WIDTH, HEIGHT, PLAY_HEIGHT, ASSET_LIST, COLOR_SKY, COLOR_SAND, COLOR_PIPE
)
from src.flappy.obstacles import Obstacle
from src.flappy.render import Renderer, hud_text
from src.flappy.state import SessionState, snapshot


@pytest.fixture(autouse=True)
def _pygame():
    pygame.init()
    yield
    pygame.quit()


def test_gate_attempts_one_asset_per_poll(tmp_path):
    store = AssetStore(tmp_path)
    polls = 0
    while not store.ready:
        store.poll()
        polls += 1
    assert polls == len(ASSET_LIST)
    assert all(store.get(name) is None for name in ASSET_LIST)
    assert store.progress == 1.0


def test_present_and_broken_assets(tmp_path):
    pygame.image.save(pygame.Surface((8, 8)), str(tmp_path / ASSET_LIST["bird"]))
    (tmp_path / ASSET_LIST["pipe"]).write_bytes(b"not a png")
    store = AssetStore(tmp_path)
    store.load_all()
    assert store.ready
    assert store.get("bird").get_size() == (8, 8)
    assert store.get("pipe") is None
    assert store.get("background") is None


def test_placeholder_rendering(tmp_path):
    store = AssetStore(tmp_path)
    store.load_all()
    renderer = Renderer(store)
    surf = pygame.Surface((WIDTH, HEIGHT))
    s = SessionState(started=True, over=True, score=4, high_score=9,
                     obstacles=(Obstacle(x=150.0, top=100.0, bottom=200.0),))
    renderer.draw(surf, snapshot(s))
    assert tuple(surf.get_at((2, 2)))[:3] == COLOR_SKY
    assert tuple(surf.get_at((2, PLAY_HEIGHT + 50)))[:3] == COLOR_SAND
    assert tuple(surf.get_at((176, 60)))[:3] == COLOR_PIPE


def test_loading_screen(tmp_path):
    renderer = Renderer(AssetStore(tmp_path))
    surf = pygame.Surface((WIDTH, HEIGHT))
    renderer.draw_loading(surf)
    assert tuple(surf.get_at((0, 0)))[:3] == (0, 0, 0)


def test_hud_shows_current_scaling():
    s = SessionState(difficulty="easy", started=True, score=10,
                     obstacles=(Obstacle(x=150.0, top=100.0, bottom=200.0),))
    assert hud_text(snapshot(s), seed=42) == "seed 42  spd 2.0  gap 100  pipes 1"
    assert hud_text(snapshot(SessionState())).startswith("seed -  spd 2.0  gap 100")


def test_debug_overlay_only_when_enabled(tmp_path):
    store = AssetStore(tmp_path)
    store.load_all()
    snap = snapshot(SessionState())
    plain, debug = pygame.Surface((WIDTH, HEIGHT)), pygame.Surface((WIDTH, HEIGHT))
    Renderer(store).draw(plain, snap, seed=7)
    Renderer(store, debug=True).draw(debug, snap, seed=7)
    assert not np.array_equal(pygame.surfarray.array3d(plain), pygame.surfarray.array3d(debug))
