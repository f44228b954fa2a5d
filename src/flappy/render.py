# src/flappy/render.py
from __future__ import annotations
import math
from typing import Optional

import pygame

from .config import (
    WIDTH, HEIGHT, GROUND_HEIGHT, PLAY_HEIGHT, BIRD_X, BIRD_SIZE, PIPE_WIDTH, PIPE_MAX,
    COLOR_SKY, COLOR_SAND, COLOR_GRASS, COLOR_BIRD, COLOR_EYE, COLOR_BEAK,
    COLOR_PIPE, COLOR_PIPE_EDGE, COLOR_FG, COLOR_HI, COLOR_LOADING_BG
)
from .assets import AssetStore
from .state import Phase, Snapshot


class Renderer:
    """Paints a Snapshot. Every layer has a flat-color path for when its image is missing."""

    def __init__(self, assets: AssetStore, debug: bool = False):
        self.assets = assets
        self.debug = debug
        pygame.font.init()
        self.font_big = pygame.font.SysFont("monospace", 32, bold=True)
        self.font = pygame.font.SysFont("monospace", 20, bold=True)
        self.font_small = pygame.font.SysFont("monospace", 16, bold=True)

    # --- layers ---

    def draw_loading(self, surf: pygame.Surface):
        surf.fill(COLOR_LOADING_BG)
        pct = int(self.assets.progress * 100)
        self._text(surf, self.font, f"Loading... {pct}%", COLOR_FG, HEIGHT // 2)

    def draw_background(self, surf: pygame.Surface):
        bg = self.assets.get("background")
        if bg is None:
            surf.fill(COLOR_SKY)
            return
        for x in range(0, WIDTH, max(1, bg.get_width())):
            surf.blit(bg, (x, 0))

    def draw_ground(self, surf: pygame.Surface):
        ground = self.assets.get("ground")
        if ground is None:
            pygame.draw.rect(surf, COLOR_SAND, (0, PLAY_HEIGHT, WIDTH, GROUND_HEIGHT))
            pygame.draw.rect(surf, COLOR_GRASS, (0, PLAY_HEIGHT, WIDTH, 16))
            return
        for x in range(0, WIDTH, max(1, ground.get_width())):
            surf.blit(ground, (x, PLAY_HEIGHT))

    def draw_pipes(self, surf: pygame.Surface, snap: Snapshot):
        pipe = self.assets.get("pipe")
        body: Optional[pygame.Surface] = None
        if pipe is not None:
            body = pygame.transform.scale(pipe, (PIPE_WIDTH, PIPE_MAX))
            flipped = pygame.transform.flip(body, False, True)
        for ob in snap.obstacles:
            x = int(ob.x)
            if body is not None:
                surf.blit(flipped, (x, int(ob.top) - PIPE_MAX))
                surf.blit(body, (x, int(ob.bottom)))
                continue
            top_rect = pygame.Rect(x, 0, PIPE_WIDTH, int(ob.top))
            bot_rect = pygame.Rect(x, int(ob.bottom), PIPE_WIDTH, int(PLAY_HEIGHT - ob.bottom))
            for r in (top_rect, bot_rect):
                pygame.draw.rect(surf, COLOR_PIPE, r)
                pygame.draw.rect(surf, COLOR_PIPE_EDGE, r, width=4)

    def draw_bird(self, surf: pygame.Surface, snap: Snapshot):
        bird = self.assets.get("bird")
        if bird is not None:
            sprite = pygame.transform.scale(bird, (BIRD_SIZE, BIRD_SIZE))
        else:
            sprite = pygame.Surface((BIRD_SIZE, BIRD_SIZE), pygame.SRCALPHA)
            sprite.fill(COLOR_BIRD)
            half = BIRD_SIZE // 2
            pygame.draw.rect(sprite, COLOR_EYE, (half + 4, half - 6, 4, 4))
            pygame.draw.rect(sprite, COLOR_BEAK, (BIRD_SIZE - 2, half - 2, 2, 4))
        # pygame rotates counter-clockwise in degrees; tilt is clockwise radians
        sprite = pygame.transform.rotate(sprite, -math.degrees(snap.tilt))
        surf.blit(sprite, sprite.get_rect(center=(BIRD_X, int(snap.avatar_y))))

    def draw_score(self, surf: pygame.Surface, snap: Snapshot):
        self._text(surf, self.font_big, str(snap.score), COLOR_FG, 80)
        self._text(surf, self.font_small, f"HI {snap.high_score}", COLOR_HI, 110)

    def draw_ui(self, surf: pygame.Surface, snap: Snapshot):
        self._text(surf, self.font, f"Difficulty: {snap.difficulty.capitalize()}", COLOR_FG, 30)
        if snap.phase is Phase.IDLE:
            self._text(surf, self.font, "FLAPPY BIRD", COLOR_FG, HEIGHT // 2 - 40)
            self._text(surf, self.font, "Press SPACE or TAP", COLOR_FG, HEIGHT // 2)
            self._text(surf, self.font_small, "1 easy  2 normal  3 hard", COLOR_FG, HEIGHT // 2 + 30)
        elif snap.phase is Phase.ENDED:
            self._text(surf, self.font, "GAME OVER", COLOR_FG, HEIGHT // 2 - 40)
            self._text(surf, self.font, "Press SPACE or TAP", COLOR_FG, HEIGHT // 2)

    def draw_debug(self, surf: pygame.Surface, snap: Snapshot, seed: Optional[int] = None):
        img = self.font_small.render(hud_text(snap, seed), True, COLOR_FG)
        surf.blit(img, (8, HEIGHT - img.get_height() - 8))

    def draw(self, surf: pygame.Surface, snap: Snapshot, seed: Optional[int] = None):
        self.draw_background(surf)
        self.draw_pipes(surf, snap)
        self.draw_ground(surf)
        self.draw_bird(surf, snap)
        self.draw_score(surf, snap)
        self.draw_ui(surf, snap)
        if self.debug:
            self.draw_debug(surf, snap, seed)

    def _text(self, surf: pygame.Surface, font: pygame.font.Font, msg: str, color, y: int):
        img = font.render(msg, True, color)
        surf.blit(img, (WIDTH // 2 - img.get_width() // 2, y - img.get_height() // 2))


def hud_text(snap: Snapshot, seed: Optional[int] = None) -> str:
    """One-line debug HUD: current scaling plus the seed so a run can be reproduced."""
    seed_txt = "-" if seed is None else str(seed)
    return f"seed {seed_txt}  spd {snap.speed:.1f}  gap {snap.gap:.0f}  pipes {len(snap.obstacles)}"
