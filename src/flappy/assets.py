# src/flappy/assets.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import pygame

from .config import ASSETS_DIR, ASSET_LIST

logger = logging.getLogger(__name__)


class AssetStore:
    """
    Incremental image loader acting as the start gate of the game loop.
    One asset is attempted per `poll()`; once every asset has been attempted
    `ready` is True. Missing / broken files stay None and the renderer
    falls back to flat colors for them.
    """
    def __init__(self, asset_dir: str | Path = ASSETS_DIR, names: Mapping[str, str] = ASSET_LIST):
        self.asset_dir = Path(asset_dir)
        self.images: Dict[str, Optional[pygame.Surface]] = {}
        self._pending: List[str] = list(names)
        self._files = dict(names)

    @property
    def ready(self) -> bool:
        return not self._pending

    @property
    def progress(self) -> float:
        total = len(self._files)
        return 1.0 if total == 0 else len(self.images) / total

    def poll(self) -> bool:
        """Load the next pending asset. Returns `ready`."""
        if self._pending:
            name = self._pending.pop(0)
            self.images[name] = self._load(self.asset_dir / self._files[name])
        return self.ready

    def load_all(self) -> None:
        while not self.poll():
            pass

    def get(self, name: str) -> Optional[pygame.Surface]:
        return self.images.get(name)

    def _load(self, path: Path) -> Optional[pygame.Surface]:
        if not path.is_file():
            logger.warning("Asset missing, using placeholder: %s", path)
            return None
        try:
            img = pygame.image.load(str(path))
        except pygame.error as e:
            logger.warning("Asset unreadable, using placeholder: %s (%s)", path, e)
            return None
        # convert_alpha needs an active display mode
        if pygame.display.get_surface() is not None:
            img = img.convert_alpha()
        logger.debug("Loaded asset %s (%dx%d)", path.name, img.get_width(), img.get_height())
        return img
