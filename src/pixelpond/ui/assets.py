from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..core.settings import AssetSettings

logger = logging.getLogger(__name__)

TextureLoader = Callable[[str], Any]


def _arcade_load_texture(path: str) -> Any:
    import arcade

    return arcade.load_texture(path)


class AssetLoader:
    """Loads background, rod and per-category fish textures.

    ``load()`` reports failure as False instead of raising; the caller decides
    whether the session may start. Categories without a configured texture are
    drawn as flat shapes in their catalog color.
    """

    def __init__(self, settings: Optional[AssetSettings] = None, texture_loader: Optional[TextureLoader] = None) -> None:
        self.settings = settings or AssetSettings()
        self._load_texture = texture_loader or _arcade_load_texture
        self.background: Any = None
        self.fishing_rod: Any = None
        self.fish: Dict[str, Any] = {}

    def load(self) -> bool:
        try:
            if self.settings.background:
                self.background = self._load_texture(self.settings.background)
            if self.settings.fishing_rod:
                self.fishing_rod = self._load_texture(self.settings.fishing_rod)
            for category, path in self.settings.fish.items():
                self.fish[category] = self._load_texture(path)
        except Exception as exc:
            logger.error("Failed to load assets: %s", exc)
            return False
        logger.info(
            "Assets loaded (background=%s, rod=%s, fish=%s)",
            self.background is not None,
            self.fishing_rod is not None,
            sorted(self.fish),
        )
        return True
