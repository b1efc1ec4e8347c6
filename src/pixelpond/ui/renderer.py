from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..chain.utils import format_address
from ..game.state import GameState
from .assets import AssetLoader

if TYPE_CHECKING:
    from ..game.engine import GameEngine

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

WATER_COLOR: Color = (26, 82, 118)
HUD_COLOR: Color = (255, 255, 255)
ROD_COLOR: Color = (121, 85, 72)


@dataclass(frozen=True)
class FishSprite:
    """One fish in window coordinates (origin bottom-left)."""

    category: str
    left: float
    bottom: float
    width: float
    height: float
    mirrored: bool
    color: Color


@dataclass
class Frame:
    width: float = 0
    height: float = 0
    state: GameState = GameState.IDLE
    score: int = 0
    wallet: str = ""
    fish: List[FishSprite] = field(default_factory=list)


class ArcadeRenderer:
    """Renders the pond with arcade.

    The engine's frame loop calls ``draw(engine)``, which captures a Frame in
    window coordinates. The window paints the latest Frame from ``on_draw``
    with ``paint()``, since arcade only draws inside its draw event.
    """

    def __init__(self, assets: Optional[AssetLoader] = None) -> None:
        self.assets = assets or AssetLoader()
        self.frame = Frame()
        self._mirrored: dict = {}

    def draw(self, engine: "GameEngine") -> None:
        height = engine.height
        sprites = [
            FishSprite(
                category=fish.type,
                left=fish.x,
                # Engine y grows downward from the top edge
                bottom=height - fish.y - fish.height,
                width=fish.width,
                height=fish.height,
                mirrored=fish.direction < 0,
                color=engine.catalog[fish.type].rgb,
            )
            for fish in engine.fish
        ]
        self.frame = Frame(
            width=engine.width,
            height=height,
            state=engine.state,
            score=engine.score,
            wallet=format_address(engine.account),
            fish=sprites,
        )

    def paint(self) -> None:
        import arcade

        frame = self.frame
        if self.assets.background is not None:
            arcade.draw_texture_rect(self.assets.background, arcade.LBWH(0, 0, frame.width, frame.height))
        else:
            arcade.draw_lbwh_rectangle_filled(0, 0, frame.width, frame.height, WATER_COLOR)

        for sprite in frame.fish:
            texture = self._texture_for(sprite)
            if texture is not None:
                arcade.draw_texture_rect(texture, arcade.LBWH(sprite.left, sprite.bottom, sprite.width, sprite.height))
            else:
                arcade.draw_lbwh_rectangle_filled(sprite.left, sprite.bottom, sprite.width, sprite.height, sprite.color)

        if frame.state is GameState.CASTING:
            rod_left = frame.width / 2 - 50
            rod_bottom = frame.height - 200
            if self.assets.fishing_rod is not None:
                arcade.draw_texture_rect(self.assets.fishing_rod, arcade.LBWH(rod_left, rod_bottom, 100, 200))
            else:
                arcade.draw_lbwh_rectangle_filled(frame.width / 2 - 3, rod_bottom, 6, 200, ROD_COLOR)

        arcade.draw_text(f"Score: {frame.score}", 10, frame.height - 30, HUD_COLOR, 16)
        if frame.wallet:
            arcade.draw_text(frame.wallet, frame.width - 150, frame.height - 30, HUD_COLOR, 14)

    def _texture_for(self, sprite: FishSprite):
        texture = self.assets.fish.get(sprite.category)
        if texture is None or not sprite.mirrored:
            return texture
        if sprite.category not in self._mirrored:
            self._mirrored[sprite.category] = texture.flip_left_right()
        return self._mirrored[sprite.category]
