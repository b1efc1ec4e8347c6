from __future__ import annotations

import logging

import arcade

from ..app import PondApp, Screen
from ..core.pump import AsyncPump
from ..errors import PixelPondError
from .renderer import HUD_COLOR, ArcadeRenderer

logger = logging.getLogger(__name__)


class PondWindow(arcade.Window):
    """Game window: forwards arcade events to the PondApp.

    Keys: I inventory, M marketplace, G/ESC back to the pond.
    """

    def __init__(self, app: PondApp, renderer: ArcadeRenderer, pump: AsyncPump) -> None:
        viewport = app.settings.viewport
        super().__init__(
            width=viewport.width,
            height=viewport.height,
            title=viewport.title,
            resizable=True,
            vsync=viewport.vsync,
        )
        self.app = app
        self.renderer = renderer
        self.pump = pump
        self.message = "Click to connect your wallet"
        self.connecting = False
        arcade.set_background_color((11, 30, 48))

    def on_draw(self):  # noqa: N802 (arcade API)
        self.clear()
        if self.app.screen is Screen.GAME:
            self.renderer.paint()
        else:
            arcade.draw_text(self._screen_text(), 40, self.height // 2, HUD_COLOR, 20, multiline=True, width=self.width - 80)

    def on_update(self, delta_time: float):  # noqa: N802 (arcade API)
        # Provider and ledger coroutines advance one loop iteration per frame
        self.pump.pump()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):  # noqa: N802
        if self.app.screen is Screen.WELCOME:
            self._connect()
            return
        # Engine coordinates are top-left based
        pending = self.app.on_pointer(x, self.height - y)
        if pending is not None:
            self.pump.submit(pending, on_error=self._report)

    def on_key_press(self, symbol: int, modifiers: int):  # noqa: N802 (arcade API)
        if symbol == arcade.key.I:
            self.app.show_inventory()
        elif symbol == arcade.key.M:
            self.app.show_marketplace()
        elif symbol in (arcade.key.G, arcade.key.ESCAPE) and self.app.engine is not None:
            self.app.show_game()

    def on_resize(self, width: int, height: int):  # noqa: N802 (arcade API)
        super().on_resize(width, height)
        if self.app.engine is not None:
            self.app.engine.resize(width, height)

    def _connect(self) -> None:
        if self.connecting:
            return
        self.connecting = True
        self.message = "Connecting..."

        async def connect() -> None:
            try:
                await self.app.connect()
                self.app.engine.resize(self.width, self.height)
            finally:
                self.connecting = False
                self.message = "Click to connect your wallet"

        self.pump.submit(connect(), on_error=self._report)

    def _report(self, exc: BaseException) -> None:
        if isinstance(exc, PixelPondError):
            logger.error("%s", exc)
            self.message = f"{exc}\nClick to try again"
        else:
            logger.error("Unexpected error: %r", exc)
            self.message = "Something went wrong. Click to try again"

    def _screen_text(self) -> str:
        if self.app.screen is Screen.INVENTORY:
            lines = [f"{c['type']} - {c['weight']}kg, {c['length']}cm ({c['location']})" for c in self.app.inventory.catches]
            return "Inventory (G to go back)\n" + ("\n".join(lines) or "No fish yet")
        if self.app.screen is Screen.MARKETPLACE:
            return "Marketplace (G to go back)\nNo listings"
        return f"Pixel Pond\n{self.message}"
