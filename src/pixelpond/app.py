from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Dict, List, Mapping, Optional

from .chain.contracts import AbiLoader, ContractSet, init_contracts, load_abi
from .chain.providers import HttpWalletProvider
from .chain.recorder import CatchRecorder
from .chain.wallet import WalletBootstrap, WalletSession
from .core.events import FISH_CAUGHT, Event, EventBus
from .core.rng import RNG
from .core.settings import Settings
from .errors import AssetLoadFailed, PixelPondError
from .fish.catalog import FishCatalog, load_catalog
from .game.engine import GameEngine, Renderer
from .game.scheduler import FrameScheduler, ManualScheduler
from .ui.assets import AssetLoader

logger = logging.getLogger(__name__)


class Screen(Enum):
    WELCOME = "welcome"
    GAME = "game"
    INVENTORY = "inventory"
    MARKETPLACE = "marketplace"


class InventoryLog:
    """Collects caught fish from the event bus and announces each one."""

    def __init__(self, events: EventBus) -> None:
        self.catches: List[Dict[str, Any]] = []
        events.subscribe(FISH_CAUGHT, self._on_fish_caught)

    def _on_fish_caught(self, event: Event) -> None:
        fish = event.payload
        self.catches.append(fish)
        logger.info(
            "Caught a %s fish! Weight: %skg, Length: %scm",
            fish["type"],
            fish["weight"],
            fish["length"],
        )


def build_environment(rpc_url: Optional[str]) -> Dict[str, Any]:
    """Host globals for wallet detection; a JSON-RPC URL becomes the ``ethereum`` provider."""
    if not rpc_url:
        return {}
    return {"ethereum": HttpWalletProvider(rpc_url)}


class PondApp:
    """Root application context.

    Owns the screen, the wallet session, the contracts and the game engine and
    hands them to collaborators explicitly.
    """

    def __init__(
        self,
        settings: Settings,
        environment: Mapping[str, Any],
        scheduler: FrameScheduler,
        catalog: Optional[FishCatalog] = None,
        events: Optional[EventBus] = None,
        rng: Optional[RNG] = None,
        renderer: Optional[Renderer] = None,
        assets: Optional[AssetLoader] = None,
        abi_loader: AbiLoader = load_abi,
    ) -> None:
        self.settings = settings
        self.environment = environment
        self.scheduler = scheduler
        self.catalog = catalog or load_catalog()
        self.events = events or EventBus()
        self.rng = rng or RNG()
        self.renderer = renderer
        self.assets = assets or AssetLoader(settings.assets)
        self.abi_loader = abi_loader
        self.inventory = InventoryLog(self.events)

        self.screen = Screen.WELCOME
        self.wallet: Optional[WalletSession] = None
        self.contracts: Optional[ContractSet] = None
        self.engine: Optional[GameEngine] = None

    async def connect(self) -> GameEngine:
        """Bootstrap the wallet, bind contracts and start a fishing session.

        Any failure leaves the app on the welcome screen and propagates.
        """
        step = "wallet"
        try:
            wallet = await WalletBootstrap(self.environment, self.settings.chain).bootstrap()
            step = "contracts"
            contracts = init_contracts(wallet, self.settings.chain, self.abi_loader)
            step = "game"
            recorder = CatchRecorder(contracts.game, self.settings.catch, self.rng)
            engine = GameEngine(
                wallet=wallet,
                recorder=recorder,
                catalog=self.catalog,
                scheduler=self.scheduler,
                events=self.events,
                gameplay=self.settings.gameplay,
                width=self.settings.viewport.width,
                height=self.settings.viewport.height,
                rng=self.rng,
                renderer=self.renderer,
            )
            step = "assets"
            if not self.assets.load():
                raise AssetLoadFailed("Failed to load game assets")
        except PixelPondError as exc:
            logger.error("Connect failed during %s step: %s", step, exc)
            self.show_screen(Screen.WELCOME)
            raise

        self.wallet, self.contracts, self.engine = wallet, contracts, engine
        engine.start()
        self.show_screen(Screen.GAME)
        logger.info("Game initialized for %s", wallet.account)
        return engine

    def show_screen(self, screen: Screen) -> None:
        logger.debug("Switching to screen: %s", screen.value)
        self.screen = screen

    def show_inventory(self) -> None:
        self.show_screen(Screen.INVENTORY)
        if self.engine:
            self.engine.stop()

    def show_marketplace(self) -> None:
        self.show_screen(Screen.MARKETPLACE)
        if self.engine:
            self.engine.stop()

    def show_game(self) -> None:
        self.show_screen(Screen.GAME)
        if self.engine:
            self.engine.start()

    def on_pointer(self, x: float, y: float) -> Optional[Awaitable[Any]]:
        if self.screen is not Screen.GAME or self.engine is None:
            return None
        return self.engine.on_pointer(x, y)


async def _play_headless(app: PondApp, scheduler: ManualScheduler, max_frames: int, auto_catch: int, frame_dt: float) -> GameEngine:
    engine = await app.connect()
    for frame in range(1, max_frames + 1):
        scheduler.run_frame()
        scheduler.advance(frame_dt)
        if auto_catch and frame % auto_catch == 0 and engine.fish:
            target = engine.fish[0]
            pending = engine.on_pointer(target.x + target.width / 2, target.y + target.height / 2)
            if pending is not None:
                try:
                    await pending
                except PixelPondError as exc:
                    logger.warning("Catch failed: %s", exc)
    engine.stop()
    return engine


def run_headless(
    settings: Settings,
    rpc_url: Optional[str],
    max_frames: int = 600,
    auto_catch: int = 0,
    seed: Optional[int] = None,
    frame_dt: float = 1 / 60,
) -> int:
    """Run a session without a window on a manually advanced clock.

    Args:
        max_frames: Number of display refreshes to simulate.
        auto_catch: If > 0, click the oldest fish every N frames.

    Returns:
        Process exit code (0 on success).
    """
    scheduler = ManualScheduler()
    app = PondApp(settings, build_environment(rpc_url), scheduler, rng=RNG(seed))
    try:
        engine = asyncio.run(_play_headless(app, scheduler, max_frames, auto_catch, frame_dt))
    except PixelPondError as exc:
        print(f"Pixel Pond failed to start: {exc}")
        return 1
    print(f"Pixel Pond (headless): frames={scheduler.frames_run} score={engine.score} catches={len(app.inventory.catches)}")
    return 0


def run_gui(settings: Settings, rpc_url: Optional[str], seed: Optional[int] = None) -> int:
    """Open the arcade window and run until it is closed."""
    import arcade

    from .core.pump import AsyncPump
    from .game.scheduler import ArcadeScheduler
    from .ui.renderer import ArcadeRenderer
    from .ui.window import PondWindow

    assets = AssetLoader(settings.assets)
    renderer = ArcadeRenderer(assets)
    app = PondApp(
        settings,
        build_environment(rpc_url),
        ArcadeScheduler(),
        rng=RNG(seed),
        renderer=renderer,
        assets=assets,
    )
    pump = AsyncPump()
    window = PondWindow(app, renderer, pump)
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        window.close()
        pump.close()
