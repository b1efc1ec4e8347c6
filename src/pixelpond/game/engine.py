from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Optional, Protocol

from ..core.events import EventBus
from ..core.rng import RNG
from ..core.settings import GameplaySettings
from ..errors import TransactionFailed
from ..fish.catalog import FishCatalog
from ..fish.probability import select_category
from .entities import FishInstance
from .scheduler import FrameScheduler
from .state import GameSession, GameState

if TYPE_CHECKING:
    from ..chain.recorder import CatchRecord, CatchRecorder
    from ..chain.wallet import WalletSession

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def draw(self, engine: "GameEngine") -> None: ...


class GameEngine:
    """Owns the fishing session: state machine, active fish, frame loop and hit-testing.

    The engine is host-agnostic. A FrameScheduler supplies display refresh and
    timers; an optional Renderer draws each frame. A successful hit hands the
    fish to the CatchRecorder and the engine stays in CAUGHT (no frames, no
    spawning) until the commit resolves and the dwell delay elapses.
    """

    def __init__(
        self,
        wallet: "WalletSession",
        recorder: "CatchRecorder",
        catalog: FishCatalog,
        scheduler: FrameScheduler,
        events: Optional[EventBus] = None,
        gameplay: Optional[GameplaySettings] = None,
        width: float = 800,
        height: float = 600,
        rng: Optional[RNG] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.wallet = wallet
        self.recorder = recorder
        self.catalog = catalog
        self.scheduler = scheduler
        self.events = events or EventBus()
        self.gameplay = gameplay or GameplaySettings()
        self.width = width
        self.height = height
        self.rng = rng or RNG()
        self.renderer = renderer
        self.session = GameSession()
        self._loop_generation = 0

    # Read-only views
    @property
    def state(self) -> GameState:
        return self.session.state

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def fish(self) -> list[FishInstance]:
        return self.session.fish

    @property
    def account(self) -> str:
        return self.wallet.account

    # Lifecycle
    def start(self) -> None:
        """Enter CASTING, spawn an initial batch and begin the frame loop.

        Only valid from IDLE; existing fish are kept.
        """
        if self.session.state is not GameState.IDLE:
            logger.debug("start() ignored in state %s", self.session.state.value)
            return
        self.session.state = GameState.CASTING
        self.spawn_fish()
        logger.info("Session started with %d fish", len(self.session.fish))
        self._begin_loop()

    def stop(self) -> None:
        """Return to IDLE. In-flight catch commits are not cancelled."""
        if self.session.state is GameState.IDLE:
            return
        self.session.state = GameState.IDLE
        logger.info("Session stopped (score=%d)", self.session.score)

    def resize(self, width: float, height: float) -> None:
        logger.debug("Viewport resized: %sx%s", width, height)
        self.width = width
        self.height = height

    # Spawning
    def spawn_fish(self) -> list[FishInstance]:
        cfg = self.gameplay
        count = self.rng.randint(cfg.spawn_min, cfg.spawn_max)
        spawned = []
        for _ in range(count):
            category = select_category(self.catalog, self.rng)
            fish = FishInstance(
                type=category,
                x=self.rng.random() * self.width,
                y=self.rng.random() * (self.height * (cfg.band_bottom - cfg.band_top)) + self.height * cfg.band_top,
                speed=self.catalog[category].speed,
                direction=1 if self.rng.random() > 0.5 else -1,
                width=cfg.fish_width,
                height=cfg.fish_height,
            )
            spawned.append(fish)
        self.session.fish.extend(spawned)
        logger.debug("Spawned %d fish: %s", count, [f.type for f in spawned])
        return spawned

    # Frame loop
    def update(self) -> None:
        if self.session.state is not GameState.CASTING:
            return
        for fish in self.session.fish:
            fish.advance(self.width)

        kept = []
        for fish in self.session.fish:
            if fish.has_exited(self.width):
                logger.debug("Fish %s left the pond at x=%.1f", fish.type, fish.x)
            else:
                kept.append(fish)
        self.session.fish = kept

        if self.session.active_count < self.gameplay.min_active:
            self.spawn_fish()

    def draw(self) -> None:
        if self.renderer is not None:
            self.renderer.draw(self)

    def _begin_loop(self) -> None:
        # Frame callbacks from an earlier loop become no-ops, so a restart never doubles the loop
        self._loop_generation += 1
        self._game_loop(self._loop_generation)

    def _game_loop(self, generation: int) -> None:
        if generation != self._loop_generation or self.session.state is not GameState.CASTING:
            return
        self.update()
        self.draw()
        self.scheduler.request_frame(lambda: self._game_loop(generation))

    # Pointer handling
    def hit_test(self, x: float, y: float) -> Optional[FishInstance]:
        """Return the oldest active fish whose bounding box contains (x, y)."""
        for fish in self.session.fish:
            if fish.contains(x, y):
                return fish
        return None

    def on_pointer(self, x: float, y: float) -> Optional[Awaitable["CatchRecord"]]:
        """Handle a click at viewport coordinates (x, y).

        On a hit the fish is removed from the active set immediately and the
        session enters CAUGHT. Returns an awaitable that runs the catch commit;
        the caller schedules or awaits it. Returns None on a miss or when the
        session is not casting.
        """
        if self.session.state is not GameState.CASTING:
            return None
        fish = self.hit_test(x, y)
        if fish is None:
            return None
        self.session.state = GameState.CAUGHT
        self.session.caught = fish
        self.session.fish = [f for f in self.session.fish if f is not fish]
        logger.info("Hooked a %s fish at (%.0f, %.0f)", fish.type, x, y)
        return self._commit_catch(fish)

    async def _commit_catch(self, fish: FishInstance) -> "CatchRecord":
        try:
            record = await self.recorder.record_catch(self.wallet, fish.type)
        except TransactionFailed:
            logger.error("Catch of %s fish was not recorded; no score awarded", fish.type)
            raise
        finally:
            self.scheduler.call_later(self.gameplay.dwell_delay, lambda: self._resume_casting(fish))

        self.session.score += self.catalog[fish.type].value
        logger.info("Score is now %d", self.session.score)
        self.events.publish_catch(record)
        return record

    def _resume_casting(self, fish: FishInstance) -> None:
        if self.session.caught is not fish:
            # A later catch owns the CAUGHT state
            return
        self.session.caught = None
        if self.session.state is not GameState.CAUGHT:
            # stop() ran while the commit was in flight
            return
        self.session.state = GameState.CASTING
        self._begin_loop()
