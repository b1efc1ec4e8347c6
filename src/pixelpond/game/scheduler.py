from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, List, Protocol, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class FrameScheduler(Protocol):
    """Host hooks the game engine uses to drive itself.

    - request_frame(cb): run cb once on the next display refresh
    - call_later(delay, cb): run cb once after ``delay`` seconds
    """

    def request_frame(self, callback: Callback) -> None: ...

    def call_later(self, delay: float, callback: Callback) -> None: ...


class ManualScheduler:
    """Scheduler advanced explicitly by the caller.

    Used by the headless runner and the tests: ``run_frame()`` fires the
    callbacks queued for the next refresh and ``advance(seconds)`` moves the
    clock forward, firing due timers in order.
    """

    def __init__(self) -> None:
        self._frames: List[Callback] = []
        self._timers: List[Tuple[float, int, Callback]] = []
        self._seq = itertools.count()
        self.now: float = 0.0
        self.frames_run: int = 0

    def request_frame(self, callback: Callback) -> None:
        self._frames.append(callback)

    def call_later(self, delay: float, callback: Callback) -> None:
        heapq.heappush(self._timers, (self.now + max(0.0, delay), next(self._seq), callback))

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def run_frame(self) -> int:
        """Fire every callback queued before this call. Returns how many ran."""
        batch, self._frames = self._frames, []
        for cb in batch:
            cb()
        if batch:
            self.frames_run += 1
        return len(batch)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire due timers. Returns how many fired."""
        target = self.now + seconds
        fired = 0
        while self._timers and self._timers[0][0] <= target:
            when, _, cb = heapq.heappop(self._timers)
            self.now = when
            cb()
            fired += 1
        self.now = target
        return fired


class ArcadeScheduler:
    """Scheduler backed by the arcade (pyglet) clock.

    ``request_frame`` schedules with zero delay, which pyglet runs on its next
    clock tick, i.e. the next window refresh.
    """

    def __init__(self) -> None:
        import arcade

        self._arcade = arcade

    def request_frame(self, callback: Callback) -> None:
        self._arcade.schedule_once(lambda _dt: callback(), 0)

    def call_later(self, delay: float, callback: Callback) -> None:
        self._arcade.schedule_once(lambda _dt: callback(), delay)
