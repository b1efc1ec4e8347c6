from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class AsyncPump:
    """Drive an asyncio loop cooperatively from a frame callback.

    The windowed game never blocks on provider or ledger I/O: coroutines are
    submitted here as tasks and the host calls ``pump()`` once per frame, which
    runs exactly one iteration of the event loop on the calling thread.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.new_event_loop()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(
        self,
        awaitable: Awaitable[Any],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> asyncio.Task:
        task = self._loop.create_task(_as_coroutine(awaitable))
        self._tasks.add(task)

        def _done(t: asyncio.Task) -> None:
            self._tasks.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is None:
                return
            if on_error is not None:
                on_error(exc)
            else:
                logger.error("Background task failed: %s", exc)

        task.add_done_callback(_done)
        return task

    def pump(self) -> None:
        """Run one iteration of the event loop."""
        if self._loop.is_closed():
            return
        self._loop.call_soon(self._loop.stop)
        self._loop.run_forever()

    def run_until_complete(self, awaitable: Awaitable[Any]) -> Any:
        """Block on a single awaitable (used before the window opens)."""
        return self._loop.run_until_complete(_as_coroutine(awaitable))

    def close(self) -> None:
        if self._loop.is_closed():
            return
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            self._loop.run_until_complete(asyncio.gather(*tasks, return_exceptions=True))
        self._loop.close()


async def _as_coroutine(awaitable: Awaitable[Any]) -> Any:
    return await awaitable
