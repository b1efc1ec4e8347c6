from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from ..chain.recorder import CatchRecord

logger = logging.getLogger(__name__)

FISH_CAUGHT = "fish_caught"


@dataclass(frozen=True)
class Event:
    """A named notification with its payload.

    For FISH_CAUGHT the payload is ``CatchRecord.to_event()``: type, weight,
    length, location and timestamp.
    """

    name: str
    payload: Dict[str, Any]


Handler = Callable[[Event], None]


class EventBus:
    """In-process result channel between the game engine and the UI.

    The engine publishes one FISH_CAUGHT event per recorded catch; the
    inventory and notification views subscribe. Delivery is synchronous, in
    subscription order, on the caller's thread.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for events called ``name``.

        Returns a callable that removes the subscription again.
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers.setdefault(name, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(name, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, name: str, payload: Dict[str, Any]) -> int:
        """Deliver an event; returns how many handlers ran without raising.

        A failing handler is logged and does not stop delivery to the rest.
        """
        event = Event(name=name, payload=payload)
        delivered = 0
        for handler in list(self._handlers.get(name, ())):
            try:
                handler(event)
            except Exception:
                logger.exception("%s handler %r failed", name, handler)
            else:
                delivered += 1
        return delivered

    def publish_catch(self, record: "CatchRecord") -> int:
        return self.publish(FISH_CAUGHT, record.to_event())
