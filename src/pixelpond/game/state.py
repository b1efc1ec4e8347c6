from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .entities import FishInstance


class GameState(Enum):
    """Fishing session states.

    Only IDLE, CASTING and CAUGHT are entered today. WAITING, BITE, REELING and
    FAILED are reserved for the bite-timing and line-tension phases and have no
    transitions into them yet.
    """

    IDLE = "idle"
    CASTING = "casting"
    WAITING = "waiting"
    BITE = "bite"
    REELING = "reeling"
    CAUGHT = "caught"
    FAILED = "failed"


@dataclass
class GameSession:
    """Mutable state of one play session, owned by GameEngine."""

    state: GameState = GameState.IDLE
    score: int = 0
    # Insertion order doubles as the hit-test tie-break (oldest wins)
    fish: List[FishInstance] = field(default_factory=list)
    caught: Optional[FishInstance] = None

    @property
    def active_count(self) -> int:
        return len(self.fish)
