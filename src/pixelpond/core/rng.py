from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Optional


@dataclass
class RNG:
    """Source of every random draw in a session.

    Spawn positions, category selection and catch attributes all come from an
    injected RNG. Draws queued with ``scripted()`` are consumed first, in
    order, before the seeded stream takes over; tests use this to pin an exact
    sequence of spawns or catch attributes.
    """

    seed: Optional[int] = None
    queued_floats: Deque[float] = field(default_factory=deque, repr=False)
    queued_ints: Deque[int] = field(default_factory=deque, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    @classmethod
    def scripted(cls, randoms: Iterable[float] = (), ints: Iterable[int] = (), seed: int = 0) -> "RNG":
        return cls(seed=seed, queued_floats=deque(randoms), queued_ints=deque(ints))

    def random(self) -> float:
        """Next float in [0.0, 1.0)."""
        if self.queued_floats:
            return self.queued_floats.popleft()
        return self._rng.random()

    def uniform(self, a: float, b: float) -> float:
        # Built on random() so scripted draws feed it too
        return a + (b - a) * self.random()

    def randint(self, a: int, b: int) -> int:
        """Integer N with a <= N <= b."""
        if self.queued_ints:
            return self.queued_ints.popleft()
        return self._rng.randint(a, b)
