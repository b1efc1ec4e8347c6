from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class FishInstance:
    """A fish swimming across the pond.

    Position is the top-left corner of the bounding box in viewport coordinates
    (origin top-left, y grows downward). Instances compare by identity.
    """

    type: str
    x: float
    y: float
    speed: float
    direction: int = 1
    width: float = 100
    height: float = 50

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Inclusive axis-aligned bounding-box test."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    def has_exited(self, viewport_width: float) -> bool:
        return self.right < 0 or self.left > viewport_width

    def advance(self, viewport_width: float) -> None:
        self.x += self.speed * self.direction
        if self.x < 0 or self.x > viewport_width:
            self.direction *= -1
