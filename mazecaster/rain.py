"""Falling rain overlay."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

START_RATE = 50
MAX_RATE = 300
DROPS_PER_COLUMN = 6


@dataclass
class RainDrop:
    """A single drop: screen position and falling speed."""

    x: float
    y: float
    speed: float


@dataclass
class Rain:
    """A field of rain drops whose density ramps up and down."""

    screen_width: int
    screen_height: int
    rate: int = 0
    drops: list[RainDrop] = field(default_factory=list)

    @property
    def active(self) -> list[RainDrop]:
        """The drops currently shown at this rate."""
        return self.drops[: self.screen_width * self.rate // 100]

    def reset(self, rng: Optional[random.Random] = None) -> None:
        """Scatter fresh drops over the screen and restart at the initial rate."""
        rng = rng or random.Random()
        self.rate = START_RATE
        self.drops = [
            RainDrop(
                float(rng.randrange(self.screen_width)),
                float(rng.randrange(self.screen_height)),
                float(rng.randrange(3) + 2),
            )
            for _ in range(self.screen_width * DROPS_PER_COLUMN)
        ]

    def update(self, raining: bool) -> None:
        """Ramp the rate toward rain or dry weather and advance the drops."""
        if raining:
            self.rate = min(self.rate + 1, MAX_RATE) if self.rate < MAX_RATE else self.rate
        elif self.rate > 0:
            self.rate -= 1
        for drop in self.active:
            shift = drop.speed * self.rate / 100
            drop.y += shift
            drop.x -= shift
            if drop.y > self.screen_height:
                drop.y = -1.0
            if drop.x < 0:
                drop.x = float(self.screen_width)

    def segments(self) -> list[tuple[tuple[int, int], tuple[int, int]]]:
        """Line segments to draw, one per active drop."""
        tail = self.rate // 100
        return [
            ((int(d.x), int(d.y)), (int(d.x - tail), int(d.y + tail)))
            for d in self.active
        ]