"""Player position, view direction and movement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

WALK_SPEED = 0.1
RUN_SPEED = 0.3
MOUSE_SENSITIVITY = 0.005


class Move(Enum):
    """Movement directions, in the order they are applied."""

    FORWARD = "w"
    BACKWARD = "s"
    RIGHT = "d"
    LEFT = "a"


@dataclass
class Camera:
    """Player position, facing direction and camera plane."""

    x: float
    y: float
    dir_x: float = 1.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.66

    def rotate(self, angle: float) -> None:
        """Rotate the facing direction and camera plane by angle radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def _offset(self, direction: Move, speed: float) -> tuple[float, float]:
        if direction is Move.FORWARD:
            return self.dir_x * speed, self.dir_y * speed
        if direction is Move.BACKWARD:
            return -self.dir_x * speed, -self.dir_y * speed
        if direction is Move.RIGHT:
            return -self.dir_y * speed, self.dir_x * speed
        return self.dir_y * speed, -self.dir_x * speed

    def move(
        self,
        directions: Iterable[Move],
        grid: Sequence[Sequence[int]],
        speed: float = WALK_SPEED,
    ) -> None:
        """Step in each requested direction, sliding along walls."""
        wanted = set(directions)
        height = len(grid)
        width = len(grid[0]) if height else 0
        for direction in Move:
            if direction not in wanted:
                continue
            dx, dy = self._offset(direction, speed)
            new_x, new_y = self.x + dx, self.y + dy
            col, row = int(new_x), int(new_y)
            if not (0 <= col <= width - 1 and 0 <= row <= height - 1):
                continue
            if not grid[row][col]:
                self.x, self.y = new_x, new_y
            elif not grid[row][int(self.x)]:
                self.y = new_y
            elif not grid[int(self.y)][col]:
                self.x = new_x

    def turn_by_mouse(self, xrel: int) -> None:
        """Turn according to a horizontal mouse motion."""
        angle = MOUSE_SENSITIVITY * xrel
        if angle != 0:
            self.rotate(angle)