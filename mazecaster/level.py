"""Maze maps: parsing, loading and spawn placement."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

Grid = tuple[tuple[int, ...], ...]
Point = tuple[float, float]

PLAYER_START: Point = (0.5, 0.5)
ENEMY_COUNT = 3
_ENEMY_ORIGIN = 15.5
_ENEMY_STRIDE_X = 13
_ENEMY_STRIDE_Y = 12


class MapError(Exception):
    """Raised when a map cannot be read or is malformed."""


@dataclass(frozen=True)
class Level:
    """A loaded maze together with the player's and enemies' spawn points."""

    grid: Grid
    player: Point
    enemies: tuple[Point, ...]

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)

    def is_wall(self, x: float, y: float) -> bool:
        """Whether the cell holding (x, y) is a wall; outside the map counts as wall."""
        row, col = int(y), int(x)
        if not (0 <= row < self.height and 0 <= col < self.width):
            return True
        return self.grid[row][col] != 0


def parse_map(text: str, source: str = "<map>") -> Grid:
    """Parse map text of '0' (open) and '1' (wall) rows.

    Only rows ended by a newline count; all rows must be as wide as the first.
    """
    rows = text.split("\n")[:-1]
    if not rows or not rows[0]:
        raise MapError(f"Invalid map file: {source}")
    width = len(rows[0])
    grid = []
    for row in rows:
        if len(row) != width or any(ch not in "01" for ch in row):
            raise MapError(f"Invalid map file: {source}")
        grid.append(tuple(int(ch) for ch in row))
    return tuple(grid)


def find_spawn(grid: Sequence[Sequence[int]], x: float, y: float) -> Point:
    """Walk diagonally from (x, y) until an open cell is reached."""
    start = (x, y)
    while True:
        row, col = int(y), int(x)
        if not (0 <= row < len(grid) and 0 <= col < len(grid[row])):
            raise MapError(f"No open cell on the diagonal from {start}")
        if not grid[row][col]:
            return (x, y)
        x += 1
        y += 1


def spawn_points(grid: Sequence[Sequence[int]]) -> tuple[Point, tuple[Point, ...]]:
    """Return the player's spawn point and the enemies' spawn points."""
    player = find_spawn(grid, *PLAYER_START)
    enemies = tuple(
        find_spawn(
            grid,
            _ENEMY_ORIGIN + i * _ENEMY_STRIDE_X,
            _ENEMY_ORIGIN + i * _ENEMY_STRIDE_Y,
        )
        for i in range(ENEMY_COUNT)
    )
    return player, enemies


def load_map(path: Union[str, Path]) -> Level:
    """Read a map file and place the player and enemies on it."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError(f"Can't open file: {path}") from exc
    grid = parse_map(text, str(path))
    player, enemies = spawn_points(grid)
    return Level(grid, player, enemies)