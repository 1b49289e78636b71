"""Ray casting: wall hits, texture slices, floor rows and sprite blocks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from mazecaster.camera import Camera
from mazecaster.level import MapError

Grid = Sequence[Sequence[int]]

CEILING_TEXTURE_HEIGHT = 1280
SPRITE_BLOCK = 4
_MAX_LINE = 2**31 - 1


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _inv_abs(value: float) -> float:
    return abs(1.0 / value) if value else math.inf


def _shade(level: float, full: int = 255) -> int:
    return max(0, int(full * level))


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall and how tall that wall appears on screen."""

    map_x: int
    map_y: int
    side: int
    distance: float
    line_height: int
    y_start: int
    y_end: int


@dataclass(frozen=True)
class WallSlice:
    """The texture column and screen span of one wall slice."""

    tex_x: int
    tex_y: int
    tex_height: int
    y_start: int
    height: int
    shade: int


@dataclass(frozen=True)
class FloorRow:
    """One screen row of floor: its shade and (screen_x, tex_x, tex_y) texels."""

    y: int
    shade: int
    texels: tuple[tuple[int, int, int], ...]


@dataclass(frozen=True)
class SpriteBlock:
    """A square block of a sprite texture drawn at a screen position."""

    tex_x: int
    tex_y: int
    x: int
    y: int
    shade: int
    size: int = SPRITE_BLOCK


def brightness(distance: float, scale: float, offset: float) -> float:
    """Light level falling off with distance, capped at full brightness."""
    denominator = distance * scale + offset
    if denominator == 0:
        return 1.0
    return min(1.0, 1.0 / denominator)


def step_setup(
    ray_dir_x: float,
    ray_dir_y: float,
    map_x: int,
    map_y: int,
    delta_x: float,
    delta_y: float,
    pos_x: float,
    pos_y: float,
) -> tuple[int, int, float, float]:
    """Return the grid steps and the distances to the first grid lines."""
    if ray_dir_x < 0:
        step_x, side_dist_x = -1, (pos_x - map_x) * delta_x
    else:
        step_x, side_dist_x = 1, (map_x + 1.0 - pos_x) * delta_x
    if ray_dir_y < 0:
        step_y, side_dist_y = -1, (pos_y - map_y) * delta_y
    else:
        step_y, side_dist_y = 1, (map_y + 1.0 - pos_y) * delta_y
    return step_x, step_y, side_dist_x, side_dist_y


def march(
    grid: Grid,
    map_x: int,
    map_y: int,
    step_x: int,
    step_y: int,
    side_dist_x: float,
    side_dist_y: float,
    delta_x: float,
    delta_y: float,
) -> tuple[int, int, int]:
    """Step through the grid until a wall is hit; return (map_x, map_y, side)."""
    while True:
        if side_dist_x < side_dist_y:
            side_dist_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_dist_y += delta_y
            map_y += step_y
            side = 1
        if not (0 <= map_y < len(grid) and 0 <= map_x < len(grid[map_y])):
            raise MapError(f"Ray left the map at ({map_x}, {map_y})")
        if grid[map_y][map_x] > 0:
            return map_x, map_y, side


def wall_span(
    side: int,
    map_x: int,
    map_y: int,
    step_x: int,
    step_y: int,
    pos_x: float,
    pos_y: float,
    ray_dir_x: float,
    ray_dir_y: float,
    screen_height: int,
) -> tuple[float, int, int, int]:
    """Return (distance, line_height, y_start, y_end) for a wall hit."""
    if side == 0:
        distance = (map_x - pos_x + (1 - step_x) // 2) / ray_dir_x
    else:
        distance = (map_y - pos_y + (1 - step_y) // 2) / ray_dir_y
    line_height = int(screen_height / distance) if distance > 0 else _MAX_LINE
    half_screen = screen_height // 2
    y_start = max(0, _cdiv(-line_height, 2) + half_screen)
    y_end = _cdiv(line_height, 2) + half_screen
    if y_end >= screen_height:
        y_end = screen_height - 1
    return distance, line_height, y_start, y_end


def cast_ray(
    grid: Grid,
    pos_x: float,
    pos_y: float,
    ray_dir_x: float,
    ray_dir_y: float,
    screen_height: int,
) -> RayHit:
    """Cast one ray from (pos_x, pos_y) and describe the wall it hits."""
    map_x, map_y = int(pos_x), int(pos_y)
    delta_x, delta_y = _inv_abs(ray_dir_x), _inv_abs(ray_dir_y)
    step_x, step_y, side_x, side_y = step_setup(
        ray_dir_x, ray_dir_y, map_x, map_y, delta_x, delta_y, pos_x, pos_y
    )
    map_x, map_y, side = march(
        grid, map_x, map_y, step_x, step_y, side_x, side_y, delta_x, delta_y
    )
    distance, line_height, y_start, y_end = wall_span(
        side, map_x, map_y, step_x, step_y, pos_x, pos_y,
        ray_dir_x, ray_dir_y, screen_height,
    )
    return RayHit(map_x, map_y, side, distance, line_height, y_start, y_end)


def wall_slice(
    hit: RayHit,
    pos_x: float,
    pos_y: float,
    ray_dir_x: float,
    ray_dir_y: float,
    screen_height: int,
    tile_size: int,
) -> WallSlice:
    """Map a wall hit to the texture column and rows it shows."""
    level = brightness(hit.distance, 0.5, 0.1)
    line_height = max(1, min(hit.line_height, screen_height))

    def tex_row(y: int) -> int:
        scaled = (y * 256 - screen_height * 128 + line_height * 128) * tile_size
        return _cdiv(_cdiv(scaled, line_height), 256)

    tex_start = tex_row(hit.y_start)
    tex_end = tex_row(hit.y_end)
    if hit.side == 1:
        shade = _shade(level, 125)
        wall_x = pos_x + hit.distance * ray_dir_x
    else:
        shade = _shade(level)
        wall_x = pos_y + hit.distance * ray_dir_y
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * tile_size)
    if (hit.side == 0 and ray_dir_x > 0) or (hit.side == 1 and ray_dir_y < 0):
        tex_x = tile_size - tex_x - 1
    return WallSlice(
        tex_x=tex_x,
        tex_y=tex_start,
        tex_height=tex_end - tex_start,
        y_start=hit.y_start,
        height=hit.y_end - hit.y_start,
        shade=shade,
    )


def ceiling_source_height(y_start: int, screen_height: int) -> int:
    """Rows of the ceiling texture shown above a wall starting at y_start."""
    return _cdiv(y_start * CEILING_TEXTURE_HEIGHT, screen_height)


def floor_rows(
    camera: Camera,
    screen_width: int,
    screen_height: int,
    skip: int,
    tile_size: int,
) -> Iterator[FloorRow]:
    """Yield the floor rows below the horizon, every skip pixels.

    The horizon row itself lies at infinite distance and is left out.
    """
    ray_x0 = camera.dir_x - camera.plane_x
    ray_x1 = camera.dir_x + camera.plane_x
    ray_y0 = camera.dir_y - camera.plane_y
    ray_y1 = camera.dir_y + camera.plane_y
    horizon = screen_height // 2
    pos_z = 0.5 * screen_height
    mask = tile_size - 1
    for y in range(horizon, screen_height, skip):
        p = y - horizon
        if p == 0:
            continue
        row_distance = pos_z / p
        step_x = row_distance * (ray_x1 - ray_x0) / screen_width
        step_y = row_distance * (ray_y1 - ray_y0) / screen_width
        floor_x = camera.x + row_distance * ray_x0
        floor_y = camera.y + row_distance * ray_y0
        texels = []
        for x in range(0, screen_width, skip):
            tex_x = int(tile_size * (floor_x - int(floor_x))) & mask
            tex_y = int(tile_size * (floor_y - int(floor_y))) & mask
            texels.append((x, tex_x, tex_y))
            floor_x += step_x * skip
            floor_y += step_y * skip
        yield FloorRow(y, _shade(brightness(row_distance, 0.2, 0.5)), tuple(texels))


def sprite_blocks(
    sprite_x: float,
    sprite_y: float,
    camera: Camera,
    screen_width: int,
    screen_height: int,
    tile_size: int,
    depth: Sequence[float],
) -> list[SpriteBlock]:
    """Blocks of a sprite at (sprite_x, sprite_y) not hidden behind walls."""
    rel_x, rel_y = sprite_x - camera.x, sprite_y - camera.y
    inv_det = 1.0 / (camera.plane_x * camera.dir_y - camera.plane_y * camera.dir_x)
    transform_x = inv_det * (camera.dir_y * rel_x - camera.dir_x * rel_y)
    transform_y = inv_det * (-camera.plane_y * rel_x + camera.plane_x * rel_y)
    if transform_y <= 0:
        return []
    shade = _shade(brightness(transform_y, 0.2, 0.5))
    screen_x = int((screen_width // 2) * (1 + transform_x / transform_y))
    width = abs(int(screen_height / transform_y))
    height = abs(int(screen_height / transform_y))
    if width == 0 or height == 0:
        return []
    left = _cdiv(-width, 2) + screen_x
    x_start = max(0, left)
    x_end = width // 2 + screen_x
    if x_end > screen_width:
        x_end = screen_width - 1
    y_start = max(0, _cdiv(-height, 2) + screen_height // 2)
    y_end = height // 2 + screen_height // 2
    if y_end > screen_width:
        y_end = screen_height - 1
    blocks = []
    for x in range(x_start, x_end + 1, SPRITE_BLOCK):
        if not (0 <= x <= screen_width - 1) or transform_y >= depth[x]:
            continue
        tex_x = _cdiv(_cdiv(256 * (x - left) * tile_size, width), 256)
        for y in range(y_start, y_end + 1, SPRITE_BLOCK):
            scaled = (y * 256 - screen_height * 128 + height * 128) * tile_size
            tex_y = _cdiv(_cdiv(scaled, height), 256)
            blocks.append(SpriteBlock(tex_x, tex_y, x, y, shade))
    return blocks