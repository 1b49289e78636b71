"""Drawing a frame of the maze onto a pygame surface."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import pygame

from mazecaster.camera import Camera
from mazecaster.level import Level, Point
from mazecaster.rain import Rain
from mazecaster.raycast import (
    cast_ray,
    ceiling_source_height,
    floor_rows,
    sprite_blocks,
    wall_slice,
)

TILE_SIZE = 1024
FLOOR_SKIP = 4
MINIMAP_TILE = 4
MINIMAP_MARGIN = MINIMAP_TILE * 5
MINIMAP_ARROW = 3

INTRO, CEILING, WALL, GROUND, ENEMY = range(5)
FIRST_WEAPON = 5
NO_WEAPON = 11

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
RAIN_COLOR = (135, 206, 235)

FADE_STEP = 5
FADE_FRAME_MS = 20
FADE_HOLD_MS = 1000

Segment = tuple[tuple[int, int], tuple[int, int]]


def weapon_rect(screen_width: int, screen_height: int) -> pygame.Rect:
    """Screen area the held weapon is stretched over."""
    return pygame.Rect(
        screen_width // 4, screen_height // 2, screen_width // 2, screen_height // 2
    )


def _minimap_origin(map_height: int, screen_height: int) -> tuple[int, int]:
    shift_y = (screen_height - map_height * MINIMAP_TILE) - MINIMAP_MARGIN
    return MINIMAP_MARGIN, shift_y


def minimap_tiles(
    grid: Sequence[Sequence[int]], screen_height: int
) -> list[tuple[pygame.Rect, tuple[int, int, int]]]:
    """Rectangles and colours of the minimap cells, column by column."""
    height = len(grid)
    width = len(grid[0]) if height else 0
    shift_x, shift_y = _minimap_origin(height, screen_height)
    return [
        (
            pygame.Rect(
                x * MINIMAP_TILE + shift_x,
                y * MINIMAP_TILE + shift_y,
                MINIMAP_TILE,
                MINIMAP_TILE,
            ),
            WHITE if grid[y][x] else BLACK,
        )
        for x in range(width)
        for y in range(height)
    ]


def minimap_player(
    camera: Camera, map_height: int, screen_height: int
) -> tuple[pygame.Rect, list[Segment]]:
    """The player's marker on the minimap and the lines showing where it faces."""
    shift_x, shift_y = _minimap_origin(map_height, screen_height)
    px = camera.x * MINIMAP_TILE + shift_x
    py = camera.y * MINIMAP_TILE + shift_y
    marker = pygame.Rect(int(px), int(py), MINIMAP_TILE, MINIMAP_TILE)
    reach_x = MINIMAP_ARROW * camera.dir_x * MINIMAP_TILE
    reach_y = MINIMAP_ARROW * camera.dir_y * MINIMAP_TILE
    lines = [
        ((int(px + reach_x + n), int(py + reach_y)), (int(px + n), int(py)))
        for n in (1, 0, -1)
    ]
    return marker, lines


def fade_alphas() -> list[int]:
    """Alpha values of a fade in followed by a fade out."""
    fade_in = list(range(0, 256, FADE_STEP))
    return fade_in + fade_in[::-1]


def _present(display: pygame.Surface) -> None:
    if pygame.display.get_init() and pygame.display.get_surface() is display:
        pygame.display.flip()


def fade_in_out(
    display: pygame.Surface,
    image: pygame.Surface,
    delay: Callable[[int], object] = pygame.time.delay,
) -> None:
    """Fade image in over black, hold it, then fade it out again."""
    scaled = pygame.transform.scale(image, display.get_size())
    alphas = fade_alphas()
    hold_at = len(alphas) // 2
    for index, alpha in enumerate(alphas):
        if index == hold_at:
            delay(FADE_HOLD_MS)
        scaled.set_alpha(alpha)
        display.fill(BLACK)
        display.blit(scaled, (0, 0))
        _present(display)
        delay(FADE_FRAME_MS)


class Renderer:
    """Draws the maze, sprites, weapon, rain and minimap onto a surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        textures: Sequence[Optional[pygame.Surface]],
        tile_size: int = TILE_SIZE,
    ) -> None:
        self.surface = surface
        self.textures = list(textures)
        self.tile_size = tile_size

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def _copy(
        self,
        texture: pygame.Surface,
        src: tuple[int, int, int, int],
        dst: tuple[int, int, int, int],
        shade: int = 255,
    ) -> None:
        """Stretch part of a texture over a screen rectangle, darkened by shade."""
        if src[2] <= 0 or src[3] <= 0 or dst[2] <= 0 or dst[3] <= 0:
            return
        area = pygame.Rect(src).clip(texture.get_rect())
        if area.w <= 0 or area.h <= 0:
            return
        piece = texture.subsurface(area)
        if piece.get_size() != (dst[2], dst[3]):
            piece = pygame.transform.scale(piece, (dst[2], dst[3]))
        elif shade < 255:
            piece = piece.copy()
        if shade < 255:
            piece.fill((shade, shade, shade), special_flags=pygame.BLEND_RGB_MULT)
        self.surface.blit(piece, (dst[0], dst[1]))

    def _draw_floor(self, camera: Camera) -> None:
        ground = self.textures[GROUND]
        for row in floor_rows(
            camera, self.width, self.height, FLOOR_SKIP, self.tile_size
        ):
            strip = pygame.Surface((self.width, FLOOR_SKIP))
            for x, tex_x, tex_y in row.texels:
                strip.blit(
                    ground, (x, 0), pygame.Rect(tex_x, tex_y, FLOOR_SKIP, FLOOR_SKIP)
                )
            if row.shade < 255:
                strip.fill(
                    (row.shade, row.shade, row.shade),
                    special_flags=pygame.BLEND_RGB_MULT,
                )
            self.surface.blit(strip, (0, row.y))

    def draw_world(self, level: Level, camera: Camera) -> list[float]:
        """Draw floor, ceiling and walls; return the wall distance per column."""
        width, height = self.width, self.height
        self._draw_floor(camera)
        ceiling, wall = self.textures[CEILING], self.textures[WALL]
        depth = []
        for x in range(width):
            camera_x = 2 * x / width - 1
            ray_x = camera.dir_x + camera.plane_x * camera_x
            ray_y = camera.dir_y + camera.plane_y * camera_x
            hit = cast_ray(level.grid, camera.x, camera.y, ray_x, ray_y, height)
            self._copy(
                ceiling,
                (x, 0, 1, ceiling_source_height(hit.y_start, height)),
                (x, 0, 1, hit.y_start),
            )
            piece = wall_slice(
                hit, camera.x, camera.y, ray_x, ray_y, height, self.tile_size
            )
            self._copy(
                wall,
                (piece.tex_x, piece.tex_y, 1, piece.tex_height),
                (x, piece.y_start, 1, piece.height),
                piece.shade,
            )
            depth.append(hit.distance)
        return depth

    def draw_enemies(
        self, enemies: Sequence[Point], camera: Camera, depth: Sequence[float]
    ) -> None:
        """Draw each enemy sprite where it is not hidden behind a wall."""
        texture = self.textures[ENEMY]
        for enemy_x, enemy_y in enemies:
            blocks = sprite_blocks(
                enemy_x,
                enemy_y,
                camera,
                self.width,
                self.height,
                self.tile_size,
                depth,
            )
            if not blocks:
                continue
            shade = blocks[0].shade
            shaded = texture.copy()
            if shade < 255:
                shaded.fill((shade, shade, shade), special_flags=pygame.BLEND_RGB_MULT)
            for block in blocks:
                self.surface.blit(
                    shaded,
                    (block.x, block.y),
                    pygame.Rect(block.tex_x, block.tex_y, block.size, block.size),
                )

    def draw_weapon(self, weapon: int) -> None:
        """Draw the held weapon; an index without a texture shows no weapon."""
        if not 0 <= weapon < len(self.textures):
            return
        texture = self.textures[weapon]
        if texture is None:
            return
        rect = weapon_rect(self.width, self.height)
        self.surface.blit(pygame.transform.scale(texture, rect.size), rect.topleft)

    def draw_rain(self, rain: Rain) -> None:
        """Draw the active rain drops."""
        for start, end in rain.segments():
            pygame.draw.line(self.surface, RAIN_COLOR, start, end)

    def draw_minimap(self, level: Level, camera: Camera) -> None:
        """Draw the maze overview and the player's marker in the lower left."""
        for rect, color in minimap_tiles(level.grid, self.height):
            pygame.draw.rect(self.surface, color, rect)
        marker, lines = minimap_player(camera, level.height, self.height)
        pygame.draw.rect(self.surface, RED, marker)
        for start, end in lines:
            pygame.draw.line(self.surface, GREEN, start, end)

    def draw_frame(
        self,
        level: Level,
        camera: Camera,
        enemies: Sequence[Point],
        weapon: int,
        rain: Rain,
        show_map: bool,
    ) -> None:
        """Draw one complete frame."""
        self.surface.fill(BLACK)
        depth = self.draw_world(level, camera)
        self.draw_enemies(enemies, camera, depth)
        self.draw_weapon(weapon)
        if rain.rate:
            self.draw_rain(rain)
        if show_map:
            self.draw_minimap(level, camera)