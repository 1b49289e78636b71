"""The game loop, key handling and start-up."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Optional, Union

import pygame

from mazecaster.camera import RUN_SPEED, WALK_SPEED, Camera, Move
from mazecaster.level import Level, MapError, load_map
from mazecaster.rain import Rain
from mazecaster.render import FIRST_WEAPON, INTRO, NO_WEAPON, Renderer, fade_in_out

SCREEN_SIZE = (1280, 720)
WINDOW_TITLE = "Maze"
DEFAULT_MAP = "maps/map2.txt"
TEXTURE_DIR = "textures"
TEXTURE_FILES = (
    "maze.png",
    "ceil.jpg",
    "wall.jpg",
    "ground.jpg",
    "enemy.png",
    "w0.png",
    "w1.png",
    "w2.png",
    "w3.png",
    "w4.png",
    "w5.png",
)
TURN_STEP = 0.1

_MOVE_KEYS = (
    (pygame.K_w, Move.FORWARD),
    (pygame.K_s, Move.BACKWARD),
    (pygame.K_d, Move.RIGHT),
    (pygame.K_a, Move.LEFT),
)
_WATCHED_KEYS = tuple(key for key, _ in _MOVE_KEYS) + (
    pygame.K_LSHIFT,
    pygame.K_q,
    pygame.K_e,
    pygame.K_m,
    pygame.K_r,
    pygame.K_ESCAPE,
    pygame.K_1,
    pygame.K_3,
)


def next_weapon(weapon: int) -> int:
    """The weapon after this one; past the last comes the first."""
    return FIRST_WEAPON if weapon > NO_WEAPON - 1 else weapon + 1


def previous_weapon(weapon: int) -> int:
    """The weapon before this one; before the first comes no weapon."""
    return NO_WEAPON if weapon < FIRST_WEAPON + 1 else weapon - 1


@dataclass
class GameState:
    """Everything that changes while the game runs."""

    level: Level
    camera: Camera
    rain: Rain
    weapon: int = NO_WEAPON
    show_map: bool = False
    show_rain: bool = False
    running: bool = True

    def handle_keys(
        self, pressed: Collection[int], rng: Optional[random.Random] = None
    ) -> None:
        """React to the set of keys held down when a key is pressed."""
        directions = [move for key, move in _MOVE_KEYS if key in pressed]
        if directions:
            speed = RUN_SPEED if pygame.K_LSHIFT in pressed else WALK_SPEED
            self.camera.move(directions, self.level.grid, speed)
        if pygame.K_q in pressed:
            self.camera.rotate(-TURN_STEP)
        if pygame.K_e in pressed:
            self.camera.rotate(TURN_STEP)
        if pygame.K_m in pressed:
            self.show_map = not self.show_map
        if pygame.K_r in pressed:
            self.show_rain = not self.show_rain
            if self.show_rain:
                self.rain.reset(rng)
        if pygame.K_ESCAPE in pressed:
            self.running = False
        if pygame.K_1 in pressed:
            self.weapon = previous_weapon(self.weapon)
        if pygame.K_3 in pressed:
            self.weapon = next_weapon(self.weapon)

    def tick(self) -> None:
        """Advance the rain by one frame while any is falling."""
        if self.rain.rate:
            self.rain.update(self.show_rain)


def load_textures(directory: Union[str, Path]) -> list[pygame.Surface]:
    """Load the intro, ceiling, wall, ground, enemy and weapon images."""
    base = Path(directory)
    textures = []
    for name in TEXTURE_FILES:
        path = base / name
        if not path.is_file():
            raise FileNotFoundError(f"Unable to load image: {path}")
        try:
            textures.append(pygame.image.load(str(path)))
        except pygame.error as exc:
            raise OSError(f"Unable to load image: {path}: {exc}") from exc
    return textures


def _pressed_keys() -> set[int]:
    state = pygame.key.get_pressed()
    return {key for key in _WATCHED_KEYS if state[key]}


def run(map_path: Union[str, Path], texture_dir: Union[str, Path]) -> None:
    """Open the game window and play until the player quits."""
    textures = load_textures(texture_dir)
    level = load_map(map_path)
    pygame.init()
    try:
        display = pygame.display.set_mode(SCREEN_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        textures = [texture.convert_alpha() for texture in textures]
        state = GameState(level, Camera(*level.player), Rain(*SCREEN_SIZE))
        renderer = Renderer(display, textures)
        rng = random.Random()
        fade_in_out(display, textures[INTRO])
        while state.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    fade_in_out(display, textures[INTRO])
                    state.running = False
                elif event.type == pygame.KEYDOWN:
                    was_running = state.running
                    state.handle_keys(_pressed_keys(), rng)
                    if was_running and not state.running:
                        fade_in_out(display, textures[INTRO])
                elif event.type == pygame.MOUSEMOTION:
                    state.camera.turn_by_mouse(event.rel[0])
            if state.running:
                state.tick()
                renderer.draw_frame(
                    state.level,
                    state.camera,
                    state.level.enemies,
                    state.weapon,
                    state.rain,
                    state.show_map,
                )
                pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point; returns the exit status."""
    parser = argparse.ArgumentParser(
        prog="mazecaster", description="Walk through a ray-cast maze."
    )
    parser.add_argument("map", nargs="?", default=DEFAULT_MAP, help="map file")
    args = parser.parse_args(argv)
    try:
        run(args.map, TEXTURE_DIR)
    except (MapError, OSError, pygame.error) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0