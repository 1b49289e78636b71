import math
import random

import pygame
import pytest

from mazecaster.camera import RUN_SPEED, WALK_SPEED, Camera
from mazecaster.game import (
    TEXTURE_DIR,
    TEXTURE_FILES,
    GameState,
    load_textures,
    main,
    next_weapon,
    previous_weapon,
)
from mazecaster.level import Level
from mazecaster.rain import DROPS_PER_COLUMN, START_RATE, Rain
from mazecaster.render import FIRST_WEAPON, NO_WEAPON

GRID = (
    (1, 1, 1, 1, 1),
    (1, 0, 0, 0, 1),
    (1, 0, 0, 0, 1),
    (1, 0, 0, 0, 1),
    (1, 1, 1, 1, 1),
)


def _state():
    level = Level(GRID, (1.5, 2.5), ((3.5, 3.5),) * 3)
    return GameState(level, Camera(*level.player), Rain(40, 30))


def _write_textures(directory):
    directory.mkdir()
    for name in TEXTURE_FILES:
        surface = pygame.Surface((2, 2))
        surface.fill((10, 20, 30))
        pygame.image.save(surface, str(directory / name))


def test_weapon_cycle_forward():
    assert next_weapon(NO_WEAPON) == FIRST_WEAPON
    assert next_weapon(FIRST_WEAPON) == FIRST_WEAPON + 1
    weapon = FIRST_WEAPON
    seen = []
    for _ in range(NO_WEAPON - FIRST_WEAPON + 1):
        weapon = next_weapon(weapon)
        seen.append(weapon)
    assert weapon == FIRST_WEAPON
    assert sorted(seen) == list(range(FIRST_WEAPON, NO_WEAPON + 1))


def test_weapon_cycle_backward():
    assert previous_weapon(FIRST_WEAPON) == NO_WEAPON
    assert previous_weapon(NO_WEAPON) == NO_WEAPON - 1
    for weapon in range(FIRST_WEAPON, NO_WEAPON + 1):
        assert next_weapon(previous_weapon(weapon)) == weapon


def test_weapon_keys():
    state = _state()
    state.handle_keys({pygame.K_3})
    assert state.weapon == FIRST_WEAPON
    state.handle_keys({pygame.K_1})
    assert state.weapon == NO_WEAPON


def test_toggle_map():
    state = _state()
    state.handle_keys({pygame.K_m})
    assert state.show_map is True
    state.handle_keys({pygame.K_m})
    assert state.show_map is False


def test_escape_stops():
    state = _state()
    state.handle_keys({pygame.K_ESCAPE})
    assert state.running is False


def test_walk_and_run():
    state = _state()
    state.handle_keys({pygame.K_w})
    assert state.camera.x == pytest.approx(1.5 + WALK_SPEED)
    state.handle_keys({pygame.K_s, pygame.K_LSHIFT})
    assert state.camera.x == pytest.approx(1.5 + WALK_SPEED - RUN_SPEED)
    assert state.camera.y == pytest.approx(2.5)


def test_shift_alone_does_not_move():
    state = _state()
    state.handle_keys({pygame.K_LSHIFT})
    assert (state.camera.x, state.camera.y) == (1.5, 2.5)


def test_turn_keys_keep_direction_length():
    state = _state()
    state.handle_keys({pygame.K_e})
    assert state.camera.dir_y > 0
    assert math.hypot(state.camera.dir_x, state.camera.dir_y) == pytest.approx(1.0)
    state.handle_keys({pygame.K_q})
    assert state.camera.dir_x == pytest.approx(1.0)
    assert state.camera.dir_y == pytest.approx(0.0, abs=1e-9)


def test_rain_toggle_and_tick():
    state = _state()
    state.handle_keys({pygame.K_r}, random.Random(3))
    assert state.show_rain is True
    assert state.rain.rate == START_RATE
    assert len(state.rain.drops) == 40 * DROPS_PER_COLUMN
    state.tick()
    assert state.rain.rate == START_RATE + 1
    state.handle_keys({pygame.K_r})
    assert state.show_rain is False
    state.tick()
    assert state.rain.rate == START_RATE


def test_tick_without_rain_is_still():
    state = _state()
    state.tick()
    assert state.rain.rate == 0
    assert state.rain.drops == []


def test_load_textures(tmp_path):
    directory = tmp_path / TEXTURE_DIR
    _write_textures(directory)
    textures = load_textures(directory)
    assert len(textures) == len(TEXTURE_FILES)
    assert all(texture.get_size() == (2, 2) for texture in textures)


def test_load_textures_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_textures(tmp_path / "nowhere")


def test_main_without_textures(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "maze.png" in capsys.readouterr().err


def test_main_with_missing_map(tmp_path, monkeypatch, capsys):
    _write_textures(tmp_path / TEXTURE_DIR)
    monkeypatch.chdir(tmp_path)
    assert main(["absent.txt"]) == 1
    assert "Can't open file: absent.txt" in capsys.readouterr().err


def test_main_with_invalid_map(tmp_path, monkeypatch, capsys):
    _write_textures(tmp_path / TEXTURE_DIR)
    (tmp_path / "bad.txt").write_text("01x\n010\n")
    monkeypatch.chdir(tmp_path)
    assert main(["bad.txt"]) == 1
    assert "Invalid map file" in capsys.readouterr().err