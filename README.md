# mazecaster

A first-person maze game drawn by raycasting with pygame. You walk through a
textured maze loaded from a plain text map. Three enemy sprites stand in the
maze, and you can cycle through six weapon images. Rain and an overhead
minimap can be turned on and off.

## Installing

```
pip install .
```

## Running

```
mazecaster [MAP_FILE]
```

If no map file is given, `maps/map2.txt` is used. Textures are read from a
`textures/` directory in the current working directory. It must hold
`maze.png` (the title card shown when the game starts and ends), `ceil.jpg`,
`wall.jpg`, `ground.jpg`, `enemy.png` and the weapon images `w0.png` to
`w5.png`. The window is 1280×720.

If the map or a texture cannot be loaded, an `Error: ...` line is printed to
standard error and the command exits with status 1.

## Map files

A map is a grid of `0` (open floor) and `1` (wall), one row per line. Only
rows ended by a newline count, and all of them must be as wide as the first.
Any other character makes the map invalid (`mazecaster.level.MapError`).
The player starts at the first open cell on the diagonal from the top-left
corner. Each of the three enemies starts at the first open cell on a
diagonal from a fixed point further into the map, so the map has to be large
enough to hold them. The maze should be closed by walls on its border: a ray
that leaves the map raises `MapError`.

## Controls

| Key            | Action                                   |
|----------------|------------------------------------------|
| W / S          | move forward / backward                  |
| A / D          | strafe left / right                      |
| Left Shift     | run while moving                         |
| Q / E          | turn left / right                        |
| mouse          | turn                                     |
| 1 / 3          | previous / next weapon (or none)         |
| M              | toggle the minimap                       |
| R              | toggle rain (it builds up and dies away) |
| Esc            | quit                                     |

Movement slides along walls instead of stopping dead.

## What it does not do

The enemies are still sprites: they do not move or attack, and the weapons
are only drawn on screen and cannot be fired. There is no score, no goal and
no saving.

## Using the library

The game logic works without a display:

```python
from mazecaster.level import load_map
from mazecaster.camera import Camera, Move
from mazecaster.raycast import cast_ray

level = load_map("maps/map2.txt")
camera = Camera(*level.player)
camera.move({Move.FORWARD}, level.grid, 0.1)
hit = cast_ray(level.grid, camera.x, camera.y, camera.dir_x, camera.dir_y, 720)
print(hit.distance, hit.line_height)
```

- `mazecaster.level`: `parse_map`, `load_map`, `find_spawn`, `spawn_points`
  and the `Level` dataclass (`grid`, `player`, `enemies`, `width`, `height`,
  `is_wall`).
- `mazecaster.camera`: `Camera` with `rotate`, `move` and `turn_by_mouse`,
  and the `Move` directions.
- `mazecaster.rain`: `Rain` with `reset`, `update` and `segments`.
- `mazecaster.raycast`: `cast_ray`, `wall_slice`, `floor_rows`,
  `sprite_blocks` and the lower-level `step_setup`, `march` and `wall_span`.
- `mazecaster.render`: `Renderer`, which draws frames onto any pygame
  surface, plus `fade_in_out`, `minimap_tiles` and `minimap_player`.
- `mazecaster.game`: `GameState`, `load_textures`, `run` and `main`.

## Tests

```
pip install .[test]
pytest
```