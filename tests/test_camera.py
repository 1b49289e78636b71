import math

import pytest

from mazecaster.camera import Camera, Move


def _open(size):
    return [[0] * size for _ in range(size)]


def test_rotate_keeps_lengths():
    cam = Camera(2.5, 2.5)
    dir_len = math.hypot(cam.dir_x, cam.dir_y)
    plane_len = math.hypot(cam.plane_x, cam.plane_y)
    cam.rotate(0.7)
    assert math.hypot(cam.dir_x, cam.dir_y) == pytest.approx(dir_len)
    assert math.hypot(cam.plane_x, cam.plane_y) == pytest.approx(plane_len)


def test_rotate_and_back():
    cam = Camera(2.5, 2.5)
    cam.rotate(0.3)
    cam.rotate(-0.3)
    assert cam.dir_x == pytest.approx(1.0)
    assert cam.dir_y == pytest.approx(0.0, abs=1e-12)
    assert cam.plane_y == pytest.approx(0.66)


def test_rotate_quarter_turn():
    cam = Camera(2.5, 2.5)
    cam.rotate(math.pi / 2)
    assert cam.dir_x == pytest.approx(0.0, abs=1e-12)
    assert cam.dir_y == pytest.approx(1.0)


def test_forward_then_backward_returns():
    cam = Camera(2.5, 2.5, dir_x=0.6, dir_y=0.8)
    grid = _open(5)
    cam.move([Move.FORWARD], grid, 0.3)
    assert cam.x > 2.5 and cam.y > 2.5
    cam.move([Move.BACKWARD], grid, 0.3)
    assert cam.x == pytest.approx(2.5)
    assert cam.y == pytest.approx(2.5)


def test_strafe_is_perpendicular():
    cam = Camera(2.5, 2.5)
    grid = _open(5)
    cam.move([Move.RIGHT], grid, 0.5)
    assert cam.x == pytest.approx(2.5)
    assert cam.y > 2.5
    cam.move([Move.LEFT], grid, 0.5)
    assert cam.y == pytest.approx(2.5)


def test_blocked_by_wall():
    grid = _open(3)
    grid[1][2] = 1
    cam = Camera(1.5, 1.5)
    cam.move([Move.FORWARD], grid, 1.0)
    assert (cam.x, cam.y) == (1.5, 1.5)


def test_slides_along_wall():
    grid = _open(3)
    grid[2][2] = 1
    cam = Camera(1.5, 1.5, dir_x=1.0, dir_y=1.0)
    cam.move([Move.FORWARD], grid, 0.8)
    assert cam.x == 1.5
    assert int(cam.y) == 2


def test_out_of_bounds_ignored():
    cam = Camera(0.5, 0.5)
    cam.move([Move.BACKWARD], _open(3), 2.0)
    assert (cam.x, cam.y) == (0.5, 0.5)


def test_opposite_directions_cancel():
    cam = Camera(2.5, 2.5)
    cam.move({Move.FORWARD, Move.BACKWARD}, _open(5), 0.5)
    assert cam.x == pytest.approx(2.5)


def test_turn_by_mouse_matches_rotate():
    a = Camera(1.5, 1.5)
    b = Camera(1.5, 1.5)
    a.turn_by_mouse(40)
    b.rotate(0.005 * 40)
    assert (a.dir_x, a.dir_y, a.plane_x, a.plane_y) == pytest.approx(
        (b.dir_x, b.dir_y, b.plane_x, b.plane_y)
    )


def test_turn_by_mouse_zero_does_nothing():
    cam = Camera(1.5, 1.5)
    cam.turn_by_mouse(0)
    assert (cam.dir_x, cam.dir_y) == (1.0, 0.0)