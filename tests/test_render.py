import threading

import numpy as np
import pytest

from scenetracer import (
    Camera,
    Color,
    Light,
    Material,
    RenderCancelled,
    Scene,
    Sphere,
    TracerSettings,
    compute_pixel,
    render,
)

WIDTH, HEIGHT = 6, 4


@pytest.fixture
def scene(floor):
    ball = Sphere((0, 2, 5), 2, Material(Color(200, 50, 50), reflective=True))
    return Scene([floor, ball], [Light((0, 10, 0), 1.0)], Color(30, 30, 40))


@pytest.fixture
def camera():
    return Camera((0, 2, -8), np.pi / 2)


class SetAfter:
    """Cancel flag that turns on after a number of checks."""

    def __init__(self, checks):
        self.remaining = checks

    def is_set(self):
        self.remaining -= 1
        return self.remaining < 0


def test_grid_is_indexed_x_then_y(scene, camera):
    grid = render(scene, camera, WIDTH, HEIGHT)
    assert len(grid) == WIDTH
    assert all(len(column) == HEIGHT for column in grid)
    assert all(isinstance(color, Color) for column in grid for color in column)


def test_compute_pixel_matches_render(scene, camera):
    settings = TracerSettings(max_depth=3)
    grid = render(scene, camera, WIDTH, HEIGHT, settings=settings)
    for x, y in [(0, 0), (3, 2), (5, 3)]:
        assert compute_pixel(scene, camera, x, y, WIDTH, HEIGHT, settings) == grid[x][y]


def test_render_is_repeatable(scene, camera):
    first = render(scene, camera, WIDTH, HEIGHT)
    second = render(scene, camera, WIDTH, HEIGHT)
    assert all(a == b for col_a, col_b in zip(first, second) for a, b in zip(col_a, col_b))


def test_worker_pool_matches_sequential(scene, camera):
    sequential = render(scene, camera, WIDTH, HEIGHT)
    parallel = render(scene, camera, WIDTH, HEIGHT, workers=2)
    for col_a, col_b in zip(sequential, parallel):
        for a, b in zip(col_a, col_b):
            assert np.allclose(a.rgb, b.rgb)


def test_progress_is_reported_per_row(scene, camera):
    calls = []
    render(scene, camera, WIDTH, HEIGHT, progress=lambda done, total: calls.append((done, total)))
    assert calls == [(1, HEIGHT), (2, HEIGHT), (3, HEIGHT), (4, HEIGHT)]


@pytest.mark.parametrize("workers", [None, 2])
def test_cancel_before_start(scene, camera, workers):
    flag = threading.Event()
    flag.set()
    with pytest.raises(RenderCancelled) as excinfo:
        render(scene, camera, WIDTH, HEIGHT, workers=workers, cancel=flag)
    assert excinfo.value.rows_done == 0


def test_cancel_between_rows(scene, camera):
    rows = []
    with pytest.raises(RenderCancelled) as excinfo:
        render(scene, camera, WIDTH, HEIGHT, cancel=SetAfter(2),
               progress=lambda done, total: rows.append(done))
    assert excinfo.value.rows_done == 2
    assert rows == [1, 2]


def test_cancel_between_rows_on_worker_pool(scene, camera):
    rows = []
    with pytest.raises(RenderCancelled) as excinfo:
        render(scene, camera, WIDTH, HEIGHT, workers=2, cancel=SetAfter(2),
               progress=lambda done, total: rows.append(done))
    assert excinfo.value.rows_done == 2
    assert excinfo.value.height == HEIGHT
    assert rows == [1, 2]


def test_unset_flag_renders_everything(scene, camera):
    grid = render(scene, camera, WIDTH, HEIGHT, cancel=threading.Event())
    assert all(color is not None for column in grid for color in column)


@pytest.mark.parametrize("width, height, workers", [(0, 4, None), (4, -1, None), (4, 4, 0)])
def test_invalid_arguments(scene, camera, width, height, workers):
    with pytest.raises(ValueError):
        render(scene, camera, width, height, workers=workers)
