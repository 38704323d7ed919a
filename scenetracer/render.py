"""
render.py - Image rendering on top of the tracer

`compute_pixel` shades one pixel and is cheap, independent and
repeatable, so callers can schedule pixels however they like.
`render` shades a whole image row by row, either in-process or on a
fixed-size process pool, checking for cancellation between rows.

The result is indexed grid[x][y], x from the left and y from the top.
"""

import logging
import multiprocessing as mp
import time
from typing import Callable, List, Optional, Protocol

from .camera import Camera
from .color import Color
from .scene import Scene
from .tracer import Tracer, TracerSettings

logger = logging.getLogger(__name__)

PixelGrid = List[List[Color]]


class CancelFlag(Protocol):
    def is_set(self) -> bool: ...


class RenderCancelled(RuntimeError):
    """Raised when a render is stopped through its cancel flag."""

    def __init__(self, rows_done: int, height: int):
        super().__init__(f"Render cancelled after {rows_done} of {height} rows")
        self.rows_done = rows_done
        self.height = height


def compute_pixel(
    scene: Scene,
    camera: Camera,
    x: int,
    y: int,
    width: int,
    height: int,
    settings: Optional[TracerSettings] = None
) -> Color:
    """
    Shade a single pixel.

    Parameters
    ----------
    scene : Scene
        Scene to render
    camera : Camera
        Viewpoint
    x, y : int
        Pixel column and row
    width, height : int
        Image size in pixels
    settings : TracerSettings, optional
        Shading constants

    Returns
    -------
    Color
        Unclamped pixel color
    """
    tracer = Tracer(scene, settings)
    return tracer.trace(camera.primary_ray(x, y, width, height))


def _render_row(tracer: Tracer, camera: Camera, y: int, width: int, height: int) -> List[Color]:
    return [tracer.trace(camera.primary_ray(x, y, width, height)) for x in range(width)]


# Per-process state of pool workers, installed once by the initializer
_worker_state = {}


def _init_worker(scene: Scene, camera: Camera, settings: TracerSettings, width: int, height: int):
    _worker_state["tracer"] = Tracer(scene, settings)
    _worker_state["camera"] = camera
    _worker_state["size"] = (width, height)


def _render_row_in_worker(y: int) -> List[Color]:
    width, height = _worker_state["size"]
    return _render_row(_worker_state["tracer"], _worker_state["camera"], y, width, height)


def render(
    scene: Scene,
    camera: Camera,
    width: int,
    height: int,
    settings: Optional[TracerSettings] = None,
    workers: Optional[int] = None,
    cancel: Optional[CancelFlag] = None,
    progress: Optional[Callable[[int, int], None]] = None
) -> PixelGrid:
    """
    Render a full image.

    Parameters
    ----------
    scene : Scene
        Scene to render; must not be modified until this returns
    camera : Camera
        Viewpoint
    width, height : int
        Image size in pixels
    settings : TracerSettings, optional
        Shading constants
    workers : int, optional
        Number of worker processes; None or 1 renders in this process
    cancel : object with is_set(), optional
        Checked between rows, e.g. a threading.Event
    progress : callable, optional
        Called as progress(rows_done, height) after every row

    Returns
    -------
    list of list of Color
        grid[x][y]

    Raises
    ------
    ValueError
        If the image size or worker count is not positive
    RenderCancelled
        If the cancel flag is set before the last row completes
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")
    if workers is not None and workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if settings is None:
        settings = TracerSettings()

    grid: PixelGrid = [[None] * height for _ in range(width)]

    def store(y: int, row: List[Color]) -> None:
        for x, color in enumerate(row):
            grid[x][y] = color

    def check_cancel(rows_done: int) -> None:
        if cancel is not None and cancel.is_set():
            logger.info("Render cancelled after %d/%d rows", rows_done, height)
            raise RenderCancelled(rows_done, height)

    logger.info(
        "Rendering %dx%d, %d primitives, %d lights, %s, workers=%s",
        width, height, len(scene), len(scene.lights), settings, workers or 1,
    )
    start = time.perf_counter()

    if workers is None or workers == 1:
        tracer = Tracer(scene, settings)
        for y in range(height):
            check_cancel(y)
            store(y, _render_row(tracer, camera, y, width, height))
            if progress is not None:
                progress(y + 1, height)
            logger.debug("Row %d/%d done", y + 1, height)
    else:
        check_cancel(0)
        with mp.Pool(
            workers,
            initializer=_init_worker,
            initargs=(scene, camera, settings, width, height),
        ) as pool:
            # Leaving the block terminates outstanding rows on cancellation
            for y, row in enumerate(pool.imap(_render_row_in_worker, range(height))):
                store(y, row)
                if progress is not None:
                    progress(y + 1, height)
                logger.debug("Row %d/%d done", y + 1, height)
                if y + 1 < height:
                    check_cancel(y + 1)

    logger.info("Render finished in %.2fs", time.perf_counter() - start)
    return grid
