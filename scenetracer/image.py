"""
image.py - Pixel grid output

Shading leaves colors unclamped; this is the one place where they are
clamped to [0, 255] and turned into 8-bit pixels.
"""

import logging
import numpy as np
from pathlib import Path
from PIL import Image

from .render import PixelGrid

logger = logging.getLogger(__name__)


def to_rgb_array(grid: PixelGrid) -> np.ndarray:
    """
    Convert a grid[x][y] of Colors to an image array.

    Returns
    -------
    np.ndarray
        uint8 array of shape (height, width, 3)
    """
    width = len(grid)
    height = len(grid[0]) if width else 0
    values = np.empty((height, width, 3), dtype=np.float64)
    for x, column in enumerate(grid):
        for y, color in enumerate(column):
            values[y, x] = color.rgb
    return np.floor(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def save_image(grid: PixelGrid, path: str | Path) -> Path:
    """Write a rendered grid to an image file; the format follows the suffix."""
    path = Path(path)
    Image.fromarray(to_rgb_array(grid)).save(path)
    logger.info("Image saved to %s", path)
    return path
