"""
camera.py - Pinhole camera and primary ray generation

The camera sits at `position` and looks down +z with +y up. Pixel
(x, y) is mapped onto a reference plane `forward_depth` in front of the
camera:

    sx =  (2 (x + 0.5) / width  - 1) * tan(fov / 2) * (width / height)
    sy = -(2 (y + 0.5) / height - 1) * tan(fov / 2)

Image rows grow downward while world y grows upward, hence the sign on sy.
"""

import numpy as np
from typing import Iterator, Sequence, Tuple

from .config import FORWARD_DEPTH
from .rays import Ray
from .vectors import as_vector


class Camera:
    """
    Pinhole camera.

    Attributes
    ----------
    position : np.ndarray
        Eye point, origin of every primary ray
    field_of_view : float
        Vertical field of view in radians, 0 < fov < pi
    forward_depth : float
        Distance of the reference plane (default: 1.0)
    """

    def __init__(
        self,
        position: Sequence[float] | np.ndarray,
        field_of_view: float,
        forward_depth: float = FORWARD_DEPTH
    ):
        if not 0 < field_of_view < np.pi:
            raise ValueError(
                f"Field of view must be in (0, pi) radians, got {field_of_view}"
            )
        if not forward_depth > 0:
            raise ValueError(f"Forward depth must be positive, got {forward_depth}")
        self.position = as_vector(position)
        self.field_of_view = float(field_of_view)
        self.forward_depth = float(forward_depth)

    def primary_ray(self, x: float, y: float, width: int, height: int) -> Ray:
        """
        Ray through the center of pixel (x, y).

        Parameters
        ----------
        x : float
            Column, 0 at the left edge
        y : float
            Row, 0 at the top edge
        width : int
            Image width in pixels
        height : int
            Image height in pixels

        Returns
        -------
        Ray
            Ray from the camera position through the pixel
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")
        half_extent = np.tan(self.field_of_view / 2)
        sx = (2 * (x + 0.5) / width - 1) * half_extent * (width / height)
        sy = -(2 * (y + 0.5) / height - 1) * half_extent
        return Ray(self.position, (sx, sy, self.forward_depth))

    def generate_rays(self, width: int, height: int) -> Iterator[Tuple[int, int, Ray]]:
        """Yield (x, y, ray) for every pixel, row by row from the top."""
        for y in range(height):
            for x in range(width):
                yield x, y, self.primary_ray(x, y, width, height)

    def __repr__(self) -> str:
        return (
            f"Camera(position={np.round(self.position, 4)}, "
            f"fov={np.degrees(self.field_of_view):.2f}°)"
        )
