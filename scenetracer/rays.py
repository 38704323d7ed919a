"""
rays.py - Ray class for recursive scene ray tracing

A ray is defined by:
    - Origin point P = (x, y, z)
    - Unit direction D = (dx, dy, dz) with |D| = 1

Distances reported by intersections are measured along D, so the
direction is always normalized on construction.
"""

import numpy as np
from typing import List

from .vectors import Vector3, normalize


class Ray:
    """
    A half-line starting at `origin` and travelling along `direction`.

    Attributes
    ----------
    origin : np.ndarray
        Start point [x, y, z]
    direction : np.ndarray
        Unit direction [dx, dy, dz]

    Examples
    --------
    >>> ray = Ray(origin=[0, 0, -5], direction=[0, 0, 2])
    >>> ray.direction
    array([0., 0., 1.])
    >>> ray.point_at(13.0)
    array([0., 0., 8.])
    """

    __slots__ = ("origin", "direction")

    def __init__(
        self,
        origin: List[float] | np.ndarray,
        direction: List[float] | np.ndarray
    ):
        """
        Initialize a Ray object.

        Parameters
        ----------
        origin : array-like
            Starting position [x, y, z]
        direction : array-like
            Direction vector, normalized to unit length here

        Raises
        ------
        ValueError
            If direction has zero length
        """
        self.origin = np.array(origin, dtype=np.float64)
        self.direction = normalize(np.array(direction, dtype=np.float64))

    @property
    def x(self) -> float:
        """Origin x-coordinate."""
        return self.origin[0]

    @property
    def y(self) -> float:
        """Origin y-coordinate."""
        return self.origin[1]

    @property
    def z(self) -> float:
        """Origin z-coordinate."""
        return self.origin[2]

    def point_at(self, t: float) -> np.ndarray:
        """
        Get the point along the ray at parameter t.

        The parametric ray equation is: P(t) = origin + t * direction

        Parameters
        ----------
        t : float
            Distance along the ray

        Returns
        -------
        np.ndarray
            Point [x, y, z] at parameter t
        """
        return self.origin + t * self.direction

    def copy(self) -> 'Ray':
        """Create an independent copy of this ray."""
        return Ray(origin=self.origin.copy(), direction=self.direction.copy())

    @classmethod
    def from_two_points(
        cls,
        point1: List[float] | np.ndarray,
        point2: List[float] | np.ndarray
    ) -> 'Ray':
        """
        Create a ray starting at point1 and passing through point2.

        Raises
        ------
        ValueError
            If the two points coincide
        """
        p1 = np.array(point1, dtype=np.float64)
        p2 = np.array(point2, dtype=np.float64)
        return cls(origin=p1, direction=p2 - p1)

    @classmethod
    def offset_from(
        cls,
        point: Vector3,
        normal: Vector3,
        direction: Vector3,
        epsilon: float
    ) -> 'Ray':
        """
        Create a secondary ray leaving a surface.

        The origin is pushed `epsilon` along `normal` (use a negative
        epsilon to start below the surface) so the new ray does not
        re-hit the surface it left through rounding error.
        """
        return cls(origin=point + normal * epsilon, direction=direction)

    def __repr__(self) -> str:
        """String representation of the ray."""
        return (
            f"Ray at [{self.x:.4f}, {self.y:.4f}, {self.z:.4f}], "
            f"direction [{self.direction[0]:.4f}, {self.direction[1]:.4f}, "
            f"{self.direction[2]:.4f}]"
        )
