"""
scene.py - Scene container and nearest-hit query

A scene owns an ordered, fixed set of primitives, a mutable list of point
lights, and a background color. A primitive's position in the scene is
its index; secondary rays name the surface they leave by that index so
the query can skip it.
"""

import logging
import numpy as np
from typing import Iterable, List, Optional, Sequence

from .color import Color
from .primitives import HitRecord, Primitive
from .rays import Ray
from .vectors import as_vector

logger = logging.getLogger(__name__)


class Light:
    """
    Point light.

    Attributes
    ----------
    position : np.ndarray
        Light position [x, y, z]; may be moved between renders
    intensity : float
        Non-negative brightness, 1.0 being full strength
    """

    def __init__(self, position: Sequence[float] | np.ndarray, intensity: float):
        if intensity < 0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")
        self.position = as_vector(position)
        self.intensity = float(intensity)

    def move_to(self, position: Sequence[float] | np.ndarray) -> None:
        """
        Move the light to a new position.

        Parameters
        ----------
        position : array-like
            New position [x, y, z]
        """
        self.position = as_vector(position)

    def __repr__(self) -> str:
        return f"Light(position={np.round(self.position, 4)}, intensity={self.intensity})"


class Scene:
    """
    Primitives, lights and background of one render.

    Primitive membership is fixed at construction. Lights may be added,
    removed or moved between renders, never while one is in flight.

    Parameters
    ----------
    primitives : iterable of Primitive
        Scene geometry; order defines each primitive's index
    lights : iterable of Light, optional
        Initial lights
    background : Color, optional
        Color returned by rays that hit nothing (default: black)
    """

    def __init__(
        self,
        primitives: Iterable[Primitive],
        lights: Optional[Iterable[Light]] = None,
        background: Optional[Color] = None
    ):
        self._primitives = tuple(primitives)
        self.lights: List[Light] = list(lights) if lights is not None else []
        self.background = background if background is not None else Color(0, 0, 0)

    @property
    def primitives(self) -> tuple:
        """Scene geometry in index order; fixed after construction."""
        return self._primitives

    def add_light(self, light: Light) -> None:
        """
        Add a light to the scene.

        Parameters
        ----------
        light : Light
            Light to append; takes effect from the next render
        """
        self.lights.append(light)
        logger.debug("Added %r (%d lights)", light, len(self.lights))

    def remove_light(self, light: Light) -> None:
        """
        Remove a light by identity.

        Raises
        ------
        ValueError
            If the light is not part of the scene
        """
        for i, existing in enumerate(self.lights):
            if existing is light:
                del self.lights[i]
                logger.debug("Removed %r (%d lights)", light, len(self.lights))
                return
        raise ValueError(f"{light!r} is not in the scene")

    def index_of(self, primitive: Primitive) -> int:
        """
        Find the index of a primitive by identity.

        Raises
        ------
        ValueError
            If the primitive is not part of the scene
        """
        for i, existing in enumerate(self._primitives):
            if existing is primitive:
                return i
        raise ValueError(f"{primitive!r} is not in the scene")

    def find(self, name: str) -> Primitive:
        """
        Look up a primitive by name.

        Raises
        ------
        KeyError
            If no primitive carries that name
        """
        for primitive in self._primitives:
            if primitive.name == name:
                return primitive
        raise KeyError(name)

    def nearest_hit(self, ray: Ray, exclude: Optional[int] = None) -> HitRecord:
        """
        Find the closest primitive struck by a ray.

        Parameters
        ----------
        ray : Ray
            Query ray
        exclude : int, optional
            Index of a primitive to skip, normally the surface the ray
            is leaving

        Returns
        -------
        HitRecord
            Closest hit tagged with its scene index, or a miss
        """
        closest = HitRecord.miss()
        for index, primitive in enumerate(self._primitives):
            if index == exclude:
                continue
            candidate = primitive.intersect(ray)
            if candidate.hit and candidate.distance < closest.distance:
                candidate.index = index
                closest = candidate
        return closest

    def __len__(self) -> int:
        return len(self._primitives)

    def __repr__(self) -> str:
        return (
            f"Scene({len(self._primitives)} primitives, "
            f"{len(self.lights)} lights, background={self.background!r})"
        )
