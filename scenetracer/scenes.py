"""
scenes.py - Ready-made scenes

The demo room is a closed 40-unit cube of colored walls with two
spheres and two boxes inside, lit from above. Every primitive is named
so its material flags can be switched from the command line.
"""

import numpy as np

from .camera import Camera
from .color import Color
from .materials import create_matte
from .primitives import Box, Rectangle, Sphere
from .scene import Light, Scene

ROOM_HALF_SIZE = 20.0

# Light the demo can switch on next to the main one
SECOND_LIGHT_POSITION = (-9.0, 0.0, 2.0)
SECOND_LIGHT_INTENSITY = 0.6


def demo_camera() -> Camera:
    """Camera looking down +z from (0, 0, -10) with a 120 degree field of view."""
    return Camera(position=(0, 0, -10), field_of_view=np.pi / 1.5)


def demo_room() -> Scene:
    """
    Build the demo room.

    Walls face into the room. Names: left-wall, right-wall, ceiling,
    floor, front-wall, back-wall, sphere1, sphere2, box1, box2.

    Returns
    -------
    Scene
        Scene with one light at (0, 15, 5)
    """
    s = ROOM_HALF_SIZE

    def wall(name, points, rgb):
        return Rectangle(points, create_matte(Color(*rgb)), name=name)

    primitives = [
        wall("left-wall", [(-s, -s, s), (-s, -s, -s), (-s, s, -s), (-s, s, s)], (255, 100, 100)),
        wall("right-wall", [(s, -s, s), (s, s, s), (s, s, -s), (s, -s, -s)], (100, 100, 255)),
        wall("ceiling", [(-s, s, s), (-s, s, -s), (s, s, -s), (s, s, s)], (240, 240, 240)),
        wall("floor", [(-s, -s, s), (s, -s, s), (s, -s, -s), (-s, -s, -s)], (150, 150, 150)),
        wall("front-wall", [(-s, -s, s), (-s, s, s), (s, s, s), (s, -s, s)], (255, 255, 255)),
        wall("back-wall", [(-s, -s, -s), (s, -s, -s), (s, s, -s), (-s, s, -s)], (180, 180, 180)),
        Sphere((-8, -3, 15), 4, create_matte(Color(255, 107, 107)), name="sphere1"),
        Sphere((8, -5, 10), 5, create_matte(Color(78, 205, 196)), name="sphere2"),
        Box((-5, -10, 8), 6, 4, 2, create_matte(Color(255, 209, 102)), name="box1"),
        Box((6, 6, 8), 4, 4, 4, create_matte(Color(6, 214, 160)), name="box2"),
    ]

    return Scene(
        primitives,
        lights=[Light((0, 15, 5), 0.8)],
        background=Color(30, 30, 40),
    )
