"""
scenetracer - A recursive ray tracer for small static scenes in Python

Spheres, triangles, rectangles and boxes lit by point lights, with hard
shadows, mirror reflection and refraction.
"""

from .vectors import vec3, dot, cross, length, normalize, reflect, refract
from .color import Color
from .rays import Ray
from .materials import Material, create_matte, create_mirror, create_glass
from .primitives import Primitive, PrimitiveKind, HitRecord
from .primitives import Sphere, Triangle, Rectangle, Box
from .primitives import create_wall, create_cube
from .scene import Light, Scene
from .camera import Camera
from .tracer import BlendPolicy, Tracer, TracerSettings
from .render import RenderCancelled, compute_pixel, render

__version__ = "0.1.0"

__all__ = [
    # Vectors
    "vec3",
    "dot",
    "cross",
    "length",
    "normalize",
    "reflect",
    "refract",
    # Color and rays
    "Color",
    "Ray",
    # Materials
    "Material",
    "create_matte",
    "create_mirror",
    "create_glass",
    # Primitives
    "Primitive",
    "PrimitiveKind",
    "HitRecord",
    "Sphere",
    "Triangle",
    "Rectangle",
    "Box",
    "create_wall",
    "create_cube",
    # Scene
    "Light",
    "Scene",
    "Camera",
    # Tracing
    "BlendPolicy",
    "Tracer",
    "TracerSettings",
    "RenderCancelled",
    "compute_pixel",
    "render",
]
