"""
config.py - Environment-driven defaults for the renderer

Every value can be overridden with a SCENETRACER_* environment variable.
The tracer reads these as defaults; TracerSettings instances may still
override them one by one.
"""

import os

# Recursion
MAX_DEPTH = int(os.getenv("SCENETRACER_MAX_DEPTH", "3"))

# Direct lighting
SHADOW_FACTOR = float(os.getenv("SCENETRACER_SHADOW_FACTOR", "0.3"))
AMBIENT = float(os.getenv("SCENETRACER_AMBIENT", "0.1"))

# Secondary rays
BLEND_POLICY = os.getenv("SCENETRACER_BLEND_POLICY", "fixed").lower()
REFLECTION_WEIGHT = float(os.getenv("SCENETRACER_REFLECTION_WEIGHT", "0.7"))
REFRACTION_WEIGHT = float(os.getenv("SCENETRACER_REFRACTION_WEIGHT", "0.5"))
OUTSIDE_INDEX = float(os.getenv("SCENETRACER_OUTSIDE_INDEX", "1.0"))
INSIDE_INDEX = float(os.getenv("SCENETRACER_INSIDE_INDEX", "0.85"))

# Numerical tolerances
SURFACE_OFFSET = float(os.getenv("SCENETRACER_SURFACE_OFFSET", "0.001"))
PARALLEL_EPSILON = 1e-9

# Camera
FORWARD_DEPTH = float(os.getenv("SCENETRACER_FORWARD_DEPTH", "1.0"))

# Logging
LOG_LEVEL = os.getenv("SCENETRACER_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv(
    "SCENETRACER_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

__all__ = [
    "MAX_DEPTH",
    "SHADOW_FACTOR",
    "AMBIENT",
    "BLEND_POLICY",
    "REFLECTION_WEIGHT",
    "REFRACTION_WEIGHT",
    "OUTSIDE_INDEX",
    "INSIDE_INDEX",
    "SURFACE_OFFSET",
    "PARALLEL_EPSILON",
    "FORWARD_DEPTH",
    "LOG_LEVEL",
    "LOG_FORMAT",
]
