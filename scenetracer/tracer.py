"""
tracer.py - Recursive shading

For each ray the tracer finds the nearest hit, lights it from every
point light (with hard shadows), then optionally follows one mirrored
and one refracted ray. A depth counter bounds the recursion: every
secondary ray is traced with depth - 1 and depth 0 returns the
background.

The tracer only reads the scene. It keeps no state between calls, so a
single Tracer can shade any number of pixels in any order.
"""

from enum import Enum
from typing import Optional

from . import config
from .color import Color
from .primitives import HitRecord
from .rays import Ray
from .scene import Scene
from .vectors import dot, length, reflect, refract


class BlendPolicy(Enum):
    """
    How much of a secondary ray's color is mixed into a hit.

    Under DEPTH the weight is depth / max_depth, which is 1.0 at the
    first hit of a primary ray. That hit's own color is then replaced
    entirely by the secondary color, and on a surface that is both
    reflective and transparent the refracted color replaces the
    reflected one.
    """
    FIXED = "fixed"  # constant reflection / refraction weights
    DEPTH = "depth"  # depth / max_depth, fading with every bounce


class TracerSettings:
    """
    Tunable shading constants.

    Defaults come from `scenetracer.config` (and therefore from the
    SCENETRACER_* environment variables).

    Attributes
    ----------
    max_depth : int
        Recursion budget of a primary ray
    shadow_factor : float
        Multiplier in (0, 1) applied to an occluded light's contribution
    ambient : float
        Lower bound on the averaged light intensity
    blend_policy : BlendPolicy
        Weighting of reflected / refracted colors
    reflection_weight : float
        Reflection share under BlendPolicy.FIXED
    refraction_weight : float
        Refraction share under BlendPolicy.FIXED
    outside_index : float
        Refractive index of the medium around objects
    inside_index : float
        Refractive index of transparent objects
    surface_offset : float
        Distance secondary ray origins are pushed off a surface
    """

    def __init__(
        self,
        max_depth: int = config.MAX_DEPTH,
        shadow_factor: float = config.SHADOW_FACTOR,
        ambient: float = config.AMBIENT,
        blend_policy: BlendPolicy | str = config.BLEND_POLICY,
        reflection_weight: float = config.REFLECTION_WEIGHT,
        refraction_weight: float = config.REFRACTION_WEIGHT,
        outside_index: float = config.OUTSIDE_INDEX,
        inside_index: float = config.INSIDE_INDEX,
        surface_offset: float = config.SURFACE_OFFSET
    ):
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if not 0 < shadow_factor < 1:
            raise ValueError(f"shadow_factor must be in (0, 1), got {shadow_factor}")
        if not 0 <= ambient <= 1:
            raise ValueError(f"ambient must be in [0, 1], got {ambient}")
        for label, weight in (("reflection_weight", reflection_weight),
                              ("refraction_weight", refraction_weight)):
            if not 0 <= weight <= 1:
                raise ValueError(f"{label} must be in [0, 1], got {weight}")
        if outside_index <= 0 or inside_index <= 0:
            raise ValueError(
                f"Refractive indices must be positive, got {outside_index}/{inside_index}"
            )
        if surface_offset <= 0:
            raise ValueError(f"surface_offset must be positive, got {surface_offset}")

        self.max_depth = int(max_depth)
        self.shadow_factor = float(shadow_factor)
        self.ambient = float(ambient)
        self.blend_policy = BlendPolicy(blend_policy)
        self.reflection_weight = float(reflection_weight)
        self.refraction_weight = float(refraction_weight)
        self.outside_index = float(outside_index)
        self.inside_index = float(inside_index)
        self.surface_offset = float(surface_offset)

    def __repr__(self) -> str:
        return (
            f"TracerSettings(max_depth={self.max_depth}, "
            f"shadow={self.shadow_factor}, ambient={self.ambient}, "
            f"blend={self.blend_policy.value}, "
            f"n={self.outside_index}/{self.inside_index})"
        )


class Tracer:
    """
    Recursive Whitted-style shader over one scene.

    Parameters
    ----------
    scene : Scene
        Scene to trace; read, never modified
    settings : TracerSettings, optional
        Shading constants (default: TracerSettings())
    """

    def __init__(self, scene: Scene, settings: Optional[TracerSettings] = None):
        self.scene = scene
        self.settings = settings if settings is not None else TracerSettings()

    def trace(
        self,
        ray: Ray,
        depth: Optional[int] = None,
        exclude: Optional[int] = None
    ) -> Color:
        """
        Compute the color seen along a ray.

        Parameters
        ----------
        ray : Ray
            Ray to follow
        depth : int, optional
            Remaining recursion budget (default: settings.max_depth)
        exclude : int, optional
            Scene index of the primitive the ray leaves

        Returns
        -------
        Color
            Unclamped color
        """
        if depth is None:
            depth = self.settings.max_depth
        if depth <= 0:
            return self.scene.background

        hit = self.scene.nearest_hit(ray, exclude)
        if not hit.hit:
            return self.scene.background

        material = hit.primitive.material
        color = material.color * self.light_intensity(hit)

        if material.reflective:
            reflected = self._reflected_color(ray, hit, depth)
            color = color.blend(reflected, self._weight(self.settings.reflection_weight, depth))

        if material.transparent:
            transmitted = self._refracted_color(ray, hit, depth)
            if transmitted is not None:
                color = color.blend(transmitted, self._weight(self.settings.refraction_weight, depth))

        return color

    def light_intensity(self, hit: HitRecord) -> float:
        """
        Direct light reaching a hit point, averaged over the scene lights.

        Each light contributes intensity * max(0, L · N), scaled by the
        shadow factor when something lies between the point and the
        light. The average is clamped into [ambient, 1].
        """
        settings = self.settings
        lights = self.scene.lights
        if not lights:
            return settings.ambient

        total = 0.0
        for light in lights:
            to_light = light.position - hit.point
            distance = length(to_light)
            if distance < 1e-12:
                # Light sits on the surface; no direction to light from
                continue
            direction = to_light / distance

            shadow_ray = Ray.offset_from(hit.point, hit.normal, direction, settings.surface_offset)
            blocker = self.scene.nearest_hit(shadow_ray, hit.index)
            occluded = blocker.hit and blocker.distance < distance

            contribution = light.intensity * max(0.0, dot(direction, hit.normal))
            if occluded:
                contribution *= settings.shadow_factor
            total += contribution

        return max(settings.ambient, min(1.0, total / len(lights)))

    def _weight(self, fixed: float, depth: int) -> float:
        if self.settings.blend_policy is BlendPolicy.DEPTH:
            if not self.settings.max_depth:
                return 0.0
            return min(1.0, depth / self.settings.max_depth)
        return fixed

    def _leave(self, hit: HitRecord, direction) -> Ray:
        # Offset to the side of the surface the new ray travels into
        side = 1.0 if dot(direction, hit.normal) >= 0 else -1.0
        return Ray.offset_from(hit.point, hit.normal, direction, side * self.settings.surface_offset)

    def _reflected_color(self, ray: Ray, hit: HitRecord, depth: int) -> Color:
        direction = reflect(ray.direction, hit.normal)
        return self.trace(self._leave(hit, direction), depth - 1, hit.index)

    def _refracted_color(self, ray: Ray, hit: HitRecord, depth: int) -> Optional[Color]:
        direction = refract(
            ray.direction, hit.normal, self.settings.outside_index, self.settings.inside_index
        )
        if direction is None:
            # Total internal reflection: no transmitted term
            return None
        return self.trace(self._leave(hit, direction), depth - 1, hit.index)
