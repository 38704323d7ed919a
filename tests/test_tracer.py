import numpy as np
import pytest

from scenetracer import (
    BlendPolicy,
    Color,
    Light,
    Ray,
    Rectangle,
    Scene,
    Sphere,
    Tracer,
    TracerSettings,
    create_glass,
    create_matte,
    create_mirror,
)

SETTINGS = dict(shadow_factor=0.3, ambient=0.1, reflection_weight=0.7,
                refraction_weight=0.5, inside_index=0.85)

DOWN_ONTO_FLOOR = Ray((1, 3, -2), (0, -1, 0))


def make_tracer(scene, **overrides):
    return Tracer(scene, TracerSettings(**{**SETTINGS, **overrides}))


class RecordingTracer(Tracer):
    """Tracer that logs every (depth, result) it is asked for."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def trace(self, ray, depth=None, exclude=None):
        result = super().trace(ray, depth, exclude)
        self.calls.append((depth, result))
        return result


# --- Termination ---

def test_depth_zero_returns_background(floor, background):
    scene = Scene([floor], [Light((0, 10, 0), 1.0)], background)
    tracer = make_tracer(scene)
    assert tracer.trace(DOWN_ONTO_FLOOR, 0) is background
    assert tracer.trace(DOWN_ONTO_FLOOR, -1) is background


def test_miss_returns_background(floor, background):
    tracer = make_tracer(Scene([floor], [], background))
    assert tracer.trace(Ray((0, 3, 0), (0, 1, 0)), 3) == background


def test_default_depth_comes_from_settings(floor, background):
    scene = Scene([floor], [], background)
    assert make_tracer(scene, max_depth=0).trace(DOWN_ONTO_FLOOR) is background
    assert make_tracer(scene, max_depth=1).trace(DOWN_ONTO_FLOOR) != background


# --- Direct lighting and shadows ---

def test_unoccluded_light_gives_full_intensity(floor, background):
    scene = Scene([floor], [Light((1, 10, -2), 1.0)], background)
    tracer = make_tracer(scene)
    hit = scene.nearest_hit(DOWN_ONTO_FLOOR)
    assert tracer.light_intensity(hit) == pytest.approx(1.0)
    assert np.allclose(tracer.trace(DOWN_ONTO_FLOOR, 3).rgb, [100, 100, 100])


def test_occluded_light_is_attenuated(floor, grey, background):
    blocker = Sphere((1, 5, -2), 1, grey)
    scene = Scene([floor, blocker], [Light((1, 10, -2), 1.0)], background)
    tracer = make_tracer(scene)

    hit = scene.nearest_hit(DOWN_ONTO_FLOOR)
    assert hit.primitive is floor
    assert tracer.light_intensity(hit) == pytest.approx(0.3)
    assert np.allclose(tracer.trace(DOWN_ONTO_FLOOR, 3).rgb, [30, 30, 30])


def test_blocker_beyond_light_casts_no_shadow(floor, grey, background):
    beyond = Sphere((1, 15, -2), 1, grey)
    scene = Scene([floor, beyond], [Light((1, 10, -2), 1.0)], background)
    tracer = make_tracer(scene)
    assert tracer.light_intensity(scene.nearest_hit(DOWN_ONTO_FLOOR)) == pytest.approx(1.0)


def test_contributions_are_averaged_over_lights(floor, grey, background):
    blocker = Sphere((1, 5, -2), 1, grey)
    lights = [Light((1, 10, -2), 1.0), Light((1, 10, -2), 0.6)]
    scene = Scene([floor, blocker], lights, background)
    tracer = make_tracer(scene)
    expected = (1.0 * 0.3 + 0.6 * 0.3) / 2
    assert tracer.light_intensity(scene.nearest_hit(DOWN_ONTO_FLOOR)) == pytest.approx(expected)


def test_grazing_light_is_lifted_to_ambient(floor, background):
    # Light below the floor: cos < 0 contributes nothing
    scene = Scene([floor], [Light((1, -10, -2), 1.0)], background)
    tracer = make_tracer(scene)
    assert tracer.light_intensity(scene.nearest_hit(DOWN_ONTO_FLOOR)) == pytest.approx(0.1)


def test_no_lights_gives_ambient(floor, background):
    tracer = make_tracer(Scene([floor], [], background))
    assert np.allclose(tracer.trace(DOWN_ONTO_FLOOR, 3).rgb, [10, 10, 10])


def test_light_on_the_surface_does_not_raise(floor, background):
    scene = Scene([floor], [Light((1, 0, -2), 1.0)], background)
    tracer = make_tracer(scene)
    assert tracer.light_intensity(scene.nearest_hit(DOWN_ONTO_FLOOR)) == pytest.approx(0.1)


def test_intensity_is_capped_at_one(floor, background):
    scene = Scene([floor], [Light((1, 10, -2), 3.0)], background)
    tracer = make_tracer(scene)
    assert tracer.light_intensity(scene.nearest_hit(DOWN_ONTO_FLOOR)) == pytest.approx(1.0)


def test_trace_does_not_mutate_scene(floor, grey, background):
    light = Light((1, 10, -2), 1.0)
    scene = Scene([floor, Sphere((1, 5, -2), 1, grey)], [light], background)
    before = (scene.primitives, list(scene.lights), light.position.copy())
    make_tracer(scene).trace(DOWN_ONTO_FLOOR, 3)
    assert scene.primitives == before[0]
    assert scene.lights == before[1]
    assert np.array_equal(light.position, before[2])


# --- Reflection ---

def facing_mirrors(background):
    s = 10
    mirror = create_mirror(Color(200, 200, 200))
    # Normal -z at z = +10, normal +z at z = -10
    ahead = Rectangle([(-s, -s, 10), (-s, s, 10), (s, s, 10), (s, -s, 10)], mirror)
    behind = Rectangle([(-s, -s, -10), (s, -s, -10), (s, s, -10), (-s, s, -10)], mirror)
    return Scene([ahead, behind], [], background)


def test_reflection_depth_strictly_decreases_to_background(background):
    tracer = RecordingTracer(facing_mirrors(background), TracerSettings(**SETTINGS, max_depth=3))
    tracer.trace(Ray((1, 2, 0), (0, 0, 1)), 3)

    # calls are recorded innermost first
    depths = [depth for depth, _ in reversed(tracer.calls)]
    assert depths == [3, 2, 1, 0]
    assert tracer.calls[0][1] is background


def test_reflection_blends_with_fixed_weight(floor, background):
    floor.material.reflective = True
    tracer = make_tracer(Scene([floor], [], background))
    # Reflected ray heads straight up and misses everything
    expected = Color(10, 10, 10).blend(background, 0.7)
    assert np.allclose(tracer.trace(DOWN_ONTO_FLOOR, 3).rgb, expected.rgb)


def test_depth_blend_policy_uses_remaining_depth(floor, background):
    floor.material.reflective = True
    scene = Scene([floor], [], background)

    full = make_tracer(scene, max_depth=2, blend_policy=BlendPolicy.DEPTH)
    assert np.allclose(full.trace(DOWN_ONTO_FLOOR, 2).rgb, background.rgb)

    half = make_tracer(scene, max_depth=2, blend_policy="depth")
    expected = Color(10, 10, 10).blend(background, 0.5)
    assert np.allclose(half.trace(DOWN_ONTO_FLOOR, 1).rgb, expected.rgb)


def test_depth_blend_policy_lets_refraction_replace_reflection(floor, background):
    floor.material.reflective = True
    floor.material.transparent = True
    # Behind the primary ray's origin, so only the reflected ray sees it
    red = Sphere((1, 6, -2), 1, create_matte(Color(255, 0, 0)))
    scene = Scene([floor, red], [], background)

    fixed = make_tracer(scene, max_depth=2)
    assert not np.allclose(fixed.trace(DOWN_ONTO_FLOOR).rgb, background.rgb)

    depth = make_tracer(scene, max_depth=2, blend_policy=BlendPolicy.DEPTH)
    # Refracted ray leaves through the floor and misses; weight 1 keeps only it
    assert np.allclose(depth.trace(DOWN_ONTO_FLOOR).rgb, background.rgb)


# --- Refraction ---

def test_refraction_blends_transmitted_color(floor, background):
    floor.material.transparent = True
    tracer = make_tracer(Scene([floor], [], background))
    expected = Color(10, 10, 10).blend(background, 0.5)
    assert np.allclose(tracer.trace(DOWN_ONTO_FLOOR, 3).rgb, expected.rgb)


def test_total_internal_reflection_adds_no_transmitted_term(floor, background):
    angle = np.radians(70)
    grazing = Ray((0.5, 1, -3), (0, -np.cos(angle), np.sin(angle)))
    scene = Scene([floor], [Light((0, 10, 0), 1.0)], background)

    floor.material.reflective = True
    reflective_only = make_tracer(scene).trace(grazing, 3)

    floor.material.transparent = True
    with_glass = make_tracer(scene).trace(grazing, 3)

    assert np.allclose(with_glass.rgb, reflective_only.rgb)


def test_refracted_ray_passes_through_glass_sphere(grey, background):
    glass = Sphere((0, 0, 5), 1, create_glass(Color(0, 0, 0)))
    wall = Rectangle([(-5, -5, 10), (-5, 5, 10), (5, 5, 10), (5, -5, 10)], grey)
    tracer = make_tracer(Scene([glass, wall], [], background))

    color = tracer.trace(Ray((0.1, 0.2, 0), (0, 0, 1)), 3)
    # Half of the transmitted wall color (grey at ambient) survives
    assert np.allclose(color.rgb, [5, 5, 5])


# --- Settings ---

@pytest.mark.parametrize("overrides", [
    dict(max_depth=-1),
    dict(shadow_factor=0.0),
    dict(shadow_factor=1.0),
    dict(ambient=1.5),
    dict(reflection_weight=-0.1),
    dict(inside_index=0),
    dict(surface_offset=0),
    dict(blend_policy="sometimes"),
])
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValueError):
        TracerSettings(**{**SETTINGS, **overrides})
