"""Tests for the recursive light transport engine.

Tests cover:
- Background color for misses and exhausted depth
- Direct lighting with the ambient floor
- Hard shadows with the shadow floor
- Metallic reflection blending
- Refraction with Fresnel blending and the total internal reflection skip
- Global illumination only ever adding light
- Quality presets
"""

import math

import numpy as np
import pytest


def _state(spheres, light, camera=(0.0, 0.0, 5.0)):
    """Build a SceneState from spheres and a light position."""
    from realtime_raytracer.core.vector import Vector3
    from realtime_raytracer.scene.animation import SceneState
    from realtime_raytracer.scene.manager import Scene

    return SceneState(
        time=0.0,
        scene=Scene(spheres),
        light_position=Vector3(*light),
        camera_position=Vector3(*camera),
    )


def _assert_color(actual, expected, abs_tol=1e-9):
    assert (actual.r, actual.g, actual.b) == pytest.approx(expected, abs=abs_tol)


def _top_hit_ray():
    """Ray that first hits the unit sphere at the origin at its top (0, 1, 0)."""
    from realtime_raytracer.core.ray import Ray
    from realtime_raytracer.core.vector import Vector3

    return Ray(Vector3(3.0, 4.0, 0.0), Vector3(-1.0, -1.0, 0.0))


def _direct_only(shadows):
    from realtime_raytracer.core.integrator import TracerConfig

    return TracerConfig(max_depth=8, shadows=shadows, global_illumination=False)


class TestBackground:
    """Tests for rays that contribute only the background."""

    def test_miss_returns_background_at_every_depth(self, default_state, rng):
        """Test that a miss yields the background for depth 0..max_depth."""
        from realtime_raytracer.core.integrator import BACKGROUND_COLOR, ENHANCED, Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Vector3

        tracer = Tracer(default_state, rng, ENHANCED)
        ray = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 1.0, 0.0))
        for depth in range(ENHANCED.max_depth + 1):
            assert tracer.trace(ray, depth) == BACKGROUND_COLOR

    def test_exhausted_depth_returns_background(self, default_state, rng):
        """Test that depth beyond the limit returns the background even on a hit."""
        from realtime_raytracer.core.integrator import BACKGROUND_COLOR, BASIC, Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Vector3

        tracer = Tracer(default_state, rng, BASIC)
        ray = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))
        assert tracer.trace(ray, BASIC.max_depth + 1) == BACKGROUND_COLOR
        assert tracer.trace(ray, 0) != BACKGROUND_COLOR


class TestDirectLighting:
    """Tests for the diffuse term, floors and shadows."""

    def test_fully_lit(self, rng):
        """Test that a surface facing the light shows its full color."""
        from realtime_raytracer.core.integrator import Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        sphere = Sphere(Vector3(), 1.0, Color(0.5, 0.4, 0.3))
        tracer = Tracer(_state([sphere], (0.0, 10.0, 0.0)), rng, _direct_only(True))
        _assert_color(tracer.trace(_top_hit_ray()), (0.5, 0.4, 0.3))

    def test_facing_away_gets_ambient_floor(self, rng):
        """Test that a surface turned from the light gets the ambient floor."""
        from realtime_raytracer.core.integrator import AMBIENT_FLOOR, Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        sphere = Sphere(Vector3(), 1.0, Color(0.5, 0.4, 0.3))
        tracer = Tracer(_state([sphere], (0.0, -10.0, 0.0)), rng, _direct_only(False))
        _assert_color(
            tracer.trace(_top_hit_ray()),
            (0.5 * AMBIENT_FLOOR, 0.4 * AMBIENT_FLOOR, 0.3 * AMBIENT_FLOOR),
        )

    def test_shadowed_point_gets_shadow_floor(self, rng):
        """Test that a blocked light gives exactly the shadow floor times the color."""
        from realtime_raytracer.core.integrator import SHADOW_FLOOR, Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        lit = Sphere(Vector3(), 1.0, Color(0.5, 0.5, 0.5))
        blocker = Sphere(Vector3(0.0, 5.0, 0.0), 1.0, Color(1.0, 1.0, 1.0))
        state = _state([lit, blocker], (0.0, 10.0, 0.0))

        shadowed = Tracer(state, rng, _direct_only(True)).trace(_top_hit_ray())
        _assert_color(shadowed, (0.5 * SHADOW_FLOOR,) * 3)

        unshadowed = Tracer(state, rng, _direct_only(False)).trace(_top_hit_ray())
        _assert_color(unshadowed, (0.5, 0.5, 0.5))

    def test_basic_preset_ignores_occluders(self, rng):
        """Test that the basic preset never casts shadows."""
        from realtime_raytracer.core.integrator import BASIC, Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        lit = Sphere(Vector3(), 1.0, Color(0.5, 0.5, 0.5))
        blocker = Sphere(Vector3(0.0, 5.0, 0.0), 1.0, Color(1.0, 1.0, 1.0))
        tracer = Tracer(_state([lit, blocker], (0.0, 10.0, 0.0)), rng, BASIC)
        _assert_color(tracer.trace(_top_hit_ray()), (0.5, 0.5, 0.5))

    def test_result_clamped_from_above(self, rng):
        """Test that bright materials are clamped to 1.0."""
        from realtime_raytracer.core.integrator import Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        sphere = Sphere(Vector3(), 1.0, Color(3.0, 0.5, 2.0))
        tracer = Tracer(_state([sphere], (0.0, 10.0, 0.0)), rng, _direct_only(False))
        _assert_color(tracer.trace(_top_hit_ray()), (1.0, 0.5, 1.0))


class TestReflection:
    """Tests for metallic reflection."""

    def test_perfect_mirror_shows_reflection(self, rng):
        """Test that metallic = 1 replaces the direct term with the reflection."""
        from realtime_raytracer.core.integrator import BACKGROUND_COLOR, ENHANCED, Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        mirror = Sphere(Vector3(), 1.0, Color(0.8, 0.2, 0.2), metallic=1.0)
        tracer = Tracer(_state([mirror], (0.0, 0.0, 10.0)), rng, ENHANCED)
        color = tracer.trace(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)))
        _assert_color(color, (BACKGROUND_COLOR.r, BACKGROUND_COLOR.g, BACKGROUND_COLOR.b))

    def test_half_metallic_blend(self, rng):
        """Test the linear blend of direct light and reflection."""
        from realtime_raytracer.core.integrator import ENHANCED, Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        sphere = Sphere(Vector3(), 1.0, Color(0.8, 0.2, 0.2), metallic=0.5)
        tracer = Tracer(_state([sphere], (0.0, 0.0, 10.0)), rng, ENHANCED)
        color = tracer.trace(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)))

        # direct (0.8, 0.2, 0.2) blended half and half with background (0.1, 0.1, 0.2)
        _assert_color(color, (0.45, 0.15, 0.2))


class TestTransmission:
    """Tests for refraction and Fresnel blending."""

    def test_index_matched_glass_is_invisible(self, rng):
        """Test that fully transparent glass with index 1 shows what is behind it."""
        from realtime_raytracer.core.integrator import BACKGROUND_COLOR, Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        glass = Sphere(
            Vector3(), 1.0, Color(0.9, 0.9, 0.9), transparency=1.0, refractive_index=1.0
        )
        tracer = Tracer(_state([glass], (0.0, 0.0, 10.0)), rng, _direct_only(True))
        color = tracer.trace(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)))
        _assert_color(color, (BACKGROUND_COLOR.r, BACKGROUND_COLOR.g, BACKGROUND_COLOR.b))

    def test_refracted_ray_sees_object_behind(self, rng):
        """Test that light through index-matched glass shows the sphere behind."""
        from realtime_raytracer.core.integrator import Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        glass = Sphere(
            Vector3(0.0, 0.0, 2.0), 0.5, Color(0.9, 0.9, 0.9),
            transparency=1.0, refractive_index=1.0,
        )
        target = Sphere(Vector3(), 1.0, Color(0.2, 0.6, 0.4))
        tracer = Tracer(_state([glass, target], (0.0, 0.0, 10.0)), rng, _direct_only(False))
        color = tracer.trace(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)))
        _assert_color(color, (0.2, 0.6, 0.4))

    def test_total_internal_reflection_skips_stage(self, rng):
        """Test that an exiting ray past the critical angle yields no color."""
        from realtime_raytracer.core.integrator import Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Vector3

        tracer = Tracer(_state([], (0.0, 0.0, 10.0)), rng, _direct_only(False))
        # Ray travelling outward through the surface at a grazing angle
        ray = Ray(Vector3(), Vector3(1.0, 0.0, 0.1))
        normal = Vector3(0.0, 0.0, 1.0)
        assert tracer._transmit(ray, Vector3(0.0, 0.0, 1.0), normal, 1.5, 0) is None

    def test_entering_ray_in_empty_scene(self, rng):
        """Test that an entering ray with nothing around it sees only the sky."""
        from realtime_raytracer.core.integrator import BACKGROUND_COLOR, Tracer
        from realtime_raytracer.core.ray import Ray
        from realtime_raytracer.core.vector import Vector3

        # Empty scene: both branches see the background, so the blend must too
        tracer = Tracer(_state([], (0.0, 0.0, 10.0)), rng, _direct_only(False))
        ray = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))
        color = tracer._transmit(ray, Vector3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, 1.0), 1.5, 0)
        assert color is not None
        _assert_color(color, (BACKGROUND_COLOR.r, BACKGROUND_COLOR.g, BACKGROUND_COLOR.b))


    def test_glass_blends_refraction_and_reflection_by_fresnel(self, rng):
        """Test that glass weights the refracted view by 1 - R and the reflection by R."""
        from realtime_raytracer.core.integrator import BACKGROUND_COLOR, Tracer
        from realtime_raytracer.core.ray import Ray, fresnel_dielectric
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        glass = Sphere(
            Vector3(0.0, 0.0, 2.0), 0.5, Color(0.9, 0.9, 0.9),
            transparency=1.0, refractive_index=1.5,
        )
        target = Sphere(Vector3(), 1.0, Color(0.2, 0.6, 0.4))
        tracer = Tracer(_state([glass, target], (0.0, 0.0, 10.0)), rng, _direct_only(False))
        ray = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))

        # Normal incidence: the refracted ray goes straight on to the target,
        # the reflected ray goes back to the sky
        reflectance = fresnel_dielectric(1.0, 1.0 / 1.5)
        assert reflectance == pytest.approx(0.04)
        expected = Color(0.2, 0.6, 0.4).lerp(BACKGROUND_COLOR, reflectance)

        transmitted = tracer._transmit(
            ray, Vector3(0.0, 0.0, 2.5), Vector3(0.0, 0.0, 1.0), 1.5, 0
        )
        assert transmitted is not None
        _assert_color(transmitted, (expected.r, expected.g, expected.b))

        # Fully transparent glass shows exactly the transmitted blend
        _assert_color(tracer.trace(ray), (expected.r, expected.g, expected.b))
        # and differs from both pure refraction and pure reflection
        assert tracer.trace(ray).g != pytest.approx(0.6, abs=1e-4)
        assert tracer.trace(ray).g != pytest.approx(BACKGROUND_COLOR.g, abs=1e-4)


class TestGlobalIllumination:
    """Tests for the one-bounce indirect term."""

    def test_gi_only_adds_light(self):
        """Test that enabling GI never darkens a diffuse hit."""
        from realtime_raytracer.core.integrator import TracerConfig, Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        lit = Sphere(Vector3(), 1.0, Color(0.5, 0.5, 0.5))
        blocker = Sphere(Vector3(0.0, 5.0, 0.0), 1.0, Color(1.0, 1.0, 1.0))
        state = _state([lit, blocker], (0.0, 10.0, 0.0))
        with_gi = TracerConfig(max_depth=8, shadows=True, global_illumination=True)

        direct = Tracer(state, np.random.default_rng(1), _direct_only(True)).trace(_top_hit_ray())
        for seed in range(10):
            total = Tracer(state, np.random.default_rng(seed), with_gi).trace(_top_hit_ray())
            assert total.r >= direct.r
            assert total.g >= direct.g
            assert total.b >= direct.b

    def test_gi_bounded_by_weight(self):
        """Test that the indirect term is at most 0.1 times the material color."""
        from realtime_raytracer.core.integrator import GI_WEIGHT, ENHANCED, Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        sphere = Sphere(Vector3(), 1.0, Color(0.5, 0.5, 0.5))
        state = _state([sphere], (0.0, 10.0, 0.0))
        color = Tracer(state, np.random.default_rng(3), ENHANCED).trace(_top_hit_ray())

        # Lone sphere: the GI ray always escapes to the background
        assert color.r == pytest.approx(0.5 + 0.1 * 0.5 * GI_WEIGHT)
        assert color.g == pytest.approx(0.5 + 0.1 * 0.5 * GI_WEIGHT)
        assert color.b == pytest.approx(0.5 + 0.2 * 0.5 * GI_WEIGHT)

    def test_gi_consumes_generator(self):
        """Test that GI draws from the shared generator and metals do not."""
        from realtime_raytracer.core.integrator import ENHANCED, Tracer
        from realtime_raytracer.core.vector import Color, Vector3
        from realtime_raytracer.geometry.sphere import Sphere

        diffuse = Sphere(Vector3(), 1.0, Color(0.5, 0.5, 0.5))
        metal = Sphere(Vector3(), 1.0, Color(0.5, 0.5, 0.5), metallic=0.9)

        for sphere, draws in ((diffuse, True), (metal, False)):
            rng = np.random.default_rng(7)
            Tracer(_state([sphere], (0.0, 10.0, 0.0)), rng, ENHANCED).trace(_top_hit_ray())
            assert (rng.random() != np.random.default_rng(7).random()) is draws


class TestPresets:
    """Tests for the quality presets."""

    def test_preset_values(self):
        """Test the basic and enhanced preset settings."""
        from realtime_raytracer.core.integrator import BASIC, ENHANCED, PRESETS

        assert (BASIC.max_depth, BASIC.shadows, BASIC.global_illumination) == (5, False, False)
        assert (ENHANCED.max_depth, ENHANCED.shadows, ENHANCED.global_illumination) == (
            8,
            True,
            True,
        )
        assert PRESETS == {"basic": BASIC, "enhanced": ENHANCED}

    def test_negative_depth_rejected(self):
        """Test that a negative depth limit raises ValueError."""
        from realtime_raytracer.core.integrator import TracerConfig

        with pytest.raises(ValueError):
            TracerConfig(max_depth=-1, shadows=False, global_illumination=False)

    def test_glass_scenario_center_ray(self, default_state, rng):
        """Test that the center camera ray at t = 0 reaches the glass sphere."""
        from realtime_raytracer.camera.orbit import primary_ray
        from realtime_raytracer.scene.default_scene import GLASS_SPHERE

        ray = primary_ray(default_state.camera_position, 160.0, 120.0, 320, 240)
        hit = default_state.scene.nearest_hit(ray)
        assert hit is not None
        assert hit.index == GLASS_SPHERE
        assert hit.t == pytest.approx(9.0)
        assert math.isfinite(hit.t)
