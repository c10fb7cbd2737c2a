"""Recursive light transport for the sphere scene.

This module implements the shading recursion that turns a ray into a color.
Each hit is shaded in a fixed order, and every stage builds on the color the
previous stage produced:

1. Direct light from the orbiting point light, with optional shadow rays
2. Mirror reflection, blended by the sphere's metallic weight
3. Refraction with exact Fresnel weighting, blended by transparency
4. One-bounce cosine-weighted global illumination, added on top

The result of each call is clamped from above to 1.0. The stages are not
energy-normalized; the fixed order is part of the look.

Secondary rays start at the hit point offset along the normal by EPSILON so
they do not immediately re-hit the surface they left. Recursion stops once
the depth exceeds the configured maximum, so the call tree is bounded.

Example:
    >>> import numpy as np
    >>> from realtime_raytracer.core.integrator import Tracer
    >>> from realtime_raytracer.core.ray import Ray
    >>> from realtime_raytracer.core.vector import Vector3
    >>> from realtime_raytracer.scene.animation import initial_state
    >>> from realtime_raytracer.scene.default_scene import (
    ...     create_default_scene, default_motions
    ... )
    >>> state = initial_state(create_default_scene(), default_motions())
    >>> tracer = Tracer(state, np.random.default_rng(0))
    >>> tracer.trace(Ray(state.camera_position, Vector3(0.0, 1.0, 0.0)))
    Color(r=0.1, g=0.1, b=0.2)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from realtime_raytracer.core.ray import Ray, fresnel_dielectric, sample_cosine_hemisphere
from realtime_raytracer.core.vector import Color

if TYPE_CHECKING:
    import numpy as np

    from realtime_raytracer.core.vector import Vector3
    from realtime_raytracer.scene.animation import SceneState

# =============================================================================
# Rendering Constants
# =============================================================================

# Sky color returned for misses and for rays past the depth limit
BACKGROUND_COLOR = Color(0.1, 0.1, 0.2)

# Offset along the normal for every secondary ray
EPSILON = 0.001

# Minimum direct light intensity
AMBIENT_FLOOR = 0.1

# Direct light intensity for points in shadow
SHADOW_FLOOR = 0.1

# Global illumination: weight, depth cutoff and metallic cutoff
GI_WEIGHT = 0.1
GI_MAX_DEPTH = 3
GI_METALLIC_LIMIT = 0.5


@dataclass(frozen=True)
class TracerConfig:
    """Fixed per-configuration constants for the light transport engine.

    Attributes:
        max_depth: Rays deeper than this return the background color.
        shadows: Whether to cast shadow rays toward the light.
        global_illumination: Whether to add the one-bounce indirect term.
    """

    max_depth: int
    shadows: bool
    global_illumination: bool

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


BASIC = TracerConfig(max_depth=5, shadows=False, global_illumination=False)
ENHANCED = TracerConfig(max_depth=8, shadows=True, global_illumination=True)

PRESETS = {"basic": BASIC, "enhanced": ENHANCED}


class Tracer:
    """Light transport engine bound to one frame's scene state.

    Attributes:
        state: The SceneState being rendered.
        config: The TracerConfig in use.
        rng: The renderer's random generator, consumed by the GI stage.
    """

    def __init__(
        self,
        state: SceneState,
        rng: np.random.Generator,
        config: TracerConfig = ENHANCED,
    ) -> None:
        self.state = state
        self.rng = rng
        self.config = config

    def trace(self, ray: Ray, depth: int = 0) -> Color:
        """Compute the color seen along ``ray``.

        Args:
            ray: The ray to trace (unit direction).
            depth: Recursion depth; 0 for camera rays.

        Returns:
            The shaded color, clamped from above to 1.0 per channel.
        """
        if depth > self.config.max_depth:
            return BACKGROUND_COLOR

        hit = self.state.scene.nearest_hit(ray)
        if hit is None:
            return BACKGROUND_COLOR

        sphere = hit.sphere
        hit_point = ray.at(hit.t)
        normal = sphere.normal(hit_point)
        material_color = sphere.surface_color(hit_point)

        intensity = self._direct_intensity(hit_point, normal, hit.index)
        final_color = material_color * intensity

        if sphere.metallic > 0.0:
            reflect_ray = Ray(hit_point + normal * EPSILON, ray.direction.reflect(normal))
            reflect_color = self.trace(reflect_ray, depth + 1)
            final_color = final_color.lerp(reflect_color, sphere.metallic)

        if sphere.transparency > 0.0:
            transparent_color = self._transmit(
                ray, hit_point, normal, sphere.refractive_index, depth
            )
            if transparent_color is not None:
                final_color = final_color.lerp(transparent_color, sphere.transparency)

        if (
            self.config.global_illumination
            and depth < GI_MAX_DEPTH
            and sphere.metallic < GI_METALLIC_LIMIT
        ):
            gi_direction = sample_cosine_hemisphere(normal, self.rng)
            gi_ray = Ray(hit_point + normal * EPSILON, gi_direction)
            gi_color = self.trace(gi_ray, depth + 1)
            final_color = final_color + gi_color * material_color * GI_WEIGHT

        return final_color.clamp()

    def _direct_intensity(self, hit_point: Vector3, normal: Vector3, hit_index: int) -> float:
        """Diffuse intensity from the point light, with the floors applied."""
        to_light = (self.state.light_position - hit_point).normalize()
        intensity = max(AMBIENT_FLOOR, normal.dot(to_light))

        if self.config.shadows:
            shadow_ray = Ray(hit_point + normal * EPSILON, to_light)
            if self.state.scene.occluded(shadow_ray, hit_index):
                intensity = SHADOW_FLOOR

        return intensity

    def _transmit(
        self,
        ray: Ray,
        hit_point: Vector3,
        normal: Vector3,
        refractive_index: float,
        depth: int,
    ) -> Color | None:
        """Fresnel blend of refracted and reflected light at a dielectric.

        Returns:
            The transparent color, or None on total internal reflection.
        """
        cos_i = (-ray.direction).dot(normal)
        if cos_i > 0.0:
            eta = 1.0 / refractive_index
            facing = normal
        else:
            eta = refractive_index
            facing = -normal
            cos_i = -cos_i

        refract_dir = ray.direction.refract(facing, eta)
        if refract_dir.is_zero():
            return None

        reflectance = fresnel_dielectric(abs(cos_i), eta)
        refract_ray = Ray(hit_point - facing * EPSILON, refract_dir)
        reflect_ray = Ray(hit_point + facing * EPSILON, ray.direction.reflect(facing))
        refract_color = self.trace(refract_ray, depth + 1)
        reflect_color = self.trace(reflect_ray, depth + 1)
        return refract_color.lerp(reflect_color, reflectance)
