"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector3 and Color value types
    ray: Ray data structure and sampling utilities
    integrator: Recursive light transport (Tracer, TracerConfig presets)
    renderer: Frame renderer writing the RGB byte buffer

Everything here runs on the CPU in plain Python; the only third-party
dependency is NumPy (frame buffer and random generator).
"""

from .ray import (
    Ray,
    build_onb_from_normal,
    fresnel_dielectric,
    local_to_world,
    sample_cosine_hemisphere,
)
from .vector import Color, Vector3

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from realtime_raytracer.core.integrator or
# realtime_raytracer.core.renderer when needed.

__all__ = [
    "Vector3",
    "Color",
    "Ray",
    "build_onb_from_normal",
    "local_to_world",
    "sample_cosine_hemisphere",
    "fresnel_dielectric",
]
