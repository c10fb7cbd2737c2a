"""Ray data structure and sampling utilities for CPU ray tracing.

This module provides the Ray value type and the small geometric helpers the
light transport engine needs for secondary rays:

- Ray construction (direction is normalized on creation)
- Orthonormal basis construction around a surface normal
- Cosine-weighted hemisphere directions for global illumination
- Exact dielectric Fresnel reflectance

Random numbers are never drawn here from a global source. Callers pass a
``numpy.random.Generator`` so that the sample stream stays sequential and
reproducible.

Example:
    >>> from realtime_raytracer.core.ray import Ray
    >>> from realtime_raytracer.core.vector import Vector3
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -2.0))
    >>> ray.at(5.0)
    Vector3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math

import numpy as np

from realtime_raytracer.core.vector import Vector3


class Ray:
    """A ray with an origin point and unit direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Normalized by the constructor;
            a zero direction stays zero.
    """

    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vector3, direction: Vector3) -> None:
        self.origin = origin
        self.direction = direction.normalize()

    def at(self, t: float) -> Vector3:
        """Compute the point ``origin + direction * t``."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"


# =============================================================================
# Sampling Utilities
# =============================================================================


def build_onb_from_normal(normal: Vector3) -> tuple[Vector3, Vector3, Vector3]:
    """Build an orthonormal basis with ``normal`` as its z-axis.

    The helper axis is the world axis least parallel to the normal, i.e. the
    one matching the normal's smallest absolute component.

    Args:
        normal: The surface normal (should be normalized).

    Returns:
        A tuple (tangent, bitangent, normal).
    """
    ax, ay, az = abs(normal.x), abs(normal.y), abs(normal.z)
    if ax <= ay and ax <= az:
        helper = Vector3(1.0, 0.0, 0.0)
    elif ay <= az:
        helper = Vector3(0.0, 1.0, 0.0)
    else:
        helper = Vector3(0.0, 0.0, 1.0)
    tangent = helper.cross(normal).normalize()
    bitangent = normal.cross(tangent)
    return tangent, bitangent, normal


def local_to_world(
    local_dir: Vector3, tangent: Vector3, bitangent: Vector3, normal: Vector3
) -> Vector3:
    """Transform a direction from a local (z-up) frame to world space."""
    return tangent * local_dir.x + bitangent * local_dir.y + normal * local_dir.z


def sample_cosine_hemisphere(normal: Vector3, rng: np.random.Generator) -> Vector3:
    """Cosine-weighted hemisphere direction around ``normal``.

    Draws r1 then r2 from ``rng`` and maps them with cos(theta) = sqrt(r1),
    sin(theta) = sqrt(1 - r1), phi = 2 pi r2.

    Args:
        normal: The surface normal defining the hemisphere.
        rng: The renderer's random generator.

    Returns:
        The sampled world-space direction.
    """
    r1 = rng.random()
    r2 = rng.random()
    cos_theta = math.sqrt(r1)
    sin_theta = math.sqrt(1.0 - r1)
    phi = 2.0 * math.pi * r2
    local_dir = Vector3(math.cos(phi) * sin_theta, math.sin(phi) * sin_theta, cos_theta)
    tangent, bitangent, n = build_onb_from_normal(normal)
    return local_to_world(local_dir, tangent, bitangent, n)


def fresnel_dielectric(cos_i: float, eta: float) -> float:
    """Exact unpolarized Fresnel reflectance at a dielectric boundary.

    Averages the s- and p-polarized reflectances. No Schlick approximation.

    Args:
        cos_i: Cosine of the incident angle (non-negative).
        eta: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        Reflectance in [0, 1]; 1.0 past the critical angle.
    """
    sin2_t = eta * eta * (1.0 - cos_i * cos_i)
    if sin2_t >= 1.0:
        return 1.0
    cos_t = math.sqrt(1.0 - sin2_t)
    r_s = (eta * cos_i - cos_t) / (eta * cos_i + cos_t)
    r_p = (cos_i - eta * cos_t) / (cos_i + eta * cos_t)
    return 0.5 * (r_s * r_s + r_p * r_p)
