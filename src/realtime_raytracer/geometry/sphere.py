"""Sphere primitive with material parameters and ray intersection.

A sphere carries both its geometry and its surface description:

- center, radius
- base color
- metallic (mirror blend weight)
- transparency (refraction blend weight) and refractive index
- an optional shared texture, multiplied into the base color

Intersection only reports the near root of the ray-sphere quadratic. If the
near root is not beyond HIT_EPSILON the sphere is missed, even when the far
root lies in front of the ray. Rays starting inside a sphere therefore never
see that sphere.

Example:
    >>> from realtime_raytracer.core.ray import Ray
    >>> from realtime_raytracer.core.vector import Color, Vector3
    >>> from realtime_raytracer.geometry.sphere import Sphere
    >>> sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0, Color(1.0, 0.0, 0.0))
    >>> sphere.intersect(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)))
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from realtime_raytracer.core.vector import Color, Vector3

if TYPE_CHECKING:
    from realtime_raytracer.core.ray import Ray
    from realtime_raytracer.materials.texture import CheckerTexture

# Minimum accepted hit distance
HIT_EPSILON = 0.001


@dataclass(frozen=True)
class Sphere:
    """A sphere with material.

    Attributes:
        center: Center point in world space.
        radius: Radius, strictly positive.
        color: Base color.
        metallic: Reflection blend weight in [0, 1].
        transparency: Refraction blend weight in [0, 1].
        refractive_index: Index of refraction, only used when transparent.
        texture: Optional shared texture.
    """

    center: Vector3
    radius: float
    color: Color
    metallic: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    texture: CheckerTexture | None = None

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if not 0.0 <= self.metallic <= 1.0:
            raise ValueError(f"metallic must be in [0, 1], got {self.metallic}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"transparency must be in [0, 1], got {self.transparency}")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"refractive_index must be positive, got {self.refractive_index}"
            )

    def intersect(self, ray: Ray) -> float | None:
        """Distance along ``ray`` to the near surface, or None on a miss.

        Args:
            ray: The ray to test.

        Returns:
            The smaller root of the quadratic if it exceeds HIT_EPSILON,
            otherwise None.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4.0 * a * c

        if discriminant < 0.0:
            return None

        t = (-b - math.sqrt(discriminant)) / (2.0 * a)
        return t if t > HIT_EPSILON else None

    def normal(self, point: Vector3) -> Vector3:
        """Outward unit normal at a surface point."""
        return (point - self.center).normalize()

    def uv(self, point: Vector3) -> tuple[float, float]:
        """Spherical texture coordinates of a surface point.

        Returns:
            (u, v) with u = 0.5 + atan2(n.z, n.x) / 2pi and
            v = 0.5 - asin(n.y) / pi.
        """
        n = self.normal(point)
        u = 0.5 + math.atan2(n.z, n.x) / (2.0 * math.pi)
        v = 0.5 - math.asin(max(-1.0, min(1.0, n.y))) / math.pi
        return u, v

    def surface_color(self, point: Vector3) -> Color:
        """Material color at a surface point (texture times base color)."""
        if self.texture is None:
            return self.color
        u, v = self.uv(point)
        return self.texture.sample(u, v) * self.color

    def moved_to(self, center: Vector3) -> Sphere:
        """Return a copy of this sphere at a new center."""
        return replace(self, center=center)
