"""Vector and color value types for CPU ray tracing.

This module provides the two small immutable value types the light transport
engine is built on:

- Vector3: 3D vector for points, directions and normals
- Color: linear RGB triple, unclamped until the final write

Both are frozen dataclasses with operator overloads, so expressions such as
``hit_point + normal * EPSILON`` read like the math they implement.

Example:
    >>> from realtime_raytracer.core.vector import Color, Vector3
    >>> n = Vector3(0.0, 1.0, 0.0)
    >>> Vector3(1.0, -1.0, 0.0).normalize().reflect(n)
    Vector3(x=0.7071067811865475, y=0.7071067811865475, z=0.0)
    >>> Color(1.5, -0.2, 0.5).clamp()
    Color(r=1.0, g=-0.2, b=0.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector3:
    """A 3D vector of floats.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> Vector3:
        return Vector3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Compute the cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector3:
        """Return a unit vector in the same direction.

        Returns:
            The normalized vector, or the zero vector if this vector has
            zero length.
        """
        length = self.length()
        if length > 0.0:
            return self * (1.0 / length)
        return Vector3()

    def is_zero(self) -> bool:
        """True if every component is exactly zero."""
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def reflect(self, normal: Vector3) -> Vector3:
        """Reflect this direction about a surface normal.

        Args:
            normal: The surface normal (should be normalized).

        Returns:
            The mirrored direction ``v - 2 (v . n) n``.
        """
        return self - normal * (2.0 * self.dot(normal))

    def refract(self, normal: Vector3, eta: float) -> Vector3:
        """Refract this direction through a surface using Snell's law.

        The normal must face against the incoming direction, i.e.
        ``dot(self, normal) <= 0``.

        Args:
            normal: The surface normal on the incident side (normalized).
            eta: Ratio of refractive indices (n_incident / n_transmitted).

        Returns:
            The refracted direction, or the zero vector on total internal
            reflection.
        """
        cos_i = -self.dot(normal)
        k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
        if k < 0.0:
            return Vector3()
        return self * eta + normal * (eta * cos_i - math.sqrt(k))


@dataclass(frozen=True, slots=True)
class Color:
    """A linear RGB color.

    Channels are not clamped during shading; only ``clamp`` limits them, and
    only from above.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    def __rmul__(self, s: float) -> Color:
        return Color(self.r * s, self.g * s, self.b * s)

    def lerp(self, other: Color, weight: float) -> Color:
        """Blend toward ``other``: ``self * (1 - weight) + other * weight``."""
        return self * (1.0 - weight) + other * weight

    def clamp(self) -> Color:
        """Clamp each channel to at most 1.0.

        Negative channels pass through unchanged.
        """
        return Color(min(1.0, self.r), min(1.0, self.g), min(1.0, self.b))

    def to_bytes(self) -> tuple[int, int, int]:
        """Convert to 8-bit channels by truncating multiplication by 255.

        Negative channels write as 0.
        """
        return (
            max(0, int(self.r * 255)),
            max(0, int(self.g * 255)),
            max(0, int(self.b * 255)),
        )
