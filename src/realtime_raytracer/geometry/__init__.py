"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with material, near-root ray intersection,
        normals and spherical UV coordinates
"""

from .sphere import HIT_EPSILON, Sphere

__all__ = [
    "Sphere",
    "HIT_EPSILON",
]
