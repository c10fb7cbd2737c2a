"""Materials module.

Surface parameters (color, metallic, transparency, refractive index) live on
the Sphere itself. This module provides the shared procedural textures that
spheres may reference.

Components:
    texture: Immutable checkerboard texture with wrapped UV lookup
"""

from .texture import CheckerTexture

__all__ = [
    "CheckerTexture",
]
