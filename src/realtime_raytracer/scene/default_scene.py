"""Default four-sphere scene.

The scene consists of:
- Red metallic sphere on the left, bobbing up and down
- Glass sphere in the middle, swaying left and right
- Blue diffuse sphere on the right, moving toward and away from the camera
- A large ground sphere with a checkerboard texture

The camera starts at (0, 0, 5) looking down -z.

Example:
    >>> from realtime_raytracer.scene.default_scene import (
    ...     create_default_scene, default_motions
    ... )
    >>> scene = create_default_scene()
    >>> [sphere.radius for sphere in scene]
    [1.0, 1.0, 1.0, 100.0]
    >>> len(default_motions())
    3
"""

from __future__ import annotations

from realtime_raytracer.core.vector import Color, Vector3
from realtime_raytracer.geometry.sphere import Sphere
from realtime_raytracer.materials.texture import CheckerTexture
from realtime_raytracer.scene.animation import SphereMotion
from realtime_raytracer.scene.manager import Scene

# =============================================================================
# Scene Constants
# =============================================================================

# Scene indices
METAL_SPHERE = 0
GLASS_SPHERE = 1
DIFFUSE_SPHERE = 2
GROUND_SPHERE = 3

METAL_COLOR = Color(0.8, 0.2, 0.2)
METAL_METALLIC = 0.9

GLASS_COLOR = Color(0.9, 0.9, 0.9)
GLASS_TRANSPARENCY = 0.9
GLASS_IOR = 1.52

DIFFUSE_COLOR = Color(0.2, 0.2, 0.8)

GROUND_COLOR = Color(0.5, 0.5, 0.5)
GROUND_RADIUS = 100.0


def create_default_scene(
    texture: CheckerTexture | None = None,
    *,
    textured_ground: bool = True,
) -> Scene:
    """Create the four-sphere scene at its rest positions.

    Args:
        texture: Shared texture for the ground. A default CheckerTexture is
            created when None and ``textured_ground`` is set.
        textured_ground: Whether the ground sphere samples a texture.

    Returns:
        The Scene, ordered metal, glass, diffuse, ground.
    """
    if textured_ground and texture is None:
        texture = CheckerTexture()

    return Scene(
        [
            Sphere(Vector3(-2.0, 0.0, -5.0), 1.0, METAL_COLOR, metallic=METAL_METALLIC),
            Sphere(
                Vector3(0.0, 0.0, -5.0),
                1.0,
                GLASS_COLOR,
                transparency=GLASS_TRANSPARENCY,
                refractive_index=GLASS_IOR,
            ),
            Sphere(Vector3(2.0, 0.0, -5.0), 1.0, DIFFUSE_COLOR),
            Sphere(
                Vector3(0.0, -101.0, -5.0),
                GROUND_RADIUS,
                GROUND_COLOR,
                texture=texture if textured_ground else None,
            ),
        ]
    )


def default_motions() -> tuple[SphereMotion, ...]:
    """Motions for the three small spheres; the ground stays put."""
    return (
        SphereMotion(METAL_SPHERE, "y", base=0.0, amplitude=0.5, frequency=2.0),
        SphereMotion(GLASS_SPHERE, "x", base=0.0, amplitude=0.5, frequency=1.0),
        SphereMotion(DIFFUSE_SPHERE, "z", base=-5.0, amplitude=0.3, frequency=1.5),
    )
