"""Time-driven scene animation.

All animated quantities are pure functions of one accumulated time value:

- each animated sphere moves sinusoidally along one axis
- the point light orbits at (3 sin t, 2, 3 cos t - 3)
- the camera position comes from the host's orbit angles and distance

``advance_scene`` takes the previous SceneState and the frame's inputs and
returns the next SceneState; nothing is mutated in place.

Example:
    >>> from realtime_raytracer.scene.animation import light_position
    >>> light_position(0.0)
    Vector3(x=0.0, y=2.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from realtime_raytracer.camera.orbit import orbit_position
from realtime_raytracer.core.vector import Vector3
from realtime_raytracer.scene.manager import Scene

Axis = Literal["x", "y", "z"]

# Light orbit parameters
LIGHT_ORBIT_RADIUS = 3.0
LIGHT_HEIGHT = 2.0
LIGHT_ORBIT_CENTER_Z = -3.0


@dataclass(frozen=True)
class SphereMotion:
    """Sinusoidal motion of one sphere along one axis.

    The coordinate on ``axis`` becomes ``base + amplitude * sin(frequency * t)``;
    the other two coordinates keep their current values.

    Attributes:
        index: Scene index of the animated sphere.
        axis: The animated axis.
        base: Rest coordinate on that axis.
        amplitude: Peak offset from ``base``.
        frequency: Angular frequency in radians per second.
    """

    index: int
    axis: Axis
    base: float
    amplitude: float
    frequency: float

    def apply(self, center: Vector3, time: float) -> Vector3:
        """Return ``center`` with the animated coordinate set for ``time``."""
        value = self.base + math.sin(time * self.frequency) * self.amplitude
        if self.axis == "x":
            return Vector3(value, center.y, center.z)
        if self.axis == "y":
            return Vector3(center.x, value, center.z)
        return Vector3(center.x, center.y, value)


@dataclass(frozen=True)
class SceneState:
    """Everything the light transport engine reads for one frame.

    Attributes:
        time: Accumulated animation time in seconds.
        scene: Spheres at their positions for ``time``.
        light_position: Point light position for ``time``.
        camera_position: Camera position for this frame.
    """

    time: float
    scene: Scene
    light_position: Vector3
    camera_position: Vector3


def light_position(time: float) -> Vector3:
    """Point light position at ``time``."""
    return Vector3(
        math.sin(time) * LIGHT_ORBIT_RADIUS,
        LIGHT_HEIGHT,
        math.cos(time) * LIGHT_ORBIT_RADIUS + LIGHT_ORBIT_CENTER_Z,
    )


def animate_scene(
    scene: Scene, motions: tuple[SphereMotion, ...], time: float
) -> Scene:
    """Return ``scene`` with every animated sphere placed for ``time``."""
    spheres = list(scene.spheres)
    for motion in motions:
        sphere = spheres[motion.index]
        spheres[motion.index] = sphere.moved_to(motion.apply(sphere.center, time))
    return scene.with_spheres(spheres)


def initial_state(
    scene: Scene,
    motions: tuple[SphereMotion, ...],
    angle_x: float = 0.0,
    angle_y: float = 0.0,
    distance: float = 5.0,
) -> SceneState:
    """Build the SceneState at time zero."""
    return SceneState(
        time=0.0,
        scene=animate_scene(scene, motions, 0.0),
        light_position=light_position(0.0),
        camera_position=orbit_position(angle_x, angle_y, distance),
    )


def advance_scene(
    state: SceneState,
    motions: tuple[SphereMotion, ...],
    dt: float,
    angle_x: float,
    angle_y: float,
    distance: float,
) -> SceneState:
    """Advance the animation by one frame.

    Args:
        state: The previous frame's state.
        motions: Sphere motions to apply.
        dt: Elapsed time since the previous frame, in seconds.
        angle_x: Camera azimuth from the host.
        angle_y: Camera elevation from the host.
        distance: Camera distance from the host (already clamped).

    Returns:
        The new SceneState.
    """
    time = state.time + dt
    return SceneState(
        time=time,
        scene=animate_scene(state.scene, motions, time),
        light_position=light_position(time),
        camera_position=orbit_position(angle_x, angle_y, distance),
    )
