"""Orbit camera model and primary ray generation.

The camera orbits the origin on a sphere given by two angles and a distance.
Its position is recomputed every frame by a spherical-to-Cartesian
conversion. The look direction is fixed along -z and the field of view is
fixed: the image plane sits at z = -1 and spans u in [-1, 1] (90 degrees
horizontally), with the vertical extent scaled by the aspect ratio.

The OrbitCamera dataclass holds the host-side input state. W/S and A/D
rotate by 0.1 radian per press, a mouse drag rotates by 0.01 radian per
pixel, and each zoom step moves the camera 0.5 units within [1, 20].

Example:
    >>> from realtime_raytracer.camera.orbit import OrbitCamera
    >>> camera = OrbitCamera()
    >>> camera.position()
    Vector3(x=0.0, y=0.0, z=5.0)
    >>> camera.zoom(100.0).distance
    1.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from realtime_raytracer.core.ray import Ray
from realtime_raytracer.core.vector import Vector3

# =============================================================================
# Camera Constants
# =============================================================================

MIN_DISTANCE = 1.0
MAX_DISTANCE = 20.0
DEFAULT_DISTANCE = 5.0

# Half-width of the image plane at z = -1 (90 degree horizontal FOV)
VIEWPORT_HALF_WIDTH = 1.0

# Input steps
KEY_ANGLE_STEP = 0.1
DRAG_ANGLE_PER_PIXEL = 0.01
ZOOM_STEP = 0.5


def clamp_distance(distance: float) -> float:
    """Clamp an orbit distance to [MIN_DISTANCE, MAX_DISTANCE]."""
    return min(MAX_DISTANCE, max(MIN_DISTANCE, distance))


def orbit_position(angle_x: float, angle_y: float, distance: float) -> Vector3:
    """Convert orbit angles and distance to a camera position.

    Args:
        angle_x: Azimuth in radians, measured from +z toward +x.
        angle_y: Elevation in radians.
        distance: Distance from the origin.

    Returns:
        ``distance * (sin(ax) cos(ay), sin(ay), cos(ax) cos(ay))``.
    """
    return Vector3(
        distance * math.sin(angle_x) * math.cos(angle_y),
        distance * math.sin(angle_y),
        distance * math.cos(angle_x) * math.cos(angle_y),
    )


def primary_ray(origin: Vector3, px: float, py: float, width: int, height: int) -> Ray:
    """Build the camera ray through a (sub)pixel position.

    Args:
        origin: Camera position.
        px: Horizontal pixel coordinate, 0 at the left edge.
        py: Vertical pixel coordinate, 0 at the top edge.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A ray from ``origin`` with direction normalize(u, -v, -1).
    """
    u = ((px / width) * 2.0 - 1.0) * VIEWPORT_HALF_WIDTH
    v = ((py / height) * 2.0 - 1.0) * VIEWPORT_HALF_WIDTH
    v *= height / width
    return Ray(origin, Vector3(u, -v, -1.0))


@dataclass(frozen=True)
class OrbitCamera:
    """Host-side orbit state driven by keyboard and mouse input.

    Attributes:
        angle_x: Azimuth in radians.
        angle_y: Elevation in radians.
        distance: Orbit distance, kept within [MIN_DISTANCE, MAX_DISTANCE].
    """

    angle_x: float = 0.0
    angle_y: float = 0.0
    distance: float = DEFAULT_DISTANCE

    def position(self) -> Vector3:
        """Camera position for the current orbit state."""
        return orbit_position(self.angle_x, self.angle_y, self.distance)

    def rotate(self, delta_x: float, delta_y: float) -> OrbitCamera:
        """Return a copy with the orbit angles offset."""
        return replace(
            self, angle_x=self.angle_x + delta_x, angle_y=self.angle_y + delta_y
        )

    def drag(self, dx_pixels: float, dy_pixels: float) -> OrbitCamera:
        """Return a copy rotated by a mouse drag measured in pixels."""
        return self.rotate(dx_pixels * DRAG_ANGLE_PER_PIXEL, dy_pixels * DRAG_ANGLE_PER_PIXEL)

    def zoom(self, steps: float) -> OrbitCamera:
        """Return a copy zoomed by ``steps`` (positive moves closer)."""
        return replace(self, distance=clamp_distance(self.distance - steps * ZOOM_STEP))

    def apply_key(self, key: str) -> OrbitCamera:
        """Return a copy updated for one W/A/S/D key press or repeat.

        Other keys leave the state unchanged.
        """
        key = key.lower()
        if key == "w":
            return self.rotate(0.0, KEY_ANGLE_STEP)
        if key == "s":
            return self.rotate(0.0, -KEY_ANGLE_STEP)
        if key == "a":
            return self.rotate(-KEY_ANGLE_STEP, 0.0)
        if key == "d":
            return self.rotate(KEY_ANGLE_STEP, 0.0)
        return self
