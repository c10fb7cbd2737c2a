"""Camera module for view and ray generation.

Components:
    orbit: Orbit camera state, spherical-to-Cartesian position, and primary
        ray construction with a fixed -z look direction

Ray generation uses pixel coordinates with the origin at the top-left;
the image plane spans u in [-1, 1] and v scaled by the aspect ratio.
"""

from .orbit import (
    MAX_DISTANCE,
    MIN_DISTANCE,
    OrbitCamera,
    clamp_distance,
    orbit_position,
    primary_ray,
)

__all__ = [
    "OrbitCamera",
    "orbit_position",
    "primary_ray",
    "clamp_distance",
    "MIN_DISTANCE",
    "MAX_DISTANCE",
]
