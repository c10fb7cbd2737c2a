"""Scene container and ray-scene queries.

The scene is an ordered tuple of spheres. Queries are linear scans; there is
no acceleration structure. Order only matters as a tie-break: when two
spheres report exactly the same hit distance, the earlier one wins.

Example:
    >>> from realtime_raytracer.scene.default_scene import create_default_scene
    >>> scene = create_default_scene()
    >>> len(scene)
    4
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from realtime_raytracer.core.ray import Ray
    from realtime_raytracer.geometry.sphere import Sphere


@dataclass(frozen=True)
class SceneHit:
    """Nearest intersection found by a scene query.

    Attributes:
        t: Distance along the ray.
        index: Position of the hit sphere in the scene.
        sphere: The hit sphere.
    """

    t: float
    index: int
    sphere: Sphere


class Scene:
    """Ordered, immutable collection of spheres."""

    def __init__(self, spheres: Iterable[Sphere] = ()) -> None:
        self._spheres: tuple[Sphere, ...] = tuple(spheres)

    @property
    def spheres(self) -> tuple[Sphere, ...]:
        """The spheres in scene order."""
        return self._spheres

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self._spheres)

    def __getitem__(self, index: int) -> Sphere:
        return self._spheres[index]

    def with_spheres(self, spheres: Iterable[Sphere]) -> Scene:
        """Return a new scene holding ``spheres``."""
        return Scene(spheres)

    def nearest_hit(self, ray: Ray) -> SceneHit | None:
        """Find the closest sphere along ``ray``.

        Args:
            ray: The ray to trace.

        Returns:
            The nearest SceneHit, or None if every sphere is missed.
        """
        closest: SceneHit | None = None
        for index, sphere in enumerate(self._spheres):
            t = sphere.intersect(ray)
            if t is not None and (closest is None or t < closest.t):
                closest = SceneHit(t, index, sphere)
        return closest

    def occluded(self, ray: Ray, exclude: int) -> bool:
        """True if any sphere other than ``exclude`` intersects ``ray``.

        Any positive hit counts, however far along the ray it is.

        Args:
            ray: The shadow ray.
            exclude: Scene index of the sphere the ray starts on.
        """
        for index, sphere in enumerate(self._spheres):
            if index != exclude and sphere.intersect(ray) is not None:
                return True
        return False

    def __repr__(self) -> str:
        return f"Scene(spheres={len(self._spheres)})"
