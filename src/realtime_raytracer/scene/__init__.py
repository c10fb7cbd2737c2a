"""Scene module for scene management and animation.

Components:
    manager: Ordered sphere collection with nearest-hit and shadow queries
    animation: SceneState and the pure per-frame update
    default_scene: The four-sphere scene and its motions
"""

from .animation import (
    SceneState,
    SphereMotion,
    advance_scene,
    animate_scene,
    initial_state,
    light_position,
)
from .default_scene import create_default_scene, default_motions
from .manager import Scene, SceneHit

__all__ = [
    # Manager module
    "Scene",
    "SceneHit",
    # Animation module
    "SceneState",
    "SphereMotion",
    "advance_scene",
    "animate_scene",
    "initial_state",
    "light_position",
    # Default scene
    "create_default_scene",
    "default_motions",
]
