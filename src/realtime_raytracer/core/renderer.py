"""Frame renderer producing an 8-bit RGB buffer per call.

This module drives one full render pass per host frame:

1. Advance the scene animation by the frame's elapsed time
2. Trace N jittered camera rays per pixel (anti-aliasing)
3. Average, clamp, and truncate each channel into a uint8 buffer

The renderer owns the scene state and the single random generator used for
both pixel jitter and hemisphere sampling. The generator is consumed in a
fixed order (jitter x, jitter y, then whatever the trace draws) so a seeded
renderer reproduces its frames exactly.

Example:
    >>> from realtime_raytracer.core.renderer import FrameInput, FrameRenderer
    >>> renderer = FrameRenderer(seed=7)
    >>> frame = renderer.render(FrameInput(dt=0.016, width=16, height=12))
    >>> frame.shape
    (12, 16, 3)
    >>> len(renderer.frame_bytes())
    576
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from realtime_raytracer.camera.orbit import (
    DEFAULT_DISTANCE,
    MAX_DISTANCE,
    MIN_DISTANCE,
    primary_ray,
)
from realtime_raytracer.core.integrator import ENHANCED, Tracer, TracerConfig
from realtime_raytracer.core.vector import Color
from realtime_raytracer.scene.animation import (
    SceneState,
    SphereMotion,
    advance_scene,
    initial_state,
)
from realtime_raytracer.scene.default_scene import create_default_scene, default_motions
from realtime_raytracer.scene.manager import Scene

# Anti-aliasing sample count limits
MIN_SAMPLES = 1
MAX_SAMPLES = 8


@dataclass(frozen=True)
class FrameInput:
    """Per-frame input supplied by the host.

    Attributes:
        dt: Elapsed time since the previous frame, in seconds.
        angle_x: Camera orbit azimuth in radians.
        angle_y: Camera orbit elevation in radians.
        distance: Camera orbit distance, within [1, 20].
        width: Output width in pixels.
        height: Output height in pixels.

    Raises:
        ValueError: If the dimensions are not positive, dt is negative, or
            the distance is outside its range.
    """

    dt: float = 0.0
    angle_x: float = 0.0
    angle_y: float = 0.0
    distance: float = DEFAULT_DISTANCE
    width: int = 320
    height: int = 240

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.dt < 0.0:
            raise ValueError(f"Elapsed time must not be negative, got {self.dt}")
        if not MIN_DISTANCE <= self.distance <= MAX_DISTANCE:
            raise ValueError(
                f"Camera distance {self.distance} outside [{MIN_DISTANCE}, {MAX_DISTANCE}]"
            )


class FrameRenderer:
    """Renders the animated sphere scene into an RGB byte buffer.

    The host calls ``render`` once per frame and reads the returned buffer.
    The scene state is internal; the host never sees or edits it.

    Attributes:
        config: The TracerConfig used for every frame.
    """

    def __init__(
        self,
        scene: Scene | None = None,
        motions: tuple[SphereMotion, ...] | None = None,
        *,
        config: TracerConfig = ENHANCED,
        samples: int = MIN_SAMPLES,
        seed: int | None = None,
        width: int = 320,
        height: int = 240,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: Spheres at rest. Defaults to the four-sphere scene.
            motions: Sphere animation. Defaults to the default motions when
                the default scene is used, otherwise no motion.
            config: Light transport configuration.
            samples: Anti-aliasing samples per pixel, clamped to [1, 8].
            seed: Seed for the random generator; None for fresh entropy.
            width: Initial buffer width in pixels.
            height: Initial buffer height in pixels.
        """
        if scene is None:
            scene = create_default_scene()
            if motions is None:
                motions = default_motions()
        self._motions: tuple[SphereMotion, ...] = motions or ()
        self._state = initial_state(scene, self._motions)
        self._rng = np.random.default_rng(seed)
        self.config = config
        self._samples = MIN_SAMPLES
        self.set_samples(samples)

        self._width = 0
        self._height = 0
        self._frame: npt.NDArray[np.uint8] = np.zeros((0, 0, 3), dtype=np.uint8)
        self.resize(width, height)

    @property
    def width(self) -> int:
        """Get the buffer width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the buffer height."""
        return self._height

    @property
    def samples(self) -> int:
        """Get the anti-aliasing sample count."""
        return self._samples

    @property
    def time(self) -> float:
        """Get the accumulated animation time."""
        return self._state.time

    @property
    def frame(self) -> npt.NDArray[np.uint8]:
        """The current frame, shape (height, width, 3), row 0 at the top."""
        return self._frame

    def set_samples(self, samples: int) -> int:
        """Set the anti-aliasing sample count, clamped to [1, 8].

        Returns:
            The sample count actually in effect.
        """
        self._samples = min(MAX_SAMPLES, max(MIN_SAMPLES, int(samples)))
        return self._samples

    def resize(self, width: int, height: int) -> None:
        """Reallocate the output buffer for new dimensions.

        The buffer is cleared to black. Calling with the current size is a
        no-op.
        """
        if (width, height) == (self._width, self._height):
            return
        self._width = width
        self._height = height
        self._frame = np.zeros((height, width, 3), dtype=np.uint8)

    def frame_bytes(self) -> bytes:
        """The current frame as row-major RGB bytes."""
        return self._frame.tobytes()

    def render(self, frame_input: FrameInput) -> npt.NDArray[np.uint8]:
        """Advance the animation and render one frame.

        Args:
            frame_input: The host's input for this frame.

        Returns:
            The frame buffer, shape (height, width, 3), dtype uint8.
        """
        self.resize(frame_input.width, frame_input.height)
        self._state = advance_scene(
            self._state,
            self._motions,
            frame_input.dt,
            frame_input.angle_x,
            frame_input.angle_y,
            frame_input.distance,
        )
        self._render_pixels(self._state)
        return self._frame

    def _render_pixels(self, state: SceneState) -> None:
        """Trace every pixel of the buffer for ``state``."""
        tracer = Tracer(state, self._rng, self.config)
        rng = self._rng
        origin = state.camera_position
        width, height = self._width, self._height
        samples = self._samples
        inv_samples = 1.0 / samples
        frame = self._frame

        for y in range(height):
            for x in range(width):
                accum = Color()
                for _ in range(samples):
                    px = x + 0.5 + (rng.random() - 0.5)
                    py = y + 0.5 + (rng.random() - 0.5)
                    ray = primary_ray(origin, px, py, width, height)
                    accum = accum + tracer.trace(ray, 0)
                frame[y, x] = (accum * inv_samples).clamp().to_bytes()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"samples={self.samples}, time={self.time:.3f})"
        )
