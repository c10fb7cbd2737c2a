"""Interactive preview window using Taichi GGUI.

This module is the host side of the renderer: it owns the window, turns
keyboard and mouse input into orbit camera state, measures frame time,
asks the FrameRenderer for a frame, and presents the resulting byte buffer.

Controls:
    - Left mouse drag: rotate camera
    - W/A/S/D: rotate camera in steps
    - Q/E: zoom in/out (GGUI reports no scroll wheel)
    - =/-: more/fewer anti-aliasing samples
    - P: export the current frame as PNG
    - ESC: close

Resizing the window changes the render size on the next frame.

Taichi must be initialized (``ti.init``) before an InteractivePreview is
created, because the display image is a Taichi field.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from realtime_raytracer.core.renderer import FrameRenderer
    >>> from realtime_raytracer.preview.interactive import InteractivePreview
    >>>
    >>> preview = InteractivePreview(320, 240, renderer=FrameRenderer())
    >>> preview.run()
"""

from __future__ import annotations

import os
import time
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from realtime_raytracer.camera.orbit import OrbitCamera
from realtime_raytracer.core.renderer import FrameInput, FrameRenderer

if TYPE_CHECKING:
    import numpy.typing as npt

# Print an FPS line every this many frames
FPS_REPORT_INTERVAL = 60

ZOOM_IN_KEYS = ("q",)
ZOOM_OUT_KEYS = ("e",)
MORE_SAMPLES_KEYS = ("=", "+")
FEWER_SAMPLES_KEYS = ("-", "_")
EXPORT_KEYS = ("p",)


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    Attributes:
        width: Window and render width in pixels.
        height: Window and render height in pixels.
        renderer: The FrameRenderer producing frames.
        camera: Current orbit camera state.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        renderer: FrameRenderer | None = None,
        camera: OrbitCamera | None = None,
        title: str = "Real-Time Ray Tracer",
    ) -> None:
        """Initialize the interactive preview.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            renderer: Renderer to drive. A default FrameRenderer is created
                when None.
            camera: Initial orbit state. Defaults to OrbitCamera().
            title: Window title.

        Raises:
            ValueError: If the dimensions are not positive.

        Note:
            The window is created lazily on first use, so the preview can be
            driven headless through step().
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Window dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._title = title
        self.renderer = renderer if renderer is not None else FrameRenderer(
            width=width, height=height
        )
        self.camera = camera if camera is not None else OrbitCamera()

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self._close_requested = False
        self._last_cursor: tuple[float, float] | None = None
        self._frame_count = 0

        # Shape is (width, height) for Taichi field, RGB values stored as vec3
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        """Create the GGUI window and canvas if not created yet."""
        if self._window is not None:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    @property
    def frame_count(self) -> int:
        """Number of frames rendered through step()."""
        return self._frame_count

    def resize(self, width: int, height: int) -> None:
        """Match the render size to a new window size.

        Reallocates the display field; the next step() renders at the new
        size. Calling with the current size is a no-op.

        Raises:
            ValueError: If the dimensions are not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Window dimensions must be positive, got {width}x{height}")
        if (width, height) == (self.width, self.height):
            return

        self.width = width
        self.height = height
        self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    def _sync_window_size(self) -> None:
        """Follow the GGUI window if it was resized."""
        width, height = self.window.get_window_shape()
        if width > 0 and height > 0:
            self.resize(width, height)

    def update_image(self, frame: npt.NDArray[np.uint8]) -> None:
        """Copy an RGB byte frame into the display field.

        Args:
            frame: Frame of shape (height, width, 3), dtype uint8, row 0 at
                the top.

        Raises:
            ValueError: If the frame shape doesn't match the window.
        """
        expected_shape = (self.height, self.width, 3)
        if frame.shape != expected_shape:
            raise ValueError(
                f"Frame shape {frame.shape} doesn't match expected {expected_shape}"
            )

        # Taichi fields are indexed (x, y) with y up; frames are (row, col) top-down
        image = frame.astype(np.float32) / 255.0
        image_transposed = np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)))
        self.display_image.from_numpy(image_transposed)

    # =========================================================================
    # Input Handling
    # =========================================================================

    def handle_key(self, key: str) -> None:
        """Apply one key press to the camera, renderer or window state."""
        if key == ti.ui.ESCAPE:
            self._close_requested = True
            return

        key = key.lower()
        if key in ZOOM_IN_KEYS:
            self.camera = self.camera.zoom(1.0)
        elif key in ZOOM_OUT_KEYS:
            self.camera = self.camera.zoom(-1.0)
        elif key in MORE_SAMPLES_KEYS:
            self.renderer.set_samples(self.renderer.samples + 1)
        elif key in FEWER_SAMPLES_KEYS:
            self.renderer.set_samples(self.renderer.samples - 1)
        elif key in EXPORT_KEYS:
            self.export_png()
        else:
            self.camera = self.camera.apply_key(key)

    def handle_cursor(self, x: float, y: float, dragging: bool) -> None:
        """Rotate the camera by the cursor motion while dragging.

        Args:
            x: Cursor x in pixels, 0 at the left.
            y: Cursor y in pixels, 0 at the top.
            dragging: Whether the left mouse button is held.
        """
        if dragging and self._last_cursor is not None:
            last_x, last_y = self._last_cursor
            self.camera = self.camera.drag(x - last_x, y - last_y)
        self._last_cursor = (x, y)

    def _poll_input(self) -> None:
        """Drain GGUI events and sample the cursor."""
        window = self.window
        while window.get_event(ti.ui.PRESS):
            self.handle_key(window.event.key)

        cursor_x, cursor_y = window.get_cursor_pos()
        self.handle_cursor(
            cursor_x * self.width,
            (1.0 - cursor_y) * self.height,
            window.is_pressed(ti.ui.LMB),
        )

    # =========================================================================
    # Frame Loop
    # =========================================================================

    def step(self, dt: float) -> npt.NDArray[np.uint8]:
        """Render one frame for the current camera and show it in the field.

        Args:
            dt: Elapsed time since the previous frame, in seconds.

        Returns:
            The rendered frame.
        """
        frame = self.renderer.render(
            FrameInput(
                dt=dt,
                angle_x=self.camera.angle_x,
                angle_y=self.camera.angle_y,
                distance=self.camera.distance,
                width=self.width,
                height=self.height,
            )
        )
        self.update_image(frame)
        self._frame_count += 1

        if self._frame_count % FPS_REPORT_INTERVAL == 0 and dt > 0.0:
            print(f"FPS: {int(1.0 / dt)} | Time: {self.renderer.time:.2f}s")

        return frame

    def is_running(self) -> bool:
        """Check if the window is still open.

        Returns:
            True if the window is running, False if it should close.
        """
        return not self._close_requested and self.window.running

    def show_frame(self) -> None:
        """Present the display image."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Run the main window event loop until the window is closed."""
        self._initialize_window()

        last_time = time.perf_counter()
        while self.is_running():
            now = time.perf_counter()
            dt = now - last_time
            last_time = now

            self._poll_input()
            if self._close_requested:
                break
            self._sync_window_size()
            self.step(dt)
            self.show_frame()

        self.close()

    def close(self) -> None:
        """Close the preview window."""
        self._close_requested = True
        if self._window is not None:
            self._window.running = False

    def export_png(self, filename: str | None = None) -> str:
        """Export the current frame to a PNG file.

        Args:
            filename: Output path. Defaults to raytracer_YYYYMMDD_HHMMSS.png.

        Returns:
            The path written.
        """
        from realtime_raytracer.preview.export import save_png

        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"raytracer_{timestamp}.png"

        save_png(self.renderer.frame, filename)
        print(f"Exported: {filename} ({self.renderer.samples} samples/pixel)")
        return filename

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        # On macOS, display is always available if not in SSH
        if os.name == "posix" and os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            if ssh_connection and not display:
                return False
            return True

        if display or wayland:
            return True

        # Windows generally always has display
        if os.name == "nt":
            return True

        return False
