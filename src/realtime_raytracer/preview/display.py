"""Matplotlib-based still display for rendered frames.

Example:
    >>> from realtime_raytracer.core.renderer import FrameInput, FrameRenderer
    >>> from realtime_raytracer.preview.display import show_frame
    >>> renderer = FrameRenderer(seed=1)
    >>> show_frame(renderer.render(FrameInput(width=64, height=48)))
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def frame_to_float(frame: npt.NDArray[np.uint8]) -> npt.NDArray[np.float32]:
    """Convert an 8-bit frame to float32 values in [0, 1]."""
    return frame.astype(np.float32) / 255.0


def show_frame(
    frame: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    block: bool = True,
) -> None:
    """Display a frame in a Matplotlib window.

    Args:
        frame: Frame of shape (H, W, 3), dtype uint8, row 0 at the top.
        title: Optional window title.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    ax.imshow(frame, interpolation="nearest")
    ax.axis("off")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    plt.show(block=block)


def show_comparison(
    frame_a: npt.NDArray[np.uint8],
    frame_b: npt.NDArray[np.uint8],
    *,
    titles: tuple[str, str] = ("A", "B"),
    block: bool = True,
) -> None:
    """Display two frames side by side with their absolute difference."""
    import matplotlib.pyplot as plt

    diff = np.abs(frame_to_float(frame_a) - frame_to_float(frame_b))

    fig, axes = plt.subplots(1, 3, figsize=(12, 4))
    for ax, image, label in zip(axes, (frame_a, frame_b, diff), (*titles, "|A - B|")):
        ax.imshow(image, interpolation="nearest")
        ax.set_title(label)
        ax.axis("off")
    fig.tight_layout()
    plt.show(block=block)
