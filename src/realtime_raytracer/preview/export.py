"""Image export utilities for rendered frames.

Frames come out of the renderer as 8-bit RGB arrays already, so export is a
direct hand-off to Pillow; no tone mapping or gamma is applied.

Example:
    >>> from realtime_raytracer.core.renderer import FrameInput, FrameRenderer
    >>> from realtime_raytracer.preview.export import save_png
    >>> renderer = FrameRenderer(seed=1)
    >>> frame = renderer.render(FrameInput(width=64, height=48))
    >>> save_png(frame, "frame.png")
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_frame(frame: npt.NDArray[np.uint8]) -> None:
    """Raise ValueError unless ``frame`` is an (H, W, 3) uint8 array."""
    if frame.dtype != np.uint8 or frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(
            f"Expected an (H, W, 3) uint8 frame, got shape {frame.shape} "
            f"with dtype {frame.dtype}"
        )


def frame_to_image(frame: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap a frame buffer in a Pillow RGB image.

    Args:
        frame: Frame of shape (H, W, 3), dtype uint8, row 0 at the top.

    Returns:
        The Pillow image.

    Raises:
        ValueError: If the frame has the wrong shape or dtype.
    """
    _check_frame(frame)
    return PILImage.fromarray(np.ascontiguousarray(frame))


def save_png(frame: npt.NDArray[np.uint8], filepath: str | os.PathLike[str]) -> None:
    """Save a frame buffer as a PNG file.

    Args:
        frame: Frame of shape (H, W, 3), dtype uint8.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the frame has the wrong shape or dtype.
    """
    frame_to_image(frame).save(filepath, format="PNG")


def load_png(filepath: str | os.PathLike[str]) -> npt.NDArray[np.uint8]:
    """Load a PNG written by ``save_png`` back into a frame array."""
    with PILImage.open(filepath) as image:
        return np.asarray(image.convert("RGB"), dtype=np.uint8).copy()


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar), in the images' own units.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
