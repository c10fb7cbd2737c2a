"""Preview module for output and visualization.

This module is the host side of the renderer:

Components:
    display: Matplotlib-based still display
    export: PNG export via Pillow and RMSE comparison
    interactive: Taichi GGUI-based interactive window

Example:
    >>> from realtime_raytracer.core.renderer import FrameInput, FrameRenderer
    >>> from realtime_raytracer.preview import save_png
    >>>
    >>> renderer = FrameRenderer(seed=3)
    >>> save_png(renderer.render(FrameInput(width=64, height=48)), "out.png")

For the interactive window (Taichi must be initialized first):
    >>> from realtime_raytracer.preview.interactive import InteractivePreview
    >>> InteractivePreview(320, 240).run()
"""

from realtime_raytracer.preview.display import (
    frame_to_float,
    show_comparison,
    show_frame,
)
from realtime_raytracer.preview.export import (
    compute_rmse,
    frame_to_image,
    load_png,
    save_png,
)

# Note: interactive is NOT imported here because it creates Taichi fields,
# which requires ti.init() to have been called first.

__all__ = [
    # Display functions
    "show_frame",
    "show_comparison",
    "frame_to_float",
    # Export functions
    "save_png",
    "load_png",
    "frame_to_image",
    "compute_rmse",
]
