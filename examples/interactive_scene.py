#!/usr/bin/env python3
"""Interactive real-time ray tracer window.

This script opens a Taichi GGUI window and renders the animated sphere
scene every frame on the CPU, with orbit camera controls.

Usage:
    python -m examples.interactive_scene
    python -m examples.interactive_scene --width 200 --height 150 --preset basic

Controls:
    - Mouse drag: rotate camera
    - W/A/S/D: rotate camera
    - Q/E: zoom in/out
    - =/-: anti-aliasing samples up/down
    - P: export PNG
    - ESC: exit

The whole frame is traced in Python, so keep the resolution small.
"""

from __future__ import annotations

import argparse
import platform
import sys

import taichi as ti


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    On macOS, prefers Metal. Falls back to CPU if GPU is unavailable.

    Returns:
        Name of the backend being used.
    """
    system = platform.system()

    if system == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except Exception:
            pass

    # Try generic GPU (CUDA on Linux/Windows, Vulkan as fallback)
    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except Exception:
        pass

    ti.init(arch=ti.cpu)
    return "CPU"


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Interactive sphere ray tracer.")
    parser.add_argument("--width", type=int, default=160, help="Window width (default: 160)")
    parser.add_argument("--height", type=int, default=120, help="Window height (default: 120)")
    parser.add_argument(
        "--samples", type=int, default=1, help="Initial samples per pixel, 1-8 (default: 1)"
    )
    parser.add_argument(
        "--preset",
        choices=("basic", "enhanced"),
        default="enhanced",
        help="Light transport preset (default: enhanced)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser.parse_args()


def main() -> int:
    """Main entry point for the interactive renderer.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    # Initialize Taichi first (the preview creates Taichi fields)
    backend = initialize_taichi()
    print(f"Taichi backend: {backend}")

    from realtime_raytracer.core.integrator import PRESETS
    from realtime_raytracer.core.renderer import FrameRenderer
    from realtime_raytracer.preview.interactive import InteractivePreview

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("This script requires a graphical display environment.")
        return 1

    renderer = FrameRenderer(
        config=PRESETS[args.preset],
        samples=args.samples,
        seed=args.seed,
        width=args.width,
        height=args.height,
    )
    preview = InteractivePreview(args.width, args.height, renderer=renderer)

    print("Real-Time Ray Tracer Started!")
    print("Controls:")
    print("- Mouse: Rotate camera")
    print("- WASD: Rotate camera")
    print("- Q/E: Zoom in/out")
    print("- =/-: Anti-aliasing samples")
    print("- P: Export PNG")
    print("- ESC: Exit")

    try:
        preview.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print("Preview window closed.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
