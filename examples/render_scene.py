#!/usr/bin/env python3
"""Render a still frame of the animated sphere scene to PNG.

This script renders the scene at a chosen animation time with the CPU
renderer and saves the frame as an 8-bit PNG.

Usage:
    python -m examples.render_scene
    python -m examples.render_scene --width 160 --height 120 --samples 4
    python -m examples.render_scene --preset basic --time 1.5 --show
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the animated sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=320,
        help="Image width in pixels (default: 320)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=240,
        help="Image height in pixels (default: 240)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=1,
        help="Anti-aliasing samples per pixel, 1-8 (default: 1)",
    )
    parser.add_argument(
        "--preset",
        choices=("basic", "enhanced"),
        default="enhanced",
        help="Light transport preset (default: enhanced)",
    )
    parser.add_argument(
        "--time",
        type=float,
        default=0.0,
        help="Animation time in seconds (default: 0.0)",
    )
    parser.add_argument(
        "--angle-x",
        type=float,
        default=0.0,
        help="Camera orbit azimuth in radians (default: 0.0)",
    )
    parser.add_argument(
        "--angle-y",
        type=float,
        default=0.0,
        help="Camera orbit elevation in radians (default: 0.0)",
    )
    parser.add_argument(
        "--distance",
        type=float,
        default=5.0,
        help="Camera orbit distance, clamped to [1, 20] (default: 5.0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible frames",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path (default: scene.png)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Also display the frame with Matplotlib",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    width: int = 320,
    height: int = 240,
    samples: int = 1,
    preset: str = "enhanced",
    scene_time: float = 0.0,
    angle_x: float = 0.0,
    angle_y: float = 0.0,
    distance: float = 5.0,
    seed: int | None = None,
    output_path: str = "scene.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render one frame and save it to file.

    Returns:
        Path to the saved image file.
    """
    from realtime_raytracer.camera.orbit import clamp_distance
    from realtime_raytracer.core.integrator import PRESETS
    from realtime_raytracer.core.renderer import FrameInput, FrameRenderer
    from realtime_raytracer.preview.export import save_png

    renderer = FrameRenderer(config=PRESETS[preset], samples=samples, seed=seed)

    if not quiet:
        print(
            f"Rendering {width}x{height} at t={scene_time:.2f}s "
            f"({preset}, {renderer.samples} samples/pixel)..."
        )

    start_time = time.time()
    frame = renderer.render(
        FrameInput(
            dt=scene_time,
            angle_x=angle_x,
            angle_y=angle_y,
            distance=clamp_distance(distance),
            width=width,
            height=height,
        )
    )

    output_file = Path(output_path)
    save_png(frame, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if show:
        from realtime_raytracer.preview.display import show_frame

        show_frame(frame, title=f"t = {scene_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    try:
        render_scene(
            width=args.width,
            height=args.height,
            samples=args.samples,
            preset=args.preset,
            scene_time=args.time,
            angle_x=args.angle_x,
            angle_y=args.angle_y,
            distance=args.distance,
            seed=args.seed,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
