"""Procedural checkerboard texture.

The texture is a fixed W x H grid of RGB colors stored in a read-only NumPy
array. It is generated once at startup and shared by reference between any
number of spheres; sampling is a wrapped integer lookup, no filtering.

Example:
    >>> from realtime_raytracer.materials.texture import CheckerTexture
    >>> tex = CheckerTexture(width=64, height=64, check_size=8)
    >>> tex.sample(0.0, 0.0)
    Color(r=1.0, g=1.0, b=1.0)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from realtime_raytracer.core.vector import Color

# Default grid resolution and check size in texels
TEXTURE_SIZE = 64
CHECK_SIZE = 8

# Default check colors
LIGHT_CHECK = (1.0, 1.0, 1.0)
DARK_CHECK = (0.3, 0.3, 0.3)


class CheckerTexture:
    """Immutable checkerboard color grid.

    Attributes:
        width: Grid width in texels.
        height: Grid height in texels.
        texels: Read-only array of shape (height, width, 3), float32.
    """

    def __init__(
        self,
        width: int = TEXTURE_SIZE,
        height: int = TEXTURE_SIZE,
        check_size: int = CHECK_SIZE,
        *,
        light: tuple[float, float, float] = LIGHT_CHECK,
        dark: tuple[float, float, float] = DARK_CHECK,
    ) -> None:
        """Generate the checker grid.

        Args:
            width: Grid width in texels.
            height: Grid height in texels.
            check_size: Edge length of one check in texels.
            light: RGB color of the checks containing texel (0, 0).
            dark: RGB color of the alternate checks.

        Raises:
            ValueError: If any size is not positive.
        """
        if width <= 0 or height <= 0 or check_size <= 0:
            raise ValueError(
                f"Texture sizes must be positive, got {width}x{height} "
                f"with check size {check_size}"
            )

        self.width = width
        self.height = height

        rows, cols = np.indices((height, width))
        parity = ((rows // check_size) + (cols // check_size)) % 2
        texels = np.where(
            parity[..., np.newaxis] == 0,
            np.asarray(light, dtype=np.float32),
            np.asarray(dark, dtype=np.float32),
        ).astype(np.float32)
        texels.setflags(write=False)
        self.texels: npt.NDArray[np.float32] = texels

    def sample(self, u: float, v: float) -> Color:
        """Look up the texel at (u, v).

        Args:
            u: Horizontal coordinate, nominally in [0, 1).
            v: Vertical coordinate, nominally in [0, 1).

        Returns:
            The texel color. Coordinates outside [0, 1) wrap around.
        """
        x = int(u * self.width) % self.width
        y = int(v * self.height) % self.height
        r, g, b = self.texels[y, x]
        return Color(float(r), float(g), float(b))

    def __repr__(self) -> str:
        return f"CheckerTexture(width={self.width}, height={self.height})"
