"""Pixelation filter: reduce to a coarse grid, then blow it back up.

AIDEV-NOTE: The reduction uses Pillow's BOX filter, so each grid cell is
the area average of its source block. The enlargement must stay NEAREST;
any smoothing filter there destroys the hard block edges.
"""

import logging

from PIL import Image

from models import MAX_PIXEL_SIZE, MIN_PIXEL_SIZE, clamp

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)


def reduced_grid_size(
    width: int, height: int, pixel_size: int
) -> "tuple[int, int]":
    """Size of the coarse grid for a given block size.

    Each dimension is floor(dimension / pixel_size), but never below 1 so a
    block size larger than the image still yields one solid block.
    """
    pixel_size = clamp(pixel_size, MIN_PIXEL_SIZE, MAX_PIXEL_SIZE)
    return max(1, width // pixel_size), max(1, height // pixel_size)


def pixelate(source: PixelBuffer, pixel_size: int) -> PixelBuffer:
    """Pixelate a buffer with blocks of roughly pixel_size x pixel_size.

    Args:
        source: Input buffer (w, h)
        pixel_size: Block edge in pixels (clamped to 1-50)

    Returns:
        New buffer of the same (w, h); pixel_size 1 returns an exact copy
    """
    width, height = source.size
    grid = reduced_grid_size(width, height, pixel_size)

    if grid == (width, height):
        return source.copy()

    image = source.to_image()
    small = image.resize(grid, Image.Resampling.BOX)
    blocky = small.resize((width, height), Image.Resampling.NEAREST)
    logger.debug(
        "Pixelated %dx%d through a %dx%d grid (pixel_size=%d)",
        width,
        height,
        grid[0],
        grid[1],
        pixel_size,
    )
    return PixelBuffer.from_image(blocky)
