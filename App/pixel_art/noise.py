"""Noise filter: Bernoulli-gated additive grain.

AIDEV-NOTE: Each pixel is picked with probability noise_level/100. A picked
pixel gets ONE random delta added to R, G and B together, so it brightens or
darkens without a hue shift (only clamping at 0/255 can split the channels).
Alpha is never touched. The default generator is unseeded on purpose; pass
a seed or Generator for reproducible output.
"""

import logging

import numpy as np

from models import MAX_NOISE_LEVEL, MIN_NOISE_LEVEL, clamp

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)


def make_rng(rng: "np.random.Generator | int | None" = None) -> np.random.Generator:
    """Return rng unchanged if it is a Generator, else seed a new one."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def apply_noise(
    source: PixelBuffer,
    noise_level: int,
    rng: "np.random.Generator | int | None" = None,
) -> PixelBuffer:
    """Add random grain to a buffer.

    Args:
        source: Input buffer
        noise_level: Percentage 0-100 (clamped); 0 returns an exact copy
        rng: numpy Generator, integer seed, or None for fresh entropy

    Returns:
        New buffer of the same size with the alpha channel unchanged
    """
    noise_level = clamp(noise_level, MIN_NOISE_LEVEL, MAX_NOISE_LEVEL)
    if noise_level == 0:
        return source.copy()

    generator = make_rng(rng)
    shape = (source.height, source.width)

    # Gate draw and delta draw per pixel
    picked = generator.random(shape) < noise_level / 100
    delta = (generator.random(shape) - 0.5) * 255 * (noise_level / 50)

    pixels = source.pixels.astype(np.float64)
    pixels[..., :3] += np.where(picked, delta, 0.0)[..., np.newaxis]
    rgb = np.clip(np.rint(pixels[..., :3]), 0, 255)

    out = source.pixels.copy()
    out[..., :3] = rgb.astype(np.uint8)

    logger.debug(
        "Applied noise level %d to %d of %d pixels",
        noise_level,
        int(picked.sum()),
        picked.size,
    )
    return PixelBuffer(out)
