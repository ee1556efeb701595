"""Main image processor orchestrating the filter pipeline.

AIDEV-NOTE: run() is the pure pipeline: pixelation first, then noise. Noise
applied before pixelation would be averaged away by the BOX reduction, so
the order is fixed. ImageProcessor adds decoding on top for callers that
start from a file or raw bytes.
"""

import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps

from models import FilterParameters

from .buffer import PixelBuffer
from .errors import DecodeError
from .noise import apply_noise, make_rng
from .pixelation import pixelate

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, Image.Image, PixelBuffer]


def run(
    parameters: FilterParameters,
    source: PixelBuffer,
    rng: "np.random.Generator | int | None" = None,
) -> PixelBuffer:
    """Apply the full filter chain to a source buffer.

    Args:
        parameters: Pixel size and noise level for this run
        source: Decoded original image
        rng: Random source for the noise stage (None = unseeded)

    Returns:
        Newly allocated processed buffer; source is left untouched
    """
    logger.debug(
        "Running pipeline on %dx%d (pixel_size=%d, noise_level=%d)",
        source.width,
        source.height,
        parameters.pixel_size,
        parameters.noise_level,
    )
    pixelated = pixelate(source, parameters.pixel_size)
    return apply_noise(pixelated, parameters.noise_level, rng)


class ImageProcessor:
    """Decodes images and turns them into pixel art."""

    def __init__(
        self,
        parameters: FilterParameters | None = None,
        rng: "np.random.Generator | int | None" = None,
    ):
        self.parameters = parameters or FilterParameters()
        self.rng = make_rng(rng)

    def load_image(self, source: ImageSource) -> PixelBuffer:
        """Load and validate an image.

        Args:
            source: Path to an image file (PNG, JPG, etc.), raw encoded bytes,
                a PIL image, or an existing PixelBuffer

        Returns:
            PixelBuffer in RGBA

        Raises:
            DecodeError: If the input cannot be decoded
        """
        if isinstance(source, PixelBuffer):
            return source

        try:
            if isinstance(source, Image.Image):
                image = source
            elif isinstance(source, (bytes, bytearray)):
                image = Image.open(io.BytesIO(source))
            else:
                image = Image.open(source)
            # Force a full decode so truncated files fail here, not later
            image.load()
            # AIDEV-NOTE: Camera JPEGs store rotation in EXIF; bake it in
            image = ImageOps.exif_transpose(image)
            buffer = PixelBuffer.from_image(image)
        except Exception as e:
            logger.warning("Failed to decode image: %s", e)
            raise DecodeError(f"Failed to load image: {e}") from e

        logger.info("Loaded image with size: %dx%d pixels", buffer.width, buffer.height)
        return buffer

    def pixelate(self, buffer: PixelBuffer, pixel_size: int | None = None) -> PixelBuffer:
        """Pixelate using pixel_size, or the configured size if None."""
        if pixel_size is None:
            pixel_size = self.parameters.pixel_size
        return pixelate(buffer, pixel_size)

    def add_noise(self, buffer: PixelBuffer, noise_level: int | None = None) -> PixelBuffer:
        """Add noise using noise_level, or the configured level if None."""
        if noise_level is None:
            noise_level = self.parameters.noise_level
        return apply_noise(buffer, noise_level, self.rng)

    def process(
        self,
        source: ImageSource,
        parameters: FilterParameters | None = None,
    ) -> PixelBuffer:
        """Execute the complete pipeline: decode, pixelate, add noise.

        Args:
            source: Anything load_image accepts
            parameters: Overrides the processor's configured parameters

        Returns:
            Processed PixelBuffer
        """
        buffer = self.load_image(source)
        return run(parameters or self.parameters, buffer, self.rng)
