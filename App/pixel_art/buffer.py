"""Immutable RGBA pixel buffer shared by every filter stage.

AIDEV-NOTE: Samples are stored as a read-only uint8 numpy array of shape
(height, width, 4), row-major, top-to-bottom, RGBA interleaved. Filters
never write into a buffer; each stage builds a new one.
"""

from typing import Sequence

import numpy as np
from PIL import Image

CHANNELS = 4  # RGBA


class PixelBuffer:
    """Snapshot of one RGBA image frame."""

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray):
        """Wrap an array of shape (height, width, 4) and dtype uint8.

        The array is copied and frozen, so later changes to the caller's
        array do not leak into the buffer.

        Raises:
            ValueError: If the array shape or dtype breaks the buffer invariant
        """
        if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8:
            raise ValueError("pixels must be a uint8 numpy array")
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(
                f"pixels must have shape (height, width, {CHANNELS}), "
                f"got {pixels.shape}"
            )
        height, width = pixels.shape[:2]
        if width <= 0 or height <= 0:
            raise ValueError(f"buffer dimensions must be positive, got {width}x{height}")

        frozen = np.array(pixels, dtype=np.uint8, copy=True, order="C")
        frozen.flags.writeable = False
        self._pixels = frozen

    # --- Construction ---

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelBuffer":
        """Allocate a fully transparent black buffer of the given size."""
        if width <= 0 or height <= 0:
            raise ValueError(f"buffer dimensions must be positive, got {width}x{height}")
        return cls(np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_samples(
        cls, width: int, height: int, samples: "Sequence[int] | bytes"
    ) -> "PixelBuffer":
        """Build a buffer from flat interleaved RGBA samples.

        Raises:
            ValueError: If len(samples) != width * height * 4
        """
        flat = np.asarray(bytearray(samples) if isinstance(samples, bytes) else samples)
        expected = width * height * CHANNELS
        if flat.size != expected:
            raise ValueError(
                f"expected {expected} samples for {width}x{height}, got {flat.size}"
            )
        if flat.size and (flat.min() < 0 or flat.max() > 255):
            raise ValueError("samples must be in the range 0-255")
        return cls(flat.astype(np.uint8).reshape(height, width, CHANNELS))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Wrap a decoded PIL image, converting it to RGBA first."""
        # AIDEV-NOTE: Always convert to RGBA for consistent processing
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image, dtype=np.uint8))

    # --- Read access ---

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> "tuple[int, int]":
        """(width, height), the same order PIL uses."""
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width, 4) view of the samples."""
        return self._pixels

    @property
    def samples(self) -> np.ndarray:
        """Read-only flat view, length width * height * 4."""
        return self._pixels.reshape(-1)

    def pixel(self, x: int, y: int) -> "tuple[int, int, int, int]":
        """RGBA tuple at column x, row y.

        Raises:
            IndexError: If the coordinate lies outside the buffer
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        r, g, b, a = self._pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def to_image(self) -> Image.Image:
        """Copy the samples into a new RGBA PIL image."""
        return Image.frombytes("RGBA", self.size, self._pixels.tobytes())

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._pixels)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
