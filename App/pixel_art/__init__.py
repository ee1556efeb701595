"""Image transform pipeline for photo-to-pixel-art conversion.

AIDEV-NOTE: This package handles the complete pipeline from a decoded
image to exported pixel art. Organized into modular components:
- buffer: Immutable RGBA PixelBuffer model
- pixelation: Block downsample + nearest-neighbor upsample filter
- noise: Bernoulli-gated additive noise filter
- processor: ImageProcessor (decode) and the run() pipeline
- export: PNG and SVG encoders, atomic file writes
- session: EditorSession holding versioned editor state
"""

import logging

from .buffer import PixelBuffer
from .errors import DecodeError, EncodeError, PixelArtError
from .export import encode_png, encode_svg, write_export
from .noise import apply_noise
from .pixelation import pixelate
from .processor import ImageProcessor, run
from .session import EditorSession

# Package logger - silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DecodeError",
    "EditorSession",
    "EncodeError",
    "ImageProcessor",
    "PixelArtError",
    "PixelBuffer",
    "apply_noise",
    "encode_png",
    "encode_svg",
    "pixelate",
    "run",
    "write_export",
]
