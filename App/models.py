"""Data models and constants for the pixel art editor."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pixel_art.buffer import PixelBuffer

# AIDEV-NOTE: Slider ranges from the editor UI - keep in sync with the CLI help
MIN_PIXEL_SIZE = 1
MAX_PIXEL_SIZE = 50
MIN_NOISE_LEVEL = 0  # percent
MAX_NOISE_LEVEL = 100  # percent

DEFAULT_PIXEL_SIZE = 8
DEFAULT_NOISE_LEVEL = 0

# Suggested download names
PNG_FILENAME = "pixel-art.png"
SVG_FILENAME = "pixel-art.svg"


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Clamp an integer into [minimum, maximum]."""
    return max(minimum, min(maximum, int(value)))


class ExportFormat(Enum):
    """Supported export artifacts."""

    PNG = "png"
    SVG = "svg"

    @property
    def filename(self) -> str:
        """Suggested filename for this format."""
        return PNG_FILENAME if self is ExportFormat.PNG else SVG_FILENAME


@dataclass(frozen=True)
class FilterParameters:
    """Pixelation and noise settings for one pipeline run.

    AIDEV-NOTE: Values are clamped on construction instead of rejected, so
    callers can pass raw slider or CLI input straight through.
    """

    pixel_size: int = DEFAULT_PIXEL_SIZE  # edge of one art pixel, 1-50
    noise_level: int = DEFAULT_NOISE_LEVEL  # percent, 0-100

    def __post_init__(self):
        object.__setattr__(
            self, "pixel_size", clamp(self.pixel_size, MIN_PIXEL_SIZE, MAX_PIXEL_SIZE)
        )
        object.__setattr__(
            self,
            "noise_level",
            clamp(self.noise_level, MIN_NOISE_LEVEL, MAX_NOISE_LEVEL),
        )


@dataclass(frozen=True)
class EditorState:
    """One version of the editing session.

    Every image load or parameter change produces a new state with a higher
    version number; nothing inside a state is mutated afterwards.
    """

    version: int = 0
    parameters: FilterParameters = field(default_factory=FilterParameters)
    source: "Optional[PixelBuffer]" = None  # decoded upload
    processed: "Optional[PixelBuffer]" = None  # pipeline output

    @property
    def has_image(self) -> bool:
        return self.source is not None
