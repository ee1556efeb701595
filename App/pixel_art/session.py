"""Editing session: the current image, parameters and processed result.

AIDEV-NOTE: State lives in frozen EditorState records. Every change swaps in
a new record with version + 1 and a freshly computed processed buffer, so a
caller holding an older state never sees it change underneath them.
"""

import logging
from dataclasses import replace
from pathlib import Path

import numpy as np

from models import EditorState, ExportFormat, FilterParameters

from .buffer import PixelBuffer
from .errors import DecodeError
from .export import encode, encode_png, encode_svg, write_export
from .noise import make_rng
from .processor import ImageProcessor, ImageSource, run

logger = logging.getLogger(__name__)


class EditorSession:
    """Holds one image and its pixel art settings between edits."""

    def __init__(
        self,
        parameters: FilterParameters | None = None,
        processor: ImageProcessor | None = None,
    ):
        self.processor = processor or ImageProcessor()
        self._state = EditorState(parameters=parameters or FilterParameters())

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def parameters(self) -> FilterParameters:
        return self._state.parameters

    @property
    def processed(self) -> PixelBuffer | None:
        """Latest pipeline output, or None when no image is loaded."""
        return self._state.processed

    @property
    def has_image(self) -> bool:
        return self._state.has_image

    # --- State transitions ---

    def _commit(self, source: PixelBuffer | None, parameters: FilterParameters) -> EditorState:
        processed = None
        if source is not None:
            processed = run(parameters, source, self.processor.rng)
        self._state = EditorState(
            version=self._state.version + 1,
            parameters=parameters,
            source=source,
            processed=processed,
        )
        return self._state

    def load(self, source: ImageSource) -> EditorState:
        """Decode an image and process it with the current parameters.

        Raises:
            DecodeError: If decoding fails; the session is left with no image
        """
        try:
            buffer = self.processor.load_image(source)
        except DecodeError:
            self._commit(None, self.parameters)
            raise
        return self._commit(buffer, self.parameters)

    def set_parameters(self, parameters: FilterParameters) -> EditorState:
        return self._commit(self._state.source, parameters)

    def set_pixel_size(self, pixel_size: int) -> EditorState:
        return self.set_parameters(replace(self.parameters, pixel_size=pixel_size))

    def set_noise_level(self, noise_level: int) -> EditorState:
        return self.set_parameters(replace(self.parameters, noise_level=noise_level))

    def reset(self) -> EditorState:
        """Restore the default pixel size and noise level."""
        return self.set_parameters(FilterParameters())

    def reroll(self, rng: "np.random.Generator | int | None" = None) -> EditorState:
        """Re-run the pipeline with the same inputs to draw fresh noise."""
        if rng is not None:
            self.processor.rng = make_rng(rng)
        return self._commit(self._state.source, self.parameters)

    # --- Export ---

    def export_png(self) -> bytes | None:
        """PNG bytes of the processed image, or None without an image."""
        if self.processed is None:
            return None
        return encode_png(self.processed)

    def export_svg(self) -> str | None:
        """SVG document of the processed image, or None without an image."""
        if self.processed is None:
            return None
        return encode_svg(self.processed)

    def save(self, path: str | Path | None = None, fmt: ExportFormat | None = None) -> Path | None:
        """Write the processed image to disk.

        Args:
            path: Target file; defaults to the suggested filename for fmt
            fmt: Export format; inferred from the path suffix if None

        Returns:
            The written path, or None when no image is loaded

        Raises:
            EncodeError: If encoding or writing fails; session state is kept
        """
        if self.processed is None:
            logger.info("No image loaded, nothing to export")
            return None

        if fmt is None:
            fmt = format_for_path(path)
        target = Path(path) if path is not None else Path(fmt.filename)

        return write_export(target, encode(self.processed, fmt))


def format_for_path(path: str | Path | None) -> ExportFormat:
    """Pick the export format from a file suffix, defaulting to PNG."""
    if path is not None and Path(path).suffix.lower() == ".svg":
        return ExportFormat.SVG
    return ExportFormat.PNG
