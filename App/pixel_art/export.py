"""PNG and SVG export of processed buffers.

AIDEV-NOTE: The SVG export is a wrapper around the PNG bytes (base64 data
URI), not vector tracing. image-rendering="pixelated" keeps viewers from
smoothing the blocks when the SVG is scaled.
"""

import base64
import io
import logging
import os
import tempfile
from pathlib import Path

import svg

from models import ExportFormat

from .buffer import PixelBuffer
from .errors import EncodeError

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def encode_png(buffer: PixelBuffer) -> bytes:
    """Encode a buffer as a lossless RGBA PNG at 1:1 scale.

    Raises:
        EncodeError: If Pillow cannot produce the PNG stream
    """
    stream = io.BytesIO()
    try:
        buffer.to_image().save(stream, format="PNG")
    except (OSError, ValueError) as e:
        logger.warning("PNG encoding failed: %s", e)
        raise EncodeError(f"Failed to encode PNG: {e}") from e
    return stream.getvalue()


def png_data_uri(buffer: PixelBuffer) -> str:
    """PNG encoding of the buffer as a data: URI."""
    b64 = base64.b64encode(encode_png(buffer)).decode("ascii")
    return f"data:image/png;base64,{b64}"


def encode_svg(buffer: PixelBuffer) -> str:
    """Wrap the buffer in an SVG document.

    Args:
        buffer: Processed buffer to export

    Returns:
        SVG content as string, sized width x height with a matching viewBox

    Raises:
        EncodeError: If the embedded PNG cannot be produced
    """
    width, height = buffer.size
    document = svg.SVG(
        width=width,
        height=height,
        viewBox=svg.ViewBoxSpec(0, 0, width, height),
        elements=[
            svg.Image(
                width=width,
                height=height,
                href=png_data_uri(buffer),
                image_rendering="pixelated",
            )
        ],
    )
    return XML_DECLARATION + document.as_str()


def encode(buffer: PixelBuffer, fmt: ExportFormat) -> bytes:
    """Encode a buffer in the given format as raw file bytes."""
    if fmt is ExportFormat.PNG:
        return encode_png(buffer)
    return encode_svg(buffer).encode("utf-8")


def current_umask() -> int:
    """Process umask (os.umask can only be read by setting it)."""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_export(path: str | Path, data: bytes | str) -> Path:
    """Write an export artifact without ever leaving a partial file.

    The data goes to a temporary file next to the target and is renamed into
    place once fully written. The temporary file is removed on failure.

    Raises:
        EncodeError: If the file cannot be written
    """
    target = Path(path)
    payload = data.encode("utf-8") if isinstance(data, str) else data
    directory = target.parent if str(target.parent) else Path(".")

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=directory, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
        # Temp files are created 0600; give the export normal file permissions
        os.chmod(tmp_name, 0o666 & ~current_umask())
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        logger.warning("Writing %s failed: %s", target, e)
        raise EncodeError(f"Failed to write {target}: {e}") from e

    logger.info("Wrote %d bytes to %s", len(payload), target)
    return target
