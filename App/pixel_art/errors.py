"""Exceptions raised at the decode and encode boundaries."""


class PixelArtError(Exception):
    """Base class for pixel art pipeline errors."""


class DecodeError(PixelArtError, ValueError):
    """The input could not be decoded into a pixel buffer."""


class EncodeError(PixelArtError, RuntimeError):
    """A buffer could not be encoded or written as an export artifact."""
