import numpy as np
import pytest

from pixel_art import PixelBuffer


def make_gradient(width: int, height: int, alpha: int = 255) -> PixelBuffer:
    """Smooth RGB ramps so every pixel differs from its neighbours."""
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = (xs * 255 // max(1, width - 1)).astype(np.uint8)
    pixels[..., 1] = (ys * 255 // max(1, height - 1)).astype(np.uint8)
    pixels[..., 2] = ((xs + ys) * 7 % 256).astype(np.uint8)
    pixels[..., 3] = alpha
    return PixelBuffer(pixels)


@pytest.fixture
def gradient():
    return make_gradient(100, 100)


@pytest.fixture
def translucent():
    """Buffer with varying alpha to check it passes through untouched."""
    buffer = make_gradient(32, 24)
    pixels = buffer.pixels.copy()
    pixels[..., 3] = np.arange(32 * 24, dtype=np.uint32).reshape(24, 32) % 256
    return PixelBuffer(pixels)


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "input.png"
    make_gradient(40, 30).to_image().save(path)
    return path
