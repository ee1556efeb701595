import numpy as np

from conftest import make_gradient
from pixel_art import PixelBuffer, pixelate
from pixel_art.pixelation import reduced_grid_size


def test_pixel_size_one_is_identity(gradient):
    assert pixelate(gradient, 1) == gradient


def test_output_keeps_dimensions():
    source = make_gradient(37, 23)
    result = pixelate(source, 6)
    assert result.size == (37, 23)


def test_ten_by_ten_blocks(gradient):
    result = pixelate(gradient, 10)
    pixels = result.pixels
    for by in range(10):
        for bx in range(10):
            block = pixels[by * 10:(by + 1) * 10, bx * 10:(bx + 1) * 10]
            assert (block == block[0, 0]).all()
    # Neighbouring blocks differ, so the edges are hard rather than blended
    assert not np.array_equal(pixels[0, 9], pixels[0, 10])
    assert len(np.unique(pixels.reshape(-1, 4), axis=0)) == 100


def test_block_colour_is_average_of_source_block():
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[0, 0, :3] = 100
    pixels[1, 1, :3] = 200
    result = pixelate(PixelBuffer(pixels), 2)
    assert result.pixel(0, 0) == (75, 75, 75, 255)
    assert (result.pixels == result.pixels[0, 0]).all()


def test_oversized_pixel_size_collapses_to_single_colour():
    source = make_gradient(4, 4)
    result = pixelate(source, 50)
    assert len(np.unique(result.pixels.reshape(-1, 4), axis=0)) == 1


def test_reduced_grid_clamps_to_one():
    assert reduced_grid_size(4, 4, 50) == (1, 1)
    assert reduced_grid_size(100, 3, 10) == (10, 1)
    assert reduced_grid_size(25, 25, 10) == (2, 2)


def test_out_of_range_pixel_size_is_clamped(gradient):
    assert pixelate(gradient, 0) == gradient
    assert pixelate(gradient, 500) == pixelate(gradient, 50)


def test_block_count_bound():
    source = make_gradient(45, 33)
    k = 8
    result = pixelate(source, k)
    colours = np.unique(result.pixels.reshape(-1, 4), axis=0)
    assert len(colours) <= -(-45 // k) * -(-33 // k)


def test_source_is_not_modified(gradient):
    before = gradient.pixels.copy()
    pixelate(gradient, 7)
    assert np.array_equal(gradient.pixels, before)


def run_lengths(row: np.ndarray) -> "list[int]":
    """Lengths of consecutive runs of identical RGBA values."""
    lengths = [1]
    for prev, cur in zip(row[:-1], row[1:]):
        if np.array_equal(prev, cur):
            lengths[-1] += 1
        else:
            lengths.append(1)
    return lengths


def test_uneven_size_stretches_floor_grid():
    source = make_gradient(25, 25)
    result = pixelate(source, 10)
    assert run_lengths(result.pixels[0]) == [13, 12]
    assert run_lengths(result.pixels[:, 0]) == [13, 12]
