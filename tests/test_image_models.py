import numpy as np
import pytest

from filmcolor.errors import InvalidImageBufferError
from filmcolor.models.image import CfaPattern, ImageBuffer, SourceMetadata


def test_blank_buffer_has_planar_float32_channels() -> None:
    buffer = ImageBuffer.blank(4, 3, fill=0.25)
    assert buffer.pixel_count == 12
    for plane in (buffer.r, buffer.g, buffer.b):
        assert plane.dtype == np.float32
        assert plane.shape == (12,)
        assert plane.flags.c_contiguous
    assert buffer.pixel(3, 2) == pytest.approx((0.25, 0.25, 0.25))


def test_planes_are_coerced_to_float32() -> None:
    buffer = ImageBuffer(2, 1, [0, 1], [0.5, 0.5], np.array([1, 2], dtype=np.int64))
    assert buffer.b.dtype == np.float32
    assert buffer.pixel(1, 0) == (1.0, 0.5, 2.0)


def test_mismatched_plane_size_is_rejected() -> None:
    with pytest.raises(InvalidImageBufferError):
        ImageBuffer(2, 2, np.zeros(4), np.zeros(4), np.zeros(3))


def test_multidimensional_plane_is_rejected() -> None:
    with pytest.raises(InvalidImageBufferError):
        ImageBuffer(2, 2, np.zeros((2, 2)), np.zeros(4), np.zeros(4))


def test_negative_dimensions_are_rejected() -> None:
    with pytest.raises(InvalidImageBufferError):
        ImageBuffer(-1, 2, [], [], [])


def test_row_major_indexing() -> None:
    buffer = ImageBuffer.blank(3, 2)
    buffer.set_pixel(2, 1, (0.1, 0.2, 0.3))
    assert buffer.r[1 * 3 + 2] == pytest.approx(0.1)
    assert buffer.pixel(2, 1) == pytest.approx((0.1, 0.2, 0.3))
    with pytest.raises(IndexError):
        buffer.pixel(3, 0)


def test_interleaved_round_trip(rng: np.random.Generator) -> None:
    pixels = rng.random((5, 7, 3), dtype=np.float32)
    buffer = ImageBuffer.from_interleaved(pixels)
    assert (buffer.width, buffer.height) == (7, 5)
    assert buffer.pixel(6, 4) == pytest.approx(tuple(pixels[4, 6]))
    np.testing.assert_array_equal(buffer.to_interleaved(), pixels)


def test_from_interleaved_requires_three_channels() -> None:
    with pytest.raises(InvalidImageBufferError):
        ImageBuffer.from_interleaved(np.zeros((2, 2)))


def test_copy_is_independent() -> None:
    buffer = ImageBuffer.blank(2, 2, fill=0.5)
    clone = buffer.copy()
    clone.set_pixel(0, 0, (1.0, 1.0, 1.0))
    assert buffer.pixel(0, 0) == (0.5, 0.5, 0.5)


def test_luminance_uses_rec709_weights() -> None:
    buffer = ImageBuffer(1, 1, [1.0], [0.0], [0.0])
    assert buffer.luminance()[0] == pytest.approx(0.2126)


def test_source_metadata_defaults() -> None:
    metadata = SourceMetadata(width=6000, height=4000)
    assert metadata.cfa_pattern is CfaPattern.RGGB
    assert metadata.white_level > metadata.black_level
    assert len(metadata.color_matrix) == 9
    assert CfaPattern("BGGR") is CfaPattern.BGGR
