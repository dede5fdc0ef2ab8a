import logging

import numpy as np
import pytest

from filmcolor.io.ingest import (
    linear_image_from_planes,
    normalize_white_level,
    placeholder_linear_image,
    subtract_black_level,
)
from filmcolor.models.image import SourceMetadata


def test_subtract_black_level_floors_at_zero() -> None:
    result = subtract_black_level(np.array([100, 512, 1000], dtype=np.uint16), 512)
    assert result.dtype == np.float32
    np.testing.assert_array_equal(result, [0.0, 0.0, 488.0])


def test_normalize_white_level_maps_range_to_unit() -> None:
    samples = np.array([0, 512, 8447.5, 16383], dtype=np.float32)
    result = normalize_white_level(samples, 512, 16383)
    np.testing.assert_allclose(result, [0.0, 0.0, 0.5, 1.0], atol=1e-6)


def test_degenerate_white_level_yields_black(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="filmcolor.io.ingest"):
        result = normalize_white_level(np.array([10.0, 20.0]), 100, 100)
    assert not result.any()
    assert "not above black level" in caplog.text


def test_linear_image_from_planes_uses_metadata_levels() -> None:
    metadata = SourceMetadata(width=2, height=2, black_level=64, white_level=1023)
    plane = np.array([[64, 1023], [543.5, 0]], dtype=np.float32)
    buffer = linear_image_from_planes(plane, plane, plane, metadata)
    assert (buffer.width, buffer.height) == (2, 2)
    assert buffer.pixel(0, 0) == (0.0, 0.0, 0.0)
    assert buffer.pixel(1, 0) == pytest.approx((1.0, 1.0, 1.0))
    assert buffer.pixel(0, 1)[0] == pytest.approx(0.5)


def test_placeholder_is_constant_grey() -> None:
    buffer = placeholder_linear_image(SourceMetadata(width=5, height=4))
    assert buffer.pixel_count == 20
    assert set(buffer.g.tolist()) == {0.5}
