"""Boundary between RAW ingestion and the colour kernel.

Real sensor decoding and demosaicing are not part of this package.  These
helpers cover the contract the kernel relies on: raw samples have their black
level removed and are scaled by the white level into normalised linear light
before an :class:`~filmcolor.models.image.ImageBuffer` is built.
"""

from __future__ import annotations

import logging

import numpy as np

from ..config import EPSILON
from ..models.image import ImageBuffer, SourceMetadata

LOGGER = logging.getLogger(__name__)


def subtract_black_level(samples: np.ndarray, black_level: float) -> np.ndarray:
    """Return *samples* minus *black_level*, floored at zero, as ``float32``."""

    data = np.asarray(samples, dtype=np.float32)
    return np.maximum(data - np.float32(black_level), np.float32(0.0))


def normalize_white_level(
    samples: np.ndarray, black_level: float, white_level: float
) -> np.ndarray:
    """Map raw samples onto ``[0, ~1]`` linear light.

    A degenerate range (white level not above black level) yields zeros
    instead of dividing by zero.
    """

    pedestal_free = subtract_black_level(samples, black_level)
    span = float(white_level) - float(black_level)
    if span <= EPSILON:
        LOGGER.warning(
            "White level %.1f is not above black level %.1f; producing black",
            white_level,
            black_level,
        )
        return np.zeros_like(pedestal_free)
    return pedestal_free * np.float32(1.0 / span)


def linear_image_from_planes(
    r: np.ndarray,
    g: np.ndarray,
    b: np.ndarray,
    metadata: SourceMetadata,
) -> ImageBuffer:
    """Build a normalised buffer from demosaiced raw planes."""

    planes = [
        normalize_white_level(plane, metadata.black_level, metadata.white_level).ravel()
        for plane in (r, g, b)
    ]
    return ImageBuffer(metadata.width, metadata.height, *planes)


def placeholder_linear_image(metadata: SourceMetadata, value: float = 0.5) -> ImageBuffer:
    """Return a constant grey buffer sized from *metadata*.

    Stands in for a decoder that is not available so the rest of the pipeline
    can still be exercised end to end.
    """

    LOGGER.info(
        "Using placeholder %dx%d buffer (value=%.3f) in place of RAW decode",
        metadata.width,
        metadata.height,
        value,
    )
    return ImageBuffer.blank(metadata.width, metadata.height, fill=value)


__all__ = [
    "linear_image_from_planes",
    "normalize_white_level",
    "placeholder_linear_image",
    "subtract_black_level",
]
