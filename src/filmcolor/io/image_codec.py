"""Pillow-backed conversion between 8-bit sRGB files and linear buffers."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import ImageReadError, ImageWriteError
from ..models.image import ImageBuffer

_LOGGER = logging.getLogger(__name__)


def srgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """Decode the IEC 61966-2-1 transfer curve."""

    srgb = np.asarray(srgb, dtype=np.float32)
    below = srgb <= 0.04045
    out = np.empty_like(srgb)
    out[below] = srgb[below] / 12.92
    out[~below] = ((srgb[~below] + 0.055) / 1.055) ** 2.4
    return out


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Encode linear light with the sRGB transfer curve (input clipped to [0, 1])."""

    linear = np.clip(np.asarray(linear, dtype=np.float32), 0.0, 1.0)
    below = linear <= 0.0031308
    out = np.empty_like(linear)
    out[below] = linear[below] * 12.92
    out[~below] = 1.055 * (linear[~below] ** (1.0 / 2.4)) - 0.055
    return out


def load_image(path: Path) -> ImageBuffer:
    """Decode *path* into a linear-light :class:`ImageBuffer`."""

    try:
        with Image.open(path) as image:
            rgb = np.asarray(image.convert("RGB"), dtype=np.float32)
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageReadError(f"cannot read image {path}: {exc}") from exc

    _LOGGER.debug("Loaded %s (%dx%d)", path, rgb.shape[1], rgb.shape[0])
    return ImageBuffer.from_interleaved(srgb_to_linear(rgb / 255.0))


def save_image(path: Path, buffer: ImageBuffer) -> None:
    """Encode *buffer* to 8-bit sRGB and write it to *path*."""

    encoded = linear_to_srgb(buffer.to_interleaved())
    pixels = np.rint(encoded * 255.0).astype(np.uint8)
    try:
        Image.fromarray(pixels).save(path)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageWriteError(f"cannot write image {path}: {exc}") from exc
    _LOGGER.debug("Saved %s (%dx%d)", path, buffer.width, buffer.height)


__all__ = ["linear_to_srgb", "load_image", "save_image", "srgb_to_linear"]
