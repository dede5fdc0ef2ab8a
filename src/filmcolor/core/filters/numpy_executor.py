"""NumPy vectorized executor for buffer corrections.

This module mirrors the per-pixel kernels in :mod:`.algorithms` with whole-
array NumPy operations.  It is selected with ``backend="numpy"`` and is useful
where Numba's threading layer is unavailable or when comparing results
against the JIT path.  Unlike the JIT kernels it allocates full-size
temporaries while it works; results are written back into the caller's
planes.
"""

from __future__ import annotations

import numpy as np

from ...config import EPSILON, LUMA_WEIGHTS, REGION_WIDTH
from ...models.image import ImageBuffer
from .algorithms import LMS_TO_RGB, RGB_TO_LMS, region_centers

Triple = tuple[float, float, float]


def _np_luminance(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


def _np_gaussian(x: np.ndarray, center: float, width: float) -> np.ndarray:
    diff = x - center
    return np.exp(-(diff * diff) / (2.0 * width * width))


def np_region_weights(
    luminance: np.ndarray, balance: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorised equivalent of :func:`.algorithms.region_weights`."""

    lum = np.clip(np.asarray(luminance, dtype=np.float64), 0.0, 1.0)
    shadow_center, midtone_center, highlight_center = region_centers(float(balance))

    sw = _np_gaussian(lum, shadow_center, REGION_WIDTH)
    mw = _np_gaussian(lum, midtone_center, REGION_WIDTH)
    hw = _np_gaussian(lum, highlight_center, REGION_WIDTH)

    total = sw + mw + hw
    valid = total > 0.0
    safe_total = np.where(valid, total, 1.0)
    shadow = np.where(valid, sw / safe_total, 0.0)
    midtone = np.where(valid, mw / safe_total, 1.0)
    highlight = np.where(valid, hw / safe_total, 0.0)
    return shadow, midtone, highlight


def apply_white_balance_buffer(buffer: ImageBuffer, gain: Triple) -> None:
    """Apply luminance-preserving per-channel *gain* to *buffer* in place."""

    if buffer.pixel_count == 0:
        return

    r_plane, g_plane, b_plane = buffer.writable_planes()

    r = buffer.r.astype(np.float64)
    g = buffer.g.astype(np.float64)
    b = buffer.b.astype(np.float64)

    original = _np_luminance(r, g, b)
    r *= gain[0]
    g *= gain[1]
    b *= gain[2]

    current = _np_luminance(r, g, b)
    restore = (current > EPSILON) & (original > EPSILON)
    ratio = np.where(restore, original / np.where(restore, current, 1.0), 1.0)

    np.maximum(r * ratio, 0.0, out=r)
    np.maximum(g * ratio, 0.0, out=g)
    np.maximum(b * ratio, 0.0, out=b)

    r_plane[:] = r
    g_plane[:] = g
    b_plane[:] = b


def apply_grading_buffer(
    buffer: ImageBuffer,
    shadow: Triple,
    midtone: Triple,
    highlight: Triple,
    blending: float,
    balance: float,
) -> None:
    """Add the region-weighted LMS offset to every pixel of *buffer*."""

    if buffer.pixel_count == 0:
        return

    r_plane, g_plane, b_plane = buffer.writable_planes()
    rgb = np.stack([r_plane, g_plane, b_plane], axis=0).astype(np.float64)

    lum = np.clip(_np_luminance(rgb[0], rgb[1], rgb[2]), 0.0, 1.0)
    sw, mw, hw = np_region_weights(lum, balance)

    offsets = np.array([shadow, midtone, highlight], dtype=np.float64)
    weights = np.stack([sw, mw, hw], axis=0)
    # (3 regions, 3 channels)^T @ (3 regions, N) -> (3 channels, N)
    adjust = offsets.T @ weights

    lms = RGB_TO_LMS @ rgb
    lms += adjust * float(blending)
    result = LMS_TO_RGB @ lms
    np.maximum(result, 0.0, out=result)

    r_plane[:] = result[0]
    g_plane[:] = result[1]
    b_plane[:] = result[2]
