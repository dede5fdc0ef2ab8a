"""JIT-accelerated buffer executor using Numba.

This module is the fastest execution path: it hands the planar channels of an
:class:`~filmcolor.models.image.ImageBuffer` straight to the parallel kernels
in :mod:`.jit_kernels`, which mutate them in place without allocating.
"""

from __future__ import annotations

import logging

from ...models.image import ImageBuffer
from .algorithms import region_centers
from .jit_kernels import _apply_grading_planar, _apply_white_balance_planar

logger = logging.getLogger(__name__)

Triple = tuple[float, float, float]


def apply_white_balance_buffer(buffer: ImageBuffer, gain: Triple) -> None:
    """Mutate *buffer* in place with the luminance-preserving gain kernel."""

    if buffer.pixel_count == 0:
        return

    r_plane, g_plane, b_plane = buffer.writable_planes()
    logger.debug("JIT white balance over %d pixels", buffer.pixel_count)
    _apply_white_balance_planar(
        r_plane,
        g_plane,
        b_plane,
        float(gain[0]),
        float(gain[1]),
        float(gain[2]),
    )


def apply_grading_buffer(
    buffer: ImageBuffer,
    shadow: Triple,
    midtone: Triple,
    highlight: Triple,
    blending: float,
    balance: float,
) -> None:
    """Mutate *buffer* in place with the three-way grading kernel."""

    if buffer.pixel_count == 0:
        return

    r_plane, g_plane, b_plane = buffer.writable_planes()
    shadow_center, midtone_center, highlight_center = region_centers(float(balance))
    logger.debug("JIT grading over %d pixels", buffer.pixel_count)
    _apply_grading_planar(
        r_plane,
        g_plane,
        b_plane,
        float(shadow[0]),
        float(shadow[1]),
        float(shadow[2]),
        float(midtone[0]),
        float(midtone[1]),
        float(midtone[2]),
        float(highlight[0]),
        float(highlight[1]),
        float(highlight[2]),
        float(blending),
        shadow_center,
        midtone_center,
        highlight_center,
    )
