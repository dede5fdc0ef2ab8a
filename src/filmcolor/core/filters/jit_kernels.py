"""JIT-compiled kernels for whole-buffer processing.

These kernels walk the planar channels with ``numba.prange`` so Numba can tile
the image across threads.  Every pixel only reads the scalars passed in and
writes its own index, so no synchronisation is required.  All per-call
scalars, including the grading region centres, must be resolved by the caller before the kernel runs.
"""

from __future__ import annotations

import numpy as np
from numba import jit, prange

from .algorithms import apply_gain_preserving_luminance, apply_grading_pixel


@jit(nopython=True, cache=True, parallel=True)
def _apply_white_balance_planar(
    r_plane: np.ndarray,
    g_plane: np.ndarray,
    b_plane: np.ndarray,
    gain_r: float,
    gain_g: float,
    gain_b: float,
) -> None:
    """JIT-compiled luminance-preserving gain kernel."""
    count = r_plane.shape[0]
    for i in prange(count):
        r, g, b = apply_gain_preserving_luminance(
            r_plane[i],
            g_plane[i],
            b_plane[i],
            gain_r,
            gain_g,
            gain_b,
        )
        r_plane[i] = r
        g_plane[i] = g
        b_plane[i] = b


@jit(nopython=True, cache=True, parallel=True)
def _apply_grading_planar(
    r_plane: np.ndarray,
    g_plane: np.ndarray,
    b_plane: np.ndarray,
    shadow_r: float,
    shadow_g: float,
    shadow_b: float,
    midtone_r: float,
    midtone_g: float,
    midtone_b: float,
    highlight_r: float,
    highlight_g: float,
    highlight_b: float,
    blending: float,
    shadow_center: float,
    midtone_center: float,
    highlight_center: float,
) -> None:
    """JIT-compiled three-way grading kernel."""
    count = r_plane.shape[0]
    for i in prange(count):
        r, g, b = apply_grading_pixel(
            r_plane[i],
            g_plane[i],
            b_plane[i],
            shadow_r,
            shadow_g,
            shadow_b,
            midtone_r,
            midtone_g,
            midtone_b,
            highlight_r,
            highlight_g,
            highlight_b,
            blending,
            shadow_center,
            midtone_center,
            highlight_center,
        )
        r_plane[i] = r
        g_plane[i] = g
        b_plane[i] = b
