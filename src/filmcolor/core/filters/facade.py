"""Facade module coordinating the correction executors.

This module provides the main public API for the colour kernel.  It resolves
every per-call scalar once (white-balance gains, clamped grading parameters),
selects the executor and hands the buffer over to be mutated in place.  The
pipeline order is fixed: white balance first, then grading.  Grading weights
are derived from the luminance that white balance leaves behind.
"""

from __future__ import annotations

import logging
from typing import Optional

from ...config import BACKENDS, DEFAULT_BACKEND
from ...models.image import ImageBuffer
from ..grading_resolver import GradingParams
from ..wb_resolver import WBParams, apply_wb_pixel, resolve_gain
from . import jit_executor, numpy_executor

logger = logging.getLogger(__name__)

_EXECUTORS = {
    "jit": jit_executor,
    "numpy": numpy_executor,
}

_active_backend = DEFAULT_BACKEND


def set_default_backend(name: str) -> None:
    """Select the executor used when callers do not pass ``backend``."""

    global _active_backend
    _active_backend = _resolve_backend(name)


def get_default_backend() -> str:
    return _active_backend


def _resolve_backend(name: Optional[str]) -> str:
    backend = _active_backend if name is None else str(name).lower()
    if backend not in _EXECUTORS:
        raise ValueError(f"unknown backend {name!r}; expected one of {BACKENDS}")
    return backend


def apply_white_balance(
    buffer: ImageBuffer,
    temperature_shift: float,
    tint_shift: float,
    backend: Optional[str] = None,
) -> ImageBuffer:
    """Apply temperature and tint to *buffer* in place and return it.

    Only chroma changes: each pixel is rescaled to its original luminance after
    the gains are applied.  Shifts are clamped to ``[-100, 100]``.
    """

    params = WBParams(float(temperature_shift), float(tint_shift)).clamped()
    if params.is_identity():
        logger.debug("White balance is identity; skipping")
        return buffer

    name = _resolve_backend(backend)
    gain = resolve_gain(params)
    logger.debug(
        "White balance temperature=%.2f tint=%.2f gain=(%.4f, %.4f, %.4f) backend=%s",
        params.temperature,
        params.tint,
        gain[0],
        gain[1],
        gain[2],
        name,
    )
    _EXECUTORS[name].apply_white_balance_buffer(buffer, gain)
    return buffer


def apply_white_balance_pixel(
    r: float,
    g: float,
    b: float,
    temperature_shift: float,
    tint_shift: float,
) -> tuple[float, float, float]:
    """Return a white-balanced copy of one pixel."""

    return apply_wb_pixel(r, g, b, WBParams(temperature_shift, tint_shift).clamped())


def apply_grading(
    buffer: ImageBuffer,
    params: GradingParams,
    backend: Optional[str] = None,
) -> ImageBuffer:
    """Apply three-way grading to *buffer* in place and return it."""

    params = params.clamped()
    if params.is_identity():
        logger.debug("Grading is identity; skipping")
        return buffer

    name = _resolve_backend(backend)
    logger.debug(
        "Grading blending=%.2f balance=%.2f backend=%s",
        params.blending,
        params.balance,
        name,
    )
    _EXECUTORS[name].apply_grading_buffer(
        buffer,
        params.shadow,
        params.midtone,
        params.highlight,
        params.blending,
        params.balance,
    )
    return buffer


def process_image(
    buffer: ImageBuffer,
    white_balance: Optional[WBParams] = None,
    grading: Optional[GradingParams] = None,
    backend: Optional[str] = None,
) -> ImageBuffer:
    """Run the optional correction stages over *buffer* in pipeline order."""

    if white_balance is not None:
        apply_white_balance(buffer, white_balance.temperature, white_balance.tint, backend)
    if grading is not None:
        apply_grading(buffer, grading, backend)
    return buffer


__all__ = [
    "apply_grading",
    "apply_white_balance",
    "apply_white_balance_pixel",
    "get_default_backend",
    "process_image",
    "set_default_backend",
]
