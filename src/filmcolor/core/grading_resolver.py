"""Three-way colour grading data structures and helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

import numpy as np

from ..config import (
    GRADING_BLUE_RATIO,
    GRADING_IDENTITY,
    GRADING_OFFSET_LIMIT,
    GRADING_SLIDER_THRESHOLD,
    GRADING_TEMPERATURE_SCALE,
    GRADING_TINT_SCALE,
)
from .filters import algorithms

Triple = tuple[float, float, float]
Slider = tuple[float, float]

ZERO_OFFSET: Triple = (0.0, 0.0, 0.0)

RGB_TO_LMS: np.ndarray = algorithms.RGB_TO_LMS
LMS_TO_RGB: np.ndarray = algorithms.LMS_TO_RGB


def _clamp(value: float, low: float, high: float, fallback: float = 0.0) -> float:
    value = float(value)
    if not math.isfinite(value):
        return fallback
    return max(low, min(high, value))


def _clamp_offset(offset: Triple) -> Triple:
    limit = GRADING_OFFSET_LIMIT
    return tuple(_clamp(component, -limit, limit) for component in offset)  # type: ignore[return-value]


def _parse_offset(raw: Any) -> Triple:
    if raw is None:
        return ZERO_OFFSET
    values = [float(v) for v in raw]
    if len(values) != 3:
        raise ValueError(f"grading offsets need three components, got {len(values)}")
    return values[0], values[1], values[2]


@dataclass(frozen=True)
class GradingParams:
    """Complete three-way grading parameters.

    ``shadow``, ``midtone`` and ``highlight`` are RGB offsets in ``[-1, 1]``
    that are added in LMS space.  ``blending`` scales the whole effect and
    ``balance`` slides the region boundaries towards the highlights
    (positive) or the shadows (negative).
    """

    shadow: Triple = field(default=ZERO_OFFSET)
    midtone: Triple = field(default=ZERO_OFFSET)
    highlight: Triple = field(default=ZERO_OFFSET)
    blending: float = 1.0
    balance: float = 0.0

    def is_identity(self) -> bool:
        """Return True when applying the grade cannot change a pixel."""

        if abs(self.blending) < GRADING_IDENTITY:
            return True
        for offset in (self.shadow, self.midtone, self.highlight):
            for component in offset:
                if abs(component) >= GRADING_IDENTITY:
                    return False
        return True

    def clamped(self) -> "GradingParams":
        return GradingParams(
            shadow=_clamp_offset(self.shadow),
            midtone=_clamp_offset(self.midtone),
            highlight=_clamp_offset(self.highlight),
            blending=_clamp(self.blending, 0.0, 1.0),
            balance=_clamp(self.balance, -1.0, 1.0),
        )

    def to_dict(self) -> dict:
        return {
            "shadow": list(self.shadow),
            "midtone": list(self.midtone),
            "highlight": list(self.highlight),
            "blending": self.blending,
            "balance": self.balance,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "GradingParams":
        """Build params from raw offsets or from a ``regions`` slider block."""

        regions = data.get("regions")
        if regions is not None:
            return GradingParams.from_region_dict(regions)
        return GradingParams(
            shadow=_parse_offset(data.get("shadow")),
            midtone=_parse_offset(data.get("midtone")),
            highlight=_parse_offset(data.get("highlight")),
            blending=float(data.get("blending", 1.0)),
            balance=float(data.get("balance", 0.0)),
        )

    @staticmethod
    def from_region_temperature_tint(
        shadow: Slider = (0.0, 0.0),
        midtone: Slider = (0.0, 0.0),
        highlight: Slider = (0.0, 0.0),
        blending: float = 100.0,
        balance: float = 0.0,
    ) -> "GradingParams":
        """Build params from per-region ``(temperature, tint)`` sliders.

        Sliders use the ``[-100, 100]`` scale of the white-balance controls.
        Each region becomes the offset ``(temp * 0.01, tint * 0.01,
        -temp * 0.005)``; ``blending`` (``0..100``) and ``balance``
        (``-100..100``) are divided by 100.  Unless some slider exceeds
        ``0.01`` in magnitude all offsets stay zero.
        """

        sliders = (shadow, midtone, highlight)
        active = any(
            abs(float(value)) > GRADING_SLIDER_THRESHOLD
            for slider in sliders
            for value in slider
        )
        offsets = [
            _slider_offset(slider) if active else ZERO_OFFSET for slider in sliders
        ]
        return GradingParams(
            shadow=offsets[0],
            midtone=offsets[1],
            highlight=offsets[2],
            blending=float(blending) / 100.0,
            balance=float(balance) / 100.0,
        )

    @staticmethod
    def from_region_dict(data: Mapping[str, Any]) -> "GradingParams":
        """Build params from ``{"shadow": {"temperature": .., "tint": ..}, ...}``."""

        def slider(name: str) -> Slider:
            region = data.get(name) or {}
            return float(region.get("temperature", 0.0)), float(region.get("tint", 0.0))

        return GradingParams.from_region_temperature_tint(
            shadow=slider("shadow"),
            midtone=slider("midtone"),
            highlight=slider("highlight"),
            blending=float(data.get("blending", 100.0)),
            balance=float(data.get("balance", 0.0)),
        )


def _slider_offset(slider: Slider) -> Triple:
    temperature, tint = float(slider[0]), float(slider[1])
    return (
        temperature * GRADING_TEMPERATURE_SCALE,
        tint * GRADING_TINT_SCALE,
        -temperature * GRADING_TEMPERATURE_SCALE * GRADING_BLUE_RATIO,
    )


def region_centers(balance: float = 0.0) -> Triple:
    """Return the shadow, midtone and highlight centres for *balance*."""

    shadow, midtone, highlight = algorithms.region_centers(float(balance))
    return float(shadow), float(midtone), float(highlight)


def region_weights(luminance: float, balance: float = 0.0) -> Triple:
    """Return ``(shadow, midtone, highlight)`` weights for a luminance value.

    The weights are non-negative and sum to one for any input; luminance is
    clamped to ``[0, 1]`` and balance to ``[-1, 1]``.
    """

    sw, mw, hw = algorithms.region_weights(float(luminance), float(balance))
    return float(sw), float(mw), float(hw)


def rgb_to_lms(r: float, g: float, b: float) -> Triple:
    l, m, s = algorithms.rgb_to_lms(float(r), float(g), float(b))
    return float(l), float(m), float(s)


def lms_to_rgb(l: float, m: float, s: float) -> Triple:
    r, g, b = algorithms.lms_to_rgb(float(l), float(m), float(s))
    return float(r), float(g), float(b)


def apply_grading_pixel(r: float, g: float, b: float, params: GradingParams) -> Triple:
    """Return the graded copy of a single linear pixel."""

    params = params.clamped()
    if params.is_identity():
        return float(r), float(g), float(b)
    nr, ng, nb = algorithms.apply_grading_pixel(
        float(r),
        float(g),
        float(b),
        *(float(v) for v in params.shadow),
        *(float(v) for v in params.midtone),
        *(float(v) for v in params.highlight),
        float(params.blending),
        *region_centers(params.balance),
    )
    return float(nr), float(ng), float(nb)


__all__ = [
    "GradingParams",
    "LMS_TO_RGB",
    "RGB_TO_LMS",
    "ZERO_OFFSET",
    "apply_grading_pixel",
    "lms_to_rgb",
    "region_centers",
    "region_weights",
    "rgb_to_lms",
]
