"""White Balance adjustment resolver.

Provides the :class:`WBParams` data class and the Python-facing helpers that
turn temperature and tint slider values into per-channel gains.  The heavy
lifting happens in the Numba kernels of :mod:`filmcolor.core.filters.algorithms`;
the functions here coerce arguments to ``float`` and return plain tuples so
they are convenient to call from tests and the CLI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from ..config import IDENTITY_SHIFT, SHIFT_LIMIT
from .filters import algorithms

WB_KEYS = ("WB_Temperature", "WB_Tint")

WB_DEFAULTS: dict[str, float] = {
    "WB_Temperature": 0.0,
    "WB_Tint": 0.0,
}

Triple = tuple[float, float, float]


def _clamp_shift(value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return max(-SHIFT_LIMIT, min(SHIFT_LIMIT, value))


@dataclass(frozen=True)
class WBParams:
    """Immutable snapshot of the white-balance controls.

    Both parameters live in ``[-100, 100]``; ``0`` means no change.  Negative
    temperature warms the image, negative tint pushes it towards green.
    """

    temperature: float = 0.0
    tint: float = 0.0

    def is_identity(self) -> bool:
        """Return ``True`` when no correction would be applied."""

        return abs(self.temperature) < IDENTITY_SHIFT and abs(self.tint) < IDENTITY_SHIFT

    def clamped(self) -> "WBParams":
        return WBParams(_clamp_shift(self.temperature), _clamp_shift(self.tint))

    def to_dict(self) -> dict[str, float]:
        return {"WB_Temperature": self.temperature, "WB_Tint": self.tint}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "WBParams":
        """Build params from either ``WB_*`` keys or plain ``temperature``/``tint``."""

        temperature = data.get("WB_Temperature", data.get("temperature", 0.0))
        tint = data.get("WB_Tint", data.get("tint", 0.0))
        return WBParams(float(temperature), float(tint))


# ------------------------------------------------------------------
# Colorimetry helpers
# ------------------------------------------------------------------

def temperature_to_chromaticity(kelvin: float) -> tuple[float, float]:
    """Return the CIE xy chromaticity of the blackbody locus at *kelvin*."""

    x, y = algorithms.temperature_to_chromaticity(float(kelvin))
    return float(x), float(y)


def chromaticity_to_rgb(x: float, y: float) -> Triple:
    """Return unnormalised linear RGB for ``(x, y)``; may be negative or above 1."""

    r, g, b = algorithms.chromaticity_to_rgb(float(x), float(y))
    return float(r), float(g), float(b)


def normalize_luminance(r: float, g: float, b: float) -> Triple:
    """Rescale an RGB triple to unit luminance (no-op for near-black input)."""

    nr, ng, nb = algorithms.normalize_luminance(float(r), float(g), float(b))
    return float(nr), float(ng), float(nb)


def target_temperature(shift: float) -> float:
    """Return the Kelvin value the temperature slider position maps to."""

    return float(algorithms.target_temperature(float(shift)))


def temperature_scale(shift: float) -> Triple:
    """Return per-channel gains for a temperature slider value."""

    r, g, b = algorithms.temperature_scale(float(shift))
    return float(r), float(g), float(b)


def tint_scale(shift: float) -> Triple:
    """Return per-channel gains for a tint slider value."""

    r, g, b = algorithms.tint_scale(float(shift))
    return float(r), float(g), float(b)


def resolve_gain(params: WBParams) -> Triple:
    """Return the combined temperature x tint gain for *params*."""

    r, g, b = algorithms.white_balance_gain(float(params.temperature), float(params.tint))
    return float(r), float(g), float(b)


def apply_wb_pixel(r: float, g: float, b: float, params: WBParams) -> Triple:
    """Return the white-balanced copy of a single linear pixel."""

    nr, ng, nb = algorithms.apply_white_balance_pixel(
        float(r), float(g), float(b), float(params.temperature), float(params.tint)
    )
    return float(nr), float(ng), float(nb)


__all__ = [
    "WBParams",
    "WB_DEFAULTS",
    "WB_KEYS",
    "apply_wb_pixel",
    "chromaticity_to_rgb",
    "normalize_luminance",
    "resolve_gain",
    "target_temperature",
    "temperature_scale",
    "temperature_to_chromaticity",
    "tint_scale",
]
