"""Pure colour-science kernels independent of buffer layout.

This module contains the per-pixel and per-call mathematics for white balance
and three-way grading, compiled with Numba so the same functions serve single
pixel calls from Python and the parallel buffer kernels in
:mod:`filmcolor.core.filters.jit_kernels`.  Every function operates on plain
floats and never raises: out-of-range inputs are clamped and every division is
guarded by :data:`filmcolor.config.EPSILON`.
"""

from __future__ import annotations

import math

import numpy as np
from numba import jit

from ...config import (
    BALANCE_SHIFT,
    COOL_TARGET_K,
    EPSILON,
    HIGHLIGHT_CENTER,
    IDENTITY_SHIFT,
    LUMA_WEIGHTS,
    MAX_TEMPERATURE_K,
    MIDTONE_CENTER,
    MIN_TEMPERATURE_K,
    REFERENCE_TEMPERATURE_K,
    REGION_WIDTH,
    RGB_TO_XYZ,
    SHADOW_CENTER,
    SHIFT_LIMIT,
    TEMPERATURE_SCALE_RANGE,
    TINT_G_RANGE,
    TINT_GREEN_BOOST,
    TINT_GREEN_RB_CUT,
    TINT_MAGENTA_G_CUT,
    TINT_MAGENTA_RB_BOOST,
    TINT_RB_RANGE,
    WARM_TARGET_K,
    XYZ_TO_LMS_HPE,
    XYZ_TO_RGB,
)

_LUMA_R, _LUMA_G, _LUMA_B = LUMA_WEIGHTS
_TEMP_SCALE_MIN, _TEMP_SCALE_MAX = TEMPERATURE_SCALE_RANGE
_TINT_RB_MIN, _TINT_RB_MAX = TINT_RB_RANGE
_TINT_G_MIN, _TINT_G_MAX = TINT_G_RANGE

_XYZ_TO_RGB = np.array(XYZ_TO_RGB, dtype=np.float64)

# Linear RGB -> XYZ -> LMS.  The inverse is numeric, exact to double precision.
RGB_TO_LMS = np.array(XYZ_TO_LMS_HPE, dtype=np.float64) @ np.array(
    RGB_TO_XYZ, dtype=np.float64
)
LMS_TO_RGB = np.linalg.inv(RGB_TO_LMS)

# ---------------------------------------------------------------------------
# Blackbody locus fit tables
# ---------------------------------------------------------------------------
#
# Each row is one segment.  A segment becomes active once the temperature
# reaches its lower bound; inside ``[bound, bound + fade)`` it is cross-faded
# with the previous segment using smoothstep.  Coefficients are for
# ``c0 * u**3 + c1 * u**2 + c2 * u + c3``.

# x(T) with u = 1/T: incandescent, warm/daylight, cool/sky, ultra-high.
_X_BOUNDS = np.array([MIN_TEMPERATURE_K, 4000.0, 7000.0, 25000.0])
_X_FADES = np.array([0.0, 500.0, 1000.0, 0.0])
_X_COEFFS = np.array(
    [
        [-0.2661239e9, -0.2343589e6, 0.8776956e3, 0.179910],
        [-4.6070e9, 2.9678e6, 0.09911e3, 0.244063],
        [-2.0064e9, 1.9018e6, 0.24748e3, 0.237040],
        [-2.0064e9, 1.9018e6, 0.24748e3, 0.237040],
    ]
)

# y(x) gated by T.  The last regime is a single quadratic.
_Y_BOUNDS = np.array([MIN_TEMPERATURE_K, 2222.0, 4000.0, 7000.0])
_Y_FADES = np.array([0.0, 3000.0 - 2222.0, 1000.0, 0.0])
_Y_COEFFS = np.array(
    [
        [-1.1063814, -1.34811020, 2.18555832, -0.20219683],
        [-0.9549476, -1.37418593, 2.09137015, -0.16748867],
        [0.0, -3.000, 2.870, -0.275],
        [0.0, -2.400, 2.600, -0.239],
    ]
)


@jit(nopython=True, inline="always")
def _clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp *value* to the inclusive range [min_val, max_val]."""
    if value < min_val:
        return min_val
    if value > max_val:
        return max_val
    return value


@jit(nopython=True, inline="always")
def _smoothstep(t: float) -> float:
    """Cubic Hermite ramp ``3t^2 - 2t^3`` on a clamped ``t``."""
    t = _clamp(t, 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


@jit(nopython=True, inline="always")
def _cubic(coeffs: np.ndarray, u: float) -> float:
    return ((coeffs[0] * u + coeffs[1]) * u + coeffs[2]) * u + coeffs[3]


@jit(nopython=True)
def _evaluate_piecewise(
    temperature: float,
    u: float,
    bounds: np.ndarray,
    fades: np.ndarray,
    coeffs: np.ndarray,
) -> float:
    """Evaluate a segment table at *temperature*, blending across seams."""

    index = 0
    for i in range(1, bounds.shape[0]):
        if temperature >= bounds[i]:
            index = i

    value = _cubic(coeffs[index], u)
    fade = fades[index]
    if index > 0 and fade > 0.0 and temperature < bounds[index] + fade:
        blend = _smoothstep((temperature - bounds[index]) / fade)
        previous = _cubic(coeffs[index - 1], u)
        value = previous * (1.0 - blend) + value * blend
    return value


@jit(nopython=True)
def luminance(r: float, g: float, b: float) -> float:
    """Return the BT.709 luminance of a linear RGB triple."""
    return _LUMA_R * r + _LUMA_G * g + _LUMA_B * b


# ---------------------------------------------------------------------------
# White balance
# ---------------------------------------------------------------------------


@jit(nopython=True)
def temperature_to_chromaticity(temperature: float) -> tuple[float, float]:
    """Return the CIE xy chromaticity of a blackbody at *temperature* Kelvin."""

    t = _clamp(temperature, MIN_TEMPERATURE_K, MAX_TEMPERATURE_K)
    x = _evaluate_piecewise(t, 1.0 / t, _X_BOUNDS, _X_FADES, _X_COEFFS)
    y = _evaluate_piecewise(t, x, _Y_BOUNDS, _Y_FADES, _Y_COEFFS)
    return _clamp(x, 0.0, 1.0), _clamp(y, 0.0, 1.0)


@jit(nopython=True)
def chromaticity_to_rgb(x: float, y: float) -> tuple[float, float, float]:
    """Return unnormalised linear RGB for chromaticity ``(x, y)`` at ``Y = 1``."""

    big_y = 1.0
    if y > EPSILON:
        big_x = x / y
        big_z = (1.0 - x - y) / y
    else:
        big_x = 0.0
        big_z = 0.0
    m = _XYZ_TO_RGB
    r = m[0, 0] * big_x + m[0, 1] * big_y + m[0, 2] * big_z
    g = m[1, 0] * big_x + m[1, 1] * big_y + m[1, 2] * big_z
    b = m[2, 0] * big_x + m[2, 1] * big_y + m[2, 2] * big_z
    return r, g, b


@jit(nopython=True)
def normalize_luminance(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Scale ``(r, g, b)`` so its luminance becomes exactly one."""

    luma = luminance(r, g, b)
    if luma > EPSILON:
        scale = 1.0 / luma
        return r * scale, g * scale, b * scale
    return r, g, b


@jit(nopython=True)
def _illuminant_rgb(temperature: float) -> tuple[float, float, float]:
    x, y = temperature_to_chromaticity(temperature)
    r, g, b = chromaticity_to_rgb(x, y)
    return normalize_luminance(r, g, b)


@jit(nopython=True)
def target_temperature(shift: float) -> float:
    """Map a temperature slider value in ``[-100, 100]`` to Kelvin.

    Warm shifts interpolate in log space down to 2000 K; cool shifts
    interpolate linearly up to 10000 K.
    """

    shift = _clamp(shift, -SHIFT_LIMIT, SHIFT_LIMIT)
    base = REFERENCE_TEMPERATURE_K
    if shift < 0.0:
        t = -shift / SHIFT_LIMIT
        log_base = math.log(base)
        log_target = log_base + t * (math.log(WARM_TARGET_K) - log_base)
        target = math.exp(log_target)
    else:
        t = shift / SHIFT_LIMIT
        target = base + t * (COOL_TARGET_K - base)
    return _clamp(target, MIN_TEMPERATURE_K, MAX_TEMPERATURE_K)


@jit(nopython=True)
def temperature_scale(shift: float) -> tuple[float, float, float]:
    """Return per-channel gains moving the 6500 K reference to the shifted illuminant."""

    base_r, base_g, base_b = _illuminant_rgb(REFERENCE_TEMPERATURE_K)
    target_r, target_g, target_b = _illuminant_rgb(target_temperature(shift))

    r_scale = target_r / base_r if base_r > EPSILON else 1.0
    g_scale = target_g / base_g if base_g > EPSILON else 1.0
    b_scale = target_b / base_b if base_b > EPSILON else 1.0

    return (
        _clamp(r_scale, _TEMP_SCALE_MIN, _TEMP_SCALE_MAX),
        _clamp(g_scale, _TEMP_SCALE_MIN, _TEMP_SCALE_MAX),
        _clamp(b_scale, _TEMP_SCALE_MIN, _TEMP_SCALE_MAX),
    )


@jit(nopython=True)
def tint_scale(shift: float) -> tuple[float, float, float]:
    """Return per-channel gains along the green/magenta axis."""

    tint = _clamp(shift, -SHIFT_LIMIT, SHIFT_LIMIT) / SHIFT_LIMIT
    if tint < 0.0:
        r_scale = 1.0 + tint * TINT_GREEN_RB_CUT
        g_scale = 1.0 - tint * TINT_GREEN_BOOST
        b_scale = 1.0 + tint * TINT_GREEN_RB_CUT
    else:
        r_scale = 1.0 + tint * TINT_MAGENTA_RB_BOOST
        g_scale = 1.0 - tint * TINT_MAGENTA_G_CUT
        b_scale = 1.0 + tint * TINT_MAGENTA_RB_BOOST

    return (
        _clamp(r_scale, _TINT_RB_MIN, _TINT_RB_MAX),
        _clamp(g_scale, _TINT_G_MIN, _TINT_G_MAX),
        _clamp(b_scale, _TINT_RB_MIN, _TINT_RB_MAX),
    )


@jit(nopython=True)
def white_balance_gain(
    temperature_shift: float, tint_shift: float
) -> tuple[float, float, float]:
    """Return the combined temperature x tint gain for one call."""

    temp_r, temp_g, temp_b = 1.0, 1.0, 1.0
    if abs(temperature_shift) > IDENTITY_SHIFT:
        temp_r, temp_g, temp_b = temperature_scale(temperature_shift)

    tint_r, tint_g, tint_b = 1.0, 1.0, 1.0
    if abs(tint_shift) > IDENTITY_SHIFT:
        tint_r, tint_g, tint_b = tint_scale(tint_shift)

    return temp_r * tint_r, temp_g * tint_g, temp_b * tint_b


@jit(nopython=True, inline="always")
def apply_gain_preserving_luminance(
    r: float,
    g: float,
    b: float,
    gain_r: float,
    gain_g: float,
    gain_b: float,
) -> tuple[float, float, float]:
    """Scale a pixel by the gains, then restore its original luminance."""

    original = luminance(r, g, b)
    r *= gain_r
    g *= gain_g
    b *= gain_b

    current = luminance(r, g, b)
    if current > EPSILON and original > EPSILON:
        ratio = original / current
        r *= ratio
        g *= ratio
        b *= ratio

    return max(0.0, r), max(0.0, g), max(0.0, b)


@jit(nopython=True)
def apply_white_balance_pixel(
    r: float,
    g: float,
    b: float,
    temperature_shift: float,
    tint_shift: float,
) -> tuple[float, float, float]:
    """Return the white-balanced copy of a single pixel."""

    if abs(temperature_shift) < IDENTITY_SHIFT and abs(tint_shift) < IDENTITY_SHIFT:
        return r, g, b
    gain_r, gain_g, gain_b = white_balance_gain(temperature_shift, tint_shift)
    return apply_gain_preserving_luminance(r, g, b, gain_r, gain_g, gain_b)


# ---------------------------------------------------------------------------
# Three-way grading
# ---------------------------------------------------------------------------


@jit(nopython=True, inline="always")
def _gaussian(x: float, center: float, width: float) -> float:
    diff = x - center
    return math.exp(-(diff * diff) / (2.0 * width * width))


@jit(nopython=True)
def region_centers(balance: float) -> tuple[float, float, float]:
    """Return the shadow, midtone and highlight Gaussian centres for *balance*.

    All three centres move together by ``-balance * BALANCE_SHIFT``, so a
    negative balance pushes the region boundaries up and widens the shadows.
    """

    offset = -_clamp(balance, -1.0, 1.0) * BALANCE_SHIFT
    return SHADOW_CENTER + offset, MIDTONE_CENTER + offset, HIGHLIGHT_CENTER + offset


@jit(nopython=True, inline="always")
def _weights_at(
    luminance_value: float,
    shadow_center: float,
    midtone_center: float,
    highlight_center: float,
) -> tuple[float, float, float]:
    lum = _clamp(luminance_value, 0.0, 1.0)
    sw = _gaussian(lum, shadow_center, REGION_WIDTH)
    mw = _gaussian(lum, midtone_center, REGION_WIDTH)
    hw = _gaussian(lum, highlight_center, REGION_WIDTH)

    total = sw + mw + hw
    if total > 0.0:
        return sw / total, mw / total, hw / total
    return 0.0, 1.0, 0.0


@jit(nopython=True)
def region_weights(luminance_value: float, balance: float) -> tuple[float, float, float]:
    """Return ``(shadow, midtone, highlight)`` weights summing to one."""

    shadow_center, midtone_center, highlight_center = region_centers(balance)
    return _weights_at(luminance_value, shadow_center, midtone_center, highlight_center)


@jit(nopython=True, inline="always")
def _transform(
    m: np.ndarray, a: float, b: float, c: float
) -> tuple[float, float, float]:
    return (
        m[0, 0] * a + m[0, 1] * b + m[0, 2] * c,
        m[1, 0] * a + m[1, 1] * b + m[1, 2] * c,
        m[2, 0] * a + m[2, 1] * b + m[2, 2] * c,
    )


@jit(nopython=True)
def rgb_to_lms(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert linear Rec. 709 RGB to Hunt-Pointer-Estevez LMS."""
    return _transform(RGB_TO_LMS, r, g, b)


@jit(nopython=True)
def lms_to_rgb(l: float, m: float, s: float) -> tuple[float, float, float]:
    """Convert Hunt-Pointer-Estevez LMS back to linear Rec. 709 RGB."""
    return _transform(LMS_TO_RGB, l, m, s)


@jit(nopython=True)
def apply_grading_pixel(
    r: float,
    g: float,
    b: float,
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
) -> tuple[float, float, float]:
    """Return a single pixel with the blended region offset added in LMS.

    The region centres come from :func:`region_centers`, resolved once per call.
    """

    sw, mw, hw = _weights_at(
        luminance(r, g, b), shadow_center, midtone_center, highlight_center
    )

    adjust_l = sw * shadow_r + mw * midtone_r + hw * highlight_r
    adjust_m = sw * shadow_g + mw * midtone_g + hw * highlight_g
    adjust_s = sw * shadow_b + mw * midtone_b + hw * highlight_b

    l, m, s = rgb_to_lms(r, g, b)
    l += adjust_l * blending
    m += adjust_m * blending
    s += adjust_s * blending
    r, g, b = lms_to_rgb(l, m, s)

    # Values above 1.0 are kept for the downstream tone mapper.
    return max(0.0, r), max(0.0, g), max(0.0, b)
