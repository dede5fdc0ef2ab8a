"""Default configuration values for filmcolor."""

from __future__ import annotations

from typing import Final

# The pipeline's neutral point.  ``temperature_shift == 0`` maps here so an
# untouched slider leaves the image exactly as ingested.
REFERENCE_TEMPERATURE_K: Final[float] = 6500.0

# Endpoints reached by the temperature slider at -100 and +100.
WARM_TARGET_K: Final[float] = 2000.0
COOL_TARGET_K: Final[float] = 10000.0

# Domain of the fitted blackbody locus.  Anything outside is clamped.
MIN_TEMPERATURE_K: Final[float] = 1000.0
MAX_TEMPERATURE_K: Final[float] = 100000.0

SHIFT_LIMIT: Final[float] = 100.0

# Guard used for every potential divide-by-zero in the colour kernels.
EPSILON: Final[float] = 1e-4

# Shifts below this magnitude are treated as "no change".
IDENTITY_SHIFT: Final[float] = 0.01

# Grading offsets below this magnitude are treated as zero.
GRADING_IDENTITY: Final[float] = 1e-3

# Rec. 709 / BT.709 luminance weights.
LUMA_WEIGHTS: Final[tuple[float, float, float]] = (0.2126, 0.7152, 0.0722)

TEMPERATURE_SCALE_RANGE: Final[tuple[float, float]] = (0.3, 3.0)
TINT_RB_RANGE: Final[tuple[float, float]] = (0.7, 1.5)
TINT_G_RANGE: Final[tuple[float, float]] = (0.5, 1.5)

# Tint coefficients along the green/magenta axis.
TINT_GREEN_RB_CUT: Final[float] = 0.3
TINT_GREEN_BOOST: Final[float] = 0.5
TINT_MAGENTA_RB_BOOST: Final[float] = 0.4
TINT_MAGENTA_G_CUT: Final[float] = 0.5

# ---------------------------------------------------------------------------
# Three-way grading
# ---------------------------------------------------------------------------

# Gaussian centres at ``balance == 0``.  The shadow and highlight lobes sit on
# the ends of the luminance range so black maps almost entirely to shadows and
# white almost entirely to highlights.
SHADOW_CENTER: Final[float] = 0.0
MIDTONE_CENTER: Final[float] = 0.5
HIGHLIGHT_CENTER: Final[float] = 1.0

# One shared standard deviation for all three lobes.
REGION_WIDTH: Final[float] = 0.2

# Distance every centre moves at ``|balance| == 1``.  Centres move against the
# sign of balance: negative balance pushes them up (more shadow coverage).
BALANCE_SHIFT: Final[float] = 0.2

GRADING_OFFSET_LIMIT: Final[float] = 1.0

# Per-region temperature/tint sliders (``[-100, 100]``) to RGB offsets:
# ``(temp * 0.01, tint * 0.01, -temp * 0.005)``.
GRADING_TEMPERATURE_SCALE: Final[float] = 0.01
GRADING_TINT_SCALE: Final[float] = 0.01
GRADING_BLUE_RATIO: Final[float] = 0.5
# Slider magnitude a region needs before the grade is enabled at all.
GRADING_SLIDER_THRESHOLD: Final[float] = 0.01

# ---------------------------------------------------------------------------
# Colorimetric matrices
# ---------------------------------------------------------------------------

# CIE XYZ (D65) to linear Rec. 709 / sRGB primaries.
XYZ_TO_RGB: Final[tuple[tuple[float, float, float], ...]] = (
    (3.2406, -1.5372, -0.4986),
    (-0.9689, 1.8758, 0.0415),
    (0.0557, -0.2040, 1.0570),
)

# Linear Rec. 709 / sRGB primaries to CIE XYZ (D65).
RGB_TO_XYZ: Final[tuple[tuple[float, float, float], ...]] = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)

# Hunt-Pointer-Estevez cone response (XYZ to LMS), normalised to D65 so that
# RGB white lands on LMS (1, 1, 1).
XYZ_TO_LMS_HPE: Final[tuple[tuple[float, float, float], ...]] = (
    (0.4002, 0.7076, -0.0808),
    (-0.2263, 1.1653, 0.0457),
    (0.0, 0.0, 0.9182),
)

# Backend used when neither the caller nor the settings file picks one.
DEFAULT_BACKEND: Final[str] = "jit"
BACKENDS: Final[tuple[str, ...]] = ("jit", "numpy")
