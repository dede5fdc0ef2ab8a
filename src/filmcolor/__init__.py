"""filmcolor: non-destructive white balance and three-way colour grading.

The public surface re-exported here covers the pipeline entry points and the
parameter types they accept::

    from filmcolor import GradingParams, ImageBuffer, WBParams, process_image

    buffer = ImageBuffer.blank(64, 64, fill=0.5)
    process_image(buffer, WBParams(temperature=-30.0), GradingParams(midtone=(0.1, 0.0, 0.0)))
"""

from .core.filters.facade import (
    apply_grading,
    apply_white_balance,
    apply_white_balance_pixel,
    get_default_backend,
    process_image,
    set_default_backend,
)
from .core.grading_resolver import GradingParams, region_weights
from .core.wb_resolver import (
    WBParams,
    chromaticity_to_rgb,
    temperature_scale,
    temperature_to_chromaticity,
    tint_scale,
)
from .errors import FilmColorError
from .models.image import CfaPattern, ImageBuffer, SourceMetadata

__version__ = "0.1.0"

__all__ = [
    "CfaPattern",
    "FilmColorError",
    "GradingParams",
    "ImageBuffer",
    "SourceMetadata",
    "WBParams",
    "apply_grading",
    "apply_white_balance",
    "apply_white_balance_pixel",
    "chromaticity_to_rgb",
    "get_default_backend",
    "process_image",
    "region_weights",
    "set_default_backend",
    "temperature_scale",
    "temperature_to_chromaticity",
    "tint_scale",
]
