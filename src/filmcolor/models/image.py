"""Image buffer and source metadata models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from ..config import LUMA_WEIGHTS
from ..errors import InvalidImageBufferError


class CfaPattern(str, Enum):
    """2x2 colour filter array layouts, read row-major from the top left."""

    RGGB = "RGGB"
    GRBG = "GRBG"
    GBRG = "GBRG"
    BGGR = "BGGR"


@dataclass(frozen=True, slots=True)
class SourceMetadata:
    """Provenance of a decoded image as reported by the ingestion stage.

    The colour kernels never read these values; they are carried so callers
    can normalise raw samples (see :mod:`filmcolor.io.ingest`) and so exported
    files can keep their shooting information.
    """

    width: int
    height: int
    bits_per_sample: int = 14
    iso: float = 100.0
    exposure_time: float = 1.0 / 125.0
    aperture: Optional[float] = None
    focal_length: Optional[float] = None
    as_shot_white_balance: Optional[tuple[float, float]] = None
    camera_model: str = ""
    color_space: str = "linear-rec709"
    black_level: float = 0.0
    white_level: float = 16383.0
    cfa_pattern: CfaPattern = CfaPattern.RGGB
    color_matrix: tuple[float, ...] = field(
        default=(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
    )


def _as_plane(values: object, name: str) -> np.ndarray:
    plane = np.ascontiguousarray(values, dtype=np.float32)
    if plane.ndim != 1:
        raise InvalidImageBufferError(
            f"channel {name!r} must be one-dimensional, got shape {plane.shape}"
        )
    return plane


@dataclass(slots=True)
class ImageBuffer:
    """Planar, row-major, linear-light RGB image.

    Each channel is a contiguous ``float32`` array of ``width * height``
    samples.  Pixel ``(x, y)`` lives at index ``y * width + x``.  The buffer is
    mutated in place by the correction stages and is not safe for concurrent
    mutation.
    """

    width: int
    height: int
    r: np.ndarray
    g: np.ndarray
    b: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidImageBufferError(
                f"dimensions must be non-negative, got {self.width}x{self.height}"
            )
        self.r = _as_plane(self.r, "r")
        self.g = _as_plane(self.g, "g")
        self.b = _as_plane(self.b, "b")
        expected = self.width * self.height
        for name, plane in (("r", self.r), ("g", self.g), ("b", self.b)):
            if plane.size != expected:
                raise InvalidImageBufferError(
                    f"channel {name!r} has {plane.size} samples, expected {expected}"
                )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def blank(cls, width: int, height: int, fill: float = 0.0) -> "ImageBuffer":
        count = max(0, width) * max(0, height)
        return cls(
            width,
            height,
            np.full(count, fill, dtype=np.float32),
            np.full(count, fill, dtype=np.float32),
            np.full(count, fill, dtype=np.float32),
        )

    @classmethod
    def from_interleaved(cls, pixels: np.ndarray) -> "ImageBuffer":
        """Return a planar copy of an ``(H, W, 3)`` array."""

        array = np.asarray(pixels, dtype=np.float32)
        if array.ndim != 3 or array.shape[2] < 3:
            raise InvalidImageBufferError(
                f"expected an (H, W, 3) array, got shape {array.shape}"
            )
        height, width = array.shape[:2]
        return cls(
            width,
            height,
            array[..., 0].ravel().copy(),
            array[..., 1].ravel().copy(),
            array[..., 2].ravel().copy(),
        )

    def to_interleaved(self) -> np.ndarray:
        """Return the buffer as a new ``(H, W, 3)`` float32 array."""

        stacked = np.stack([self.r, self.g, self.b], axis=-1)
        return stacked.reshape((self.height, self.width, 3))

    def copy(self) -> "ImageBuffer":
        return ImageBuffer(
            self.width, self.height, self.r.copy(), self.g.copy(), self.b.copy()
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return y * self.width + x

    def pixel(self, x: int, y: int) -> tuple[float, float, float]:
        index = self._index(x, y)
        return float(self.r[index]), float(self.g[index]), float(self.b[index])

    def set_pixel(self, x: int, y: int, rgb: tuple[float, float, float]) -> None:
        index = self._index(x, y)
        self.r[index], self.g[index], self.b[index] = rgb

    def writable_planes(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(r, g, b)`` after checking every plane can be mutated in place.

        All three planes are checked before any is returned, so a failure
        leaves the buffer untouched.
        """

        planes = (self.r, self.g, self.b)
        for name, plane in zip("rgb", planes):
            if not plane.flags.writeable:
                raise InvalidImageBufferError(f"channel {name!r} is read-only")
            if plane.dtype != np.float32 or not plane.flags.c_contiguous:
                raise InvalidImageBufferError(
                    f"channel {name!r} must be a contiguous float32 array"
                )
        return planes

    def luminance(self) -> np.ndarray:
        """Return the BT.709 luminance plane as ``float32``."""

        wr, wg, wb = LUMA_WEIGHTS
        return (wr * self.r + wg * self.g + wb * self.b).astype(np.float32, copy=False)


__all__ = ["CfaPattern", "ImageBuffer", "SourceMetadata"]
