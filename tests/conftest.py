import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from filmcolor.core.filters import facade  # noqa: E402
from filmcolor.models.image import ImageBuffer  # noqa: E402


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240611)


@pytest.fixture
def random_buffer(rng: np.random.Generator) -> ImageBuffer:
    """A 32x24 linear buffer with every channel in ``[0.05, 1.0)``."""

    width, height = 32, 24
    pixels = rng.uniform(0.05, 1.0, size=(height, width, 3)).astype(np.float32)
    return ImageBuffer.from_interleaved(pixels)


@pytest.fixture
def grey_buffer() -> ImageBuffer:
    return ImageBuffer.blank(8, 8, fill=0.5)


@pytest.fixture(autouse=True)
def restore_default_backend():
    previous = facade.get_default_backend()
    yield
    facade.set_default_backend(previous)
