from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from filmcolor.errors import ImageReadError, ImageWriteError
from filmcolor.io.image_codec import linear_to_srgb, load_image, save_image, srgb_to_linear
from filmcolor.models.image import ImageBuffer


def test_transfer_curve_endpoints() -> None:
    np.testing.assert_allclose(srgb_to_linear(np.array([0.0, 1.0])), [0.0, 1.0], atol=1e-6)
    np.testing.assert_allclose(linear_to_srgb(np.array([0.0, 1.0])), [0.0, 1.0], atol=1e-6)


def test_srgb_mid_grey_decodes_to_known_linear_value() -> None:
    assert srgb_to_linear(np.array([0.5]))[0] == pytest.approx(0.214041, abs=1e-5)


def test_linear_to_srgb_clips_out_of_range() -> None:
    np.testing.assert_allclose(linear_to_srgb(np.array([-0.5, 2.0])), [0.0, 1.0], atol=1e-6)


def test_png_round_trip(tmp_path: Path) -> None:
    buffer = ImageBuffer.blank(4, 3, fill=0.2)
    buffer.set_pixel(1, 2, (0.9, 0.05, 0.4))
    target = tmp_path / "out.png"

    save_image(target, buffer)
    loaded = load_image(target)

    assert (loaded.width, loaded.height) == (4, 3)
    np.testing.assert_allclose(loaded.to_interleaved(), buffer.to_interleaved(), atol=5e-3)


def test_load_image_converts_to_rgb(tmp_path: Path) -> None:
    path = tmp_path / "grey.png"
    Image.new("L", (2, 2), color=255).save(path)
    buffer = load_image(path)
    assert buffer.pixel(1, 1) == pytest.approx((1.0, 1.0, 1.0))


def test_load_image_rejects_non_images(tmp_path: Path) -> None:
    path = tmp_path / "notes.png"
    path.write_text("not an image", encoding="utf-8")
    with pytest.raises(ImageReadError):
        load_image(path)


def test_load_image_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ImageReadError):
        load_image(tmp_path / "missing.png")


def test_save_image_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ImageWriteError):
        save_image(tmp_path / "out.unknownext", ImageBuffer.blank(2, 2))
