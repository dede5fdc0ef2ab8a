import numpy as np
import pytest

from filmcolor.core.filters import facade
from filmcolor.core.grading_resolver import GradingParams
from filmcolor.core.wb_resolver import WBParams
from filmcolor.models.image import ImageBuffer

BACKENDS = ["jit", "numpy"]


@pytest.mark.parametrize("backend", BACKENDS)
def test_zero_shifts_leave_buffer_unchanged(random_buffer: ImageBuffer, backend: str) -> None:
    before = random_buffer.copy()
    result = facade.apply_white_balance(random_buffer, 0.0, 0.0, backend=backend)
    assert result is random_buffer
    np.testing.assert_array_equal(random_buffer.to_interleaved(), before.to_interleaved())


@pytest.mark.parametrize("backend", BACKENDS)
def test_zero_blending_leaves_buffer_unchanged(random_buffer: ImageBuffer, backend: str) -> None:
    before = random_buffer.copy()
    params = GradingParams(shadow=(0.5, 0.2, -0.4), highlight=(0.3, 0.3, 0.3), blending=0.0)
    facade.apply_grading(random_buffer, params, backend=backend)
    np.testing.assert_array_equal(random_buffer.to_interleaved(), before.to_interleaved())


@pytest.mark.parametrize("backend", BACKENDS)
def test_white_balance_preserves_luminance(
    random_buffer: ImageBuffer, rng: np.random.Generator, backend: str
) -> None:
    for temperature, tint in rng.uniform(-100.0, 100.0, size=(4, 2)):
        buffer = random_buffer.copy()
        facade.apply_white_balance(buffer, temperature, tint, backend=backend)
        np.testing.assert_allclose(
            buffer.luminance(), random_buffer.luminance(), rtol=1e-4, atol=1e-6
        )


@pytest.mark.parametrize("backend", BACKENDS)
def test_mid_grey_warms_up(grey_buffer: ImageBuffer, backend: str) -> None:
    facade.apply_white_balance(grey_buffer, -50.0, 0.0, backend=backend)
    r, g, b = grey_buffer.pixel(3, 4)
    assert r > g > b
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b
    assert luminance == pytest.approx(0.5, rel=0.01)


@pytest.mark.parametrize("backend", BACKENDS)
def test_black_stays_black(backend: str) -> None:
    buffer = ImageBuffer.blank(4, 4, fill=0.0)
    facade.apply_white_balance(buffer, 70.0, -40.0, backend=backend)
    assert not buffer.r.any() and not buffer.g.any() and not buffer.b.any()


def test_shifts_are_clamped(random_buffer: ImageBuffer) -> None:
    extreme = random_buffer.copy()
    limit = random_buffer.copy()
    facade.apply_white_balance(extreme, -500.0, 300.0)
    facade.apply_white_balance(limit, -100.0, 100.0)
    np.testing.assert_array_equal(extreme.r, limit.r)
    np.testing.assert_array_equal(extreme.b, limit.b)


def test_single_pixel_matches_buffer(grey_buffer: ImageBuffer) -> None:
    expected = facade.apply_white_balance_pixel(0.5, 0.5, 0.5, -50.0, 10.0)
    facade.apply_white_balance(grey_buffer, -50.0, 10.0)
    assert grey_buffer.pixel(0, 0) == pytest.approx(expected, abs=1e-6)


@pytest.mark.parametrize("backend", BACKENDS)
def test_midtone_offset_pushes_red(grey_buffer: ImageBuffer, backend: str) -> None:
    params = GradingParams(midtone=(0.05, 0.0, 0.0))
    facade.apply_grading(grey_buffer, params, backend=backend)
    r, g, _ = grey_buffer.pixel(1, 1)
    assert r > 0.5
    assert g < 0.5


@pytest.mark.parametrize("backend", BACKENDS)
def test_grading_never_goes_negative(backend: str) -> None:
    buffer = ImageBuffer.blank(4, 4, fill=0.01)
    params = GradingParams(
        shadow=(-1.0, -1.0, -1.0), midtone=(-1.0, 0.5, -1.0), highlight=(-1.0, -1.0, 1.0)
    )
    facade.apply_grading(buffer, params, backend=backend)
    assert buffer.to_interleaved().min() >= 0.0


@pytest.mark.parametrize("backend", BACKENDS)
def test_grading_keeps_highlights_above_one(backend: str) -> None:
    buffer = ImageBuffer.blank(2, 2, fill=0.95)
    facade.apply_grading(buffer, GradingParams(highlight=(1.0, 1.0, 1.0)), backend=backend)
    assert buffer.to_interleaved().min() > 1.0


def test_process_image_runs_white_balance_before_grading(random_buffer: ImageBuffer) -> None:
    wb = WBParams(temperature=-40.0, tint=20.0)
    grade = GradingParams(shadow=(0.1, 0.0, -0.1), highlight=(-0.05, 0.0, 0.1), balance=0.5)

    manual = random_buffer.copy()
    facade.apply_white_balance(manual, wb.temperature, wb.tint)
    facade.apply_grading(manual, grade)

    piped = facade.process_image(random_buffer.copy(), white_balance=wb, grading=grade)
    np.testing.assert_array_equal(piped.to_interleaved(), manual.to_interleaved())


def test_process_image_without_stages_is_identity(random_buffer: ImageBuffer) -> None:
    before = random_buffer.copy()
    facade.process_image(random_buffer)
    np.testing.assert_array_equal(random_buffer.r, before.r)


def test_unknown_backend_is_rejected(grey_buffer: ImageBuffer) -> None:
    with pytest.raises(ValueError):
        facade.apply_white_balance(grey_buffer, 20.0, 0.0, backend="opencl")
    with pytest.raises(ValueError):
        facade.set_default_backend("opencl")


def test_default_backend_can_be_switched(grey_buffer: ImageBuffer) -> None:
    facade.set_default_backend("numpy")
    assert facade.get_default_backend() == "numpy"
    facade.apply_white_balance(grey_buffer, 30.0, 0.0)
    r, _, b = grey_buffer.pixel(0, 0)
    assert b > r


@pytest.mark.parametrize("backend", BACKENDS)
def test_nan_shift_leaves_buffer_unchanged(random_buffer: ImageBuffer, backend: str) -> None:
    before = random_buffer.copy()
    facade.apply_white_balance(random_buffer, float("nan"), 0.0, backend=backend)
    np.testing.assert_array_equal(random_buffer.to_interleaved(), before.to_interleaved())


@pytest.mark.parametrize("backend", BACKENDS)
def test_nan_blending_leaves_buffer_unchanged(random_buffer: ImageBuffer, backend: str) -> None:
    before = random_buffer.copy()
    params = GradingParams(midtone=(0.2, 0.0, 0.0), blending=float("nan"))
    facade.apply_grading(random_buffer, params, backend=backend)
    np.testing.assert_array_equal(random_buffer.to_interleaved(), before.to_interleaved())


@pytest.mark.parametrize("backend", BACKENDS)
def test_region_slider_grade_warms_midtones(grey_buffer: ImageBuffer, backend: str) -> None:
    params = GradingParams.from_region_temperature_tint(midtone=(40.0, 0.0))
    facade.apply_grading(grey_buffer, params, backend=backend)
    r, g, b = grey_buffer.pixel(3, 3)
    assert r > g
    assert r > b
