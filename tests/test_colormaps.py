import numpy as np
import pytest

from fractal_explorer.colormaps import (
    BAND_WIDTH,
    BASE_PATTERN,
    MASK,
    build_palette,
    color_for,
    packed_color_for,
)


MAX_ITER = 1000


def test_inside_is_black():
    assert color_for(MAX_ITER, MAX_ITER) == (0, 0, 0)
    assert color_for(50, 50) == (0, 0, 0)


def test_first_band():
    expected = (BASE_PATTERN * MASK) & 0xFFFFFF
    assert expected == 0x39BE20
    for count in range(BAND_WIDTH):
        assert packed_color_for(count, MAX_ITER) == expected
        assert color_for(count, MAX_ITER) == (0x39, 0xBE, 0x20)


def test_bands_follow_shifted_mask():
    for count in (13, 26, 130, 400):
        shift = count // BAND_WIDTH
        assert packed_color_for(count, MAX_ITER) == (BASE_PATTERN * (MASK << shift)) & 0xFFFFFF


def test_band_boundary():
    assert color_for(12, MAX_ITER) != color_for(13, MAX_ITER)


def test_shift_wraps_at_32_bits():
    # 416 // 13 == 32, which wraps back to a shift of 0
    assert color_for(416, MAX_ITER) == color_for(0, MAX_ITER)
    assert color_for(999, MAX_ITER) == color_for(999 - 416, MAX_ITER)


def test_high_shift_without_wrap_would_be_black():
    # Sanity check on the wrap: shifts >= 24 alone leave nothing in the low 24 bits
    assert (BASE_PATTERN * (MASK << 24)) & 0xFFFFFF == 0
    assert color_for(24 * BAND_WIDTH, MAX_ITER) == (0, 0, 0)


def test_components_are_bytes():
    for count in range(0, MAX_ITER, 7):
        r, g, b = color_for(count, MAX_ITER)
        assert all(0 <= v <= 255 for v in (r, g, b))


def test_build_palette_matches_color_for():
    palette = build_palette(MAX_ITER)
    assert palette.shape == (MAX_ITER + 1, 3)
    assert palette.dtype == np.uint8
    assert tuple(palette[MAX_ITER]) == (0, 0, 0)
    for count in (0, 1, 13, 200, 416, 999):
        assert tuple(int(v) for v in palette[count]) == color_for(count, MAX_ITER)


@pytest.mark.parametrize("max_iter", [0, 1, 10])
def test_small_palettes(max_iter):
    palette = build_palette(max_iter)
    assert palette.shape == (max_iter + 1, 3)
    assert tuple(palette[-1]) == (0, 0, 0)
