"""
Banded palette for escape-time counts.

Each colour is a 24-bit packed RGB value obtained by multiplying a fixed
bit pattern by a mask shifted left by (count // 13). The product is kept
to its low 24 bits, which gives the sharp, non-linear bands between
iteration ranges. Points inside the set are black.

The shift count is taken modulo 32, as for a shift of a 32-bit integer,
so the bands repeat every 13 * 32 iterations instead of fading to black.
"""

import numpy as np


BASE_PATTERN = 0b011011100001100101101000
MASK = 0b000000000000000101010100
BAND_WIDTH = 13  # Iterations per band

INSIDE_COLOR = (0, 0, 0)


def packed_color_for(iter_count, max_iter):
    """Packed 0xRRGGBB colour for an iteration count."""
    if iter_count == max_iter:
        return 0
    shift = (iter_count // BAND_WIDTH) & 31
    return (BASE_PATTERN * (MASK << shift)) & 0xFFFFFF


def color_for(iter_count, max_iter):
    """
    Get the colour for an iteration count.

    Args:
        iter_count: Result of compute_iterations
        max_iter: Iteration limit the count was computed with

    Returns:
        (r, g, b) tuple of ints in [0, 255]
    """
    if iter_count == max_iter:
        return INSIDE_COLOR
    rgb = packed_color_for(iter_count, max_iter)
    return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


def build_palette(max_iter):
    """
    Precompute color_for for every possible count.

    Args:
        max_iter: Iteration limit

    Returns:
        numpy array of shape (max_iter + 1, 3), dtype uint8, indexed by
        iteration count.
    """
    colors = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter + 1):
        colors[i] = color_for(i, max_iter)
    return colors
