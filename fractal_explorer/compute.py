"""
Escape-time computation using Numba JIT compilation.

This module contains the performance-critical functions:
- Iteration count for a single point of the complex plane
- Iteration grid for a whole canvas
- Palette lookup from iteration counts to RGB

The grid kernel uses the same pixel -> complex transform as
Viewport.pixel_to_complex, so a rendered pixel always agrees with a
single-point computation at the same coordinates.
"""

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS_SQUARED = 4.0


@jit(nopython=True, cache=True)
def compute_iterations(c_real, c_imag, max_iter):
    """
    Count iterations of z -> z² + c, starting from z = 0, until |z| > 2.

    The bound is checked before each step. Once max_iter steps have been
    taken without escaping the point is treated as inside the set.

    Args:
        c_real, c_imag: The point c
        max_iter: Iteration limit

    Returns:
        Escape count in [0, max_iter - 1], or max_iter for points that
        did not escape.
    """
    zr = 0.0
    zi = 0.0
    iteration = 0

    while zr * zr + zi * zi <= ESCAPE_RADIUS_SQUARED:
        zr_prev = zr
        zr = zr * zr - zi * zi + c_real
        zi = 2 * zr_prev * zi + c_imag

        if iteration >= max_iter:
            return max_iter

        iteration += 1

    return iteration


@jit(nopython=True, parallel=True, cache=True)
def compute_iteration_grid(top_left_x, top_left_y, zoom_factor, width, height, max_iter):
    """
    Compute iteration counts for every pixel of a canvas.

    Rows are spread over CPU cores; the call returns only once the whole
    grid is filled.

    Args:
        top_left_x, top_left_y: Viewport anchor (top_left_y with the
            viewport's flipped sign)
        zoom_factor: Pixels per complex-plane unit
        width, height: Canvas dimensions in pixels
        max_iter: Iteration limit

    Returns:
        2D numpy array of int32 with shape (height, width).
    """
    result = np.empty((height, width), dtype=np.int32)

    for py in prange(height):
        c_imag = py / zoom_factor - top_left_y
        for px in range(width):
            c_real = px / zoom_factor + top_left_x
            result[py, px] = compute_iterations(c_real, c_imag, max_iter)

    return result


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(iterations, palette, out):
    """
    Colour an iteration grid through a lookup table.

    Args:
        iterations: 2D int array from compute_iteration_grid
        palette: (max_iter + 1, 3) uint8 array, see colormaps.build_palette
        out: Output RGB image (height, width, 3), modified in place
    """
    height, width = iterations.shape

    for py in prange(height):
        for px in range(width):
            idx = iterations[py, px]
            out[py, px, 0] = palette[idx, 0]
            out[py, px, 1] = palette[idx, 1]
            out[py, px, 2] = palette[idx, 2]


def warmup_jit(palette):
    """
    Compile the kernels on a tiny canvas.

    Call once at startup so the first real render does not pay for
    compilation.

    Args:
        palette: A palette built for max_iter = 10 or more
    """
    data = compute_iteration_grid(-2.0, 1.0, 4.0, 10, 10, 10)
    dummy = np.zeros((10, 10, 3), dtype=np.uint8)
    apply_palette(data, palette, dummy)
