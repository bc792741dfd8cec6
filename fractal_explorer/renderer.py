"""
Full-frame renderer for the fractal explorer.

The FractalRenderer class handles:
- Turning a Viewport into an iteration grid (JIT-compiled kernel)
- Colouring the grid through the banded palette
- Publishing the finished frame into a PixelBuffer

Every render recomputes the whole canvas. The new frame is built in a
scratch array and swapped in only when complete, so a PixelBuffer never
holds a half-drawn image.
"""

import logging
import time

import numpy as np

from .colormaps import build_palette
from .compute import compute_iteration_grid, apply_palette


logger = logging.getLogger(__name__)


class PixelBuffer:
    """
    A width x height grid of RGB colours.

    Indexed as buffer[x, y]. The backing array is stored row-major as
    (height, width, 3) uint8, which is what numpy and the kernels use;
    surface_array() gives the (width, height, 3) view pygame expects.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.rgb = np.zeros((height, width, 3), dtype=np.uint8)
        self.generation = 0  # Number of frames committed so far

    def __getitem__(self, xy):
        x, y = xy
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        r, g, b = self.rgb[y, x]
        return int(r), int(g), int(b)

    def commit(self, rgb):
        """Replace the contents with a finished frame."""
        if rgb.shape != self.rgb.shape:
            raise ValueError(f"frame shape {rgb.shape} does not match {self.rgb.shape}")
        self.rgb = rgb
        self.generation += 1

    def surface_array(self):
        """Pixel data transposed to (width, height, 3) for pygame.surfarray."""
        return self.rgb.swapaxes(0, 1)


class FractalRenderer:
    """
    Renders the Mandelbrot set for a Viewport into a PixelBuffer.

    Usage:
        renderer = FractalRenderer(1240, 1024, max_iter=1000)
        buffer = renderer.render(viewport)

    Attributes:
        width, height: Canvas dimensions
        max_iter: Iteration limit
        palette: Lookup table from iteration count to RGB
        buffer: The last completed frame
        last_render_seconds: Wall time of the last render
    """

    def __init__(self, width, height, max_iter):
        """
        Initialize the renderer.

        Args:
            width, height: Canvas dimensions in pixels
            max_iter: Maximum iteration count before a point counts as inside
        """
        self.width = width
        self.height = height
        self.max_iter = max_iter
        self.palette = build_palette(max_iter)
        self.buffer = PixelBuffer(width, height)
        self.last_render_seconds = None

    def compute_iterations(self, viewport):
        """
        Iteration counts for every pixel of the viewport.

        Returns:
            int32 array of shape (height, width)
        """
        self._check_viewport(viewport)
        s = viewport.state
        return compute_iteration_grid(
            s.top_left_x, s.top_left_y, s.zoom_factor,
            self.width, self.height, self.max_iter
        )

    def render(self, viewport):
        """
        Recompute the whole frame for the given viewport.

        Blocks until the frame is finished.

        Args:
            viewport: Viewport with the same canvas size as this renderer

        Returns:
            The updated PixelBuffer

        Raises:
            ValueError if the viewport's canvas size does not match.
        """
        start = time.perf_counter()

        data = self.compute_iterations(viewport)
        rgb = np.empty((self.height, self.width, 3), dtype=np.uint8)
        apply_palette(data, self.palette, rgb)
        self.buffer.commit(rgb)

        self.last_render_seconds = time.perf_counter() - start
        logger.debug("Rendered %dx%d frame in %.3fs (%r)",
                     self.width, self.height, self.last_render_seconds, viewport)
        return self.buffer

    def _check_viewport(self, viewport):
        if (viewport.width, viewport.height) != (self.width, self.height):
            raise ValueError(
                f"viewport is {viewport.width}x{viewport.height}, "
                f"renderer is {self.width}x{self.height}"
            )
