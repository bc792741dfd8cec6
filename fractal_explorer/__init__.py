"""
Fractal Explorer

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled computation.

Quick Start:
    from fractal_explorer import run
    run()

Or from command line:
    python -m fractal_explorer

Package Structure:
    - viewport.py: Pixel <-> complex-plane mapping, pan and zoom
    - compute.py: JIT-compiled escape-time kernels
    - colormaps.py: Banded palette keyed to iteration count
    - renderer.py: Full-frame rendering into a PixelBuffer
    - controller.py: Input events and the shell interface
    - settings.py: Startup configuration (settings.json)
    - app.py: Pygame window and main loop

Controls:
    - Left click: Zoom in (2x) on the clicked point
    - Right click: Zoom out (2x) on the clicked point
    - W/A/S/D or arrow keys: Pan
    - R: Reset to default view
    - Ctrl/Cmd+S: Save the current frame as PNG
    - ESC: Quit
"""

from .app import run, PygameShell
from .colormaps import color_for, build_palette
from .compute import compute_iterations, compute_iteration_grid
from .controller import (
    ApplicationShell,
    Button,
    ExplorerController,
    KeyPress,
    MouseButton,
    ResetView,
)
from .renderer import FractalRenderer, PixelBuffer
from .settings import Settings, SettingsError, load_settings
from .viewport import (
    Direction,
    InvalidPanError,
    InvalidZoomError,
    Viewport,
    ViewportError,
    ViewportState,
)

__version__ = "1.0.0"
__all__ = [
    "run",
    "PygameShell",
    "color_for",
    "build_palette",
    "compute_iterations",
    "compute_iteration_grid",
    "ApplicationShell",
    "Button",
    "ExplorerController",
    "KeyPress",
    "MouseButton",
    "ResetView",
    "FractalRenderer",
    "PixelBuffer",
    "Settings",
    "SettingsError",
    "load_settings",
    "Direction",
    "InvalidPanError",
    "InvalidZoomError",
    "Viewport",
    "ViewportError",
    "ViewportState",
]
