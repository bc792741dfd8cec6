"""
Input handling between the platform shell and the fractal core.

The core only needs two things from a windowing layer: somewhere to show a
finished PixelBuffer and a stream of input events. ApplicationShell
describes that surface; ExplorerController owns the viewport and renderer
and reacts to each event by mutating the view, re-rendering and handing
the new frame to the shell.
"""

import abc
import enum
import logging
from dataclasses import dataclass

from .renderer import FractalRenderer
from .settings import Settings
from .viewport import (
    Direction,
    InvalidPanError,
    InvalidZoomError,
    Viewport,
    ViewportState,
)


logger = logging.getLogger(__name__)


class Button(enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class MouseButton:
    button: Button
    x: int
    y: int


@dataclass(frozen=True)
class KeyPress:
    direction: Direction


@dataclass(frozen=True)
class ResetView:
    pass


class ApplicationShell(abc.ABC):
    """Display and input capabilities supplied by a windowing layer."""

    @abc.abstractmethod
    def render(self, buffer):
        """Show a finished PixelBuffer."""

    @abc.abstractmethod
    def on_input(self, callback):
        """Register callback(event) to receive MouseButton/KeyPress/ResetView events."""


class ExplorerController:
    """
    Owns the view state and drives rendering.

    Events are handled one at a time: each mutation is followed by a full,
    blocking render before the shell is asked to redraw.
    """

    def __init__(self, shell, settings=None):
        self.shell = shell
        self.settings = settings or Settings()
        self.viewport = Viewport(
            self.settings.width, self.settings.height,
            ViewportState(
                self.settings.default_zoom,
                self.settings.default_top_left_x,
                self.settings.default_top_left_y,
            ),
        )
        self.renderer = FractalRenderer(
            self.settings.width, self.settings.height, self.settings.max_iteration
        )
        self._precision_warned = False

    def start(self):
        """Draw the first frame and start listening for input."""
        self.shell.on_input(self.handle_event)
        self.refresh()

    def handle_event(self, event):
        """
        Apply one input event.

        Returns:
            True if the view changed and a new frame was drawn.
        """
        if isinstance(event, MouseButton):
            try:
                if event.button is Button.PRIMARY:
                    self.viewport.zoom_in(event.x, event.y)
                else:
                    self.viewport.zoom_out(event.x, event.y)
            except InvalidZoomError as e:
                logger.warning("Zoom rejected: %s", e)
                return False
        elif isinstance(event, KeyPress):
            try:
                self.viewport.pan(event.direction)
            except InvalidPanError as e:
                logger.warning("Pan rejected: %s", e)
                return False
        elif isinstance(event, ResetView):
            self.viewport.reset()
        else:
            raise TypeError(f"unsupported input event: {event!r}")

        logger.info("View changed by %s: %r", event, self.viewport)
        self._check_precision()
        self.refresh()
        return True

    def refresh(self):
        """Re-render the current view and present it."""
        buffer = self.renderer.render(self.viewport)
        self.shell.render(buffer)
        return buffer

    def _check_precision(self):
        limited = self.viewport.at_precision_limit
        if limited and not self._precision_warned:
            logger.warning(
                "Zoom %g is beyond double precision; the image will degrade",
                self.viewport.zoom_factor,
            )
        self._precision_warned = limited
