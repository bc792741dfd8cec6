"""
Mapping between canvas pixels and points on the complex plane.

The view is described by a zoom factor (pixels per unit of the complex
plane) and the complex-plane anchor of the top-left pixel. Pixel rows grow
downwards while the imaginary axis grows upwards, so the anchor's y value
is stored with its sign flipped:

    real = x / zoom + top_left_x
    imag = y / zoom - top_left_y

Panning moves the anchor by a fixed fraction of what is currently visible.
Zooming keeps the clicked point under the cursor and then recentres it on
the canvas.
"""

import enum
import math
import sys
from dataclasses import dataclass, replace


# Pan step as a fraction of the visible width/height
PAN_STEP_DIVISOR = 6


class ViewportError(ValueError):
    """Raised when a view change would make the pixel transform degenerate."""


class InvalidZoomError(ViewportError):
    """Raised for a zoom factor that is not positive, not finite or too small."""


class InvalidPanError(ViewportError):
    """Raised when a pan would push the anchor past the largest double."""


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ViewportState:
    zoom_factor: float = 50.0
    top_left_x: float = -3.0
    top_left_y: float = 3.0


class Viewport:
    """
    Owns the current ViewportState for a canvas of fixed size.

    Every mutator replaces the state wholesale; readers always see a
    consistent (zoom, anchor) triple.

    Attributes:
        width, height: Canvas dimensions in pixels
        state: Current ViewportState
        initial_state: State restored by reset()
    """

    def __init__(self, width, height, state=None):
        self.width = width
        self.height = height
        self.initial_state = state or ViewportState()
        _check_zoom(self.initial_state.zoom_factor, width, height)
        self.state = self.initial_state

    def __repr__(self):
        s = self.state
        return (f"Viewport({self.width}x{self.height}, zoom={s.zoom_factor!r}, "
                f"top_left=({s.top_left_x!r}, {s.top_left_y!r}))")

    @property
    def zoom_factor(self):
        return self.state.zoom_factor

    @property
    def visible_width(self):
        """Width of the visible region in complex-plane units."""
        return self.width / self.state.zoom_factor

    @property
    def visible_height(self):
        """Height of the visible region in complex-plane units."""
        return self.height / self.state.zoom_factor

    @property
    def center(self):
        """Complex point under the middle of the canvas."""
        return self.pixel_to_complex(self.width / 2, self.height / 2)

    @property
    def at_precision_limit(self):
        """
        True once neighbouring pixels can no longer be told apart.

        A pixel step of 1/zoom added to the anchor is lost to rounding when
        it drops below the spacing of doubles around the anchor.
        """
        s = self.state
        step = 1.0 / s.zoom_factor
        magnitude = max(abs(s.top_left_x), abs(s.top_left_y), 1.0)
        return step < magnitude * sys.float_info.epsilon

    def pixel_to_complex(self, x, y):
        """
        Convert a pixel coordinate to the complex point it shows.

        Args:
            x, y: Pixel coordinates (0, 0 is the top-left corner)

        Returns:
            complex
        """
        s = self.state
        return complex(x / s.zoom_factor + s.top_left_x,
                       y / s.zoom_factor - s.top_left_y)

    # ------------------------------------------------------------------
    # Panning
    # ------------------------------------------------------------------

    def pan_up(self):
        self._move_anchor(0.0, self.visible_height / PAN_STEP_DIVISOR)

    def pan_down(self):
        self._move_anchor(0.0, -self.visible_height / PAN_STEP_DIVISOR)

    def pan_left(self):
        self._move_anchor(-self.visible_width / PAN_STEP_DIVISOR, 0.0)

    def pan_right(self):
        self._move_anchor(self.visible_width / PAN_STEP_DIVISOR, 0.0)

    def _move_anchor(self, dx, dy):
        """
        Shift the anchor, keeping the zoom.

        Raises:
            InvalidPanError if the new anchor is not finite. The state is
            left unchanged.
        """
        top_left_x = self.state.top_left_x + dx
        top_left_y = self.state.top_left_y + dy
        if not (math.isfinite(top_left_x) and math.isfinite(top_left_y)):
            raise InvalidPanError(
                f"panning from {self!r} would leave the representable plane"
            )
        self.state = replace(self.state, top_left_x=top_left_x, top_left_y=top_left_y)

    def pan(self, direction):
        """Pan one step in the given Direction."""
        {
            Direction.UP: self.pan_up,
            Direction.DOWN: self.pan_down,
            Direction.LEFT: self.pan_left,
            Direction.RIGHT: self.pan_right,
        }[direction]()

    # ------------------------------------------------------------------
    # Zooming
    # ------------------------------------------------------------------

    def zoom_at(self, pixel_x, pixel_y, new_zoom_factor):
        """
        Change the zoom so that the point under (pixel_x, pixel_y) becomes
        the centre of the canvas.

        The anchor is first moved onto the clicked point using the old zoom,
        then pulled back by half a canvas using the new zoom.

        Args:
            pixel_x, pixel_y: Pixel the user clicked
            new_zoom_factor: Zoom factor to switch to

        Raises:
            InvalidZoomError if new_zoom_factor is not a positive finite
            number, or so small that the visible region overflows. Also
            raised if the recentred anchor is not finite. The
            state is left unchanged.
        """
        _check_zoom(new_zoom_factor, self.width, self.height)

        s = self.state
        top_left_x = s.top_left_x + pixel_x / s.zoom_factor
        top_left_y = s.top_left_y - pixel_y / s.zoom_factor

        top_left_x -= (self.width / 2) / new_zoom_factor
        top_left_y += (self.height / 2) / new_zoom_factor

        if not (math.isfinite(top_left_x) and math.isfinite(top_left_y)):
            raise InvalidZoomError(
                f"zooming to {new_zoom_factor!r} from {self!r} would leave the representable plane"
            )

        self.state = ViewportState(new_zoom_factor, top_left_x, top_left_y)

    def zoom_in(self, pixel_x, pixel_y):
        """Double the zoom, centring on the given pixel."""
        self.zoom_at(pixel_x, pixel_y, self.state.zoom_factor * 2)

    def zoom_out(self, pixel_x, pixel_y):
        """Halve the zoom, centring on the given pixel."""
        self.zoom_at(pixel_x, pixel_y, self.state.zoom_factor / 2)

    def reset(self):
        """Go back to the startup view."""
        self.state = self.initial_state


def _check_zoom(zoom_factor, width, height):
    if not math.isfinite(zoom_factor) or zoom_factor <= 0:
        raise InvalidZoomError(
            f"zoom factor must be positive and finite, got {zoom_factor!r}"
        )
    if not (math.isfinite(width / zoom_factor) and math.isfinite(height / zoom_factor)):
        raise InvalidZoomError(
            f"zoom factor {zoom_factor!r} is too small for a {width}x{height} canvas"
        )
