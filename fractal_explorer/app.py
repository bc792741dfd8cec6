"""
Pygame front end for the fractal explorer.

Contains the PygameShell class which handles:
- Window setup and main loop
- Translating mouse/keyboard input into controller events
- Blitting finished frames
- Saving the current frame as a PNG
"""

import logging
import os
import sys
from datetime import datetime

import pygame

from .colormaps import build_palette
from .compute import warmup_jit
from .controller import (
    ApplicationShell,
    Button,
    ExplorerController,
    KeyPress,
    MouseButton,
    ResetView,
)
from .settings import load_settings
from .viewport import Direction


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

MOUSE_BUTTONS = {
    1: Button.PRIMARY,    # Left
    3: Button.SECONDARY,  # Right
}

PAN_KEYS = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
}

SAVE_MODIFIERS = pygame.KMOD_CTRL | pygame.KMOD_META


def translate_event(event):
    """
    Map a pygame event to a controller event.

    Returns:
        MouseButton, KeyPress or ResetView, or None if the event is not
        view input.
    """
    if event.type == pygame.MOUSEBUTTONDOWN:
        button = MOUSE_BUTTONS.get(event.button)
        if button is None:
            return None
        x, y = event.pos
        return MouseButton(button, x, y)

    if event.type == pygame.KEYDOWN:
        # Ctrl/Cmd+S saves rather than panning down
        if event.key == pygame.K_s and event.mod & SAVE_MODIFIERS:
            return None
        if event.key in PAN_KEYS:
            return KeyPress(PAN_KEYS[event.key])
        if event.key == pygame.K_r:
            return ResetView()

    return None


def is_save_request(event):
    """True for Ctrl+S (Cmd+S on macOS), which saves the current frame."""
    return (event.type == pygame.KEYDOWN and event.key == pygame.K_s
            and bool(event.mod & SAVE_MODIFIERS))


class PygameShell(ApplicationShell):
    """
    Pygame window that shows frames and forwards input.

    Input is read in the main loop and passed to the registered callback
    synchronously, so an event is fully handled before the next is read.
    """

    def __init__(self, settings):
        self.settings = settings
        self.screen = None
        self.clock = None
        self.current_surface = None
        self.current_buffer = None
        self._callback = None
        self.running = False

    def open(self):
        """Initialize pygame and create the window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.settings.width, self.settings.height),
            pygame.DOUBLEBUF
        )
        pygame.display.set_caption(self.settings.window_title)
        self.clock = pygame.time.Clock()

    def on_input(self, callback):
        self._callback = callback

    def render(self, buffer):
        self.current_buffer = buffer
        self.current_surface = pygame.surfarray.make_surface(buffer.surface_array())
        self._draw()

    def set_caption(self, text):
        pygame.display.set_caption(f"{self.settings.window_title} - {text}")

    def run(self, controller):
        """Run the main loop until the window is closed."""
        self.running = True
        while self.running:
            for event in pygame.event.get():
                self._handle_event(event, controller)
            self._draw()
            self.clock.tick(self.settings.fps)
        pygame.quit()

    def _handle_event(self, event, controller):
        if event.type == pygame.QUIT:
            self.running = False
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
            return
        if is_save_request(event):
            self.save_screenshot()
            return

        translated = translate_event(event)
        if translated is None or self._callback is None:
            return

        self.set_caption("Computing...")
        self._callback(translated)
        self.set_caption(
            f"zoom {controller.viewport.zoom_factor:g} - "
            "click to zoom, WASD to pan, R to reset"
        )

    def _draw(self):
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()

    def save_screenshot(self):
        """Save the current frame as a timestamped PNG."""
        if self.current_surface is None:
            return None

        directory = os.path.expanduser(self.settings.screenshot_dir)
        if not os.path.isdir(directory):
            directory = os.getcwd()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.join(directory, f"fractal_{timestamp}.png")

        pygame.image.save(self.current_surface, filename)
        self.set_caption(f"Saved: {os.path.basename(filename)}")
        logger.info("Frame saved to %s", filename)
        return filename


def setup_logging(level="INFO"):
    """Configure root logging for the application."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def run(settings=None):
    """
    Run the fractal explorer.

    Args:
        settings: Settings instance (default: load_settings())
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    shell = PygameShell(settings)
    shell.open()

    shell.set_caption("Compiling (first run only)...")
    warmup_jit(build_palette(max(settings.max_iteration, 10)))

    controller = ExplorerController(shell, settings)
    shell.set_caption("Computing...")
    controller.start()
    shell.set_caption("click to zoom, WASD to pan, R to reset")

    try:
        shell.run(controller)
    except KeyboardInterrupt:
        pygame.quit()
