"""
Settings for the fractal explorer.

Values are read from settings.json next to this module (or from the file
named by the FRACTAL_EXPLORER_SETTINGS environment variable). A missing or
unreadable file falls back to the built-in defaults; a file with bad values
raises SettingsError.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, fields


logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "FRACTAL_EXPLORER_SETTINGS"
DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


class SettingsError(ValueError):
    """Raised when a settings file contains an unusable value."""


@dataclass(frozen=True)
class Settings:
    """Startup configuration. Fixed for the lifetime of the process."""

    width: int = 1240
    height: int = 1024
    max_iteration: int = 1000
    default_zoom: float = 50.0
    default_top_left_x: float = -3.0
    default_top_left_y: float = 3.0
    window_title: str = "Fractal Explorer"
    fps: int = 60
    screenshot_dir: str = "~/Desktop"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise SettingsError(
                f"canvas size must be positive, got {self.width}x{self.height}"
            )
        if self.max_iteration < 0:
            raise SettingsError(
                f"max_iteration must not be negative, got {self.max_iteration}"
            )
        if not math.isfinite(self.default_zoom) or self.default_zoom <= 0:
            raise SettingsError(
                f"default_zoom must be positive and finite, got {self.default_zoom}"
            )
        if not (math.isfinite(self.width / self.default_zoom)
                and math.isfinite(self.height / self.default_zoom)):
            raise SettingsError(
                f"default_zoom {self.default_zoom} is too small for a "
                f"{self.width}x{self.height} canvas"
            )
        for name in ("default_top_left_x", "default_top_left_y"):
            if not math.isfinite(getattr(self, name)):
                raise SettingsError(f"{name} must be finite, got {getattr(self, name)}")
        if self.fps <= 0:
            raise SettingsError(f"fps must be positive, got {self.fps}")


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: File to read. Defaults to $FRACTAL_EXPLORER_SETTINGS, then to
            the settings.json shipped with the package.

    Returns:
        Settings instance. Keys missing from the file keep their defaults.

    Raises:
        SettingsError if a value in the file is invalid.
    """
    if path is None:
        path = os.environ.get(SETTINGS_ENV_VAR, DEFAULT_SETTINGS_PATH)

    try:
        with open(path, 'r') as f:
            raw = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s. Using defaults.", path, e)
        return Settings()

    if not isinstance(raw, dict):
        raise SettingsError(f"{path}: expected a JSON object at top level")

    known = {f.name: f.type for f in fields(Settings)}
    values = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r in %s", key, path)
            continue
        values[key] = _coerce(key, value, known[key])

    return Settings(**values)


def _coerce(key, value, kind):
    """Convert a JSON value to the type declared on Settings."""
    if kind is str:
        if not isinstance(value, str):
            raise SettingsError(f"{key} must be a string, got {value!r}")
        return value
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(f"{key} must be a number, got {value!r}")
    if kind is int:
        if isinstance(value, float) and not value.is_integer():
            raise SettingsError(f"{key} must be an integer, got {value!r}")
        return int(value)
    return float(value)
