import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from fractal_explorer.settings import Settings


@pytest.fixture
def small_settings():
    """A canvas small enough to render quickly in tests."""
    return Settings(width=40, height=32, max_iteration=50)
