import numpy as np
import pytest

from fractal_explorer.colormaps import color_for
from fractal_explorer.compute import compute_iterations
from fractal_explorer.renderer import FractalRenderer, PixelBuffer
from fractal_explorer.viewport import Viewport, ViewportState


WIDTH, HEIGHT, MAX_ITER = 40, 32, 50


@pytest.fixture
def viewport():
    return Viewport(WIDTH, HEIGHT, ViewportState(12.0, -2.2, 1.3))


@pytest.fixture
def renderer():
    return FractalRenderer(WIDTH, HEIGHT, MAX_ITER)


def test_render_colours_every_pixel(renderer, viewport):
    buffer = renderer.render(viewport)

    assert buffer is renderer.buffer
    assert buffer.rgb.shape == (HEIGHT, WIDTH, 3)
    for x in range(0, WIDTH, 3):
        for y in range(0, HEIGHT, 5):
            c = viewport.pixel_to_complex(x, y)
            expected = color_for(compute_iterations(c.real, c.imag, MAX_ITER), MAX_ITER)
            assert buffer[x, y] == expected


def test_render_shows_inside_and_outside(renderer, viewport):
    buffer = renderer.render(viewport)
    black = np.all(buffer.rgb == 0, axis=2)
    assert black.any()
    assert not black.all()


def test_render_replaces_the_whole_frame(renderer, viewport):
    first = renderer.render(viewport).rgb.copy()
    viewport.zoom_in(WIDTH // 2, HEIGHT // 2)
    second = renderer.render(viewport).rgb

    assert renderer.buffer.generation == 2
    assert not np.array_equal(first, second)


def test_render_is_repeatable(renderer, viewport):
    first = renderer.render(viewport).rgb.copy()
    assert np.array_equal(first, renderer.render(viewport).rgb)


def test_render_records_timing(renderer, viewport):
    assert renderer.last_render_seconds is None
    renderer.render(viewport)
    assert renderer.last_render_seconds >= 0


def test_iterations_follow_viewport(renderer, viewport):
    data = renderer.compute_iterations(viewport)
    c = viewport.pixel_to_complex(7, 11)
    assert data[11, 7] == compute_iterations(c.real, c.imag, MAX_ITER)


def test_mismatched_viewport_is_rejected(renderer):
    with pytest.raises(ValueError):
        renderer.render(Viewport(WIDTH + 1, HEIGHT))


def test_pixel_buffer_indexing():
    buffer = PixelBuffer(4, 3)
    rgb = np.zeros((3, 4, 3), dtype=np.uint8)
    rgb[2, 1] = (10, 20, 30)
    buffer.commit(rgb)

    assert buffer[1, 2] == (10, 20, 30)
    assert buffer[2, 1] == (0, 0, 0)
    with pytest.raises(IndexError):
        buffer[4, 0]
    with pytest.raises(IndexError):
        buffer[0, -1]


def test_pixel_buffer_rejects_wrong_shape():
    buffer = PixelBuffer(4, 3)
    with pytest.raises(ValueError):
        buffer.commit(np.zeros((4, 3, 3), dtype=np.uint8))
    assert buffer.generation == 0


def test_surface_array_is_column_major():
    buffer = PixelBuffer(4, 3)
    rgb = np.zeros((3, 4, 3), dtype=np.uint8)
    rgb[0, 3] = (1, 2, 3)
    buffer.commit(rgb)

    surface = buffer.surface_array()
    assert surface.shape == (4, 3, 3)
    assert tuple(surface[3, 0]) == (1, 2, 3)
