import pytest
from PIL import Image

from threshold_studio.config import ProcessingConfig
from threshold_studio.processing.invert import invert_colors
from threshold_studio.processing.neighbors import HALO
from threshold_studio.processing.pipeline import process_image

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

CONFIGS = [
    ProcessingConfig(),
    ProcessingConfig(adjust_black_pixels_neighbors=True, invert_colors=True),
    ProcessingConfig(use_binary_threshold=False, use_multiple_thresholds=True, apply_contrast=True,
                     contrast_threshold=0.3, multiplier=1.5),
    ProcessingConfig(use_binary_threshold=False),
    ProcessingConfig(binary_threshold=-1.0, white_threshold=2.0, multiplier=-3.0),
]


def _gradient(width, height):
    img = Image.new("RGB", (width, height))
    img.putdata([((x * 37) % 256, (y * 53) % 256, (x * y * 11) % 256) for y in range(height) for x in range(width)])
    return img


def test_two_by_two_scenario_with_defaults():
    src = Image.new("RGB", (2, 2))
    src.putdata([WHITE, (200, 200, 200), (100, 100, 100), BLACK])

    result = process_image(src)

    assert list(result.getdata()) == [WHITE, WHITE, BLACK, BLACK]


@pytest.mark.parametrize("config", CONFIGS)
@pytest.mark.parametrize("size", [(1, 1), (7, 3)])
def test_dimensions_are_preserved(config, size):
    result = process_image(_gradient(*size), config)

    assert result.size == size
    assert result.mode == "RGB"


def test_source_is_not_mutated():
    src = _gradient(6, 4)
    before = src.tobytes()

    process_image(src, ProcessingConfig(adjust_black_pixels_neighbors=True, invert_colors=True))

    assert src.tobytes() == before


def test_passthrough_copies_every_pixel():
    src = _gradient(5, 5)

    result = process_image(src, ProcessingConfig(use_binary_threshold=False, use_multiple_thresholds=False))

    assert list(result.getdata()) == list(src.getdata())


def test_passthrough_drops_alpha():
    src = Image.new("RGBA", (3, 3), (120, 140, 200, 10))

    result = process_image(src, ProcessingConfig(use_binary_threshold=False))

    assert result.mode == "RGB"
    assert set(result.getdata()) == {(120, 140, 200)}


def test_palette_source_is_accepted():
    src = Image.new("P", (4, 4))

    result = process_image(src)

    assert result.mode == "RGB"
    assert result.size == src.size


def test_neighbor_pass_runs_before_inversion():
    src = Image.new("RGB", (5, 5), WHITE)
    src.putpixel((2, 2), BLACK)

    result = process_image(src, ProcessingConfig(adjust_black_pixels_neighbors=True, invert_colors=True))

    assert result.getpixel((2, 2)) == WHITE
    assert result.getpixel((1, 1)) == (254, 254, 254)
    assert result.getpixel((0, 0)) == BLACK


def test_neighbor_pass_is_skipped_outside_binary_mode():
    src = Image.new("RGB", (3, 3), WHITE)
    src.putpixel((1, 1), BLACK)
    config = ProcessingConfig(
        use_binary_threshold=False,
        use_multiple_thresholds=True,
        adjust_black_pixels_neighbors=True,
    )

    result = process_image(src, config)

    assert HALO not in list(result.getdata())
    assert result.getpixel((0, 0)) == WHITE


def test_inversion_is_an_involution():
    img = _gradient(6, 5)
    original = list(img.getdata())

    invert_colors(img)
    assert img.getpixel((1, 1)) == tuple(255 - c for c in original[6 + 1])
    invert_colors(img)

    assert list(img.getdata()) == original
