from __future__ import annotations

import logging

from PIL import Image

from .threshold import BLACK, RGB, WHITE

logger = logging.getLogger(__name__)

HALO: RGB = (1, 1, 1)

_DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1), (0, -1),
    (0, 1), (1, -1), (1, 0), (1, 1),
)


def is_valid_position(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def is_white_pixel(pixels, x: int, y: int) -> bool:
    return tuple(pixels[x, y][:3]) == WHITE


def is_black_pixel(pixels, x: int, y: int) -> bool:
    return tuple(pixels[x, y][:3]) == BLACK


def check_and_adjust_neighbors(pixels, x: int, y: int, width: int, height: int) -> int:
    """Turn the pure-white 8-connected neighbors of ``(x, y)`` into halo pixels.

    Returns the number of pixels rewritten.
    """
    adjusted = 0
    for dx, dy in _DIRECTIONS:
        nx, ny = x + dx, y + dy
        if is_valid_position(nx, ny, width, height) and is_white_pixel(pixels, nx, ny):
            pixels[nx, ny] = HALO
            adjusted += 1
    return adjusted


def adjust_black_pixels_neighbors(image: Image.Image) -> int:
    """
    Grow every pure-black region of ``image`` by one ring of halo pixels.

    The scan is row-major and rewrites ``image`` as it goes. A halo pixel is
    neither black nor white, so it never seeds further growth and is never
    rewritten again; when two seeds share a neighbor, the seed scanned first
    claims it.
    """
    width, height = image.size
    pixels = image.load()
    adjusted = 0
    for y in range(height):
        for x in range(width):
            if is_black_pixel(pixels, x, y):
                adjusted += check_and_adjust_neighbors(pixels, x, y, width, height)
    logger.debug("Neighbor pass wrote %d halo pixels", adjusted)
    return adjusted
