from __future__ import annotations

import logging

from PIL import Image

from ..config import ProcessingConfig
from .invert import invert_colors
from .neighbors import adjust_black_pixels_neighbors
from .threshold import ThresholdMode, apply_threshold

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ProcessingConfig()


def process_image(image: Image.Image, config: ProcessingConfig = DEFAULT_CONFIG) -> Image.Image:
    """Run threshold, neighbor adjustment and inversion over ``image``.

    Returns a new ``RGB`` image of the same size; ``image`` is left untouched.
    """
    width, height = image.size
    result = Image.new("RGB", (width, height))

    logger.debug(
        "Processing %dx%d image in %s mode",
        width,
        height,
        ThresholdMode.for_config(config).value,
    )
    apply_threshold(image, result, config)

    if config.use_binary_threshold and config.adjust_black_pixels_neighbors:
        adjust_black_pixels_neighbors(result)

    if config.invert_colors:
        invert_colors(result)

    return result
