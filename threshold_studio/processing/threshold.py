from __future__ import annotations

import math
from enum import Enum
from typing import Sequence, Tuple

from PIL import Image

from ..config import ProcessingConfig
from .magnitude import calculate_magnitude

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)


class ThresholdMode(Enum):
    BINARY = "binary"
    MULTI = "multi"
    PASSTHROUGH = "passthrough"

    @classmethod
    def for_config(cls, config: ProcessingConfig) -> "ThresholdMode":
        # Binary wins when both threshold modes are switched on.
        if config.use_binary_threshold:
            return cls.BINARY
        if config.use_multiple_thresholds:
            return cls.MULTI
        return cls.PASSTHROUGH


class Band(Enum):
    CONTRAST = "contrast"
    WHITE = "white"
    BLACK = "black"
    PASSTHROUGH = "passthrough"

    @classmethod
    def for_magnitude(cls, magnitude: float, config: ProcessingConfig) -> "Band":
        if config.apply_contrast and magnitude < config.contrast_threshold:
            return cls.CONTRAST
        if magnitude > config.white_threshold:
            return cls.WHITE
        if magnitude < config.black_threshold:
            return cls.BLACK
        return cls.PASSTHROUGH


def _scale_channel(channel: int, multiplier: float) -> int:
    scaled = channel * multiplier
    # Infinite or NaN products have no integer value; they saturate to 0.
    if math.isnan(scaled) or scaled == -math.inf:
        return 0
    return int(min(255, scaled))


def scale_contrast(rgb: Sequence[int], multiplier: float) -> RGB:
    """Scale each channel, capping at 255 and truncating toward zero.

    There is no lower bound: a finite negative multiplier yields negative
    channels.
    """
    return (
        _scale_channel(rgb[0], multiplier),
        _scale_channel(rgb[1], multiplier),
        _scale_channel(rgb[2], multiplier),
    )


def classify_binary(magnitude: float, config: ProcessingConfig) -> RGB:
    return WHITE if magnitude > config.binary_threshold else BLACK


def classify_multi(rgb: Sequence[int], magnitude: float, config: ProcessingConfig) -> RGB:
    band = Band.for_magnitude(magnitude, config)
    if band is Band.CONTRAST:
        return scale_contrast(rgb, config.multiplier)
    if band is Band.WHITE:
        return WHITE
    if band is Band.BLACK:
        return BLACK
    return (rgb[0], rgb[1], rgb[2])


def classify_pixel(rgb: Sequence[int], config: ProcessingConfig) -> RGB:
    magnitude = calculate_magnitude(rgb)
    mode = ThresholdMode.for_config(config)
    if mode is ThresholdMode.BINARY:
        return classify_binary(magnitude, config)
    if mode is ThresholdMode.MULTI:
        return classify_multi(rgb, magnitude, config)
    return (rgb[0], rgb[1], rgb[2])


def _to_channel_range(rgb: RGB) -> RGB:
    # 8-bit storage cannot hold negative contrast results.
    r, g, b = rgb
    return (max(0, r), max(0, g), max(0, b))


def apply_threshold(source: Image.Image, target: Image.Image, config: ProcessingConfig) -> None:
    """Classify every pixel of ``source`` and write the result into ``target``.

    ``source`` is only read. ``target`` must be an ``RGB`` image of the same size.
    """
    src = source if source.mode == "RGB" else source.convert("RGB")
    width, height = src.size
    src_pixels = src.load()
    dst_pixels = target.load()
    for y in range(height):
        for x in range(width):
            dst_pixels[x, y] = _to_channel_range(classify_pixel(src_pixels[x, y], config))
