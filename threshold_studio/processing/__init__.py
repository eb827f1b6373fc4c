"""Pixel processing stages for threshold-studio."""

from .invert import invert_colors
from .magnitude import calculate_magnitude
from .neighbors import HALO, adjust_black_pixels_neighbors, check_and_adjust_neighbors
from .pipeline import DEFAULT_CONFIG, process_image
from .threshold import (
    BLACK,
    WHITE,
    Band,
    ThresholdMode,
    apply_threshold,
    classify_multi,
    classify_pixel,
    scale_contrast,
)

__all__ = [
    "invert_colors",
    "calculate_magnitude",
    "HALO",
    "adjust_black_pixels_neighbors",
    "check_and_adjust_neighbors",
    "DEFAULT_CONFIG",
    "process_image",
    "BLACK",
    "WHITE",
    "Band",
    "ThresholdMode",
    "apply_threshold",
    "classify_multi",
    "classify_pixel",
    "scale_contrast",
]
