from __future__ import annotations

import math
from typing import Sequence

_WHITE_NORM = math.sqrt(3 * 255 * 255)


def calculate_magnitude(rgb: Sequence[int]) -> float:
    """Euclidean norm of the color normalized by the norm of pure white.

    Only the first three channels take part, so RGBA tuples can be passed
    straight from pixel access without stripping alpha first.
    """
    r, g, b = rgb[0], rgb[1], rgb[2]
    return math.sqrt(r * r + g * g + b * b) / _WHITE_NORM
