from __future__ import annotations

from PIL import Image, ImageOps


def invert_colors(image: Image.Image) -> None:
    """Replace every channel ``c`` with ``255 - c`` in place."""
    image.paste(ImageOps.invert(image.convert("RGB")))
