from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .formats import (
    DecodeError,
    EncodeError,
    UnsupportedFormatError,
    file_extension,
    is_format_supported,
    pillow_format,
)

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> Image.Image:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise DecodeError(f"Unable to decode image: {exc}") from exc


def encode_image(image: Image.Image, format_name: str) -> bytes:
    fmt = pillow_format(format_name)
    if fmt is None or fmt not in Image.SAVE:
        raise EncodeError(f"Cannot write images as '{format_name}'")

    buffer = io.BytesIO()
    try:
        image.save(buffer, fmt)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Unable to encode image as {fmt}: {exc}") from exc
    return buffer.getvalue()


def load_image(path: str | Path) -> Image.Image:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file '{path}' not found.")

    fmt = file_extension(path.name)
    if not is_format_supported(fmt, for_reading=True):
        raise UnsupportedFormatError(fmt, for_reading=True)

    return decode_image(path.read_bytes())


def save_image(image: Image.Image, path: str | Path, format_name: str | None = None) -> Path:
    path = Path(path)
    fmt = format_name or file_extension(path.name)
    if not is_format_supported(fmt, for_reading=False):
        raise UnsupportedFormatError(fmt, for_reading=False)

    data = encode_image(image, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Saved processed image to: %s (format: %s)", path.name, fmt.upper())
    return path


def next_output_path(directory: str | Path = ".", prefix: str = "output", extension: str = "png") -> Path:
    """First ``<prefix><N>.<extension>`` in ``directory`` that does not exist yet."""
    directory = Path(directory)
    number = 1
    while (directory / f"{prefix}{number}.{extension}").exists():
        number += 1
    return directory / f"{prefix}{number}.{extension}"
