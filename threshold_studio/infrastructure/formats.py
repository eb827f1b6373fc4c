from __future__ import annotations

from typing import Dict, List, Optional

from PIL import Image


class ImageIOError(Exception):
    """Base class for failures while reading or writing image data."""


class DecodeError(ImageIOError):
    pass


class EncodeError(ImageIOError):
    pass


class UnsupportedFormatError(ImageIOError, ValueError):
    def __init__(self, fmt: str, for_reading: bool) -> None:
        self.format = fmt
        self.for_reading = for_reading
        direction = "Input" if for_reading else "Output"
        supported = ", ".join(supported_formats(for_reading))
        super().__init__(
            f"{direction} format '{fmt}' is not supported. Supported formats: {supported}"
        )


def file_extension(filename: str) -> str:
    """Return the lower-cased text after the last dot of ``filename``.

    Names without a dot, names starting with their only dot and names ending
    with a dot have no extension.
    """
    dot = filename.rfind(".")
    if 0 < dot < len(filename) - 1:
        return filename[dot + 1:].lower()
    return ""


def _extension_map() -> Dict[str, str]:
    # ``registered_extensions`` also triggers Pillow's plugin discovery.
    return {ext.lstrip(".").lower(): fmt for ext, fmt in Image.registered_extensions().items()}


def supported_formats(for_reading: bool) -> List[str]:
    extensions = _extension_map()
    registry = Image.OPEN if for_reading else Image.SAVE
    names = {fmt.lower() for fmt in registry}
    names.update(ext for ext, fmt in extensions.items() if fmt in registry)
    return sorted(names)


def is_format_supported(fmt: str, for_reading: bool) -> bool:
    if not fmt:
        return False
    return fmt.lower() in supported_formats(for_reading)


def pillow_format(fmt: str) -> Optional[str]:
    """Map an extension or format name (``jpg``, ``PNG``) to Pillow's format id."""
    if not fmt:
        return None
    name = fmt.lower().lstrip(".")
    extensions = _extension_map()
    if name in extensions:
        return extensions[name]
    upper = name.upper()
    if upper in Image.OPEN or upper in Image.SAVE:
        return upper
    return None
