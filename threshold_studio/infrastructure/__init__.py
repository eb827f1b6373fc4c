"""Infrastructure helpers for image I/O, networking and caching."""

from .cache import CACHE, ResponseCache, cache_key, last_good_image, remember_last_good
from .codec import decode_image, encode_image, load_image, next_output_path, save_image
from .formats import (
    DecodeError,
    EncodeError,
    ImageIOError,
    UnsupportedFormatError,
    file_extension,
    is_format_supported,
    pillow_format,
    supported_formats,
)
from .network import FETCHER, SourceError, SourceFetcher
from .responses import send_image

__all__ = [
    "CACHE",
    "ResponseCache",
    "cache_key",
    "last_good_image",
    "remember_last_good",
    "decode_image",
    "encode_image",
    "load_image",
    "next_output_path",
    "save_image",
    "DecodeError",
    "EncodeError",
    "ImageIOError",
    "UnsupportedFormatError",
    "file_extension",
    "is_format_supported",
    "pillow_format",
    "supported_formats",
    "FETCHER",
    "SourceError",
    "SourceFetcher",
    "send_image",
]
