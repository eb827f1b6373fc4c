from __future__ import annotations

import io

from flask import send_file
from PIL import Image

from .cache import remember_last_good
from .formats import pillow_format


def mimetype_for(format_name: str) -> str:
    fmt = pillow_format(format_name) or ""
    return Image.MIME.get(fmt, "application/octet-stream")


def send_image(data: bytes, format_name: str):
    mimetype = mimetype_for(format_name)
    remember_last_good(data, mimetype)
    return send_file(io.BytesIO(data), mimetype=mimetype)
