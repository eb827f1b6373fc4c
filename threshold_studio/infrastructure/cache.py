from __future__ import annotations

import hashlib
import time
from dataclasses import astuple
from typing import Dict, Optional, Tuple

from ..config import SETTINGS, ProcessingConfig


CacheEntry = Tuple[float, bytes]


def cache_key(source: bytes, config: ProcessingConfig, format_name: str) -> str:
    digest = hashlib.sha256(source)
    digest.update(repr(astuple(config)).encode("utf-8"))
    digest.update(format_name.lower().encode("utf-8"))
    return digest.hexdigest()


class ResponseCache:
    def __init__(self, ttl: float | None = None, max_entries: int = 16) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self._ttl = SETTINGS.cache_ttl if ttl is None else ttl
        self._max_entries = max_entries

    def get(self, key: str) -> Optional[bytes]:
        entry = self._entries.get(key)
        if not entry:
            return None
        timestamp, data = entry
        if time.time() - timestamp > self._ttl:
            self._entries.pop(key, None)
            return None
        return data

    def put(self, key: str, data: bytes) -> None:
        if key not in self._entries and len(self._entries) >= self._max_entries:
            oldest = min(self._entries.items(), key=lambda item: item[1][0])[0]
            self._entries.pop(oldest, None)
        self._entries[key] = (time.time(), data)

    def clear(self) -> None:
        self._entries.clear()


CACHE = ResponseCache()
_last_good: Tuple[bytes, str] | None = None


def remember_last_good(data: bytes, mimetype: str) -> None:
    global _last_good
    _last_good = (data, mimetype)


def last_good_image() -> Optional[Tuple[bytes, str]]:
    return _last_good


def forget_last_good() -> None:
    global _last_good
    _last_good = None
