from __future__ import annotations

import logging
import time
from typing import Callable

import requests
from PIL import Image

from ..config import SETTINGS, ServiceSettings
from .codec import decode_image

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class SourceError(RuntimeError):
    """Raised when a remote source image cannot be fetched."""


class SourceFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        settings: ServiceSettings = SETTINGS,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._settings = settings
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "threshold-studio/1.0"})
        return session

    def fetch_bytes(self, url: str) -> bytes:
        last_exception: Exception | None = None
        for attempt in range(1, self._settings.source_retries + 2):
            try:
                response = self._session.get(url, timeout=self._settings.source_timeout)
                response.raise_for_status()
                return response.content
            except requests.RequestException as exc:
                logger.warning("Fetching %s failed (attempt %d): %s", url, attempt, exc)
                last_exception = exc
                time.sleep(0.4 * attempt)
        raise SourceError(f"Unable to fetch {url}: {last_exception}") from last_exception

    def fetch_image(self, url: str) -> Image.Image:
        return decode_image(self.fetch_bytes(url))


FETCHER = SourceFetcher()
