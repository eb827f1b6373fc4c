import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Tuple


_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    return default if raw is None else parse_bool(raw)


@dataclass(frozen=True)
class ProcessingConfig:
    """Switches and cut-offs for a single run of the pixel pipeline."""

    use_binary_threshold: bool = True
    adjust_black_pixels_neighbors: bool = False
    use_multiple_thresholds: bool = False
    apply_contrast: bool = False
    invert_colors: bool = False
    binary_threshold: float = 0.53
    white_threshold: float = 0.9
    black_threshold: float = 0.7
    contrast_threshold: float = 0.0
    multiplier: float = 0.0

    @classmethod
    def from_env(cls) -> "ProcessingConfig":
        return cls(
            use_binary_threshold=_env_bool("USE_BINARY_THRESHOLD", True),
            adjust_black_pixels_neighbors=_env_bool("ADJUST_BLACK_PIXELS_NEIGHBORS", False),
            use_multiple_thresholds=_env_bool("USE_MULTIPLE_THRESHOLDS", False),
            apply_contrast=_env_bool("APPLY_CONTRAST", False),
            invert_colors=_env_bool("INVERT_COLORS", False),
            binary_threshold=float(os.getenv("BINARY_THRESHOLD", "0.53")),
            white_threshold=float(os.getenv("WHITE_THRESHOLD", "0.9")),
            black_threshold=float(os.getenv("BLACK_THRESHOLD", "0.7")),
            contrast_threshold=float(os.getenv("CONTRAST_THRESHOLD", "0.0")),
            multiplier=float(os.getenv("MULTIPLIER", "0.0")),
        )

    def with_overrides(
        self, overrides: Mapping[str, object]
    ) -> Tuple["ProcessingConfig", Dict[str, str]]:
        """Return a copy with ``overrides`` applied plus per-field coercion errors.

        Keys that are not configuration fields are ignored. A value that cannot
        be coerced to its field's type is reported in the error mapping and
        leaves that field unchanged.
        """

        errors: Dict[str, str] = {}
        applied: Dict[str, object] = {}

        for field in fields(self):
            if field.name not in overrides:
                continue

            raw_value = overrides[field.name]
            try:
                if field.type is bool:
                    coerced = parse_bool(raw_value)
                elif field.type is float:
                    coerced = float(raw_value)
                else:
                    coerced = raw_value
            except (TypeError, ValueError):
                errors[field.name] = f"Expected {field.type.__name__}"
                continue

            applied[field.name] = coerced

        return replace(self, **applied), errors


@dataclass(frozen=True)
class ServiceSettings:
    port: int
    log_level: str
    cache_ttl: float
    source_timeout: float
    source_retries: int
    output_format: str
    max_upload_mb: int

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        return cls(
            port=int(os.getenv("PORT", "5600")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cache_ttl=float(os.getenv("CACHE_TTL", "30")),
            source_timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            source_retries=int(os.getenv("SOURCE_RETRIES", "2")),
            output_format=os.getenv("OUTPUT_FORMAT", "png").lower(),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", "16")),
        )


SETTINGS = ServiceSettings.from_env()


def configure_logging(level: str | None = None) -> logging.Logger:
    logging.basicConfig(level=level or SETTINGS.log_level)
    return logging.getLogger("threshold-studio")
