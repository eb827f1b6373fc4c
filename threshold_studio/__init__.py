"""Application package exports."""

from .app import APP_VERSION, create_app
from .config import ProcessingConfig
from .processing import process_image
from . import infrastructure, processing

__version__ = APP_VERSION

__all__ = [
    "APP_VERSION",
    "__version__",
    "create_app",
    "ProcessingConfig",
    "process_image",
    "infrastructure",
    "processing",
]
