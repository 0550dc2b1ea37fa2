"""Browse cached Slashdot headlines and cite or open the stories."""

from .config import AppConfig, load_config
from .controller import Found, HeadlineController, NotFound, line_index_at
from .errors import (
    HeadlineError,
    HeadlineStoreFormatError,
    NoHeadlineError,
    NotHeadlineBufferError,
)
from .schemas import HeadlineEntry, HeadlineRecord
from .storage import load_headlines
from .surface import Workspace

__all__ = [
    "AppConfig",
    "Found",
    "HeadlineController",
    "HeadlineEntry",
    "HeadlineError",
    "HeadlineRecord",
    "HeadlineStoreFormatError",
    "NoHeadlineError",
    "NotFound",
    "NotHeadlineBufferError",
    "Workspace",
    "line_index_at",
    "load_config",
    "load_headlines",
]
