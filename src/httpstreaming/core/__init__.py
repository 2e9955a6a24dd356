"""Core configuration and exceptions."""

from httpstreaming.core.config import Settings, get_settings
from httpstreaming.core.exceptions import (
    ConfigurationError,
    DownloadError,
    HttpStreamingError,
    TransferError,
    UnsupportedStreamOperation,
    UploadError,
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "ConfigurationError",
    "DownloadError",
    "HttpStreamingError",
    "TransferError",
    "UnsupportedStreamOperation",
    "UploadError",
]
