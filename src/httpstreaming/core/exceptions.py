"""Custom exceptions.

httpstreaming keeps its own exceptions few: stream and transport I/O errors
(``OSError``, ``httpx.HTTPError``) propagate unchanged.

Example:
    >>> from httpstreaming.core.exceptions import DownloadError, HttpStreamingError
    >>> isinstance(DownloadError("http://x/a", "HTTP 404"), HttpStreamingError)
    True
"""

from __future__ import annotations

import io


class HttpStreamingError(Exception):
    """Base exception for httpstreaming.

    Example:
        >>> from httpstreaming.core.exceptions import HttpStreamingError
        >>> str(HttpStreamingError("something went wrong"))
        'something went wrong'
    """


class UnsupportedStreamOperation(HttpStreamingError, io.UnsupportedOperation):
    """The wrapped stream does not support the requested operation.

    Also an ``io.UnsupportedOperation`` so code written against io objects
    handles it the usual way.

    Example:
        >>> import io
        >>> issubclass(UnsupportedStreamOperation, io.UnsupportedOperation)
        True
    """

    def __init__(self, operation: str, stream: object):
        self.operation = operation
        super().__init__(f"{type(stream).__name__} does not support {operation}()")


class ConfigurationError(HttpStreamingError):
    """Configuration is invalid.

    Example:
        >>> raise ConfigurationError("negative bandwidth")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: negative bandwidth
    """


class TransferError(HttpStreamingError):
    """A transfer finished with an unsuccessful HTTP status."""

    action = "transfer"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to {self.action} {url}: {reason}")


class DownloadError(TransferError):
    """Raised when a download fails."""

    action = "download"


class UploadError(TransferError):
    """Raised when an upload fails."""

    action = "upload to"


__all__ = [
    "ConfigurationError",
    "DownloadError",
    "HttpStreamingError",
    "TransferError",
    "UnsupportedStreamOperation",
    "UploadError",
]
