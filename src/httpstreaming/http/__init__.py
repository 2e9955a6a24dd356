"""httpstreaming HTTP client.

Example:
    >>> from httpstreaming.http import StreamingClient
    >>>
    >>> with StreamingClient() as client:
    ...     client.download("https://example.com/file.txt", "local.txt")
"""

from httpstreaming.http.client import StreamingClient, wrap_stream

__all__ = [
    "StreamingClient",
    "wrap_stream",
]
