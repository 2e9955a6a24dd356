"""HTTP client with streamed uploads and downloads.

Wraps a synchronous ``httpx.Client`` so request bodies are read from files
and response bodies written to files incrementally, optionally with
progress output and a bandwidth cap taken from settings.

Example:
    >>> from httpstreaming.core.config import get_settings
    >>> from httpstreaming.http import StreamingClient
    >>>
    >>> settings = get_settings(bandwidth_limit=65536, show_progress=True)
    >>> with StreamingClient(settings=settings) as client:
    ...     client.download("https://example.com/big.iso", "big.iso")
    ...     client.upload("big.iso", "https://example.com/upload/big.iso")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from httpstreaming.core.config import Settings, get_settings
from httpstreaming.core.exceptions import DownloadError, UploadError
from httpstreaming.protocols.progress import NullProgressRenderer, ProgressRenderer
from httpstreaming.reporter.console import ConsoleProgressRenderer
from httpstreaming.streams.progress import ProgressStream
from httpstreaming.streams.throttle import ThrottledStream
from httpstreaming.transport.adapter import ChunkCallback, StreamingAdapter

logger = logging.getLogger(__name__)


def wrap_stream(
    stream: Any,
    settings: Settings,
    size_hint: int = 0,
    renderer: ProgressRenderer | None = None,
) -> Any:
    """Layer progress and throttling over ``stream`` as configured.

    Args:
        stream: Stream to wrap
        settings: Source of bandwidth_limit, show_progress and size_hint
        size_hint: Expected size, overrides settings.size_hint when non-zero
        renderer: Progress output (default: console when show_progress)

    Returns:
        A ThrottledStream when a bandwidth limit is set, a ProgressStream
        when only progress is wanted, else ``stream`` itself.
    """
    size_hint = size_hint or settings.size_hint
    if renderer is None:
        renderer = ConsoleProgressRenderer() if settings.show_progress else NullProgressRenderer()

    if settings.bandwidth_limit > 0:
        return ThrottledStream(
            stream,
            bandwidth_limit=settings.bandwidth_limit,
            size_hint=size_hint,
            renderer=renderer,
        )
    if settings.show_progress:
        return ProgressStream(stream, size_hint=size_hint, renderer=renderer)
    return stream


class StreamingClient:
    """HTTP client that streams bodies from and to files.

    Features:
    - Request bodies read incrementally from streams
    - Response bodies written incrementally to sinks
    - Downloads to temporary files with atomic rename
    - Progress and bandwidth limiting from settings

    Retries are left to the caller; passing the same streams again is safe
    because every request rewinds them.

    Example:
        >>> import io
        >>> with StreamingClient(base_url="https://example.com") as client:
        ...     sink = io.BytesIO()
        ...     response = client.get("/data.bin", sink=sink)

    Attributes:
        settings: Transfer and HTTP settings
        adapter: The StreamingAdapter used for every request
    """

    def __init__(
        self,
        base_url: str = "",
        settings: Settings | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
        renderer: ProgressRenderer | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL for relative requests
            settings: Settings (default: loaded from environment)
            headers: Additional default headers
            transport: httpx transport (e.g. ``httpx.MockTransport`` in tests)
            renderer: Progress output for download/upload
        """
        self.settings = settings or get_settings()
        self.adapter = StreamingAdapter(
            chunk_size=self.settings.chunk_size,
            debug=self.settings.debug,
        )
        self._base_url = base_url
        self._extra_headers = headers or {}
        self._transport = transport
        self._renderer = renderer
        self._client: httpx.Client | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "*/*",
            **self._extra_headers,
        }

    def _ensure_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self._base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self.settings.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> StreamingClient:
        self._ensure_client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        sink: Any = None,
        on_chunk: ChunkCallback | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a request, streaming body and response where possible.

        Args:
            method: HTTP method
            url: URL (relative to base_url or absolute)
            body: bytes/str body or readable stream
            sink: Writable stream for the response body
            on_chunk: Per-chunk response callback (wins over ``sink``)
            **kwargs: Additional arguments for httpx (headers, params...)

        Returns:
            HTTP response; its body is only available when neither
            ``sink`` nor ``on_chunk`` consumed it
        """
        return self.adapter.send(
            self._ensure_client(),
            method,
            url,
            body=body,
            sink=sink,
            on_chunk=on_chunk,
            **kwargs,
        )

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return self.request("GET", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return self.request("PUT", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return self.request("POST", url, **kwargs)

    def wrap(
        self,
        stream: Any,
        size_hint: int = 0,
        renderer: ProgressRenderer | None = None,
    ) -> Any:
        """Apply the configured progress/throttle layers to ``stream``.

        ``renderer`` overrides the client's renderer for this stream only.
        """
        return wrap_stream(
            stream,
            self.settings,
            size_hint=size_hint,
            renderer=renderer or self._renderer,
        )

    def download(self, url: str, dest: Path | str, **kwargs: Any) -> Path:
        """Download a URL straight to a file.

        Writes to a temporary file next to ``dest`` and renames it into
        place once the transfer succeeded.

        Args:
            url: URL to download
            dest: Destination path
            **kwargs: Additional arguments for httpx

        Returns:
            Path to downloaded file

        Raises:
            DownloadError: If the server answered with an error status
        """
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        temp_path = dest.with_suffix(dest.suffix + ".tmp")

        try:
            with open(temp_path, "wb") as f:
                sink = self.wrap(f)
                try:
                    response = self.request("GET", url, sink=sink, **kwargs)
                finally:
                    sink.close()
            if response.is_error:
                raise DownloadError(url, f"HTTP {response.status_code}")
            temp_path.replace(dest)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug(f"Downloaded {url} to {dest}")
        return dest

    def upload(
        self,
        source: Path | str,
        url: str,
        method: str = "PUT",
        **kwargs: Any,
    ) -> httpx.Response:
        """Upload a file as a streamed request body.

        Args:
            source: File to send
            url: Target URL
            method: HTTP method (default: PUT)
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response

        Raises:
            UploadError: If the server answered with an error status
        """
        path = Path(source)
        size = path.stat().st_size
        headers = {"Content-Length": str(size), **kwargs.pop("headers", {})}

        with open(path, "rb") as f:
            body = self.wrap(f, size_hint=size)
            try:
                response = self.request(method, url, body=body, headers=headers, **kwargs)
            finally:
                body.close()

        if response.is_error:
            raise UploadError(url, f"HTTP {response.status_code}")
        logger.debug(f"Uploaded {path} ({size}b) to {url}")
        return response


__all__ = ["StreamingClient", "wrap_stream"]
