"""Streaming transport adapter.

Decides, per request, whether a body and a response sink are streams, and
wires chunked transfer through httpx accordingly:

- a readable body is sent incrementally as an iterator of chunks instead of
  an in-memory value;
- a writable sink receives the response body chunk by chunk.

Both are rewound first (except standard output), so the same stream
objects can be passed again verbatim when a request is retried.

Example:
    >>> import io
    >>> import httpx
    >>> from httpstreaming.transport import StreamingAdapter
    >>>
    >>> adapter = StreamingAdapter()
    >>> sink = io.BytesIO()
    >>> with httpx.Client() as client:
    ...     response = adapter.send(client, "GET", "https://example.com/big", sink=sink)
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import httpx

from httpstreaming.protocols.stream import Capability, rewind_stream, supports
from httpstreaming.streams.base import unwrap

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[bytes], Any]

DEFAULT_CHUNK_SIZE = 65536

# Pause before re-reading a non-blocking body that had no data ready
DEFAULT_POLL_INTERVAL = 0.01


def is_stdout(stream: Any) -> bool:
    """Check whether ``stream`` (or what it decorates) is standard output."""
    raw = unwrap(stream)
    for candidate in (sys.stdout, sys.__stdout__):
        if candidate is None:
            continue
        if raw is candidate or raw is getattr(candidate, "buffer", None):
            return True
    return False


@dataclass
class StreamingRequest:
    """Body and sink of one request/response exchange.

    Attributes:
        body: In-memory body or readable stream
        sink: Writable stream receiving the response body
        on_chunk: Callback consuming response chunks, if any
        streams_body: Whether the body is sent from a stream
        streams_response: Whether the response is forwarded to the sink
    """
    body: Any = None
    sink: Any = None
    on_chunk: ChunkCallback | None = None
    streams_body: bool = False
    streams_response: bool = False


class StreamingAdapter:
    """Glue between caller-supplied streams and an ``httpx.Client``.

    Precedence: an explicit ``on_chunk`` callback always wins over a sink.

    Attributes:
        chunk_size: Bytes requested per body read and per response chunk
        debug: Log a notice whenever a request or response is streamed
        poll_interval: Seconds to wait when a non-blocking body has no data
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        debug: bool = False,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.chunk_size = chunk_size
        self.debug = debug
        self.poll_interval = poll_interval
        self._sleep = sleep

    def prepare(
        self,
        body: Any = None,
        sink: Any = None,
        on_chunk: ChunkCallback | None = None,
    ) -> StreamingRequest:
        """Decide streaming vs buffered mode and rewind the streams.

        Args:
            body: bytes/str body, a readable stream, or None
            sink: Writable stream for the response body, or None
            on_chunk: Explicit per-chunk response callback

        Returns:
            The resolved exchange
        """
        exchange = StreamingRequest(body=body, sink=sink, on_chunk=on_chunk)

        if on_chunk is None and supports(sink, Capability.WRITE):
            if self.debug:
                logger.info("Response using streaming")
            # might be a retry, start the sink over
            if supports(sink, Capability.REWIND) and not is_stdout(sink):
                rewind_stream(sink)
            exchange.on_chunk = sink.write
            exchange.streams_response = True

        if body is not None and supports(body, Capability.READ):
            if self.debug:
                logger.info("Request using streaming")
            if supports(body, Capability.REWIND):
                rewind_stream(body)
            exchange.streams_body = True

        return exchange

    def iter_body(self, stream: Any) -> Iterator[bytes]:
        """Read ``stream`` in chunks until it returns ``b""``.

        A ``None`` result (non-blocking stream with nothing available yet)
        is not end of stream: the read is retried after a short pause.
        """
        while True:
            chunk = stream.read(self.chunk_size)
            if chunk is None:
                self._sleep(self.poll_interval)
                continue
            if not chunk:
                return
            yield chunk

    def content_for(self, exchange: StreamingRequest) -> Any:
        """The value to hand httpx as request content."""
        if exchange.streams_body:
            return self.iter_body(exchange.body)
        return exchange.body

    def send(
        self,
        client: httpx.Client,
        method: str,
        url: httpx.URL | str,
        *,
        body: Any = None,
        sink: Any = None,
        on_chunk: ChunkCallback | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request, streaming body and/or response as decided.

        When a callback is in effect (explicit or installed for the sink),
        the response body is consumed chunk by chunk and not kept on the
        returned response. Otherwise it is read into memory as usual.

        Args:
            client: httpx client doing the transport
            method: HTTP method
            url: Request URL
            body: bytes/str body or readable stream
            sink: Writable stream for the response body
            on_chunk: Explicit per-chunk response callback
            **kwargs: Passed to ``client.build_request`` (headers, params...)

        Returns:
            The closed response

        Raises:
            httpx.HTTPError: Transport failures, unchanged
            OSError: Stream I/O failures, unchanged
        """
        exchange = self.prepare(body, sink, on_chunk)
        request = client.build_request(
            method,
            url,
            content=self.content_for(exchange),
            **kwargs,
        )
        response = client.send(request, stream=True)
        try:
            if exchange.on_chunk is not None:
                for chunk in response.iter_bytes(self.chunk_size):
                    exchange.on_chunk(chunk)
            else:
                response.read()
        finally:
            response.close()
        return response


__all__ = [
    "ChunkCallback",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_POLL_INTERVAL",
    "StreamingAdapter",
    "StreamingRequest",
    "is_stdout",
]
