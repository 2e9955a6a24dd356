"""Tests for httpstreaming.transport.adapter."""

from __future__ import annotations

import io
import logging
import sys

import httpx
import pytest

from httpstreaming.protocols.progress import NullProgressRenderer
from httpstreaming.streams.progress import ProgressStream
from httpstreaming.transport.adapter import StreamingAdapter, is_stdout

RESPONSE_BODY = bytes(range(256)) * 1000


class Recorder:
    """MockTransport handler recording received request bodies."""

    def __init__(self, body: bytes = RESPONSE_BODY, status: int = 200) -> None:
        self.body = body
        self.status = status
        self.requests: list[httpx.Request] = []
        self.received: list[bytes] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.received.append(request.read())
        return httpx.Response(self.status, content=self.body)


class CountingSink(io.BytesIO):
    """BytesIO counting write calls and rewinds."""

    def __init__(self) -> None:
        super().__init__()
        self.write_calls = 0
        self.rewinds = 0

    def write(self, data) -> int:
        self.write_calls += 1
        return super().write(data)

    def rewind(self) -> None:
        self.rewinds += 1
        self.seek(0)
        self.truncate()


@pytest.fixture
def recorder() -> Recorder:
    """A transport handler returning a 256000 byte body."""
    return Recorder()


@pytest.fixture
def client(recorder: Recorder) -> httpx.Client:
    """An httpx client backed by the recorder."""
    with httpx.Client(transport=httpx.MockTransport(recorder)) as c:
        yield c


class TestPrepare:
    """Streaming/buffered decision tests."""

    def test_nothing_to_stream(self) -> None:
        """bytes body and no sink stay buffered."""
        exchange = StreamingAdapter().prepare(body=b"payload")
        assert exchange.streams_body is False
        assert exchange.streams_response is False
        assert exchange.on_chunk is None

    def test_readable_body_streams(self) -> None:
        """A readable body is streamed and rewound first."""
        body = io.BytesIO(b"abcdef")
        body.read(3)
        exchange = StreamingAdapter().prepare(body=body)
        assert exchange.streams_body is True
        assert body.tell() == 0

    def test_writable_sink_streams(self) -> None:
        """A writable sink gets a chunk callback and is rewound first."""
        sink = CountingSink()
        exchange = StreamingAdapter().prepare(sink=sink)
        assert exchange.streams_response is True
        assert exchange.on_chunk is not None
        assert sink.rewinds == 1

    def test_read_only_sink_ignored(self) -> None:
        """A sink without write support is not used."""

        class Pipe:
            def read(self, size: int = -1) -> bytes:
                return b""

        exchange = StreamingAdapter().prepare(sink=Pipe())
        assert exchange.streams_response is False
        assert exchange.on_chunk is None

    def test_callback_wins_over_sink(self) -> None:
        """An explicit callback is kept and the sink is left untouched."""
        sink = CountingSink()
        exchange = StreamingAdapter().prepare(sink=sink, on_chunk=print)
        assert exchange.on_chunk is print
        assert exchange.streams_response is False
        assert sink.rewinds == 0

    def test_stdout_never_rewound(self, monkeypatch) -> None:
        """Standard output is written to but never rewound."""
        fake_stdout = CountingSink()
        monkeypatch.setattr(sys, "stdout", fake_stdout)
        exchange = StreamingAdapter().prepare(sink=fake_stdout)
        assert exchange.streams_response is True
        assert fake_stdout.rewinds == 0

    def test_decorated_stdout_never_rewound(self, monkeypatch) -> None:
        """A decorator around standard output counts as standard output."""
        fake_stdout = CountingSink()
        monkeypatch.setattr(sys, "stdout", fake_stdout)
        sink = ProgressStream(fake_stdout, renderer=NullProgressRenderer())
        assert is_stdout(sink)
        StreamingAdapter().prepare(sink=sink)
        assert fake_stdout.rewinds == 0

    def test_debug_notices(self, caplog) -> None:
        """debug=True logs streaming notices."""
        with caplog.at_level(logging.INFO, logger="httpstreaming.transport.adapter"):
            StreamingAdapter(debug=True).prepare(body=io.BytesIO(b"x"), sink=io.BytesIO())
        messages = [r.getMessage() for r in caplog.records]
        assert "Response using streaming" in messages
        assert "Request using streaming" in messages

    def test_no_notices_without_debug(self, caplog) -> None:
        """Notices are silent by default."""
        with caplog.at_level(logging.DEBUG, logger="httpstreaming.transport.adapter"):
            StreamingAdapter().prepare(body=io.BytesIO(b"x"), sink=io.BytesIO())
        assert caplog.records == []


class TestSend:
    """End-to-end tests against httpx.MockTransport."""

    def test_streamed_body_is_sent(self, client, recorder) -> None:
        """A stream body reaches the server intact."""
        payload = b"q" * 200_000
        StreamingAdapter(chunk_size=4096).send(
            client, "PUT", "https://example.com/up", body=io.BytesIO(payload)
        )
        assert recorder.received == [payload]

    def test_body_read_in_chunks(self, client, recorder) -> None:
        """The body stream is read incrementally, chunk_size at a time."""
        reads: list[int] = []

        class Body(io.BytesIO):
            def read(self, size=-1):
                reads.append(size)
                return super().read(size)

        StreamingAdapter(chunk_size=1000).send(
            client, "POST", "https://example.com/up", body=Body(b"a" * 2500)
        )
        assert reads == [1000, 1000, 1000, 1000]
        assert recorder.received == [b"a" * 2500]

    def test_body_not_ready_is_not_end(self, client, recorder) -> None:
        """A None read is waited out; only b"" ends the body."""
        results = iter([None, b"first", None, None, b"second", b""])
        pauses: list[float] = []

        class NonBlocking:
            def read(self, size: int = -1):
                return next(results)

        adapter = StreamingAdapter(poll_interval=0.05, sleep=pauses.append)
        adapter.send(client, "PUT", "https://example.com/up", body=NonBlocking())
        assert recorder.received == [b"firstsecond"]
        assert pauses == [0.05, 0.05, 0.05]

    def test_in_memory_body(self, client, recorder) -> None:
        """bytes bodies are sent as usual."""
        response = StreamingAdapter().send(
            client, "POST", "https://example.com/up", body=b"hello"
        )
        assert recorder.received == [b"hello"]
        assert response.content == RESPONSE_BODY

    def test_sink_receives_full_body(self, client) -> None:
        """Concatenated sink writes equal the full response body."""
        sink = CountingSink()
        StreamingAdapter(chunk_size=1024).send(
            client, "GET", "https://example.com/big", sink=sink
        )
        assert sink.getvalue() == RESPONSE_BODY
        assert sink.write_calls >= len(RESPONSE_BODY) // 1024

    def test_callback_used_instead_of_sink(self, client) -> None:
        """Given a callback and a sink, only the callback sees the body."""
        sink = CountingSink()
        chunks: list[bytes] = []
        StreamingAdapter().send(
            client,
            "GET",
            "https://example.com/big",
            sink=sink,
            on_chunk=chunks.append,
        )
        assert b"".join(chunks) == RESPONSE_BODY
        assert sink.write_calls == 0
        assert sink.getvalue() == b""

    def test_retry_reuses_streams(self, client, recorder) -> None:
        """Sending twice with the same decorated streams is idempotent."""
        payload = b"retry" * 1000
        body = ProgressStream(io.BytesIO(payload), renderer=NullProgressRenderer())
        sink = ProgressStream(CountingSink(), renderer=NullProgressRenderer())
        adapter = StreamingAdapter()

        adapter.send(client, "PUT", "https://example.com/r", body=body, sink=sink)
        adapter.send(client, "PUT", "https://example.com/r", body=body, sink=sink)

        assert recorder.received == [payload, payload]
        assert sink.inner.getvalue() == RESPONSE_BODY
        assert body.transferred_bytes == len(payload)
        assert sink.transferred_bytes == len(RESPONSE_BODY)

    def test_transport_errors_propagate(self) -> None:
        """Transport failures reach the caller unchanged."""

        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(fail)) as c:
            with pytest.raises(httpx.ConnectError):
                StreamingAdapter().send(c, "GET", "https://example.com/", sink=io.BytesIO())

    def test_sink_errors_propagate(self, client) -> None:
        """Sink write failures reach the caller unchanged."""

        class Full(io.BytesIO):
            def write(self, data) -> int:
                raise OSError("No space left on device")

        with pytest.raises(OSError, match="No space"):
            StreamingAdapter().send(client, "GET", "https://example.com/", sink=Full())
