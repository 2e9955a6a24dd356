"""
httpstreaming - Streamed HTTP bodies with progress and bandwidth limiting.

httpstreaming lets an httpx client send request bodies from, and write
response bodies to, byte streams without buffering them in memory, and
provides transparent stream decorators that report progress or cap
throughput.

Key Features:
- Capability-probed streams (read / write / rewind / close)
- Transparent decorators that compose or drop out without caller changes
- Self-correcting bandwidth throttle
- Retry-safe: every request rewinds the streams it is given

Quick Start:
    >>> from httpstreaming import StreamingClient, ThrottledStream
    >>> with StreamingClient() as client, open("big.iso", "rb") as f:
    ...     body = ThrottledStream(f, bandwidth_limit=65536)
    ...     client.put("https://example.com/big.iso", body=body)

Architecture:
    Streams: StreamDecorator, ProgressStream, ThrottledStream
    Transport: StreamingAdapter, StreamingRequest
    Client: StreamingClient
    Renderers: ConsoleProgressRenderer, LoggingProgressRenderer, RichProgressRenderer
"""

# Core
from httpstreaming.core.config import Settings, get_settings
from httpstreaming.core.exceptions import (
    ConfigurationError,
    DownloadError,
    HttpStreamingError,
    TransferError,
    UnsupportedStreamOperation,
    UploadError,
)

# Client
from httpstreaming.http.client import StreamingClient, wrap_stream

# Protocols
from httpstreaming.protocols.progress import (
    CallbackProgressRenderer,
    NullProgressRenderer,
    ProgressRenderer,
    TransferSnapshot,
)
from httpstreaming.protocols.stream import (
    Capability,
    Closable,
    Readable,
    Rewindable,
    Writable,
    probe_capabilities,
    supports,
)

# Renderers
from httpstreaming.reporter import (
    ConsoleProgressRenderer,
    LoggingProgressRenderer,
    RichProgressRenderer,
)

# Streams
from httpstreaming.streams import (
    BandwidthLimiter,
    LimiterState,
    ProgressMeter,
    ProgressStream,
    StreamDecorator,
    ThrottledStream,
)

# Transport
from httpstreaming.transport import StreamingAdapter, StreamingRequest

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "ConfigurationError",
    "DownloadError",
    "HttpStreamingError",
    "Settings",
    "TransferError",
    "UnsupportedStreamOperation",
    "UploadError",
    "get_settings",
    # Client
    "StreamingClient",
    "wrap_stream",
    # Protocols
    "CallbackProgressRenderer",
    "Capability",
    "Closable",
    "NullProgressRenderer",
    "ProgressRenderer",
    "Readable",
    "Rewindable",
    "TransferSnapshot",
    "Writable",
    "probe_capabilities",
    "supports",
    # Renderers
    "ConsoleProgressRenderer",
    "LoggingProgressRenderer",
    "RichProgressRenderer",
    # Streams
    "BandwidthLimiter",
    "LimiterState",
    "ProgressMeter",
    "ProgressStream",
    "StreamDecorator",
    "ThrottledStream",
    # Transport
    "StreamingAdapter",
    "StreamingRequest",
]
