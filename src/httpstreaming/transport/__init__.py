"""Streaming transport adapter for httpx."""

from httpstreaming.transport.adapter import (
    ChunkCallback,
    StreamingAdapter,
    StreamingRequest,
    is_stdout,
)

__all__ = [
    "ChunkCallback",
    "StreamingAdapter",
    "StreamingRequest",
    "is_stdout",
]
