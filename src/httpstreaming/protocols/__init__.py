"""Protocols for streams and progress output."""

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
    rewind_stream,
    supports,
)

__all__ = [
    # Streams
    "Capability",
    "Closable",
    "Readable",
    "Rewindable",
    "Writable",
    "probe_capabilities",
    "rewind_stream",
    "supports",
    # Progress
    "CallbackProgressRenderer",
    "NullProgressRenderer",
    "ProgressRenderer",
    "TransferSnapshot",
]
