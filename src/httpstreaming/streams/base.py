"""Transparent stream decorator.

``StreamDecorator`` holds an inner stream and forwards every stream
operation to it. Subclasses override only what they instrument, so
progress reporting and throttling can be layered or left out without
callers noticing.

Example:
    >>> import io
    >>> from httpstreaming.streams.base import StreamDecorator
    >>> s = StreamDecorator(io.BytesIO(b"hello"))
    >>> s.read(3)
    b'hel'
    >>> s.rewind()
    >>> s.read()
    b'hello'
"""

from __future__ import annotations

from typing import Any

from httpstreaming.core.exceptions import UnsupportedStreamOperation
from httpstreaming.protocols.stream import Capability, probe_capabilities, rewind_stream


class StreamDecorator:
    """Stream wrapper that forwards everything to an inner stream.

    Capabilities of the inner stream are probed once, at construction, and
    exposed unchanged through ``capabilities`` and ``supports()``. Calling an
    operation the inner stream lacks raises ``UnsupportedStreamOperation``.

    Attributes:
        inner: The wrapped stream
        capabilities: Operations the wrapped stream supports
    """

    def __init__(self, inner: Any):
        self._inner = inner
        self._capabilities = probe_capabilities(inner)

    @property
    def inner(self) -> Any:
        """The wrapped stream."""
        return self._inner

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Operations the wrapped stream supports."""
        return self._capabilities

    def supports(self, capability: Capability) -> bool:
        """Check whether the wrapped stream supports ``capability``."""
        return capability in self._capabilities

    def _require(self, capability: Capability) -> None:
        if capability not in self._capabilities:
            raise UnsupportedStreamOperation(capability.value, self._inner)

    # io-style introspection

    def readable(self) -> bool:
        return Capability.READ in self._capabilities

    def writable(self) -> bool:
        return Capability.WRITE in self._capabilities

    def seekable(self) -> bool:
        seekable = getattr(self._inner, "seekable", None)
        return bool(seekable()) if callable(seekable) else False

    @property
    def closed(self) -> bool:
        return bool(getattr(self._inner, "closed", False))

    @property
    def name(self) -> Any:
        return getattr(self._inner, "name", None)

    # Forwarded operations

    def read(self, size: int = -1) -> bytes:
        self._require(Capability.READ)
        return self._inner.read(size)

    def write(self, data: bytes) -> int | None:
        self._require(Capability.WRITE)
        return self._inner.write(data)

    def rewind(self) -> None:
        self._require(Capability.REWIND)
        rewind_stream(self._inner)

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._inner.seek(offset, whence)

    def tell(self) -> int:
        return self._inner.tell()

    def flush(self) -> None:
        flush = getattr(self._inner, "flush", None)
        if callable(flush):
            flush()

    def fileno(self) -> int:
        return self._inner.fileno()

    def close(self) -> None:
        # nothing to release on streams without close()
        if Capability.CLOSE in self._capabilities:
            self._inner.close()

    def __enter__(self) -> StreamDecorator:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inner!r})"


def unwrap(stream: Any) -> Any:
    """Strip every decorator layer and return the innermost stream.

    Example:
        >>> import io
        >>> raw = io.BytesIO()
        >>> unwrap(StreamDecorator(StreamDecorator(raw))) is raw
        True
    """
    while isinstance(stream, StreamDecorator):
        stream = stream.inner
    return stream


__all__ = ["StreamDecorator", "unwrap"]
