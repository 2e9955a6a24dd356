"""Stream capability protocols.

A stream is any byte endpoint. Which operations it supports is probed,
never assumed: a plain file opened for writing has a ``read`` method that
raises, a socket wrapper may have no ``rewind`` at all.

Example:
    >>> import io
    >>> from httpstreaming.protocols.stream import Capability, probe_capabilities
    >>> caps = probe_capabilities(io.BytesIO(b"data"))
    >>> Capability.READ in caps and Capability.REWIND in caps
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class Capability(Enum):
    """Operations a stream may support."""
    READ = "read"
    WRITE = "write"
    REWIND = "rewind"
    CLOSE = "close"


@runtime_checkable
class Readable(Protocol):
    """Stream that yields bytes.

    ``read`` may return fewer bytes than requested; only an empty result
    means end of stream.
    """

    def read(self, size: int = -1) -> bytes:
        ...


@runtime_checkable
class Writable(Protocol):
    """Stream that accepts bytes."""

    def write(self, data: bytes) -> int | None:
        ...


@runtime_checkable
class Rewindable(Protocol):
    """Stream that can return to its initial position."""

    def rewind(self) -> None:
        ...


@runtime_checkable
class Closable(Protocol):
    """Stream that can be closed."""

    def close(self) -> None:
        ...


def _io_flag(stream: Any, predicate: str) -> bool | None:
    """Ask an io-style stream about itself (``readable()``, ``seekable()``...).

    Returns None when the stream does not answer the question.
    """
    check = getattr(stream, predicate, None)
    if not callable(check):
        return None
    try:
        return bool(check())
    except ValueError:
        # io objects raise ValueError once closed
        return False


def _has_method(stream: Any, name: str) -> bool:
    return callable(getattr(stream, name, None))


def probe_capabilities(stream: Any) -> frozenset[Capability]:
    """Probe which operations ``stream`` supports.

    Streams that already know their capabilities (decorators) are trusted.
    io objects are asked via ``readable()``/``writable()``/``seekable()``;
    anything else is judged by the methods it has. A seekable stream
    without ``rewind()`` counts as rewindable via ``seek(0)``.

    Args:
        stream: Any object

    Returns:
        The set of supported capabilities
    """
    known = getattr(stream, "capabilities", None)
    if isinstance(known, frozenset):
        return known

    caps: set[Capability] = set()
    if _has_method(stream, "read") and _io_flag(stream, "readable") is not False:
        caps.add(Capability.READ)
    if _has_method(stream, "write") and _io_flag(stream, "writable") is not False:
        caps.add(Capability.WRITE)
    if _has_method(stream, "rewind"):
        caps.add(Capability.REWIND)
    elif _has_method(stream, "seek") and _io_flag(stream, "seekable"):
        caps.add(Capability.REWIND)
    if _has_method(stream, "close"):
        caps.add(Capability.CLOSE)
    return frozenset(caps)


def supports(stream: Any, capability: Capability) -> bool:
    """Check whether ``stream`` supports ``capability``.

    Example:
        >>> import io
        >>> supports(io.BytesIO(), Capability.WRITE)
        True
        >>> supports(b"in-memory", Capability.READ)
        False
    """
    if stream is None:
        return False
    return capability in probe_capabilities(stream)


def rewind_stream(stream: Any) -> None:
    """Return ``stream`` to its start, via ``rewind()`` or ``seek(0)``."""
    if _has_method(stream, "rewind"):
        stream.rewind()
    else:
        stream.seek(0)


__all__ = [
    "Capability",
    "Closable",
    "Readable",
    "Rewindable",
    "Writable",
    "probe_capabilities",
    "rewind_stream",
    "supports",
]
