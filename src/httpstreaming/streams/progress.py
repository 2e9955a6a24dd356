"""Progress-instrumented stream.

Counts the bytes read from or written to a stream and periodically renders
a progress line.

Example:
    >>> import io
    >>> from httpstreaming.protocols.progress import NullProgressRenderer
    >>> from httpstreaming.streams.progress import ProgressStream
    >>> s = ProgressStream(io.BytesIO(b"x" * 100), renderer=NullProgressRenderer())
    >>> len(s.read(60)) + len(s.read(60))
    100
    >>> s.transferred_bytes
    100
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from httpstreaming.protocols.progress import ProgressRenderer, TransferSnapshot
from httpstreaming.protocols.stream import Capability, rewind_stream
from httpstreaming.reporter.console import ConsoleProgressRenderer
from httpstreaming.streams.base import StreamDecorator

# Minimum seconds between two rendered progress lines
EMIT_INTERVAL = 1.0


@dataclass
class ProgressMeter:
    """Transfer accounting for one stream.

    Attributes:
        start_time: Clock reading when the stream was wrapped
        last_emit_time: Clock reading of the last rendered line
        total_size_hint: Expected size in bytes, 0 when unknown
        transferred_bytes: Bytes moved since start or last rewind
        closed: Whether the stream has been closed
        ever_printed: Whether any progress line was rendered
    """
    start_time: float
    last_emit_time: float
    total_size_hint: int = 0
    transferred_bytes: int = 0
    closed: bool = False
    ever_printed: bool = False

    def add(self, nbytes: int) -> None:
        self.transferred_bytes += nbytes

    def reset(self) -> None:
        self.transferred_bytes = 0

    def due(self, now: float) -> bool:
        """True when a line may be rendered at ``now``."""
        return now - self.last_emit_time >= EMIT_INTERVAL

    def snapshot(self, now: float) -> TransferSnapshot | None:
        """Current state, or None when no finite rate can be computed yet."""
        try:
            rate = math.floor(self.transferred_bytes / (now - self.start_time))
        except (ZeroDivisionError, OverflowError, ValueError):
            return None
        return TransferSnapshot(
            transferred=self.transferred_bytes,
            rate=rate,
            total=self.total_size_hint,
        )

    def mark_emitted(self, now: float) -> None:
        self.ever_printed = True
        self.last_emit_time = now

    def mark_closed(self) -> bool:
        """Record closure; True if a trailing newline is owed."""
        owed = self.ever_printed and not self.closed
        self.closed = True
        return owed


class ProgressStream(StreamDecorator):
    """Stream decorator that reports transfer progress.

    Every ``read``/``write`` adds the bytes moved to the meter; at most once
    per second the current state is handed to the renderer. ``rewind``
    resets the count so a retried request reports from zero.

    Example:
        >>> import io
        >>> from httpstreaming.protocols.progress import NullProgressRenderer
        >>> s = ProgressStream(io.BytesIO(), renderer=NullProgressRenderer())
        >>> s.write(b"abc")
        3
        >>> s.rewind()
        >>> s.transferred_bytes
        0

    Attributes:
        meter: The stream's ProgressMeter
    """

    def __init__(
        self,
        inner: Any,
        size_hint: int = 0,
        renderer: ProgressRenderer | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Wrap a stream.

        Args:
            inner: Stream to instrument
            size_hint: Expected total bytes (0 = unknown, no percentage)
            renderer: Progress output target (default: console on stdout)
            clock: Monotonic time source in seconds
        """
        super().__init__(inner)
        self._clock = clock
        self._renderer = renderer if renderer is not None else ConsoleProgressRenderer()
        now = clock()
        self._meter = ProgressMeter(
            start_time=now,
            last_emit_time=now,
            total_size_hint=size_hint,
        )

    @property
    def meter(self) -> ProgressMeter:
        return self._meter

    @property
    def transferred_bytes(self) -> int:
        return self._meter.transferred_bytes

    def _record(self, nbytes: int) -> None:
        self._meter.add(nbytes)
        now = self._clock()
        if not self._meter.due(now):
            return
        snapshot = self._meter.snapshot(now)
        if snapshot is None:
            return
        self._renderer.render(snapshot)
        self._meter.mark_emitted(now)

    def read(self, size: int = -1) -> bytes:
        data = super().read(size)
        self._record(len(data) if data is not None else 0)
        return data

    def write(self, data: bytes) -> int | None:
        written = super().write(data)
        # raw streams may accept only part of the data
        self._record(written if isinstance(written, int) else len(data))
        return written

    def rewind(self) -> None:
        self._meter.reset()
        if self.supports(Capability.REWIND):
            rewind_stream(self._inner)

    def finish(self) -> None:
        """End the progress display without closing the inner stream.

        For sinks that must stay open, such as standard output. The
        trailing newline is still emitted at most once.
        """
        if self._meter.mark_closed():
            self._renderer.finish()

    def close(self) -> None:
        self.finish()
        super().close()


__all__ = ["EMIT_INTERVAL", "ProgressMeter", "ProgressStream"]
