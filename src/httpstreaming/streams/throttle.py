"""Bandwidth-throttled stream.

Caps the average transfer rate of a stream. Reads are clamped to a chunk
cap so a single call cannot burst far beyond the limit, and after each
chunk the limiter sleeps off whatever time the transfer was ahead of
schedule. Measured oversleep or undersleep is carried into the next sleep
as a correction, so the average rate converges on the target despite
scheduler jitter.

Example:
    >>> import io
    >>> from httpstreaming.protocols.progress import NullProgressRenderer
    >>> from httpstreaming.streams.throttle import ThrottledStream
    >>> s = ThrottledStream(
    ...     io.BytesIO(b"x" * 4096),
    ...     bandwidth_limit=0,
    ...     renderer=NullProgressRenderer(),
    ... )
    >>> len(s.read(4096))  # unlimited streams still read at most 512 bytes
    512
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from httpstreaming.core.exceptions import ConfigurationError
from httpstreaming.protocols.progress import ProgressRenderer
from httpstreaming.streams.progress import ProgressStream

logger = logging.getLogger(__name__)

# Smallest chunk cap, also used when throttling is disabled
MIN_CHUNK_CAP = 512

# The chunk cap holds this many seconds' worth of bytes at the target rate
CHUNK_CAP_SECONDS = 128

# Sleeps shorter than this are deferred and folded into a later one
DEFER_THRESHOLD = 0.2

# Bound on the scheduling correction carried between sleeps
MAX_SLEEP_ADJUSTMENT = 0.5


class LimiterState(Enum):
    """Where the limiter stands after its last rate-control step."""
    ACCUMULATING = "accumulating"
    SLEEPING = "sleeping"
    DEFERRED = "deferred"


class BandwidthLimiter:
    """Self-correcting chunked-sleep rate limiter.

    Bytes are counted into a window. After each chunk the limiter compares
    the time the window's bytes should have taken at ``target_rate`` with
    the time that actually passed, and sleeps the difference. Short sleeps
    (under 0.2s) are deferred: the window keeps growing until the owed
    sleep is worth taking.

    Example:
        >>> limiter = BandwidthLimiter(target_rate=1000)
        >>> limiter.chunk_cap
        128000
        >>> limiter.clamp(1_000_000)
        128000

    Attributes:
        target_rate: Bytes per second, 0 = unlimited
        chunk_cap: Largest number of bytes handled per chunk
        window_start: Clock reading when the current window opened
        bytes_in_window: Bytes counted since the window opened
        sleep_adjustment: Correction added to the next sleep, in seconds
        state: Outcome of the last rate-control step
    """

    def __init__(
        self,
        target_rate: int = 0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the limiter.

        Args:
            target_rate: Bytes per second (0 disables throttling)
            clock: Monotonic time source in seconds
            sleep: Blocking sleep function

        Raises:
            ConfigurationError: If target_rate is negative
        """
        if target_rate < 0:
            raise ConfigurationError(f"Bandwidth limit must be >= 0, got {target_rate}")
        self.target_rate = target_rate
        self.chunk_cap = max(MIN_CHUNK_CAP, target_rate * CHUNK_CAP_SECONDS)
        self._clock = clock
        self._sleep = sleep
        self.window_start = clock()
        self.bytes_in_window = 0
        self.sleep_adjustment = 0.0
        self.state = LimiterState.ACCUMULATING

    @property
    def enabled(self) -> bool:
        return self.target_rate > 0

    def clamp(self, size: int | None) -> int:
        """Limit a requested chunk size to the chunk cap.

        A negative or missing size ("everything") becomes the cap.
        """
        if size is None or size < 0:
            return self.chunk_cap
        return min(size, self.chunk_cap)

    def reset(self) -> None:
        """Open a fresh window, keeping the learned sleep adjustment."""
        self.window_start = self._clock()
        self.bytes_in_window = 0
        self.state = LimiterState.ACCUMULATING

    def pace(self, nbytes: int) -> float:
        """Count ``nbytes`` and sleep if the transfer is ahead of schedule.

        Args:
            nbytes: Bytes just transferred

        Returns:
            Seconds actually slept (0.0 when nothing was slept)
        """
        if not self.enabled:
            return 0.0

        self.bytes_in_window += nbytes
        elapsed = self._clock() - self.window_start
        expected = self.bytes_in_window / self.target_rate

        slept = 0.0
        if expected > elapsed:
            to_sleep = expected - elapsed + self.sleep_adjustment
            if to_sleep < DEFER_THRESHOLD:
                self.state = LimiterState.DEFERRED
                return 0.0

            self.state = LimiterState.SLEEPING
            t0 = self._clock()
            self._sleep(to_sleep)
            slept = self._clock() - t0
            self.sleep_adjustment = max(
                -MAX_SLEEP_ADJUSTMENT,
                min(MAX_SLEEP_ADJUSTMENT, to_sleep - slept),
            )
            logger.debug(
                f"Throttled {self.bytes_in_window}b: slept {slept:.3f}s "
                f"(wanted {to_sleep:.3f}s, adjustment {self.sleep_adjustment:+.3f}s)"
            )

        self.reset()
        return slept


class ThrottledStream(ProgressStream):
    """Stream decorator that enforces an upper bound on throughput.

    Also reports progress like ``ProgressStream``. Both directions are
    throttled: reads are clamped to the chunk cap, writes are split into
    chunk-cap slices, and each chunk is paced by the limiter.

    Note that ``read()`` with no size returns at most one chunk, not the
    whole stream; loop until ``b""`` to drain it. ``write()`` retries the
    unwritten tail after a short write and returns early only when the
    inner stream accepts nothing.

    Example:
        >>> import io
        >>> from httpstreaming.protocols.progress import NullProgressRenderer
        >>> s = ThrottledStream(io.BytesIO(), renderer=NullProgressRenderer())
        >>> s.write(b"y" * 2000)
        2000
        >>> s.transferred_bytes
        2000
    """

    def __init__(
        self,
        inner: Any,
        bandwidth_limit: int = 0,
        size_hint: int = 0,
        renderer: ProgressRenderer | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Wrap a stream.

        Args:
            inner: Stream to throttle
            bandwidth_limit: Bytes per second (0 = unlimited)
            size_hint: Expected total bytes (0 = unknown)
            renderer: Progress output target (default: console on stdout)
            clock: Monotonic time source in seconds
            sleep: Blocking sleep function
        """
        super().__init__(inner, size_hint=size_hint, renderer=renderer, clock=clock)
        self._limiter = BandwidthLimiter(bandwidth_limit, clock=clock, sleep=sleep)

    @property
    def limiter(self) -> BandwidthLimiter:
        return self._limiter

    def read(self, size: int = -1) -> bytes:
        data = super().read(self._limiter.clamp(size))
        self._limiter.pace(len(data) if data is not None else 0)
        return data

    def write(self, data: bytes) -> int:
        view = memoryview(data)
        cap = self._limiter.chunk_cap
        total = 0
        while total < len(view):
            piece = view[total:total + cap].tobytes()
            written = super().write(piece)
            if written is None:
                written = len(piece)
            self._limiter.pace(written)
            if written == 0:
                # inner stream cannot take more right now
                break
            total += written
        return total

    def rewind(self) -> None:
        super().rewind()
        self._limiter.reset()


__all__ = [
    "BandwidthLimiter",
    "LimiterState",
    "ThrottledStream",
]
