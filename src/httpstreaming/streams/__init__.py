"""Stream decorators.

Example:
    >>> from httpstreaming.streams import ProgressStream, ThrottledStream
    >>>
    >>> # Progress only
    >>> stream = ProgressStream(open("big.bin", "rb"), size_hint=10_000_000)
    >>>
    >>> # Progress and a 64 KiB/s cap
    >>> stream = ThrottledStream(open("big.bin", "rb"), bandwidth_limit=65536)
"""

from httpstreaming.streams.base import StreamDecorator, unwrap
from httpstreaming.streams.progress import ProgressMeter, ProgressStream
from httpstreaming.streams.throttle import BandwidthLimiter, LimiterState, ThrottledStream

__all__ = [
    "BandwidthLimiter",
    "LimiterState",
    "ProgressMeter",
    "ProgressStream",
    "StreamDecorator",
    "ThrottledStream",
    "unwrap",
]
