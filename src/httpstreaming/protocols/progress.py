"""Progress rendering protocol.

Progress-instrumented streams hand a ``TransferSnapshot`` to a
``ProgressRenderer`` at most once per second, and call ``finish()`` once
when a stream that rendered something is closed.

Example:
    >>> from httpstreaming.protocols.progress import TransferSnapshot
    >>> TransferSnapshot(transferred=512, rate=256, total=1024).format()
    'Progress: 512b 256b/s 50%'
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class TransferSnapshot:
    """State of a transfer at the moment it is rendered.

    Attributes:
        transferred: Bytes moved since start (or last rewind)
        rate: Average bytes per second since the stream was created
        total: Expected total size, 0 when unknown
    """
    transferred: int
    rate: int
    total: int = 0

    @property
    def percent(self) -> str:
        """Completion as ``"NN%"``, blank when the total is unknown."""
        if self.total <= 0:
            return ""
        return f"{100 * self.transferred // self.total}%"

    def format(self) -> str:
        """Render the one-line progress text (without carriage return)."""
        return f"Progress: {self.transferred}b {self.rate}b/s {self.percent}"


@runtime_checkable
class ProgressRenderer(Protocol):
    """Protocol for progress output targets.

    Example:
        >>> class ListRenderer:
        ...     def __init__(self):
        ...         self.lines = []
        ...     def render(self, snapshot: TransferSnapshot) -> None:
        ...         self.lines.append(snapshot.format())
        ...     def finish(self) -> None:
        ...         self.lines.append("done")
    """

    def render(self, snapshot: TransferSnapshot) -> None:
        """Show the current transfer state, replacing the previous one."""
        ...

    def finish(self) -> None:
        """Terminate the progress display."""
        ...


class NullProgressRenderer:
    """No-op renderer."""

    def render(self, snapshot: TransferSnapshot) -> None:
        pass

    def finish(self) -> None:
        pass


class CallbackProgressRenderer:
    """Renderer that forwards snapshots to callables.

    Example:
        >>> seen = []
        >>> renderer = CallbackProgressRenderer(seen.append)
        >>> renderer.render(TransferSnapshot(transferred=1, rate=1))
        >>> seen[0].transferred
        1
    """

    def __init__(
        self,
        on_render: Callable[[TransferSnapshot], None] | None = None,
        on_finish: Callable[[], None] | None = None,
    ):
        self._on_render = on_render
        self._on_finish = on_finish

    def render(self, snapshot: TransferSnapshot) -> None:
        if self._on_render:
            self._on_render(snapshot)

    def finish(self) -> None:
        if self._on_finish:
            self._on_finish()


__all__ = [
    "CallbackProgressRenderer",
    "NullProgressRenderer",
    "ProgressRenderer",
    "TransferSnapshot",
]
