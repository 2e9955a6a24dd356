"""Rich-based progress renderer for terminal output.

Shows a transfer bar with size, speed and remaining time using the Rich
library instead of the plain carriage-return line.

Example:
    >>> from httpstreaming.reporter import RichProgressRenderer
    >>> from httpstreaming.streams import ProgressStream
    >>>
    >>> renderer = RichProgressRenderer(description="upload")
    >>> # stream = ProgressStream(open("big.bin", "rb"), renderer=renderer)

    # Output:
    # ⠋ upload ━━━━━━━━━━━━━━━━━━━  45%  4.5/10.0 MB  1.2 MB/s  0:00:04
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from httpstreaming.protocols.progress import TransferSnapshot

logger = logging.getLogger("httpstreaming.reporter.rich")


class RichProgressRenderer:
    """Rich progress bar fed by transfer snapshots.

    The bar is created on the first snapshot and stopped by ``finish()``,
    so a stream that never renders leaves the terminal untouched.

    Attributes:
        description: Label shown in front of the bar
    """

    def __init__(
        self,
        console: Console | None = None,
        description: str = "transfer",
        refresh_per_second: int = 4,
    ):
        """Initialize the renderer.

        Args:
            console: Rich Console to use (default: new console)
            description: Task label
            refresh_per_second: How often to refresh display (default: 4)
        """
        self._console = console or Console()
        self.description = description
        self._refresh_per_second = refresh_per_second
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def _start(self, snapshot: TransferSnapshot) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=30),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=self._console,
            refresh_per_second=self._refresh_per_second,
        )
        self._task = self._progress.add_task(
            self.description,
            total=snapshot.total or None,
        )
        self._progress.start()
        logger.debug(f"Started progress display for {self.description}")

    def render(self, snapshot: TransferSnapshot) -> None:
        if self._progress is None:
            self._start(snapshot)
        self._progress.update(
            self._task,
            completed=snapshot.transferred,
            total=snapshot.total or None,
        )

    def finish(self) -> None:
        if self._progress is None:
            return
        self._progress.stop()
        self._progress = None
        self._task = None


__all__ = ["RichProgressRenderer"]
