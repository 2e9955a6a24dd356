"""Logging-based progress renderer.

Suitable for scripts, CI/CD pipelines, or whenever a carriage-return
line would garble the output.

Example:
    >>> from httpstreaming.reporter import LoggingProgressRenderer
    >>> renderer = LoggingProgressRenderer()

    # Output in logs:
    # [PROGRESS] Progress: 65536b 32768b/s 50%
    # [COMPLETE] Transfer finished
"""

from __future__ import annotations

import logging

from httpstreaming.protocols.progress import TransferSnapshot


class LoggingProgressRenderer:
    """Progress renderer that writes one log record per snapshot.

    Attributes:
        logger: The logger instance to use
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        log_level: int = logging.INFO,
    ):
        """Initialize the renderer.

        Args:
            logger: Logger to use (default: httpstreaming.progress logger)
            log_level: Logging level for progress messages
        """
        self.logger = logger or logging.getLogger("httpstreaming.progress")
        self._log_level = log_level

    def render(self, snapshot: TransferSnapshot) -> None:
        self.logger.log(self._log_level, f"[PROGRESS] {snapshot.format()}")

    def finish(self) -> None:
        self.logger.log(self._log_level, "[COMPLETE] Transfer finished")


__all__ = ["LoggingProgressRenderer"]
