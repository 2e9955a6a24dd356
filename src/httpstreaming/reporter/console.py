"""Console progress renderer.

Redraws a single progress line in place using a carriage return, and ends
it with one newline when the transfer is finished.

Example:
    >>> import io
    >>> from httpstreaming.protocols.progress import TransferSnapshot
    >>> from httpstreaming.reporter.console import ConsoleProgressRenderer
    >>> out = io.StringIO()
    >>> renderer = ConsoleProgressRenderer(out)
    >>> renderer.render(TransferSnapshot(transferred=10, rate=5))
    >>> out.getvalue()
    '\\rProgress: 10b 5b/s        '
"""

from __future__ import annotations

import sys
from typing import TextIO

from httpstreaming.protocols.progress import TransferSnapshot

# Blanks appended so a shorter line fully covers the previous one
PADDING = " " * 7


class ConsoleProgressRenderer:
    """Carriage-return progress line on a text stream.

    Output is not serialized against other writers; several streams
    rendering to the same console at once will interleave.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize the renderer.

        Args:
            output: Text stream to draw on (default: sys.stdout at render time)
        """
        self._output = output

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def render(self, snapshot: TransferSnapshot) -> None:
        out = self.output
        out.write(f"\r{snapshot.format()}{PADDING}")
        out.flush()

    def finish(self) -> None:
        out = self.output
        out.write("\n")
        out.flush()


__all__ = ["ConsoleProgressRenderer"]
