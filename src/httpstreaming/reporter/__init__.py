"""httpstreaming progress renderer implementations.

Provides concrete implementations of the ProgressRenderer protocol
for different output targets.

Example:
    >>> from httpstreaming.reporter import ConsoleProgressRenderer, RichProgressRenderer
    >>>
    >>> # Plain carriage-return line on stdout
    >>> renderer = ConsoleProgressRenderer()
    >>>
    >>> # Rich terminal output with a progress bar
    >>> renderer = RichProgressRenderer()
"""

from httpstreaming.reporter.console import ConsoleProgressRenderer
from httpstreaming.reporter.rich import RichProgressRenderer
from httpstreaming.reporter.simple import LoggingProgressRenderer

__all__ = [
    "ConsoleProgressRenderer",
    "LoggingProgressRenderer",
    "RichProgressRenderer",
]
