"""Tests for progress renderers."""

from __future__ import annotations

import io
import logging

from rich.console import Console

from httpstreaming.protocols.progress import (
    CallbackProgressRenderer,
    NullProgressRenderer,
    ProgressRenderer,
    TransferSnapshot,
)
from httpstreaming.reporter import (
    ConsoleProgressRenderer,
    LoggingProgressRenderer,
    RichProgressRenderer,
)


class TestProtocolCompliance:
    """All renderers satisfy ProgressRenderer."""

    def test_isinstance(self) -> None:
        for renderer in (
            ConsoleProgressRenderer(io.StringIO()),
            LoggingProgressRenderer(),
            RichProgressRenderer(console=Console(file=io.StringIO())),
            NullProgressRenderer(),
            CallbackProgressRenderer(),
        ):
            assert isinstance(renderer, ProgressRenderer)


class TestConsoleProgressRenderer:
    """Console renderer tests."""

    def test_render_overwrites_line(self) -> None:
        """Each render starts with a carriage return and never a newline."""
        out = io.StringIO()
        r = ConsoleProgressRenderer(out)
        r.render(TransferSnapshot(transferred=1, rate=1, total=4))
        r.render(TransferSnapshot(transferred=2, rate=2, total=4))
        assert out.getvalue() == (
            "\rProgress: 1b 1b/s 25%       \rProgress: 2b 2b/s 50%       "
        )

    def test_finish_newline(self) -> None:
        """finish() writes a single newline."""
        out = io.StringIO()
        ConsoleProgressRenderer(out).finish()
        assert out.getvalue() == "\n"

    def test_defaults_to_stdout(self, capsys) -> None:
        """Without an explicit output the current stdout is used."""
        ConsoleProgressRenderer().render(TransferSnapshot(transferred=3, rate=3))
        assert "Progress: 3b 3b/s" in capsys.readouterr().out


class TestLoggingProgressRenderer:
    """Logging renderer tests."""

    def test_logs_progress(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="httpstreaming.progress"):
            r = LoggingProgressRenderer()
            r.render(TransferSnapshot(transferred=10, rate=5, total=20))
            r.finish()
        messages = [rec.getMessage() for rec in caplog.records]
        assert messages == [
            "[PROGRESS] Progress: 10b 5b/s 50%",
            "[COMPLETE] Transfer finished",
        ]


class TestRichProgressRenderer:
    """Rich renderer tests."""

    def test_finish_without_render(self) -> None:
        """finish() before any render does nothing."""
        out = io.StringIO()
        RichProgressRenderer(console=Console(file=out)).finish()
        assert out.getvalue() == ""

    def test_render_and_finish(self) -> None:
        """Rendering shows the description and finish stops the display."""
        out = io.StringIO()
        r = RichProgressRenderer(console=Console(file=out, width=120), description="big.iso")
        r.render(TransferSnapshot(transferred=512, rate=256, total=1024))
        r.render(TransferSnapshot(transferred=1024, rate=512, total=1024))
        r.finish()
        assert "big.iso" in out.getvalue()


class TestCallbackProgressRenderer:
    """Callback renderer tests."""

    def test_callbacks(self) -> None:
        seen: list[TransferSnapshot] = []
        finished: list[bool] = []
        r = CallbackProgressRenderer(seen.append, lambda: finished.append(True))
        r.render(TransferSnapshot(transferred=1, rate=1))
        r.finish()
        assert len(seen) == 1
        assert finished == [True]
