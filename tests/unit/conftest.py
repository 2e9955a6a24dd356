"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest


class FakeClock:
    """Manually advanced monotonic clock whose sleep() moves time forward."""

    def __init__(self, start: float = 1000.0, oversleep: float = 0.0) -> None:
        self.now = start
        self.oversleep = oversleep
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds + self.oversleep


class RecordingRenderer:
    """ProgressRenderer that keeps everything it is given."""

    def __init__(self) -> None:
        self.snapshots = []
        self.finished = 0

    def render(self, snapshot) -> None:
        self.snapshots.append(snapshot)

    def finish(self) -> None:
        self.finished += 1


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def make_clock() -> type[FakeClock]:
    """Factory for fake clocks with custom sleep behaviour."""
    return FakeClock


@pytest.fixture
def renderer() -> RecordingRenderer:
    """A renderer recording snapshots."""
    return RecordingRenderer()
