"""Pytest fixtures for Jump Trigger tests."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.typing import NDArray

from jump_trigger.core.config import CaptureSettings, DetectionSettings
from jump_trigger.core.exceptions import CaptureUnavailableError
from jump_trigger.core.types import Frame, FrameStat

FRAME_INTERVAL_MS = 16


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class FakeSource:
    """Frame source that serves images from a factory and advances a clock.

    ``image_for(i)`` returns the image for the i-th read, or None to make
    that read fail as if the camera dropped a frame.
    """

    def __init__(
        self,
        image_for: Callable[[int], NDArray[np.uint8] | None],
        clock: FakeClock,
        step_ms: int = FRAME_INTERVAL_MS,
        close_after: int | None = None,
    ) -> None:
        self.image_for = image_for
        self.clock = clock
        self.step_ms = step_ms
        self.close_after = close_after
        self.reads = 0
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def read(self) -> Frame:
        index = self.reads
        self.reads += 1
        self.clock.advance(self.step_ms)

        if self.close_after is not None and self.reads >= self.close_after:
            self._open = False

        image = self.image_for(index)
        if image is None:
            raise CaptureUnavailableError("No frame")
        return Frame(image=image, timestamp_ms=self.clock.now, index=index)

    def close(self) -> None:
        self._open = False


def uniform_image(value: int, width: int = 320, height: int = 240) -> NDArray[np.uint8]:
    """Create a flat grey image."""
    return np.full((height, width, 3), value, dtype=np.uint8)


def make_stats(
    brightness: list[float],
    edges: list[float] | None = None,
    start: int = 0,
    step: int = FRAME_INTERVAL_MS,
) -> list[FrameStat]:
    """Build a FrameStat sequence with evenly spaced timestamps."""
    if edges is None:
        edges = [10.0] * len(brightness)
    return [
        FrameStat(brightness=b, edge_intensity=e, timestamp=start + i * step)
        for i, (b, e) in enumerate(zip(brightness, edges))
    ]


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock at t=0."""
    return FakeClock()


@pytest.fixture
def detection_settings() -> DetectionSettings:
    """Create detection settings for testing."""
    return DetectionSettings(
        sensitivity_percent=50,
        cooldown_ms=250,
        retention_ms=1000,
        min_history=6,
        region_fraction=0.6,
    )


@pytest.fixture
def capture_settings() -> CaptureSettings:
    """Create capture settings for testing."""
    return CaptureSettings(analysis_width=320, analysis_height=240, target_fps=1000.0)


@pytest.fixture
def still_stats() -> list[FrameStat]:
    """One second of a subject standing still."""
    return make_stats([100.0] * 60)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator."""
    return np.random.default_rng(42)
