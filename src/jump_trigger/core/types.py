"""Core data types and structures."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from jump_trigger.core.config import SENSITIVITY_MAX, SENSITIVITY_MIN


@dataclass(slots=True)
class Frame:
    """A camera frame at analysis resolution.

    Attributes:
        image: Pixel array, H x W x 3 (RGB/BGR) or H x W x 4 (alpha ignored)
        timestamp_ms: Monotonic capture time in milliseconds
        index: Frame sequence number
    """

    image: NDArray[np.uint8]
    timestamp_ms: int
    index: int

    @property
    def width(self) -> int:
        """Frame width in pixels."""
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        """Frame height in pixels."""
        return int(self.image.shape[0])

    @property
    def dimensions(self) -> tuple[int, int]:
        """Frame dimensions as (width, height)."""
        return self.width, self.height


class FrameSource(Protocol):
    """Supplies fixed-resolution frames on request.

    ``read`` raises CaptureUnavailableError when no frame can be supplied.
    """

    @property
    def is_open(self) -> bool: ...

    def read(self) -> Frame: ...

    def close(self) -> None: ...


def monotonic_ms() -> int:
    """Monotonic clock in milliseconds."""
    return time.monotonic_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class FrameStat:
    """Scalar statistics of one analyzed frame.

    Attributes:
        brightness: Mean luma over the analyzed region
        edge_intensity: Mean local gradient magnitude over the same region
        timestamp: Monotonic time in milliseconds
    """

    brightness: float
    edge_intensity: float
    timestamp: int


@dataclass(frozen=True, slots=True)
class MotionScore:
    """Combined motion score and the indicators it was built from.

    Component values are unweighted; ``combined`` applies the weights.
    """

    combined: float
    sample_count: int
    brightness_shift: float = 0.0
    edge_shift: float = 0.0
    variance: float = 0.0
    rate_of_change: float = 0.0
    is_sufficient: bool = True

    @classmethod
    def insufficient(cls, sample_count: int = 0) -> MotionScore:
        """Sentinel score for a history too short to analyze."""
        return cls(combined=0.0, sample_count=sample_count, is_sufficient=False)


class DeciderPhase(Enum):
    """States of the jump decision state machine."""

    ARMED = auto()
    COOLING_DOWN = auto()


@dataclass(slots=True)
class JumpDeciderState:
    """Mutable state owned by the jump decider.

    Attributes:
        last_jump_ms: Time of the last fire (or session start)
        jump_count: Number of fires since the session started
    """

    last_jump_ms: int = 0
    jump_count: int = 0


@dataclass(frozen=True, slots=True)
class JumpEvent:
    """A fired jump trigger.

    Attributes:
        timestamp_ms: Time the decider fired
        score: Motion score that crossed the threshold
        threshold: Threshold in force at the time
        sensitivity: Sensitivity percent in force at the time
    """

    timestamp_ms: int
    score: MotionScore
    threshold: float
    sensitivity: int


class SensitivityConfig:
    """User-tunable sensitivity, clamped to [10, 100] on every write.

    Shared between the UI (writer) and the decider (reader).
    """

    def __init__(self, percent: int = 50) -> None:
        self._percent = _clamp(percent)

    @property
    def percent(self) -> int:
        """Current sensitivity percent."""
        return self._percent

    @percent.setter
    def percent(self, value: int) -> None:
        self._percent = _clamp(value)

    @property
    def threshold(self) -> float:
        """Motion threshold for the current sensitivity."""
        return threshold_for(self._percent)

    def adjust(self, step: int) -> int:
        """Shift sensitivity by ``step`` percent and return the clamped value."""
        self.percent = self._percent + step
        return self._percent

    def __repr__(self) -> str:
        return f"SensitivityConfig(percent={self._percent})"


def threshold_for(sensitivity_percent: int) -> float:
    """Map sensitivity to a motion threshold.

    Higher sensitivity gives a lower threshold, floored at 1 so it never
    becomes unreachable-zero.
    """
    return max(1.0, float(101 - sensitivity_percent))


def _clamp(value: int) -> int:
    return max(SENSITIVITY_MIN, min(SENSITIVITY_MAX, int(value)))


@dataclass(frozen=True, slots=True)
class Diagnostics:
    """Read-only snapshot of engine state for display.

    Attributes:
        score: Last computed motion score
        threshold: Last computed threshold
        sensitivity: Sensitivity percent in force
        phase: Decider phase at the last tick
        history_size: Entries currently retained
        jump_count: Fires since the session started
        skipped_ticks: Ticks skipped because no frame was available
        is_active: Whether a detection session is running
    """

    score: MotionScore
    threshold: float
    sensitivity: int
    phase: DeciderPhase
    history_size: int
    jump_count: int
    skipped_ticks: int
    is_active: bool
