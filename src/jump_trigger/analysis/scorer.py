"""Motion score from a window of frame statistics.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from jump_trigger.analysis.history import FrameHistory
from jump_trigger.core.types import FrameStat, MotionScore

MIN_HISTORY = 6

# Calibration weights, tuned by hand
BRIGHTNESS_SHIFT_WEIGHT = 1.0
VARIANCE_WEIGHT = 5.0
RATE_OF_CHANGE_WEIGHT = 1.0
EDGE_SHIFT_WEIGHT = 0.5


class MotionScorer:
    """Combines four motion indicators into one score.

    Indicators:
        brightness shift: mean brightness of the last 2 entries against the
            2 entries 4-6 back
        edge shift: the same comparison on edge intensity
        variance: population variance of brightness over the last 3 entries
        rate of change: largest brightness delta among the last 3 pairs

    The combined score is the maximum of the weighted indicators, so any
    single strong signal is enough.
    """

    def __init__(self, min_history: int = MIN_HISTORY) -> None:
        """Initialize scorer.

        Args:
            min_history: Entries required before a score is produced
        """
        if min_history < MIN_HISTORY:
            raise ValueError(f"min_history must be at least {MIN_HISTORY}")
        self.min_history = min_history

    def score(self, history: FrameHistory | Sequence[FrameStat]) -> MotionScore:
        """Score the current history.

        Args:
            history: FrameHistory or any oldest-first sequence of FrameStat

        Returns:
            MotionScore, or the insufficient-data sentinel
        """
        stats = history.snapshot() if isinstance(history, FrameHistory) else tuple(history)

        if len(stats) < self.min_history:
            return MotionScore.insufficient(len(stats))

        recent = stats[-2:]
        older = stats[-6:-4]

        brightness_shift = abs(
            _mean([s.brightness for s in recent]) - _mean([s.brightness for s in older])
        )
        edge_shift = abs(
            _mean([s.edge_intensity for s in recent]) - _mean([s.edge_intensity for s in older])
        )
        variance = float(np.var([s.brightness for s in stats[-3:]]))
        rate_of_change = _max_consecutive_delta(stats)

        combined = max(
            BRIGHTNESS_SHIFT_WEIGHT * brightness_shift,
            VARIANCE_WEIGHT * variance,
            RATE_OF_CHANGE_WEIGHT * rate_of_change,
            EDGE_SHIFT_WEIGHT * edge_shift,
        )

        return MotionScore(
            combined=combined,
            sample_count=len(stats),
            brightness_shift=brightness_shift,
            edge_shift=edge_shift,
            variance=variance,
            rate_of_change=rate_of_change,
        )


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def _max_consecutive_delta(stats: Sequence[FrameStat]) -> float:
    """Largest absolute brightness change among the 3 most recent pairs."""
    if len(stats) < 4:
        return 0.0

    last4 = [s.brightness for s in stats[-4:]]
    return max(abs(b - a) for a, b in zip(last4, last4[1:]))
