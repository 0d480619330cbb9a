"""Jump decision state machine.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from jump_trigger.analysis.history import FrameHistory
from jump_trigger.analysis.scorer import MIN_HISTORY, MotionScorer
from jump_trigger.core.logging import get_logger
from jump_trigger.core.types import (
    DeciderPhase,
    FrameStat,
    JumpDeciderState,
    JumpEvent,
    MotionScore,
    threshold_for,
)

logger = get_logger(__name__)

JumpSink = Callable[[], None]


class JumpDecider:
    """Turns motion scores into rate-limited jump triggers.

    Transitions:
        ARMED -> COOLING_DOWN: score exceeds the sensitivity threshold (fire)
        COOLING_DOWN -> ARMED: cooldown elapsed since the last fire

    No timer is kept; every decision re-checks elapsed time.
    """

    def __init__(
        self,
        sink: JumpSink | None = None,
        cooldown_ms: int = 250,
        session_start_ms: int = 0,
    ) -> None:
        """Initialize decider.

        Args:
            sink: Zero-argument callable invoked once per fire
            cooldown_ms: Minimum spacing between fires
            session_start_ms: Treated as the last fire time
        """
        self.sink = sink
        self.cooldown_ms = cooldown_ms
        self._state = JumpDeciderState(last_jump_ms=session_start_ms)

    @property
    def last_jump_ms(self) -> int:
        """Time of the last fire (or session start)."""
        return self._state.last_jump_ms

    @property
    def jump_count(self) -> int:
        """Fires since the last reset."""
        return self._state.jump_count

    def phase(self, now: int) -> DeciderPhase:
        """Logical state at ``now``."""
        if now - self._state.last_jump_ms < self.cooldown_ms:
            return DeciderPhase.COOLING_DOWN
        return DeciderPhase.ARMED

    def reset(self, now: int) -> None:
        """Start a new session; suppresses firing for one cooldown from ``now``."""
        self._state = JumpDeciderState(last_jump_ms=now)

    def decide(self, score: MotionScore, sensitivity: int, now: int) -> JumpEvent | None:
        """Decide whether this tick fires.

        Args:
            score: Current motion score
            sensitivity: Sensitivity percent in [10, 100]
            now: Current time in milliseconds

        Returns:
            JumpEvent if the decider fired, None otherwise
        """
        if self.phase(now) is DeciderPhase.COOLING_DOWN:
            return None

        threshold = threshold_for(sensitivity)

        if not score.is_sufficient or score.combined <= threshold:
            return None

        # Recorded before the sink runs; a re-entrant decide() sees the cooldown
        self._state.last_jump_ms = now
        self._state.jump_count += 1

        event = JumpEvent(
            timestamp_ms=now,
            score=score,
            threshold=threshold,
            sensitivity=sensitivity,
        )
        logger.info(
            "Jump detected: motion %.1f > need %.1f (sensitivity %d)",
            score.combined,
            threshold,
            sensitivity,
        )

        if self.sink is not None:
            self.sink()

        return event


def replay_jumps(
    stats: Sequence[FrameStat],
    sensitivity: int,
    cooldown_ms: int = 250,
    retention_ms: int = 1000,
    min_history: int = MIN_HISTORY,
) -> list[JumpEvent]:
    """Run recorded frame statistics through history, scorer and decider.

    Pure function for offline tuning. The first stat's timestamp is taken as
    the session start.

    Args:
        stats: FrameStats in timestamp order
        sensitivity: Sensitivity percent in [10, 100]
        cooldown_ms: Minimum spacing between fires
        retention_ms: History window
        min_history: Entries required before scoring

    Returns:
        List of fired jump events
    """
    if not stats:
        return []

    history = FrameHistory(retention_ms)
    scorer = MotionScorer(min_history)
    decider = JumpDecider(cooldown_ms=cooldown_ms, session_start_ms=stats[0].timestamp)
    events: list[JumpEvent] = []

    for stat in stats:
        history.update(stat, stat.timestamp)
        event = decider.decide(scorer.score(history), sensitivity, stat.timestamp)
        if event is not None:
            events.append(event)

    return events
