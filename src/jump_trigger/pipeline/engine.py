"""Detection loop orchestration."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from jump_trigger.analysis.decider import JumpDecider, JumpSink
from jump_trigger.analysis.history import FrameHistory
from jump_trigger.analysis.scorer import MotionScorer
from jump_trigger.core.config import CaptureSettings, DetectionSettings
from jump_trigger.core.exceptions import CaptureUnavailableError, InvalidFrameError
from jump_trigger.core.logging import get_logger
from jump_trigger.core.types import (
    Diagnostics,
    Frame,
    FrameSource,
    FrameStat,
    JumpEvent,
    MotionScore,
    SensitivityConfig,
    monotonic_ms,
)
from jump_trigger.output.sinks import SinkFanout
from jump_trigger.vision.sampler import FrameSampler

logger = get_logger(__name__)


@dataclass
class TickResult:
    """Result of one completed tick.

    The frame is only valid for the duration of the ``on_tick`` callback.
    """

    frame: Frame
    stat: FrameStat
    score: MotionScore
    event: JumpEvent | None


class DetectionEngine:
    """Runs the per-tick detection pipeline.

    Each tick: read frame -> sample -> update history -> score -> decide.
    Ticks run to completion one at a time; the loop only yields between
    ticks.
    """

    def __init__(
        self,
        source: FrameSource,
        sink: JumpSink | None = None,
        detection: DetectionSettings | None = None,
        capture: CaptureSettings | None = None,
        sensitivity: SensitivityConfig | None = None,
        clock: Callable[[], int] = monotonic_ms,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize engine.

        Args:
            source: Frame source borrowed once per tick
            sink: Called once per fired jump; wrapped in a SinkFanout so a
                failing sink is logged instead of ending the loop
            detection: Detection parameters (uses defaults if None)
            capture: Capture settings, used for loop pacing
            sensitivity: Shared sensitivity (created from settings if None)
            clock: Millisecond monotonic clock
            sleep: Sleep function used between ticks
        """
        self.detection = detection or DetectionSettings()
        self.capture = capture or CaptureSettings()
        self.source = source
        self.sensitivity = sensitivity or SensitivityConfig(self.detection.sensitivity_percent)
        self._clock = clock
        self._sleep = sleep

        # Components
        self._sampler = FrameSampler(self.detection.region_fraction)
        self._history = FrameHistory(self.detection.retention_ms)
        self._scorer = MotionScorer(self.detection.min_history)
        if sink is not None and not isinstance(sink, SinkFanout):
            sink = SinkFanout(sink)
        self._decider = JumpDecider(sink, self.detection.cooldown_ms)

        # State
        self._active = False
        self._last_score = MotionScore.insufficient()
        self._skipped_ticks = 0
        self._tick_count = 0

    @property
    def is_active(self) -> bool:
        """Check if a detection session is running."""
        return self._active

    @property
    def history(self) -> FrameHistory:
        """Frame statistics retained for the current window."""
        return self._history

    @property
    def sink(self) -> JumpSink | None:
        """Output sink invoked on each fire."""
        return self._decider.sink

    @property
    def diagnostics(self) -> Diagnostics:
        """Snapshot of the last score, threshold and session counters."""
        now = self._clock()
        return Diagnostics(
            score=self._last_score,
            threshold=self.sensitivity.threshold,
            sensitivity=self.sensitivity.percent,
            phase=self._decider.phase(now),
            history_size=len(self._history),
            jump_count=self._decider.jump_count,
            skipped_ticks=self._skipped_ticks,
            is_active=self._active,
        )

    def start(self) -> None:
        """Begin a detection session.

        The decider treats the start time as its last fire, so nothing fires
        during the first cooldown while the history warms up.
        """
        now = self._clock()
        self._history.clear()
        self._decider.reset(now)
        self._last_score = MotionScore.insufficient()
        self._skipped_ticks = 0
        self._tick_count = 0
        self._active = True
        logger.info("Detection started (sensitivity %d)", self.sensitivity.percent)

    def stop(self) -> None:
        """End the session; no further ticks run."""
        if self._active:
            self._active = False
            logger.info(
                "Detection stopped (%d ticks, %d jumps, %d skipped)",
                self._tick_count,
                self._decider.jump_count,
                self._skipped_ticks,
            )

    def tick(self) -> TickResult | None:
        """Run one pipeline step.

        Returns:
            TickResult, or None if inactive or no frame was available
        """
        if not self._active:
            return None

        try:
            frame = self.source.read()
            now = self._clock()
            stat = self._sampler.sample(frame.image, now)
        except (CaptureUnavailableError, InvalidFrameError) as e:
            self._skipped_ticks += 1
            logger.debug("Tick skipped: %s", e)
            return None

        self._history.update(stat, now)
        score = self._scorer.score(self._history)
        self._last_score = score
        event = self._decider.decide(score, self.sensitivity.percent, now)
        self._tick_count += 1

        return TickResult(frame=frame, stat=stat, score=score, event=event)

    def run(
        self,
        on_tick: Callable[[TickResult | None], None] | None = None,
        max_ticks: int | None = None,
    ) -> int:
        """Run the cooperative tick loop until stopped.

        Ticks are paced at the capture ``target_fps`` on the engine clock. The loop ends when
        ``stop()`` is called (including from ``on_tick``), when the source
        closes, or after ``max_ticks`` iterations.

        Args:
            on_tick: Called after every tick with its result (None if skipped)
            max_ticks: Optional iteration limit

        Returns:
            Number of loop iterations run
        """
        if not self._active:
            self.start()

        interval_ms = 1000.0 / self.capture.target_fps
        iterations = 0
        next_deadline = float(self._clock())

        while self._active and self.source.is_open:
            if max_ticks is not None and iterations >= max_ticks:
                break

            result = self.tick()
            iterations += 1

            if on_tick is not None:
                on_tick(result)

            next_deadline += interval_ms
            delay_ms = next_deadline - self._clock()
            if delay_ms > 0:
                self._sleep(delay_ms / 1000.0)
            else:
                next_deadline = float(self._clock())

        if self._active and not self.source.is_open:
            logger.warning("Frame source closed, stopping detection")
            self.stop()

        return iterations

    def trigger_manual(self) -> None:
        """Fire the sink directly, bypassing the decider and its cooldown."""
        logger.info("Manual jump trigger")
        sink = self._decider.sink
        if sink is not None:
            sink()
