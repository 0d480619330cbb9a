#!/usr/bin/env python3
"""Replay a recorded clip through the jump detector.

Samples every frame of a video once, then runs the frame statistics
through the decider at one or more sensitivities and reports when each
would have fired. Useful for picking a sensitivity for a room and camera.
"""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

import cv2

from jump_trigger.analysis.decider import replay_jumps
from jump_trigger.core.config import get_settings
from jump_trigger.core.logging import get_logger, setup_logging
from jump_trigger.core.types import FrameStat, JumpEvent, SensitivityConfig
from jump_trigger.vision.sampler import FrameSampler

logger = get_logger(__name__)


def sample_video(
    video_path: Path,
    fps: float | None = None,
    analysis_size: tuple[int, int] = (320, 240),
    region_fraction: float = 0.6,
) -> list[FrameStat]:
    """Sample every frame of a video file.

    Args:
        video_path: Path to video file
        fps: Frame rate override (uses the file's rate if None)
        analysis_size: (width, height) frames are resized to
        region_fraction: Analyzed fraction of the frame height

    Returns:
        FrameStats timestamped from the frame index
    """
    cap = cv2.VideoCapture(str(video_path))

    if not cap.isOpened():
        raise ValueError(f"Could not open video: {video_path}")

    rate = fps or cap.get(cv2.CAP_PROP_FPS) or 30.0
    sampler = FrameSampler(region_fraction)
    stats: list[FrameStat] = []
    frame_idx = 0

    logger.info("Sampling video: %s (%.1f fps)", video_path, rate)

    try:
        while True:
            ret, image = cap.read()
            if not ret:
                break

            resized = cv2.resize(image, analysis_size, interpolation=cv2.INTER_AREA)
            stats.append(sampler.sample(resized, int(round(frame_idx * 1000.0 / rate))))
            frame_idx += 1

            if frame_idx % 300 == 0:
                logger.info("Sampled %d frames...", frame_idx)

    finally:
        cap.release()

    logger.info("Sampled %d frames", frame_idx)
    return stats


def print_results(results: dict[int, list[JumpEvent]]) -> None:
    """Print fires per sensitivity."""
    print("\n" + "=" * 60)
    print("REPLAY RESULTS")
    print("=" * 60)

    for sensitivity, events in results.items():
        times = ", ".join(f"{e.timestamp_ms / 1000:.2f}s" for e in events) or "-"
        print(f"Sensitivity {sensitivity:>3}: {len(events):>3} jumps  [{times}]")


def main() -> int:
    """Run replay script."""
    parser = argparse.ArgumentParser(description="Replay a clip through the jump detector")
    parser.add_argument(
        "video",
        type=Path,
        help="Path to recorded video file",
    )
    parser.add_argument(
        "--sensitivity",
        "-s",
        type=int,
        nargs="+",
        help="Sensitivities to try (default: configured value)",
    )
    parser.add_argument(
        "--fps",
        type=float,
        help="Frame rate override (default: read from file)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output CSV of fires",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level)
    detection = settings.detection

    stats = sample_video(
        args.video,
        fps=args.fps,
        analysis_size=(settings.capture.analysis_width, settings.capture.analysis_height),
        region_fraction=detection.region_fraction,
    )

    sensitivities = [
        SensitivityConfig(s).percent
        for s in (args.sensitivity or [detection.sensitivity_percent])
    ]
    results = {
        s: replay_jumps(
            stats,
            s,
            cooldown_ms=detection.cooldown_ms,
            retention_ms=detection.retention_ms,
            min_history=detection.min_history,
        )
        for s in sensitivities
    }

    print_results(results)

    if args.output:
        with open(args.output, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["sensitivity", "timestamp_ms", "motion", "threshold"])
            for sensitivity, events in results.items():
                for e in events:
                    writer.writerow([sensitivity, e.timestamp_ms, e.score.combined, e.threshold])
        logger.info("Results saved to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
