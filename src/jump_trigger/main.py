"""Main entry point for Jump Trigger."""

from __future__ import annotations

import argparse
import os
import sys
import time

from jump_trigger.capture.camera import CameraSource
from jump_trigger.core.config import Settings, get_settings
from jump_trigger.core.exceptions import (
    CaptureUnavailableError,
    JumpTriggerError,
    OutputSinkError,
)
from jump_trigger.core.logging import get_logger, setup_logging
from jump_trigger.core.types import SensitivityConfig
from jump_trigger.output.sinks import KeyPressSink, SinkFanout
from jump_trigger.pipeline.engine import DetectionEngine, TickResult

logger = get_logger(__name__)


def build_sink(settings: Settings) -> SinkFanout:
    """Create the output fan-out with the configured listeners."""
    sink = SinkFanout()

    if settings.output.keypress_enabled:
        keypress = KeyPressSink(settings.output.key)
        try:
            keypress.prepare()
        except OutputSinkError as e:
            logger.warning("%s; jumps will only be logged", e)
        else:
            sink.add(keypress)

    return sink


def run_preview_session(engine: DetectionEngine, settings: Settings) -> None:
    """Run detection with the preview window until the user quits.

    Pausing stops the engine; resuming starts a fresh session, so the
    startup cooldown applies again.
    """
    from jump_trigger.ui.display import DisplayWindow, KeyAction
    from jump_trigger.ui.hud import HUDRenderer

    display = DisplayWindow(
        settings.ui, engine.sensitivity, step=settings.detection.sensitivity_step
    )
    hud = HUDRenderer(settings.ui)

    quit_requested = False
    fps = 0.0
    frame_count = 0
    window_start = time.time()
    last_image = None

    def handle_key(action: KeyAction) -> None:
        nonlocal quit_requested

        if action == KeyAction.QUIT:
            logger.info("Quit requested")
            quit_requested = True
            engine.stop()

        elif action == KeyAction.PAUSE:
            if display.is_paused:
                engine.stop()

        elif action == KeyAction.RESET:
            logger.info("Session reset requested")
            engine.start()

        elif action == KeyAction.SENSITIVITY_UP:
            display.adjust_sensitivity(1)

        elif action == KeyAction.SENSITIVITY_DOWN:
            display.adjust_sensitivity(-1)

        elif action == KeyAction.TEST_JUMP:
            engine.trigger_manual()

        elif action == KeyAction.TOGGLE_DEBUG:
            hud.show_debug_info = not hud.show_debug_info

    def on_tick(result: TickResult | None) -> None:
        nonlocal fps, frame_count, window_start, last_image

        if result is not None:
            last_image = result.frame.image
            output = hud.render_full_hud(
                last_image,
                engine.diagnostics,
                fps=fps,
                region_fraction=settings.detection.region_fraction,
            )
            display.show_frame(output)

        handle_key(display.poll_key(wait_ms=1))

        frame_count += 1
        elapsed = time.time() - window_start
        if elapsed > 1.0:
            fps = frame_count / elapsed
            frame_count = 0
            window_start = time.time()

    display.open()
    try:
        while not quit_requested and engine.source.is_open:
            engine.run(on_tick=on_tick)

            # Paused: keep the window responsive until resume or quit
            while display.is_paused and not quit_requested:
                if last_image is not None:
                    display.show_frame(
                        hud.render_full_hud(last_image, engine.diagnostics, paused=True)
                    )
                handle_key(display.poll_key(wait_ms=50))

            if not quit_requested and engine.source.is_open:
                engine.start()
    finally:
        display.close()


def run_session(settings: Settings, headless: bool = False) -> int:
    """Run a live detection session.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    setup_logging(settings.logging.level, settings.logging.file)
    logger.info("Starting Jump Trigger")

    source = CameraSource(settings.capture)
    engine: DetectionEngine | None = None

    try:
        source.open()
        sink = build_sink(settings)
        engine = DetectionEngine(
            source,
            sink=sink,
            detection=settings.detection,
            capture=settings.capture,
        )

        if headless or not settings.ui.show_preview:
            logger.info("Running headless (Ctrl+C to quit)")
            engine.run()
        else:
            logger.info("Running with preview (q quit, t test, +/- sensitivity)")
            run_preview_session(engine, settings)

        logger.info("Session: %d jumps", engine.diagnostics.jump_count)
        return 0

    except CaptureUnavailableError as e:
        logger.error("Camera unavailable: %s", e)
        return 1

    except JumpTriggerError as e:
        logger.error("Detection error: %s", e)
        return 2

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 3

    finally:
        if engine is not None:
            engine.stop()
        source.close()
        logger.info("Jump Trigger stopped")


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Jump Trigger - turn camera motion into a game jump key"
    )
    parser.add_argument(
        "--camera",
        help="Camera index or video path (default from CAMERA_DEVICE or 0)",
    )
    parser.add_argument(
        "--sensitivity",
        type=int,
        help="Initial sensitivity percent (10-100)",
    )
    parser.add_argument(
        "--no-keypress",
        action="store_true",
        help="Do not emulate key presses, only log jumps",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without the preview window",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
    if args.camera is not None:
        os.environ["CAMERA_DEVICE"] = args.camera
    if args.sensitivity is not None:
        os.environ["JUMP_SENSITIVITY_PERCENT"] = str(SensitivityConfig(args.sensitivity).percent)
    if args.no_keypress:
        os.environ["OUTPUT_KEYPRESS_ENABLED"] = "false"

    try:
        settings = get_settings()
    except ValueError as e:
        parser.error(str(e))

    sys.exit(run_session(settings, headless=args.headless))


if __name__ == "__main__":
    main()
