"""OpenCV camera frame source."""

from __future__ import annotations

from collections.abc import Callable

import cv2
import numpy as np

from jump_trigger.core.config import CaptureSettings
from jump_trigger.core.exceptions import CaptureUnavailableError
from jump_trigger.core.logging import get_logger
from jump_trigger.core.types import Frame, monotonic_ms

logger = get_logger(__name__)


class CameraSource:
    """Frame source backed by ``cv2.VideoCapture``.

    Frames are resized to the analysis resolution before they are handed
    out, so the resolution is fixed for the whole session.
    """

    def __init__(
        self,
        settings: CaptureSettings | None = None,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        """Initialize camera source.

        Args:
            settings: Capture settings (uses defaults if None)
            clock: Millisecond clock used to timestamp frames
        """
        self.settings = settings or CaptureSettings()
        self._clock = clock
        self._capture: cv2.VideoCapture | None = None
        self._frame_idx = 0
        self._failed_reads = 0

    @property
    def is_open(self) -> bool:
        """Check if the capture device is open."""
        return self._capture is not None and self._capture.isOpened()

    @property
    def frame_count(self) -> int:
        """Number of frames read so far."""
        return self._frame_idx

    @property
    def analysis_size(self) -> tuple[int, int]:
        """Analysis resolution as (width, height)."""
        return self.settings.analysis_width, self.settings.analysis_height

    def open(self) -> None:
        """Open the capture device.

        Raises:
            CaptureUnavailableError: If the device cannot be opened
        """
        device = _parse_device(self.settings.device)
        capture = cv2.VideoCapture(device)

        if not capture.isOpened():
            capture.release()
            raise CaptureUnavailableError(f"Could not open camera {device!r}")

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.settings.capture_width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.settings.capture_height)

        self._capture = capture
        self._frame_idx = 0
        self._failed_reads = 0
        logger.info(
            "Camera %r opened (analysis %dx%d)",
            device,
            self.settings.analysis_width,
            self.settings.analysis_height,
        )

    def close(self) -> None:
        """Release the capture device."""
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info("Camera closed (read %d frames)", self._frame_idx)

    def read(self) -> Frame:
        """Read the current frame at analysis resolution.

        Returns:
            Frame timestamped with the source clock

        Raises:
            CaptureUnavailableError: If the device is closed or the read fails
        """
        if self._capture is None:
            raise CaptureUnavailableError("Camera not open")

        ok, raw = self._capture.read()
        if not ok or raw is None:
            self._failed_reads += 1
            if self._failed_reads >= self.settings.max_read_failures:
                logger.warning(
                    "Camera returned no frame %d times in a row, closing",
                    self._failed_reads,
                )
                self.close()
            raise CaptureUnavailableError("Camera returned no frame")

        self._failed_reads = 0

        image = cv2.resize(raw, self.analysis_size, interpolation=cv2.INTER_AREA)
        frame = Frame(
            image=np.asarray(image, dtype=np.uint8),
            timestamp_ms=self._clock(),
            index=self._frame_idx,
        )
        self._frame_idx += 1
        return frame

    def __enter__(self) -> CameraSource:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()


def _parse_device(device: int | str) -> int | str:
    """Device index given as a string (e.g. from the environment) becomes an int."""
    if isinstance(device, str) and device.isdigit():
        return int(device)
    return device
