"""OpenCV preview window with keyboard and slider controls."""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

import cv2
import numpy as np

from jump_trigger.core.config import SENSITIVITY_MAX, SENSITIVITY_MIN, UISettings
from jump_trigger.core.logging import get_logger
from jump_trigger.core.types import SensitivityConfig

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)

ESC = 27
NO_KEY = 255
TRACKBAR_NAME = "Sensitivity"


class KeyAction(Enum):
    """Control actions requested from the preview window."""

    NONE = auto()
    QUIT = auto()
    PAUSE = auto()
    RESET = auto()
    SENSITIVITY_UP = auto()
    SENSITIVITY_DOWN = auto()
    TEST_JUMP = auto()
    TOGGLE_DEBUG = auto()


def _bind(keys: str, action: KeyAction) -> dict[int, KeyAction]:
    return {ord(k): action for k in keys}


KEY_BINDINGS: dict[int, KeyAction] = {
    ESC: KeyAction.QUIT,
    **_bind("qQ", KeyAction.QUIT),
    **_bind(" ", KeyAction.PAUSE),
    **_bind("rR", KeyAction.RESET),
    **_bind("+=", KeyAction.SENSITIVITY_UP),
    **_bind("-_", KeyAction.SENSITIVITY_DOWN),
    **_bind("tT", KeyAction.TEST_JUMP),
    **_bind("dD", KeyAction.TOGGLE_DEBUG),
}


def action_for_key(key: int) -> KeyAction:
    """Map a ``cv2.waitKey`` code to its action."""
    key &= 0xFF
    if key == NO_KEY:
        return KeyAction.NONE
    return KEY_BINDINGS.get(key, KeyAction.NONE)


class DisplayWindow:
    """Camera preview with a sensitivity slider.

    The slider and the keyboard both write the shared SensitivityConfig, so
    the detection engine sees a change on its next tick. Slider positions
    snap to multiples of the sensitivity step.
    """

    WINDOW_NAME = "Jump Trigger"

    def __init__(
        self,
        settings: UISettings | None = None,
        sensitivity: SensitivityConfig | None = None,
        step: int = 5,
    ) -> None:
        """Initialize display window.

        Args:
            settings: UI settings (uses defaults if None)
            sensitivity: Shared sensitivity the slider controls
            step: Slider and keyboard increment
        """
        self.settings = settings or UISettings()
        self.sensitivity = sensitivity or SensitivityConfig()
        self.step = step
        self._size = (self.settings.display_width, self.settings.display_height)
        self._open = False
        self._paused = False

    @property
    def is_open(self) -> bool:
        """Check if window is open."""
        return self._open

    @property
    def is_paused(self) -> bool:
        """Check if detection is paused from the keyboard."""
        return self._paused

    def open(self) -> None:
        """Create the window and its sensitivity slider."""
        cv2.namedWindow(self.WINDOW_NAME, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.WINDOW_NAME, *self._size)
        cv2.createTrackbar(
            TRACKBAR_NAME,
            self.WINDOW_NAME,
            self.sensitivity.percent,
            SENSITIVITY_MAX,
            self._on_slider,
        )
        cv2.setTrackbarMin(TRACKBAR_NAME, self.WINDOW_NAME, SENSITIVITY_MIN)
        self._open = True
        logger.info("Preview window opened (%dx%d)", *self._size)

    def close(self) -> None:
        """Destroy the window."""
        if self._open:
            cv2.destroyWindow(self.WINDOW_NAME)
            self._open = False
            logger.info("Preview window closed")

    def adjust_sensitivity(self, direction: int) -> int:
        """Step sensitivity up (+1) or down (-1) and move the slider to match.

        Returns:
            New sensitivity percent
        """
        value = self.sensitivity.adjust(direction * self.step)
        if self._open:
            cv2.setTrackbarPos(TRACKBAR_NAME, self.WINDOW_NAME, value)
        logger.info("Sensitivity: %d", value)
        return value

    def _on_slider(self, position: int) -> None:
        snapped = round(position / self.step) * self.step
        if snapped != self.sensitivity.percent:
            self.sensitivity.percent = snapped
            logger.info("Sensitivity: %d", self.sensitivity.percent)

        # Slider shows the snapped, clamped value
        if self._open and position != self.sensitivity.percent:
            cv2.setTrackbarPos(TRACKBAR_NAME, self.WINDOW_NAME, self.sensitivity.percent)

    def show_frame(self, image: NDArray[np.uint8]) -> None:
        """Display a frame, scaled to the window size.

        Args:
            image: BGR image array to display
        """
        if not self._open:
            self.open()

        if (image.shape[1], image.shape[0]) != self._size:
            image = cv2.resize(image, self._size, interpolation=cv2.INTER_NEAREST)
        cv2.imshow(self.WINDOW_NAME, image)

    def poll_key(self, wait_ms: int = 1) -> KeyAction:
        """Wait briefly for a key and return its action.

        The pause key toggles ``is_paused`` before it is returned.

        Args:
            wait_ms: Milliseconds to wait (1 keeps the loop responsive)
        """
        action = action_for_key(cv2.waitKey(wait_ms))

        if action == KeyAction.PAUSE:
            self._paused = not self._paused
            logger.info("Detection %s", "paused" if self._paused else "resumed")

        return action

    def __enter__(self) -> DisplayWindow:
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
