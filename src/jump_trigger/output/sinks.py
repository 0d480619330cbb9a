"""Jump event sinks."""

from __future__ import annotations

from collections.abc import Callable

from jump_trigger.core.exceptions import OutputSinkError
from jump_trigger.core.logging import get_logger

logger = get_logger(__name__)


class SinkFanout:
    """One logical jump event delivered to any number of listeners.

    Callable with no arguments, so it can be used directly as the decider's
    sink. A failing listener is logged and does not stop the others.
    """

    def __init__(self, *listeners: Callable[[], None]) -> None:
        self._listeners: list[Callable[[], None]] = list(listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def add(self, listener: Callable[[], None]) -> None:
        """Register a listener."""
        self._listeners.append(listener)

    def remove(self, listener: Callable[[], None]) -> None:
        """Unregister a listener (no-op if absent)."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __call__(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Jump listener %r failed", listener)


class KeyPressSink:
    """Emulates a key press (space by default) for the game window.

    pyautogui is imported on first use so the rest of the package works on
    hosts without a display.
    """

    def __init__(
        self,
        key: str = "space",
        press: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize key press sink.

        Args:
            key: pyautogui key name to press on each jump
            press: Press function override (defaults to ``pyautogui.press``)
        """
        self.key = key
        self._press = press
        self.press_count = 0

    def prepare(self) -> None:
        """Load the key press backend now rather than on the first jump.

        Raises:
            OutputSinkError: If pyautogui cannot be imported (no display)
        """
        if self._press is not None:
            return

        try:
            import pyautogui
        except Exception as e:
            raise OutputSinkError(f"Key press backend unavailable: {e}") from e

        pyautogui.PAUSE = 0
        pyautogui.FAILSAFE = False
        self._press = pyautogui.press
        logger.info("Key press sink ready (key=%s)", self.key)

    def __call__(self) -> None:
        self.prepare()
        self._press(self.key)
        self.press_count += 1
        logger.debug("Pressed %s", self.key)
