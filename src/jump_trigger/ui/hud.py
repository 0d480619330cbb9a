"""Heads-up display (HUD) rendering for detection diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import cv2
import numpy as np

from jump_trigger.core.config import UISettings
from jump_trigger.core.types import DeciderPhase, Diagnostics

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass
class HUDLayout:
    """Layout configuration for HUD elements."""

    # Diagnostics panel (top-left)
    panel_x: int = 10
    panel_y: int = 25
    panel_line_height: int = 22

    # Phase indicator (top-right)
    phase_margin: int = 10

    # Motion meter (above the status bar)
    meter_margin: int = 10
    meter_height: int = 10
    meter_bottom: int = 28

    # Colors (BGR)
    color_text: tuple[int, int, int] = (255, 255, 255)
    color_bg: tuple[int, int, int] = (0, 0, 0)
    color_accent: tuple[int, int, int] = (0, 255, 255)
    color_success: tuple[int, int, int] = (0, 255, 0)
    color_warning: tuple[int, int, int] = (0, 165, 255)
    color_error: tuple[int, int, int] = (0, 0, 255)


class HUDRenderer:
    """Renders detection diagnostics over the camera preview.

    Provides visual feedback including:
    - Detection status and sensitivity
    - Current motion score against the required threshold, as text and a meter
    - Decider phase (armed / cooling down)
    - Jump count, skipped ticks and frame rate
    """

    def __init__(
        self,
        settings: UISettings | None = None,
        layout: HUDLayout | None = None,
    ) -> None:
        """Initialize HUD renderer.

        Args:
            settings: UI settings
            layout: HUD layout configuration
        """
        self.settings = settings or UISettings()
        self.layout = layout or HUDLayout()
        self.show_debug_info = self.settings.show_debug_info

    @staticmethod
    def status_text(diagnostics: Diagnostics, paused: bool = False) -> str:
        """Human-readable detection status."""
        if paused:
            return "Paused"
        if not diagnostics.is_active:
            return "Stopped"
        if not diagnostics.score.is_sufficient:
            return "Initializing..."
        return "Jump Detection Active"

    @staticmethod
    def motion_text(diagnostics: Diagnostics) -> str:
        """Motion score against the threshold, e.g. ``Motion: 12.5 | Need: 51.0``."""
        return f"Motion: {diagnostics.score.combined:.1f} | Need: {diagnostics.threshold:.1f}"

    def render_diagnostics_panel(
        self,
        image: NDArray[np.uint8],
        diagnostics: Diagnostics,
        paused: bool = False,
    ) -> NDArray[np.uint8]:
        """Render the main diagnostics panel.

        Args:
            image: Input image
            diagnostics: Engine diagnostics snapshot
            paused: Whether detection is paused from the keyboard

        Returns:
            Image with diagnostics panel overlay
        """
        result = image.copy()
        x = self.layout.panel_x
        y = self.layout.panel_y
        line_h = self.layout.panel_line_height

        lines = [
            self.status_text(diagnostics, paused),
            f"Sensitivity: {diagnostics.sensitivity}",
            self.motion_text(diagnostics),
            f"Jumps: {diagnostics.jump_count}",
        ]

        if self.show_debug_info and diagnostics.score.is_sufficient:
            score = diagnostics.score
            lines.append(f"B {score.brightness_shift:.1f}  V {score.variance:.2f}")
            lines.append(f"R {score.rate_of_change:.1f}  E {score.edge_shift:.1f}")

        font = cv2.FONT_HERSHEY_SIMPLEX
        for i, text in enumerate(lines):
            self._draw_text_with_bg(result, text, (x, y + i * line_h), font, 0.5, 1)

        return result

    def render_phase_indicator(
        self,
        image: NDArray[np.uint8],
        phase: DeciderPhase,
    ) -> NDArray[np.uint8]:
        """Render decider phase pill in the top-right corner.

        Args:
            image: Input image
            phase: Current decider phase

        Returns:
            Image with phase indicator
        """
        result = image.copy()
        w = result.shape[1]

        color = (
            self.layout.color_success
            if phase is DeciderPhase.ARMED
            else self.layout.color_warning
        )
        text = phase.name
        font = cv2.FONT_HERSHEY_SIMPLEX
        font_scale = 0.5
        thickness = 1

        (text_w, text_h), _ = cv2.getTextSize(text, font, font_scale, thickness)
        x = w - text_w - self.layout.phase_margin - 5
        y = 25

        top_left = (x - 6, y - text_h - 6)
        bottom_right = (x + text_w + 6, y + 6)
        cv2.rectangle(result, top_left, bottom_right, self.layout.color_bg, -1)
        cv2.rectangle(result, top_left, bottom_right, color, 1)
        cv2.putText(result, text, (x, y), font, font_scale, color, thickness)

        return result

    def render_motion_meter(
        self,
        image: NDArray[np.uint8],
        diagnostics: Diagnostics,
    ) -> NDArray[np.uint8]:
        """Draw the motion score as a bar with a tick at the threshold.

        The bar spans zero to twice the threshold; anything above is drawn
        full. It turns green once the score exceeds the threshold.
        """
        result = image.copy()
        h, w = result.shape[:2]
        layout = self.layout

        x0, x1 = layout.meter_margin, w - layout.meter_margin
        y1 = h - layout.meter_bottom
        y0 = y1 - layout.meter_height
        span = x1 - x0
        full_scale = 2.0 * diagnostics.threshold

        fill = min(diagnostics.score.combined / full_scale, 1.0)
        over = diagnostics.score.combined > diagnostics.threshold
        color = layout.color_success if over else layout.color_accent

        cv2.rectangle(result, (x0, y0), (x1, y1), layout.color_bg, -1)
        if fill > 0:
            cv2.rectangle(result, (x0, y0), (x0 + int(span * fill), y1), color, -1)
        cv2.rectangle(result, (x0, y0), (x1, y1), layout.color_text, 1)

        # Threshold sits at the middle of the scale
        mid = x0 + span // 2
        cv2.line(result, (mid, y0 - 3), (mid, y1 + 3), layout.color_error, 2)

        return result

    def render_region_guide(
        self,
        image: NDArray[np.uint8],
        region_fraction: float,
    ) -> NDArray[np.uint8]:
        """Draw the lower bound of the analyzed region."""
        result = image.copy()
        h, w = result.shape[:2]
        y = int(h * region_fraction)
        cv2.line(result, (0, y), (w, y), self.layout.color_accent, 1)
        return result

    def render_status_bar(
        self,
        image: NDArray[np.uint8],
        diagnostics: Diagnostics,
        fps: float | None = None,
    ) -> NDArray[np.uint8]:
        """Render status bar with loop info.

        Args:
            image: Input image
            diagnostics: Engine diagnostics snapshot
            fps: Current loop rate

        Returns:
            Image with status bar
        """
        result = image.copy()
        h = result.shape[0]

        items = []

        if fps is not None:
            items.append((f"FPS: {fps:.1f}", self.layout.color_text))

        items.append((f"HIST: {diagnostics.history_size}", self.layout.color_text))

        skip_color = (
            self.layout.color_warning if diagnostics.skipped_ticks else self.layout.color_text
        )
        items.append((f"SKIP: {diagnostics.skipped_ticks}", skip_color))

        bar_y = h - 10
        x = 10
        font = cv2.FONT_HERSHEY_SIMPLEX

        for text, color in items:
            cv2.putText(result, text, (x, bar_y), font, 0.4, color, 1)
            (text_w, _), _ = cv2.getTextSize(text, font, 0.4, 1)
            x += text_w + 15

        return result

    def _draw_text_with_bg(
        self,
        image: NDArray[np.uint8],
        text: str,
        position: tuple[int, int],
        font: int,
        font_scale: float,
        thickness: int,
    ) -> None:
        """Draw text with background rectangle (modifies image in place)."""
        (text_w, text_h), _ = cv2.getTextSize(text, font, font_scale, thickness)
        x, y = position
        padding = 3

        cv2.rectangle(
            image,
            (x - padding, y - text_h - padding),
            (x + text_w + padding, y + padding),
            self.layout.color_bg,
            -1,
        )
        cv2.putText(
            image,
            text,
            position,
            font,
            font_scale,
            self.layout.color_text,
            thickness,
        )

    def render_full_hud(
        self,
        image: NDArray[np.uint8],
        diagnostics: Diagnostics,
        fps: float | None = None,
        paused: bool = False,
        region_fraction: float | None = None,
    ) -> NDArray[np.uint8]:
        """Render complete HUD overlay.

        Args:
            image: Input image
            diagnostics: Engine diagnostics snapshot
            fps: Current loop rate
            paused: Whether detection is paused
            region_fraction: Analyzed fraction of the height, drawn in debug mode

        Returns:
            Image with full HUD
        """
        result = image.copy()

        if self.show_debug_info and region_fraction is not None:
            result = self.render_region_guide(result, region_fraction)

        result = self.render_diagnostics_panel(result, diagnostics, paused)
        result = self.render_phase_indicator(result, diagnostics.phase)
        if diagnostics.score.is_sufficient:
            result = self.render_motion_meter(result, diagnostics)
        result = self.render_status_bar(result, diagnostics, fps=fps)

        return result
