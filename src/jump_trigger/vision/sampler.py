"""Per-frame brightness and edge statistics.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from jump_trigger.core.exceptions import CaptureUnavailableError, InvalidFrameError
from jump_trigger.core.types import FrameStat


class FrameSampler:
    """Reduces a frame to a FrameStat.

    Only the upper part of the frame is analyzed, where upward jump motion
    shows up and floor clutter does not. Every interior pixel of that region
    contributes its luma and the gradient magnitude to its right and bottom
    neighbours.
    """

    def __init__(self, region_fraction: float = 0.6) -> None:
        """Initialize sampler.

        Args:
            region_fraction: Fraction of the frame height analyzed, from the top
        """
        if not 0.0 < region_fraction <= 1.0:
            raise ValueError(f"region_fraction must be in (0, 1], got {region_fraction}")
        self.region_fraction = region_fraction

    def sample(self, image: NDArray[np.uint8] | None, timestamp: int) -> FrameStat:
        """Compute brightness and edge intensity for one frame.

        Args:
            image: H x W x 3 or H x W x 4 pixel array
            timestamp: Monotonic time in milliseconds

        Returns:
            FrameStat for the analyzed region

        Raises:
            CaptureUnavailableError: If no pixel buffer was supplied
            InvalidFrameError: If the buffer cannot be analyzed
        """
        if image is None:
            raise CaptureUnavailableError("No frame buffer to sample")

        luma = self.luma(image)
        region_h = int(luma.shape[0] * self.region_fraction)
        width = luma.shape[1]

        if region_h < 3 or width < 3:
            raise InvalidFrameError(
                f"Analysis region {width}x{region_h} has no interior pixels"
            )

        center = luma[1 : region_h - 1, 1 : width - 1]
        right = luma[1 : region_h - 1, 2:width]
        bottom = luma[2:region_h, 1 : width - 1]

        horizontal = center - right
        vertical = center - bottom
        edges = np.sqrt(horizontal * horizontal + vertical * vertical)

        return FrameStat(
            brightness=float(center.mean()),
            edge_intensity=float(edges.mean()),
            timestamp=int(timestamp),
        )

    @staticmethod
    def luma(image: NDArray[np.uint8]) -> NDArray[np.float64]:
        """Unweighted mean of the three colour channels per pixel."""
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise InvalidFrameError(f"Expected H x W x 3/4 image, got shape {image.shape}")

        channels = image[:, :, :3].astype(np.float64)
        return (channels[:, :, 0] + channels[:, :, 1] + channels[:, :, 2]) / 3.0


def sample_frame(
    image: NDArray[np.uint8],
    timestamp: int,
    region_fraction: float = 0.6,
) -> FrameStat:
    """Sample a single image without keeping a sampler around."""
    return FrameSampler(region_fraction).sample(image, timestamp)
