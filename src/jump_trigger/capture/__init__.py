"""Camera frame acquisition."""

from jump_trigger.capture.camera import CameraSource

__all__ = ["CameraSource"]
