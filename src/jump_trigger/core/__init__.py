"""Core infrastructure: config, types, exceptions, and logging."""

from jump_trigger.core.config import Settings, get_settings
from jump_trigger.core.exceptions import (
    CaptureUnavailableError,
    InvalidFrameError,
    JumpTriggerError,
    OutputSinkError,
)
from jump_trigger.core.logging import get_logger, setup_logging
from jump_trigger.core.types import (
    DeciderPhase,
    Diagnostics,
    Frame,
    FrameStat,
    JumpEvent,
    MotionScore,
    SensitivityConfig,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "Frame",
    "FrameStat",
    "MotionScore",
    "DeciderPhase",
    "JumpEvent",
    "SensitivityConfig",
    "Diagnostics",
    # Exceptions
    "JumpTriggerError",
    "CaptureUnavailableError",
    "InvalidFrameError",
    "OutputSinkError",
    # Logging
    "setup_logging",
    "get_logger",
]
