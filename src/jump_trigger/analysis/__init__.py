"""Pure analysis logic: frame history, motion scoring, and jump decisions.

This module contains NO I/O operations and NO OpenCV imports.
All functions operate on typed dataclasses and return results.
"""

from jump_trigger.analysis.decider import JumpDecider, replay_jumps
from jump_trigger.analysis.history import FrameHistory
from jump_trigger.analysis.scorer import MotionScorer

__all__ = ["FrameHistory", "MotionScorer", "JumpDecider", "replay_jumps"]
