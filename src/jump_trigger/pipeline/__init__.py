"""Detection loop orchestration."""

from jump_trigger.pipeline.engine import DetectionEngine, TickResult

__all__ = ["DetectionEngine", "TickResult"]
