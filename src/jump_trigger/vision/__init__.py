"""Frame statistics for motion analysis."""

from jump_trigger.vision.sampler import FrameSampler, sample_frame

__all__ = ["FrameSampler", "sample_frame"]
