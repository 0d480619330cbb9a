"""Output sinks for jump events."""

from jump_trigger.output.sinks import KeyPressSink, SinkFanout

__all__ = ["SinkFanout", "KeyPressSink"]
