"""Custom exceptions for Jump Trigger."""


class JumpTriggerError(Exception):
    """Base exception for all Jump Trigger errors."""

    pass


class CaptureUnavailableError(JumpTriggerError):
    """Frame source cannot supply a frame (disconnected, denied, not ready)."""

    def __init__(self, message: str = "Capture source unavailable") -> None:
        self.message = message
        super().__init__(self.message)


class InvalidFrameError(JumpTriggerError):
    """Frame buffer has a shape the sampler cannot analyze."""

    def __init__(self, message: str = "Invalid frame") -> None:
        self.message = message
        super().__init__(self.message)


class OutputSinkError(JumpTriggerError):
    """Output sink backend could not be loaded or used."""

    def __init__(self, message: str = "Output sink error") -> None:
        self.message = message
        super().__init__(self.message)
