"""Exception types raised by sox-bridge."""


class SoxError(Exception):
    """Base error for sox invocations."""


class SoxLaunchError(SoxError, OSError):
    """Raised when the sox binary cannot be prepared or started."""


class SoxTimeoutError(SoxError, TimeoutError):
    """Raised when an invocation runs past its timeout. The child is killed."""


class SoxCancelledError(SoxError):
    """Raised when an invocation is cancelled while waiting. The child is killed."""
